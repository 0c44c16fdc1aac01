"""Typed exceptions for dataset validation, run parameters and tuning."""

from __future__ import annotations


class ClusteringError(Exception):
    """Base class for all clustering failures."""


class DatasetValidationError(ClusteringError, ValueError):
    """Raised when labels or feature rows do not form a valid dataset."""


class TargetCountError(ClusteringError, ValueError):
    """Raised when the target cluster count cannot be produced for the dataset."""


class ConvergenceError(ClusteringError):
    """Raised when tuning hits its iteration cap without reaching the target."""

    def __init__(self, target: int, closest_count: int, iterations: int) -> None:
        super().__init__(
            f"no convergence to {target} clusters after {iterations} iterations; "
            f"closest cluster count reached was {closest_count}"
        )
        self.target = target
        self.closest_count = closest_count
        self.iterations = iterations


class ConfigError(ClusteringError, ValueError):
    """Raised when a settings file cannot be read as a YAML mapping."""
