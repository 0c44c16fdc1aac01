"""Threshold-tuned clustering of users by feature similarity."""

from user_clustering.config import TuningSettings, load_settings
from user_clustering.errors import (
    ClusteringError,
    ConfigError,
    ConvergenceError,
    DatasetValidationError,
    TargetCountError,
)
from user_clustering.models import Cluster, ClusterAssignment, Dataset, Entity, TuningResult
from user_clustering.runners import ParameterTuner

__all__ = [
    "Cluster",
    "ClusterAssignment",
    "Dataset",
    "Entity",
    "TuningResult",
    "TuningSettings",
    "load_settings",
    "ParameterTuner",
    "ClusteringError",
    "ConfigError",
    "ConvergenceError",
    "DatasetValidationError",
    "TargetCountError",
]
