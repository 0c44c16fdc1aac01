"""Typed tuning settings and their loader.

Precedence of sources: model defaults < optional YAML file < explicit overrides
(typically CLI flags).
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, confloat, conint, model_validator

from user_clustering.errors import ConfigError


class TuningSettings(BaseModel):
    """Starting point and bounds of the threshold tuning loop."""

    initial_match_range: confloat(ge=0.0) = 10.0
    initial_required_matches: conint(ge=1) = 3
    min_required_matches: conint(ge=1) = 1
    max_required_matches: conint(ge=1) = 6
    initial_adjuster: confloat(gt=0.0) = 1.0
    max_iterations: conint(ge=1) = 200

    model_config = ConfigDict(extra="forbid", frozen=True)

    @model_validator(mode="after")
    def check_required_matches_bounds(self) -> "TuningSettings":
        if self.min_required_matches > self.max_required_matches:
            raise ValueError("min_required_matches must not exceed max_required_matches")
        if not self.min_required_matches <= self.initial_required_matches <= self.max_required_matches:
            raise ValueError(
                "initial_required_matches must lie within "
                f"[{self.min_required_matches}, {self.max_required_matches}]"
            )
        return self


def load_settings(
    path: str | os.PathLike[str] | None = None,
    *,
    overrides: Mapping[str, Any] | None = None,
) -> TuningSettings:
    """Build :class:`TuningSettings` from an optional YAML file and overrides."""

    merged: dict[str, Any] = {}
    if path is not None:
        with Path(path).open("r", encoding="utf-8") as handle:
            try:
                loaded = yaml.safe_load(handle) or {}
            except yaml.YAMLError as exc:
                raise ConfigError(f"settings file {path} is not valid YAML: {exc}") from exc
        if not isinstance(loaded, dict):
            raise ConfigError(f"settings file {path} must contain a mapping")
        merged.update(loaded)

    if overrides:
        merged.update({key: value for key, value in overrides.items() if value is not None})

    return TuningSettings.model_validate(merged)


__all__ = ["TuningSettings", "load_settings"]
