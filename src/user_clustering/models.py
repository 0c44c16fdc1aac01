from __future__ import annotations

from collections.abc import Iterator, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

import numpy as np

from user_clustering.errors import DatasetValidationError


@dataclass(frozen=True, slots=True)
class Entity:
    """A labelled user; ``index`` is its position in the dataset."""

    label: str
    index: int


@dataclass(frozen=True, eq=False)
class Dataset:
    """Ordered labels with an aligned, rectangular feature matrix.

    Use :meth:`from_rows` to build one; it validates the input and freezes the
    matrix so it cannot change during a run.
    """

    labels: tuple[str, ...]
    features: np.ndarray

    @classmethod
    def from_rows(cls, labels: Sequence[str], rows: Sequence[Sequence[float]]) -> "Dataset":
        labels = tuple(labels)
        rows = [list(row) for row in rows]

        if not rows:
            raise DatasetValidationError("dataset has no rows")
        if len(labels) != len(rows):
            raise DatasetValidationError(
                f"label count ({len(labels)}) does not match row count ({len(rows)})"
            )

        width = len(rows[0])
        if width == 0:
            raise DatasetValidationError("feature vectors must have at least one value")
        for index, row in enumerate(rows):
            if len(row) != width:
                raise DatasetValidationError(
                    f"row {index} ({labels[index]!r}) has {len(row)} features, expected {width}"
                )

        seen: set[str] = set()
        for label in labels:
            if not isinstance(label, str) or not label:
                raise DatasetValidationError(f"invalid label {label!r}")
            if label in seen:
                raise DatasetValidationError(f"duplicate label {label!r}")
            seen.add(label)

        try:
            features = np.array(rows, dtype=float)
        except (TypeError, ValueError) as exc:
            raise DatasetValidationError(f"feature values must be numeric: {exc}") from exc
        if not np.isfinite(features).all():
            raise DatasetValidationError("feature values must be finite")

        features.setflags(write=False)
        return cls(labels=labels, features=features)

    def __len__(self) -> int:
        return len(self.labels)

    @property
    def feature_count(self) -> int:
        return int(self.features.shape[1])

    def entities(self) -> Iterator[Entity]:
        for index, label in enumerate(self.labels):
            yield Entity(label=label, index=index)


@dataclass(slots=True)
class ClusterAssignment:
    """Cluster id per entity, aligned with dataset order."""

    cluster_ids: list[int]

    @property
    def cluster_count(self) -> int:
        return max(self.cluster_ids, default=0)


@dataclass(slots=True)
class Cluster:
    """A final cluster: its id and the labels of its members in dataset order."""

    cluster_id: int
    members: list[str]

    def to_payload(self) -> dict[str, object]:
        return {"id": self.cluster_id, "members": list(self.members)}


class Direction(StrEnum):
    TOO_FEW = "too_few"
    TOO_MANY = "too_many"


@dataclass(slots=True)
class TuningState:
    """Mutable state of the tuning loop between iterations."""

    match_range: float
    required_matches: int
    adjuster: float | None = None
    last_direction: Direction | None = None
    iteration: int = 0


@dataclass(frozen=True, slots=True)
class TuningStep:
    iteration: int
    match_range: float
    required_matches: int
    cluster_count: int


@dataclass(slots=True)
class TuningResult:
    """Outcome of a converged tuning run."""

    clusters: list[Cluster]
    match_range: float
    required_matches: int
    iterations: int
    history: list[TuningStep] = field(default_factory=list)

    def assignment_by_label(self) -> dict[str, int]:
        return {label: cluster.cluster_id for cluster in self.clusters for label in cluster.members}
