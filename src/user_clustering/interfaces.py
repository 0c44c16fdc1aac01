from __future__ import annotations

from typing import Protocol, Sequence

from user_clustering.models import Cluster, ClusterAssignment, Dataset


class DatasetSource(Protocol):
    """Input collaborator: supplies the labelled feature matrix."""

    def load(self) -> Dataset:
        ...


class PartnerFinder(Protocol):
    """Step 1: find, for every entity, the entities that match it on enough features."""

    def find(self, dataset: Dataset, match_range: float, required_matches: int) -> list[list[int]]:
        ...


class ClusterBuilder(Protocol):
    """Step 2: expand partner sets into per-entity working clusters."""

    def build(self, partner_sets: Sequence[Sequence[int]]) -> list[list[int]]:
        ...


class ClusterIdAssigner(Protocol):
    """Step 3: collapse working clusters into canonical integer ids."""

    def assign(self, clusters: Sequence[Sequence[int]]) -> ClusterAssignment:
        ...


class ClusterReporter(Protocol):
    """Output collaborator: receives the final clusters once tuning converges."""

    def report(self, clusters: Sequence[Cluster]) -> None:
        ...
