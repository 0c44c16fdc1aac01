from __future__ import annotations

import logging
import numbers

from user_clustering.config import TuningSettings
from user_clustering.errors import ConvergenceError, TargetCountError
from user_clustering.interfaces import ClusterBuilder, ClusterIdAssigner, ClusterReporter, PartnerFinder
from user_clustering.models import (
    Cluster,
    ClusterAssignment,
    Dataset,
    Direction,
    TuningResult,
    TuningState,
    TuningStep,
)
from user_clustering.steps import OneHopClusterBuilder, RangePartnerFinder, ScanOrderIdAssigner

logger = logging.getLogger(__name__)


class ParameterTuner:
    """Adjusts match thresholds until the detected cluster count hits the target.

    Too few clusters makes matching stricter (smaller range, more required
    matches); too many makes it looser. The step on ``match_range`` is held
    while the direction repeats and halved when it flips. Only a converged run
    reaches the reporter.
    """

    def __init__(
        self,
        settings: TuningSettings | None = None,
        partner_finder: PartnerFinder | None = None,
        cluster_builder: ClusterBuilder | None = None,
        id_assigner: ClusterIdAssigner | None = None,
        reporter: ClusterReporter | None = None,
    ) -> None:
        self._settings = settings or TuningSettings()
        self._partner_finder = partner_finder or RangePartnerFinder()
        self._cluster_builder = cluster_builder or OneHopClusterBuilder()
        self._id_assigner = id_assigner or ScanOrderIdAssigner()
        self._reporter = reporter

    @property
    def settings(self) -> TuningSettings:
        return self._settings

    def run(self, dataset: Dataset, target: int) -> TuningResult:
        _validate_target(target, len(dataset))
        target = int(target)

        state = TuningState(
            match_range=self._settings.initial_match_range,
            required_matches=self._settings.initial_required_matches,
        )
        history: list[TuningStep] = []
        closest_count: int | None = None

        while state.iteration < self._settings.max_iterations:
            state.iteration += 1
            assignment = self.detect(dataset, state.match_range, state.required_matches)
            count = assignment.cluster_count
            history.append(
                TuningStep(
                    iteration=state.iteration,
                    match_range=state.match_range,
                    required_matches=state.required_matches,
                    cluster_count=count,
                )
            )
            logger.debug(
                "iteration %d: match_range=%s required_matches=%d clusters=%d target=%d",
                state.iteration,
                state.match_range,
                state.required_matches,
                count,
                target,
            )

            if closest_count is None or abs(count - target) < abs(closest_count - target):
                closest_count = count

            if count == target:
                clusters = build_clusters(dataset, assignment)
                logger.info(
                    "converged to %d clusters after %d iterations (match_range=%s, required_matches=%d)",
                    count,
                    state.iteration,
                    state.match_range,
                    state.required_matches,
                )
                if self._reporter is not None:
                    self._reporter.report(clusters)
                return TuningResult(
                    clusters=clusters,
                    match_range=state.match_range,
                    required_matches=state.required_matches,
                    iterations=state.iteration,
                    history=history,
                )

            self.adjust(state, Direction.TOO_FEW if count < target else Direction.TOO_MANY)

        logger.warning(
            "gave up after %d iterations; closest cluster count was %s for target %d",
            state.iteration,
            closest_count,
            target,
        )
        raise ConvergenceError(target=target, closest_count=closest_count or 0, iterations=state.iteration)

    def detect(self, dataset: Dataset, match_range: float, required_matches: int) -> ClusterAssignment:
        """Run one partner -> cluster -> id pass with fixed thresholds."""

        partner_sets = self._partner_finder.find(dataset, match_range, required_matches)
        clusters = self._cluster_builder.build(partner_sets)
        return self._id_assigner.assign(clusters)

    def adjust(self, state: TuningState, direction: Direction) -> None:
        """Move ``state`` one step in ``direction``."""

        if state.adjuster is None:
            step = self._settings.initial_adjuster
        elif direction == state.last_direction:
            step = state.adjuster
        else:
            step = state.adjuster / 2

        if direction == Direction.TOO_FEW:
            state.match_range -= step
            state.required_matches = min(state.required_matches + 1, self._settings.max_required_matches)
        else:
            state.match_range += step
            state.required_matches = max(state.required_matches - 1, self._settings.min_required_matches)

        state.adjuster = step
        state.last_direction = direction
        logger.debug(
            "%s: step=%s -> match_range=%s required_matches=%d",
            direction.value,
            step,
            state.match_range,
            state.required_matches,
        )


def build_clusters(dataset: Dataset, assignment: ClusterAssignment) -> list[Cluster]:
    """Group entity labels by assigned id, ids ascending, members in dataset order."""

    clusters = [Cluster(cluster_id=cluster_id, members=[]) for cluster_id in range(1, assignment.cluster_count + 1)]
    for entity, cluster_id in zip(dataset.entities(), assignment.cluster_ids):
        clusters[cluster_id - 1].members.append(entity.label)
    return clusters


def _validate_target(target: numbers.Integral, entity_count: int) -> None:
    if isinstance(target, bool) or not isinstance(target, numbers.Integral):
        raise TargetCountError(f"target cluster count must be an integer, got {target!r}")
    if target < 1:
        raise TargetCountError(f"target cluster count must be at least 1, got {target}")
    if target > entity_count:
        raise TargetCountError(
            f"target cluster count {target} exceeds the number of entities ({entity_count})"
        )
