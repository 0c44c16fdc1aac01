from collections.abc import Sequence

import numpy as np
import pytest

from user_clustering.config import TuningSettings
from user_clustering.datasets import REFERENCE_FEATURES, REFERENCE_LABELS, reference_dataset
from user_clustering.errors import ConvergenceError, TargetCountError
from user_clustering.models import Cluster, ClusterAssignment, Dataset
from user_clustering.runners import ParameterTuner
from user_clustering.steps import RangePartnerFinder


class _RecordingReporter:
    def __init__(self) -> None:
        self.calls: list[list[Cluster]] = []

    def report(self, clusters: Sequence[Cluster]) -> None:
        self.calls.append(list(clusters))


class _RecordingPartnerFinder:
    def __init__(self) -> None:
        self.match_ranges: list[float] = []
        self.required_matches: list[int] = []

    def find(self, dataset: Dataset, match_range: float, required_matches: int) -> list[list[int]]:
        self.match_ranges.append(match_range)
        self.required_matches.append(required_matches)
        return [[] for _ in range(len(dataset))]


class _FailingPartnerFinder:
    def find(self, dataset: Dataset, match_range: float, required_matches: int) -> list[list[int]]:
        raise AssertionError("partner scan should not run")


class _FixedCountAssigner:
    """Reports the given cluster counts in turn, cycling when exhausted."""

    def __init__(self, *counts: int) -> None:
        self._counts = counts
        self._calls = 0

    def assign(self, clusters: Sequence[Sequence[int]]) -> ClusterAssignment:
        count = self._counts[self._calls % len(self._counts)]
        self._calls += 1
        ids = [min(index + 1, count) for index in range(len(clusters))]
        return ClusterAssignment(cluster_ids=ids)


def _three_users() -> Dataset:
    return Dataset.from_rows(["A", "B", "C"], [[0, 0], [0, 0], [100, 100]])


def test_identical_users_separate_from_distant_user() -> None:
    result = ParameterTuner().run(_three_users(), target=2)

    assert result.clusters == [Cluster(cluster_id=1, members=["A", "B"]), Cluster(cluster_id=2, members=["C"])]
    assert result.iterations == 2
    assert result.match_range == 11
    assert result.required_matches == 2


def test_reference_dataset_two_clusters_on_first_pass() -> None:
    result = ParameterTuner().run(reference_dataset(), target=2)

    assert result.iterations == 1
    assert result.clusters == [
        Cluster(cluster_id=1, members=["A", "B", "C", "D", "E", "F", "G", "H", "J"]),
        Cluster(cluster_id=2, members=["I"]),
    ]


def test_reference_dataset_seven_clusters() -> None:
    result = ParameterTuner().run(reference_dataset(), target=7)

    assert [step.cluster_count for step in result.history] == [2, 2, 2, 2, 2, 7]
    assert [step.required_matches for step in result.history] == [3, 4, 5, 6, 6, 6]
    assert result.match_range == 5
    assert result.required_matches == 6
    assert [cluster.members for cluster in result.clusters] == [
        ["A", "D", "E", "G"],
        ["B"],
        ["C"],
        ["F"],
        ["H"],
        ["I"],
        ["J"],
    ]


def test_reference_dataset_four_clusters_is_unreachable() -> None:
    reporter = _RecordingReporter()
    tuner = ParameterTuner(settings=TuningSettings(max_iterations=40), reporter=reporter)

    with pytest.raises(ConvergenceError) as excinfo:
        tuner.run(reference_dataset(), target=4)

    assert excinfo.value.closest_count == 2
    assert excinfo.value.iterations == 40
    assert excinfo.value.target == 4
    assert reporter.calls == []


def test_reporter_receives_clusters_once_on_convergence() -> None:
    reporter = _RecordingReporter()

    result = ParameterTuner(reporter=reporter).run(_three_users(), target=2)

    assert reporter.calls == [result.clusters]


def test_runs_are_deterministic() -> None:
    first = ParameterTuner().run(reference_dataset(), target=7)
    second = ParameterTuner().run(reference_dataset(), target=7)

    assert first.assignment_by_label() == second.assignment_by_label()
    assert first.clusters == second.clusters


def test_final_clusters_partition_all_users() -> None:
    result = ParameterTuner().run(reference_dataset(), target=7)

    members = [label for cluster in result.clusters for label in cluster.members]
    assert sorted(members) == sorted(REFERENCE_LABELS)
    assert len(members) == len(set(members))
    assert [cluster.cluster_id for cluster in result.clusters] == list(range(1, 8))


@pytest.mark.parametrize("target", [0, -1, 4])
def test_invalid_targets_fail_before_tuning(target: int) -> None:
    tuner = ParameterTuner(partner_finder=_FailingPartnerFinder())

    with pytest.raises(TargetCountError):
        tuner.run(_three_users(), target=target)


def test_required_matches_stay_clamped_when_always_too_few() -> None:
    finder = _RecordingPartnerFinder()
    tuner = ParameterTuner(
        settings=TuningSettings(max_iterations=25),
        partner_finder=finder,
        id_assigner=_FixedCountAssigner(1),
    )

    with pytest.raises(ConvergenceError):
        tuner.run(_three_users(), target=2)

    assert len(finder.required_matches) == 25
    assert max(finder.required_matches) == 6
    assert min(finder.required_matches) >= 1


def test_required_matches_stay_clamped_when_always_too_many() -> None:
    finder = _RecordingPartnerFinder()
    tuner = ParameterTuner(
        settings=TuningSettings(max_iterations=25),
        partner_finder=finder,
        id_assigner=_FixedCountAssigner(3),
    )

    with pytest.raises(ConvergenceError) as excinfo:
        tuner.run(_three_users(), target=1)

    assert min(finder.required_matches) == 1
    assert max(finder.required_matches) <= 6
    assert excinfo.value.closest_count == 3


def test_step_is_held_while_direction_repeats() -> None:
    finder = _RecordingPartnerFinder()
    tuner = ParameterTuner(
        settings=TuningSettings(max_iterations=4),
        partner_finder=finder,
        id_assigner=_FixedCountAssigner(1),
    )

    with pytest.raises(ConvergenceError):
        tuner.run(_three_users(), target=2)

    assert finder.match_ranges == [10, 9, 8, 7]


def test_step_halves_when_direction_flips() -> None:
    tuner = ParameterTuner(id_assigner=_FixedCountAssigner(1, 3, 1, 3, 2))

    result = tuner.run(_three_users(), target=2)

    assert [step.match_range for step in result.history] == [10, 9, 9.5, 9.25, 9.375]
    assert [step.required_matches for step in result.history] == [3, 4, 3, 4, 3]


def test_identical_vectors_always_share_a_cluster() -> None:
    dataset = Dataset.from_rows([*REFERENCE_LABELS, "K"], [*REFERENCE_FEATURES, REFERENCE_FEATURES[0]])
    tuner = ParameterTuner()

    for required_matches in range(1, dataset.feature_count + 1):
        for match_range in (0, 2.5, 10):
            ids = tuner.detect(dataset, match_range, required_matches).cluster_ids
            assert ids[0] == ids[-1], (match_range, required_matches)


def test_detect_uses_injected_partner_finder() -> None:
    finder = _RecordingPartnerFinder()

    assignment = ParameterTuner(partner_finder=finder).detect(_three_users(), 4, 2)

    assert finder.required_matches == [2]
    assert assignment.cluster_ids == [1, 2, 3]


def test_default_partner_finder_is_range_based() -> None:
    dataset = _three_users()

    assignment = ParameterTuner(partner_finder=RangePartnerFinder()).detect(dataset, 0, 1)

    assert assignment.cluster_ids == [1, 1, 2]


def test_numpy_integer_target_is_accepted() -> None:
    result = ParameterTuner().run(_three_users(), target=np.int64(2))

    assert [cluster.members for cluster in result.clusters] == [["A", "B"], ["C"]]


def test_boolean_target_is_rejected() -> None:
    with pytest.raises(TargetCountError):
        ParameterTuner().run(_three_users(), target=True)
