from __future__ import annotations

from collections.abc import Sequence

from user_clustering.models import ClusterAssignment


class ScanOrderIdAssigner:
    """Gives set-equal working clusters the same id, first entity in order wins.

    Entity 0 always seeds id 1. Empty clusters (outliers) always get a fresh id.
    """

    def assign(self, clusters: Sequence[Sequence[int]]) -> ClusterAssignment:
        if not clusters:
            return ClusterAssignment(cluster_ids=[])

        cluster_ids = [1]
        # first id seen for each member set; equivalent to scanning earlier entities in order
        first_id_by_members: dict[frozenset[int], int] = {}
        if clusters[0]:
            first_id_by_members[frozenset(clusters[0])] = 1
        next_id = 2

        for cluster in clusters[1:]:
            if not cluster:
                cluster_ids.append(next_id)
                next_id += 1
                continue

            members = frozenset(cluster)
            existing = first_id_by_members.get(members)
            if existing is not None:
                cluster_ids.append(existing)
                continue

            first_id_by_members[members] = next_id
            cluster_ids.append(next_id)
            next_id += 1

        return ClusterAssignment(cluster_ids=cluster_ids)
