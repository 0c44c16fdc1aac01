from __future__ import annotations

from collections import defaultdict
from collections.abc import Sequence


class OneHopClusterBuilder:
    """Working cluster = own partners plus the partners of each partner.

    Exactly one level of expansion: chains longer than two hops are not merged.
    """

    def build(self, partner_sets: Sequence[Sequence[int]]) -> list[list[int]]:
        clusters: list[list[int]] = []
        for partners in partner_sets:
            cluster = list(partners)
            for partner in partners:
                cluster.extend(partner_sets[partner])
            clusters.append(_dedupe(cluster))
        return clusters


class TransitiveClusterBuilder:
    """Working cluster = the whole connected component of the partner graph.

    Entities without partners keep an empty cluster so they stay outliers.
    """

    def build(self, partner_sets: Sequence[Sequence[int]]) -> list[list[int]]:
        uf = _UnionFind()
        for index, partners in enumerate(partner_sets):
            for partner in partners:
                uf.union(index, partner)

        groups = uf.groups()
        clusters: list[list[int]] = []
        for index, partners in enumerate(partner_sets):
            if not partners:
                clusters.append([])
                continue
            clusters.append(sorted(groups[uf.find(index)]))
        return clusters


class _UnionFind:
    def __init__(self) -> None:
        self._parent: dict[int, int] = {}

    def find(self, item: int) -> int:
        if item not in self._parent:
            self._parent[item] = item
            return item
        if self._parent[item] != item:
            self._parent[item] = self.find(self._parent[item])
        return self._parent[item]

    def union(self, left: int, right: int) -> None:
        root_left = self.find(left)
        root_right = self.find(right)
        if root_left != root_right:
            self._parent[root_right] = root_left

    def groups(self) -> dict[int, list[int]]:
        grouped: dict[int, list[int]] = defaultdict(list)
        for item in list(self._parent):
            grouped[self.find(item)].append(item)
        return grouped


def _dedupe(values: Sequence[int]) -> list[int]:
    return list(dict.fromkeys(values))
