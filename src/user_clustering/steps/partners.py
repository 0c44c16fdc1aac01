from __future__ import annotations

import logging

import numpy as np

from user_clustering.models import Dataset

logger = logging.getLogger(__name__)


class RangePartnerFinder:
    """Partners share at least ``required_matches`` features within ``match_range``.

    Each (feature, other-entity) pair counts once. Partner lists are ordered by
    the first feature on which the other entity matched, then by index.
    """

    def find(self, dataset: Dataset, match_range: float, required_matches: int) -> list[list[int]]:
        features = dataset.features
        all_partners: list[list[int]] = []

        for i in range(len(dataset)):
            within_range = np.abs(features - features[i]) <= match_range
            within_range[i, :] = False

            counts = within_range.sum(axis=1)
            candidates = np.flatnonzero(counts >= required_matches)
            candidates = candidates[candidates != i]
            if candidates.size == 0:
                all_partners.append([])
                continue

            first_feature = within_range[candidates].argmax(axis=1)
            order = np.lexsort((candidates, first_feature))
            all_partners.append([int(k) for k in candidates[order]])

        logger.debug(
            "partner scan match_range=%s required_matches=%s partnered=%d/%d",
            match_range,
            required_matches,
            sum(1 for partners in all_partners if partners),
            len(all_partners),
        )
        return all_partners
