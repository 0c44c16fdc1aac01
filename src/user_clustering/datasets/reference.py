from __future__ import annotations

from user_clustering.models import Dataset

# Ten users with seven non-negative transfer values each.
REFERENCE_LABELS = ["A", "B", "C", "D", "E", "F", "G", "H", "I", "J"]

REFERENCE_FEATURES = [
    [2, 5, 0, 6, 0, 4, 0],
    [3, 0, 3, 0, 0, 0, 3],
    [0, 0, 0, 0, 6, 0, 8],
    [4, 2, 0, 7, 0, 3, 0],
    [3, 0, 4, 0, 0, 0, 0],
    [0, 0, 0, 0, 0, 9, 7],
    [0, 0, 0, 0, 1, 0, 0],
    [0, 0, 0, 0, 0, 8, 9],
    [94, 87, 75, 101, 2, 54, 62],
    [5, 6, 1, 8, 0, 3, 1],
]

REFERENCE_TARGET = 4


def reference_dataset() -> Dataset:
    return Dataset.from_rows(REFERENCE_LABELS, REFERENCE_FEATURES)
