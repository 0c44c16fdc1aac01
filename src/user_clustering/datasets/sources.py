from __future__ import annotations

import csv
from collections.abc import Sequence
from pathlib import Path

from user_clustering.errors import DatasetValidationError
from user_clustering.models import Dataset

LABEL_COLUMN = "LABEL"


class InMemoryDatasetSource:
    """Wraps labels and rows that are already in memory."""

    def __init__(self, labels: Sequence[str], rows: Sequence[Sequence[float]]) -> None:
        self._labels = list(labels)
        self._rows = [list(row) for row in rows]

    def load(self) -> Dataset:
        return Dataset.from_rows(self._labels, self._rows)


class CsvDatasetSource:
    """Reads a CSV with a ``LABEL`` column followed by one column per feature."""

    def __init__(self, path: Path, label_column: str = LABEL_COLUMN) -> None:
        self._path = Path(path)
        self._label_column = label_column

    def load(self) -> Dataset:
        labels: list[str] = []
        rows: list[list[float]] = []
        with self._path.open("r", newline="", encoding="utf-8") as handle:
            reader = csv.DictReader(handle)
            fieldnames = reader.fieldnames or []
            if self._label_column not in fieldnames:
                raise DatasetValidationError(f"{self._path}: missing {self._label_column!r} column")
            feature_columns = [name for name in fieldnames if name != self._label_column]

            for line_number, row in enumerate(reader, start=2):
                if None in row or any(value is None for value in row.values()):
                    raise DatasetValidationError(
                        f"{self._path}:{line_number}: expected {len(fieldnames)} cells to match the header"
                    )
                label = row[self._label_column].strip()
                if not label:
                    raise DatasetValidationError(f"{self._path}:{line_number}: empty {self._label_column!r} value")
                values: list[float] = []
                for column in feature_columns:
                    raw = (row.get(column) or "").strip()
                    try:
                        values.append(float(raw))
                    except ValueError as exc:
                        raise DatasetValidationError(
                            f"{self._path}:{line_number}: column {column!r} is not numeric: {raw!r}"
                        ) from exc
                labels.append(label)
                rows.append(values)

        return Dataset.from_rows(labels, rows)


def write_dataset_csv(path: Path, labels: Sequence[str], rows: Sequence[Sequence[float]]) -> None:
    width = len(rows[0]) if rows else 0
    with path.open("w", newline="", encoding="utf-8") as handle:
        writer = csv.writer(handle)
        writer.writerow([LABEL_COLUMN, *(f"F{j}" for j in range(width))])
        for label, row in zip(labels, rows):
            writer.writerow([label, *row])
