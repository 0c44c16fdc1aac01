from user_clustering.datasets.reference import (
    REFERENCE_FEATURES,
    REFERENCE_LABELS,
    REFERENCE_TARGET,
    reference_dataset,
)
from user_clustering.datasets.sources import (
    LABEL_COLUMN,
    CsvDatasetSource,
    InMemoryDatasetSource,
    write_dataset_csv,
)

__all__ = [
    "REFERENCE_FEATURES",
    "REFERENCE_LABELS",
    "REFERENCE_TARGET",
    "reference_dataset",
    "LABEL_COLUMN",
    "CsvDatasetSource",
    "InMemoryDatasetSource",
    "write_dataset_csv",
]
