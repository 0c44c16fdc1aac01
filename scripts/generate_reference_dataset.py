from __future__ import annotations

import argparse
from pathlib import Path

from user_clustering.datasets import REFERENCE_FEATURES, REFERENCE_LABELS, write_dataset_csv


def main() -> None:
    parser = argparse.ArgumentParser(description="Write the bundled reference user dataset as CSV")
    parser.add_argument("--output", type=Path, default=Path("data/reference_users.csv"))
    args = parser.parse_args()

    args.output.parent.mkdir(parents=True, exist_ok=True)
    write_dataset_csv(args.output, REFERENCE_LABELS, REFERENCE_FEATURES)


if __name__ == "__main__":
    main()
