from __future__ import annotations

import argparse
import logging
import sys
from collections.abc import Sequence
from pathlib import Path

from pydantic import ValidationError

from user_clustering.config import load_settings
from user_clustering.datasets import REFERENCE_TARGET, CsvDatasetSource, reference_dataset
from user_clustering.errors import ConfigError, ConvergenceError, DatasetValidationError, TargetCountError
from user_clustering.interfaces import ClusterBuilder, ClusterReporter
from user_clustering.log import configure_logging
from user_clustering.models import TuningResult
from user_clustering.reporters import CompositeReporter, ConsoleReporter, JsonFileReporter
from user_clustering.runners import ParameterTuner
from user_clustering.steps import OneHopClusterBuilder, TransitiveClusterBuilder

EXIT_OK = 0
EXIT_INVALID_INPUT = 2
EXIT_NO_CONVERGENCE = 3

logger = logging.getLogger(__name__)


def main(argv: Sequence[str] | None = None) -> int:
    parser = _build_parser()
    args = parser.parse_args(argv)

    if args.command == "run":
        configure_logging(verbose=args.verbose)
        try:
            run(
                target=args.target,
                input_csv=args.input_csv,
                output=args.output,
                config=args.config,
                expansion=args.expansion,
                max_iterations=args.max_iterations,
                show_summary=args.summary,
            )
        except (DatasetValidationError, TargetCountError, ConfigError) as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_INVALID_INPUT
        except ValidationError as exc:
            print(f"error: invalid settings: {exc}", file=sys.stderr)
            return EXIT_INVALID_INPUT
        except OSError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_INVALID_INPUT
        except ConvergenceError as exc:
            print(f"error: {exc}", file=sys.stderr)
            return EXIT_NO_CONVERGENCE
        return EXIT_OK

    parser.print_help()
    return EXIT_OK


def run(
    *,
    target: int,
    input_csv: Path | None,
    output: Path | None,
    config: Path | None,
    expansion: str,
    max_iterations: int | None,
    show_summary: bool,
) -> TuningResult:
    settings = load_settings(config, overrides={"max_iterations": max_iterations})

    if input_csv is None:
        dataset = reference_dataset()
    else:
        dataset = CsvDatasetSource(input_csv).load()
    logger.info("loaded %d entities with %d features", len(dataset), dataset.feature_count)

    reporters: list[ClusterReporter] = [ConsoleReporter()]
    if output is not None:
        reporters.append(JsonFileReporter(output))

    tuner = ParameterTuner(
        settings=settings,
        cluster_builder=_cluster_builder(expansion),
        reporter=CompositeReporter(*reporters),
    )
    result = tuner.run(dataset, target)

    if show_summary:
        print("---")
        print(f"entities={len(dataset)}")
        print(f"clusters={len(result.clusters)}")
        print(f"iterations={result.iterations}")
        print(f"match_range={result.match_range}")
        print(f"required_matches={result.required_matches}")
        if output is not None:
            print(f"output={output}")
    return result


def _cluster_builder(expansion: str) -> ClusterBuilder:
    if expansion == "transitive":
        return TransitiveClusterBuilder()
    return OneHopClusterBuilder()


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="user-clustering", description="Threshold-tuned user clustering CLI")
    subparsers = parser.add_subparsers(dest="command")

    run_parser = subparsers.add_parser(
        "run",
        help="Cluster a dataset, tuning thresholds until the target cluster count is reached",
    )
    run_parser.add_argument("--target", type=int, default=REFERENCE_TARGET)
    run_parser.add_argument("--input-csv", type=Path, default=None)
    run_parser.add_argument("--output", type=Path, default=None)
    run_parser.add_argument("--config", type=Path, default=None)
    run_parser.add_argument("--expansion", choices=["one-hop", "transitive"], default="one-hop")
    run_parser.add_argument("--max-iterations", type=int, default=None)
    run_parser.add_argument("--summary", action="store_true")
    run_parser.add_argument("--verbose", action="store_true")

    return parser


if __name__ == "__main__":
    raise SystemExit(main())
