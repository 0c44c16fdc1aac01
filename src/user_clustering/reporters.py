from __future__ import annotations

import json
import sys
from collections.abc import Sequence
from pathlib import Path
from typing import TextIO

from user_clustering.interfaces import ClusterReporter
from user_clustering.models import Cluster


def clusters_payload(clusters: Sequence[Cluster]) -> list[dict[str, object]]:
    return [cluster.to_payload() for cluster in clusters]


class ConsoleReporter:
    """Prints the final clusters as JSON."""

    def __init__(self, stream: TextIO | None = None, indent: int = 2) -> None:
        self._stream = stream
        self._indent = indent

    def report(self, clusters: Sequence[Cluster]) -> None:
        stream = self._stream or sys.stdout
        stream.write(json.dumps(clusters_payload(clusters), indent=self._indent))
        stream.write("\n")


class JsonFileReporter:
    """Writes the final clusters to a JSON file."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def report(self, clusters: Sequence[Cluster]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with self.path.open("w", encoding="utf-8") as handle:
            json.dump(clusters_payload(clusters), handle, indent=2)


class CompositeReporter:
    def __init__(self, *reporters: ClusterReporter) -> None:
        self._reporters = reporters

    def report(self, clusters: Sequence[Cluster]) -> None:
        for reporter in self._reporters:
            reporter.report(clusters)
