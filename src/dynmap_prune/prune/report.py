# prune/report.py
from __future__ import annotations
import logging
import pathlib

from dynmap_prune.model.models import Deletion, MarkerKind, PruneResult

logger = logging.getLogger(__name__)

DEFAULT_MANIFEST = "removed_marker_ids.txt"


class ProgressReporter:
    """Logs a progress line every `every` processed markers."""

    def __init__(self, total: int, every: int = 5):
        self.total = total
        self.every = max(1, int(every))

    def start(self, mode) -> None:
        logger.info(f"Start pruning {self.total} markers with prune mode {mode}...")

    def step(self, processed: int) -> None:
        if processed % self.every != 0:
            return
        pct = processed / self.total * 100.0 if self.total else 100.0
        logger.info(f"Processed {processed} markers ( {pct:.1f}% )...")

    def deletion(self, d: Deletion) -> None:
        logger.info(f"Found marker to delete: {d.key}   (Label: {d.label} | X: {d.x}, Z: {d.z})")


def format_manifest_line(d: Deletion) -> str:
    return f"{d.label}\t(id {d.key})"


def write_manifest(result: PruneResult, path: str | pathlib.Path) -> pathlib.Path:
    """One `<label>\\t(id <key>)` line per deleted marker, in deletion order."""
    path = pathlib.Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with path.open("w", encoding="utf-8", newline="\n") as f:
        for d in result.deletions:
            f.write(format_manifest_line(d) + "\n")
    logger.info(f"Wrote {result.deleted_count} entries to {path}")
    return path


def summarize(result: PruneResult) -> str:
    points = result.removed.get(MarkerKind.POINT, 0)
    circles = result.removed.get(MarkerKind.CIRCLE, 0)
    return (
        f"Found {result.deleted_count} markers to delete out of {result.total} markers in total "
        f"(mode={result.mode}, removed {result.removed_count}: {points} markers / {circles} circles, "
        f"{result.skipped_other_world} in other worlds untouched)."
    )
