# prune/pruner.py
from __future__ import annotations
import logging
from typing import Any, Mapping

from dynmap_prune.model.loader import iter_markers, marker_groupings
from dynmap_prune.model.models import (
    TARGET_WORLD,
    Deletion,
    MarkerKind,
    PruneMode,
    PruneResult,
)
from dynmap_prune.prune.marker_filter import marker_coordinates, should_delete
from dynmap_prune.prune.report import ProgressReporter
from dynmap_prune.selection.search import SelectionSet

logger = logging.getLogger(__name__)

# circles first, then points (keeps the historical progress numbering)
FILTER_ORDER = (MarkerKind.CIRCLE, MarkerKind.POINT)


class DocumentPruner:
    """
    Two passes over one in-memory marker document:

      collect()  decide keep/delete for every marker -> PruneResult
      remove()   delete the recorded entries from their groupings in place
    """

    def __init__(
        self,
        selections: SelectionSet,
        mode: PruneMode,
        *,
        target_world: str = TARGET_WORLD,
        progress_every: int = 5,
    ):
        self.selections = selections
        self.mode = PruneMode.parse(mode)
        self.target_world = target_world
        self.progress_every = progress_every

    # ---- pass 1: filter ----------------------------------------------
    def collect(self, doc: Mapping[str, Any]) -> PruneResult:
        groups = marker_groupings(doc)
        result = PruneResult(mode=self.mode, total=sum(len(g) for g in groups.values()))
        progress = ProgressReporter(result.total, self.progress_every)
        progress.start(self.mode)

        for kind in FILTER_ORDER:
            for marker in iter_markers(groups[kind], kind):
                if marker.world == self.target_world:
                    x, z = marker_coordinates(marker.key, marker.attributes)
                    if should_delete(marker.world, x, z, self.selections, self.mode, self.target_world):
                        d = Deletion(
                            key=marker.key, label=marker.label, kind=kind,
                            x=x, z=z, source_key=marker.source_key,
                        )
                        if result.deletions.add(d):
                            progress.deletion(d)
                else:
                    result.skipped_other_world += 1
                result.processed += 1
                progress.step(result.processed)

        logger.info(
            f"Found {result.deleted_count} markers to delete out of {result.total} markers in total."
        )
        return result

    # ---- pass 2: removal ---------------------------------------------
    def remove(self, doc: Mapping[str, Any], result: PruneResult) -> PruneResult:
        groups = marker_groupings(doc)

        for d in result.deletions:
            # only the grouping the marker was matched in, and only the exact
            # key object it was loaded under (`1` and `'1'` are two markers)
            kind, key = d.ident
            group = groups[kind]
            if key not in group:
                logger.warning(f"Marker {d.key} is no longer present, nothing to remove")
                continue
            del group[key]
            result.removed[kind] += 1
            logger.debug(f"Removed {kind.value} entry {d.key}")

        logger.info(
            f"Removed {result.removed[MarkerKind.POINT]} markers and "
            f"{result.removed[MarkerKind.CIRCLE]} circles"
        )
        return result

    def prune(self, doc: Mapping[str, Any]) -> PruneResult:
        return self.remove(doc, self.collect(doc))
