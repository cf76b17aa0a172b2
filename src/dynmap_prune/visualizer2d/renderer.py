# renderer.py
from __future__ import annotations
import logging
import pathlib
from typing import Any, List, Mapping, Tuple

import matplotlib.pyplot as plt
from matplotlib import patches

from dynmap_prune.errors import CoordinateError
from dynmap_prune.model.loader import iter_markers, marker_groupings
from dynmap_prune.model.models import TARGET_WORLD, PruneResult
from dynmap_prune.prune.marker_filter import marker_coordinates
from dynmap_prune.selection.search import SelectionSet

logger = logging.getLogger(__name__)

Point = Tuple[int, int]


def kept_positions(doc: Mapping[str, Any], world: str = TARGET_WORLD) -> List[Point]:
    """(x, z) of every remaining marker in `world`."""
    out: List[Point] = []
    for kind, group in marker_groupings(doc).items():
        for m in iter_markers(group, kind):
            if m.world != world:
                continue
            try:
                out.append(marker_coordinates(m.key, m.attributes))
            except CoordinateError:
                # already rejected during the filter pass in a real run
                logger.debug(f"Skipping {m.key} in preview: no usable coordinates")
    return out


class PlotRenderer:
    """Top-down X/Z preview: selection areas, kept markers, deleted markers."""

    def __init__(self, selections: SelectionSet, margin: int = 16):
        self.selections = selections
        self.margin = margin

    def draw(self, kept: List[Point], result: PruneResult, path: str | pathlib.Path) -> pathlib.Path:
        path = pathlib.Path(path)
        fig, ax = plt.subplots(figsize=(10, 8), dpi=120)

        # selection areas; regions and chunks get different edge colors
        for a in self.selections:
            edge = "tab:blue" if a.kind == "region" else "tab:orange"
            rect = patches.Rectangle(
                (a.start_x, a.start_z), a.width(), a.depth(),
                linewidth=0.8, edgecolor=edge, facecolor=edge, alpha=0.15, zorder=2
            )
            ax.add_patch(rect)

        deleted = [(d.x, d.z) for d in result.deletions]
        if kept:
            xs, zs = zip(*kept)
            ax.scatter(xs, zs, s=12, c="tab:green", edgecolors="black", linewidths=0.3,
                       label=f"kept ({len(kept)})", zorder=5)
        if deleted:
            xs, zs = zip(*deleted)
            ax.scatter(xs, zs, s=14, c="tab:red", marker="x",
                       label=f"deleted ({len(deleted)})", zorder=6)

        # extent = selections + markers
        xs_all = [p[0] for p in kept + deleted]
        zs_all = [p[1] for p in kept + deleted]
        b = self.selections.bounds()
        if b is not None:
            xs_all += [b[0], b[2]]
            zs_all += [b[1], b[3]]
        if xs_all:
            ax.set_xlim(min(xs_all) - self.margin, max(xs_all) + self.margin)
            ax.set_ylim(min(zs_all) - self.margin, max(zs_all) + self.margin)
        # Z grows southward, keep north at the top
        ax.invert_yaxis()
        ax.set_aspect("equal", adjustable="box")
        ax.set_xlabel("X")
        ax.set_ylabel("Z")
        ax.set_title(f"Prune preview (mode={result.mode})")
        if kept or deleted:
            ax.legend(loc="upper right")

        path.parent.mkdir(parents=True, exist_ok=True)
        plt.tight_layout()
        fig.savefig(path)
        plt.close(fig)
        logger.info(f"Preview saved to: {path}")
        return path
