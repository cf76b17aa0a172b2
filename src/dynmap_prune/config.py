# config.py
from dataclasses import dataclass, fields
from pathlib import Path
import json

from dynmap_prune.errors import MissingFileError
from dynmap_prune.model.models import TARGET_WORLD, PruneMode
from dynmap_prune.prune.report import DEFAULT_MANIFEST


@dataclass
class PruneConfig:
    markers: str = "markers.yml"
    selections: str = "selections.csv"
    output: str = "markers_pruned.yml"
    mode: PruneMode = PruneMode.EXCLUSIVE
    manifest: str = DEFAULT_MANIFEST
    world: str = TARGET_WORLD
    progress_every: int = 5
    dry_run: bool = False
    plot: str | None = None
    log_level: str = "INFO"
    log_file: str | None = None

    def __post_init__(self):
        self.mode = PruneMode.parse(self.mode)
        self.progress_every = int(self.progress_every)
        if self.progress_every <= 0:
            raise ValueError(f"progress_every must be positive, got {self.progress_every}")

    @classmethod
    def from_dict(cls, d: dict) -> "PruneConfig":
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(d) - known)
        if unknown:
            raise ValueError(f"unknown config keys: {', '.join(unknown)}")
        return cls(**d)


def load_json(path: str | None) -> dict:
    if not path: return {}
    p = Path(path)
    if not p.exists(): raise MissingFileError(path, "config file")
    with p.open("r", encoding="utf-8") as f: return json.load(f)
