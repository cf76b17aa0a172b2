from __future__ import annotations
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Hashable, Iterator, Tuple

REGION_SIZE = 512
CHUNK_SIZE = 16

TARGET_WORLD = "world"


# --- geometry ---------------------------------------------------------

@dataclass(frozen=True)
class SelectionArea:
    """Axis-aligned half-open rectangle [start, end) on the X/Z plane."""
    start_x: int
    start_z: int
    end_x: int
    end_z: int
    cell: Tuple[int, int] = (0, 0)
    cell_size: int = REGION_SIZE

    @classmethod
    def from_cell(cls, cell_x: int, cell_z: int, cell_size: int) -> "SelectionArea":
        if cell_size <= 0:
            raise ValueError(f"cell size must be positive, got {cell_size}")
        start_x = cell_x * cell_size
        start_z = cell_z * cell_size
        return cls(
            start_x=start_x,
            start_z=start_z,
            end_x=start_x + cell_size,
            end_z=start_z + cell_size,
            cell=(cell_x, cell_z),
            cell_size=cell_size,
        )

    @property
    def kind(self) -> str:
        if self.cell_size == REGION_SIZE:
            return "region"
        if self.cell_size == CHUNK_SIZE:
            return "chunk"
        return "cell"

    def contains(self, x: int, z: int) -> bool:
        return self.start_x <= x < self.end_x and self.start_z <= z < self.end_z

    def width(self) -> int:
        return self.end_x - self.start_x

    def depth(self) -> int:
        return self.end_z - self.start_z


# --- pruning model ----------------------------------------------------

class PruneMode(Enum):
    INCLUSIVE = "inclusive"
    EXCLUSIVE = "exclusive"

    @classmethod
    def parse(cls, value: "str | PruneMode") -> "PruneMode":
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            raise ValueError(
                f"unknown prune mode {value!r}, expected 'inclusive' or 'exclusive'"
            ) from None

    def __str__(self) -> str:
        return self.value


class MarkerKind(Enum):
    """The two marker groupings, by their key under sets.markers."""
    POINT = "markers"
    CIRCLE = "circles"


@dataclass(frozen=True)
class Marker:
    key: str
    kind: MarkerKind
    world: str
    label: str
    # the mapping key exactly as loaded (may be an int for `123:`)
    source_key: Hashable = None
    attributes: Dict[str, Any] = field(default_factory=dict, compare=False)


@dataclass(frozen=True)
class Deletion:
    key: str
    label: str
    kind: MarkerKind
    x: int
    z: int
    source_key: Hashable = None

    @property
    def ident(self) -> Tuple[MarkerKind, Hashable]:
        return (self.kind, self.key if self.source_key is None else self.source_key)


class DeletionRecord:
    """
    Ordered record of markers selected for removal.

    Entries are identified by (grouping, loaded key object), so `1` and `'1'`
    stay distinct; adding the same marker twice is a no-op.
    """

    def __init__(self) -> None:
        self._entries: Dict[Tuple[MarkerKind, Hashable], Deletion] = {}

    def add(self, deletion: Deletion) -> bool:
        """Record a deletion; returns False when it was already recorded."""
        if deletion.ident in self._entries:
            return False
        self._entries[deletion.ident] = deletion
        return True

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[Deletion]:
        return iter(list(self._entries.values()))


@dataclass
class PruneResult:
    """Outcome of one filter pass, threaded through removal and reporting."""
    mode: PruneMode
    total: int = 0
    processed: int = 0
    skipped_other_world: int = 0
    deletions: DeletionRecord = field(default_factory=DeletionRecord)
    removed: Dict[MarkerKind, int] = field(
        default_factory=lambda: {MarkerKind.POINT: 0, MarkerKind.CIRCLE: 0}
    )

    @property
    def deleted_count(self) -> int:
        return len(self.deletions)

    @property
    def removed_count(self) -> int:
        return sum(self.removed.values())


__all__ = [
    "REGION_SIZE",
    "CHUNK_SIZE",
    "TARGET_WORLD",
    "SelectionArea",
    "PruneMode",
    "MarkerKind",
    "Marker",
    "Deletion",
    "DeletionRecord",
    "PruneResult",
]
