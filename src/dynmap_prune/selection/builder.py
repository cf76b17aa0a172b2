# selection/builder.py
from __future__ import annotations
import re
from typing import Iterable, List

from dynmap_prune.errors import SelectionFormatError, SelectionParseError
from dynmap_prune.model.models import CHUNK_SIZE, REGION_SIZE, SelectionArea
from dynmap_prune.selection.search import SelectionSet

FIELD_SEPARATOR = ";"

# plain ASCII base-10; no '+', no '_' separators, no other scripts' digits
_INT_FIELD = re.compile(r"-?[0-9]+")

# area bounds are held as int64
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1


def _parse_int(text: str, lineno: int, source: str) -> int:
    t = text.strip()
    if not _INT_FIELD.fullmatch(t):
        raise SelectionParseError(
            f"{source}:{lineno}: expected an integer coordinate, got {text!r}"
        )
    return int(t)


def _make_area(cell_x: int, cell_z: int, size: int, lineno: int, source: str) -> SelectionArea:
    for cell in (cell_x, cell_z):
        if not (INT64_MIN <= cell * size and cell * size + size <= INT64_MAX):
            raise SelectionParseError(
                f"{source}:{lineno}: coordinate {cell} is out of range for a {size}-block cell"
            )
    return SelectionArea.from_cell(cell_x, cell_z, size)


def parse_selection_line(line: str, lineno: int = 1, source: str = "<selections>") -> SelectionArea:
    """
    One selection line -> SelectionArea.

      regionX;regionZ                   -> 512x512 region cell
      regionX;regionZ;chunkX;chunkZ     -> 16x16 chunk cell (region fields ignored)
    """
    parts = line.strip().split(FIELD_SEPARATOR)
    if len(parts) == 2:
        rx = _parse_int(parts[0], lineno, source)
        rz = _parse_int(parts[1], lineno, source)
        return _make_area(rx, rz, REGION_SIZE, lineno, source)
    if len(parts) == 4:
        cx = _parse_int(parts[2], lineno, source)
        cz = _parse_int(parts[3], lineno, source)
        return _make_area(cx, cz, CHUNK_SIZE, lineno, source)
    raise SelectionFormatError(
        f"{source}:{lineno}: unexpected selection format {line.strip()!r}, "
        f"expected 2 or 4 coordinates per line (got {len(parts)})"
    )


def build_selection_set(lines: Iterable[str], source: str = "<selections>") -> SelectionSet:
    areas: List[SelectionArea] = []
    for lineno, line in enumerate(lines, start=1):
        if not line.strip():
            continue
        areas.append(parse_selection_line(line, lineno, source))
    return SelectionSet(areas)
