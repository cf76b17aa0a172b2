# prune/marker_filter.py
from __future__ import annotations
import re
from decimal import ROUND_DOWN, Decimal
from typing import Any, Mapping, Tuple

from dynmap_prune.errors import CoordinateError
from dynmap_prune.model.models import TARGET_WORLD, PruneMode
from dynmap_prune.selection.search import SelectionSet

# locale-independent ASCII decimal, optional exponent; no '+', '_' or non-ASCII digits
_DECIMAL = re.compile(r"-?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?")

# selection bounds are int64, coordinates must compare against them
COORD_MIN = -(2 ** 63)
COORD_MAX = 2 ** 63 - 1


def should_delete(
    world: str,
    x: int,
    z: int,
    selections: SelectionSet,
    mode: PruneMode,
    target_world: str = TARGET_WORLD,
) -> bool:
    """
    Keep/delete decision for one marker.

    Markers outside the target world are never deleted. Otherwise a marker
    inside some selection area is deleted in INCLUSIVE mode, and a marker
    outside every area is deleted in EXCLUSIVE mode.
    """
    if world != target_world:
        return False
    matched = selections.find_match(x, z) is not None
    if matched:
        return mode is PruneMode.INCLUSIVE
    return mode is PruneMode.EXCLUSIVE


def parse_coordinate(key: str, attribute: str, value: Any) -> int:
    """Decimal text -> int, truncated toward zero (never rounded)."""
    if value is None or isinstance(value, bool):
        raise CoordinateError(key, attribute, value)
    if isinstance(value, int):
        number = int(value)
    else:
        text = str(value).strip()
        if not _DECIMAL.fullmatch(text):
            raise CoordinateError(key, attribute, value)
        # exact: no binary float in between, so values above 2**53 keep every digit
        dec = Decimal(text)
        if dec.adjusted() > 19:
            raise CoordinateError(key, attribute, value)
        number = int(dec.to_integral_value(rounding=ROUND_DOWN))
    if not (COORD_MIN <= number <= COORD_MAX):
        raise CoordinateError(key, attribute, value)
    return number


def marker_coordinates(key: str, props: Mapping[str, Any]) -> Tuple[int, int]:
    if "x" not in props:
        raise CoordinateError(key, "x")
    if "z" not in props:
        raise CoordinateError(key, "z")
    return parse_coordinate(key, "x", props["x"]), parse_coordinate(key, "z", props["z"])
