from __future__ import annotations
import json
import logging
import pathlib
import re
from typing import Any, Dict, Iterator, Mapping

from jsonschema import ValidationError, validate
from ruamel.yaml import YAML
from ruamel.yaml.error import YAMLError

from dynmap_prune.errors import MarkerDocumentError, MissingFileError
from dynmap_prune.model.models import Marker, MarkerKind
from dynmap_prune.selection.builder import build_selection_set
from dynmap_prune.selection.search import SelectionSet

logger = logging.getLogger(__name__)

MARKER_SET = "markers"
YAML_DIRECTIVE = "%YAML 1.1"

# the directive is written back verbatim; parsing runs with the 1.2 rules so
# keys such as `y:` stay strings and untouched scalars keep their text
_DIRECTIVE_LINE = re.compile(r"\A%YAML[ \t]+[0-9.]+[ \t]*\r?\n")


def _round_trip_yaml() -> YAML:
    yaml = YAML(typ="rt")
    yaml.preserve_quotes = True
    yaml.width = 4096
    yaml.explicit_start = True
    return yaml


class MarkerDocumentLoader:
    """Reads and writes the marker YAML document and the selection list."""

    def __init__(self, validate_schema: bool = True, schema_dir: str | pathlib.Path | None = None):
        self.validate_schema = validate_schema
        # default: the schemas directory shipped with this package
        if schema_dir is None:
            self.schema_dir = pathlib.Path(__file__).parent.parent / "schemas"
        else:
            self.schema_dir = pathlib.Path(schema_dir)
        self._yaml = _round_trip_yaml()

    def _load_json(self, path: str | pathlib.Path) -> Any:
        with open(path, "r", encoding="utf-8") as f:
            return json.load(f)

    def _validate(self, instance: Any, schema_name: str) -> None:
        if not self.validate_schema:
            return
        schema = self._load_json(self.schema_dir / schema_name)
        try:
            validate(instance=instance, schema=schema)
        except ValidationError as e:
            where = "/".join(str(p) for p in e.absolute_path) or "<root>"
            raise MarkerDocumentError(f"marker document is invalid at {where}: {e.message}") from e

    # --- public API ---------------------------------------------------

    def load_markers(self, path: str | pathlib.Path) -> Dict[str, Any]:
        """markers.yml -> document mapping (validated, comments and scalar formats kept)"""
        path = pathlib.Path(path)
        if not path.is_file():
            raise MissingFileError(path, "marker document")
        text = path.read_text(encoding="utf-8-sig")
        text = _DIRECTIVE_LINE.sub("", text, count=1)
        try:
            doc = self._yaml.load(text)
        except YAMLError as e:
            raise MarkerDocumentError(f"{path}: not a readable YAML document: {e}") from e
        if not isinstance(doc, dict):
            raise MarkerDocumentError(f"{path}: expected a mapping at the document root")
        self._validate(doc, "marker_document.schema.json")
        logger.info(f"{path} loaded...")
        return doc

    def save_markers(self, doc: Mapping[str, Any], path: str | pathlib.Path) -> pathlib.Path:
        """Write the document with a %YAML 1.1 directive, keeping order, comments and formatting."""
        path = pathlib.Path(path)
        if path.parent and not path.parent.exists():
            path.parent.mkdir(parents=True, exist_ok=True)
        with path.open("w", encoding="utf-8", newline="\n") as f:
            f.write(YAML_DIRECTIVE + "\n")
            self._yaml.dump(doc, f)
        logger.info(f"Modified YAML saved to: {path}")
        return path

    def load_selections(self, path: str | pathlib.Path) -> SelectionSet:
        """selections.csv -> SelectionSet"""
        path = pathlib.Path(path)
        if not path.is_file():
            raise MissingFileError(path, "selection list")
        with path.open("r", encoding="utf-8-sig") as f:
            selections = build_selection_set(f, source=str(path))
        counts = selections.count_by_kind()
        logger.info(
            f"{path} loaded... ({counts.get('region', 0)} regions, {counts.get('chunk', 0)} chunks)"
        )
        return selections


# --- document navigation ----------------------------------------------

def marker_groupings(doc: Mapping[str, Any]) -> Dict[MarkerKind, Dict[Any, Any]]:
    """sets.markers.{markers,circles}; a null grouping is replaced by an empty mapping in place."""
    try:
        marker_set = doc["sets"][MARKER_SET]
    except (KeyError, TypeError):
        raise MarkerDocumentError("document has no sets.markers section") from None
    if not isinstance(marker_set, dict):
        raise MarkerDocumentError("sets.markers is not a mapping")

    groups: Dict[MarkerKind, Dict[Any, Any]] = {}
    for kind in MarkerKind:
        if kind.value not in marker_set:
            raise MarkerDocumentError(f"sets.markers has no '{kind.value}' grouping")
        group = marker_set[kind.value]
        if group is None:
            group = marker_set[kind.value] = {}
        if not isinstance(group, dict):
            raise MarkerDocumentError(f"sets.markers.{kind.value} is not a mapping")
        groups[kind] = group
    return groups


def iter_markers(group: Mapping[Any, Any], kind: MarkerKind) -> Iterator[Marker]:
    for key, props in group.items():
        if not isinstance(props, dict):
            raise MarkerDocumentError(f"marker {key!r} in {kind.value} is not a mapping")
        world = props.get("world")
        label = props.get("label")
        yield Marker(
            key=str(key),
            kind=kind,
            world="" if world is None else str(world),
            label="" if label is None else str(label),
            source_key=key,
            attributes=props,
        )
