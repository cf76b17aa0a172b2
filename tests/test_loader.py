import pytest
from ruamel.yaml.error import YAMLError

from dynmap_prune.errors import MarkerDocumentError, MissingFileError, SelectionFormatError
from dynmap_prune.model.loader import MarkerDocumentLoader, iter_markers, marker_groupings
from dynmap_prune.model.models import MarkerKind


def test_load_markers(markers_file):
    doc = MarkerDocumentLoader().load_markers(markers_file)
    groups = marker_groupings(doc)
    assert list(groups[MarkerKind.POINT]) == ["spawn", "far", "nether_base"]
    assert list(groups[MarkerKind.CIRCLE]) == ["c1"]
    m = next(iter_markers(groups[MarkerKind.CIRCLE], MarkerKind.CIRCLE))
    assert (m.key, m.world, m.label) == ("c1", "world", "Circle One")
    assert m.attributes["xr"] == 10.0


def test_save_keeps_order_and_directive(markers_file, tmp_path):
    loader = MarkerDocumentLoader()
    doc = loader.load_markers(markers_file)
    out = loader.save_markers(doc, tmp_path / "out" / "pruned.yml")

    text = out.read_text(encoding="utf-8")
    assert text.startswith("%YAML 1.1\n---")
    reloaded = loader.load_markers(out)
    assert reloaded == doc
    assert list(reloaded) == ["isSafe", "sets", "playerSets"]
    assert list(reloaded["sets"]) == ["markers", "towns"]
    assert list(reloaded["sets"]["markers"]["markers"]["spawn"]) == [
        "world", "x", "y", "z", "icon", "label", "markup", "desc",
    ]


def test_scalars_keep_their_text(markers_file, tmp_path):
    loader = MarkerDocumentLoader()
    doc = loader.load_markers(markers_file)
    spawn = doc["sets"]["markers"]["markers"]["spawn"]
    # `y` is a key, not a boolean; hex stays an int
    assert spawn["y"] == 64.0
    assert spawn["desc"] == 31
    out = loader.save_markers(doc, tmp_path / "same.yml")
    assert out.read_text(encoding="utf-8") == markers_file.read_text(encoding="utf-8")


def test_int_and_str_keys_load_as_distinct_keys(tmp_path):
    p = tmp_path / "keys.yml"
    p.write_text(
        "sets:\n  markers:\n    markers:\n"
        "      1: {world: world, x: 1, z: 1}\n"
        "      '1': {world: world, x: 2, z: 2}\n"
        "    circles: {}\n",
        encoding="utf-8",
    )
    doc = MarkerDocumentLoader().load_markers(p)
    group = marker_groupings(doc)[MarkerKind.POINT]
    markers = list(iter_markers(group, MarkerKind.POINT))
    assert [m.key for m in markers] == ["1", "1"]
    assert isinstance(markers[0].source_key, int) and markers[0].source_key == 1
    assert isinstance(markers[1].source_key, str) and markers[1].source_key == "1"


def test_missing_document(tmp_path):
    with pytest.raises(MissingFileError) as exc:
        MarkerDocumentLoader().load_markers(tmp_path / "nope.yml")
    assert exc.value.exit_code == 1


@pytest.mark.parametrize(
    "content,where",
    [
        ("just a string\n", "mapping"),
        ("sets: {}\n", "sets"),
        ("sets:\n  markers:\n    markers: {}\n", "circles"),
        ("sets:\n  markers:\n    markers: [1, 2]\n    circles: {}\n", "markers"),
        ("sets:\n  markers:\n    markers:\n      a: 5\n    circles: {}\n", "a"),
    ],
)
def test_invalid_documents(tmp_path, content, where):
    p = tmp_path / "bad.yml"
    p.write_text(content, encoding="utf-8")
    with pytest.raises(MarkerDocumentError, match=where):
        MarkerDocumentLoader().load_markers(p)


def test_unparsable_yaml(tmp_path):
    p = tmp_path / "broken.yml"
    p.write_text("sets: [unclosed\n", encoding="utf-8")
    with pytest.raises(MarkerDocumentError) as exc:
        MarkerDocumentLoader().load_markers(p)
    assert isinstance(exc.value.__cause__, YAMLError)


def test_schema_validation_can_be_disabled(tmp_path):
    p = tmp_path / "loose.yml"
    p.write_text("sets: {}\n", encoding="utf-8")
    doc = MarkerDocumentLoader(validate_schema=False).load_markers(p)
    assert doc == {"sets": {}}


def test_load_selections(write_selections):
    p = write_selections("0;0", "1;2;3;4", "")
    s = MarkerDocumentLoader().load_selections(p)
    assert len(s) == 2
    assert list(s)[1].cell == (3, 4)


def test_load_selections_with_bom(tmp_path):
    p = tmp_path / "bom.csv"
    p.write_bytes("\ufeff0;0\n".encode("utf-8"))
    assert len(MarkerDocumentLoader().load_selections(p)) == 1


def test_load_selections_bad_line(write_selections):
    p = write_selections("0;0", "1;2;3")
    with pytest.raises(SelectionFormatError, match=":2"):
        MarkerDocumentLoader().load_selections(p)


def test_missing_selections(tmp_path):
    with pytest.raises(MissingFileError, match="selection list"):
        MarkerDocumentLoader().load_selections(tmp_path / "none.csv")
