import textwrap

import matplotlib
import pytest

matplotlib.use("Agg")

MARKERS_YML = textwrap.dedent(
    """\
    %YAML 1.1
    ---
    isSafe: true
    sets:
      markers:
        label: Markers
        hide: false  # shown in the web ui
        circles:
          c1:
            world: world
            x: 8.5
            y: 64.0
            z: 8.5
            xr: 10.0
            zr: 10.0
            label: Circle One
            strokeColor: 16711680
        markers:
          spawn:
            world: world
            x: 100.50
            y: 64.0
            z: 100.0
            icon: default
            label: Spawn
            markup: false
            desc: 0x1F
          far:
            world: world
            x: 1000.5
            y: 70.0
            z: 1000.5
            icon: house
            label: Far Away
          nether_base:
            world: nether
            x: 5000
            y: 40
            z: 5000
            icon: portal
            label: Nether Base
      towns:
        label: Towns
        markers:
          t1:
            world: world
            x: 4000
            z: 4000
            label: Not governed
    playerSets: {}
    """
)


@pytest.fixture
def markers_file(tmp_path):
    p = tmp_path / "markers.yml"
    p.write_text(MARKERS_YML, encoding="utf-8")
    return p


@pytest.fixture
def write_selections(tmp_path):
    def _write(*lines, name="selections.csv"):
        p = tmp_path / name
        p.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return p
    return _write


def make_doc(points=None, circles=None):
    """Minimal in-memory marker document."""
    return {
        "sets": {
            "markers": {
                "label": "Markers",
                "markers": dict(points or {}),
                "circles": dict(circles or {}),
            }
        }
    }


def marker(x, z, world="world", label=None, **extra):
    d = {"world": world, "x": x, "z": z, "label": label if label is not None else f"m@{x},{z}"}
    d.update(extra)
    return d
