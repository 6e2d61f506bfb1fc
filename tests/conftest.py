"""Pytest configuration and fixtures for dxfparse tests."""

import sys
from pathlib import Path

import pytest

# Add src directory to Python path
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))


def format_groups(groups) -> str:
    """Write (code, value) pairs as DXF text."""
    lines = []
    for code, value in groups:
        lines.append(str(code))
        lines.append(str(value))
    return "\n".join(lines) + "\n"


@pytest.fixture
def build_dxf():
    """Return a function writing groups as DXF text."""

    def build(*groups):
        return format_groups(groups)

    return build


@pytest.fixture
def entities_dxf():
    """Return a function wrapping groups into an ENTITIES section."""

    def build(*groups):
        return format_groups([(0, "SECTION"), (2, "ENTITIES"), *groups, (0, "ENDSEC"), (0, "EOF")])

    return build


@pytest.fixture
def reporter():
    """Return an empty reporter."""
    from dxfparse.reporting import Reporter

    return Reporter()


@pytest.fixture
def scanner_for(reporter):
    """Return a function creating a scanner at the first of the given groups.

    The groups are followed by ENDSEC and EOF, so parsers always find a
    terminating code 0 group.
    """
    from dxfparse.io.scanner import DXFScanner

    def create(*groups):
        text = format_groups([*groups, (0, "ENDSEC"), (0, "EOF")])
        return DXFScanner.from_text(text, reporter)

    return create


@pytest.fixture
def ezdxf_drawing():
    """Return a new R2010 drawing with one entity of each common kind."""
    import ezdxf

    doc = ezdxf.new("R2010")
    doc.layers.add("PIPES", color=1)
    doc.layers.add("HIDDEN", color=3).off()
    msp = doc.modelspace()

    msp.add_line((0, 0), (10, 5), dxfattribs={"layer": "PIPES"})
    msp.add_circle((10, 10), radius=2.5)
    msp.add_arc((20, 10), radius=3.0, start_angle=350, end_angle=10)
    msp.add_lwpolyline([(30, 5), (35, 5), (35, 15), (30, 15)], close=True)
    msp.add_text("Shaft 1", dxfattribs={"height": 0.5}).set_placement((40, 10))
    msp.add_mtext("Multi line text", dxfattribs={"char_height": 0.7, "insert": (50, 10)})
    msp.add_point((60, 10))
    msp.add_ellipse((70, 10), major_axis=(4, 0), ratio=0.5)

    block = doc.blocks.new(name="SHAFT")
    block.add_circle((0, 0), radius=1.5)
    block.add_line((-1, 0), (1, 0))
    msp.add_blockref("SHAFT", (80, 10))
    return doc


@pytest.fixture
def ezdxf_file(tmp_path, ezdxf_drawing):
    """Return the path of the saved ezdxf drawing."""
    path = tmp_path / "drawing.dxf"
    ezdxf_drawing.saveas(path)
    return path
