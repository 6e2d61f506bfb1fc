"""AutoCAD color index (ACI) lookup."""

from ezdxf.colors import DXF_DEFAULT_COLORS, int2rgb

BYBLOCK = 0
BYLAYER = 256


def true_color(index: int) -> int | None:
    """Get the 24 bit ``0xRRGGBB`` value of an AutoCAD color index.

    Parameters
    ----------
    index : int
        Color index, 1-255 are real colors

    Returns
    -------
    int | None
        True color value or None for BYBLOCK, BYLAYER and invalid indices
    """
    if BYBLOCK < index < BYLAYER:
        return DXF_DEFAULT_COLORS[index]
    return None


def true_color_to_hex(value: int) -> str:
    """Format a true color value as ``#rrggbb``."""
    rgb = int2rgb(value)
    return f"#{rgb.r:02x}{rgb.g:02x}{rgb.b:02x}"
