"""
Color Utilities for the Report Layout Engine

This module provides the colour helpers used by the primitive renderer and
the widgets:

- Hex to RGB / normalized ReportLab colour conversion
- Linear colour interpolation
- The three-stop red -> amber -> green ramp used by progress bars
- The named report palette

Colours handed to the document sink are always normalized ReportLab
``Color`` objects (components in the 0-1 range).
"""

from typing import Tuple

from reportlab.lib import colors

from constants import GradientConstants


RGBTuple = Tuple[float, float, float]


# ============================================================================
# CONVERSION UTILITIES
# ============================================================================

def hex_to_rgb(hex_color: str) -> Tuple[int, int, int]:
    """Convert hex color to RGB tuple.

    Args:
        hex_color: Hex color string (e.g., "#FF5500" or "FF5500")

    Returns:
        Tuple of (R, G, B) values (0-255)
    """
    hex_color = hex_color.lstrip('#')
    return tuple(int(hex_color[i:i+2], 16) for i in (0, 2, 4))


def hex_to_color(hex_color: str) -> colors.Color:
    """Convert a hex string to a normalized ReportLab colour.

    Args:
        hex_color: Hex color string (e.g., "#f8fafc")

    Returns:
        Color with red/green/blue components in the 0-1 range
    """
    r, g, b = hex_to_rgb(hex_color)
    return colors.Color(r / 255.0, g / 255.0, b / 255.0)


def _clamp_unit(value: float) -> float:
    return min(1.0, max(0.0, value))


def interpolate_color(start: RGBTuple, end: RGBTuple, t: float) -> RGBTuple:
    """Linearly blend two normalized RGB triples.

    Args:
        start: Colour at t=0
        end: Colour at t=1
        t: Blend position, clamped to [0, 1]

    Returns:
        Blended RGB triple
    """
    t = _clamp_unit(t)
    return tuple(s + (e - s) * t for s, e in zip(start, end))


def gradient_rgb(t: float) -> RGBTuple:
    """Evaluate the red -> amber -> green ramp at ``t`` (clamped to [0, 1])."""
    t = _clamp_unit(t)
    mid = GradientConstants.MID_STOP
    if t < mid:
        return interpolate_color(GradientConstants.START_RGB, GradientConstants.MID_RGB, t / mid)
    return interpolate_color(
        GradientConstants.MID_RGB,
        GradientConstants.END_RGB,
        (t - mid) / (1.0 - mid),
    )


def gradient_color(t: float) -> colors.Color:
    """ReportLab colour for position ``t`` of the progress bar ramp."""
    return colors.Color(*gradient_rgb(t))


# ============================================================================
# REPORT PALETTE
# ============================================================================

REPORT_COLORS = {
    "ink": hex_to_color("#111111"),          # Titles and body copy
    "muted": hex_to_color("#4b5563"),        # Header date
    "panel": hex_to_color("#f8fafc"),        # Card and header backgrounds
    "track": hex_to_color("#e2e8f0"),        # Bar tracks and separators
    "badge": hex_to_color("#d1fae5"),        # Summary badge fill
    "badge_ink": hex_to_color("#047857"),    # Summary badge label
    "drilldown_ink": hex_to_color("#0f172a"),
    "heading": colors.Color(0.08, 0.09, 0.09),
    "body": colors.Color(0.1, 0.1, 0.1),
    "insight_title": colors.Color(0.12, 0.12, 0.12),
}


def get_report_color(name: str) -> colors.Color:
    """Look up a palette colour by name.

    Raises:
        KeyError: If the name is not part of the palette.
    """
    return REPORT_COLORS[name]
