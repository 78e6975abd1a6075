"""
Primitive Renderer

Shape primitives recorded on the live page of a ``PageFlowManager``:
rectangles, separator lines, tessellated circles, and progress bars whose
fill approximates a continuous red -> amber -> green ramp with many narrow
colour strips.

Rectangles are specified by their top edge in page space and extend
downwards by ``height``.
"""

import math

from reportlab.lib.colors import Color

from color_utilities import gradient_color
from constants import GradientConstants, ShapeConstants
from page_flow import PageFlowManager
from page_operations import FillPolygon, FillRect, SetFillColor


def draw_rect(
    flow: PageFlowManager,
    x: float,
    top: float,
    width: float,
    height: float,
    color: Color,
) -> None:
    """Fill the rectangle spanning [x, x + width] and [top - height, top]."""
    flow.push(SetFillColor(color), FillRect(x, top - height, width, height))


def draw_line(
    flow: PageFlowManager,
    x: float,
    top: float,
    width: float,
    thickness: float,
    color: Color,
) -> None:
    """Horizontal rule drawn as a thin rectangle."""
    draw_rect(flow, x, top, width, thickness, color)


def circle_points(cx: float, cy: float, radius: float, steps: int = ShapeConstants.CIRCLE_STEPS):
    """Vertices of a regular polygon approximating a circle."""
    return tuple(
        (cx + radius * math.cos(math.tau * i / steps), cy + radius * math.sin(math.tau * i / steps))
        for i in range(steps)
    )


def draw_circle(flow: PageFlowManager, cx: float, cy: float, radius: float, color: Color) -> None:
    """Fill a disk approximated by a fixed 24-vertex polygon."""
    flow.push(SetFillColor(color), FillPolygon(circle_points(cx, cy, radius)))


def fill_ratio(value: float) -> float:
    """Fraction of a bar covered by ``value`` on the 0-100 scale, clamped to [0, 1]."""
    return min(1.0, max(0.0, value / GradientConstants.VALUE_MAX))


def draw_gradient_fill(
    flow: PageFlowManager,
    x_start: float,
    fill_width: float,
    top: float,
    height: float,
) -> int:
    """Fill [x_start, x_start + fill_width] with strips sampled from the colour ramp.

    Strips overlap slightly to hide rounding seams; the last strip is clipped
    to the right edge of the fill.

    Returns:
        Number of strips drawn
    """
    if fill_width <= 0:
        return 0
    segments = max(GradientConstants.MIN_SEGMENTS, int(fill_width / GradientConstants.SEGMENT_WIDTH_MM))
    segment_width = fill_width / segments
    x_end = x_start + fill_width
    drawn = 0
    for i in range(segments):
        start = max(x_start, x_start + i * segment_width - GradientConstants.SEGMENT_START_OFFSET)
        remaining = x_end - start
        if remaining <= 0:
            break
        width = min(segment_width + GradientConstants.SEGMENT_WIDTH_PAD, remaining)
        center = start + width / 2.0
        ratio = min(1.0, max(0.0, (center - x_start) / fill_width))
        draw_rect(flow, start, top, width, height, gradient_color(ratio))
        drawn += 1
    return drawn


def draw_progress_bar(
    flow: PageFlowManager,
    x_start: float,
    top: float,
    width: float,
    height: float,
    value: float,
    track_color: Color,
) -> float:
    """Draw a track and, when visible, its gradient fill for ``value`` (0-100).

    Values outside 0-100 are clamped for the fill only.

    Returns:
        Width of the fill in millimetres (0 when nothing was filled)
    """
    draw_rect(flow, x_start, top, width, height, track_color)
    fill_width = width * fill_ratio(value)
    if fill_width > GradientConstants.MIN_VISIBLE_FILL:
        draw_gradient_fill(flow, x_start, fill_width, top, height)
        return fill_width
    return 0.0
