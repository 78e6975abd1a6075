"""
Text Metrics Estimator

Approximates rendered text widths without access to real font metrics.
Every glyph is assumed to advance ``AVERAGE_ADVANCE_RATIO`` em, which is
calibrated to Helvetica. The model trades typographic fidelity for
simplicity and fully deterministic layout.

Usage:
    from text_metrics import estimate_text_width, chars_for_width

    width_mm = estimate_text_width("Key KPIs", 13)
    budget = chars_for_width(120.0, 10)
"""

import math

from constants import PT_TO_MM, TextMetricsConstants


def average_advance(font_size: float) -> float:
    """Average glyph advance in millimetres at ``font_size`` points."""
    return font_size * TextMetricsConstants.AVERAGE_ADVANCE_RATIO * PT_TO_MM


def estimate_text_width(text: str, font_size: float) -> float:
    """Estimate the rendered width of ``text`` in millimetres.

    Args:
        text: Text to measure (characters are counted, not bytes)
        font_size: Font size in points

    Returns:
        Estimated width in millimetres
    """
    return len(text or "") * average_advance(font_size)


def chars_for_width(
    width_mm: float,
    font_size: float,
    minimum: int = TextMetricsConstants.MIN_CHARS,
    maximum: int = TextMetricsConstants.MAX_CHARS,
) -> int:
    """Number of characters that fit in ``width_mm`` at ``font_size``.

    The result is floored and clamped to ``[minimum, maximum]`` so that
    pathological widths or sizes never yield a zero or unbounded budget.

    Args:
        width_mm: Available width in millimetres
        font_size: Font size in points
        minimum: Lower clamp (default 24)
        maximum: Upper clamp (default 120)

    Returns:
        Character budget
    """
    avg = average_advance(font_size)
    if avg <= 1e-7:
        chars = TextMetricsConstants.DEGENERATE_CHARS
    else:
        chars = math.floor(max(0.0, width_mm) / avg)
    return max(minimum, min(maximum, chars))


def baseline_offset(font_size: float) -> float:
    """Distance from the top of a line box to its baseline, in millimetres."""
    return font_size * TextMetricsConstants.BASELINE_RATIO * PT_TO_MM


def cap_height(font_size: float) -> float:
    """Approximate capital letter height in millimetres."""
    return font_size * TextMetricsConstants.CAP_HEIGHT_RATIO * PT_TO_MM
