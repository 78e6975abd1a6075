"""
Centralized Constants Module for the Report Layout Engine

This module provides named constants for the magic numbers used by the
flowing layout engine. Keeping them in one place makes the page geometry
and widget proportions easy to tune consistently across all widgets.

Categories:
- Unit Conversion
- Report Page Layout
- Text Metrics
- Progress Bar / Gradient Rendering
- Widget Layout (KPI grid, cards, category table, summary list, drilldown)

All lengths are millimetres unless a name says otherwise. Font sizes are
points.
"""


# ============================================================================
# UNIT CONVERSION
# ============================================================================

# Millimetres per typographic point (1pt = 1/72 inch)
PT_TO_MM = 25.4 / 72.0

# Millimetres per CSS pixel (96 px per inch)
PX_TO_MM = 25.4 / 96.0


# ============================================================================
# REPORT PAGE LAYOUT CONSTANTS (in millimeters)
# ============================================================================

class PageLayoutMM:
    """Page geometry for the generated reports (US Letter, portrait)."""
    PAGE_WIDTH = 215.9
    PAGE_HEIGHT = 279.4

    # Uniform margin on all four sides
    MARGIN = 18.0

    # Vertical space added after each non-empty report section
    SECTION_SPACING = PT_TO_MM * 5.0

    # Space after the client/date header block
    HEADER_SPACING = PT_TO_MM * 3.0

    # Space after a wrapped free-text paragraph
    PARAGRAPH_SPACING = PT_TO_MM * 2.0

    # Space around section headings
    HEADING_SPACE_BEFORE = PT_TO_MM * 1.5
    HEADING_SPACE_AFTER = PT_TO_MM * 0.8

    # Space after a widget block (grid, card, list)
    WIDGET_SPACING = PT_TO_MM * 0.8

    # Character budget for full-width paragraphs
    WRAP_WIDTH = 95


# ============================================================================
# TEXT METRICS CONSTANTS
# ============================================================================

class TextMetricsConstants:
    """Average-glyph model used instead of real font metrics.

    Helvetica averages roughly 0.52em per glyph; every width estimate in the
    engine is derived from that single ratio.
    """
    AVERAGE_ADVANCE_RATIO = 0.52

    # Character budgets are clamped to this range
    MIN_CHARS = 24
    MAX_CHARS = 120

    # Budget returned when the average advance collapses to zero
    DEGENERATE_CHARS = 40

    # Baseline sits this far (in em) below the top of a 1.2em line box
    BASELINE_RATIO = 0.9

    # Helvetica cap height in em, used to center text vertically
    CAP_HEIGHT_RATIO = 0.72


# ============================================================================
# PROGRESS BAR AND GRADIENT CONSTANTS
# ============================================================================

class GradientConstants:
    """Constants for the segmented red-amber-green gradient fill."""
    # Lower bound on the number of colour strips per bar
    MIN_SEGMENTS = 80

    # One extra strip per this many millimetres of bar width
    SEGMENT_WIDTH_MM = 1.5

    # Strips start slightly early and run slightly long to hide seams
    SEGMENT_START_OFFSET = 0.08
    SEGMENT_WIDTH_PAD = 0.12

    # Fills narrower than this are not drawn at all
    MIN_VISIBLE_FILL = 0.2

    # Ramp stops as normalized RGB
    START_RGB = (0.973, 0.286, 0.286)
    MID_RGB = (0.996, 0.863, 0.309)
    END_RGB = (0.188, 0.741, 0.494)
    MID_STOP = 0.5

    # Percentage scale of bar values
    VALUE_MAX = 100.0


class ShapeConstants:
    """Tessellation used for circles (fixed, not adaptive to radius)."""
    CIRCLE_STEPS = 24


# ============================================================================
# WIDGET LAYOUT CONSTANTS
# ============================================================================

class KpiGridLayout:
    """KPI card grid."""
    COLUMNS = 2
    COLUMN_GAP = PT_TO_MM * 2.2
    MIN_AVAILABLE_WIDTH = 40.0
    PADDING = PT_TO_MM * 1.6
    BAR_HEIGHT = 5.0
    INNER_GAP = PT_TO_MM * 0.5
    ROW_GAP = PT_TO_MM * 1.6


class QuestionCardLayout:
    """Bordered narrative cards."""
    PADDING = PT_TO_MM * 1.4
    GAP = PT_TO_MM * 0.4
    WRAP_REDUCTION = 8
    MIN_WRAP_WIDTH = 40


class CategoryTableLayout:
    """Four-column scored-category table."""
    COLUMN_FRACTIONS = (0.36, 0.28, 0.16, 0.20)
    HEADERS = ("Category", "Score", "Confidence", "KPIs Scored")
    HEADER_HEIGHT = PT_TO_MM * 16.0
    ROW_HEIGHT = PT_TO_MM * 20.0
    PADDING = PT_TO_MM * 4.0
    BAR_HEIGHT = PT_TO_MM * 8.0
    MIN_BAR_WIDTH = 16.0
    SEPARATOR_THICKNESS = 0.2
    ROW_RESERVE = PT_TO_MM * 0.2
    TABLE_RESERVE = PT_TO_MM * 1.5
    SPACE_AFTER = PT_TO_MM * 1.0


class SummaryListLayout:
    """Badge-annotated detail list."""
    BADGE_DIAMETER = 13.0
    PADDING = PT_TO_MM * 0.8
    ROW_GAP = PT_TO_MM * 0.6
    SEPARATOR_THICKNESS = 0.25
    # Minimum block height is the badge plus this many paddings
    BADGE_PADDING_FACTOR = 1.6
    BULLET = "\u2022"


class DrilldownLayout:
    """Grouped drilldown table restored from the HTML drilldown report.

    Column weights are the CSS pixel widths of the original table and are
    scaled to the printable width.
    """
    DEFAULT_WEIGHT = 150
    # (match, weight, indent_px, exact)
    COLUMN_RULES = (
        ("growth category", 30, 0, False),
        ("kpis", 50, 18, True),
        ("category", 110, 24, True),
        ("score", 40, 0, True),
        ("kpi", 310, 0, True),
        ("description", 242, 0, True),
        ("profit driver", 157, 0, False),
    )
    CELL_PADDING = PT_TO_MM * 2.0
    HEADER_RULE = PT_TO_MM * 1.5
    ROW_RULE = PT_TO_MM * 0.75
    BADGE_DIAMETER = PX_TO_MM * 20.0
