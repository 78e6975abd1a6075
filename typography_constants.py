"""
Typography Constants for the Report Layout Engine

This module provides the font families, sizes and line-height ratios used by
every widget. The engine only knows two logical styles of one family
(regular and bold Helvetica), which are standard PDF fonts available in
ReportLab without font embedding.

Usage:
    from typography_constants import FontFamily, FontSize, LineHeight

    line_height = LineHeight.line_box(FontSize.BODY)
"""

from constants import PT_TO_MM


# ============================================================================
# FONT FAMILY CONSTANTS
# ============================================================================

class FontFamily:
    """Standard font family for ReportLab PDF generation."""
    SANS_SERIF = "Helvetica"
    SANS_SERIF_BOLD = "Helvetica-Bold"


# ============================================================================
# FONT SIZE SCALE
# ============================================================================

class FontSize:
    """Font sizes in points for each report element.

    Hierarchy:
    - TITLE: Client name header (18pt)
    - SECTION: Section headings (13pt)
    - DRILLDOWN_TITLE: Drilldown report title (12pt)
    - INSIGHT_TITLE: Additional insight titles (11.5pt)
    - CARD_TITLE: KPI and question card titles, header date (11pt)
    - CLOSING: Closing paragraphs (10.5pt)
    - CATEGORY_NAME: Category table names (10.5pt)
    - BODY: Card bodies, table cells, detail text (10pt)
    - DRILLDOWN_BODY: Drilldown cells (7.5pt)
    """
    TITLE = 18
    SECTION = 13
    DRILLDOWN_TITLE = 12
    INSIGHT_TITLE = 11.5
    CARD_TITLE = 11
    DATE = 11
    BADGE = 11
    CLOSING = 10.5
    CATEGORY_NAME = 10.5
    BODY = 10
    TABLE_HEADER = 10
    DRILLDOWN_BODY = 7.5
    DRILLDOWN_BADGE = 8


# ============================================================================
# LINE HEIGHT (LEADING) CONSTANTS
# ============================================================================

class LineHeight:
    """Line height ratios relative to the font size."""
    # Single text lines emitted by the flow manager
    TIGHT_RATIO = 1.2

    # Wrapped body copy inside cards and lists
    BODY_RATIO = 1.25

    @staticmethod
    def line_box(font_size: float, ratio: float = TIGHT_RATIO) -> float:
        """Height of one line in millimetres.

        Args:
            font_size: Font size in points
            ratio: Leading ratio (default 1.2)

        Returns:
            Line height in millimetres
        """
        return font_size * ratio * PT_TO_MM
