"""
Drilldown Table Widget

Lays out a free-form grid of text cells (the drilldown report) on top of the
page flow manager:

- Column widths are proportional to a weight derived from the header label
- A "growth category" column renders its values as circular badges and has
  no header text
- A value repeated from the row above is left blank, so runs of equal values
  read as groups
- Rows are sized to their tallest wrapped cell and never split across pages
- The header row is repeated at the top of every page the table spans

Usage:
    from drilldown_table import draw_drilldown_table

    flow = PageFlowManager()
    draw_drilldown_table(flow, DrilldownTable.from_dict(data))
    pages = flow.finish()
"""

import logging
from dataclasses import dataclass
from typing import List, Sequence

from color_utilities import get_report_color
from constants import PX_TO_MM, DrilldownLayout, PageLayoutMM
from page_flow import PageFlowManager
from page_operations import FontStyle, TextAlign
from paragraph_wrapper import wrap_text
from primitive_renderer import draw_circle, draw_line, draw_rect
from report_models import DrilldownTable
from text_metrics import baseline_offset, cap_height, chars_for_width
from typography_constants import FontSize, LineHeight
from unicode_utilities import clean_text

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class DrilldownColumn:
    """
    Layout metadata of one drilldown column.

    Attributes:
        label: Header label as given
        header_label: Text printed in the header row
        weight: Relative width of the column
        indent: Extra left indent of cell text in millimetres
        is_growth: Whether values are drawn as badges
    """
    label: str
    header_label: str
    weight: float
    indent: float = 0.0
    is_growth: bool = False


def column_meta(label: str) -> DrilldownColumn:
    """Derive layout metadata for a column from its header label."""
    key = (label or "").strip().lower()
    for match, weight, indent_px, exact in DrilldownLayout.COLUMN_RULES:
        if (key == match) if exact else (match in key):
            is_growth = match == "growth category"
            return DrilldownColumn(
                label=label,
                header_label="" if is_growth else label,
                weight=weight,
                indent=indent_px * PX_TO_MM,
                is_growth=is_growth,
            )
    return DrilldownColumn(label=label, header_label=label, weight=DrilldownLayout.DEFAULT_WEIGHT)


def column_widths(columns: Sequence[DrilldownColumn], table_width: float) -> List[float]:
    """Split ``table_width`` between columns in proportion to their weights."""
    total = sum(c.weight for c in columns)
    if total <= 0:
        return [table_width / len(columns)] * len(columns) if columns else []
    return [table_width * c.weight / total for c in columns]


def display_rows(rows: Sequence[Sequence[str]]) -> List[List[str]]:
    """Blank out every cell equal to the same column of the previous row."""
    displayed = []
    previous: Sequence[str] = ()
    for row in rows:
        displayed.append([
            "" if idx < len(previous) and cell and previous[idx] == cell else cell
            for idx, cell in enumerate(row)
        ])
        previous = row
    return displayed


class _DrilldownLayout:
    """Per-build geometry of one drilldown table."""

    def __init__(self, flow: PageFlowManager, table: DrilldownTable) -> None:
        self.flow = flow
        self.columns = [column_meta(label) for label in table.columns]
        self.widths = column_widths(self.columns, flow.content_width)
        self.starts = []
        x = flow.margin
        for width in self.widths:
            self.starts.append(x)
            x += width
        self.padding = DrilldownLayout.CELL_PADDING
        self.line_height = LineHeight.line_box(FontSize.DRILLDOWN_BODY)

    def cell_lines(self, idx: int, text: str) -> List[str]:
        if not text:
            return []
        column = self.columns[idx]
        if column.is_growth:
            return [clean_text(text)]
        text_width = self.widths[idx] - 2 * self.padding - column.indent
        budget = chars_for_width(text_width, FontSize.DRILLDOWN_BODY, minimum=1)
        return wrap_text(clean_text(text), budget)

    def row_height(self, cells: Sequence[List[str]]) -> float:
        tallest = max([len(lines) for lines in cells] + [1]) * self.line_height
        has_badge = any(col.is_growth and cells[idx] for idx, col in enumerate(self.columns))
        if has_badge:
            tallest = max(tallest, DrilldownLayout.BADGE_DIAMETER)
        return tallest + 2 * self.padding

    def header_height(self) -> float:
        return self.row_height([self.cell_lines(idx, c.header_label) for idx, c in enumerate(self.columns)])

    def draw_header(self) -> None:
        flow = self.flow
        height = self.header_height()
        top = flow.top_y()
        draw_rect(flow, flow.margin, top, flow.content_width, height, get_report_color("panel"))
        ink = get_report_color("drilldown_ink")
        for idx, column in enumerate(self.columns):
            lines = self.cell_lines(idx, column.header_label)
            self._draw_lines(idx, lines, top, height, FontStyle.BOLD, ink)
        draw_line(
            flow, flow.margin, top - height + DrilldownLayout.HEADER_RULE,
            flow.content_width, DrilldownLayout.HEADER_RULE, get_report_color("track"),
        )
        flow.advance(height)

    def draw_row(self, cells: Sequence[List[str]], height: float) -> None:
        flow = self.flow
        top = flow.top_y()
        ink = get_report_color("drilldown_ink")
        for idx, column in enumerate(self.columns):
            if not cells[idx]:
                continue
            if column.is_growth:
                self._draw_badge(idx, cells[idx][0], top, height)
            else:
                self._draw_lines(idx, cells[idx], top, height, FontStyle.REGULAR, ink)
        draw_line(
            flow, flow.margin, top - height + DrilldownLayout.ROW_RULE,
            flow.content_width, DrilldownLayout.ROW_RULE, get_report_color("track"),
        )
        flow.advance(height)

    def _draw_lines(self, idx, lines, top, height, style, color) -> None:
        """Write a cell's lines as a block centered vertically in the row."""
        x = self.starts[idx] + self.padding + self.columns[idx].indent
        block_top = top - (height - len(lines) * self.line_height) / 2.0
        baseline = block_top - baseline_offset(FontSize.DRILLDOWN_BODY)
        for line in lines:
            self.flow.emit_absolute(line, style, FontSize.DRILLDOWN_BODY, color, x, baseline)
            baseline -= self.line_height

    def _draw_badge(self, idx: int, text: str, top: float, height: float) -> None:
        radius = min(DrilldownLayout.BADGE_DIAMETER, self.widths[idx]) / 2.0
        cx = self.starts[idx] + self.widths[idx] / 2.0
        cy = top - height / 2.0
        draw_circle(self.flow, cx, cy, radius, get_report_color("badge"))
        self.flow.emit_in_box(
            text, FontStyle.BOLD, FontSize.DRILLDOWN_BADGE, get_report_color("badge_ink"),
            cx - radius, 2 * radius, cy - cap_height(FontSize.DRILLDOWN_BADGE) / 2.0,
            TextAlign.CENTER,
        )


def draw_drilldown_table(flow: PageFlowManager, table: DrilldownTable) -> int:
    """
    Draw the drilldown title and table.

    Returns:
        Number of body rows drawn
    """
    if table.title.strip():
        flow.emit_line(table.title, FontStyle.BOLD, FontSize.DRILLDOWN_TITLE, get_report_color("drilldown_ink"))
        flow.advance(PageLayoutMM.HEADING_SPACE_AFTER)

    if not table.columns:
        logger.warning("Drilldown table has no columns; nothing to draw")
        return 0

    layout = _DrilldownLayout(flow, table)
    rows = display_rows(table.sanitized_rows())
    row_cells = [[layout.cell_lines(idx, cell) for idx, cell in enumerate(row)] for row in rows]
    heights = [layout.row_height(cells) for cells in row_cells]

    flow.ensure_space(layout.header_height() + (heights[0] if heights else 0.0))
    layout.draw_header()
    repeats = 0
    for cells, height in zip(row_cells, heights):
        if height > flow.remaining_height:
            flow.flush_page()
            layout.draw_header()
            repeats += 1
        layout.draw_row(cells, height)

    flow.advance(PageLayoutMM.WIDGET_SPACING)
    logger.debug(f"Drilldown table: {len(rows)} rows, header repeated {repeats} time(s)")
    return len(rows)
