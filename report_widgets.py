"""
Report Widgets

Composite layout routines built from primitive shapes and text runs:

- section_heading: bold heading line with space before and after
- wrapped_paragraph: free text wrapped to a character budget
- draw_kpi_grid: two-column grid of KPI cards with gradient bars
- draw_question_card: shaded card with a title and wrapped body
- draw_category_table: four-column scored-category table
- draw_summary_list: detail entries annotated with circular badges

Every widget computes the height of an indivisible block first, reserves it
with ``PageFlowManager.ensure_space`` and only then records operations, so
a block is never split across a page break.

Usage:
    flow = PageFlowManager()
    section_heading(flow, "Key KPIs")
    draw_kpi_grid(flow, payload.kpis)
    pages = flow.finish()
"""

import logging
from typing import List, Sequence, Tuple

from color_utilities import get_report_color
from constants import (
    CategoryTableLayout,
    KpiGridLayout,
    PageLayoutMM,
    QuestionCardLayout,
    SummaryListLayout,
)
from page_flow import PageFlowManager
from page_operations import FontStyle, TextAlign
from paragraph_wrapper import wrap_body, wrap_text
from primitive_renderer import draw_circle, draw_line, draw_progress_bar, draw_rect
from report_models import GrowthCategory, Kpi, NarrativeSection, SummaryDetail
from text_metrics import baseline_offset, cap_height, chars_for_width
from typography_constants import FontSize, LineHeight
from unicode_utilities import clean_text

logger = logging.getLogger(__name__)


def centered_baseline(top: float, height: float, font_size: float) -> float:
    """Baseline that centers capital letters vertically in [top - height, top]."""
    return top - (height + cap_height(font_size)) / 2.0


def format_percent(value: float) -> str:
    """Whole-number percentage label of a raw (unclamped) value."""
    return f"{value:.0f}%"


# ============================================================================
# TEXT BLOCKS
# ============================================================================

def section_heading_height() -> float:
    """Height of a heading line including the gaps around it."""
    return (
        PageLayoutMM.HEADING_SPACE_BEFORE
        + LineHeight.line_box(FontSize.SECTION)
        + PageLayoutMM.HEADING_SPACE_AFTER
    )


def section_heading(flow: PageFlowManager, text: str, keep_with: float = 0.0) -> None:
    """
    Bold section heading framed by small vertical gaps.

    ``keep_with`` is the height of the first block that follows; the heading
    moves to a new page together with it rather than being left on its own.
    """
    flow.ensure_space(min(section_heading_height() + max(0.0, keep_with), flow.usable_height))
    flow.advance(PageLayoutMM.HEADING_SPACE_BEFORE)
    flow.emit_line(text, FontStyle.BOLD, FontSize.SECTION, get_report_color("heading"))
    flow.advance(PageLayoutMM.HEADING_SPACE_AFTER)


def wrapped_paragraph(
    flow: PageFlowManager,
    text: str,
    font_size: float = FontSize.BODY,
    max_chars: int = PageLayoutMM.WRAP_WIDTH,
) -> int:
    """
    Emit ``text`` wrapped to ``max_chars``, one flowing line at a time.

    Lines may be split across pages. Returns the number of lines emitted.
    """
    lines = wrap_text(clean_text(text), max_chars)
    for line in lines:
        flow.emit_line(line, FontStyle.REGULAR, font_size, get_report_color("body"))
    flow.advance(PageLayoutMM.PARAGRAPH_SPACING)
    return len(lines)


# ============================================================================
# KPI GRID
# ============================================================================

def kpi_card_size(content_width: float) -> Tuple[float, float]:
    """Width and height of one KPI card for the given content width."""
    columns = max(1, KpiGridLayout.COLUMNS)
    available = content_width - KpiGridLayout.COLUMN_GAP * (columns - 1)
    card_width = max(available, KpiGridLayout.MIN_AVAILABLE_WIDTH) / columns
    card_height = (
        2 * KpiGridLayout.PADDING
        + LineHeight.line_box(FontSize.CARD_TITLE)
        + KpiGridLayout.INNER_GAP
        + KpiGridLayout.BAR_HEIGHT
    )
    return card_width, card_height


def kpi_row_height(content_width: float) -> float:
    """Height reserved for one row of KPI cards."""
    return kpi_card_size(content_width)[1] + KpiGridLayout.ROW_GAP


def draw_kpi_grid(flow: PageFlowManager, kpis: Sequence[Kpi]) -> None:
    """
    Lay out KPI cards in rows of two.

    Each card shows the KPI name and value on its title line and a gradient
    bar filled to the value. A whole row is reserved at once so cards are
    never split across pages.
    """
    if not kpis:
        return
    columns = max(1, KpiGridLayout.COLUMNS)
    card_width, card_height = kpi_card_size(flow.content_width)
    padding = KpiGridLayout.PADDING
    title_height = LineHeight.line_box(FontSize.CARD_TITLE)
    ink = get_report_color("ink")

    for start in range(0, len(kpis), columns):
        row = kpis[start:start + columns]
        flow.ensure_space(kpi_row_height(flow.content_width))
        top = flow.top_y()
        for col, kpi in enumerate(row):
            x = flow.margin + col * (card_width + KpiGridLayout.COLUMN_GAP)
            inner_width = card_width - 2 * padding
            draw_rect(flow, x, top, card_width, card_height, get_report_color("panel"))

            baseline = top - padding - baseline_offset(FontSize.CARD_TITLE)
            flow.emit_absolute(kpi.name, FontStyle.BOLD, FontSize.CARD_TITLE, ink, x + padding, baseline)
            flow.emit_in_box(
                format_percent(kpi.value),
                FontStyle.REGULAR,
                FontSize.CARD_TITLE,
                get_report_color("muted"),
                x + padding,
                inner_width,
                baseline,
                TextAlign.RIGHT,
            )

            bar_top = top - padding - title_height - KpiGridLayout.INNER_GAP
            draw_progress_bar(
                flow, x + padding, bar_top, inner_width, KpiGridLayout.BAR_HEIGHT,
                kpi.value, get_report_color("track"),
            )
        flow.advance(card_height + KpiGridLayout.ROW_GAP)

    flow.advance(PageLayoutMM.WIDGET_SPACING)


# ============================================================================
# QUESTION CARDS
# ============================================================================

def question_card_lines(section: NarrativeSection) -> List[str]:
    budget = max(PageLayoutMM.WRAP_WIDTH - QuestionCardLayout.WRAP_REDUCTION, QuestionCardLayout.MIN_WRAP_WIDTH)
    return wrap_body(clean_text(section.text), budget)


def question_card_height(line_count: int) -> float:
    """Total height of a card whose body wraps to ``line_count`` lines."""
    body_line = LineHeight.line_box(FontSize.BODY, LineHeight.BODY_RATIO)
    return (
        2 * QuestionCardLayout.PADDING
        + LineHeight.line_box(FontSize.CARD_TITLE)
        + QuestionCardLayout.GAP
        + max(1, line_count) * body_line
    )


def draw_question_card(flow: PageFlowManager, section: NarrativeSection) -> None:
    """Shaded full-width card holding a bold title and the wrapped answer text."""
    lines = question_card_lines(section)
    block_height = question_card_height(len(lines))
    flow.ensure_space(block_height)

    padding = QuestionCardLayout.PADDING
    ink = get_report_color("ink")
    draw_rect(flow, flow.margin, flow.top_y(), flow.content_width, block_height, get_report_color("panel"))

    flow.advance(padding)
    flow.emit_line_at_cursor(section.title, FontStyle.BOLD, FontSize.CARD_TITLE, ink, indent=padding)
    flow.advance(QuestionCardLayout.GAP)
    for line in lines:
        flow.emit_line_at_cursor(
            line, FontStyle.REGULAR, FontSize.BODY, ink,
            indent=padding, line_ratio=LineHeight.BODY_RATIO,
        )
    flow.advance(padding)
    flow.advance(PageLayoutMM.WIDGET_SPACING)


# ============================================================================
# CATEGORY TABLE
# ============================================================================

def category_columns(x: float, table_width: float) -> List[Tuple[float, float]]:
    """(start, width) of each table column, proportional to the column fractions."""
    columns = []
    start = x
    for fraction in CategoryTableLayout.COLUMN_FRACTIONS:
        width = table_width * fraction
        columns.append((start, width))
        start += width
    return columns


def category_table_reserve(flow: PageFlowManager, row_count: int) -> float:
    """
    Height kept together at the start of the table.

    The whole table when it fits on one page, otherwise only the header and
    first row since a longer table splits by row anyway.
    """
    layout = CategoryTableLayout
    table_height = layout.HEADER_HEIGHT + row_count * layout.ROW_HEIGHT + layout.TABLE_RESERVE
    if table_height > flow.usable_height:
        return layout.HEADER_HEIGHT + layout.ROW_HEIGHT + layout.ROW_RESERVE
    return table_height


def draw_category_table(flow: PageFlowManager, categories: Sequence[GrowthCategory]) -> None:
    """
    Four-column table of category name, score bar, confidence and KPI count.

    The table is moved to a fresh page when it does not fit as a whole. A
    table taller than one page starts below the cursor as soon as its header
    and first row fit, then continues row by row on the following pages.
    """
    if not categories:
        return
    layout = CategoryTableLayout
    table_width = flow.content_width
    columns = category_columns(flow.margin, table_width)
    padding = layout.PADDING
    ink = get_report_color("ink")
    track = get_report_color("track")

    flow.ensure_space(category_table_reserve(flow, len(categories)))

    top = flow.top_y()
    draw_rect(flow, flow.margin, top, table_width, layout.HEADER_HEIGHT, get_report_color("panel"))
    baseline = centered_baseline(top, layout.HEADER_HEIGHT, FontSize.TABLE_HEADER)
    for (start, width), label in zip(columns, layout.HEADERS):
        flow.emit_in_box(
            label, FontStyle.BOLD, FontSize.TABLE_HEADER, ink,
            start + padding * 0.5, width - padding, baseline,
            TextAlign.LEFT if label == layout.HEADERS[0] else TextAlign.CENTER,
        )
    flow.advance(layout.HEADER_HEIGHT)

    for category in categories:
        flow.ensure_space(layout.ROW_HEIGHT + layout.ROW_RESERVE)
        top = flow.top_y()

        name_start, name_width = columns[0]
        flow.emit_in_box(
            category.name, FontStyle.BOLD, FontSize.CATEGORY_NAME, ink,
            name_start + padding * 0.5, name_width - padding,
            centered_baseline(top, layout.ROW_HEIGHT, FontSize.CATEGORY_NAME),
        )

        bar_start, bar_column_width = columns[1]
        draw_progress_bar(
            flow,
            bar_start + padding * 0.5,
            top - (layout.ROW_HEIGHT - layout.BAR_HEIGHT) / 2.0,
            max(bar_column_width - padding, layout.MIN_BAR_WIDTH),
            layout.BAR_HEIGHT,
            category.score,
            track,
        )

        baseline = centered_baseline(top, layout.ROW_HEIGHT, FontSize.BODY)
        for (start, width), text in (
            (columns[2], format_percent(category.confidence)),
            (columns[3], f"{category.scored} of {category.total}"),
        ):
            flow.emit_in_box(text, FontStyle.REGULAR, FontSize.BODY, ink, start, width, baseline, TextAlign.CENTER)

        draw_line(
            flow, flow.margin, top - layout.ROW_HEIGHT + layout.SEPARATOR_THICKNESS,
            table_width, layout.SEPARATOR_THICKNESS, track,
        )
        flow.advance(layout.ROW_HEIGHT)

    flow.advance(layout.SPACE_AFTER)


# ============================================================================
# SUMMARY DETAIL LIST
# ============================================================================

def summary_text_geometry(flow: PageFlowManager) -> Tuple[float, float]:
    """Start x and width of the text column beside the badges."""
    layout = SummaryListLayout
    text_start = flow.margin + layout.BADGE_DIAMETER + layout.PADDING * 2
    text_width = flow.content_width - (text_start - flow.margin) - layout.PADDING
    return text_start, text_width


def summary_block_height(line_count: int) -> float:
    """Block height of one entry: its wrapped text or the badge, whichever is taller."""
    layout = SummaryListLayout
    content_height = max(1, line_count) * LineHeight.line_box(FontSize.BODY, LineHeight.BODY_RATIO)
    return max(
        content_height + layout.PADDING * 2,
        layout.BADGE_DIAMETER + layout.PADDING * layout.BADGE_PADDING_FACTOR,
    )


def summary_entry_height(flow: PageFlowManager, detail: SummaryDetail) -> float:
    """Height reserved for one entry, row gap included."""
    _, text_width = summary_text_geometry(flow)
    lines = wrap_body(clean_text(detail.text), chars_for_width(text_width, FontSize.BODY))
    return summary_block_height(len(lines)) + SummaryListLayout.ROW_GAP


def draw_summary_list(flow: PageFlowManager, details: Sequence[SummaryDetail]) -> None:
    """
    Detail entries, each with a circular label badge and wrapped body text.

    A separator is drawn at the top of every entry. Badge and text block are
    both centered vertically on the entry, and each entry stays on one page.
    """
    if not details:
        return
    layout = SummaryListLayout
    radius = layout.BADGE_DIAMETER / 2.0
    line_height = LineHeight.line_box(FontSize.BODY, LineHeight.BODY_RATIO)
    text_start, text_width = summary_text_geometry(flow)
    wrap_chars = chars_for_width(text_width, FontSize.BODY)
    ink = get_report_color("ink")

    for detail in details:
        lines = wrap_body(clean_text(detail.text), wrap_chars)
        block_height = summary_block_height(len(lines))
        flow.ensure_space(block_height + layout.ROW_GAP)
        top = flow.top_y()

        draw_line(flow, flow.margin, top, flow.content_width, layout.SEPARATOR_THICKNESS, get_report_color("track"))

        badge_cx = flow.margin + layout.PADDING + radius
        badge_cy = top - block_height / 2.0
        draw_circle(flow, badge_cx, badge_cy, radius, get_report_color("badge"))
        flow.emit_in_box(
            detail.label.strip() or layout.BULLET,
            FontStyle.BOLD,
            FontSize.BADGE,
            get_report_color("badge_ink"),
            badge_cx - radius,
            layout.BADGE_DIAMETER,
            badge_cy - cap_height(FontSize.BADGE) / 2.0,
            TextAlign.CENTER,
        )

        text_top = top - (block_height - len(lines) * line_height) / 2.0
        baseline = text_top - baseline_offset(FontSize.BODY)
        for line in lines:
            flow.emit_absolute(line, FontStyle.REGULAR, FontSize.BODY, ink, text_start, baseline)
            baseline -= line_height

        flow.advance(block_height + layout.ROW_GAP)

    flow.advance(PageLayoutMM.WIDGET_SPACING)
    logger.debug(f"Laid out {len(details)} summary details")
