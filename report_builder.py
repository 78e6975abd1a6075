"""
Document Assembler

Drives one ``PageFlowManager`` through the fixed section order of the
summary report and hands the finished pages to the PDF sink:

1. Header (client name and report date)
2. Key KPIs (grid of KPI cards)
3. Key Questions (one card per question)
4. Breakdown by Category (scored-category table)
5. Summary Details (badge list)
6. Additional Insights (title and paragraph per entry)
7. Closing paragraphs

A section whose source list is empty is skipped, heading and spacing
included. Each build owns its manager, so concurrent builds in separate
threads do not interfere.

Usage:
    from report_builder import create_report_pdf

    pdf_bytes = create_report_pdf(ReportPayload.from_dict(data))
"""

import logging
from typing import Optional, Tuple

from color_utilities import get_report_color
from constants import PageLayoutMM
from drilldown_table import draw_drilldown_table
from page_flow import PageFlowManager
from page_operations import FontStyle, Page
from pdf_sink import render_pdf
from performance_timing import time_layout, time_pdf_render
from report_config import ReportConfig
from report_models import DrilldownTable, ReportPayload
from report_widgets import (
    draw_category_table,
    category_table_reserve,
    draw_kpi_grid,
    draw_question_card,
    draw_summary_list,
    kpi_row_height,
    question_card_height,
    question_card_lines,
    section_heading,
    summary_entry_height,
    wrapped_paragraph,
)
from typography_constants import FontSize, LineHeight

# Get logger for this module
logger = logging.getLogger(__name__)

# Fixed text printed at the end of every summary report
CLOSING_PARAGRAPHS = (
    "Learn more about GROWTH Practice Optimization Partnership, the new Zero Risk way to win in dentistry!",
    "\"We love helping practices double their profitability risk free without having to come up with "
    "money out of their pocket. It's a game changer for the practice and unbelievably fulfilling for "
    "our team, for practices that qualify.\" Shawn Rowbotham",
)

# Section headings
KPI_HEADING = "Key KPIs"
QUESTIONS_HEADING = "Key Questions"
CATEGORY_HEADING = "Breakdown by Category"
SUMMARY_HEADING = "Summary Details"
INSIGHTS_HEADING = "Additional Insights"

# Multiples of the section spacing added after each section
KPI_SECTION_SPACING = 0.5
SUMMARY_SECTION_SPACING = 0.75


def report_title(payload: ReportPayload) -> str:
    """Document title metadata of the summary report."""
    return f"{payload.client_name} - Summary"


def draw_report_header(flow: PageFlowManager, payload: ReportPayload) -> None:
    flow.emit_line(
        f"{payload.client_name} - Online Analysis", FontStyle.BOLD, FontSize.TITLE, get_report_color("ink"),
    )
    flow.emit_line(payload.date, FontStyle.REGULAR, FontSize.DATE, get_report_color("muted"))
    flow.advance(PageLayoutMM.HEADER_SPACING)


def build_report_pages(payload: ReportPayload) -> Tuple[Page, ...]:
    """
    Lay out the summary report.

    Returns:
        Finalized pages in document order (at least one)
    """
    flow = PageFlowManager()
    spacing = PageLayoutMM.SECTION_SPACING

    with time_layout("summary", client=payload.client_name) as timer:
        draw_report_header(flow, payload)

        if payload.kpis:
            section_heading(flow, KPI_HEADING, keep_with=kpi_row_height(flow.content_width))
            draw_kpi_grid(flow, payload.kpis)
            flow.advance(spacing * KPI_SECTION_SPACING)
            timer.checkpoint("kpis", count=len(payload.kpis))

        if payload.questions:
            first_card = question_card_height(len(question_card_lines(payload.questions[0])))
            section_heading(flow, QUESTIONS_HEADING, keep_with=first_card)
            for section in payload.questions:
                draw_question_card(flow, section)
            flow.advance(spacing)
            timer.checkpoint("questions", count=len(payload.questions))

        if payload.growth_categories:
            section_heading(
                flow, CATEGORY_HEADING, keep_with=category_table_reserve(flow, len(payload.growth_categories)),
            )
            draw_category_table(flow, payload.growth_categories)
            flow.advance(spacing)
            timer.checkpoint("categories", count=len(payload.growth_categories))

        if payload.summary_details:
            section_heading(
                flow, SUMMARY_HEADING, keep_with=summary_entry_height(flow, payload.summary_details[0]),
            )
            draw_summary_list(flow, payload.summary_details)
            flow.advance(spacing * SUMMARY_SECTION_SPACING)
            timer.checkpoint("summary_details", count=len(payload.summary_details))

        if payload.general_sections:
            first_insight = LineHeight.line_box(FontSize.INSIGHT_TITLE) + LineHeight.line_box(FontSize.BODY)
            section_heading(flow, INSIGHTS_HEADING, keep_with=first_insight)
            for section in payload.general_sections:
                flow.emit_line(
                    section.title, FontStyle.BOLD, FontSize.INSIGHT_TITLE, get_report_color("insight_title"),
                )
                wrapped_paragraph(flow, section.text, FontSize.BODY, PageLayoutMM.WRAP_WIDTH)
            flow.advance(spacing)
            timer.checkpoint("insights", count=len(payload.general_sections))

        for paragraph in CLOSING_PARAGRAPHS:
            wrapped_paragraph(flow, paragraph, FontSize.CLOSING, PageLayoutMM.WRAP_WIDTH)

        pages = flow.finish()

    logger.debug(f"Summary layout for '{payload.client_name}' produced {len(pages)} page(s)")
    return pages


def create_report_pdf(payload: ReportPayload, config: Optional[ReportConfig] = None) -> bytes:
    """
    Lay out and render the summary report.

    Raises:
        PdfGenerationError: If the PDF sink fails
    """
    config = config or ReportConfig()
    pages = build_report_pages(payload)
    with time_pdf_render("summary", pages=len(pages)):
        data = render_pdf(pages, title=report_title(payload), author=config.author, compress=config.compress)
    logger.info(f"Built summary report for '{payload.client_name}': {len(pages)} page(s), {len(data)} bytes")
    return data


def build_drilldown_pages(table: DrilldownTable) -> Tuple[Page, ...]:
    """Lay out the drilldown report."""
    flow = PageFlowManager()
    with time_layout("drilldown", rows=len(table.rows)):
        draw_drilldown_table(flow, table)
        pages = flow.finish()
    return pages


def create_drilldown_pdf(table: DrilldownTable, config: Optional[ReportConfig] = None) -> bytes:
    """
    Lay out and render the drilldown report.

    Raises:
        PdfGenerationError: If the PDF sink fails
    """
    config = config or ReportConfig()
    pages = build_drilldown_pages(table)
    with time_pdf_render("drilldown", pages=len(pages)):
        data = render_pdf(pages, title=table.title or "Drilldown", author=config.author, compress=config.compress)
    logger.info(f"Built drilldown report '{table.title}': {len(pages)} page(s), {len(data)} bytes")
    return data
