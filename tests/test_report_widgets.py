"""Tests for the composite report widgets."""

import pytest
from reportlab.lib import colors

from color_utilities import get_report_color
from constants import CategoryTableLayout, KpiGridLayout, PageLayoutMM, SummaryListLayout
from page_flow import PageFlowManager
from page_helpers import fills_of, text_positions, texts_of
from page_operations import FillPolygon, FontStyle
from report_models import GrowthCategory, Kpi, NarrativeSection, SummaryDetail
from report_widgets import (
    category_table_reserve,
    draw_category_table,
    draw_kpi_grid,
    draw_question_card,
    draw_summary_list,
    kpi_card_size,
    question_card_height,
    section_heading,
    section_heading_height,
    summary_block_height,
    wrapped_paragraph,
)
from typography_constants import FontSize, LineHeight

PANEL = get_report_color("panel").rgb()
TRACK = get_report_color("track").rgb()
BADGE = get_report_color("badge").rgb()


def _fill_to_near_bottom(flow: PageFlowManager, remaining: float) -> None:
    """Put some content on the page and leave ``remaining`` mm above the bottom margin."""
    flow.emit_line("filler", FontStyle.REGULAR, 10, colors.black)
    flow.advance(flow.remaining_height - remaining)


class TestTextBlocks:
    def test_section_heading_spacing(self, flow: PageFlowManager) -> None:
        section_heading(flow, "Key KPIs")
        expected = (
            PageLayoutMM.MARGIN + PageLayoutMM.HEADING_SPACE_BEFORE
            + LineHeight.line_box(FontSize.SECTION) + PageLayoutMM.HEADING_SPACE_AFTER
        )
        assert flow.cursor == pytest.approx(expected)
        assert flow.finish()[0].texts == ("Key KPIs",)

    def test_heading_moves_with_following_block(self, flow: PageFlowManager) -> None:
        _fill_to_near_bottom(flow, section_heading_height() + 1.0)
        section_heading(flow, "Key Questions", keep_with=20.0)
        first, second = flow.finish()
        assert first.texts == ("filler",)
        assert second.texts == ("Key Questions",)

    def test_heading_stays_when_block_fits(self, flow: PageFlowManager) -> None:
        _fill_to_near_bottom(flow, section_heading_height() + 21.0)
        section_heading(flow, "Key Questions", keep_with=20.0)
        assert flow.finish()[0].texts == ("filler", "Key Questions")

    def test_oversized_keep_with_does_not_warn(self, flow: PageFlowManager, caplog) -> None:
        section_heading(flow, "Breakdown by Category", keep_with=flow.usable_height * 2)
        assert "exceeds the usable page height" not in caplog.text
        assert flow.page_count == 0

    def test_wrapped_paragraph_lines(self, flow: PageFlowManager) -> None:
        count = wrapped_paragraph(flow, "word " * 100, FontSize.BODY, 40)
        page = flow.finish()[0]
        assert count == len(page.texts) > 1
        assert all(len(text) <= 40 for text in page.texts)

    def test_wrapped_paragraph_flows_across_pages(self, flow: PageFlowManager) -> None:
        wrapped_paragraph(flow, "paragraph " * 2000, FontSize.BODY, 95)
        pages = flow.finish()
        assert len(pages) > 1


class TestKpiGrid:
    def test_card_size(self) -> None:
        width, height = kpi_card_size(179.9)
        assert width == pytest.approx((179.9 - KpiGridLayout.COLUMN_GAP) / 2)
        assert height == pytest.approx(
            2 * KpiGridLayout.PADDING + LineHeight.line_box(11) + KpiGridLayout.INNER_GAP + 5.0
        )

    def test_card_width_floor(self) -> None:
        width, _ = kpi_card_size(10.0)
        assert width == pytest.approx(20.0)

    def test_two_columns_and_rows(self, flow: PageFlowManager) -> None:
        kpis = [Kpi("Leads", 75), Kpi("Conversion", 40), Kpi("Retention", 120)]
        draw_kpi_grid(flow, kpis)
        page = flow.finish()[0]
        panels = [rect for color, rect in fills_of(page) if color == pytest.approx(PANEL)]
        assert len(panels) == 3
        assert panels[0].y == pytest.approx(panels[1].y)
        assert panels[2].y < panels[0].y
        assert panels[1].x > panels[0].x

    def test_labels_show_raw_values(self, flow: PageFlowManager) -> None:
        draw_kpi_grid(flow, [Kpi("Leads", 75), Kpi("Retention", 120), Kpi("Churn", -5)])
        texts = flow.finish()[0].texts
        assert "75%" in texts
        assert "120%" in texts
        assert "-5%" in texts

    def test_bar_fill_is_clamped(self, flow: PageFlowManager) -> None:
        draw_kpi_grid(flow, [Kpi("Over", 250)])
        page = flow.finish()[0]
        card_width, _ = kpi_card_size(flow.content_width)
        track = [rect for color, rect in fills_of(page) if color == pytest.approx(TRACK)][0]
        # panel, track, then the gradient strips
        gradient = [rect for _, rect in fills_of(page)][2:]
        assert track.width == pytest.approx(card_width - 2 * KpiGridLayout.PADDING)
        assert max(r.x + r.width for r in gradient) == pytest.approx(track.x + track.width)

    def test_row_is_never_split(self, flow: PageFlowManager) -> None:
        _, card_height = kpi_card_size(flow.content_width)
        _fill_to_near_bottom(flow, card_height / 2)
        draw_kpi_grid(flow, [Kpi("A", 10), Kpi("B", 20)])
        first, second = flow.finish()
        assert first.texts == ("filler",)
        assert {"A", "B"} <= set(second.texts)

    def test_empty_list_draws_nothing(self, flow: PageFlowManager) -> None:
        draw_kpi_grid(flow, [])
        assert flow.pending_operations == ()
        assert flow.cursor == flow.margin


class TestQuestionCard:
    def test_short_answer_is_one_line(self, flow: PageFlowManager) -> None:
        draw_question_card(flow, NarrativeSection("Q1", "short answer"))
        page = flow.finish()[0]
        assert page.texts == ("Q1", "short answer")
        (_, panel), = [(c, r) for c, r in fills_of(page) if c == pytest.approx(PANEL)]
        assert panel.height == pytest.approx(question_card_height(1))

    def test_cursor_moves_past_card(self, flow: PageFlowManager) -> None:
        draw_question_card(flow, NarrativeSection("Q1", "short answer"))
        assert flow.cursor == pytest.approx(
            PageLayoutMM.MARGIN + question_card_height(1) + PageLayoutMM.WIDGET_SPACING
        )

    def test_text_stays_inside_card(self, flow: PageFlowManager) -> None:
        draw_question_card(flow, NarrativeSection("Long", "answer text " * 40))
        page = flow.finish()[0]
        (_, panel), = [(c, r) for c, r in fills_of(page) if c == pytest.approx(PANEL)]
        for _, _, y in text_positions(page):
            assert panel.y < y < panel.y + panel.height

    def test_blank_body_renders_empty_line(self, flow: PageFlowManager) -> None:
        draw_question_card(flow, NarrativeSection("Empty", "   "))
        assert flow.finish()[0].texts == ("Empty", "")

    def test_card_moves_whole_to_next_page(self, flow: PageFlowManager) -> None:
        _fill_to_near_bottom(flow, 5.0)
        draw_question_card(flow, NarrativeSection("Q", "some text"))
        first, second = flow.finish()
        assert first.texts == ("filler",)
        assert second.texts == ("Q", "some text")


class TestCategoryTable:
    @pytest.fixture
    def categories(self) -> list:
        return [
            GrowthCategory("Marketing", 64, 80.4, 4, 6),
            GrowthCategory("Operations", -5, 55, 2, 5),
        ]

    def test_headers_and_cells(self, flow: PageFlowManager, categories: list) -> None:
        draw_category_table(flow, categories)
        texts = flow.finish()[0].texts
        assert texts[:4] == CategoryTableLayout.HEADERS
        for expected in ("Marketing", "80%", "4 of 6", "Operations", "55%", "2 of 5"):
            assert expected in texts

    def test_separator_under_every_row(self, flow: PageFlowManager, categories: list) -> None:
        draw_category_table(flow, categories)
        page = flow.finish()[0]
        separators = [
            r for c, r in fills_of(page)
            if c == pytest.approx(TRACK) and r.height == CategoryTableLayout.SEPARATOR_THICKNESS
        ]
        assert len(separators) == 2
        assert all(r.width == pytest.approx(flow.content_width) for r in separators)

    def test_negative_score_has_no_gradient(self, flow: PageFlowManager) -> None:
        draw_category_table(flow, [GrowthCategory("Operations", -5, 55, 2, 5)])
        page = flow.finish()[0]
        fills = fills_of(page)
        # header panel, bar track, row separator
        assert len(fills) == 3
        assert all(c == pytest.approx(PANEL) or c == pytest.approx(TRACK) for c, _ in fills)

    def test_column_fractions(self, flow: PageFlowManager, categories: list) -> None:
        draw_category_table(flow, categories)
        page = flow.finish()[0]
        positions = {text: x for text, x, _ in text_positions(page)}
        padding = CategoryTableLayout.PADDING
        assert positions["Category"] == pytest.approx(flow.margin + padding * 0.5)
        assert positions["Marketing"] == pytest.approx(flow.margin + padding * 0.5)

    def test_long_table_continues_on_next_page(self, flow: PageFlowManager) -> None:
        categories = [GrowthCategory(f"Cat {i}", 50, 50, 1, 2) for i in range(60)]
        draw_category_table(flow, categories)
        pages = flow.finish()
        assert len(pages) > 1
        names = [t for page in pages for t in page.texts if t.startswith("Cat ")]
        assert names == [f"Cat {i}" for i in range(60)]


    def test_long_table_starts_below_cursor(self, flow: PageFlowManager) -> None:
        section_heading(flow, "Breakdown by Category")
        categories = [GrowthCategory(f"Cat {i}", 50, 50, 1, 2) for i in range(40)]
        draw_category_table(flow, categories)
        first = flow.finish()[0]
        assert first.texts[0] == "Breakdown by Category"
        assert "Cat 0" in first.texts

    def test_table_reserve(self, flow: PageFlowManager) -> None:
        layout = CategoryTableLayout
        assert category_table_reserve(flow, 2) == pytest.approx(
            layout.HEADER_HEIGHT + 2 * layout.ROW_HEIGHT + layout.TABLE_RESERVE
        )
        assert category_table_reserve(flow, 40) == pytest.approx(
            layout.HEADER_HEIGHT + layout.ROW_HEIGHT + layout.ROW_RESERVE
        )


class TestSummaryList:
    def test_badge_labels_and_bullet_fallback(self, flow: PageFlowManager) -> None:
        draw_summary_list(flow, [SummaryDetail(" A ", "first"), SummaryDetail("", "second")])
        texts = flow.finish()[0].texts
        assert texts == ("A", "first", "\u2022", "second")

    def test_one_badge_and_separator_per_entry(self, flow: PageFlowManager) -> None:
        details = [SummaryDetail(str(i), "text") for i in range(5)]
        draw_summary_list(flow, details)
        page = flow.finish()[0]
        assert len(page.operations_of(FillPolygon)) == 5
        separators = [r for c, r in fills_of(page) if c == pytest.approx(TRACK)]
        assert len(separators) == 5

    def test_block_height_uses_badge_minimum(self) -> None:
        assert summary_block_height(1) == pytest.approx(
            SummaryListLayout.BADGE_DIAMETER + SummaryListLayout.PADDING * SummaryListLayout.BADGE_PADDING_FACTOR
        )
        tall = summary_block_height(10)
        assert tall == pytest.approx(10 * LineHeight.line_box(10, 1.25) + 2 * SummaryListLayout.PADDING)

    def test_separator_at_entry_top_and_badge_centered(self, flow: PageFlowManager) -> None:
        top = flow.top_y()
        draw_summary_list(flow, [SummaryDetail("1", "text " * 150)])
        page = flow.finish()[0]
        (_, separator), = [(c, r) for c, r in fills_of(page) if c == pytest.approx(TRACK)]
        assert separator.y + separator.height == pytest.approx(top)
        (_, badge), = fills_of(page, FillPolygon)
        lines = len(page.texts) - 1
        block = summary_block_height(lines)
        ys = [y for _, y in badge.points]
        assert (max(ys) + min(ys)) / 2 == pytest.approx(top - block / 2)

    def test_text_stays_inside_block(self, flow: PageFlowManager) -> None:
        top = flow.top_y()
        draw_summary_list(flow, [SummaryDetail("1", "text " * 150)])
        page = flow.finish()[0]
        block = summary_block_height(len(page.texts) - 1)
        for _, _, y in text_positions(page):
            assert top - block < y < top
