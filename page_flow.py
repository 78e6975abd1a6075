"""
Page Flow Manager

Owns the single mutable writing cursor of one document build together with
the pending operations of the page currently being laid out. Widgets reserve
vertical space through ``ensure_space`` and the manager decides when the
live page has to be finalized and a new one started.

The cursor is measured in millimetres from the top edge of the page and
starts at the top margin. Operations are recorded in page space, where y
grows upwards, so ``top_y()`` converts the cursor for widgets that draw
their own geometry.

A manager is builder state for exactly one document: create one per build,
never share it between threads.
"""

import logging
from typing import List, Tuple

from reportlab.lib.colors import Color

from constants import PageLayoutMM
from page_operations import (
    FontStyle,
    Page,
    PageOperation,
    SetFillColor,
    SetFont,
    SetTextCursor,
    TextAlign,
    WriteText,
)
from text_metrics import baseline_offset, estimate_text_width
from typography_constants import LineHeight
from unicode_utilities import clean_text

logger = logging.getLogger(__name__)


class PageFlowManager:
    """Vertical cursor, margins and pending operations for one document.

    Attributes:
        page_width: Page width in millimetres
        page_height: Page height in millimetres
        margin: Uniform page margin in millimetres
        cursor: Offset of the writing position from the top page edge
    """

    def __init__(
        self,
        page_width: float = PageLayoutMM.PAGE_WIDTH,
        page_height: float = PageLayoutMM.PAGE_HEIGHT,
        margin: float = PageLayoutMM.MARGIN,
    ) -> None:
        self.page_width = page_width
        self.page_height = page_height
        self.margin = margin
        self.cursor = margin
        self._pages: List[Page] = []
        self._operations: List[PageOperation] = []

    # -- geometry -----------------------------------------------------------

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def bottom_limit(self) -> float:
        """Largest cursor value that still lies inside the bottom margin."""
        return self.page_height - self.margin

    @property
    def usable_height(self) -> float:
        return self.page_height - 2 * self.margin

    @property
    def remaining_height(self) -> float:
        """Space left between the cursor and the bottom margin."""
        return self.bottom_limit - self.cursor

    @property
    def page_count(self) -> int:
        """Number of pages finalized so far."""
        return len(self._pages)

    @property
    def pending_operations(self) -> Tuple[PageOperation, ...]:
        return tuple(self._operations)

    def top_y(self) -> float:
        """Page-space y coordinate of the cursor."""
        return self.page_height - self.cursor

    # -- page management ----------------------------------------------------

    def ensure_space(self, needed: float) -> None:
        """Start a new page if ``needed`` millimetres do not fit below the cursor."""
        if self.cursor + needed <= self.bottom_limit:
            return
        if needed > self.usable_height:
            logger.warning(
                f"Block of {needed:.1f}mm exceeds the usable page height "
                f"({self.usable_height:.1f}mm); it will overflow the bottom margin"
            )
        self.flush_page()

    def flush_page(self) -> None:
        """Finalize the live page and reset the cursor to the top margin.

        A page without operations is never finalized; only the cursor resets.
        """
        if not self._operations:
            self.cursor = self.margin
            return
        page = Page(
            width=self.page_width,
            height=self.page_height,
            operations=tuple(self._operations),
        )
        self._operations = []
        self._pages.append(page)
        self.cursor = self.margin
        logger.debug(f"Finalized page {len(self._pages)} with {len(page.operations)} operations")

    def finish(self) -> Tuple[Page, ...]:
        """Finalize the trailing page and hand over the page list.

        A build that emitted nothing still yields one blank page.
        """
        self.flush_page()
        if not self._pages:
            self._pages.append(Page(width=self.page_width, height=self.page_height))
        pages = tuple(self._pages)
        self._pages = []
        return pages

    def push(self, *operations: PageOperation) -> None:
        """Append raw operations to the live page."""
        self._operations.extend(operations)

    def advance(self, amount: float) -> None:
        """Move the cursor down by ``amount`` millimetres (never up)."""
        if amount > 0:
            self.cursor += amount

    # -- text emission ------------------------------------------------------

    def emit_line(
        self,
        text: str,
        style: FontStyle,
        font_size: float,
        color: Color,
        indent: float = 0.0,
        line_ratio: float = LineHeight.TIGHT_RATIO,
    ) -> None:
        """Reserve one line, write ``text`` inside it and advance the cursor."""
        self.ensure_space(LineHeight.line_box(font_size, line_ratio))
        self.emit_line_at_cursor(text, style, font_size, color, indent, line_ratio)

    def emit_line_at_cursor(
        self,
        text: str,
        style: FontStyle,
        font_size: float,
        color: Color,
        indent: float = 0.0,
        line_ratio: float = LineHeight.TIGHT_RATIO,
    ) -> None:
        """Write one line at the cursor without checking for space.

        For blocks whose total height was already reserved.
        """
        baseline = self.top_y() - baseline_offset(font_size)
        self.emit_absolute(text, style, font_size, color, self.margin + indent, baseline)
        self.cursor += LineHeight.line_box(font_size, line_ratio)

    def emit_absolute(
        self,
        text: str,
        style: FontStyle,
        font_size: float,
        color: Color,
        x: float,
        baseline_y: float,
    ) -> None:
        """Write ``text`` with its baseline starting at (x, baseline_y)."""
        self._operations.extend((
            SetFillColor(color),
            SetFont(style, font_size),
            SetTextCursor(x, baseline_y),
            WriteText(clean_text(text)),
        ))

    def emit_in_box(
        self,
        text: str,
        style: FontStyle,
        font_size: float,
        color: Color,
        box_x: float,
        box_width: float,
        baseline_y: float,
        align: TextAlign = TextAlign.LEFT,
    ) -> None:
        """Write ``text`` aligned inside the horizontal box [box_x, box_x + box_width].

        The estimated text width is capped at the box width, so centered or
        right-aligned text never starts left of the box.
        """
        x = box_x
        if align is not TextAlign.LEFT:
            width = max(0.0, box_width)
            slack = width - min(estimate_text_width(clean_text(text), font_size), width)
            x = box_x + (slack / 2.0 if align is TextAlign.CENTER else slack)
        self.emit_absolute(text, style, font_size, color, x, baseline_y)
