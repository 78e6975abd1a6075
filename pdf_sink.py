"""
PDF Document Sink

Replays finalized pages on a ReportLab canvas and returns the PDF bytes.
The layout engine never touches ReportLab drawing calls itself; this module
is the only place where the operation vocabulary of ``page_operations`` is
translated into canvas calls.

Coordinates arrive in millimetres (page space, origin bottom-left) and are
scaled with ``reportlab.lib.units.mm``.

Usage:
    from pdf_sink import render_pdf, PdfGenerationError

    try:
        data = render_pdf(pages, title="Acme - Summary")
    except PdfGenerationError as e:
        logger.error(f"PDF generation failed: {e}", exc_info=True)
"""

import logging
from datetime import datetime
from io import BytesIO
from typing import Optional, Sequence

from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import FILL_NON_ZERO, Canvas

from constants import PageLayoutMM
from page_operations import (
    FillPolygon,
    FillRect,
    Page,
    PageOperation,
    SetFillColor,
    SetFont,
    SetTextCursor,
    WriteText,
)

# Get logger for this module
logger = logging.getLogger(__name__)


class PdfGenerationError(Exception):
    """
    Raised when the document sink cannot produce bytes from a page list.

    Regenerating with the same pages fails the same way, so callers should
    not retry.
    """
    def __init__(self, message="unable to generate pdf", page_count=0, original_exception=None):
        super().__init__(message)
        self.page_count = page_count
        self.original_exception = original_exception
        self.timestamp = datetime.now()

    def __str__(self):
        base_msg = super().__str__()
        if self.original_exception is not None:
            return f"{base_msg} ({type(self.original_exception).__name__}: {self.original_exception})"
        return base_msg


class _CanvasReplayer:
    """Applies page operations to a canvas, tracking the text cursor."""

    def __init__(self, canvas: Canvas) -> None:
        self.canvas = canvas
        self.text_x = 0.0
        self.text_y = 0.0

    def apply(self, op: PageOperation) -> None:
        canvas = self.canvas
        if isinstance(op, SetFillColor):
            canvas.setFillColor(op.color)
        elif isinstance(op, FillRect):
            canvas.rect(op.x * mm, op.y * mm, op.width * mm, op.height * mm, stroke=0, fill=1)
        elif isinstance(op, FillPolygon):
            if len(op.points) < 3:
                return
            path = canvas.beginPath()
            first_x, first_y = op.points[0]
            path.moveTo(first_x * mm, first_y * mm)
            for x, y in op.points[1:]:
                path.lineTo(x * mm, y * mm)
            path.close()
            canvas.drawPath(path, stroke=0, fill=1, fillMode=FILL_NON_ZERO)
        elif isinstance(op, SetFont):
            canvas.setFont(op.style.font_name, op.size)
        elif isinstance(op, SetTextCursor):
            self.text_x, self.text_y = op.x, op.y
        elif isinstance(op, WriteText):
            if op.text:
                canvas.drawString(self.text_x * mm, self.text_y * mm, op.text)
        else:
            raise TypeError(f"Unsupported page operation: {type(op).__name__}")

    def replay(self, page: Page) -> None:
        self.canvas.setPageSize((page.width * mm, page.height * mm))
        for op in page.operations:
            self.apply(op)
        self.canvas.showPage()


def render_pdf(
    pages: Sequence[Page],
    title: str = "",
    author: Optional[str] = None,
    compress: bool = True,
) -> bytes:
    """
    Render finalized pages to a PDF document.

    Args:
        pages: Pages in document order; an empty sequence yields one blank page
        title: Document title metadata
        author: Optional author metadata
        compress: Whether to compress page content streams

    Returns:
        The PDF document as bytes

    Raises:
        PdfGenerationError: If ReportLab fails or produces no output
    """
    pages = list(pages) or [Page(width=PageLayoutMM.PAGE_WIDTH, height=PageLayoutMM.PAGE_HEIGHT)]
    buffer = BytesIO()
    try:
        canvas = Canvas(
            buffer,
            pagesize=(pages[0].width * mm, pages[0].height * mm),
            pageCompression=1 if compress else 0,
        )
        canvas.setTitle(title)
        if author:
            canvas.setAuthor(author)
        replayer = _CanvasReplayer(canvas)
        for page in pages:
            replayer.replay(page)
        canvas.save()
    except Exception as e:
        logger.error(f"ReportLab failed while rendering {len(pages)} page(s): {e}")
        raise PdfGenerationError(page_count=len(pages), original_exception=e) from e

    data = buffer.getvalue()
    if not data:
        raise PdfGenerationError(page_count=len(pages))
    logger.debug(f"Rendered {len(pages)} page(s) into {len(data)} bytes")
    return data
