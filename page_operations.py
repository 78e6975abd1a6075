"""
Page Model and Drawing Operation Vocabulary

The layout engine never talks to a PDF library directly. It records an
ordered list of operations per page from a small, closed vocabulary, and the
document sink (``pdf_sink``) replays them. Coordinates are millimetres in
page space (origin at the bottom-left corner, y growing upwards), font sizes
are points.

Vocabulary:
- SetFillColor: select the fill colour for following shapes and text
- FillRect: fill an axis-aligned rectangle
- FillPolygon: fill a closed polygon using the non-zero winding rule
- SetFont: select regular or bold Helvetica at a size
- SetTextCursor: position the next text run (baseline start)
- WriteText: write a text run at the text cursor
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Tuple, Union

from reportlab.lib.colors import Color

from typography_constants import FontFamily


class FontStyle(Enum):
    """Logical font styles of the single report font family."""
    REGULAR = "regular"
    BOLD = "bold"

    @property
    def font_name(self) -> str:
        """ReportLab standard font name for this style."""
        if self is FontStyle.BOLD:
            return FontFamily.SANS_SERIF_BOLD
        return FontFamily.SANS_SERIF


class TextAlign(Enum):
    """Horizontal alignment of text inside a box."""
    LEFT = "left"
    CENTER = "center"
    RIGHT = "right"


@dataclass(frozen=True)
class SetFillColor:
    color: Color


@dataclass(frozen=True)
class FillRect:
    """Rectangle with its bottom-left corner at (x, y)."""
    x: float
    y: float
    width: float
    height: float


@dataclass(frozen=True)
class FillPolygon:
    points: Tuple[Tuple[float, float], ...]


@dataclass(frozen=True)
class SetFont:
    style: FontStyle
    size: float


@dataclass(frozen=True)
class SetTextCursor:
    x: float
    y: float


@dataclass(frozen=True)
class WriteText:
    text: str


PageOperation = Union[SetFillColor, FillRect, FillPolygon, SetFont, SetTextCursor, WriteText]


@dataclass(frozen=True)
class Page:
    """A finalized page: physical size plus its operations in emission order.

    Attributes:
        width: Page width in millimetres
        height: Page height in millimetres
        operations: Operations to apply, in order
    """
    width: float
    height: float
    operations: Tuple[PageOperation, ...] = field(default_factory=tuple)

    def operations_of(self, kind: type) -> Tuple[PageOperation, ...]:
        """Operations of one type, in emission order."""
        return tuple(op for op in self.operations if isinstance(op, kind))

    @property
    def texts(self) -> Tuple[str, ...]:
        """Every text run written on this page."""
        return tuple(op.text for op in self.operations if isinstance(op, WriteText))

    @property
    def is_blank(self) -> bool:
        return not self.operations
