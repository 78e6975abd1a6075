"""
Report Payload Data Structures

In-memory representation of the report payload consumed by the layout
engine, together with decoding from the JSON wire format used by the report
service (camelCase keys such as ``clientName`` and ``growthCategories``).
snake_case keys are accepted as well so payloads can be written by hand.

Decoding only rejects a payload that lacks the client name or the report
date; every list defaults to empty and numeric fields are coerced. Values are
not range-checked here. KPI values and category scores outside 0-100 are
clamped only when a progress bar is drawn.

Usage:
    from report_models import ReportPayload

    payload = ReportPayload.from_dict(json.loads(raw))
    pages = build_report_pages(payload)
"""

import logging
import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Sequence

# Get logger for this module
logger = logging.getLogger(__name__)


def _pick(data: Dict[str, Any], *keys: str, default: Any = None) -> Any:
    """Return the value of the first key present in ``data``."""
    for key in keys:
        if key in data and data[key] is not None:
            return data[key]
    return default


def _as_text(value: Any) -> str:
    if value is None:
        return ""
    return value if isinstance(value, str) else str(value)


def _as_float(value: Any, field_name: str) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise ValueError(f"Field '{field_name}' must be numeric, got {value!r}") from e
    if not math.isfinite(number):
        raise ValueError(f"Field '{field_name}' must be a finite number, got {value!r}")
    return number


def _as_int(value: Any, field_name: str) -> int:
    try:
        return int(float(value))
    except (TypeError, ValueError, OverflowError) as e:
        raise ValueError(f"Field '{field_name}' must be an integer, got {value!r}") from e


@dataclass
class Kpi:
    """A named KPI score, expected on the 0-100 scale."""
    name: str
    value: float

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"name": self.name, "value": self.value}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Kpi":
        """Create from dictionary."""
        return cls(
            name=_as_text(data.get("name")),
            value=_as_float(data.get("value", 0), "value"),
        )


@dataclass
class NarrativeSection:
    """Titled free text, used for key questions and additional insights."""
    title: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"title": self.title, "text": self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "NarrativeSection":
        """Create from dictionary."""
        return cls(
            title=_as_text(data.get("title")),
            text=_as_text(data.get("text")),
        )


@dataclass
class SummaryDetail:
    """A detail entry rendered next to a circular badge holding ``label``."""
    label: str
    text: str

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"label": self.label, "text": self.text}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SummaryDetail":
        """Create from dictionary."""
        return cls(
            label=_as_text(data.get("label")),
            text=_as_text(data.get("text")),
        )


@dataclass
class GrowthCategory:
    """
    A scored category row of the breakdown table.

    Attributes:
        name: Category name
        score: Category score (0-100), drawn as a progress bar
        confidence: Confidence percentage (0-100), shown rounded
        scored: Number of KPIs that contributed to the score
        total: Number of KPIs in the category
    """
    name: str
    score: float
    confidence: float
    scored: int
    total: int

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {
            "name": self.name,
            "score": self.score,
            "confidence": self.confidence,
            "scored": self.scored,
            "total": self.total,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "GrowthCategory":
        """Create from dictionary."""
        return cls(
            name=_as_text(data.get("name")),
            score=_as_float(data.get("score", 0), "score"),
            confidence=_as_float(data.get("confidence", 0), "confidence"),
            scored=_as_int(data.get("scored", 0), "scored"),
            total=_as_int(data.get("total", 0), "total"),
        )


@dataclass
class ReportPayload:
    """
    Everything needed to lay out one summary report.

    Lists keep their order. An empty list suppresses its report section,
    heading included.
    """
    client_name: str
    date: str
    kpis: List[Kpi] = field(default_factory=list)
    questions: List[NarrativeSection] = field(default_factory=list)
    general_sections: List[NarrativeSection] = field(default_factory=list)
    summary_details: List[SummaryDetail] = field(default_factory=list)
    growth_categories: List[GrowthCategory] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the camelCase wire format."""
        return {
            "clientName": self.client_name,
            "date": self.date,
            "kpis": [k.to_dict() for k in self.kpis],
            "questions": [q.to_dict() for q in self.questions],
            "generalSections": [s.to_dict() for s in self.general_sections],
            "summaryDetails": [d.to_dict() for d in self.summary_details],
            "growthCategories": [c.to_dict() for c in self.growth_categories],
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ReportPayload":
        """
        Create from a decoded JSON payload.

        Raises:
            ValueError: If the payload is not an object or lacks the client
                name or the report date
        """
        if not isinstance(data, dict):
            raise ValueError(f"Report payload must be an object, got {type(data).__name__}")

        client_name = _pick(data, "clientName", "client_name")
        date = _pick(data, "date")
        missing = [name for name, value in (("clientName", client_name), ("date", date)) if value is None]
        if missing:
            raise ValueError(f"Report payload is missing required field(s): {', '.join(missing)}")

        payload = cls(
            client_name=_as_text(client_name),
            date=_as_text(date),
            kpis=[Kpi.from_dict(k) for k in _pick(data, "kpis", default=[])],
            questions=[NarrativeSection.from_dict(q) for q in _pick(data, "questions", default=[])],
            general_sections=[
                NarrativeSection.from_dict(s)
                for s in _pick(data, "generalSections", "general_sections", default=[])
            ],
            summary_details=[
                SummaryDetail.from_dict(d)
                for d in _pick(data, "summaryDetails", "summary_details", default=[])
            ],
            growth_categories=[
                GrowthCategory.from_dict(c)
                for c in _pick(data, "growthCategories", "growth_categories", default=[])
            ],
        )
        logger.debug(
            f"Decoded payload for '{payload.client_name}': {len(payload.kpis)} KPIs, "
            f"{len(payload.questions)} questions, {len(payload.growth_categories)} categories, "
            f"{len(payload.summary_details)} details, {len(payload.general_sections)} insights"
        )
        return payload


@dataclass
class DrilldownTable:
    """
    A titled grid of text cells for the drilldown report.

    Attributes:
        title: Heading printed above the table (omitted when blank)
        columns: Header labels, one per column
        rows: Row cells; rows are padded or truncated to the column count
    """
    title: str
    columns: List[str] = field(default_factory=list)
    rows: List[List[str]] = field(default_factory=list)

    def sanitized_rows(self) -> List[List[str]]:
        """Rows fitted to the column count with every cell stripped."""
        return [_fit_row(row, len(self.columns)) for row in self.rows]

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for serialization."""
        return {"title": self.title, "columns": list(self.columns), "rows": [list(r) for r in self.rows]}

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DrilldownTable":
        """
        Create from dictionary.

        Raises:
            ValueError: If the payload is not an object or rows is not a list of lists
        """
        if not isinstance(data, dict):
            raise ValueError(f"Drilldown payload must be an object, got {type(data).__name__}")
        rows = data.get("rows") or []
        if not all(isinstance(row, (list, tuple)) for row in rows):
            raise ValueError("Drilldown rows must be lists of cells")
        return cls(
            title=_as_text(data.get("title")),
            columns=[_as_text(c) for c in data.get("columns") or []],
            rows=[[_as_text(cell) if cell is not None else "" for cell in row] for row in rows],
        )


def _fit_row(row: Optional[Sequence[Any]], width: int) -> List[str]:
    cells = list(row or [])
    fitted = []
    for idx in range(width):
        value = cells[idx] if idx < len(cells) else None
        fitted.append("" if value is None else _as_text(value).strip())
    return fitted
