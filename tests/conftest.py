"""Shared fixtures for the report layout tests."""

import pytest

from page_flow import PageFlowManager
from report_models import (
    DrilldownTable,
    GrowthCategory,
    Kpi,
    NarrativeSection,
    ReportPayload,
    SummaryDetail,
)


@pytest.fixture
def flow() -> PageFlowManager:
    """Letter page with the default 18mm margin."""
    return PageFlowManager()


@pytest.fixture
def minimal_payload() -> ReportPayload:
    """One KPI and one question, every other list empty."""
    return ReportPayload(
        client_name="Acme Dental",
        date="March 3, 2025",
        kpis=[Kpi(name="Leads", value=75)],
        questions=[NarrativeSection(title="Q1", text="short answer")],
    )


@pytest.fixture
def full_payload() -> ReportPayload:
    """A payload exercising every report section."""
    return ReportPayload(
        client_name="Acme Dental",
        date="March 3, 2025",
        kpis=[Kpi(name="Leads", value=75), Kpi(name="Conversion", value=42.5), Kpi(name="Retention", value=120)],
        questions=[
            NarrativeSection(title="What is working?", text="Recall visits are up " * 12),
            NarrativeSection(title="What is not?", text=""),
        ],
        general_sections=[NarrativeSection(title="Scheduling", text="Open chairs on Fridays. " * 8)],
        summary_details=[
            SummaryDetail(label="A", text="Hygiene production grew steadily."),
            SummaryDetail(label="", text="Unlabelled detail."),
        ],
        growth_categories=[
            GrowthCategory(name="Marketing", score=64, confidence=80.4, scored=4, total=6),
            GrowthCategory(name="Operations", score=-5, confidence=55, scored=2, total=5),
        ],
    )


@pytest.fixture
def long_details() -> list:
    """Forty detail entries with 300-character bodies."""
    body = ("lorem ipsum dolor sit amet " * 12)[:300]
    return [SummaryDetail(label=str(i + 1), text=body) for i in range(40)]


@pytest.fixture
def drilldown_table() -> DrilldownTable:
    return DrilldownTable(
        title="Marketing Drilldown",
        columns=["Growth Category", "Category", "KPI", "Score"],
        rows=[
            ["M", "Marketing", "New patient calls per week", "80"],
            ["M", "Marketing", "Website conversion", "65"],
            ["O", "Operations", "Chair utilization", "72"],
        ],
    )
