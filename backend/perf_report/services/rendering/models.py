"""
View models produced by the performance category renderer.
"""
from dataclasses import asdict, dataclass, field
from typing import Any, Optional


@dataclass
class CategoryHeader:
    """Category title with its rounded score."""
    title: str
    description: str = ""
    score: Optional[int] = None  # 0-100
    rating: str = "error"


@dataclass
class RenderedMetric:
    """One metric tile."""
    id: str
    title: str
    display_value: str
    rating: str
    description: str = ""
    tooltip: Optional[str] = None
    is_error: bool = False
    weight: float = 0.0


@dataclass
class RenderedOpportunity:
    """One ranked opportunity row."""
    id: str
    title: str
    display_text: str
    sparkline_fraction: float
    impact: float
    rating: str
    description: str = ""
    tooltip: Optional[str] = None
    explanation: Optional[str] = None
    is_error: bool = False
    warnings: list[str] = field(default_factory=list)


@dataclass
class RenderedAudit:
    """A generic audit row (diagnostics, passed)."""
    id: str
    title: str
    rating: str
    description: str = ""
    display_value: str = ""
    explanation: Optional[str] = None
    error_message: Optional[str] = None
    warnings: list[str] = field(default_factory=list)


@dataclass
class TableHeading:
    key: str
    label: str
    value_type: str = "text"


@dataclass
class BudgetTable:
    """Projection of one budget audit's details.items, one row per item."""
    id: str
    headings: list[TableHeading]
    rows: list[list[Any]]


@dataclass
class AuditGroupSection:
    """A rendered clump: a labeled, ordered list of items."""
    key: str
    title: Optional[str] = None
    description: str = ""
    items: list[Any] = field(default_factory=list)


@dataclass
class MetricsSection(AuditGroupSection):
    disclaimer_html: str = ""
    score_calculator_url: Optional[str] = None
    calculator_label: str = ""
    toggle_label: str = ""


@dataclass
class OpportunitiesSection(AuditGroupSection):
    resource_column_label: str = ""
    savings_column_label: str = ""


@dataclass
class BudgetSection(AuditGroupSection):
    """Budget comparison tables; items are BudgetTable."""


@dataclass
class CategorySection:
    """The full performance category: header plus ordered sections."""
    id: str
    header: CategoryHeader
    sections: list[AuditGroupSection] = field(default_factory=list)
    filmstrip: Optional[dict[str, Any]] = None

    @property
    def section_keys(self) -> list[str]:
        return [s.key for s in self.sections]

    def section(self, key: str) -> Optional[AuditGroupSection]:
        return next((s for s in self.sections if s.key == key), None)

    def as_dict(self) -> dict[str, Any]:
        return asdict(self)
