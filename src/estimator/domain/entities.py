"""Domain model entities for estimator.

These are immutable data classes. Every data model operation returns a new
snapshot instead of mutating one in place, so a Project can be handed to the
totals engine, the CSV codec and the store without defensive copies.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

ITEM_CATEGORIES = ("materials", "labor", "subcontract", "other")
DEFAULT_CATEGORY = "materials"
DEFAULT_UNIT = "ea"
DEFAULT_SECTION_NAME = "Section 1"


@dataclass(frozen=True)
class Item:
    """One line entry of an estimate.

    ``quantity`` is kept as the user typed it (a decimal string, possibly
    with a trailing dot); use ``estimator.utils.quantity.quantity_value`` for
    arithmetic.
    """

    id: str
    description: str = ""
    category: str = DEFAULT_CATEGORY
    quantity: str = "1"
    unit: str = DEFAULT_UNIT
    unit_cost: float = 0.0
    taxable: bool = True


@dataclass(frozen=True)
class Section:
    """Named, ordered group of items."""

    id: str
    name: str
    items: tuple[Item, ...] = ()
    notes: str = ""


@dataclass(frozen=True)
class Rates:
    """Markup percentages, applied literally (no clamping)."""

    tax_pct: float = 0.0
    overhead_pct: float = 0.0
    profit_pct: float = 0.0
    contingency_pct: float = 0.0


@dataclass(frozen=True)
class Project:
    """A single contractor estimate."""

    id: str
    name: str
    sections: tuple[Section, ...]
    rates: Rates
    created_at: datetime
    updated_at: datetime
    client_name: str = ""
    client_phone: str = ""
    client_email: str = ""
    estimate_number: str = ""
    estimate_date: str = ""
    notes: str = ""


@dataclass(frozen=True)
class Totals:
    """Output of the markup cascade, in the base currency unit."""

    subtotal: float = 0.0
    tax: float = 0.0
    overhead: float = 0.0
    profit: float = 0.0
    contingency: float = 0.0
    total: float = 0.0
    by_category: dict[str, float] = field(default_factory=dict)


@dataclass(frozen=True)
class EstimatorState:
    """Application state: the ordered project list and the active project."""

    projects: tuple[Project, ...] = ()
    active_id: Optional[str] = None

    @property
    def active(self) -> Optional[Project]:
        """Active project, falling back to the first one."""
        for project in self.projects:
            if project.id == self.active_id:
                return project
        return self.projects[0] if self.projects else None

    def get(self, project_id: str) -> Optional[Project]:
        """Get project by ID."""
        for project in self.projects:
            if project.id == project_id:
                return project
        return None


@dataclass(frozen=True)
class ImportResult:
    """Items parsed from an exported CSV."""

    items: tuple[Item, ...] = ()
    header_found: bool = False


@dataclass(frozen=True)
class SaveReport:
    """Outcome of saving a batch of projects one by one."""

    saved: tuple[str, ...] = ()
    failed: tuple[str, ...] = ()
    snapshot_written: bool = False
