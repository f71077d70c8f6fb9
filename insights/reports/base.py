"""
insights/reports/base.py

Shared types and abstract base class for report variants.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Mapping

from insights.aggregation import Breakdown
from insights.dataset import Dataset
from insights.errors import UnresolvedColumn
from insights.resolver import ColumnRole, KeywordTable, resolve_roles

logger = logging.getLogger(__name__)


class ReportType(str, Enum):
    """
    Closed set of report shapes. Unrecognised selectors map to ``GENERIC``.
    """

    CUSTOMER_PURCHASES = "customer_purchases"
    CUSTOMERS = "customers"
    PAYMENT_TICKETS = "payment_tickets"
    SELLERS = "sellers"
    GENERIC = "generic"

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @classmethod
    def parse(cls, selector: "str | ReportType | None") -> "ReportType":
        """
        Accept the display label (``"Customer Purchases"``) or the enum value
        (``"customer_purchases"``) in any case.
        """

        if isinstance(selector, ReportType):
            return selector
        normalized = " ".join(
            (selector or "").replace("_", " ").replace("-", " ").lower().split()
        )
        for member in cls:
            if normalized in (member.value.replace("_", " "), member.label.lower()):
                return member
        return cls.GENERIC


_LABELS: dict[ReportType, str] = {
    ReportType.CUSTOMER_PURCHASES: "Customer Purchases",
    ReportType.CUSTOMERS: "Customers",
    ReportType.PAYMENT_TICKETS: "Payment Tickets",
    ReportType.SELLERS: "Sellers",
    ReportType.GENERIC: "Generic",
}

_DESCRIPTIONS: dict[ReportType, str] = {
    ReportType.CUSTOMER_PURCHASES: (
        "Analyze purchasing patterns, revenue by tier, geographic distribution, "
        "and identify top buyers."
    ),
    ReportType.CUSTOMERS: (
        "Analyze customer demographics, geographic distribution, and contact information."
    ),
    ReportType.PAYMENT_TICKETS: (
        "Analyze payment methods, in-person vs online sales, and seller performance by location."
    ),
    ReportType.SELLERS: (
        "Analyze seller performance, sales by method, and identify top and "
        "underperforming locations."
    ),
    ReportType.GENERIC: "Row count overview for any tabular file.",
}


@dataclass(frozen=True)
class Card:
    """One summary card: a label and its pre-formatted value."""

    label: str
    value: str


@dataclass(frozen=True)
class ReportResult:
    """
    Render-ready output of one report computation.

    Attributes
    ----------
    report_type:
        Variant that produced the result.
    cards:
        Ordered summary cards.
    breakdowns:
        Named group-key -> number maps (counts or sums).
    columns:
        Every role the variant asked for, mapped to the resolved header or
        ``None``. Downstream views reuse it instead of resolving again.
    metrics:
        Raw scalar values behind the cards.
    unresolved:
        Roles no header matched; the matching cards/breakdowns are degraded.
    """

    report_type: ReportType
    cards: tuple[Card, ...]
    breakdowns: Mapping[str, Breakdown] = field(default_factory=dict)
    columns: Mapping[ColumnRole, str | None] = field(default_factory=dict)
    metrics: Mapping[str, float] = field(default_factory=dict)
    unresolved: tuple[UnresolvedColumn, ...] = ()

    def column(self, role: ColumnRole) -> str | None:
        return self.columns.get(role)

    def card(self, label: str) -> Card | None:
        for card in self.cards:
            if card.label == label:
                return card
        return None

    def to_dict(self) -> dict[str, Any]:
        return {
            "report_type": self.report_type.value,
            "cards": [{"label": card.label, "value": card.value} for card in self.cards],
            "breakdowns": {name: dict(values) for name, values in self.breakdowns.items()},
            "columns": {role.value: header for role, header in self.columns.items()},
            "metrics": dict(self.metrics),
            "unresolved": [item.to_dict() for item in self.unresolved],
        }


class BaseReport(ABC):
    """
    Contract for report variants.

    Subclasses declare their ``keywords`` table and build cards and
    breakdowns in :meth:`build`. No I/O and no mutation of the dataset;
    :meth:`compute` never raises for a valid dataset.
    """

    report_type: ReportType = ReportType.GENERIC
    keywords: KeywordTable = {}

    def compute(self, dataset: Dataset) -> ReportResult:
        columns = resolve_roles(dataset.headers, self.keywords)
        unresolved = tuple(
            UnresolvedColumn(role=role.value, keywords=tuple(self.keywords[role]))
            for role, header in columns.items()
            if header is None
        )
        for item in unresolved:
            logger.info(
                "Unresolved column report=%s role=%s keywords=%s",
                self.report_type.value,
                item.role,
                ",".join(item.keywords),
            )

        cards, breakdowns, metrics = self.build(dataset, columns)
        return ReportResult(
            report_type=self.report_type,
            cards=tuple(cards),
            breakdowns=breakdowns,
            columns=columns,
            metrics=metrics,
            unresolved=unresolved,
        )

    @abstractmethod
    def build(
        self,
        dataset: Dataset,
        columns: Mapping[ColumnRole, str | None],
    ) -> tuple[list[Card], dict[str, Breakdown], dict[str, float]]:
        """
        Compute cards, breakdowns and raw metrics from resolved *columns*.

        Returns
        -------
        tuple
            ``(cards, breakdowns, metrics)``.
        """


def average(total: float, count: int) -> float:
    """``total / count``; ``0.0`` when *count* is zero."""
    if count == 0:
        return 0.0
    return total / count
