"""
insights/reports package.

Report routing
--------------
ReportType.CUSTOMER_PURCHASES -> CustomerPurchasesReport
ReportType.CUSTOMERS          -> CustomersReport
ReportType.PAYMENT_TICKETS    -> PaymentTicketsReport
ReportType.SELLERS            -> SellersReport
anything else                 -> GenericReport
"""

from __future__ import annotations

from insights.dataset import Dataset
from insights.reports.base import BaseReport, Card, ReportResult, ReportType
from insights.reports.customer_purchases import CustomerPurchasesReport
from insights.reports.customers import CustomersReport
from insights.reports.generic import GenericReport
from insights.reports.payment_tickets import PaymentTicketsReport
from insights.reports.sellers import SellersReport

_REPORT_REGISTRY: dict[ReportType, BaseReport] = {
    ReportType.CUSTOMER_PURCHASES: CustomerPurchasesReport(),
    ReportType.CUSTOMERS: CustomersReport(),
    ReportType.PAYMENT_TICKETS: PaymentTicketsReport(),
    ReportType.SELLERS: SellersReport(),
    ReportType.GENERIC: GenericReport(),
}


def get_report(report_type: "ReportType | str | None") -> BaseReport:
    return _REPORT_REGISTRY[ReportType.parse(report_type)]


def compute_report(dataset: Dataset, report_type: "ReportType | str | None") -> ReportResult:
    """
    Compute the report for *report_type*; unknown selectors fall back to Generic.
    """

    return get_report(report_type).compute(dataset)


__all__ = [
    "BaseReport",
    "Card",
    "ReportResult",
    "ReportType",
    "compute_report",
    "get_report",
]
