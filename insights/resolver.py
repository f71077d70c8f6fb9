"""
insights/resolver.py

Heuristic column resolution by header text.

A semantic role (revenue, city, ...) is mapped to a concrete header by
scanning a priority-ordered keyword list: for each keyword, the first header
whose lowercase form contains the lowercase keyword wins. Cell values are
never inspected.

The keyword tables below are the whole vocabulary the engine understands.
Bump ``KEYWORD_TABLE_VERSION`` whenever a list changes so downstream caches
keyed on resolution results can be invalidated.
"""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence

KEYWORD_TABLE_VERSION = "1"


class ColumnRole(str, Enum):
    """Semantic meaning a header can carry."""

    REVENUE = "revenue"
    TIER = "tier"
    CITY = "city"
    PAYMENT_METHOD = "payment_method"
    CHANNEL = "channel"
    SELLER = "seller"
    SELLER_NAME = "seller_name"
    BUYER_NAME = "buyer_name"
    EMAIL = "email"


KeywordTable = Mapping[ColumnRole, tuple[str, ...]]

LOCATION_KEYWORDS: tuple[str, ...] = ("city", "location", "region", "area", "state")

CUSTOMER_PURCHASES_KEYWORDS: KeywordTable = {
    ColumnRole.REVENUE: ("total", "revenue", "amount", "price", "sales", "spent"),
    ColumnRole.TIER: ("tier", "level", "membership", "segment"),
    ColumnRole.CITY: LOCATION_KEYWORDS,
    ColumnRole.PAYMENT_METHOD: ("method", "payment", "payment method", "pay type"),
}

# Only used for the top-buyers leaderboard, never for the report cards.
BUYER_NAME_KEYWORDS: tuple[str, ...] = ("name", "customer", "buyer", "client")

CUSTOMERS_KEYWORDS: KeywordTable = {
    ColumnRole.CITY: LOCATION_KEYWORDS,
    ColumnRole.EMAIL: ("email", "e-mail"),
}

PAYMENT_TICKETS_KEYWORDS: KeywordTable = {
    ColumnRole.REVENUE: ("total", "amount", "revenue", "price", "sales"),
    ColumnRole.PAYMENT_METHOD: ("method", "payment", "payment method", "type"),
    ColumnRole.CHANNEL: ("channel", "source", "in-person", "online", "sale type"),
    ColumnRole.SELLER: ("seller", "agent", "rep", "employee", "staff"),
    ColumnRole.CITY: LOCATION_KEYWORDS,
}

SELLERS_KEYWORDS: KeywordTable = {
    ColumnRole.REVENUE: ("total", "sales", "revenue", "amount"),
    ColumnRole.PAYMENT_METHOD: ("method", "sales method", "type"),
    ColumnRole.CITY: LOCATION_KEYWORDS,
    ColumnRole.SELLER_NAME: ("name", "seller", "agent", "rep", "employee"),
}


def resolve(headers: Sequence[str], keywords: Sequence[str]) -> str | None:
    """
    Return the first header matching the highest-priority keyword, or ``None``.

    >>> resolve(["Customer City", "Total Amount"], ["total", "revenue"])
    'Total Amount'
    """

    lowered = [(header, header.lower()) for header in headers]
    for keyword in keywords:
        needle = keyword.lower()
        for header, header_lower in lowered:
            if needle in header_lower:
                return header
    return None


def resolve_roles(
    headers: Sequence[str],
    table: KeywordTable,
) -> dict[ColumnRole, str | None]:
    """
    Resolve every role of *table* independently; unmatched roles map to ``None``.
    """

    return {role: resolve(headers, keywords) for role, keywords in table.items()}
