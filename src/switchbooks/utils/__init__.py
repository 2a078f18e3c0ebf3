"""Utility functions for switchbooks."""

from switchbooks.utils.account_resolver import (
    resolve_account,
    resolve_chart_account,
    resolve_payee,
)
from switchbooks.utils.amount_parser import parse_amount, parse_non_negative_amount
from switchbooks.utils.date_parser import get_date_range, parse_date

__all__ = [
    "get_date_range",
    "parse_amount",
    "parse_date",
    "parse_non_negative_amount",
    "resolve_account",
    "resolve_chart_account",
    "resolve_payee",
]
