"""Shared utilities for statement format handlers."""

from __future__ import annotations

from .fields import (
    CURRENCY_SYMBOL,
    has_debit_marker,
    parse_amount,
    parse_balance,
    parse_date,
    strip_sign_marker,
)

__all__ = [
    "CURRENCY_SYMBOL",
    "has_debit_marker",
    "parse_amount",
    "parse_balance",
    "parse_date",
    "strip_sign_marker",
]
