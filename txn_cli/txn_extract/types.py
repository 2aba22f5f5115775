"""Dataclasses describing parsed transaction data."""

from __future__ import annotations

from collections.abc import Iterator
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Any

_CENTS = Decimal("0.01")


@dataclass(frozen=True, slots=True)
class ParsedTransaction:
    """A single statement entry resolved into structured fields.

    ``amount`` is signed: negative for debits/outflows, positive for credits.
    ``balance`` is the account balance after this transaction.
    """

    date: date
    description: str
    amount: Decimal
    balance: Decimal

    def to_dict(self) -> dict[str, Any]:
        return {
            "date": self.date.isoformat(),
            "description": self.description,
            "amount": format_money(self.amount),
            "balance": format_money(self.balance),
        }


@dataclass(frozen=True, slots=True)
class SkippedBlock:
    """A batch block that failed to parse, kept for diagnostics."""

    index: int
    preview: str
    reason: str


@dataclass(slots=True)
class BatchResult:
    """Container for the successes and skipped blocks of a batch parse."""

    transactions: list[ParsedTransaction] = field(default_factory=list)
    skipped: list[SkippedBlock] = field(default_factory=list)
    used_whole_text_fallback: bool = False

    def __iter__(self) -> Iterator[ParsedTransaction]:
        return iter(self.transactions)

    def __len__(self) -> int:
        return len(self.transactions)


def format_money(value: Decimal) -> str:
    """Render a decimal with two fraction digits (``-420.00``)."""
    return str(value.quantize(_CENTS))
