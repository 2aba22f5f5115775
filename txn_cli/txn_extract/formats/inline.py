"""Handler for inline statements joined by arrow or dash glyphs.

Example::

    Uber Ride * Airport Drop
    12/11/2025 → ₹1,250.00 debited
    Available Balance → ₹17,170.50

Lines are classified by content rather than position, so the three lines
may appear in any order.
"""

from __future__ import annotations

import re
from datetime import date
from decimal import Decimal

from ..normalizer import NormalizedText
from ..types import ParsedTransaction
from ..utils import parse_amount, parse_balance, parse_date
from .base import (
    MONTH_NAME_DATE_RE,
    SLASH_DATE_RE,
    FormatHandler,
    StatementFormat,
    contains_arrow,
    contains_inline_date,
    require_fields,
)

_AVAILABLE_BALANCE_RE = re.compile(r"Available\s+Balance", re.IGNORECASE)
_ARROW_AMOUNT_RE = re.compile(r"[→—–]\s*₹?([\d,]+\.\d{2})")
_FIRST_NUMBER_RE = re.compile(r"₹?(\d[\d,]*(?:\.\d+)?)")


class InlineFormatHandler(FormatHandler):
    format = StatementFormat.INLINE

    def parse(self, normalized: NormalizedText) -> ParsedTransaction:
        description = ""
        txn_date: date | None = None
        amount: Decimal | None = None
        balance: Decimal | None = None

        for line in normalized.lines:
            has_arrow = contains_arrow(line)
            has_date = contains_inline_date(line)
            is_balance_line = bool(_AVAILABLE_BALANCE_RE.search(line))

            if not has_arrow and not has_date and not is_balance_line:
                if not description:
                    description = line
            elif has_arrow and has_date:
                txn_date = parse_date(_extract_date(line))
                amount_match = _ARROW_AMOUNT_RE.search(line)
                if amount_match:
                    amount = parse_amount(amount_match.group(1), is_debit=_is_debit_line(line))
            elif is_balance_line:
                balance_match = _FIRST_NUMBER_RE.search(line)
                if balance_match:
                    balance = parse_balance(balance_match.group(1))

        require_fields(
            "inline",
            {"date": txn_date, "description": description, "amount": amount, "balance": balance},
        )
        return ParsedTransaction(
            date=txn_date,  # type: ignore[arg-type]
            description=description,
            amount=amount,  # type: ignore[arg-type]
            balance=balance,  # type: ignore[arg-type]
        )


def _is_debit_line(line: str) -> bool:
    # Plain substring test: "withdrawn" and "Dr" both count.
    lowered = line.lower()
    return "debited" in lowered or "dr" in lowered


def _extract_date(line: str) -> str:
    match = SLASH_DATE_RE.search(line) or MONTH_NAME_DATE_RE.search(line)
    return match.group(0) if match else ""
