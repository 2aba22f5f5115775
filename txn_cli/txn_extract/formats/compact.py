"""Handler for compact single-line statements.

Example::

    txn123 2025-12-10 Amazon.in Order #403-1234567-8901234 ₹2,999.00 Dr Bal 14171.50 Shopping

The whole normalized text is searched as one unit. This handler is also the
dispatcher's last resort for text with no recognisable structure.
"""

from __future__ import annotations

import re

from txn_cli.shared.exceptions import MissingFieldError

from ..normalizer import NormalizedText
from ..types import ParsedTransaction
from ..utils import parse_amount, parse_balance, parse_date
from .base import ISO_DATE_RE, FormatHandler, StatementFormat

_AMOUNT_RE = re.compile(r"₹([\d,]+\.\d{2})\s*(?:debited|debit|dr)?", re.IGNORECASE)
_BALANCE_RE = re.compile(r"\b(?:Balance|Bal)\b[.:]?\s*₹?\s*(\d[\d,]*(?:\.\d+)?)", re.IGNORECASE)
# Anywhere in the text, including inside words ("Withdrawal").
_DEBIT_RE = re.compile(r"Dr|Debit|debited", re.IGNORECASE)
_TXN_ID_RE = re.compile(r"^txn\w*\s*", re.IGNORECASE)
_WHITESPACE_RE = re.compile(r"\s+")


class CompactFormatHandler(FormatHandler):
    format = StatementFormat.COMPACT

    def parse(self, normalized: NormalizedText) -> ParsedTransaction:
        text = normalized.text

        date_match = ISO_DATE_RE.search(text)
        if not date_match:
            raise _missing("date", "Failed to parse compact format: no date found (expected YYYY-MM-DD)")
        txn_date = parse_date(date_match.group(0))

        amount_match = _AMOUNT_RE.search(text)
        if not amount_match:
            raise _missing("amount", "Failed to parse compact format: no amount found", found=("date",))
        amount = parse_amount(amount_match.group(1), is_debit=bool(_DEBIT_RE.search(text)))

        balance_match = _BALANCE_RE.search(text)
        if not balance_match:
            raise _missing(
                "balance",
                "Failed to parse compact format: no balance found",
                found=("date", "amount"),
            )
        balance = parse_balance(balance_match.group(1))

        description = text[date_match.end() : amount_match.start()].strip()
        description = _TXN_ID_RE.sub("", description).strip()
        description = _WHITESPACE_RE.sub(" ", description)
        if not description:
            raise _missing(
                "description",
                "Failed to parse compact format: no description found",
                found=("date", "amount", "balance"),
            )

        return ParsedTransaction(date=txn_date, description=description, amount=amount, balance=balance)


def _missing(field: str, message: str, *, found: tuple[str, ...] = ()) -> MissingFieldError:
    return MissingFieldError(message, found=found, missing=(field,))
