"""Handler for statements using explicit field labels.

Example (multi-line)::

    Date: 11 Dec 2025
    Description: STARBUCKS COFFEE MUMBAI
    Amount: -420.00
    Balance after transaction: 18,420.50

The same labels may also arrive collapsed onto a single line, in which case
the text between consecutive labels is captured instead.
"""

from __future__ import annotations

import logging
import re
from datetime import date
from decimal import Decimal

from txn_cli.shared.exceptions import ParseError

from ..normalizer import NormalizedText
from ..types import ParsedTransaction
from ..utils import has_debit_marker, parse_amount, parse_balance, parse_date, strip_sign_marker
from .base import FormatHandler, StatementFormat, require_fields

_LOGGER = logging.getLogger(__name__)

_LINE_DATE_RE = re.compile(r"^Date:\s*(.+)", re.IGNORECASE)
_LINE_DESCRIPTION_RE = re.compile(r"^Description:\s*(.+)", re.IGNORECASE)
_LINE_AMOUNT_RE = re.compile(r"^Amount:\s*(.+)", re.IGNORECASE)
_LINE_BALANCE_RE = re.compile(r"^Balance\s+(?:after\s+transaction|after):\s*(.+)", re.IGNORECASE)
# OCR sometimes drops the colon ("Balance aner transaction 18,420.50").
_LINE_BALANCE_LOOSE_RE = re.compile(r"^Balance\b.*?\s([₹\d,.-]+)$", re.IGNORECASE)

_ONE_LINE_DATE_RE = re.compile(r"Date:\s*(.+?)\s*Description:", re.IGNORECASE)
_ONE_LINE_DESCRIPTION_RE = re.compile(r"Description:\s*(.+?)\s*Amount:", re.IGNORECASE)
_ONE_LINE_AMOUNT_RE = re.compile(r"Amount:\s*(.+?)\s*Balance", re.IGNORECASE)
_ONE_LINE_BALANCE_RE = re.compile(r"Balance.*:\s*([₹\d,.-]+)\s*$", re.IGNORECASE)
_ONE_LINE_BALANCE_LOOSE_RE = re.compile(r"Balance.*?\s+([₹\d,.-]+)\s*$", re.IGNORECASE)


class LabeledFormatHandler(FormatHandler):
    format = StatementFormat.LABELED

    def parse(self, normalized: NormalizedText) -> ParsedTransaction:
        if normalized.is_single_line:
            try:
                return self._parse_single_line(normalized.text)
            except ParseError as exc:
                _LOGGER.debug("Single-line labeled parse failed (%s); retrying per line", exc)
        return self._parse_lines(normalized.lines)

    def _parse_lines(self, lines: tuple[str, ...]) -> ParsedTransaction:
        txn_date: date | None = None
        description = ""
        amount: Decimal | None = None
        balance: Decimal | None = None
        loose_balance: str | None = None

        for line in lines:
            match = _LINE_DATE_RE.match(line)
            if match:
                txn_date = parse_date(match.group(1).strip())
                continue
            match = _LINE_DESCRIPTION_RE.match(line)
            if match:
                description = match.group(1).strip()
                continue
            match = _LINE_AMOUNT_RE.match(line)
            if match:
                amount = _parse_labeled_amount(match.group(1).strip())
                continue
            match = _LINE_BALANCE_RE.match(line)
            if match:
                balance = parse_balance(match.group(1).strip())
                continue
            match = _LINE_BALANCE_LOOSE_RE.match(line)
            if match and loose_balance is None:
                loose_balance = match.group(1)

        if balance is None and loose_balance is not None:
            balance = parse_balance(loose_balance)

        require_fields(
            "labeled",
            {"date": txn_date, "description": description, "amount": amount, "balance": balance},
        )
        return ParsedTransaction(
            date=txn_date,  # type: ignore[arg-type]
            description=description,
            amount=amount,  # type: ignore[arg-type]
            balance=balance,  # type: ignore[arg-type]
        )

    def _parse_single_line(self, text: str) -> ParsedTransaction:
        date_match = _ONE_LINE_DATE_RE.search(text)
        description_match = _ONE_LINE_DESCRIPTION_RE.search(text)
        amount_match = _ONE_LINE_AMOUNT_RE.search(text)
        balance_match = _ONE_LINE_BALANCE_RE.search(text) or _ONE_LINE_BALANCE_LOOSE_RE.search(text)

        require_fields(
            "single-line labeled",
            {
                "date": date_match,
                "description": description_match,
                "amount": amount_match,
                "balance": balance_match,
            },
        )
        return ParsedTransaction(
            date=parse_date(date_match.group(1).strip()),
            description=description_match.group(1).strip(),
            amount=_parse_labeled_amount(amount_match.group(1).strip()),
            balance=parse_balance(balance_match.group(1).strip()),
        )


def _parse_labeled_amount(raw: str) -> Decimal:
    return parse_amount(strip_sign_marker(raw), is_debit=has_debit_marker(raw))
