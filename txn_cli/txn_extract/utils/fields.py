"""Date, amount and balance normalisers shared by every format handler."""

from __future__ import annotations

import re
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from dateutil import parser as date_parser

from txn_cli.shared.exceptions import InvalidMonthError, MalformedValueError

CURRENCY_SYMBOL = "₹"

_MONTHS = ("jan", "feb", "mar", "apr", "may", "jun", "jul", "aug", "sep", "oct", "nov", "dec")

_DAY_MONTH_NAME_RE = re.compile(r"^(\d{1,2})\s+([A-Za-z]{3})\s+(\d{4})$")
_SLASH_DATE_RE = re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$")
_ISO_DATE_RE = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")

_STRIP_RE = re.compile(rf"[{CURRENCY_SYMBOL},\s]")

# Fills the parts dateutil finds missing ("Dec 2025" -> 2025-12-01).
_DATEUTIL_DEFAULT = datetime(2000, 1, 1)

# Labeled amount suffixes: letter-bounded so "2,999.00Dr" is a debit but "Address" is not.
_DEBIT_MARKER_RE = re.compile(r"(?<![a-z])(?:debited|debit|dr)(?![a-z])", re.IGNORECASE)
_TRAILING_MARKER_RE = re.compile(
    r"\s*(?:debited|debit|dr|credited|credit|cr)\.?\s*$", re.IGNORECASE
)


def parse_date(value: str) -> date:
    """Parse a statement date into a calendar date.

    Shapes are tried in order: ``11 Dec 2025``, ``12/11/2025`` (month/day/year,
    so this is December 11), ``2025-12-10``; anything else goes through
    :mod:`dateutil`'s generic parser, with missing parts taken from
    January 1, 2000 rather than today.
    """

    raw = (value or "").strip()

    match = _DAY_MONTH_NAME_RE.match(raw)
    if match:
        day, month_name, year = match.groups()
        try:
            month = _MONTHS.index(month_name.lower()) + 1
        except ValueError:
            raise InvalidMonthError(
                f"Invalid month: {month_name}", field="date", raw=raw
            ) from None
        return _build_date(int(year), month, int(day), raw)

    match = _SLASH_DATE_RE.match(raw)
    if match:
        month, day, year = match.groups()
        return _build_date(int(year), int(month), int(day), raw)

    match = _ISO_DATE_RE.match(raw)
    if match:
        year, month, day = match.groups()
        return _build_date(int(year), int(month), int(day), raw)

    if not raw:
        raise MalformedValueError("Failed to parse date: empty value", field="date", raw=raw)
    try:
        return date_parser.parse(raw, default=_DATEUTIL_DEFAULT).date()
    except (ValueError, OverflowError) as exc:
        raise MalformedValueError(f"Failed to parse date: {raw}", field="date", raw=raw) from exc


def _build_date(year: int, month: int, day: int, raw: str) -> date:
    try:
        return date(year, month, day)
    except ValueError as exc:
        raise MalformedValueError(
            f"Failed to parse date: {raw} ({exc})", field="date", raw=raw
        ) from exc


def parse_amount(value: str, is_debit: bool = False) -> Decimal:
    """Parse a transaction amount and apply the debit sign rule.

    An explicit minus sign and a debit flag are equivalent: either one makes
    the result ``-abs(value)``; otherwise the result is ``abs(value)``.
    """

    number = _parse_decimal(value, field="amount")
    if is_debit or number.is_signed():
        return -abs(number)
    return abs(number)


def parse_balance(value: str) -> Decimal:
    """Parse a running balance. No sign convention is applied."""
    return _parse_decimal(value, field="balance")


def has_debit_marker(text: str) -> bool:
    """Return True when ``text`` carries a standalone ``Dr``/``Debit``/``debited`` token."""
    return bool(_DEBIT_MARKER_RE.search(text or ""))


def strip_sign_marker(value: str) -> str:
    """Drop a trailing debit/credit keyword from a raw amount (``420.00 Dr``)."""
    return _TRAILING_MARKER_RE.sub("", value or "")


def _parse_decimal(value: str, *, field: str) -> Decimal:
    raw = value or ""
    cleaned = _STRIP_RE.sub("", raw)
    try:
        number = Decimal(cleaned)
    except InvalidOperation:
        raise MalformedValueError(
            f"Failed to parse {field}: {raw}", field=field, raw=raw
        ) from None
    if not number.is_finite():
        raise MalformedValueError(f"Failed to parse {field}: {raw}", field=field, raw=raw)
    return number
