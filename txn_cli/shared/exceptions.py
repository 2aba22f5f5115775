"""Project-wide custom exceptions."""

from __future__ import annotations

from collections.abc import Iterable


class TxnCliError(Exception):
    """Base exception for the transaction parsing toolkit."""


class ConfigurationError(TxnCliError):
    """Raised when configuration loading or validation fails."""


class ParseError(TxnCliError):
    """Raised when statement text cannot be turned into a transaction.

    Parse failures reflect malformed input rather than a system fault, so
    callers exposing the parser over a request boundary should report them
    as client errors.
    """


class UnsupportedFormatError(ParseError):
    """Raised when the text matches no enabled statement format."""


class MissingFieldError(ParseError):
    """Raised when required fields cannot be located in the chosen format."""

    def __init__(
        self,
        message: str,
        *,
        found: Iterable[str] = (),
        missing: Iterable[str] = (),
    ) -> None:
        super().__init__(message)
        self.found = tuple(found)
        self.missing = tuple(missing)


class MalformedValueError(ParseError):
    """Raised when a located field cannot be converted to its semantic type."""

    def __init__(self, message: str, *, field: str, raw: str) -> None:
        super().__init__(message)
        self.field = field
        self.raw = raw


class InvalidMonthError(MalformedValueError):
    """Raised when a three-letter month token is not in the month table."""


class NoTransactionsError(ParseError):
    """Raised when batch parsing produced no transactions at all."""
