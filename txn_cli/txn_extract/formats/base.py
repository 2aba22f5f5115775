"""Base classes and shared patterns for statement format handlers."""

from __future__ import annotations

import enum
import re
from abc import ABC, abstractmethod
from collections.abc import Iterable, Mapping
from dataclasses import dataclass

from txn_cli.shared.exceptions import MissingFieldError

from ..normalizer import NormalizedText
from ..types import ParsedTransaction

ARROW_GLYPHS = ("→", "—", "–")

SLASH_DATE_RE = re.compile(r"\d{1,2}/\d{1,2}/\d{4}")
MONTH_NAME_DATE_RE = re.compile(r"\d{1,2}\s+[A-Za-z]{3}\s+\d{4}")
ISO_DATE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")


class StatementFormat(str, enum.Enum):
    """Closed set of statement layouts the dispatcher can choose from."""

    LABELED = "labeled"
    INLINE = "inline"
    COMPACT = "compact"


@dataclass(frozen=True, slots=True)
class FormatDetection:
    """Outcome of format detection for a piece of statement text."""

    format: StatementFormat
    reason: str
    # True when no structural marker matched and the format is a guess.
    is_fallback: bool = False


class FormatHandler(ABC):
    """Abstract base for format-specific transaction extractors."""

    format: StatementFormat

    @property
    def name(self) -> str:
        return self.format.value

    @abstractmethod
    def parse(self, normalized: NormalizedText) -> ParsedTransaction:
        """Extract a transaction or raise a ``ParseError`` subclass."""


class FormatRegistry:
    """Strategy table mapping each statement format to its handler type."""

    def __init__(self, handlers: Iterable[type[FormatHandler]]) -> None:
        self._handlers: dict[StatementFormat, type[FormatHandler]] = {}
        for handler in handlers:
            self.register(handler)

    def register(
        self,
        handler: type[FormatHandler],
        *,
        allow_override: bool = False,
    ) -> None:
        fmt = handler.format
        if fmt in self._handlers and not allow_override:
            raise ValueError(f"A handler is already registered for the {fmt.value} format")
        self._handlers[fmt] = handler

    def get(self, fmt: StatementFormat) -> FormatHandler:
        try:
            handler_cls = self._handlers[fmt]
        except KeyError:
            raise LookupError(f"No handler registered for the {fmt.value} format") from None
        return handler_cls()


def contains_arrow(text: str) -> bool:
    return any(glyph in text for glyph in ARROW_GLYPHS)


def contains_inline_date(text: str) -> bool:
    return bool(SLASH_DATE_RE.search(text) or MONTH_NAME_DATE_RE.search(text))


def require_fields(label: str, fields: Mapping[str, object]) -> None:
    """Raise ``MissingFieldError`` unless every field resolved to a value.

    ``None`` and empty strings count as missing; the message lists both the
    fields that were found and those that were not.
    """

    found = [name for name, value in fields.items() if value not in (None, "")]
    missing = [name for name in fields if name not in found]
    if not missing:
        return
    raise MissingFieldError(
        f"Failed to parse {label} format. Missing fields: {', '.join(missing)}"
        f" (found: {', '.join(found) or 'none'})",
        found=found,
        missing=missing,
    )
