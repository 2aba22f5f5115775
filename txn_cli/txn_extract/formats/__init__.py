"""Statement format detection and handler lookup."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from txn_cli.shared.exceptions import UnsupportedFormatError

from ..normalizer import NormalizedText
from .base import (
    ISO_DATE_RE,
    FormatDetection,
    FormatHandler,
    FormatRegistry,
    StatementFormat,
    contains_arrow,
    contains_inline_date,
)
from .compact import CompactFormatHandler
from .inline import InlineFormatHandler
from .labeled import LabeledFormatHandler

REGISTRY = FormatRegistry([LabeledFormatHandler, InlineFormatHandler, CompactFormatHandler])

_LOGGER = logging.getLogger(__name__)

_DATE_LABEL_RE = re.compile(r"Date:", re.IGNORECASE)
_TXN_MARKER_RE = re.compile(r"txn", re.IGNORECASE)

FRIENDLY_NAMES: dict[StatementFormat, str] = {
    StatementFormat.LABELED: "Labeled",
    StatementFormat.INLINE: "Inline/Arrow",
    StatementFormat.COMPACT: "Compact",
}

__all__ = (
    "REGISTRY",
    "FRIENDLY_NAMES",
    "FormatDetection",
    "FormatHandler",
    "StatementFormat",
    "detect_format",
    "get_handler",
    "register_handler",
)


def detect_format(
    normalized: NormalizedText,
    *,
    strict: bool = False,
    allowed_formats: Iterable[str | StatementFormat] | None = None,
) -> FormatDetection:
    """Choose the statement format for ``normalized`` text.

    The checks run in a fixed order: an explicit ``Date:`` label wins over
    bare date patterns because the label is unambiguous. Text matching no
    marker is handed to the compact handler unless ``strict`` is set.
    """

    text = normalized.text
    if _DATE_LABEL_RE.search(text):
        detection = FormatDetection(StatementFormat.LABELED, "found a 'Date:' label")
    elif contains_arrow(text) or contains_inline_date(text):
        detection = FormatDetection(
            StatementFormat.INLINE, "found an arrow/dash glyph or a DD/MM/YYYY / DD Mon YYYY date"
        )
    elif ISO_DATE_RE.search(text) and _TXN_MARKER_RE.search(text):
        detection = FormatDetection(StatementFormat.COMPACT, "found an ISO date and a txn marker")
    else:
        if strict:
            raise UnsupportedFormatError(
                "Unsupported statement format: no Labeled, Inline/Arrow or Compact markers found"
            )
        detection = FormatDetection(
            StatementFormat.COMPACT, "no format markers found; guessing compact", is_fallback=True
        )
        _LOGGER.debug("No format markers found; falling back to the compact handler")

    if allowed_formats is not None:
        allowed = {StatementFormat(str(getattr(fmt, "value", fmt)).lower()) for fmt in allowed_formats}
        if detection.format not in allowed:
            raise UnsupportedFormatError(
                f"Detected {FRIENDLY_NAMES[detection.format]} statement but support is disabled"
                " via configuration."
            )
    return detection


def get_handler(fmt: StatementFormat) -> FormatHandler:
    """Return a fresh handler instance for ``fmt``."""

    return REGISTRY.get(fmt)


def register_handler(handler: type[FormatHandler], *, allow_override: bool = False) -> None:
    """Register a handler type, optionally replacing the current one for its format."""

    REGISTRY.register(handler, allow_override=allow_override)
