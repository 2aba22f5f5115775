"""Public entry points for parsing statement text into transactions."""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from txn_cli.shared.exceptions import NoTransactionsError, ParseError

from .formats import StatementFormat, detect_format, get_handler
from .normalizer import normalize_line_endings, normalize_text
from .types import BatchResult, ParsedTransaction, SkippedBlock

_LOGGER = logging.getLogger(__name__)

_BLOCK_SEPARATOR_RE = re.compile(r"\n\s*\n")
_PREVIEW_LENGTH = 50


def parse_transaction(
    text: str,
    *,
    strict_fallback: bool = False,
    allowed_formats: Iterable[str | StatementFormat] | None = None,
) -> ParsedTransaction:
    """Parse a single transaction from raw statement text.

    Three layouts are recognised (labeled fields, inline arrow lines and the
    compact one-liner). Raises a ``ParseError`` subclass describing which
    fields were missing or which value was malformed.
    """

    normalized = normalize_text(text)
    detection = detect_format(normalized, strict=strict_fallback, allowed_formats=allowed_formats)
    handler = get_handler(detection.format)
    return handler.parse(normalized)


def parse_batch(
    text: str,
    *,
    strict_fallback: bool = False,
    allowed_formats: Iterable[str | StatementFormat] | None = None,
) -> BatchResult:
    """Parse every blank-line separated block, collecting failures.

    A failing block is logged and recorded in ``BatchResult.skipped`` while
    the remaining blocks are still parsed. When no block succeeds the whole
    input is tried as one transaction before raising ``NoTransactionsError``.
    """

    allowed = tuple(allowed_formats) if allowed_formats is not None else None
    result = BatchResult()

    for index, block in enumerate(split_blocks(text)):
        try:
            transaction = parse_transaction(
                block, strict_fallback=strict_fallback, allowed_formats=allowed
            )
        except ParseError as exc:
            preview = block.strip()[:_PREVIEW_LENGTH]
            _LOGGER.warning("Failed to parse transaction block %d (%r...): %s", index, preview, exc)
            result.skipped.append(SkippedBlock(index=index, preview=preview, reason=str(exc)))
            continue
        result.transactions.append(transaction)

    if result.transactions:
        return result

    try:
        transaction = parse_transaction(text, strict_fallback=strict_fallback, allowed_formats=allowed)
    except ParseError as exc:
        raise NoTransactionsError(f"No transactions could be parsed: {exc}") from exc
    result.transactions.append(transaction)
    result.used_whole_text_fallback = True
    return result


def parse_multiple_transactions(
    text: str,
    *,
    strict_fallback: bool = False,
    allowed_formats: Iterable[str | StatementFormat] | None = None,
) -> list[ParsedTransaction]:
    """Parse blank-line separated transactions, skipping blocks that fail."""

    return parse_batch(
        text, strict_fallback=strict_fallback, allowed_formats=allowed_formats
    ).transactions


def split_blocks(text: str) -> list[str]:
    """Split text on blank lines, dropping blocks that are only whitespace."""

    normalized = normalize_line_endings(text)
    return [block for block in _BLOCK_SEPARATOR_RE.split(normalized) if block.strip()]
