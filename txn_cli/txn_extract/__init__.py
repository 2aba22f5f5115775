"""Transaction extraction from bank statement text."""

from __future__ import annotations

from .parser import parse_batch, parse_multiple_transactions, parse_transaction, split_blocks
from .types import BatchResult, ParsedTransaction, SkippedBlock

__all__ = [
    "BatchResult",
    "ParsedTransaction",
    "SkippedBlock",
    "parse_batch",
    "parse_multiple_transactions",
    "parse_transaction",
    "split_blocks",
]
