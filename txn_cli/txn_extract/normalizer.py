"""Input normalisation shared by the dispatcher and the format handlers."""

from __future__ import annotations

import re
from dataclasses import dataclass

_LINE_BREAK_RE = re.compile(r"\r\n?")


@dataclass(frozen=True, slots=True)
class NormalizedText:
    """Statement text with unified line endings plus its non-empty lines."""

    text: str
    lines: tuple[str, ...]

    @property
    def is_single_line(self) -> bool:
        return len(self.lines) == 1 or "\n" not in self.text


def normalize_line_endings(text: str | None) -> str:
    """Collapse ``\\r\\n`` and bare ``\\r`` into ``\\n``."""
    return _LINE_BREAK_RE.sub("\n", text or "")


def normalize_text(text: str | None) -> NormalizedText:
    """Trim the text and split it into trimmed, non-empty lines.

    Never fails: empty or whitespace-only input yields an empty line tuple.
    """

    normalized = normalize_line_endings(text).strip()
    lines = tuple(line.strip() for line in normalized.split("\n") if line.strip())
    return NormalizedText(text=normalized, lines=lines)
