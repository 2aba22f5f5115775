from __future__ import annotations

import pytest

from txn_cli.shared.exceptions import UnsupportedFormatError
from txn_cli.txn_extract.formats import REGISTRY, StatementFormat, detect_format, get_handler
from txn_cli.txn_extract.formats.base import FormatRegistry
from txn_cli.txn_extract.formats.compact import CompactFormatHandler
from txn_cli.txn_extract.formats.inline import InlineFormatHandler
from txn_cli.txn_extract.formats.labeled import LabeledFormatHandler
from txn_cli.txn_extract.normalizer import normalize_text


def _detect(text: str, **kwargs):
    return detect_format(normalize_text(text), **kwargs)


def test_detects_labeled(labeled_text: str, labeled_one_line_text: str) -> None:
    assert _detect(labeled_text).format is StatementFormat.LABELED
    assert _detect(labeled_one_line_text).format is StatementFormat.LABELED


def test_detects_inline(inline_text: str) -> None:
    detection = _detect(inline_text)
    assert detection.format is StatementFormat.INLINE
    assert detection.is_fallback is False


def test_detects_inline_from_date_alone() -> None:
    assert _detect("Paid on 11 Dec 2025 at Cafe").format is StatementFormat.INLINE
    assert _detect("Refund 1/2/2025").format is StatementFormat.INLINE


def test_detects_compact(compact_text: str) -> None:
    detection = _detect(compact_text)
    assert detection.format is StatementFormat.COMPACT
    assert detection.is_fallback is False


def test_date_label_wins_over_arrow_glyphs() -> None:
    text = "Date: 12/11/2025 → paid\nDescription: X\nAmount: 1.00\nBalance after: 2.00"
    assert _detect(text).format is StatementFormat.LABELED


def test_unmarked_text_falls_back_to_compact() -> None:
    detection = _detect("completely unrelated text")

    assert detection.format is StatementFormat.COMPACT
    assert detection.is_fallback is True


def test_strict_mode_rejects_unmarked_text() -> None:
    with pytest.raises(UnsupportedFormatError, match="Unsupported statement format"):
        _detect("completely unrelated text", strict=True)


def test_strict_mode_still_accepts_marked_text(compact_text: str) -> None:
    assert _detect(compact_text, strict=True).format is StatementFormat.COMPACT


def test_disabled_format_is_rejected(compact_text: str) -> None:
    with pytest.raises(UnsupportedFormatError, match="Compact statement but support is disabled"):
        _detect(compact_text, allowed_formats=["labeled", "inline"])


def test_allowed_formats_accepts_enum_members(inline_text: str) -> None:
    detection = _detect(inline_text, allowed_formats=[StatementFormat.INLINE])
    assert detection.format is StatementFormat.INLINE


def test_registry_maps_each_format_to_its_handler() -> None:
    assert isinstance(get_handler(StatementFormat.LABELED), LabeledFormatHandler)
    assert isinstance(get_handler(StatementFormat.INLINE), InlineFormatHandler)
    assert get_handler(StatementFormat.COMPACT).name == "compact"


def test_registry_rejects_duplicate_registration() -> None:
    registry = FormatRegistry([CompactFormatHandler])

    with pytest.raises(ValueError, match="already registered"):
        registry.register(CompactFormatHandler)

    class CustomCompact(CompactFormatHandler):
        pass

    registry.register(CustomCompact, allow_override=True)
    assert isinstance(registry.get(StatementFormat.COMPACT), CustomCompact)


def test_registry_lookup_of_unregistered_format() -> None:
    registry = FormatRegistry([LabeledFormatHandler])

    with pytest.raises(LookupError):
        registry.get(StatementFormat.INLINE)


def test_register_handler_replaces_global_handler(monkeypatch: pytest.MonkeyPatch) -> None:
    from txn_cli.txn_extract import formats

    monkeypatch.setattr(REGISTRY, "_handlers", dict(REGISTRY._handlers))

    class LoudCompact(CompactFormatHandler):
        pass

    with pytest.raises(ValueError):
        formats.register_handler(LoudCompact)

    formats.register_handler(LoudCompact, allow_override=True)
    assert isinstance(get_handler(StatementFormat.COMPACT), LoudCompact)
