from __future__ import annotations

from pathlib import Path

import pytest

from txn_cli.shared import paths

LABELED_TEXT = """Date: 11 Dec 2025
Description: STARBUCKS COFFEE MUMBAI
Amount: -420.00
Balance after transaction: 18,420.50"""

LABELED_ONE_LINE_TEXT = (
    "Date: 11 Dec 2025 Description: STARBUCKS COFFEE MUMBAI Amount: -420.00 "
    "Balance after transaction: 18,420.50"
)

INLINE_TEXT = """Uber Ride * Airport Drop
12/11/2025 → ₹1,250.00 debited
Available Balance → ₹17,170.50"""

COMPACT_TEXT = (
    "txn123 2025-12-10 Amazon.in Order #403-1234567-8901234 ₹2,999.00 Dr Bal 14171.50 Shopping"
)


@pytest.fixture(autouse=True)
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point config discovery at an empty temp location and clear overrides."""

    for name in (
        paths.CONFIG_DIR_ENV,
        "TXNPARSE_STRICT_FALLBACK",
        "TXNPARSE_ENABLED_FORMATS",
        "TXNPARSE_OUTPUT_FORMAT",
        "TXNPARSE_OUTPUT_VALIDATE",
    ):
        monkeypatch.delenv(name, raising=False)
    config_path = tmp_path / "txnparse-home" / "config.yaml"
    monkeypatch.setenv(paths.CONFIG_FILE_ENV, str(config_path))
    return config_path


@pytest.fixture
def labeled_text() -> str:
    return LABELED_TEXT


@pytest.fixture
def labeled_one_line_text() -> str:
    return LABELED_ONE_LINE_TEXT


@pytest.fixture
def inline_text() -> str:
    return INLINE_TEXT


@pytest.fixture
def compact_text() -> str:
    return COMPACT_TEXT
