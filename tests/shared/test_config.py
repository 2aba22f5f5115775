from __future__ import annotations

from pathlib import Path

import pytest

from txn_cli.shared import paths
from txn_cli.shared.config import KNOWN_FORMATS, AppConfig, load_config
from txn_cli.shared.exceptions import ConfigurationError


def test_load_config_defaults(isolated_config: Path) -> None:
    cfg = load_config()

    assert isinstance(cfg, AppConfig)
    assert cfg.source_path == isolated_config
    assert cfg.parsing.strict_fallback is False
    assert cfg.parsing.enabled_formats == KNOWN_FORMATS
    assert cfg.output.format == "json"
    assert cfg.output.validate is True


def test_load_config_from_yaml(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(
        """
        parsing:
          strict_fallback: true
          enabled_formats: [Labeled, inline]
        output:
          format: CSV
        """,
        encoding="utf-8",
    )

    cfg = load_config(config_path=cfg_file)

    assert cfg.source_path == cfg_file
    assert cfg.parsing.strict_fallback is True
    assert cfg.parsing.enabled_formats == ("labeled", "inline")
    assert cfg.output.format == "csv"
    assert cfg.output.validate is True


def test_load_config_uses_config_dir_env(tmp_path: Path) -> None:
    cfg_dir = tmp_path / "cfg"
    cfg_dir.mkdir()
    (cfg_dir / "config.yaml").write_text("output:\n  validate: false\n", encoding="utf-8")

    cfg = load_config(env={paths.CONFIG_DIR_ENV: str(cfg_dir)})

    assert cfg.source_path == cfg_dir / "config.yaml"
    assert cfg.output.validate is False


def test_load_config_env_overrides(tmp_path: Path) -> None:
    env = {
        paths.CONFIG_FILE_ENV: str(tmp_path / "missing.yaml"),
        "TXNPARSE_STRICT_FALLBACK": "yes",
        "TXNPARSE_ENABLED_FORMATS": "compact, labeled",
        "TXNPARSE_OUTPUT_FORMAT": "csv",
        "TXNPARSE_OUTPUT_VALIDATE": "off",
    }

    cfg = load_config(env=env)

    assert cfg.parsing.strict_fallback is True
    assert cfg.parsing.enabled_formats == ("compact", "labeled")
    assert cfg.output.format == "csv"
    assert cfg.output.validate is False


def test_env_override_beats_file(tmp_path: Path) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text("output:\n  format: csv\n", encoding="utf-8")

    cfg = load_config(config_path=cfg_file, env={"TXNPARSE_OUTPUT_FORMAT": "json"})

    assert cfg.output.format == "json"


def test_with_strict_fallback_returns_copy() -> None:
    cfg = load_config()
    strict = cfg.with_strict_fallback(True)

    assert strict.parsing.strict_fallback is True
    assert cfg.parsing.strict_fallback is False
    assert strict.parsing.enabled_formats == cfg.parsing.enabled_formats


def test_invalid_boolean_override() -> None:
    with pytest.raises(ConfigurationError, match="TXNPARSE_STRICT_FALLBACK"):
        load_config(env={"TXNPARSE_STRICT_FALLBACK": "maybe"})


@pytest.mark.parametrize(
    "body, message",
    [
        ("parsing:\n  enabled_formats: [labeled, pdf]\n", "Unknown statement format"),
        ("parsing:\n  enabled_formats: []\n", "at least one format"),
        ("output:\n  format: xml\n", "Unsupported output.format"),
        ("- just\n- a list\n", "mapping root"),
        ("parsing: [unclosed\n", "not valid YAML"),
    ],
)
def test_invalid_config_files(tmp_path: Path, body: str, message: str) -> None:
    cfg_file = tmp_path / "config.yaml"
    cfg_file.write_text(body, encoding="utf-8")

    with pytest.raises(ConfigurationError, match=message):
        load_config(config_path=cfg_file)
