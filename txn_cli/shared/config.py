"""Configuration loading utilities for txn-parse.

Settings are resolved in three layers: built-in defaults, the YAML config
file, then ``TXNPARSE_*`` environment variables.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Mapping

import yaml

from . import paths
from .exceptions import ConfigurationError

KNOWN_FORMATS: tuple[str, ...] = ("labeled", "inline", "compact")
OUTPUT_FORMATS: tuple[str, ...] = ("json", "csv")

_TRUE_WORDS = frozenset({"1", "true", "yes", "on"})
_FALSE_WORDS = frozenset({"0", "false", "no", "off"})


@dataclass(frozen=True, slots=True)
class ParsingSettings:
    """Parser behaviour toggles."""

    # When true, text matching no format marker fails instead of being
    # handed to the compact handler as a guess.
    strict_fallback: bool
    enabled_formats: tuple[str, ...]


@dataclass(frozen=True, slots=True)
class OutputSettings:
    """CLI output defaults."""

    format: str  # "json" or "csv"
    validate: bool


@dataclass(frozen=True, slots=True)
class AppConfig:
    """Top-level application configuration."""

    source_path: Path
    parsing: ParsingSettings
    output: OutputSettings

    def with_strict_fallback(self, strict: bool) -> AppConfig:
        """Return a copy with the strict fallback flag replaced."""
        return replace(self, parsing=replace(self.parsing, strict_fallback=strict))


DEFAULTS: dict[str, dict[str, Any]] = {
    "parsing": {"strict_fallback": False, "enabled_formats": KNOWN_FORMATS},
    "output": {"format": "json", "validate": True},
}

# (section, key) -> (environment variable, kind)
ENV_OVERRIDES: dict[tuple[str, str], tuple[str, str]] = {
    ("parsing", "strict_fallback"): ("TXNPARSE_STRICT_FALLBACK", "bool"),
    ("parsing", "enabled_formats"): ("TXNPARSE_ENABLED_FORMATS", "list"),
    ("output", "format"): ("TXNPARSE_OUTPUT_FORMAT", "str"),
    ("output", "validate"): ("TXNPARSE_OUTPUT_VALIDATE", "bool"),
}


def load_config(
    config_path: str | Path | None = None,
    env: Mapping[str, str] | None = None,
) -> AppConfig:
    """Load configuration from defaults, YAML file, and env overrides."""
    env = os.environ if env is None else env
    source = paths.expand_path(config_path) if config_path else paths.default_config_path(env=env)

    sections = {name: dict(values) for name, values in DEFAULTS.items()}
    for name, values in _read_config_file(source).items():
        if name not in sections:
            continue
        if not isinstance(values, Mapping):
            raise ConfigurationError(f"Section '{name}' in {source} must be a mapping.")
        sections[name].update(values)

    for (section, key), (env_key, kind) in ENV_OVERRIDES.items():
        if env_key in env:
            sections[section][key] = _env_value(env_key, env[env_key], kind)

    return AppConfig(
        source_path=source,
        parsing=_parse_parsing_section(sections["parsing"]),
        output=_parse_output_section(sections["output"]),
    )


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    with path.open("r", encoding="utf-8") as handle:
        try:
            data = yaml.safe_load(handle) or {}
        except yaml.YAMLError as exc:
            raise ConfigurationError(f"Config file at {path} is not valid YAML: {exc}") from exc
    if not isinstance(data, Mapping):
        raise ConfigurationError(f"Config file at {path} must define a mapping root object.")
    return dict(data)


def _env_value(env_key: str, raw: str, kind: str) -> Any:
    cleaned = raw.strip()
    if kind == "bool":
        lowered = cleaned.lower()
        if lowered in _TRUE_WORDS:
            return True
        if lowered in _FALSE_WORDS:
            return False
        raise ConfigurationError(
            f"Environment override {env_key} has invalid value '{raw}': expected true or false"
        )
    if kind == "list":
        return tuple(part.strip() for part in cleaned.split(",") if part.strip())
    return cleaned


def _parse_parsing_section(section: Mapping[str, Any]) -> ParsingSettings:
    raw_formats = section["enabled_formats"]
    if isinstance(raw_formats, str) or not isinstance(raw_formats, (list, tuple)):
        raise ConfigurationError("parsing.enabled_formats must be a list of format names.")
    enabled = tuple(str(name).strip().lower() for name in raw_formats)

    unknown = [name for name in enabled if name not in KNOWN_FORMATS]
    if unknown:
        raise ConfigurationError(
            "Unknown statement format(s) in parsing.enabled_formats: "
            + ", ".join(unknown)
            + f" (expected any of {', '.join(KNOWN_FORMATS)})"
        )
    if not enabled:
        raise ConfigurationError("parsing.enabled_formats must name at least one format.")
    return ParsingSettings(strict_fallback=bool(section["strict_fallback"]), enabled_formats=enabled)


def _parse_output_section(section: Mapping[str, Any]) -> OutputSettings:
    output_format = str(section["format"]).strip().lower()
    if output_format not in OUTPUT_FORMATS:
        raise ConfigurationError(
            f"Unsupported output.format '{output_format}' (expected json or csv)"
        )
    return OutputSettings(format=output_format, validate=bool(section["validate"]))
