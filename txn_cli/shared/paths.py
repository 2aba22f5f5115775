"""Locations of txn-parse configuration files."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping

DEFAULT_CONFIG_DIR = "~/.txnparse"
DEFAULT_CONFIG_FILE = "config.yaml"

CONFIG_DIR_ENV = "TXNPARSE_CONFIG_DIR"
CONFIG_FILE_ENV = "TXNPARSE_CONFIG_PATH"


def expand_path(value: str | os.PathLike[str]) -> Path:
    """Expand ``~`` and ``$VARS`` in ``value``."""
    return Path(os.path.expandvars(os.fspath(value))).expanduser()


def get_config_dir(create: bool = False, env: Mapping[str, str] | None = None) -> Path:
    """Return the configuration directory, optionally creating it."""
    env = os.environ if env is None else env
    path = expand_path(env.get(CONFIG_DIR_ENV) or DEFAULT_CONFIG_DIR)
    if create:
        path.mkdir(parents=True, exist_ok=True)
    return path


def default_config_path(create_parents: bool = False, env: Mapping[str, str] | None = None) -> Path:
    """Return the config file txn-parse reads when ``--config`` is not given.

    ``TXNPARSE_CONFIG_PATH`` names the file directly and wins over
    ``TXNPARSE_CONFIG_DIR``; otherwise ``config.yaml`` inside the config
    directory is used.
    """

    env = os.environ if env is None else env
    override = env.get(CONFIG_FILE_ENV)
    if override:
        path = expand_path(override)
    else:
        path = get_config_dir(env=env) / DEFAULT_CONFIG_FILE
    if create_parents:
        path.parent.mkdir(parents=True, exist_ok=True)
    return path
