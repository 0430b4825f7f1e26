"""Configuration sources for Photo Sync.

A source is any read-only mapping of variable names to string values. The
loader only ever calls ``get`` and iterates over keys, so plain dicts work
as well as ``os.environ``.
"""

import logging
import os
from collections import ChainMap
from collections.abc import Mapping
from pathlib import Path

from dotenv import dotenv_values, load_dotenv

from .errors import ConfigError, ConfigErrorKind

logger = logging.getLogger(__name__)


def environment_source(dotenv_path: str | Path | None = None) -> Mapping[str, str]:
    """Return the process environment, after loading a .env file into it.

    Variables already present in the environment are never overridden. An
    explicit ``dotenv_path`` must point to an existing file.
    """
    if dotenv_path is not None and not Path(dotenv_path).is_file():
        raise ConfigError(
            ConfigErrorKind.SOURCE_ERROR, str(dotenv_path), "env file not found"
        )

    if load_dotenv(dotenv_path=dotenv_path, override=False):
        logger.debug("Loaded .env file into environment")
    return os.environ


def dotenv_source(path: str | Path) -> Mapping[str, str]:
    """Read a .env file without touching the process environment."""
    path = Path(path)
    if not path.is_file():
        raise ConfigError(
            ConfigErrorKind.SOURCE_ERROR, str(path), "env file not found"
        )

    # Keys declared without a value come back as None
    values = dotenv_values(path)
    return {key: value for key, value in values.items() if value is not None}


def layered_source(*sources: Mapping[str, str]) -> Mapping[str, str]:
    """Combine sources; earlier sources take precedence."""
    return ChainMap(*sources)
