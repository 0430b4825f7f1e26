"""Configuration module for Photo Sync."""

from .errors import ConfigError, ConfigErrorKind
from .loader import ConfigLoader, get_paired_synology_account, load_config
from .models import AccountPairing, Config, GoogleAccountConfig, SynologyAccountConfig
from .sources import dotenv_source, environment_source, layered_source

__all__ = [
    "AccountPairing",
    "Config",
    "ConfigError",
    "ConfigErrorKind",
    "ConfigLoader",
    "GoogleAccountConfig",
    "SynologyAccountConfig",
    "dotenv_source",
    "environment_source",
    "get_paired_synology_account",
    "layered_source",
    "load_config",
]
