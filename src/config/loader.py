"""Configuration loader for Photo Sync."""

import logging
import re
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ValidationError

from ..utils.logging import setup_logging
from .errors import ConfigError, ConfigErrorKind
from .models import AccountPairing, Config, GoogleAccountConfig, SynologyAccountConfig
from .sources import environment_source

logger = logging.getLogger(__name__)

DEFAULT_GOOGLE_ACCOUNTS = "account_1,account_2"
DEFAULT_HOST = "localhost"
DEFAULT_PORT = 5000
DEFAULT_PHOTO_PATH = "/photo"
DEFAULT_STORAGE_THRESHOLD = 80
DEFAULT_DATABASE_PATH = "./data/photos.db"
DEFAULT_LOG_LEVEL = "info"
LEGACY_ACCOUNT_NAME = "NAS"

_LEGACY_SLOT = re.compile(r"^SYNOLOGY_ACCOUNT_([1-9]\d*)_NAME$")
_PAIRING_SLOT = re.compile(r"^PAIRING_([1-9]\d*)_(?:GOOGLE|SYNOLOGY)$")


class ConfigLoader:
    """Load configuration from a mapping of environment variables."""

    def __init__(
        self,
        source: Mapping[str, str] | None = None,
        dotenv_path: str | Path | None = None,
    ) -> None:
        """Initialize config loader.

        Args:
            source: Mapping to read variables from. If None, the process
                    environment is used after loading a .env file into it.
            dotenv_path: .env file to load when falling back to the process
                         environment. If None, python-dotenv searches for one.
        """
        self.source = source
        self.dotenv_path = dotenv_path

    def load(self) -> Config:
        """Build the configuration from the source."""
        env = self.source
        if env is None:
            env = environment_source(self.dotenv_path)

        synology_accounts = self._load_synology_accounts(env)
        google_accounts = self._load_google_accounts(env)
        pairings = self._load_pairings(env, google_accounts, synology_accounts)

        config = self._build(
            Config,
            "config",
            google_accounts=google_accounts,
            synology_accounts=synology_accounts,
            account_pairings=pairings,
            storage_threshold_percent=self._get_int(
                env, "STORAGE_THRESHOLD_PERCENT", DEFAULT_STORAGE_THRESHOLD,
                minimum=0, maximum=100,
            ),
            database_path=Path(self._get(env, "DATABASE_PATH", DEFAULT_DATABASE_PATH)),
            dry_run=self._get_bool(env, "DRY_RUN"),
            log_level=self._get(env, "LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )

        logger.debug(
            "Loaded %d Google account(s), %d Synology account(s), %d pairing(s)",
            len(config.google_accounts),
            len(config.synology_accounts),
            len(config.account_pairings),
        )
        return config

    # ===== Synology accounts =====

    def _load_synology_accounts(self, env: Mapping[str, str]) -> list[SynologyAccountConfig]:
        """Resolve Synology accounts; the first tier that yields any wins."""
        global_host = self._get(env, "SYNOLOGY_HOST", DEFAULT_HOST)
        global_port = self._get_port(env, "SYNOLOGY_PORT", DEFAULT_PORT)
        global_ssl = self._get_bool(env, "SYNOLOGY_SECURE")

        accounts = self._load_named_accounts(env, global_host, global_port, global_ssl)
        if accounts:
            logger.debug("Synology accounts resolved from SYNOLOGY_ACCOUNTS")
            return accounts

        accounts = self._load_legacy_accounts(env, global_host, global_port, global_ssl)
        if accounts:
            logger.debug("Synology accounts resolved from numbered SYNOLOGY_ACCOUNT_* slots")
            return accounts

        if self._get(env, "SYNOLOGY_HOST"):
            logger.debug("Synology account resolved from SYNOLOGY_HOST")
            return [
                self._build(
                    SynologyAccountConfig,
                    LEGACY_ACCOUNT_NAME,
                    name=LEGACY_ACCOUNT_NAME,
                    host=global_host,
                    port=global_port,
                    username=self._get(env, "SYNOLOGY_USERNAME", ""),
                    password=self._get(env, "SYNOLOGY_PASSWORD", ""),
                    photo_library_path=self._get(
                        env, "SYNOLOGY_PHOTO_LIBRARY_PATH", DEFAULT_PHOTO_PATH
                    ),
                    use_ssl=self._get_bool(env, "SYNOLOGY_USE_SSL"),
                )
            ]

        logger.debug("No Synology accounts configured")
        return []

    def _load_named_accounts(
        self,
        env: Mapping[str, str],
        global_host: str,
        global_port: int,
        global_ssl: bool,
    ) -> list[SynologyAccountConfig]:
        """Load accounts listed in SYNOLOGY_ACCOUNTS (SYNOLOGY_{NAME}_* vars)."""
        accounts = []
        for name in self._split_names(self._get(env, "SYNOLOGY_ACCOUNTS", "")):

            def key(field: str) -> str:
                return self._account_key(env, name, field)

            accounts.append(
                self._build(
                    SynologyAccountConfig,
                    name,
                    name=name,
                    host=self._get(env, key("HOST"), global_host),
                    port=self._get_port(env, key("PORT"), global_port),
                    username=self._get(env, key("USERNAME"), ""),
                    password=self._get(env, key("PASSWORD"), ""),
                    photo_library_path=self._get(env, key("PHOTO_PATH"), DEFAULT_PHOTO_PATH),
                    use_ssl=self._get_bool(env, key("SECURE")) or global_ssl,
                )
            )
        return accounts

    def _load_legacy_accounts(
        self,
        env: Mapping[str, str],
        global_host: str,
        global_port: int,
        global_ssl: bool,
    ) -> list[SynologyAccountConfig]:
        """Load numbered SYNOLOGY_ACCOUNT_{i}_* slots in index order."""
        accounts = []
        for index in self._slot_indices(env, _LEGACY_SLOT):
            prefix = f"SYNOLOGY_ACCOUNT_{index}"
            name = self._get(env, f"{prefix}_NAME")
            if not name:
                continue
            accounts.append(
                self._build(
                    SynologyAccountConfig,
                    name,
                    name=name,
                    host=self._get(env, f"{prefix}_HOST", global_host),
                    port=self._get_port(env, f"{prefix}_PORT", global_port),
                    username=self._get(env, f"{prefix}_USERNAME", ""),
                    password=self._get(env, f"{prefix}_PASSWORD", ""),
                    photo_library_path=self._get(env, f"{prefix}_PHOTO_PATH", DEFAULT_PHOTO_PATH),
                    use_ssl=self._get_bool(env, f"{prefix}_USE_SSL") or global_ssl,
                )
            )
        return accounts

    @staticmethod
    def _account_key(env: Mapping[str, str], name: str, field: str) -> str:
        """Key for a per-account variable, as written or upper-cased."""
        key = f"SYNOLOGY_{name}_{field}"
        if not env.get(key):
            upper = key.upper()
            if env.get(upper):
                return upper
        return key

    # ===== Google accounts and pairings =====

    def _load_google_accounts(self, env: Mapping[str, str]) -> list[GoogleAccountConfig]:
        """Load label-only Google accounts from GOOGLE_ACCOUNTS."""
        names = self._split_names(self._get(env, "GOOGLE_ACCOUNTS", DEFAULT_GOOGLE_ACCOUNTS))
        return [GoogleAccountConfig(name=name) for name in names]

    def _load_pairings(
        self,
        env: Mapping[str, str],
        google_accounts: list[GoogleAccountConfig],
        synology_accounts: list[SynologyAccountConfig],
    ) -> list[AccountPairing]:
        """Load explicit PAIRING_{i}_* slots, or auto-pair by matching names."""
        pairings = []
        for index in self._slot_indices(env, _PAIRING_SLOT):
            google = self._get(env, f"PAIRING_{index}_GOOGLE")
            synology = self._get(env, f"PAIRING_{index}_SYNOLOGY")
            if not (google and synology):
                logger.warning(
                    "Ignoring PAIRING_%s: both PAIRING_%s_GOOGLE and PAIRING_%s_SYNOLOGY are required",
                    index, index, index,
                )
                continue
            pairings.append(
                AccountPairing(google_account_name=google, synology_account_name=synology)
            )

        if pairings:
            google_names = {account.name for account in google_accounts}
            synology_names = {account.name for account in synology_accounts}
            for pairing in pairings:
                if pairing.google_account_name not in google_names:
                    logger.warning(
                        "Pairing references unknown Google account '%s'",
                        pairing.google_account_name,
                    )
                if pairing.synology_account_name not in synology_names:
                    logger.warning(
                        "Pairing references unknown Synology account '%s'",
                        pairing.synology_account_name,
                    )
            return pairings

        # Auto-pair if names match and no explicit pairings
        synology_names = {account.name for account in synology_accounts}
        return [
            AccountPairing(google_account_name=google.name, synology_account_name=google.name)
            for google in google_accounts
            if google.name in synology_names
        ]

    # ===== Value parsing =====

    @staticmethod
    def _get(env: Mapping[str, str], key: str, default: str | None = None) -> str | None:
        """Get a variable; unset and empty values both yield the default."""
        value = env.get(key)
        return value if value else default

    @staticmethod
    def _get_bool(env: Mapping[str, str], key: str) -> bool:
        return (env.get(key) or "").strip().lower() == "true"

    def _get_int(
        self,
        env: Mapping[str, str],
        key: str,
        default: int,
        minimum: int | None = None,
        maximum: int | None = None,
    ) -> int:
        """Parse an integer variable, rejecting malformed or out-of-range values."""
        raw = self._get(env, key)
        if raw is None:
            return default

        try:
            value = int(raw.strip())
        except ValueError as err:
            raise ConfigError(
                ConfigErrorKind.INVALID_FIELD, key, f"expected an integer, got {raw!r}"
            ) from err

        if minimum is not None and value < minimum:
            raise ConfigError(
                ConfigErrorKind.INVALID_FIELD, key, f"{value} is below minimum {minimum}"
            )
        if maximum is not None and value > maximum:
            raise ConfigError(
                ConfigErrorKind.INVALID_FIELD, key, f"{value} is above maximum {maximum}"
            )
        return value

    def _get_port(self, env: Mapping[str, str], key: str, default: int) -> int:
        return self._get_int(env, key, default, minimum=1, maximum=65535)

    @staticmethod
    def _split_names(value: str) -> list[str]:
        """Split a comma-separated list, dropping blanks."""
        return [part.strip() for part in value.split(",") if part.strip()]

    @staticmethod
    def _slot_indices(env: Mapping[str, str], pattern: re.Pattern[str]) -> list[str]:
        """Distinct slot indices among matching keys, in numeric order."""
        indices = set()
        for key in env:
            match = pattern.match(key)
            if match:
                indices.add(match.group(1))
        return sorted(indices, key=int)

    @staticmethod
    def _build(model: type[BaseModel], label: str, **values: Any) -> Any:
        """Construct a model, reporting validation failures as ConfigError."""
        try:
            return model(**values)
        except ValidationError as err:
            first = err.errors()[0]
            location = ".".join(str(part) for part in first["loc"])
            raise ConfigError(
                ConfigErrorKind.INVALID_FIELD, f"{label}.{location}", first["msg"]
            ) from err


def load_config(
    source: Mapping[str, str] | None = None,
    dotenv_path: str | Path | None = None,
    configure_logging: bool = False,
) -> Config:
    """Load configuration from a source, or the process environment.

    With ``configure_logging`` the application logger is set up at the
    loaded ``log_level``.
    """
    config = ConfigLoader(source=source, dotenv_path=dotenv_path).load()
    if configure_logging:
        setup_logging(config.log_level)
    return config


def get_paired_synology_account(
    config: Config, google_account_name: str
) -> SynologyAccountConfig | None:
    """Get the Synology account paired with a Google account, if any."""
    return config.get_paired_synology_account(google_account_name)
