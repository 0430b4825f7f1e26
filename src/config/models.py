"""Configuration models for Photo Sync."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class GoogleAccountConfig(BaseModel):
    """A Google Photos account.

    Only a label: photos come from Takeout exports, so no API credentials
    are kept here.
    """

    model_config = ConfigDict(frozen=True)

    name: str


class SynologyAccountConfig(BaseModel):
    """Connection settings for a single Synology NAS account."""

    model_config = ConfigDict(frozen=True)

    name: str
    host: str = "localhost"
    port: int = Field(default=5000, ge=1, le=65535)
    username: str = ""
    password: str = Field(default="", repr=False)
    photo_library_path: str = "/photo"
    use_ssl: bool = False


class AccountPairing(BaseModel):
    """Google account -> Synology account association."""

    model_config = ConfigDict(frozen=True)

    google_account_name: str
    synology_account_name: str


class Config(BaseModel):
    """Application configuration with multi-account support."""

    model_config = ConfigDict(frozen=True)

    google_accounts: tuple[GoogleAccountConfig, ...] = ()
    synology_accounts: tuple[SynologyAccountConfig, ...] = ()
    account_pairings: tuple[AccountPairing, ...] = ()
    storage_threshold_percent: int = Field(default=80, ge=0, le=100)
    database_path: Path = Path("./data/photos.db")
    dry_run: bool = False
    log_level: str = "info"

    def get_paired_synology_account(
        self, google_account_name: str
    ) -> SynologyAccountConfig | None:
        """Get the Synology account paired with a Google account, if any."""
        pairing = next(
            (
                p
                for p in self.account_pairings
                if p.google_account_name == google_account_name
            ),
            None,
        )
        if pairing is None:
            return None
        return next(
            (
                s
                for s in self.synology_accounts
                if s.name == pairing.synology_account_name
            ),
            None,
        )

    def get_google_account_names(self) -> list[str]:
        """Get list of configured Google account names."""
        return [account.name for account in self.google_accounts]

    def get_synology_account_names(self) -> list[str]:
        """Get list of configured Synology account names."""
        return [account.name for account in self.synology_accounts]
