"""Shared fixtures for Photo Sync tests."""

import os

import pytest

from src.config.loader import ConfigLoader


@pytest.fixture
def clean_env(monkeypatch):
    """Process environment with all Photo Sync variables removed."""
    prefixes = ("SYNOLOGY_", "GOOGLE_", "PAIRING_")
    scalars = ("STORAGE_THRESHOLD_PERCENT", "DATABASE_PATH", "DRY_RUN", "LOG_LEVEL")
    for key in list(os.environ.keys()):
        if key.startswith(prefixes) or key in scalars:
            monkeypatch.delenv(key, raising=False)
    return monkeypatch


@pytest.fixture
def no_dotenv(monkeypatch):
    """Prevent load_dotenv from loading a project .env."""
    monkeypatch.setattr("src.config.sources.load_dotenv", lambda **kwargs: False)


def load(env: dict[str, str]):
    """Load configuration from a plain dict source."""
    return ConfigLoader(source=env).load()


# ===== Environment factories =====

def make_named_account(name="pete", host="nas.local", port="5001", username="admin",
                       password="secret", photo_path="/photo/pete", secure=None):
    """Create SYNOLOGY_{NAME}_* variables for one account."""
    env = {
        f"SYNOLOGY_{name}_HOST": host,
        f"SYNOLOGY_{name}_PORT": port,
        f"SYNOLOGY_{name}_USERNAME": username,
        f"SYNOLOGY_{name}_PASSWORD": password,
        f"SYNOLOGY_{name}_PHOTO_PATH": photo_path,
    }
    if secure is not None:
        env[f"SYNOLOGY_{name}_SECURE"] = secure
    return {k: v for k, v in env.items() if v is not None}


def make_legacy_account(index=1, name="NAS1", **fields):
    """Create SYNOLOGY_ACCOUNT_{i}_* variables for one numbered slot."""
    env = {f"SYNOLOGY_ACCOUNT_{index}_NAME": name}
    for field, value in fields.items():
        env[f"SYNOLOGY_ACCOUNT_{index}_{field.upper()}"] = value
    return env


def make_pairing(index=1, google="alice", synology="nasA"):
    """Create PAIRING_{i}_* variables for one explicit pairing."""
    env = {}
    if google is not None:
        env[f"PAIRING_{index}_GOOGLE"] = google
    if synology is not None:
        env[f"PAIRING_{index}_SYNOLOGY"] = synology
    return env
