"""Configuration loading from environment variables and eventdesk.toml."""

from __future__ import annotations

import os
import sys
from dataclasses import dataclass, field
from typing import Literal

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib
from pathlib import Path

_CONFIG_FILENAME = "eventdesk.toml"

RemovalPolicy = Literal["reject", "cascade"]
REMOVAL_POLICIES = ("reject", "cascade")


@dataclass
class StorageConfig:
    """CSV file names, relative to the data directory."""

    events_file: str = "eventos.csv"
    participants_file: str = "participantes.csv"
    registrations_file: str = "inscricoes.csv"


@dataclass
class EventDeskConfig:
    """Top-level configuration."""

    storage: StorageConfig = field(default_factory=StorageConfig)
    data_dir: Path = Path(".")
    removal_policy: RemovalPolicy = "reject"
    log_level: str = "INFO"


def load_config(config_path: Path | None = None) -> EventDeskConfig:
    """Load configuration from environment variables and optional eventdesk.toml.

    Priority: environment variables > eventdesk.toml > defaults.
    """
    file_data: dict = {}
    if config_path and config_path.exists():
        file_data = tomllib.loads(config_path.read_text())
    else:
        # Search current dir and ~/.eventdesk/
        for candidate in [
            Path.cwd() / _CONFIG_FILENAME,
            Path.home() / ".eventdesk" / _CONFIG_FILENAME,
        ]:
            if candidate.exists():
                file_data = tomllib.loads(candidate.read_text())
                break

    storage_data = file_data.get("storage", {})

    removal_policy = os.getenv(
        "EVENTDESK_REMOVAL_POLICY", file_data.get("removal_policy", "reject")
    ).lower()
    if removal_policy not in REMOVAL_POLICIES:
        raise ValueError(
            f"removal_policy must be one of {REMOVAL_POLICIES}, got {removal_policy!r}"
        )

    config = EventDeskConfig(
        storage=StorageConfig(
            events_file=storage_data.get("events_file", "eventos.csv"),
            participants_file=storage_data.get("participants_file", "participantes.csv"),
            registrations_file=storage_data.get("registrations_file", "inscricoes.csv"),
        ),
        data_dir=Path(os.getenv("EVENTDESK_DATA_DIR", file_data.get("data_dir", "."))),
        removal_policy=removal_policy,
        log_level=os.getenv("EVENTDESK_LOG_LEVEL", file_data.get("log_level", "INFO")),
    )
    return config
