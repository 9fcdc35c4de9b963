"""Configuration management using pydantic-settings."""

import tomllib
from datetime import time
from pathlib import Path
from typing import Self

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from .domain.tickets import MAX_DELTA_KG, VARIATION, TicketRules
from .domain.vehicles import (
    HEAVY_CATEGORY,
    LIGHT_CATEGORY,
    TRUCK_MAX_WEIGHT,
    SelectionRules,
)

DEFAULT_SOURCE = "~/Documents/ScaleTickets/Inbox"
DEFAULT_BASE = "~/Documents/ScaleTickets"
DEFAULT_PATTERNS = ["*.xml", "*.XML"]
CONFIG_PATH = Path("~/.config/scaleticket/config.toml").expanduser()


class PathsConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SCALETICKET_PATHS_")

    source: Path = Path(DEFAULT_SOURCE)
    base: Path = Path(DEFAULT_BASE)

    @field_validator("source", "base", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path) -> Path:
        return Path(v).expanduser()

    @property
    def tickets(self) -> Path:
        return self.base / "tickets"

    @property
    def pending(self) -> Path:
        return self.base / ".pending"

    @property
    def trash(self) -> Path:
        return self.base / ".trash"

    @property
    def quarantine(self) -> Path:
        return self.base / ".quarantine"


class CatalogConfig(BaseSettings):
    """Vehicle catalog source; the built-in fleet when no path is set."""

    model_config = SettingsConfigDict(env_prefix="SCALETICKET_CATALOG_")

    path: Path | None = None

    @field_validator("path", mode="before")
    @classmethod
    def expand_path(cls, v: str | Path | None) -> Path | None:
        return Path(v).expanduser() if v else None


class SelectionConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SCALETICKET_SELECTION_")

    truck_max_weight: float = TRUCK_MAX_WEIGHT
    light_category: str = LIGHT_CATEGORY
    heavy_category: str = HEAVY_CATEGORY

    def to_rules(self) -> SelectionRules:
        return SelectionRules(
            truck_max_weight=self.truck_max_weight,
            light_category=self.light_category,
            heavy_category=self.heavy_category,
        )


class TicketConfig(BaseSettings):
    """Issue time window ("HH:MM:SS") and weight variation bounds."""

    model_config = SettingsConfigDict(env_prefix="SCALETICKET_TICKET_")

    window_start: time = time(7, 12, 50)
    window_end: time = time(15, 45, 50)
    variation: float = VARIATION
    max_delta_kg: float = MAX_DELTA_KG
    filename_date_fallback: bool = False

    @model_validator(mode="after")
    def check_window(self) -> Self:
        if self.window_start > self.window_end:
            raise ValueError("window_start must not be after window_end")
        return self

    def to_rules(self) -> TicketRules:
        return TicketRules(
            window_start=_seconds(self.window_start),
            window_end=_seconds(self.window_end),
            variation=self.variation,
            max_delta_kg=self.max_delta_kg,
            filename_date_fallback=self.filename_date_fallback,
        )


def _seconds(t: time) -> int:
    return t.hour * 3600 + t.minute * 60 + t.second


class WatchConfig(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SCALETICKET_WATCH_")

    patterns: list[str] = DEFAULT_PATTERNS


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="SCALETICKET_")

    paths: PathsConfig = PathsConfig()
    catalog: CatalogConfig = CatalogConfig()
    selection: SelectionConfig = SelectionConfig()
    ticket: TicketConfig = TicketConfig()
    watch: WatchConfig = WatchConfig()

    def ensure_dirs(self) -> Self:
        self.paths.tickets.mkdir(parents=True, exist_ok=True)
        self.paths.pending.mkdir(parents=True, exist_ok=True)
        self.paths.trash.mkdir(parents=True, exist_ok=True)
        self.paths.quarantine.mkdir(parents=True, exist_ok=True)
        return self


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings from TOML file, falling back to defaults."""
    path = config_path or CONFIG_PATH

    if path.exists():
        with open(path, "rb") as f:
            data = tomllib.load(f)

        paths = PathsConfig(**data.get("paths", {}))
        catalog = CatalogConfig(**data.get("catalog", {}))
        selection = SelectionConfig(**data.get("selection", {}))
        ticket = TicketConfig(**data.get("ticket", {}))
        watch = WatchConfig(**data.get("watch", {}))
        return Settings(
            paths=paths,
            catalog=catalog,
            selection=selection,
            ticket=ticket,
            watch=watch,
        )

    return Settings()
