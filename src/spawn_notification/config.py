"""Runtime settings and the notification policy configuration."""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from types import MappingProxyType

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_serializer, field_validator
from pydantic.alias_generators import to_camel
from pydantic_settings import BaseSettings, SettingsConfigDict

logger = logging.getLogger("spawn_notification.config")


class Settings(BaseSettings):
    """Environment-driven runtime settings."""

    model_config = SettingsConfigDict(env_prefix="SPAWN_NOTIFICATION_", env_file=".env", extra="ignore")

    app_name: str = "spawn-notification"
    log_level: str = "INFO"
    config_path: str = Field(
        default="config/spawn_notification.json",
        description="JSON file holding the notification policy; created with defaults when missing.",
    )
    minecraft_adapter: str = Field(default="echo", description="Command backend: echo or minescript.")
    minescript_command_prefix: str = "/"


settings = Settings()


class ConfigError(RuntimeError):
    """Raised when the notification config file cannot be read or validated."""


class NotificationConfig(BaseModel):
    """Immutable broadcast policy. JSON keys use the mod's camelCase names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, frozen=True, extra="ignore")

    labels_for_broadcast: tuple[str, ...] = ("legendary", "mythical")
    formatting: Mapping[str, str] = Field(default_factory=dict, validate_default=True)
    broadcast_shiny: bool = True
    broadcast_despawns: bool = False
    broadcast_coords: bool = False
    broadcast_biome: bool = False
    announce_cross_dimensions: bool = False
    broadcast_range_enabled: bool = False
    broadcast_range: float = Field(default=64.0, ge=0)
    player_limit_enabled: bool = False
    player_limit: int = Field(default=1, ge=1)
    play_shiny_sound: bool = True
    play_shiny_sound_player: bool = False

    @field_validator("formatting", mode="after")
    @classmethod
    def _freeze_formatting(cls, value: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(value))

    @field_serializer("formatting")
    def _dump_formatting(self, value: Mapping[str, str]) -> dict[str, str]:
        return dict(value)

    @property
    def player_cap(self) -> int | None:
        return self.player_limit if self.player_limit_enabled else None


def load_notification_config(path: str | Path) -> NotificationConfig:
    """Read the config file, writing the defaults first when it does not exist."""
    config_path = Path(path)
    try:
        if not config_path.exists():
            config = NotificationConfig()
            config_path.parent.mkdir(parents=True, exist_ok=True)
            config_path.write_text(config.model_dump_json(by_alias=True, indent=2), encoding="utf-8")
            logger.info("config_defaults_written", extra={"path": str(config_path)})
            return config

        return NotificationConfig.model_validate_json(config_path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError, ValidationError) as exc:
        raise ConfigError(f"Invalid notification config {config_path}: {exc}") from exc


class ConfigStore:
    """Holds the current config snapshot; reloads swap in a new one."""

    def __init__(self, path: str | Path, initial: NotificationConfig | None = None) -> None:
        self._path = Path(path)
        self._lock = threading.Lock()
        self._current = initial if initial is not None else load_notification_config(self._path)

    @property
    def path(self) -> Path:
        return self._path

    @property
    def current(self) -> NotificationConfig:
        return self._current

    def reload(self) -> NotificationConfig:
        """Load a fresh snapshot. On failure the previous snapshot stays active."""
        with self._lock:
            try:
                fresh = load_notification_config(self._path)
            except ConfigError:
                logger.exception("config_reload_failed", extra={"path": str(self._path)})
                raise
            self._current = fresh
        logger.info("config_reloaded", extra={"path": str(self._path)})
        return fresh
