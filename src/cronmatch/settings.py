from __future__ import annotations

import os
from pathlib import Path
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic_settings.sources import TomlConfigSettingsSource

from .calendar import CalendarSnapshot
from .config import HOME_CONFIG_PATH, ConfigError, read_config
from .errors import CronError
from .logging import get_logger
from .matcher import empty_fields, should_run, split_expression

logger = get_logger(__name__)

CONFIG_PATH_ENV = "CRONMATCH_CONFIG_PATH"

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]


class ScheduleConfig(BaseModel):
    """A named cron schedule."""

    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    id: NonEmptyStr
    schedule: NonEmptyStr
    description: NonEmptyStr | None = None

    @field_validator("schedule")
    @classmethod
    def _validate_schedule(cls, v: str) -> str:
        try:
            split_expression(v)
        except CronError as exc:
            raise ValueError(str(exc)) from exc
        return v


class LoggingSettings(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    level: Literal["debug", "info", "warning", "error"] = "info"
    format: Literal["console", "json"] = "console"


class CronmatchSettings(BaseSettings):
    model_config = SettingsConfigDict(
        extra="forbid",
        env_prefix="CRONMATCH__",
        env_nested_delimiter="__",
        str_strip_whitespace=True,
    )

    strict: bool = False
    logging: LoggingSettings = Field(default_factory=LoggingSettings)
    schedules: list[ScheduleConfig] = Field(default_factory=list)

    @model_validator(mode="after")
    def _check_schedules(self) -> CronmatchSettings:
        ids = [s.id for s in self.schedules]
        if len(ids) != len(set(ids)):
            raise ValueError("schedule ids must be unique")
        if self.strict:
            for entry in self.schedules:
                empty = empty_fields(entry.schedule)
                if empty:
                    raise ValueError(
                        f"schedule {entry.id!r} can never run: "
                        f"{', '.join(empty)} match no values"
                    )
        return self

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        return (
            init_settings,
            env_settings,
            dotenv_settings,
            TomlConfigSettingsSource(settings_cls),
            file_secret_settings,
        )


def due_schedules(
    settings: CronmatchSettings, calendar: CalendarSnapshot
) -> list[ScheduleConfig]:
    """Configured schedules whose expression matches *calendar*."""
    return [entry for entry in settings.schedules if should_run(entry.schedule, calendar)]


def load_settings(path: str | Path | None = None) -> tuple[CronmatchSettings, Path]:
    cfg_path = _resolve_config_path(path)
    _ensure_config_file(cfg_path)
    # Surfaces a missing file or malformed TOML before validation.
    read_config(cfg_path)
    settings = _load_settings_from_path(cfg_path)
    logger.info(
        "settings.loaded",
        config_path=str(cfg_path),
        schedules=len(settings.schedules),
        strict=settings.strict,
    )
    return settings, cfg_path


def _resolve_config_path(path: str | Path | None) -> Path:
    if path:
        return Path(path).expanduser()
    env_path = os.environ.get(CONFIG_PATH_ENV)
    if env_path:
        return Path(env_path).expanduser()
    return HOME_CONFIG_PATH


def _ensure_config_file(cfg_path: Path) -> None:
    if cfg_path.exists() and not cfg_path.is_file():
        raise ConfigError(f"Config path {cfg_path} exists but is not a file.") from None


def _load_settings_from_path(cfg_path: Path) -> CronmatchSettings:
    cfg = dict(CronmatchSettings.model_config)
    cfg["toml_file"] = cfg_path
    Bound = type(
        "CronmatchSettingsBound",
        (CronmatchSettings,),
        {"model_config": SettingsConfigDict(**cfg)},
    )
    try:
        return Bound()
    except ValidationError as exc:
        raise ConfigError(f"Invalid config in {cfg_path}: {exc}") from exc
