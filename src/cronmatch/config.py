from __future__ import annotations

import tomllib
from pathlib import Path

HOME_CONFIG_PATH = Path.home() / ".cronmatch" / "cronmatch.toml"


class ConfigError(RuntimeError):
    pass


def _display_path(path: Path) -> str:
    try:
        cwd = Path.cwd()
        if path.is_relative_to(cwd):
            return f"./{path.relative_to(cwd).as_posix()}"
        home = Path.home()
        if path.is_relative_to(home):
            return f"~/{path.relative_to(home).as_posix()}"
    except OSError:
        return str(path)
    return str(path)


def _missing_config_message(path: Path) -> str:
    return "\n".join(
        [
            f"Missing config file `{_display_path(path)}`.",
            "Create it with:",
            "  [[schedules]]",
            '  id = "nightly"',
            '  schedule = "0 2 * * *"',
        ]
    )


def read_config(cfg_path: Path) -> dict:
    try:
        raw = cfg_path.read_text(encoding="utf-8")
    except FileNotFoundError:
        raise ConfigError(_missing_config_message(cfg_path)) from None
    except OSError as e:
        raise ConfigError(f"Failed to read config file {cfg_path}: {e}") from e
    try:
        return tomllib.loads(raw)
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Malformed TOML in {cfg_path}: {e}") from None
