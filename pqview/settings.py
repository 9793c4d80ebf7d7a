"""Typed settings loaded from TOML config with env-var overrides."""

from __future__ import annotations

import os
import shlex
import tomllib
from dataclasses import dataclass
from importlib import resources
from pathlib import Path

from .config import USER_CONFIG_PATH


def _load_default_toml() -> dict:
    """Load the built-in default_config.toml shipped with the package."""
    ref = resources.files("pqview").joinpath("default_config.toml")
    return tomllib.loads(ref.read_text(encoding="utf-8"))


def _load_user_toml(path: Path = USER_CONFIG_PATH) -> dict:
    """Load user config if it exists, otherwise empty dict."""
    if path.is_file():
        return tomllib.loads(path.read_text(encoding="utf-8"))
    return {}


def _deep_merge(base: dict, override: dict) -> dict:
    """Recursively merge override into base (override wins)."""
    merged = dict(base)
    for key, val in override.items():
        if key in merged and isinstance(merged[key], dict) and isinstance(val, dict):
            merged[key] = _deep_merge(merged[key], val)
        else:
            merged[key] = val
    return merged


# ── Dataclasses ──────────────────────────────────────────────────────


@dataclass
class CommandsConfig:
    list_cmd: tuple[str, ...]
    show_cmd: tuple[str, ...]
    delete_cmd: tuple[str, ...]
    timeout: float


@dataclass
class AccessConfig:
    privileged_users: tuple[str, ...]


@dataclass
class LayoutConfig:
    list_width: int


@dataclass
class Settings:
    commands: CommandsConfig
    access: AccessConfig
    layout: LayoutConfig



def _command_from_env(name: str, fallback: list[str]) -> tuple[str, ...]:
    raw = os.environ.get(name, "").strip()
    if raw:
        return tuple(shlex.split(raw))
    return tuple(str(part) for part in fallback)


def load_settings(user_config: Path = USER_CONFIG_PATH) -> Settings:
    """Load settings: defaults ← user TOML ← env vars."""
    defaults = _load_default_toml()
    user = _load_user_toml(user_config)
    raw = _deep_merge(defaults, user)

    cmds = raw.get("commands", {})
    access = raw.get("access", {})
    layout = raw.get("layout", {})

    commands = CommandsConfig(
        list_cmd=_command_from_env("PQVIEW_MAILQ", cmds.get("list", ["mailq"])),
        show_cmd=_command_from_env(
            "PQVIEW_POSTCAT", cmds.get("show", ["/usr/sbin/postcat", "-q"]),
        ),
        delete_cmd=_command_from_env(
            "PQVIEW_POSTSUPER", cmds.get("delete", ["postsuper", "-d"]),
        ),
        timeout=float(os.environ.get("PQVIEW_TIMEOUT", cmds.get("timeout", 30.0))),
    )

    users_env = os.environ.get("PQVIEW_PRIVILEGED_USERS", "")
    if users_env.strip():
        users = tuple(u.strip() for u in users_env.split(",") if u.strip())
    else:
        users = tuple(access.get("privileged_users", ["root", "postfix"]))

    return Settings(
        commands=commands,
        access=AccessConfig(privileged_users=users),
        layout=LayoutConfig(list_width=int(layout.get("list_width", 14))),
    )


# Loaded once on import.
SETTINGS = load_settings()
