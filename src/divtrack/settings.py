"""Settings service for backend credentials and the owning user.

API keys and backend choices live in environment variables and are
optionally persisted to ``.env``. Callers turn them into an explicit
``TrackerConfig`` at startup instead of reading ambient state per call.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from divtrack.config import SecuritiesBackend, StoreBackend, TrackerConfig


@dataclass(frozen=True)
class SettingField:
    """Single setting definition."""

    name: str
    env_var: str
    secret: bool


SETTING_FIELDS: tuple[SettingField, ...] = (
    SettingField("intrinio_api_key", "INTRINIO_API_KEY", True),
    SettingField("supabase_url", "SUPABASE_URL", False),
    SettingField("supabase_key", "SUPABASE_KEY", True),
    SettingField("user_id", "DIVTRACK_USER_ID", False),
    SettingField("store", "DIVTRACK_STORE", False),
    SettingField("securities", "DIVTRACK_SECURITIES", False),
)

_CHOICES: dict[str, tuple[str, ...]] = {
    "store": tuple(b.value for b in StoreBackend),
    "securities": tuple(b.value for b in SecuritiesBackend),
}


class SettingsError(ValueError):
    """Validation error for settings operations."""


class TrackerSettings:
    """Read, update and persist tracker settings.

    By default, settings are rooted at the current working directory unless an
    explicit ``app_root`` or ``env_path`` is provided.
    """

    def __init__(
        self,
        env_path: Path | str | None = None,
        app_root: Path | str | None = None,
    ) -> None:
        root = Path(app_root).resolve() if app_root else Path.cwd()
        self._env_path = Path(env_path) if env_path else root / ".env"

    def list_settings(self) -> list[dict[str, Any]]:
        """Return every setting with secrets masked."""
        env_values = self._combined_env()
        settings: list[dict[str, Any]] = []
        for field in SETTING_FIELDS:
            raw = env_values.get(field.env_var, "")
            settings.append({
                "name": field.name,
                "env_var": field.env_var,
                "secret": field.secret,
                "configured": bool(raw),
                "value": self._mask_value(raw) if field.secret else raw,
            })
        return settings

    def update(
        self,
        values: dict[str, Any] | None = None,
        clear: list[str] | None = None,
        persist: bool = True,
    ) -> list[dict[str, Any]]:
        """Set and/or clear settings by name.

        Raises:
            SettingsError: Unknown setting names or invalid backend choices.
        """
        values = values or {}
        clear = clear or []
        by_name = {f.name: f for f in SETTING_FIELDS}

        if not isinstance(values, dict):
            raise SettingsError("'values' must be an object")
        if not isinstance(clear, list) or not all(isinstance(x, str) for x in clear):
            raise SettingsError("'clear' must be an array of setting names")

        env_updates: dict[str, str | None] = {}
        for name, value in values.items():
            if name not in by_name:
                raise SettingsError(f"Unsupported setting '{name}'")
            text = str(value).strip()
            if name in _CHOICES and text.lower() not in _CHOICES[name]:
                raise SettingsError(
                    f"Unsupported {name} '{value}'. "
                    f"Supported: {', '.join(_CHOICES[name])}"
                )
            env_updates[by_name[name].env_var] = text.lower() if name in _CHOICES else text

        for name in clear:
            if name not in by_name:
                raise SettingsError(f"Unsupported setting '{name}'")
            env_updates[by_name[name].env_var] = None

        if env_updates:
            self._apply_env_updates(env_updates, persist=persist)
        return self.list_settings()

    def to_config(self, **overrides: Any) -> TrackerConfig:
        """Build an explicit TrackerConfig from the current settings."""
        env = self._combined_env()
        config = TrackerConfig(
            store=StoreBackend(env.get("DIVTRACK_STORE", "mock").lower()),
            securities=SecuritiesBackend(env.get("DIVTRACK_SECURITIES", "mock").lower()),
            supabase_url=env.get("SUPABASE_URL"),
            supabase_key=env.get("SUPABASE_KEY"),
            user_id=env.get("DIVTRACK_USER_ID"),
            intrinio_api_key=env.get("INTRINIO_API_KEY"),
        )
        for key, value in overrides.items():
            setattr(config, key, value)
        return config

    @staticmethod
    def _mask_value(value: str) -> str:
        if not value:
            return ""
        if len(value) <= 4:
            return "*" * len(value)
        return f"{value[:2]}{'*' * (len(value) - 4)}{value[-2:]}"

    def _combined_env(self) -> dict[str, str]:
        values = self._read_env_file()
        for key, value in os.environ.items():
            if value:
                values[key] = value
        return values

    def _read_env_file(self) -> dict[str, str]:
        if not self._env_path.exists():
            return {}
        values: dict[str, str] = {}
        for raw_line in self._env_path.read_text(encoding="utf-8").splitlines():
            line = raw_line.strip()
            if not line or line.startswith("#"):
                continue
            if line.startswith("export "):
                line = line[len("export ") :].strip()
            if "=" not in line:
                continue
            key, value = line.split("=", 1)
            value = value.strip()
            if value.startswith(("'", '"')) and value.endswith(("'", '"')):
                value = value[1:-1]
            values[key.strip()] = value
        return values

    def _apply_env_updates(self, updates: dict[str, str | None], persist: bool) -> None:
        for key, value in updates.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        if persist:
            self._write_env_file(updates)

    def _write_env_file(self, updates: dict[str, str | None]) -> None:
        lines: list[str] = []
        if self._env_path.exists():
            lines = self._env_path.read_text(encoding="utf-8").splitlines()

        remaining = dict(updates)
        output: list[str] = []
        for line in lines:
            stripped = line.strip()
            if not stripped or stripped.startswith("#") or "=" not in stripped:
                output.append(line)
                continue
            key = stripped.split("=", 1)[0].strip()
            if key not in remaining:
                output.append(line)
                continue
            value = remaining.pop(key)
            if value is not None:
                output.append(f"{key}={value}")

        for key, value in remaining.items():
            if value is not None:
                output.append(f"{key}={value}")

        self._env_path.parent.mkdir(parents=True, exist_ok=True)
        self._env_path.write_text("\n".join(output) + "\n", encoding="utf-8")


__all__ = ["SettingField", "SETTING_FIELDS", "SettingsError", "TrackerSettings"]
