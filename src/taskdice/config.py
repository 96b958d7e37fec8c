"""Configuration loader for taskdice (global + project TOML with env overrides)."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import Any, Dict, Optional

try:  # Python 3.11+
    import tomllib
except ModuleNotFoundError:  # pragma: no cover - fallback for Python <3.11
    import tomli as tomllib  # type: ignore

DEFAULT_STORAGE_PATH = "./.tmp-storage.json"


class ConfigError(Exception):
    """Raised when a config file cannot be parsed."""


class ConfigLoader:
    """
    Handles configuration loading from multiple sources with priority resolution.

    Priority (highest → lowest):
    1. Command-line arguments (not handled here)
    2. Environment variables (TASKDICE_*)
    3. Project config (.taskdice/config.toml)
    4. Global config (~/.config/taskdice/config.toml)
    5. Built-in defaults
    """

    env_prefix = "TASKDICE_"

    def __init__(self) -> None:
        self.global_dir = self.get_global_config_dir()
        self.project_dir = self.get_project_config_dir()

        self.config: Dict[str, Any] = {}

        self._load_all()

    # ------------------------------------------------------------------ #
    # Public getters
    # ------------------------------------------------------------------ #
    def get(self, key: str, default: Any = None) -> Any:
        """Get config value by dot-separated key."""
        keys = key.split(".")
        value: Any = self.config
        for k in keys:
            if isinstance(value, dict):
                value = value.get(k)
            else:
                return default
        return value if value is not None else default

    def storage_path(self) -> Path:
        """Location of the store document, relative paths resolved against cwd."""
        return Path(str(self.get("storage.path", DEFAULT_STORAGE_PATH))).expanduser()

    def log_level(self) -> str:
        return str(self.get("logging.level", "warning")).upper()

    def log_file(self) -> Optional[Path]:
        value = self.get("logging.file")
        return Path(str(value)).expanduser() if value else None

    # ------------------------------------------------------------------ #
    # Load/merge helpers
    # ------------------------------------------------------------------ #
    def _load_all(self) -> None:
        """Load all configuration files with proper priority."""
        self._load_global_config()

        if self.project_dir:
            self._load_project_config()

        self._apply_env_overrides()

    def _load_global_config(self) -> None:
        """Load global configuration."""
        self.config = self._get_default_config()
        config_file = self.global_dir / "config.toml"
        if config_file.exists():
            self._deep_merge(self.config, self._read_toml(config_file))
        else:
            self._create_default_config()

    def _load_project_config(self) -> None:
        """Load project-specific config and merge with global."""
        config_file = self.project_dir / "config.toml"
        if config_file.exists():
            self._deep_merge(self.config, self._read_toml(config_file))

    @staticmethod
    def _read_toml(config_file: Path) -> Dict[str, Any]:
        try:
            with open(config_file, "rb") as f:
                return tomllib.load(f)
        except tomllib.TOMLDecodeError as exc:
            raise ConfigError(f"Invalid config file {config_file}: {exc}") from exc

    def _apply_env_overrides(self) -> None:
        """Apply environment variable overrides (TASKDICE_*)."""
        for key, value in os.environ.items():
            if not key.startswith(self.env_prefix):
                continue
            config_key = key[len(self.env_prefix) :].lower().replace("_", ".")
            self._set_nested(self.config, config_key, value)

    # ------------------------------------------------------------------ #
    # Static paths/helpers
    # ------------------------------------------------------------------ #
    @staticmethod
    def get_global_config_dir() -> Path:
        """Get platform-specific global config directory following XDG spec."""
        system = platform.system()
        if system == "Windows":
            base = Path(os.environ.get("APPDATA", "~\\AppData\\Roaming")).expanduser()
        elif system == "Darwin":
            xdg = os.environ.get("XDG_CONFIG_HOME")
            base = Path(xdg) if xdg else Path.home() / ".config"
        else:
            base = Path(os.environ.get("XDG_CONFIG_HOME", "~/.config")).expanduser()
        return base / "taskdice"

    @staticmethod
    def get_project_config_dir() -> Path | None:
        """Find .taskdice directory in current or parent directories."""
        current = Path.cwd()
        for parent in [current] + list(current.parents):
            config_dir = parent / ".taskdice"
            if config_dir.is_dir():
                return config_dir
        return None

    # ------------------------------------------------------------------ #
    # Defaults
    # ------------------------------------------------------------------ #
    def _create_default_config(self) -> None:
        try:
            self.global_dir.mkdir(parents=True, exist_ok=True)
            config_file = self.global_dir / "config.toml"
            with open(config_file, "w", encoding="utf-8") as f:
                f.write(self._get_default_config_toml())
        except OSError:
            # Read-only home directories still get the built-in defaults.
            return

    def _get_default_config(self) -> Dict[str, Any]:
        return {
            "storage": {
                "path": DEFAULT_STORAGE_PATH,
            },
            "logging": {
                "level": "warning",
            },
        }

    def _get_default_config_toml(self) -> str:
        """Default config TOML text for first-run creation."""
        default = self._get_default_config()
        return "\n".join(
            [
                "[storage]",
                "# Relative paths are resolved against the working directory.",
                f'path = "{default["storage"]["path"]}"',
                "",
                "[logging]",
                f'level = "{default["logging"]["level"]}"',
                '# file = "~/.config/taskdice/taskdice.log"',
                "",
            ]
        )

    # ------------------------------------------------------------------ #
    # Utility helpers
    # ------------------------------------------------------------------ #
    def _deep_merge(self, base: dict, override: dict) -> None:
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                self._deep_merge(base[key], value)
            else:
                base[key] = value

    def _set_nested(self, d: dict, path: str, value: Any) -> None:
        keys = path.split(".")
        for key in keys[:-1]:
            d = d.setdefault(key, {})
        d[keys[-1]] = value


__all__ = ["ConfigError", "ConfigLoader", "DEFAULT_STORAGE_PATH"]
