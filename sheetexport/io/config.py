"""
Configuration Manager
=======================

Export defaults live in three layers, higher layers winning:

  ENV VARS  →  overrides  →  CONFIG FILE  →  overrides  →  DEFAULTS

LEARNING POINT: Environment Variable Names
---------------------------------------------
Keys like "default_filename" already contain underscores, so a single
"_" cannot also mean "go one level deeper". We use a double underscore
for nesting:

    SHEETEXPORT_EXPORT__SHEET_NAME=売上   →  export.sheet_name = "売上"
    SHEETEXPORT_CLASSIFIER__POLICY=length_only

Example YAML (~/.sheetexport/config.yaml):
    export:
      default_filename: report
      delimiter: ";"
    classifier:
      policy: length_only
"""

import copy
import json
import os
from pathlib import Path
from typing import Any

import yaml

from sheetexport.utils.logger import setup_logger


logger = setup_logger(__name__)

ENV_PREFIX = "SHEETEXPORT_"

DEFAULTS = {
    "export": {
        "default_filename": "export",
        "sheet_name": "Sheet1",
        "delimiter": ",",
        "has_header": True,
        "xlsx_numbers": False,
    },
    "classifier": {
        "policy": "leading_zero_aware",
        "max_numeric_length": 15,
    },
    "headers": {
        # Old Internet Explorer cannot read filename*=UTF-8''...
        "legacy_client_patterns": [r"MSIE [1-8]\.", r"Trident/4\.0"],
        "cache_control": "no-store, no-cache, must-revalidate, max-age=0",
    },
    "logging": {
        "level": "INFO",
        "file": None,
    },
    "server": {
        "host": "127.0.0.1",
        "port": 8420,
        "cors_origins": ["*"],
    },
}


class Config:
    """
    Layered configuration manager with dot-notation access.

        config = Config()
        config.get("export.sheet_name")          # "Sheet1"
        config.get("missing.key", "fallback")    # "fallback"

    There is one instance per process (Singleton). Tests that need a
    fresh one call Config.reset() first.
    """

    _instance: "Config | None" = None

    def __new__(cls, *args, **kwargs) -> "Config":
        if cls._instance is None:
            cls._instance = super().__new__(cls)
            cls._instance._initialized = False
        return cls._instance

    def __init__(self, config_path: str | Path | None = None):
        if self._initialized:
            return
        self._initialized = True

        self._config_path = (
            Path(config_path) if config_path
            else Path.home() / ".sheetexport" / "config.yaml"
        )

        self._data: dict = copy.deepcopy(DEFAULTS)
        self._load_file()
        self._load_env_overrides()

        logger.debug(f"Configuration loaded from: {self._config_path}")

    @classmethod
    def reset(cls) -> None:
        """Forget the current instance so the next Config() reloads everything."""
        cls._instance = None

    def get(self, key: str, default: Any = None) -> Any:
        """Get a value by dot-separated path, or default if any step is missing."""
        value = self._data
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    def set(self, key: str, value: Any) -> None:
        """Set a value by dot-separated path, creating intermediate dicts."""
        keys = key.split(".")
        data = self._data

        for k in keys[:-1]:
            if k not in data or not isinstance(data[k], dict):
                data[k] = {}
            data = data[k]

        data[keys[-1]] = value

    def save(self) -> None:
        """Save current configuration to the YAML file."""
        self._config_path.parent.mkdir(parents=True, exist_ok=True)
        with open(self._config_path, "w", encoding="utf-8") as f:
            yaml.safe_dump(self._data, f, default_flow_style=False,
                           sort_keys=False, allow_unicode=True)
        logger.info(f"Configuration saved to: {self._config_path}")

    def _load_file(self) -> None:
        """Load configuration from the YAML file, or a .json sibling."""
        if self._config_path.exists():
            with open(self._config_path, encoding="utf-8") as f:
                file_data = yaml.safe_load(f) or {}
        else:
            json_path = self._config_path.with_suffix(".json")
            if not json_path.exists():
                return
            with open(json_path, encoding="utf-8") as f:
                file_data = json.load(f)

        if not isinstance(file_data, dict):
            logger.warning(f"Ignoring config file without a mapping: {self._config_path}")
            return
        self._deep_merge(self._data, file_data)

    def _load_env_overrides(self) -> None:
        """SHEETEXPORT_EXPORT__SHEET_NAME=x  →  export.sheet_name = "x"."""
        for key, value in os.environ.items():
            if key.startswith(ENV_PREFIX):
                config_key = key[len(ENV_PREFIX):].lower().replace("__", ".")
                self.set(config_key, self._parse_value(value))

    @staticmethod
    def _parse_value(value: str) -> Any:
        """Parse a string value into the appropriate Python type."""
        if value.lower() in ("true", "yes", "on"):
            return True
        if value.lower() in ("false", "no", "off"):
            return False
        try:
            return int(value)
        except ValueError:
            pass
        try:
            return float(value)
        except ValueError:
            pass
        return value

    @staticmethod
    def _deep_merge(base: dict, override: dict) -> None:
        """Merge override into base in place, recursing into nested dicts."""
        for key, value in override.items():
            if key in base and isinstance(base[key], dict) and isinstance(value, dict):
                Config._deep_merge(base[key], value)
            else:
                base[key] = value
