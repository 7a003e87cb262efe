"""
Configuration management for morseflow.

Default settings live in ``config_default_settings.json`` next to this
module.  They can be overridden by a user-specific JSON file; set the
``MORSEFLOW_CONFIG`` environment variable to its path.  This module
provides a simple API to load and merge both.

Sections of the default file:

* ``translator`` – speed, unsupported-character policy, file size limit
* ``audio`` – sample rate, tone frequency, volume, debug log file
* ``patterns`` – HTML light colours, size and controls
* ``visual`` – SVG dot width, bar height and image width
* ``terminal`` – blinker symbols and labels
* ``connector`` – which light connector to build (see
  :func:`morseflow.connectors.get_default_connector`)
"""

from __future__ import annotations

import json
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

from .utils.paths import find_data_file

DEFAULT_CONFIG_NAME = "config_default_settings.json"
CONFIG_ENV_VAR = "MORSEFLOW_CONFIG"


@dataclass
class AppConfig:
    """In-memory representation of the application configuration.

    Keys provided by the user that have no meaning to morseflow are
    preserved in ``data`` untouched.
    """

    data: Dict[str, Any] = field(default_factory=dict)

    def get(self, *keys: str, default: Optional[Any] = None) -> Any:
        """Retrieve a nested configuration value safely.

        Usage::

            config = load_config()
            wpm = config.get("translator", "wpm", default=20)

        :param keys: Sequence of keys describing a path in the config.
        :param default: Value returned when the path does not exist.
        :return: The configuration value or ``default``.
        """

        current: Any = self.data
        for key in keys:
            if not isinstance(current, dict) or key not in current:
                return default
            current = current[key]
        return current

    def section(self, name: str) -> Dict[str, Any]:
        value = self.data.get(name)
        return dict(value) if isinstance(value, dict) else {}

    def merge(self, other: Dict[str, Any]) -> None:
        """Merge another dictionary into this configuration.

        When keys exist in both ``self.data`` and ``other``, values from
        ``other`` take precedence.  Nested dictionaries are merged
        recursively.
        """

        def _merge(a: Dict[str, Any], b: Dict[str, Any]) -> Dict[str, Any]:
            result = dict(a)
            for k, v in b.items():
                if isinstance(v, dict) and isinstance(a.get(k), dict):
                    result[k] = _merge(a[k], v)
                else:
                    result[k] = v
            return result

        self.data = _merge(self.data, other)


def load_config(user_config_path: Optional[os.PathLike] = None) -> AppConfig:
    """Load configuration from the default and optional user files.

    If ``user_config_path`` does not exist, only the default config is
    loaded.

    :param user_config_path: Path to an optional JSON override file.
    :return: A fully merged :class:`AppConfig`.
    """

    with open(find_data_file(DEFAULT_CONFIG_NAME), "r", encoding="utf-8") as f:
        base = json.load(f)
    cfg = AppConfig(base)
    if user_config_path:
        user_path = Path(user_config_path)
        if user_path.is_file():
            with open(user_path, "r", encoding="utf-8") as uf:
                overrides = json.load(uf)
            cfg.merge(overrides)
    return cfg


def get_app_config() -> AppConfig:
    """Load the configuration, honouring ``MORSEFLOW_CONFIG``.

    :return: The loaded :class:`AppConfig`.
    """

    return load_config(os.environ.get(CONFIG_ENV_VAR))


__all__ = ["AppConfig", "load_config", "get_app_config", "CONFIG_ENV_VAR"]
