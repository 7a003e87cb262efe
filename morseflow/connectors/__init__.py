"""Connector registry for morseflow.

Connectors are pluggable light outputs.  The ``get_default_connector``
factory reads the ``connector`` section of the application config and
returns an appropriate :class:`BaseLightConnector` instance.

Currently supported connector types:
    * ``"lan"``    – Govee LAN API over UDP (local network, no account)
    * ``"cloud"``  – Govee developer HTTP API (requires an API key)

Configuration example (config_default_settings.json)::

    {
        "connector": {
            "type": "lan",
            "device_ip": "192.168.1.50",
            "timeout": 3
        }
    }

Or for the cloud API::

    {
        "connector": {
            "type": "cloud",
            "api_key": "...",
            "device": "AA:BB:CC:DD:EE:FF:11:22",
            "model": "H6159"
        }
    }
"""

from __future__ import annotations

import logging
from typing import Any, Dict

from .base import BaseLightConnector, DeviceNotSelectedError
from .govee_cloud import GoveeCloudConnector
from .govee_lan import GoveeLanConnector

logger = logging.getLogger(__name__)

__all__ = [
    "BaseLightConnector",
    "DeviceNotSelectedError",
    "GoveeLanConnector",
    "GoveeCloudConnector",
    "get_default_connector",
]


def get_default_connector(config: Dict[str, Any] | None = None) -> BaseLightConnector:
    """Return a connector instance based on *config*.

    :param config: The ``connector`` section of the application config.
        Recognised keys:
        * ``type`` – "lan" or "cloud" (default: "lan")
        * ``lan``: ``device_ip``, ``timeout``
        * ``cloud``: ``api_key``, ``device``, ``model``, ``base_url``
    :return: A ready-to-use :class:`BaseLightConnector`.
    """
    if config is None:
        config = {}

    connector_type = str(config.get("type", "lan")).lower()

    if connector_type == "cloud":
        kwargs: Dict[str, Any] = {"api_key": config.get("api_key", "")}
        for key in ("device", "model", "base_url"):
            if config.get(key):
                kwargs[key] = config[key]
        logger.info("Using GoveeCloudConnector for device=%s", kwargs.get("device"))
        return GoveeCloudConnector(**kwargs)

    if connector_type != "lan":
        logger.warning(
            "Unknown connector type %r, falling back to GoveeLanConnector",
            connector_type,
        )

    kwargs = {}
    if config.get("device_ip"):
        kwargs["device_ip"] = config["device_ip"]
    if "timeout" in config:
        kwargs["timeout"] = float(config["timeout"])
    logger.info("Using GoveeLanConnector with kwargs=%s", kwargs)
    return GoveeLanConnector(**kwargs)
