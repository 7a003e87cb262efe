"""Connector for Govee lamps via the Govee developer HTTP API.

This connector wraps the public ``developer-api.govee.com`` endpoints.
It needs an API key (requested in the Govee app) plus the device id
and model of the lamp, both available from :meth:`GoveeCloudConnector.list_devices`.

The cloud API is rate limited and adds network latency to every state
change, so it is only suitable for slow speeds.  Use
:class:`~morseflow.connectors.govee_lan.GoveeLanConnector` when the lamp
is reachable on the local network.

For details on the API, see https://developer.govee.com.
"""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

import requests

from ..core.speed import SpeedConfig
from ..exceptions import ConfigurationError
from .base import BaseLightConnector, DeviceNotSelectedError, _check_rgb

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "https://developer-api.govee.com/v1"


class GoveeCloudConnector(BaseLightConnector):
    """Control a Govee lamp through the cloud API.

    :param api_key: Govee developer API key.
    :param device: Device id (MAC-like string).
    :param model: Device model, e.g. ``"H6159"``.
    :param base_url: Base URL of the API.
    """

    def __init__(
        self,
        api_key: str,
        device: Optional[str] = None,
        model: Optional[str] = None,
        base_url: str = DEFAULT_BASE_URL,
        speed: Optional[SpeedConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        session: Optional[requests.Session] = None,
        timeout: float = 10.0,
    ) -> None:
        super().__init__(speed=speed, sleep=sleep)
        if not api_key:
            raise ConfigurationError("A Govee API key is required")
        self.api_key = api_key
        self.device = device
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.session = session or requests.Session()
        self.timeout = timeout

    # ------------------------------------------------------------------ #
    # Low‑level request helper
    # ------------------------------------------------------------------ #
    def _request(self, method: str, path: str, payload: Dict[str, Any] | None = None) -> Dict[str, Any]:
        """Send a request to the Govee API and return the JSON body.

        :raises ConnectionError: If the API returns a non‑200 status.
        """
        url = f"{self.base_url}/{path.lstrip('/')}"
        resp = self.session.request(
            method,
            url,
            json=payload,
            headers={"Govee-API-Key": self.api_key, "User-Agent": "morseflow/0.1"},
            timeout=self.timeout,
        )
        if resp.status_code != 200:
            raise ConnectionError(
                f"Govee API responded with status {resp.status_code} for {url}"
            )
        return resp.json()

    def list_devices(self) -> List[Dict[str, Any]]:
        data = self._request("GET", "devices")
        devices = (data.get("data") or {}).get("devices") or []
        logger.info("Govee account has %d device(s)", len(devices))
        return devices

    def select_device(self, device: str, model: str) -> None:
        self.device = device
        self.model = model

    def ensure_ready(self) -> None:
        if not self.device or not self.model:
            raise DeviceNotSelectedError("No device selected. Use select_device() first.")

    def _control(self, name: str, value: Any) -> bool:
        self.ensure_ready()
        self._request(
            "PUT",
            "devices/control",
            {"device": self.device, "model": self.model, "cmd": {"name": name, "value": value}},
        )
        return True

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def turn(self, on: bool) -> bool:
        return self._control("turn", "on" if on else "off")

    def set_brightness_now(self, brightness: int) -> bool:
        if brightness < 1 or brightness > 100:
            raise ConfigurationError("Brightness must be between 1 and 100")
        return self._control("brightness", brightness)

    def set_color(self, rgb: Sequence[int]) -> bool:
        r, g, b = _check_rgb(rgb)
        return self._control("color", {"r": r, "g": g, "b": b})


__all__ = ["GoveeCloudConnector", "DEFAULT_BASE_URL"]
