"""Connector for Govee lamps on the local network.

Govee's LAN API speaks JSON over UDP:

* Discovery: a ``scan`` request is multicast to ``239.255.255.250:4001``;
  devices answer on port ``4002`` of the sender.
* Control: commands are sent to port ``4003`` of the device as
  ``{"msg": {"cmd": ..., "data": {...}}}``.

The LAN API has to be enabled per device in the Govee app.  UDP gives
no delivery guarantee; :meth:`GoveeLanConnector._send_command` reports
only whether the datagram could be handed to the OS.
"""

from __future__ import annotations

import ipaddress
import json
import logging
import socket
import time
from typing import Any, Callable, Dict, List, Optional, Sequence

from ..core.speed import SpeedConfig
from ..exceptions import ConfigurationError
from .base import BaseLightConnector, DeviceNotSelectedError, _check_rgb

logger = logging.getLogger(__name__)

MULTICAST_ADDR = "239.255.255.250"
DEVICE_PORT = 4001
CLIENT_PORT = 4002
CONTROL_PORT = 4003
DEFAULT_TIMEOUT = 3.0


def _is_ipv4(value: str) -> bool:
    try:
        ipaddress.IPv4Address(value)
    except ValueError:
        return False
    return True


class GoveeLanConnector(BaseLightConnector):
    """Discover and control Govee lamps over UDP.

    :param device_ip: Address of a known device; skips discovery.
    :param timeout: Seconds to wait for discovery replies.
    :param socket_factory: Callable creating UDP sockets (``socket.socket``).
    """

    def __init__(
        self,
        device_ip: Optional[str] = None,
        timeout: float = DEFAULT_TIMEOUT,
        speed: Optional[SpeedConfig] = None,
        sleep: Callable[[float], None] = time.sleep,
        socket_factory: Callable[..., socket.socket] = socket.socket,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        super().__init__(speed=speed, sleep=sleep)
        self.timeout = float(timeout)
        self._socket_factory = socket_factory
        self._clock = clock
        self._devices: List[Dict[str, Any]] = []
        self._selected: Optional[Dict[str, Any]] = None
        if device_ip is not None:
            if not _is_ipv4(device_ip):
                raise ConfigurationError(f"Invalid IP address format: {device_ip}")
            self._selected = {"ip": device_ip, "port": CONTROL_PORT}

    # ------------------------------------------------------------------ #
    # Discovery
    # ------------------------------------------------------------------ #
    def discover_devices(self) -> List[Dict[str, Any]]:
        """Multicast a scan request and collect replies until the timeout.

        :return: Device dicts as reported by the lamps, with ``ip`` and
            ``port`` of the sender added.
        """
        self._devices = []
        recv_sock = self._socket_factory(socket.AF_INET, socket.SOCK_DGRAM)
        send_sock = self._socket_factory(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            recv_sock.setsockopt(socket.SOL_SOCKET, socket.SO_REUSEADDR, 1)
            recv_sock.bind(("0.0.0.0", CLIENT_PORT))
            send_sock.setsockopt(socket.IPPROTO_IP, socket.IP_MULTICAST_TTL, 2)

            scan = {"msg": {"cmd": "scan", "data": {"account_topic": "reserve"}}}
            send_sock.sendto(json.dumps(scan).encode("utf-8"), (MULTICAST_ADDR, DEVICE_PORT))

            deadline = self._clock() + self.timeout
            while True:
                remaining = deadline - self._clock()
                if remaining <= 0:
                    break
                recv_sock.settimeout(remaining)
                try:
                    payload, (host, port) = recv_sock.recvfrom(1024)
                except socket.timeout:
                    break
                device = self._parse_scan_reply(payload, host, port)
                if device is not None:
                    self._devices.append(device)
        finally:
            recv_sock.close()
            send_sock.close()

        logger.info("Discovered %d Govee device(s)", len(self._devices))
        return list(self._devices)

    @staticmethod
    def _parse_scan_reply(payload: bytes, host: str, port: int) -> Optional[Dict[str, Any]]:
        try:
            data = json.loads(payload.decode("utf-8"))
        except (UnicodeDecodeError, ValueError):
            logger.debug("Ignoring malformed reply from %s:%s", host, port)
            return None
        info = data.get("msg", {}).get("data") if isinstance(data, dict) else None
        if not isinstance(info, dict):
            return None
        device = dict(info)
        device["ip"] = host
        device["port"] = port
        return device

    @property
    def devices(self) -> List[Dict[str, Any]]:
        return list(self._devices)

    @property
    def selected_device(self) -> Optional[Dict[str, Any]]:
        return self._selected

    def select_device(self, index: int) -> None:
        if index < 0 or index >= len(self._devices):
            raise ConfigurationError("Invalid device index")
        self._selected = self._devices[index]

    def select_device_by_ip(self, ip: str) -> None:
        if not _is_ipv4(ip):
            raise ConfigurationError(f"Invalid IP address format: {ip}")
        for device in self._devices:
            if device.get("ip") == ip:
                self._selected = device
                return
        raise ConfigurationError(f"Device with IP {ip} not found")

    def ensure_ready(self) -> None:
        if self._selected is None:
            raise DeviceNotSelectedError("No device selected. Use select_device() first.")

    # ------------------------------------------------------------------ #
    # Commands
    # ------------------------------------------------------------------ #
    def _send_command(self, command: Dict[str, Any]) -> bool:
        self.ensure_ready()
        ip = self._selected["ip"]
        if not _is_ipv4(ip):
            raise ConfigurationError("Invalid device IP address")
        message = json.dumps({"msg": command}).encode("utf-8")
        sock = self._socket_factory(socket.AF_INET, socket.SOCK_DGRAM)
        try:
            sock.sendto(message, (ip, CONTROL_PORT))
        except OSError:
            logger.warning("Failed to send %s to %s", command.get("cmd"), ip, exc_info=True)
            return False
        finally:
            sock.close()
        return True

    def turn(self, on: bool) -> bool:
        return self._send_command({"cmd": "turn", "data": {"value": 1 if on else 0}})

    def set_brightness_now(self, brightness: int) -> bool:
        if brightness < 1 or brightness > 100:
            raise ConfigurationError("Brightness must be between 1 and 100")
        return self._send_command({"cmd": "brightness", "data": {"value": brightness}})

    def set_color(self, rgb: Sequence[int]) -> bool:
        r, g, b = _check_rgb(rgb)
        return self._send_command({
            "cmd": "colorwc",
            "data": {"color": {"r": r, "g": g, "b": b}, "colorTemInKelvin": 0},
        })


__all__ = [
    "GoveeLanConnector",
    "MULTICAST_ADDR",
    "DEVICE_PORT",
    "CLIENT_PORT",
    "CONTROL_PORT",
]
