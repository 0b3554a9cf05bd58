"""Map client addresses onto distinct loopback addresses."""

from __future__ import annotations

import ipaddress
from typing import Dict, Union

IpLike = Union[str, ipaddress.IPv4Address, ipaddress.IPv6Address]

_FIRST = int(ipaddress.IPv4Address("127.0.0.2"))
# 127.255.255.255 is the broadcast address
_LAST = int(ipaddress.IPv4Address("127.255.255.254"))


class IpTranslator:
    """Assigns each distinct client address its own 127.x.y.z address."""

    def __init__(self) -> None:
        self._first = _FIRST
        self._last_used = _FIRST - 1
        self._last_available = _LAST
        self._map: Dict[Union[ipaddress.IPv4Address, ipaddress.IPv6Address], ipaddress.IPv4Address] = {}

    def _next_ip(self) -> ipaddress.IPv4Address:
        current = self._last_used + 1
        if current > self._last_available:
            current = self._first
        self._last_used = current
        return ipaddress.IPv4Address(current)

    def translate(self, original_ip: IpLike) -> ipaddress.IPv4Address:
        """Return the loopback address for ``original_ip``, allocating one if new."""
        key = ipaddress.ip_address(original_ip)
        found = self._map.get(key)
        if found is not None:
            return found
        new_ip = self._next_ip()
        self._map[key] = new_ip
        return new_ip