"""Miscellaneous utility functions."""
from __future__ import annotations

import os
from ipaddress import IPv4Address, ip_address

import ifaddr

# Public root certificate that signs the certificate of every Hue bridge.
HUE_ROOT_CA = os.path.join(
    os.path.dirname(os.path.abspath(__file__)), "hue_root_ca.pem"
)


def interface_addresses() -> list[str]:
    """
    Return local IPv4 addresses usable for multicast discovery.

    Loopback is skipped; the bridge is never on the local host.
    """
    addresses = []

    for iface in ifaddr.get_adapters():
        for addr in iface.ips:
            if not (addr.is_IPv4 and isinstance(addr.ip, str)):
                continue
            if addr.ip == "127.0.0.1":
                continue

            addresses.append(addr.ip)

    return addresses


def get_ca_certs() -> str:
    """Return the CA bundle used to verify bridge certificates.

    The bundled Hue root certificate is used unless PYHUEHUE_CA_CERTS names
    another bundle.
    """
    return os.getenv("PYHUEHUE_CA_CERTS") or HUE_ROOT_CA


def parse_ipv4(value: str) -> IPv4Address | None:
    """Return value as an IPv4 address, or None if it is anything else."""
    try:
        address = ip_address(value.strip())
    except (AttributeError, ValueError):
        return None
    return address if isinstance(address, IPv4Address) else None
