"""Module to discover Hue bridges."""
from __future__ import annotations

import logging
import threading
import time

import requests
from zeroconf import (
    InterfaceChoice,
    IPVersion,
    ServiceBrowser,
    ServiceListener,
    Zeroconf,
)

from .bridge import Bridge
from .exceptions import PyHueException
from .session import Session
from .util import interface_addresses, parse_ipv4

LOG = logging.getLogger(__name__)

SERVICE_TYPE = "_hue._tcp.local."
CLOUD_DISCOVERY_URL = "https://discovery.meethue.com"
REQUESTS_TIMEOUT = 10


class _AddressCollector(ServiceListener):
    """Collect the IPv4 addresses of resolved bridge services."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self.addresses: set[str] = set()

    def add_service(self, zc: Zeroconf, type_: str, name: str) -> None:
        if (info := zc.get_service_info(type_, name)) is None:
            LOG.debug("Could not resolve mDNS service %s", name)
            return
        addresses = info.parsed_addresses(IPVersion.V4Only)
        LOG.debug("mDNS service %s resolved to %s", name, addresses)
        with self._lock:
            self.addresses.update(addresses)

    update_service = add_service

    def remove_service(self, zc: Zeroconf, type_: str, name: str) -> None:
        pass

    def snapshot(self) -> set[str]:
        with self._lock:
            return set(self.addresses)


def discover_mdns(timeout: float = 5.0) -> set[str]:
    """Browse for `_hue._tcp` services for timeout seconds."""
    collector = _AddressCollector()
    try:
        zeroconf = Zeroconf(
            interfaces=interface_addresses() or InterfaceChoice.All,
            ip_version=IPVersion.V4Only,
        )
    except OSError:
        LOG.exception("Unable to start mDNS discovery")
        return set()

    try:
        ServiceBrowser(zeroconf, SERVICE_TYPE, collector)
        time.sleep(timeout)
    finally:
        zeroconf.close()

    return collector.snapshot()


def discover_cloud(timeout: float = REQUESTS_TIMEOUT) -> set[str]:
    """Ask the Hue cloud for bridges registered from this network."""
    try:
        response = requests.get(CLOUD_DISCOVERY_URL, timeout=timeout)
        response.raise_for_status()
        entries = response.json()
    except (requests.RequestException, ValueError) as err:
        LOG.warning("Cloud discovery failed: %s", err)
        return set()

    if not isinstance(entries, list):
        LOG.warning("Unexpected cloud discovery response: %r", entries)
        return set()

    addresses = set()
    for entry in entries:
        if not isinstance(entry, dict):
            continue
        if address := parse_ipv4(str(entry.get("internalipaddress", ""))):
            addresses.add(str(address))
        else:
            LOG.debug("Ignoring cloud discovery entry %r", entry)
    return addresses


def discover_addresses(timeout: float = 5.0) -> set[str]:
    """Return the addresses found by mDNS and by cloud discovery."""
    return discover_mdns(timeout) | discover_cloud()


def discover_bridges(timeout: float = 5.0) -> list[Bridge]:
    """Find Hue bridges on the local network."""
    bridges = []
    for address in sorted(discover_addresses(timeout)):
        try:
            bridge = Bridge.from_address(address, Session(address, retries=1))
        except PyHueException as err:
            LOG.info("Ignoring %s, not a Hue bridge: %r", address, err)
            continue
        LOG.debug("Found %r", bridge)
        bridges.append(bridge)
    return bridges
