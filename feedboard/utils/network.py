import ipaddress
import socket
from collections.abc import Iterator
from urllib.parse import urlparse

from feedboard.core.config import Settings, get_settings

FETCHABLE_SCHEMES = frozenset({"http", "https"})


class HostNotAllowedError(ValueError):
    pass


class UnsafeUrlError(ValueError):
    pass


def _addresses(host: str) -> Iterator[ipaddress.IPv4Address | ipaddress.IPv6Address]:
    try:
        yield ipaddress.ip_address(host)
        return
    except ValueError:
        pass
    for _family, _type, _proto, _canon, sockaddr in socket.getaddrinfo(host, None):
        yield ipaddress.ip_address(sockaddr[0])


def _is_private_host(host: str) -> bool:
    # Unresolvable hosts count as unsafe.
    try:
        return any(
            address.is_private or address.is_loopback or address.is_link_local
            or address.is_reserved or address.is_multicast or address.is_unspecified
            for address in _addresses(host)
        )
    except socket.gaierror:
        return True


def feed_host(url: str) -> str:
    """Lower-cased host of an http(s) feed URL; raises UnsafeUrlError for anything else."""
    parsed = urlparse(url)
    if parsed.scheme not in FETCHABLE_SCHEMES:
        raise UnsafeUrlError(f"Only http/https feed URLs are supported: {url}")
    if not parsed.hostname:
        raise UnsafeUrlError(f"Feed URL host is missing: {url}")
    return parsed.hostname.lower()


def assert_allowed_url(url: str, settings: Settings | None = None) -> None:
    settings = settings or get_settings()
    host = feed_host(url)

    allowlist = settings.allowed_fetch_host_list
    if allowlist and host not in allowlist:
        raise HostNotAllowedError(f"Feed host {host} is not in ALLOWED_FETCH_HOSTS")
    if settings.block_private_hosts and _is_private_host(host):
        raise UnsafeUrlError(f"Feed host {host} resolves to a private or reserved address")
