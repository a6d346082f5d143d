"""murilib.uri.hosts
Hostname codecs: IDNA (RFC 5891 / UTS #46) and RFC 5952 IPv6 text representation.
"""

import logging

from functools import lru_cache
from ipaddress import IPv6Address

import idna

_log: logging.Logger = logging.getLogger(__name__)

_MAXCACHE: int = 256


@lru_cache(_MAXCACHE)
def to_ascii(host: str) -> str:
    """Converts each Unicode label of host to its "xn--" form. ASCII labels are left alone.
    Hosts that no IDNA profile accepts are returned unchanged.
    """
    if host.isascii():
        return host
    try:
        return idna.encode(host, uts46=True).decode("ascii")
    except UnicodeError:
        pass
    try:
        return host.encode("idna").decode("ascii")
    except UnicodeError:
        _log.debug("%r is not a valid IDN, keeping it as is", host)
        return host


@lru_cache(_MAXCACHE)
def to_unicode(host: str) -> str:
    """Inverse of to_ascii."""
    try:
        return idna.decode(host.encode("ascii"))
    except UnicodeError:  # e.g. '::1', 'under_score.example'
        pass
    try:
        return host.encode("ascii").decode("idna")
    except UnicodeError:
        _log.debug("%r is not a valid IDN, keeping it as is", host)
        return host


@lru_cache(_MAXCACHE)
def best(address: str) -> str:
    """Returns the RFC 5952 canonical text form of an IPv6 address (with any zone id preserved).
    Strings that aren't IPv6 addresses are returned unchanged.
    """
    try:
        ip: IPv6Address = IPv6Address(address.strip())
    except ValueError:
        _log.debug("%r is not an IPv6 address, keeping it as is", address)
        return address
    # RFC 5952 section 5
    if ip.ipv4_mapped is not None and ip.scope_id is None:
        return f"::ffff:{ip.ipv4_mapped}"
    return ip.compressed
