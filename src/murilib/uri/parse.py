"""murilib.uri.parse
String <-> Parts conversion for URI references.
The parser is deliberately liberal (RFC 3986 appendix B style delimiter splitting);
strict host and port checks only happen when prevent_invalid_hostname is set.
"""

import dataclasses
import logging
import re

from typing import Self

from . import hosts
from .codec import decode_lenient
from .config import DEFAULT_CONFIG, Config

_log: logging.Logger = logging.getLogger(__name__)

# Each of these ABNF rules is from RFC 3986 or 5234.

# ALPHA = %x41-5A / %x61-7A
_ALPHA: str = r"[A-Za-z]"

# DIGIT = %x30-39
_DIGIT: str = r"[0-9]"

# HEXDIG = DIGIT / "A" / "B" / "C" / "D" / "E" / "F"
_HEXDIG: str = rf"(?:{_DIGIT}|[A-Fa-f])"

# scheme = ALPHA *( ALPHA / DIGIT / "+" / "-" / "." )
_SCHEME: str = rf"{_ALPHA}(?:{_ALPHA}|{_DIGIT}|[+\-.])*"
SCHEME_PAT: re.Pattern[str] = re.compile(rf"\A{_SCHEME}\Z")

# dec-octet = DIGIT / %x31-39 DIGIT / "1" 2DIGIT / "2" %x30-34 DIGIT / "25" %x30-35
_DEC_OCTET: str = rf"(?:{_DIGIT}|[1-9]{_DIGIT}|1{_DIGIT}{{2}}|2[0-4]{_DIGIT}|25[0-5])"

# IPv4address = dec-octet "." dec-octet "." dec-octet "." dec-octet
_IPV4ADDRESS: str = rf"{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}\.{_DEC_OCTET}"
IPV4_PAT: re.Pattern[str] = re.compile(rf"\A{_IPV4ADDRESS}\Z")

# h16 = 1*4HEXDIG
_H16: str = rf"(?:{_HEXDIG}{{1,4}})"

# ls32 = ( h16 ":" h16 ) / IPv4address
_LS32: str = rf"(?:{_H16}:{_H16}|{_IPV4ADDRESS})"

# IPv6address =                                      6( h16 ":" ) ls32
#                       /                       "::" 5( h16 ":" ) ls32
#                       / [               h16 ] "::" 4( h16 ":" ) ls32
#                       / [ *1( h16 ":" ) h16 ] "::" 3( h16 ":" ) ls32
#                       / [ *2( h16 ":" ) h16 ] "::" 2( h16 ":" ) ls32
#                       / [ *3( h16 ":" ) h16 ] "::"    h16 ":"   ls32
#                       / [ *4( h16 ":" ) h16 ] "::"              ls32
#                       / [ *5( h16 ":" ) h16 ] "::"              h16
#                       / [ *6( h16 ":" ) h16 ] "::"
_IPV6ADDRESS: str = (
    "(?:"
    + r"|".join(
        (
                                           rf"(?:{_H16}:){{6}}{_LS32}",
                                         rf"::(?:{_H16}:){{5}}{_LS32}",
                              rf"(?:{_H16})?::(?:{_H16}:){{4}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,1}}{_H16})?::(?:{_H16}:){{3}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,2}}{_H16})?::(?:{_H16}:){{2}}{_LS32}",
            rf"(?:(?:{_H16}:){{0,3}}{_H16})?::(?:{_H16}:){_LS32}",
            rf"(?:(?:{_H16}:){{0,4}}{_H16})?::{_LS32}",
            rf"(?:(?:{_H16}:){{0,5}}{_H16})?::{_H16}",
            rf"(?:(?:{_H16}:){{0,6}}{_H16})?::",
        )
    )
    + ")"
)

# IPv6 with an optional zone id (RFC 6874, unescaped) and surrounding whitespace
IPV6_PAT: re.Pattern[str] = re.compile(rf"\A\s*{_IPV6ADDRESS}(?:%.+)?\s*\Z")

# Characters outside ALPHA / DIGIT / "." / "-" / ":" / "_". Anything else in a hostname must come from IDNA.
INVALID_HOSTNAME_PAT: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9.\-:_]")

_PORT_PAT: re.Pattern[str] = re.compile(rf"\A{_DIGIT}+\Z")


@dataclasses.dataclass
class Parts:
    """The decomposed form of a URI reference. Owned by exactly one URI."""

    protocol: str | None = None
    username: str | None = None
    password: str | None = None
    hostname: str | None = None
    port: str | None = None
    path: str = ""
    query: str | None = None
    fragment: str | None = None
    urn: bool = False
    prevent_invalid_hostname: bool = False
    duplicate_query_parameters: bool = False
    escape_query_space: bool = True

    @classmethod
    def from_config(cls: type[Self], config: Config | None = None) -> Self:
        config = config if config is not None else DEFAULT_CONFIG
        return cls(
            prevent_invalid_hostname=config.prevent_invalid_hostname,
            duplicate_query_parameters=config.duplicate_query_parameters,
            escape_query_space=config.escape_query_space,
        )


def ensure_valid_hostname(hostname: str | None, protocol: str | None, config: Config | None = None) -> None:
    """Raises TypeError unless hostname is a DNS-style name (IDNs allowed) or an IP literal.
    Percent-encoded hostnames are technically allowed by RFC 3986, but they aren't part of DNS.
    """
    config = config if config is not None else DEFAULT_CONFIG
    if protocol and protocol in config.host_protocols and not hostname:
        raise TypeError(f"Hostname cannot be empty, if protocol is {protocol}")
    if hostname and INVALID_HOSTNAME_PAT.search(hostname) is not None:
        if INVALID_HOSTNAME_PAT.search(hosts.to_ascii(hostname)) is not None:
            raise TypeError(f'Hostname "{hostname}" contains characters other than [A-Z0-9.-:_]')


def ensure_valid_port(port: str | int | None) -> None:
    """Raises TypeError unless port is empty or an integer in [1, 65535]."""
    if not port:
        return
    if _PORT_PAT.match(str(port)) is not None and 0 < int(port) < 65536:
        return
    raise TypeError(f'Port "{port}" is not a valid port')


def parse(data: str, parts: Parts | None = None, config: Config | None = None) -> Parts:
    """Splits data into parts by structural delimiter, left to right.
    [protocol"://"[username[":"password]"@"]hostname[":"port]"/"?][path]["?"querystring]["#"fragment]
    """
    config = config if config is not None else DEFAULT_CONFIG
    if parts is None:
        parts = Parts.from_config(config)

    string: str = data
    string, hash_, fragment = string.partition("#")
    if hash_:
        parts.fragment = fragment or None

    string, question, query = string.partition("?")
    if question:
        parts.query = query or None

    if string.startswith("//"):
        # scheme-relative
        parts.protocol = None
        string = parse_authority(string[2:], parts, config)
    else:
        pos: int = string.find(":")
        if pos > -1:
            protocol: str | None = string[:pos] or None
            if protocol is not None and SCHEME_PAT.match(protocol) is None:
                # the colon belongs to the path
                _log.debug("%r is not a scheme, treating %r as a path", protocol, string)
                parts.protocol = None
            elif string[pos + 1 : pos + 3] == "//":
                parts.protocol = protocol
                string = parse_authority(string[pos + 3 :], parts, config)
            else:
                parts.protocol = protocol
                string = string[pos + 1 :]
                parts.urn = True

    parts.path = string
    return parts


def parse_host(string: str | None, parts: Parts, config: Config | None = None) -> str:
    """Extracts hostname and port from the front of string into parts and returns the remaining path."""
    string = (string or "").replace("\\", "/")

    pos: int = string.find("/")
    if pos == -1:
        pos = len(string)

    if string.startswith("["):
        # IPv6 host - only [2001:db8::1]:80 is accepted as IPv6 + port
        bracket: int = string.find("]")
        if bracket == -1:
            bracket = pos
        parts.hostname = string[1:bracket] or None
        parts.port = string[bracket + 2 : pos] or None
    else:
        first_colon: int = string.find(":")
        first_slash: int = string.find("/")
        next_colon: int = string.find(":", first_colon + 1)
        if next_colon != -1 and (first_slash == -1 or next_colon < first_slash):
            # multiple colons and no brackets: an IPv6 host without port (not allowed by RFC 3986)
            _log.debug("treating %r as an unbracketed IPv6 host", string[:pos])
            parts.hostname = string[:pos] or None
            parts.port = None
        else:
            hostname, _, port = string[:pos].partition(":")
            parts.hostname = hostname or None
            parts.port = port.partition(":")[0] or None

    if parts.hostname and string[pos : pos + 1] != "/":
        pos += 1
        string = f"/{string}"

    if parts.prevent_invalid_hostname:
        ensure_valid_hostname(parts.hostname, parts.protocol, config)
        ensure_valid_port(parts.port)

    return string[pos:] or "/"


def parse_authority(string: str, parts: Parts, config: Config | None = None) -> str:
    string = parse_userinfo(string, parts, config)
    return parse_host(string, parts, config)


def parse_userinfo(string: str, parts: Parts, config: Config | None = None) -> str:
    """Extracts username and password from the front of string into parts and returns the rest.
    The userinfo ends at the last "@" before the first "/".
    """
    config = config if config is not None else DEFAULT_CONFIG
    first_slash: int = string.find("/")
    pos: int = string.rfind("@", 0, first_slash if first_slash > -1 else len(string))

    if pos > -1:
        username, colon, password = string[:pos].partition(":")
        parts.username = decode_lenient(username, config.decode) if username else None
        parts.password = (
            decode_lenient(password, config.decode) if colon and password.partition(":")[0] else None
        )
        string = string[pos + 1 :]
    else:
        parts.username = None
        parts.password = None

    return string


def build(parts: Parts, config: Config | None = None) -> str:
    """Serializes parts. The inverse of parse, up to percent-encoding canonicalization."""
    result: str = ""
    if parts.protocol:
        result += f"{parts.protocol}:"

    if not parts.urn and (result or parts.hostname):
        result += "//"

    result += build_authority(parts, config)

    if parts.path is not None:
        if not parts.path.startswith("/") and parts.hostname is not None:
            result += "/"
        result += parts.path

    if parts.query:
        result += f"?{parts.query}"
    if parts.fragment:
        result += f"#{parts.fragment}"
    return result


def build_host(parts: Parts) -> str:
    """hostname:port, with IPv6 literals in brackets"""
    if not parts.hostname:
        return ""
    result: str = f"[{parts.hostname}]" if IPV6_PAT.match(parts.hostname) else parts.hostname
    if parts.port:
        result += f":{parts.port}"
    return result


def build_authority(parts: Parts, config: Config | None = None) -> str:
    """userinfo@host:port"""
    return build_userinfo(parts, config) + build_host(parts)


def build_userinfo(parts: Parts, config: Config | None = None) -> str:
    """username:password@"""
    config = config if config is not None else DEFAULT_CONFIG
    result: str = ""
    if parts.username:
        result += config.encode(parts.username)
    if parts.password:
        result += f":{config.encode(parts.password)}"
    if result:
        result += "@"
    return result
