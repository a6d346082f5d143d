"""murilib.uri.uri
A mutable URI value. Accessors read with no argument and write (returning the URI, for chaining) with one.
Writes only mark the serialized form stale; it is rebuilt on the next read or when build=True is passed.
"""

import dataclasses
import re

from collections.abc import Callable, Mapping
from typing import Any, Self

from . import hosts, sld
from . import path as paths
from . import query as querystring
from .codec import decode_latin1, decode_lenient, decode_path, decode_path_segment, decode_uri_component, decode_urn_path
from .codec import encode_latin1, encode_uri_component, recode_path, recode_urn_path
from .config import DEFAULT_CONFIG, Config
from .parse import IPV4_PAT, IPV6_PAT, SCHEME_PAT, Parts, build_authority, build_host, build_userinfo, ensure_valid_hostname
from .parse import ensure_valid_port, parse, parse_authority, parse_host, parse_userinfo
from .parse import build as build_parts
from .query import UNSET, QueryData

_IDN_PAT: re.Pattern[str] = re.compile(r"[^a-z0-9._-]", re.IGNORECASE)
_PUNYCODE_PAT: re.Pattern[str] = re.compile(r"xn--", re.IGNORECASE)
_PROTOCOL_SUFFIX_PAT: re.Pattern[str] = re.compile(r":(?://)?$")
_INVALID_TLD_PAT: re.Pattern[str] = re.compile(r"[^a-zA-Z0-9-]")
# suffix may only contain alnum characters
_SUFFIX_PAT: re.Pattern[str] = re.compile(r"\A[a-z0-9%]+\Z", re.IGNORECASE)
_DIRECTORY_PAT: re.Pattern[str] = re.compile(r"\.?/")
_FILENAME_PAT: re.Pattern[str] = re.compile(r"[^/]*$")
_DIRECTORY_LEVEL_PAT: re.Pattern[str] = re.compile(r".*?/")

_AUTHORITY_FIELDS: tuple[str, ...] = ("protocol", "username", "password", "hostname", "port")


def _simple_accessor(field: str) -> Callable[..., Any]:
    """Getter/setter pair for a part stored as-is. Empty values are stored as None and read as ""."""

    def accessor(self: "URI", value: Any = UNSET, build: bool = False) -> Any:
        if value is UNSET:
            return getattr(self._parts, field) or ""
        setattr(self._parts, field, value or None)
        return self.build(defer=not build)

    accessor.__name__ = field
    accessor.__doc__ = f"Gets or sets the {field}."
    return accessor


def _prefix_accessor(field: str, prefix: str) -> Callable[..., Any]:
    """Like _simple_accessor, but strips a leading delimiter ("?" or "#") from new values."""

    def accessor(self: "URI", value: Any = UNSET, build: bool = False) -> Any:
        if value is UNSET:
            return getattr(self._parts, field) or ""
        if value is not None:
            value = str(value)
            if value.startswith(prefix):
                value = value[len(prefix) :]
        setattr(self._parts, field, value)
        return self.build(defer=not build)

    accessor.__name__ = field
    accessor.__doc__ = f"Gets or sets the {field}, without its leading {prefix!r}."
    return accessor


def _segment_args(args: tuple[Any, ...]) -> tuple[int | None, Any]:
    """(index, value) from segment()'s positional arguments: (), (index,), (value,) or (index, value)"""
    if len(args) > 2:
        raise TypeError(f"segment() takes at most 2 positional arguments ({len(args)} given)")
    if not args:
        return None, UNSET
    if len(args) == 1:
        if isinstance(args[0], int) and not isinstance(args[0], bool):
            return args[0], UNSET
        return None, args[0]
    index, value = args
    if index is not None and (not isinstance(index, int) or isinstance(index, bool)):
        raise TypeError(f'Bad segment "{index}", must be 0-based integer')
    return index, value


class URI:
    """A mutable URI reference.

    >>> str(URI("HTTP://www.Example.org:80/a/./b/../c?x=1&x=1").normalize())
    'http://www.example.org/a/c?x=1'
    """

    def __init__(self: Self, url: Any = UNSET, base: Any = UNSET, config: Config | None = None) -> None:
        self._config: Config = config if config is not None else DEFAULT_CONFIG
        self._string: str = ""
        self._deferred_build: bool = False
        self._parts: Parts = Parts.from_config(self._config)

        if url is UNSET:
            url = self._config.location or ""
        elif url is None:
            raise TypeError("None is not a valid argument for URI")

        self.href(url)

        if base is not UNSET:
            self._parts = self.absolute_to(base)._parts
            self.build()

    @classmethod
    def from_string(cls: type[Self], uri: Any, base: Any = UNSET, config: Config | None = None) -> Self:
        return cls(uri, base, config=config)

    def __str__(self: Self) -> str:
        if self._deferred_build:
            self.build()
        return self._string

    def __repr__(self: Self) -> str:
        return f"{self.__class__.__name__}({str(self)!r})"

    def to_string(self: Self) -> str:
        return str(self)

    @property
    def config(self: Self) -> Config:
        return self._config

    def build(self: Self, defer: bool = False) -> Self:
        """Serializes the parts now, or (with defer=True) just marks the serialized form stale."""
        if defer:
            self._deferred_build = True
        else:
            self._string = build_parts(self._parts, self._config)
            self._deferred_build = False
        return self

    def clone(self: Self) -> Self:
        return self.__class__(self, config=self._config)

    def href(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """Gets the serialized URI, or replaces every part from a string, another URI or a mapping of parts."""
        if value is UNSET:
            return str(self)

        self._string = ""
        self._parts = Parts.from_config(self._config)

        if isinstance(value, str):
            parse(value, self._parts, self._config)
        elif isinstance(value, (URI, Mapping)):
            source: Mapping[str, Any] = dataclasses.asdict(value._parts) if isinstance(value, URI) else value
            for field in dataclasses.fields(Parts):
                if field.name != "query" and field.name in source:
                    setattr(self._parts, field.name, source[field.name])
            if self._parts.path is None:
                self._parts.path = ""
            if source.get("query"):
                self.query(source["query"], False)
        else:
            raise TypeError(f"invalid input: {value!r}")

        return self.build(defer=not build)

    def is_(self: Self, what: str) -> bool | None:
        """Identifies the kind of URI or hostname: relative, absolute, domain/name, sld, ip, ip4/ipv4/inet4,
        ip6/ipv6/inet6, idn, punycode, url or urn. Returns None for anything else.
        """
        hostname: str | None = self._parts.hostname
        relative: bool = not self._parts.urn
        ip4 = ip6 = name = is_sld = idn = punycode = False

        if hostname:
            relative = False
            ip4 = IPV4_PAT.match(hostname) is not None
            ip6 = IPV6_PAT.match(hostname) is not None
            name = not (ip4 or ip6)
            is_sld = name and sld.has(hostname)
            idn = name and _IDN_PAT.search(hostname) is not None
            punycode = name and _PUNYCODE_PAT.search(hostname) is not None

        kinds: dict[str, bool] = {
            "relative": relative,
            "absolute": not relative,
            "domain": name,
            "name": name,
            "sld": is_sld,
            "ip": ip4 or ip6,
            "ip4": ip4,
            "ipv4": ip4,
            "inet4": ip4,
            "ip6": ip6,
            "ipv6": ip6,
            "inet6": ip6,
            "idn": idn,
            "url": not self._parts.urn,
            "urn": self._parts.urn,
            "punycode": punycode,
        }
        return kinds.get(what.lower())

    # simple accessors

    username = _simple_accessor("username")
    password = _simple_accessor("password")
    fragment = _prefix_accessor("fragment", "#")
    _plain_protocol = _simple_accessor("protocol")
    _plain_hostname = _simple_accessor("hostname")
    _plain_port = _simple_accessor("port")
    _plain_query = _prefix_accessor("query", "?")

    def protocol(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        if value is not UNSET and value:
            # accept trailing "://"
            value = _PROTOCOL_SUFFIX_PAT.sub("", value)
            if SCHEME_PAT.match(value) is None:
                raise TypeError(
                    f'Protocol "{value}" contains characters other than [A-Z0-9.+-] or doesn\'t start with [A-Z]'
                )
        return self._plain_protocol(value, build)

    scheme = protocol

    def port(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        if self._parts.urn:
            return "" if value is UNSET else self
        if value is not UNSET:
            if value == 0:
                value = None
            if value:
                value = str(value).removeprefix(":")
                ensure_valid_port(value)
        return self._plain_port(value, build)

    def hostname(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        if self._parts.urn:
            return "" if value is UNSET else self
        if value is not UNSET:
            probe: Parts = Parts(prevent_invalid_hostname=self._parts.prevent_invalid_hostname)
            if parse_host(value, probe, self._config) != "/":
                raise TypeError(f'Hostname "{value}" contains characters other than [A-Z0-9.-]')
            value = probe.hostname
            if self._parts.prevent_invalid_hostname:
                ensure_valid_hostname(value, self._parts.protocol, self._config)
        return self._plain_hostname(value, build)

    # compound accessors

    def origin(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """protocol://authority"""
        if self._parts.urn:
            return "" if value is UNSET else self
        if value is UNSET:
            protocol: str = self.protocol()
            authority: str = self.authority()
            if not authority:
                return ""
            return f"{protocol}://{authority}" if protocol else authority
        origin: URI = URI(value, config=self._config)
        self.protocol(origin.protocol()).authority(origin.authority())
        return self.build(defer=not build)

    def host(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """hostname:port"""
        if self._parts.urn:
            return "" if value is UNSET else self
        if value is UNSET:
            return build_host(self._parts) if self._parts.hostname else ""
        if parse_host(value, self._parts, self._config) != "/":
            raise TypeError(f'Hostname "{value}" contains characters other than [A-Z0-9.-]')
        return self.build(defer=not build)

    def authority(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """username:password@hostname:port"""
        if self._parts.urn:
            return "" if value is UNSET else self
        if value is UNSET:
            return build_authority(self._parts, self._config) if self._parts.hostname else ""
        if parse_authority(value or "", self._parts, self._config) != "/":
            raise TypeError(f'Hostname "{value}" contains characters other than [A-Z0-9.-]')
        return self.build(defer=not build)

    def userinfo(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """username:password"""
        if self._parts.urn:
            return "" if value is UNSET else self
        if value is UNSET:
            return build_userinfo(self._parts, self._config).removesuffix("@")
        value = value or ""
        if not value.endswith("@"):
            value += "@"
        parse_userinfo(value, self._parts, self._config)
        return self.build(defer=not build)

    def resource(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """path?query#fragment"""
        if value is UNSET:
            return self.path() + self.search() + self.hash()
        parts: Parts = parse(value, config=self._config)
        self._parts.path = parts.path
        self._parts.query = parts.query
        self._parts.fragment = parts.fragment
        return self.build(defer=not build)

    # fraction accessors

    def subdomain(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """"www" of "www.example.org" """
        if self._parts.urn:
            return "" if value is UNSET else self
        hostname: str = self._parts.hostname or ""
        if value is UNSET:
            if not hostname or self.is_("IP"):
                return ""
            end: int = len(hostname) - len(self.domain()) - 1
            return hostname[: max(end, 0)]

        subdomain: str = hostname[: len(hostname) - len(self.domain())]
        value = value or ""
        if value and not value.endswith("."):
            value += "."
        if ":" in value:
            raise TypeError("Domains cannot contain colons")
        if value:
            ensure_valid_hostname(value, self._parts.protocol, self._config)
        self._parts.hostname = (value + hostname[len(subdomain) :]) or None
        return self.build(defer=not build)

    def domain(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """"example.org" of "www.example.org", "example.co.uk" of "www.example.co.uk" """
        if self._parts.urn:
            return "" if value is UNSET else self
        hostname: str | None = self._parts.hostname
        if value is UNSET:
            if not hostname or self.is_("IP"):
                return ""
            # with one or two labels, the hostname is the domain
            if hostname.count(".") < 2:
                return hostname
            end: int = len(hostname) - len(self.tld()) - 1
            end = hostname.rfind(".", 0, end) + 1
            return hostname[end:]

        if not value:
            raise TypeError("cannot set domain empty")
        if ":" in value:
            raise TypeError("Domains cannot contain colons")
        ensure_valid_hostname(value, self._parts.protocol, self._config)

        if not hostname or self.is_("IP"):
            self._parts.hostname = value
        else:
            domain: str = self.domain()
            self._parts.hostname = hostname[: len(hostname) - len(domain)] + value
        return self.build(defer=not build)

    def tld(self: Self, value: Any = UNSET, build: bool = False) -> str | Self:
        """"org" of "www.example.org", "co.uk" of "www.example.co.uk" """
        if self._parts.urn:
            return "" if value is UNSET else self
        hostname: str | None = self._parts.hostname
        if value is UNSET:
            if not hostname or self.is_("IP"):
                return ""
            return sld.get(hostname) or hostname.rpartition(".")[2]

        if not value:
            raise TypeError("cannot set TLD empty")
        if _INVALID_TLD_PAT.search(value) is not None and not sld.is_sld(value):
            raise TypeError(f'TLD "{value}" contains characters other than [A-Z0-9]')
        if not hostname or self.is_("IP"):
            raise ValueError("cannot set TLD on non-domain host")
        tld: str = self.tld()
        self._parts.hostname = hostname[: len(hostname) - len(tld)] + value
        return self.build(defer=not build)

    def path(self: Self, value: Any = UNSET, build: bool = False, *, decode: bool = False) -> str | Self:
        if value is UNSET:
            result: str = self._parts.path or ("/" if self._parts.hostname else "")
            if not decode:
                return result
            if self._parts.urn:
                return decode_urn_path(result, self._config.decode)
            return decode_path(result, self._config.decode)

        if self._parts.urn:
            self._parts.path = recode_urn_path(value, self._config.encode, self._config.decode) if value else ""
        else:
            self._parts.path = recode_path(value, self._config.encode, self._config.decode) if value else "/"
        return self.build(defer=not build)

    pathname = path

    def directory(self: Self, value: Any = UNSET, build: bool = False, *, decode: bool = False) -> str | Self:
        """"/a/b" of "/a/b/c.html" """
        if self._parts.urn:
            return "" if value is UNSET else self
        path: str = self._parts.path
        if value is UNSET:
            if not path and not self._parts.hostname:
                return ""
            if path == "/":
                return "/"
            end: int = len(path) - len(self.filename()) - 1
            result: str = path[: max(end, 0)] or ("/" if self._parts.hostname else "")
            return decode_path(result, self._config.decode) if decode else result

        directory: str = path[: len(path) - len(self.filename())]
        value = value or ""
        # fully qualified directories begin with a slash
        if not self.is_("relative"):
            value = value or "/"
            if not value.startswith("/"):
                value = f"/{value}"
        # directories always end with a slash
        if value and not value.endswith("/"):
            value += "/"
        value = recode_path(value, self._config.encode, self._config.decode)
        self._parts.path = value + path[len(directory) :]
        return self.build(defer=not build)

    def filename(self: Self, value: Any = UNSET, build: bool = False, *, decode: bool = False) -> str | Self:
        """"c.html" of "/a/b/c.html". Setting a value containing "/" moves the file and normalizes the path."""
        if self._parts.urn:
            return "" if value is UNSET else self
        path: str = self._parts.path
        if value is UNSET:
            if not path or path == "/":
                return ""
            result: str = path.rpartition("/")[2]
            return decode_path_segment(result, self._config.decode) if decode else result

        value = (value or "").removeprefix("/")
        mutated_directory: bool = _DIRECTORY_PAT.search(value) is not None
        filename: str = self.filename()
        self._parts.path = path[: len(path) - len(filename)] + recode_path(
            value, self._config.encode, self._config.decode
        )
        if mutated_directory:
            return self.normalize_path(build)
        return self.build(defer=not build)

    def suffix(self: Self, value: Any = UNSET, build: bool = False, *, decode: bool = False) -> str | Self:
        """"html" of "/a/b/c.html" """
        if self._parts.urn:
            return "" if value is UNSET else self
        path: str = self._parts.path
        if value is UNSET:
            if not path or path == "/":
                return ""
            _, dot, suffix = self.filename().rpartition(".")
            if not dot:
                return ""
            result: str = suffix if _SUFFIX_PAT.match(suffix) else ""
            return decode_path_segment(result, self._config.decode) if decode else result

        value = (value or "").removeprefix(".")
        current: str = self.suffix()
        if not current:
            if not value:
                return self
            self._parts.path += f".{recode_path(value, self._config.encode, self._config.decode)}"
        elif not value:
            self._parts.path = path[: len(path) - len(current) - 1]
        else:
            self._parts.path = path[: len(path) - len(current)] + recode_path(
                value, self._config.encode, self._config.decode
            )
        return self.build(defer=not build)

    def segment(self: Self, *args: Any, build: bool = False) -> Any:
        """Path segments (":"-separated for URNs).
        segment() lists them, segment(i) reads one (negative i counts from the end),
        segment(i, value) replaces one (a falsy value removes it), segment(value) appends one,
        and segment([...]) replaces the whole path.
        """
        index, value = _segment_args(args)
        separator: str = ":" if self._parts.urn else "/"
        path: str = self.path()
        absolute: bool = path.startswith("/")
        segments: list[str] = path.split(separator)

        if absolute:
            segments.pop(0)

        if index is not None and index < 0:
            index = max(len(segments) + index, 0)

        if value is UNSET:
            if index is None:
                return segments
            return segments[index] if index < len(segments) else None

        if isinstance(value, (list, tuple)):
            segments = []
            for item in value:
                # collapse empty elements, but keep a trailing one
                if not item and (not segments or not segments[-1]):
                    continue
                if segments and not segments[-1]:
                    segments.pop()
                segments.append(paths.trim_slashes(item))
        elif index is None or index >= len(segments):
            if value is not None:
                value = paths.trim_slashes(str(value))
                if segments and segments[-1] == "":
                    # overwrite the empty trailing segment to avoid "/foo//bar"
                    segments[-1] = value
                else:
                    segments.append(value)
        elif value:
            segments[index] = paths.trim_slashes(str(value))
        else:
            del segments[index]

        if absolute:
            segments.insert(0, "")

        return self.path(separator.join(segments), build)

    def segment_coded(self: Self, *args: Any, build: bool = False) -> Any:
        """segment() working on percent-decoded values."""
        index, value = _segment_args(args)
        if value is UNSET:
            segments: Any = self.segment(*args)
            if isinstance(segments, list):
                return [decode_lenient(s, self._config.decode) for s in segments]
            return decode_lenient(segments, self._config.decode) if segments is not None else None

        if isinstance(value, (list, tuple)):
            value = [self._config.encode(v) for v in value]
        elif isinstance(value, str):
            value = self._config.encode(value)
        return self.segment(index, value, build=build)

    # query string

    def _parse_query(self: Self) -> QueryData:
        return querystring.parse_query(self._parts.query, self._parts.escape_query_space, self._config.decode)

    def _build_query(self: Self, data: Mapping[str, Any]) -> str:
        return querystring.build_query(
            data, self._parts.duplicate_query_parameters, self._parts.escape_query_space, self._config.encode
        )

    def query(self: Self, value: Any = UNSET, build: bool = False) -> Any:
        """Gets or sets the raw query string.
        query(True) returns the parsed query, query(mapping) serializes a mapping,
        and query(func) replaces the query with func(parsed) (or the mutated parsed dict if func returns None).
        """
        if value is True:
            return self._parse_query()
        if callable(value):
            data: QueryData = self._parse_query()
            result: Mapping[str, Any] | None = value(data)
            self._parts.query = self._build_query(result if result is not None else data)
            return self.build(defer=not build)
        if isinstance(value, Mapping):
            self._parts.query = self._build_query(value)
            return self.build(defer=not build)
        return self._plain_query(value, build)

    def search(self: Self, value: Any = UNSET, build: bool = False) -> Any:
        """query() with the leading "?" """
        result: Any = self.query(value, build)
        return f"?{result}" if isinstance(result, str) and result else result

    def hash(self: Self, value: Any = UNSET, build: bool = False) -> Any:
        """fragment() with the leading "#" """
        result: Any = self.fragment(value, build)
        return f"#{result}" if isinstance(result, str) and result else result

    def set_query(self: Self, name: Any, value: Any = None, build: bool = False) -> Self:
        data: QueryData = self._parse_query()
        querystring.set_query(data, name, value)
        self._parts.query = self._build_query(data)
        return self.build(defer=not build)

    def add_query(self: Self, name: Any, value: Any = None, build: bool = False) -> Self:
        data: QueryData = self._parse_query()
        querystring.add_query(data, name, value)
        self._parts.query = self._build_query(data)
        return self.build(defer=not build)

    def remove_query(self: Self, name: Any, value: Any = UNSET, build: bool = False) -> Self:
        data: QueryData = self._parse_query()
        querystring.remove_query(data, name, value)
        self._parts.query = self._build_query(data)
        return self.build(defer=not build)

    def has_query(self: Self, name: Any, value: Any = UNSET, within_array: bool = False) -> bool:
        return querystring.has_query(self._parse_query(), name, value, within_array)

    set_search = set_query
    add_search = add_query
    remove_search = remove_query
    has_search = has_query

    # normalization

    def normalize(self: Self) -> Self:
        """RFC 3986 section 6 syntax-based normalization of every part."""
        if self._parts.urn:
            return (
                self.normalize_protocol(False)
                .normalize_path(False)
                .normalize_query(False)
                .normalize_fragment(False)
                .build()
            )
        return (
            self.normalize_protocol(False)
            .normalize_hostname(False)
            .normalize_port(False)
            .normalize_path(False)
            .normalize_query(False)
            .normalize_fragment(False)
            .build()
        )

    def normalize_protocol(self: Self, build: bool = False) -> Self:
        if isinstance(self._parts.protocol, str):
            self._parts.protocol = self._parts.protocol.lower()
            self.build(defer=not build)
        return self

    def normalize_hostname(self: Self, build: bool = False) -> Self:
        if self._parts.hostname:
            if self.is_("IDN"):
                self._parts.hostname = hosts.to_ascii(self._parts.hostname)
            elif self.is_("IPv6"):
                self._parts.hostname = hosts.best(self._parts.hostname)
            self._parts.hostname = self._parts.hostname.lower()
            self.build(defer=not build)
        return self

    def normalize_port(self: Self, build: bool = False) -> Self:
        """Drops the port if it's the protocol's default."""
        protocol: str | None = self._parts.protocol
        if isinstance(protocol, str) and self._parts.port == self._config.default_ports.get(protocol):
            self._parts.port = None
            self.build(defer=not build)
        return self

    def normalize_path(self: Self, build: bool = False) -> Self:
        path: str = self._parts.path
        if not path:
            return self
        if self._parts.urn:
            self._parts.path = paths.normalize_urn_path(path, self._config.encode, self._config.decode)
            return self.build(defer=not build)
        if path == "/":
            return self
        self._parts.path = paths.normalize_path(
            path, bool(self.is_("relative")), self._config.encode, self._config.decode
        )
        return self.build(defer=not build)

    normalize_pathname = normalize_path

    def normalize_query(self: Self, build: bool = False) -> Self:
        if isinstance(self._parts.query, str):
            if not self._parts.query:
                self._parts.query = None
            else:
                self.query(self._parse_query())
            self.build(defer=not build)
        return self

    def normalize_fragment(self: Self, build: bool = False) -> Self:
        if not self._parts.fragment:
            self._parts.fragment = None
            self.build(defer=not build)
        return self

    normalize_search = normalize_query
    normalize_hash = normalize_fragment

    def _normalize_with(self: Self, config: Config) -> Self:
        held: Config = self._config
        self._config = config
        try:
            self.normalize()
        finally:
            self._config = held
        return self

    def iso8859(self: Self) -> Self:
        """Normalizes with ISO-8859-1 percent-encoding, expecting UTF-8 encoded input."""
        return self._normalize_with(
            dataclasses.replace(self._config, encode=encode_latin1, decode=decode_uri_component)
        )

    def unicode(self: Self) -> Self:
        """Normalizes with UTF-8 percent-encoding, expecting ISO-8859-1 encoded input."""
        return self._normalize_with(
            dataclasses.replace(self._config, encode=encode_uri_component, decode=decode_latin1)
        )

    def readable(self: Self) -> str:
        """A human-readable rendition: no credentials, Unicode hostname, decoded path, query and fragment.
        Not necessarily a valid URI.
        """
        uri: URI = self.clone()
        # RFC 3986 section 7.5: credentials shouldn't be displayed
        uri.username("").password("").normalize()
        parts: Parts = uri._parts

        result: str = ""
        if parts.protocol:
            result += f"{parts.protocol}://"

        if parts.hostname:
            if uri.is_("punycode"):
                result += hosts.to_unicode(parts.hostname)
                if parts.port:
                    result += f":{parts.port}"
            else:
                result += uri.host()

        if parts.hostname and parts.path and not parts.path.startswith("/"):
            result += "/"

        result += uri.path(decode=True)

        if parts.query:
            pairs: list[str] = []
            for pair in parts.query.split("&"):
                key, equals, value = pair.partition("=")
                item: str = querystring.decode_query(key, parts.escape_query_space, self._config.decode)
                item = item.replace("&", "%26")
                if equals:
                    decoded: str = querystring.decode_query(value, parts.escape_query_space, self._config.decode)
                    item += f"={decoded.replace('&', '%26')}"
                pairs.append(item)
            result += f"?{'&'.join(pairs)}"

        result += querystring.decode_query(uri.hash(), True, self._config.decode)
        return result

    # resolution

    def absolute_to(self: Self, base: Any) -> Self:
        """Resolves this URI against base (RFC 3986 section 5.2)."""
        if self._parts.urn:
            raise ValueError("URNs do not have any generally defined hierarchical components")

        if not isinstance(base, URI):
            base = URI(base, config=self._config)

        resolved: Self = self.clone()
        if resolved._parts.protocol:
            return resolved

        resolved._parts.protocol = base._parts.protocol
        if self._parts.hostname:
            return resolved.build()

        for field in _AUTHORITY_FIELDS:
            setattr(resolved._parts, field, getattr(base._parts, field))

        if not resolved._parts.path:
            resolved._parts.path = base._parts.path
            if not resolved._parts.query:
                resolved._parts.query = base._parts.query
        else:
            if resolved._parts.path == ".." or resolved._parts.path.endswith("/.."):
                resolved._parts.path += "/"
            if not resolved.path().startswith("/"):
                basedir: str = base.directory() or ("/" if base.path().startswith("/") else "")
                resolved._parts.path = (f"{basedir}/" if basedir else "") + resolved._parts.path
                resolved.normalize_path()

        return resolved.build()

    def relative_to(self: Self, base: Any) -> Self:
        """The shortest reference that resolves to this URI against base.
        Returns this URI (normalized) if it doesn't share protocol, credentials and host with base.
        """
        relative: Self = self.clone().normalize()
        if relative._parts.urn:
            raise ValueError("URNs do not have any generally defined hierarchical components")

        base = URI(base, config=self._config).normalize()
        relative_parts: Parts = relative._parts
        base_parts: Parts = base._parts
        relative_path: str = relative.path()
        base_path: str = base.path()

        if not relative_path.startswith("/"):
            raise ValueError("URI is already relative")
        if not base_path.startswith("/"):
            raise ValueError("Cannot calculate a URI relative to another relative URI")

        if relative_parts.protocol == base_parts.protocol:
            relative_parts.protocol = None

        if relative_parts.username != base_parts.username or relative_parts.password != base_parts.password:
            return relative.build()

        if (
            relative_parts.protocol is not None
            or relative_parts.username is not None
            or relative_parts.password is not None
        ):
            return relative.build()

        if relative_parts.hostname == base_parts.hostname and relative_parts.port == base_parts.port:
            relative_parts.hostname = None
            relative_parts.port = None
        else:
            return relative.build()

        if relative_path == base_path:
            relative_parts.path = ""
            return relative.build()

        common: str = paths.common_path(relative_path, base_path)
        # nothing in common: keep the absolute path
        if not common:
            return relative.build()

        parents: str = _DIRECTORY_LEVEL_PAT.sub("../", _FILENAME_PAT.sub("", base_path[len(common) :], count=1))
        relative_parts.path = (parents + relative_path[len(common) :]) or "./"
        return relative.build()

    def equals(self: Self, uri: Any) -> bool:
        """Compares normalized forms. Query parameter order doesn't matter, but value order per name does."""
        one: Self = self.clone().normalize()
        two: URI = URI(uri, config=self._config).normalize()

        if str(one) == str(two):
            return True

        one_query: str = one.query()
        two_query: str = two.query()
        one.query("")
        two.query("")

        if str(one) != str(two):
            return False

        # permuted parameters still have the same length
        if len(one_query) != len(two_query):
            return False

        one_map: QueryData = querystring.parse_query(one_query, self._parts.escape_query_space, self._config.decode)
        two_map: QueryData = querystring.parse_query(two_query, self._parts.escape_query_space, self._config.decode)
        return one_map == two_map

    # per-instance switches

    def prevent_invalid_hostname(self: Self, value: bool) -> Self:
        self._parts.prevent_invalid_hostname = bool(value)
        return self

    def duplicate_query_parameters(self: Self, value: bool) -> Self:
        self._parts.duplicate_query_parameters = bool(value)
        return self

    def escape_query_space(self: Self, value: bool) -> Self:
        self._parts.escape_query_space = bool(value)
        return self

    # helpers working on several URIs

    @classmethod
    def join_paths(cls: type[Self], *uris: Any) -> Self:
        """Joins the paths of several URIs into one normalized path.
        The result is absolute if the first path is empty or absolute.
        """
        inputs: list[URI] = []
        segments: list[str] = []
        non_empty: int = 0

        for item in uris:
            uri: URI = cls(item)
            inputs.append(uri)
            for segment in uri.segment():
                segments.append(segment)
                if segment:
                    non_empty += 1

        if not segments or not non_empty:
            return cls("")

        joined: Self = cls("").segment(segments)
        first_path: str = inputs[0].path()
        if first_path == "" or first_path.startswith("/"):
            joined.path(f"/{joined.path()}")
        return joined.normalize()

    common_path = staticmethod(paths.common_path)
