"""murilib.uri.config
Behaviour switches shared by the parser, the builder and the URI value.
DEFAULT_CONFIG is the process-wide default. A URI reads its flags from the config it was given when it is constructed.
"""

import dataclasses

from typing import Self

from .codec import Decoder, Encoder, decode_latin1, decode_uri_component, encode_latin1, encode_uri_component

# http://www.iana.org/assignments/uri-schemes.html
DEFAULT_PORTS: dict[str, str] = {
    "http": "80",
    "https": "443",
    "ftp": "21",
    "gopher": "70",
    "ws": "80",
    "wss": "443",
}

# Protocols that always require a hostname
HOST_PROTOCOLS: tuple[str, ...] = ("http", "https")


@dataclasses.dataclass
class Config:
    prevent_invalid_hostname: bool = False
    duplicate_query_parameters: bool = False
    # "+" in query strings means space
    escape_query_space: bool = True
    default_ports: dict[str, str] = dataclasses.field(default_factory=lambda: dict(DEFAULT_PORTS))
    host_protocols: tuple[str, ...] = HOST_PROTOCOLS
    encode: Encoder = encode_uri_component
    decode: Decoder = decode_uri_component
    # Used by URI() when no argument is supplied
    location: str | None = None

    def iso8859(self: Self) -> Self:
        """A copy of this config that percent-encodes as ISO-8859-1."""
        return dataclasses.replace(self, encode=encode_latin1, decode=decode_latin1)

    def unicode(self: Self) -> Self:
        """A copy of this config that percent-encodes as UTF-8."""
        return dataclasses.replace(self, encode=encode_uri_component, decode=decode_uri_component)


DEFAULT_CONFIG: Config = Config()
