"""murilib.uri.codec
Percent-encoding tables for the parts of a URI.
Each character class re-introduces the characters RFC 3986 allows literally in its context
after a full component encode, and re-escapes the delimiters that must stay encoded after a decode.
"""

import dataclasses
import logging
import re

from typing import Callable
from urllib.parse import quote, unquote

_log: logging.Logger = logging.getLogger(__name__)

Encoder = Callable[[str], str]
Decoder = Callable[[str], str]

# pct-encoded = "%" HEXDIG HEXDIG
_MALFORMED_PCT_PAT: re.Pattern[str] = re.compile(r"%(?![0-9A-Fa-f]{2})")


def encode_uri_component(string: str) -> str:
    """Encodes everything but unreserved characters, as UTF-8 percent-triples with uppercase hex digits."""
    return quote(str(string), safe="", encoding="utf-8", errors="strict")


def decode_uri_component(string: str) -> str:
    """Strict inverse of encode_uri_component. Raises ValueError on malformed input."""
    if _MALFORMED_PCT_PAT.search(string) is not None:
        raise ValueError(f"malformed percent-encoding in {string!r}")
    return unquote(string, encoding="utf-8", errors="strict")


# %uXXXX, the escape for characters outside Latin-1
_UNICODE_ESCAPE_PAT: re.Pattern[str] = re.compile(r"%u([0-9A-Fa-f]{4})")


def _escape_latin1(c: str) -> str:
    if ord(c) > 0xFF:
        return f"%u{ord(c):04X}"
    if c == "~":
        return "%7E"
    return quote(c, safe="@*_+-./", encoding="latin-1")


def encode_latin1(string: str) -> str:
    """ISO-8859-1 counterpart of encode_uri_component. Characters outside Latin-1 become %uXXXX."""
    return "".join(_escape_latin1(c) for c in str(string))


def decode_latin1(string: str) -> str:
    """Inverse of encode_latin1, %uXXXX escapes included."""
    string = _UNICODE_ESCAPE_PAT.sub(lambda m: chr(int(m.group(1), 16)), string)
    if _MALFORMED_PCT_PAT.search(string) is not None:
        raise ValueError(f"malformed percent-encoding in {string!r}")
    return unquote(string, encoding="latin-1", errors="strict")


@dataclasses.dataclass(frozen=True)
class CharacterClass:
    """Which percent-triples to turn back into literals after encoding, and which literals to escape after decoding."""

    encode_map: dict[str, str]
    decode_map: dict[str, str] = dataclasses.field(default_factory=dict)

    @property
    def encode_pattern(self) -> re.Pattern[str]:
        return re.compile("|".join(re.escape(k) for k in self.encode_map), re.IGNORECASE)

    @property
    def decode_pattern(self) -> re.Pattern[str] | None:
        if not self.decode_map:
            return None
        return re.compile("|".join(re.escape(k) for k in self.decode_map))


# segment = *pchar, pchar = unreserved / pct-encoded / sub-delims / ":" / "@"
PATHNAME: CharacterClass = CharacterClass(
    encode_map={
        "%24": "$",
        "%26": "&",
        "%2B": "+",
        "%2C": ",",
        "%3B": ";",
        "%3D": "=",
        "%3A": ":",
        "%40": "@",
    },
    decode_map={
        "/": "%2F",
        "?": "%3F",
        "#": "%23",
    },
)

# reserved = gen-delims / sub-delims
RESERVED: CharacterClass = CharacterClass(
    encode_map={
        # gen-delims
        "%3A": ":",
        "%2F": "/",
        "%3F": "?",
        "%23": "#",
        "%5B": "[",
        "%5D": "]",
        "%40": "@",
        # sub-delims
        "%21": "!",
        "%24": "$",
        "%26": "&",
        "%27": "'",
        "%28": "(",
        "%29": ")",
        "%2A": "*",
        "%2B": "+",
        "%2C": ",",
        "%3B": ";",
        "%3D": "=",
    },
)

# RFC 2141 <other> characters. ":" delimits URN path segments, so it is never decoded.
URNPATH: CharacterClass = CharacterClass(
    encode_map={
        "%21": "!",
        "%24": "$",
        "%27": "'",
        "%28": "(",
        "%29": ")",
        "%2A": "*",
        "%2B": "+",
        "%2C": ",",
        "%3B": ";",
        "%3D": "=",
        "%40": "@",
    },
    decode_map={
        "/": "%2F",
        "?": "%3F",
        "#": "%23",
        ":": "%3A",
    },
)

CHARACTER_CLASSES: dict[str, CharacterClass] = {
    "pathname": PATHNAME,
    "reserved": RESERVED,
    "urnpath": URNPATH,
}

_ENCODE_PATS: dict[str, re.Pattern[str]] = {kind: cc.encode_pattern for kind, cc in CHARACTER_CLASSES.items()}
_DECODE_PATS: dict[str, re.Pattern[str] | None] = {
    kind: cc.decode_pattern for kind, cc in CHARACTER_CLASSES.items()
}


def encode(kind: str, string: str, encoder: Encoder = encode_uri_component) -> str:
    """Encodes string with encoder, then restores the literals the character class allows."""
    table: dict[str, str] = CHARACTER_CLASSES[kind].encode_map
    try:
        encoded: str = encoder(str(string))
    except (ValueError, UnicodeError):
        _log.debug("cannot encode %r as %s, keeping it as is", string, kind)
        return string
    return _ENCODE_PATS[kind].sub(lambda m: table[m.group().upper()], encoded)


def decode(kind: str, string: str, decoder: Decoder = decode_uri_component) -> str:
    """Decodes string with decoder, then re-escapes the delimiters that must stay encoded.
    Decoding is best-effort: on failure the input is returned unchanged.
    """
    try:
        decoded: str = decoder(str(string))
    except (ValueError, UnicodeError):
        _log.debug("cannot decode %r as %s, keeping it as is", string, kind)
        return string
    pattern: re.Pattern[str] | None = _DECODE_PATS[kind]
    if pattern is None:
        return decoded
    table: dict[str, str] = CHARACTER_CLASSES[kind].decode_map
    return pattern.sub(lambda m: table[m.group()], decoded)


def decode_lenient(string: str, decoder: Decoder = decode_uri_component) -> str:
    """Plain component decode that falls back to the input."""
    try:
        return decoder(string)
    except (ValueError, UnicodeError):
        _log.debug("cannot decode %r, keeping it as is", string)
        return string


def encode_path_segment(string: str, encoder: Encoder = encode_uri_component) -> str:
    return encode("pathname", string, encoder)


def decode_path_segment(string: str, decoder: Decoder = decode_uri_component) -> str:
    return decode("pathname", string, decoder)


def encode_urn_path_segment(string: str, encoder: Encoder = encode_uri_component) -> str:
    return encode("urnpath", string, encoder)


def decode_urn_path_segment(string: str, decoder: Decoder = decode_uri_component) -> str:
    return decode("urnpath", string, decoder)


def encode_reserved(string: str, encoder: Encoder = encode_uri_component) -> str:
    return encode("reserved", string, encoder)


def _recode_segment(kind: str, segment: str, encoder: Encoder, decoder: Decoder) -> str:
    try:
        decoded: str = decoder(segment)
    except (ValueError, UnicodeError):
        _log.debug("cannot recode %r as %s, keeping it as is", segment, kind)
        return segment
    return encode(kind, decoded, encoder)


def decode_path(string: str, decoder: Decoder = decode_uri_component) -> str:
    return "/".join(decode_path_segment(s, decoder) for s in str(string).split("/"))


def decode_urn_path(string: str, decoder: Decoder = decode_uri_component) -> str:
    return ":".join(decode_urn_path_segment(s, decoder) for s in str(string).split(":"))


def recode_path(
    string: str, encoder: Encoder = encode_uri_component, decoder: Decoder = decode_uri_component
) -> str:
    """Brings every segment of a path to canonical percent-encoding."""
    return "/".join(_recode_segment("pathname", s, encoder, decoder) for s in str(string).split("/"))


def recode_urn_path(
    string: str, encoder: Encoder = encode_uri_component, decoder: Decoder = decode_uri_component
) -> str:
    return ":".join(_recode_segment("urnpath", s, encoder, decoder) for s in str(string).split(":"))
