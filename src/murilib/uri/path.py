"""murilib.uri.path
Syntactic path algebra: dot-segment removal, slash collapsing and common prefixes.
"""

import re

from .codec import Decoder, Encoder, decode_uri_component, encode_uri_component, recode_path, recode_urn_path

_SIMPLE_DOTS_PAT: re.Pattern[str] = re.compile(r"(/(\./)+)|(/\.$)")
_SLASHES_PAT: re.Pattern[str] = re.compile(r"/{2,}")
_LEADING_PARENTS_PAT: re.Pattern[str] = re.compile(r"(?:\.\./)+")
_PARENT_PAT: re.Pattern[str] = re.compile(r"/\.\.(?:/|$)")
_EDGE_SLASHES_PAT: re.Pattern[str] = re.compile(r"^/+|/+$")


def normalize_path(
    path: str,
    relative: bool = True,
    encode: Encoder = encode_uri_component,
    decode: Decoder = decode_uri_component,
) -> str:
    """Canonicalizes the percent-encoding of path and removes its dot segments (RFC 3986 section 5.2.4).
    Leading "../" of a relative path can't be resolved and are kept, but only while relative is true,
    i.e. while the URI owning the path has no hostname.
    normalize_path("/a/b/../c") == "/a/c"
    normalize_path("/a/../../b") == "/b"
    normalize_path("../../x") == "../../x"
    """
    if not path or path == "/":
        return path

    path = recode_path(path, encode, decode)

    was_relative: bool = False
    leading_parents: str = ""

    if not path.startswith("/"):
        was_relative = True
        path = f"/{path}"

    # relative files, as opposed to directories
    if path.endswith("/..") or path.endswith("/."):
        path += "/"

    path = _SLASHES_PAT.sub("/", _SIMPLE_DOTS_PAT.sub("/", path))

    if was_relative:
        m: re.Match[str] | None = _LEADING_PARENTS_PAT.match(path, 1)
        if m is not None:
            leading_parents = m.group()

    while True:
        m = _PARENT_PAT.search(path)
        if m is None:
            break
        parent: int = m.start()
        if parent == 0:
            # can't go above the root
            path = path[3:]
            continue
        pos: int = path.rfind("/", 0, parent)
        if pos == -1:
            pos = parent
        path = path[:pos] + path[parent + 3 :]

    if was_relative and relative:
        path = leading_parents + path[1:]

    return path


def normalize_urn_path(
    path: str, encode: Encoder = encode_uri_component, decode: Decoder = decode_uri_component
) -> str:
    """URN paths have no dot segments; only their encoding is canonicalized."""
    if not path:
        return path
    return recode_urn_path(path, encode, decode)


def common_path(one: str, two: str) -> str:
    """The longest common prefix of two paths, cut back to the last "/".
    common_path("/a/b/c", "/a/b/d") == "/a/b/"
    """
    length: int = min(len(one), len(two))
    pos: int = 0
    while pos < length:
        if one[pos] != two[pos]:
            pos -= 1
            break
        pos += 1

    if pos < 1:
        return "/" if one[:1] == two[:1] == "/" else ""

    if one[pos : pos + 1] != "/" or two[pos : pos + 1] != "/":
        pos = one[:pos].rfind("/")

    return one[: pos + 1]


def trim_slashes(text: str) -> str:
    return _EDGE_SLASHES_PAT.sub("", text)
