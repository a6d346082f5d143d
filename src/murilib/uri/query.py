"""murilib.uri.query
application/x-www-form-urlencoded style query strings as an ordered multimap.
A parsed query is a plain dict in first-seen key order. A value is a str, None (name without "="),
or a list of those when the name repeats.
"""

import logging
import re

from collections.abc import Mapping
from typing import Any

from .codec import Decoder, Encoder, decode_uri_component, encode_uri_component
from .config import DEFAULT_CONFIG

_log: logging.Logger = logging.getLogger(__name__)

QueryValue = str | None | list[str | None]
QueryData = dict[str, QueryValue]


class _Unset:
    def __repr__(self) -> str:
        return "<unset>"


UNSET: Any = _Unset()

_AMPERSANDS_PAT: re.Pattern[str] = re.compile(r"&+")
_FUNKY_EDGES_PAT: re.Pattern[str] = re.compile(r"^\?*&*|&+$")


def encode_query(string: Any, escape_query_space: bool | None = None, encode: Encoder = encode_uri_component) -> str:
    if escape_query_space is None:
        escape_query_space = DEFAULT_CONFIG.escape_query_space
    escaped: str = encode(str(string))
    return escaped.replace("%20", "+") if escape_query_space else escaped


def decode_query(string: Any, escape_query_space: bool | None = None, decode: Decoder = decode_uri_component) -> str:
    """Best-effort: weird encodings are returned undecoded."""
    string = str(string)
    if escape_query_space is None:
        escape_query_space = DEFAULT_CONFIG.escape_query_space
    try:
        return decode(string.replace("+", "%20") if escape_query_space else string)
    except (ValueError, UnicodeError):
        _log.debug("cannot decode query token %r, keeping it as is", string)
        return string


def parse_query(
    string: str | None, escape_query_space: bool | None = None, decode: Decoder = decode_uri_component
) -> QueryData:
    """parse_query("a=1&a=2&b&c=") == {"a": ["1", "2"], "b": None, "c": ""}"""
    if not string:
        return {}

    # throw out the funky business - "?"[name"="value"&"]+
    string = _FUNKY_EDGES_PAT.sub("", _AMPERSANDS_PAT.sub("&", string))
    if not string:
        return {}

    items: QueryData = {}
    for pair in string.split("&"):
        raw_name, equals, raw_value = pair.partition("=")
        name: str = decode_query(raw_name, escape_query_space, decode)
        # no "=" is None, according to the WHATWG URL standard's parameter collection
        value: str | None = decode_query(raw_value, escape_query_space, decode) if equals else None
        if name in items:
            current: QueryValue = items[name]
            if not isinstance(current, list):
                current = items[name] = [current]
            current.append(value)
        else:
            items[name] = value
    return items


def _value_key(value: Any) -> str | None:
    return None if value is None else str(value)


def build_query_parameter(
    name: str, value: Any, escape_query_space: bool | None = None, encode: Encoder = encode_uri_component
) -> str:
    # no "=" for None values
    result: str = encode_query(name, escape_query_space, encode)
    if value is not None:
        result += f"={encode_query(value, escape_query_space, encode)}"
    return result


def build_query(
    data: Mapping[str, Any],
    duplicate_query_parameters: bool = False,
    escape_query_space: bool | None = None,
    encode: Encoder = encode_uri_component,
) -> str:
    """Serializes data in its iteration order. List values become repeated parameters,
    with repeated values dropped unless duplicate_query_parameters is set.
    """
    pairs: list[str] = []
    for key, value in data.items():
        if not key:
            continue
        if isinstance(value, (list, tuple)):
            seen: set[str | None] = set()
            for item in value:
                item_key: str | None = _value_key(item)
                if item_key in seen:
                    continue
                pairs.append(build_query_parameter(key, item, escape_query_space, encode))
                if not duplicate_query_parameters:
                    seen.add(item_key)
        else:
            pairs.append(build_query_parameter(key, value, escape_query_space, encode))
    return "&".join(pairs)


def add_query(data: QueryData, name: str | Mapping[str, Any], value: Any = None) -> None:
    """Appends value (or each element of a list value) to the values of name."""
    if isinstance(name, Mapping):
        for key, item in name.items():
            add_query(data, key, item)
        return
    if not isinstance(name, str):
        raise TypeError("add_query() accepts a mapping or a string as the name parameter")

    if name not in data:
        data[name] = list(value) if isinstance(value, tuple) else value
        return
    current: QueryValue = data[name]
    if not isinstance(current, list):
        current = [current]
    if isinstance(value, (list, tuple)):
        current.extend(value)
    else:
        current.append(value)
    data[name] = current


def set_query(data: QueryData, name: str | Mapping[str, Any], value: Any = None) -> None:
    """Replaces all values of name. A missing value is stored as None, which still serializes the name."""
    if isinstance(name, Mapping):
        for key, item in name.items():
            set_query(data, key, item)
        return
    if not isinstance(name, str):
        raise TypeError("set_query() accepts a mapping or a string as the name parameter")
    data[name] = list(value) if isinstance(value, tuple) else value


def filter_values(values: list[str | None], value: Any) -> list[str | None]:
    """values without the elements matching value (a pattern, a list of values or a single value)"""
    if isinstance(value, re.Pattern):
        return [v for v in values if v is None or value.search(v) is None]
    lookup: set[str | None] = {_value_key(v) for v in value} if isinstance(value, (list, tuple)) else {_value_key(value)}
    return [v for v in values if _value_key(v) not in lookup]


def remove_query(data: QueryData, name: Any, value: Any = UNSET) -> None:
    """Removes names entirely, or only some of their values.
    name may be a string, a list of names, a compiled pattern matched against every name,
    or a mapping of name -> value to remove.
    """
    if isinstance(name, (list, tuple)):
        for key in name:
            data.pop(key, None)
    elif isinstance(name, re.Pattern):
        for key in [k for k in data if name.search(k) is not None]:
            del data[key]
    elif isinstance(name, Mapping):
        for key, item in name.items():
            remove_query(data, key, item)
    elif isinstance(name, str):
        if value is UNSET:
            data.pop(name, None)
            return
        if name not in data:
            return
        current: QueryValue = data[name]
        if isinstance(current, list):
            remaining: list[str | None] = filter_values(current, value)
            if remaining:
                data[name] = remaining
            else:
                del data[name]
        elif isinstance(value, re.Pattern):
            if current is not None and value.search(current) is not None:
                del data[name]
        elif isinstance(value, (list, tuple)):
            if len(value) == 1 and _value_key(current) == _value_key(value[0]):
                del data[name]
        elif _value_key(current) == _value_key(value):
            del data[name]
    else:
        raise TypeError("remove_query() accepts a mapping, string, list or pattern as the first parameter")


def array_contains(values: list[str | None], value: Any) -> bool:
    if isinstance(value, (list, tuple)):
        return all(array_contains(values, v) for v in value)
    if isinstance(value, re.Pattern):
        return any(isinstance(v, str) and value.search(v) is not None for v in values)
    return value in values


def _sort_key(value: str | None) -> tuple[int, str]:
    return (0, "") if value is None else (1, value)


def arrays_equal(one: Any, two: Any) -> bool:
    """Same elements with the same multiplicities, in any order."""
    if not isinstance(one, (list, tuple)) or not isinstance(two, (list, tuple)):
        return False
    if len(one) != len(two):
        return False
    return sorted(one, key=_sort_key) == sorted(two, key=_sort_key)


def has_query(data: QueryData, name: Any, value: Any = UNSET, within_array: bool = False) -> bool:
    if isinstance(name, re.Pattern):
        return any(
            name.search(key) is not None and (value is UNSET or has_query(data, key, value)) for key in list(data)
        )
    if isinstance(name, Mapping):
        return all(has_query(data, key, item) for key, item in name.items())
    if not isinstance(name, str):
        raise TypeError("has_query() accepts a string, a pattern or a mapping as the name parameter")

    current: QueryValue = data.get(name)
    if value is UNSET:
        # true if it exists, even if empty
        return name in data
    if isinstance(value, bool):
        # true if it exists and is non-empty
        return value == bool(len(current) if isinstance(current, list) else current)
    if callable(value):
        return bool(value(current, name, data))
    if isinstance(value, (list, tuple)):
        if not isinstance(current, list):
            return False
        return array_contains(current, value) if within_array else arrays_equal(current, value)
    if isinstance(value, re.Pattern):
        if not isinstance(current, list):
            return current is not None and value.search(current) is not None
        return within_array and array_contains(current, value)
    if isinstance(value, (int, float)):
        value = str(value)
    if isinstance(value, str):
        if not isinstance(current, list):
            return current == value
        return within_array and array_contains(current, value)
    raise TypeError("has_query() accepts a bool, string, number, list, pattern or callable as the value parameter")
