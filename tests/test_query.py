import re

import pytest

from murilib.uri.query import (
    add_query,
    build_query,
    decode_query,
    encode_query,
    has_query,
    parse_query,
    remove_query,
    set_query,
)


def test_parse_query_collects_repeated_names():
    assert parse_query("?a=1&a=2&b&c=&&") == {"a": ["1", "2"], "b": None, "c": ""}


def test_parse_query_empty():
    assert parse_query(None) == {}
    assert parse_query("") == {}
    assert parse_query("?&&") == {}


def test_parse_query_plus_means_space():
    assert parse_query("q=a+b%20c") == {"q": "a b c"}
    assert parse_query("q=a+b", escape_query_space=False) == {"q": "a+b"}


def test_parse_query_keeps_undecodable_tokens():
    assert parse_query("a=%zz") == {"a": "%zz"}


def test_parse_query_splits_at_first_equals():
    assert parse_query("a=b=c") == {"a": "b=c"}


def test_encode_and_decode_query_tokens():
    assert encode_query("a b&c") == "a+b%26c"
    assert encode_query("a b", escape_query_space=False) == "a%20b"
    assert decode_query("a+b") == "a b"
    assert decode_query("a+b", escape_query_space=False) == "a+b"


def test_build_query_drops_repeated_values():
    data = {"a": ["1", "1", "2"], "b": None, "c": ""}
    assert build_query(data) == "a=1&a=2&b&c="
    assert build_query(data, duplicate_query_parameters=True) == "a=1&a=1&a=2&b&c="


def test_build_query_skips_empty_names():
    assert build_query({"": "x", "a": "1"}) == "a=1"


def test_build_query_stringifies_values():
    assert build_query({"n": 1, "list": (1, 2)}) == "n=1&list=1&list=2"


def test_parse_of_build_keeps_data():
    data = {"a": ["1", "2"], "b": "x y", "c": None}
    assert parse_query(build_query(data)) == data


def test_add_query():
    data = {"a": "1", "b": None}
    add_query(data, "a", "2")
    add_query(data, "a", ["3", "4"])
    add_query(data, "b", "x")
    add_query(data, {"c": "5"})
    assert data == {"a": ["1", "2", "3", "4"], "b": [None, "x"], "c": "5"}


def test_add_query_rejects_bad_names():
    with pytest.raises(TypeError):
        add_query({}, 1, "x")


def test_set_query():
    data = {"a": ["1", "2"]}
    set_query(data, "a", "3")
    set_query(data, {"b": "4", "c": None})
    set_query(data, "d")
    assert data == {"a": "3", "b": "4", "c": None, "d": None}


def test_remove_query_names():
    data = {"a": "1", "b": "2", "c": "3", "x-1": "4", "x-2": "5"}
    remove_query(data, "a")
    remove_query(data, ["b", "missing"])
    remove_query(data, re.compile(r"^x-"))
    assert data == {"c": "3"}


def test_remove_query_values():
    data = {"a": ["1", "2", "3"], "b": "2", "c": "3"}
    remove_query(data, "a", "1")
    remove_query(data, "b", "2")
    remove_query(data, "c", "4")
    assert data == {"a": ["2", "3"], "c": "3"}

    remove_query(data, "a", re.compile(r"\d"))
    assert data == {"c": "3"}

    remove_query(data, {"c": "3"})
    assert data == {}


def test_has_query_existence():
    data = {"a": "1", "b": "", "c": ["1", "2"]}
    assert has_query(data, "a")
    assert has_query(data, "b")
    assert not has_query(data, "d")
    assert has_query(data, "a", True)
    assert has_query(data, "b", False)
    assert has_query(data, "c", True)


def test_has_query_values():
    data = {"a": "1", "c": ["1", "2"]}
    assert has_query(data, "a", "1")
    assert has_query(data, "a", 1)
    assert not has_query(data, "a", "2")
    assert has_query(data, "c", ["2", "1"])
    assert not has_query(data, "c", ["1"])
    assert has_query(data, "c", ["1"], within_array=True)
    assert has_query(data, "c", "2", within_array=True)
    assert not has_query(data, "c", "2")
    assert has_query(data, "a", re.compile(r"^\d$"))
    assert has_query(data, re.compile(r"^[ac]$"))
    assert has_query(data, "a", lambda value, name, data: value == "1")
    assert has_query(data, {"a": "1"})
