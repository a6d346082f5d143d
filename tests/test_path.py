import pytest

from murilib.uri.path import common_path, normalize_path, normalize_urn_path, trim_slashes


@pytest.mark.parametrize(
    "path, expected",
    [
        ("/a/b/../c", "/a/c"),
        ("/a/../../b", "/b"),
        ("/a/./b/.", "/a/b/"),
        ("/a/b/..", "/a/"),
        ("/a//b///c", "/a/b/c"),
        ("/%7e/", "/~/"),
        ("../../x", "../../x"),
        ("./a/../b", "b"),
        ("a//b", "a/b"),
        ("/", "/"),
        ("", ""),
    ],
)
def test_normalize_path(path, expected):
    assert normalize_path(path) == expected


def test_leading_parents_are_dropped_for_absolute_uris():
    assert normalize_path("../../x", relative=False) == "/x"


def test_normalize_path_is_idempotent():
    once = normalize_path("/a/./b/../../c/%7e//d/..")
    assert normalize_path(once) == once


def test_normalize_urn_path():
    assert normalize_urn_path("isbn:%7e:a%3Ab") == "isbn:~:a%3Ab"


@pytest.mark.parametrize(
    "one, two, expected",
    [
        ("/a/b/c", "/a/b/d", "/a/b/"),
        ("/a/b", "/a/bc", "/a/"),
        ("/a/b/", "/a/b/c", "/a/b/"),
        ("/x", "/y", "/"),
        ("a", "b", ""),
    ],
)
def test_common_path(one, two, expected):
    assert common_path(one, two) == expected


def test_trim_slashes():
    assert trim_slashes("//a/b//") == "a/b"
    assert trim_slashes("a") == "a"
