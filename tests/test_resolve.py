import pytest

from murilib.uri import URI


@pytest.mark.parametrize(
    "url, base, expected",
    [
        ("/a/b", "http://h/x/y", "http://h/a/b"),
        ("c", "http://h/x/y", "http://h/x/c"),
        ("../c", "http://h/a/b/", "http://h/a/c"),
        ("..", "http://h/a/b/c", "http://h/a/"),
        ("?q", "http://h/x/y?old", "http://h/x/y?q"),
        ("", "http://h/x/y?old", "http://h/x/y?old"),
        ("#f", "http://u:p@h:81/x?old", "http://u:p@h:81/x?old#f"),
        ("//other/p", "https://h/x", "https://other/p"),
        ("ftp://o/p", "http://h/", "ftp://o/p"),
    ],
)
def test_absolute_to(url, base, expected):
    assert str(URI(url).absolute_to(base)) == expected
    assert str(URI(url, base)) == expected


def test_absolute_to_returns_a_new_uri():
    uri = URI("c")
    uri.absolute_to(URI("http://h/x/y"))
    assert str(uri) == "c"


def test_absolute_to_rejects_urns():
    with pytest.raises(ValueError):
        URI("mailto:someone@example.org").absolute_to("http://h/")


def test_relative_to_and_back():
    relative = URI("http://h/a/c").relative_to("http://h/a/b/")
    assert str(relative) == "../c"
    assert str(relative.absolute_to("http://h/a/b/")) == "http://h/a/c"


@pytest.mark.parametrize(
    "url, base, expected",
    [
        ("http://h/a/b", "http://h/a/b", ""),
        ("http://h/a/b.html", "http://h/a/", "b.html"),
        ("http://h/a/", "http://h/a/b.html", "./"),
        ("http://h/a/b/c?q#f", "http://h/a/d/e", "../b/c?q#f"),
        ("http://h/x", "http://h/a/b/c", "../../x"),
        ("http://other/a", "http://h/b", "//other/a"),
        ("https://h/a", "http://h/b", "https://h/a"),
        ("http://u@h/a", "http://h/b", "//u@h/a"),
    ],
)
def test_relative_to(url, base, expected):
    assert str(URI(url).relative_to(base)) == expected


def test_relative_to_needs_absolute_paths():
    with pytest.raises(ValueError):
        URI("a/b").relative_to("http://h/")
    with pytest.raises(ValueError):
        URI("http://h/a").relative_to("b/c")
    with pytest.raises(ValueError):
        URI("urn:isbn:1").relative_to("http://h/")


def test_equals_ignores_parameter_order():
    assert URI("http://h/?a=1&b=2").equals("http://h/?b=2&a=1")


def test_equals_respects_value_order():
    assert not URI("http://h/?a=1&a=2").equals("http://h/?a=2&a=1")


@pytest.mark.parametrize(
    "one, two, expected",
    [
        ("HTTP://H:80/a/../b", "http://h/b", True),
        ("http://h/a", "http://h/b", False),
        ("http://h/?a=1", "http://h/?a=2", False),
        ("http://h/?a=1", "http://h/?a=1&b", False),
        ("http://h/?a=1&a=1", "http://h/?a=1", True),
    ],
)
def test_equals(one, two, expected):
    assert URI(one).equals(URI(two)) is expected


def test_join_paths():
    assert str(URI.join_paths("/a/", "b", "c/")) == "/a/b/c/"
    assert str(URI.join_paths("a", "b")) == "a/b"
    assert str(URI.join_paths("/a", "../b")) == "/b"
    assert str(URI.join_paths("", "")) == ""


def test_common_path():
    assert URI.common_path("/a/b/c", "/a/b/d") == "/a/b/"
