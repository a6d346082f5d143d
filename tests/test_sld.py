from murilib.uri import sld


def test_has():
    assert sld.has("example.co.uk")
    assert sld.has("www.example.co.uk")
    assert not sld.has("co.uk")
    assert not sld.has("example.org")


def test_is_sld():
    assert sld.is_sld("co.uk")
    assert sld.is_sld("com.au")
    assert not sld.is_sld("example.co.uk")
    assert not sld.is_sld("uk")


def test_get():
    assert sld.get("www.example.co.uk") == "co.uk"
    assert sld.get("shop.example.com.au") == "com.au"
    assert sld.get("example.org") is None


def test_get_keeps_case():
    assert sld.get("WWW.EXAMPLE.CO.UK") == "CO.UK"
    assert sld.has("Example.Co.Uk")
