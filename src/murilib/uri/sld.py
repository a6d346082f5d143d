"""murilib.uri.sld
Second-level domains, so that compound public suffixes like "co.uk" count as one TLD.
Backed by the ICANN section of the Public Suffix List.
"""

from functools import lru_cache

from publicsuffixlist import PublicSuffixList

_MAXCACHE: int = 256

_PSL: PublicSuffixList = PublicSuffixList(only_icann=True)


@lru_cache(_MAXCACHE)
def _suffix(domain: str) -> str | None:
    """The multi-label public suffix of domain, if something registrable precedes it."""
    lowered: str = domain.lower()
    suffix: str | None = _PSL.publicsuffix(lowered)
    if not suffix or "." not in suffix or _PSL.privatesuffix(lowered) is None:
        return None
    # keep the caller's spelling
    return domain[len(domain) - len(suffix) :]


def has(domain: str) -> bool:
    """Whether domain ends in an SLD and has at least one label in front of it, e.g. "example.co.uk"."""
    return _suffix(domain) is not None


def is_sld(domain: str) -> bool:
    """Whether domain is exactly an SLD, e.g. "co.uk"."""
    return "." in domain and _PSL.is_public(domain.lower())


def get(domain: str) -> str | None:
    """The SLD suffix of domain, e.g. "co.uk" for "www.example.co.uk", else None."""
    return _suffix(domain)
