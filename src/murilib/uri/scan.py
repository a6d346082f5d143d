"""murilib.uri.scan
Finding URIs in free text.
"""

import logging
import re

from collections.abc import Callable
from typing import Any

_log: logging.Logger = logging.getLogger(__name__)

# valid "scheme://" or "www."
FIND_URI_START: re.Pattern[str] = re.compile(r"\b(?:([a-z][a-z0-9.+-]*://)|www\.)", re.IGNORECASE)
# everything up to the next whitespace
FIND_URI_END: re.Pattern[str] = re.compile(r"[\s\r\n]|$")
# trailing punctuation captured by FIND_URI_END
FIND_URI_TRIM: re.Pattern[str] = re.compile(r"[`!()\[\]{};:'\".,<>?«»“”„‘’]+$")
# balanced (), [], {} and <> are part of the URI
FIND_URI_PARENS: re.Pattern[str] = re.compile(r"(\([^\)]*\)|\[[^\]]*\]|\{[^}]*\}|<[^>]*>)")

_ATTRIBUTE_OPEN_PAT: re.Pattern[str] = re.compile(r"[a-z0-9-]=[\"']?$", re.IGNORECASE)

Callback = Callable[[str, int, int, str], Any]


def within_string(
    string: str,
    callback: Callback,
    *,
    start: re.Pattern[str] = FIND_URI_START,
    end: re.Pattern[str] = FIND_URI_END,
    trim: re.Pattern[str] = FIND_URI_TRIM,
    parens: re.Pattern[str] = FIND_URI_PARENS,
    ignore: re.Pattern[str] | None = None,
    ignore_html: bool = False,
) -> str:
    """Calls callback(uri, start, end, string) for every URI-looking run of text in string.
    A non-None return value replaces the URI in the result, None leaves it in place.
    With ignore_html, URIs directly following an attribute's "=" are skipped.
    Candidates matching ignore are skipped.

    >>> within_string("see http://example.org/.", lambda uri, *_: f"<{uri}>")
    'see <http://example.org/>.'
    """
    pos: int = 0
    while True:
        match: re.Match[str] | None = start.search(string, pos)
        if match is None:
            break

        begin: int = match.start()
        pos = match.end()

        if ignore_html and _ATTRIBUTE_OPEN_PAT.search(string[max(begin - 3, 0) : begin]) is not None:
            continue

        stop_match: re.Match[str] | None = end.search(string, begin)
        stop: int = stop_match.start() if stop_match is not None else len(string)
        candidate: str = string[begin:stop]

        # make sure we include well balanced parens
        parens_end: int = max((m.end() for m in parens.finditer(candidate)), default=-1)
        if parens_end > -1:
            candidate = candidate[:parens_end] + trim.sub("", candidate[parens_end:], count=1)
        else:
            candidate = trim.sub("", candidate, count=1)

        if len(candidate) <= len(match.group()):
            # only the starting marker, e.g. "www." or "http://"
            continue

        if ignore is not None and ignore.search(candidate) is not None:
            _log.debug("ignoring %r", candidate)
            continue

        stop = begin + len(candidate)
        result: Any = callback(candidate, begin, stop, string)
        if result is None:
            pos = stop
            continue

        result = str(result)
        string = string[:begin] + result + string[stop:]
        pos = begin + len(result)

    return string
