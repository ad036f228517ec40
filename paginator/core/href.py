"""Recover authored fragment identifiers from hrefs rewritten by Vivliostyle.

While loading a document, Vivliostyle rewrites every in-document link so that
it routes through its own anchor scheme, e.g.::

    #viv-id-:002fpageableContentDD835404-D8AE-4FC3-A6BE-E1BFD35C6885:002ehtml:0023chapter:0020one

Characters it considers special are written as a colon followed by the four
hex digits of their UTF-16 code unit. The authored fragment is everything
after the ``ehtml:0023`` marker (the escaped ``.html#``).
"""

from __future__ import annotations

import re
from typing import Optional

HREF_MARKER = "ehtml:0023"

_ESCAPE_RE = re.compile(r":[0-9a-fA-F]{4}")


def _decode_units(units: list[int]) -> str:
    # A run of adjacent escapes is one UTF-16 sequence; pair up surrogates.
    data = b"".join(unit.to_bytes(2, "big") for unit in units)
    return data.decode("utf-16-be", errors="surrogatepass")


def unescape_string(text: str) -> str:
    """Replace every ``:XXXX`` run with the character of that UTF-16 code unit.

    Runs that are not exactly a colon and four hex digits stay literal text.
    """
    out: list[str] = []
    pending: list[int] = []
    pos = 0
    for match in _ESCAPE_RE.finditer(text):
        if match.start() != pos:
            if pending:
                out.append(_decode_units(pending))
                pending = []
            out.append(text[pos : match.start()])
        pending.append(int(match.group()[1:], 16))
        pos = match.end()
    if pending:
        out.append(_decode_units(pending))
    out.append(text[pos:])
    return "".join(out)


def demangled_href(href: Optional[str]) -> Optional[str]:
    """Return the authored form of ``href``.

    External links, empty hrefs, and in-page links that were never rewritten
    pass through unchanged.
    """
    if href is None or not href.startswith("#"):
        return href
    index = href.find(HREF_MARKER)
    if index == -1:
        return href
    raw = href[index + len(HREF_MARKER) :]
    return "#" + unescape_string(raw)


__all__ = ["HREF_MARKER", "demangled_href", "unescape_string"]
