"""
String-level cleanup for scraped recipe text.

Everything here is a pure function of its input. The checkbox helpers deal
with the "▢" glyph that some recipe plugins render in front of every list
item; when a page's markup is flattened those glyphs end up glued between
items, so they double as item separators.
"""

import html as ihtml
import re
import unicodedata
from typing import List, Optional

from lxml import etree
from lxml import html as lxml_html

CHECKBOX = "▢"

_CHECKBOX_RUN = re.compile(CHECKBOX + r"\s*")
_ITEM_SEPARATOR = re.compile(CHECKBOX + r"|\n")
_DOUBLE_PARENS = re.compile(r"\(\(([^)]+)\)\)")
_SPACED_DOUBLE_PARENS = re.compile(r"\(\s*\(([^)]+)\)\)")
_PAREN_GROUP = re.compile(r"\(([^)]+)\)")
_WHITESPACE = re.compile(r"\s+")

# ---------- generic scraped-text cleanup ----------

_ZERO_WIDTH = "".join(["\u200b", "\u200c", "\u200d", "\ufeff"])


def _strip_html_tags(s: str) -> str:
    if "<" in s and ">" in s:
        try:
            return lxml_html.fromstring(s).text_content()
        except (etree.ParserError, ValueError):
            return s
    return s


def clean_text(s: Optional[str]) -> Optional[str]:
    if s is None:
        return s
    # 1) Unescape HTML entities (&amp;, &#39;, &nbsp;, &frac12;, etc.)
    s = ihtml.unescape(s)
    # 2) Strip any inline tags left in fields
    s = _strip_html_tags(s)
    # 3) Normalize Unicode (compose accents etc.)
    s = unicodedata.normalize("NFC", s)
    # 4) Remove zero-width & non-breaking spaces
    for z in _ZERO_WIDTH:
        s = s.replace(z, "")
    s = s.replace("\u00a0", " ")
    # 5) Collapse excessive spaces/tabs (but keep newlines, they separate items)
    s = re.sub(r"[ \t\f\v]+", " ", s)
    return s.strip()


def collapse_whitespace(s: str) -> str:
    return _WHITESPACE.sub(" ", s).strip()


# ---------- checkbox glyphs ----------

def strip_checkboxes(s: str) -> str:
    """Remove every checkbox glyph and the whitespace right after it."""
    return _CHECKBOX_RUN.sub("", s).strip()


def split_items(s: str) -> List[str]:
    """
    Split a flattened list on checkbox glyphs and newlines.

    Never returns an empty list: if nothing survives, the original string is
    returned as the only item.
    """
    items = [strip_checkboxes(piece) for piece in _ITEM_SEPARATOR.split(s)]
    items = [item for item in items if item]
    return items or [s]


# ---------- parentheses ----------

def _trim_group(match: "re.Match[str]") -> str:
    return "(" + match.group(1).strip() + ")"


def normalize_parentheses(s: str) -> str:
    """
    Tidy the parenthesized qualifiers of an ingredient line.

    ``((x))`` and ``( (x))`` collapse to ``(x)``, repeated until nothing
    changes since one pass can uncover another doubled pair, and whitespace
    just inside each group is trimmed. Checkboxes go first: they show up
    inside qualifiers too.
    """
    s = strip_checkboxes(s)

    previous = None
    while s != previous:
        previous = s
        s = _DOUBLE_PARENS.sub(r"(\1)", s)
        s = _SPACED_DOUBLE_PARENS.sub(r"(\1)", s)

    s = _PAREN_GROUP.sub(_trim_group, s)
    return s.strip()
