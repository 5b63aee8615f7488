"""
Fallback extraction for pages without usable structured data: look for the
markup recipe plugins commonly use, one selector at a time.
"""

import logging
import re
from typing import List, Optional, Sequence, Union

from lxml import etree
from lxml import html as lxml_html
from w3lib.encoding import html_to_unicode

from .classify import is_noise
from .models import RawRecipe
from .text import CHECKBOX, clean_text, split_items

log = logging.getLogger(__name__)

UNTITLED = "Untitled Recipe"

_XML_DECLARATION = re.compile(r"^\s*<\?xml[^>]*\?>")

INGREDIENT_SELECTORS = (
    '[itemprop="recipeIngredient"]',
    ".ingredient",
    ".ingredients li",
    '[class*="ingredient"]',
)
INSTRUCTION_SELECTORS = (
    '[itemprop="recipeInstructions"] li',
    '[itemprop="recipeInstructions"] p',
    ".instruction",
    ".instructions li",
    '[class*="instruction"]',
)


def parse_document(content: Union[bytes, str]):
    """Parse a page into an lxml tree, or None if there's nothing to parse."""
    if isinstance(content, bytes):
        # BOM / <meta charset> sniffing, utf-8 otherwise
        _, content = html_to_unicode(None, content)
    # lxml refuses unicode input carrying an XML encoding declaration
    content = _XML_DECLARATION.sub("", content, count=1)
    if not content.strip():
        return None
    try:
        return lxml_html.document_fromstring(content)
    except (etree.ParserError, ValueError) as e:
        log.warning("could not parse document: %s", e)
        return None


def _item_elements(tree, selector: str):
    """
    Elements matching ``selector``, outermost only. A matched container
    holding a list (e.g. ``div.recipe-ingredients``) stands for its ``li``
    items rather than for its whole text.
    """
    matches = tree.cssselect(selector)
    matched = set(matches)
    for el in matches:
        if any(ancestor in matched for ancestor in el.iterancestors()):
            continue
        # descendant-or-self, so a matched <li> yields itself
        items = el.cssselect("li")
        if items:
            yield from items
        else:
            yield el


def select_texts(tree, selector: str) -> List[str]:
    """Cleaned text of every item matching a CSS selector, in document order."""
    texts = []
    for el in _item_elements(tree, selector):
        text = clean_text(el.text_content())
        if text:
            texts.append(text)
    return texts


def find_title(tree) -> str:
    for h1 in tree.cssselect("h1")[:1]:
        text = clean_text(h1.text_content())
        if text:
            return text
    for meta in tree.cssselect('meta[property="og:title"]'):
        text = clean_text(meta.get("content") or "")
        if text:
            return text
    for title in tree.cssselect("title")[:1]:
        text = clean_text(title.text_content())
        if text:
            return text
    return UNTITLED


def _first_match(tree, selectors: Sequence[str]) -> List[str]:
    for selector in selectors:
        texts = select_texts(tree, selector)
        if texts:
            log.debug("selector %r matched %d elements", selector, len(texts))
            items = [t for t in texts if not is_noise(t)]
            if len(items) == 1 and CHECKBOX in items[0]:
                items = split_items(items[0])
            return items
    return []


def parse_heuristic(content: Union[bytes, str], final_url: str) -> Optional[RawRecipe]:
    tree = parse_document(content)
    if tree is None:
        return None

    ingredients = _first_match(tree, INGREDIENT_SELECTORS)
    instructions = _first_match(tree, INSTRUCTION_SELECTORS)
    if not ingredients and not instructions:
        return None

    return RawRecipe(
        title=find_title(tree),
        ingredients=ingredients,
        instructions=instructions,
        source_url=final_url,
        extraction="heuristic",
    )
