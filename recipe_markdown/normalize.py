"""
Turn raw ingredient/instruction lists into clean, deduplicated ones.

Both lists go through the same stages: per-item cleanup, header/metadata
filtering, exact-duplicate removal, then fragment removal. Fragment removal
is a single greedy pass: each item is compared against the keys accepted so
far and only the first containment it finds is acted on. Chains of partial
overlaps therefore don't always end on the longest string; that's accepted.
"""

import logging
import re
from typing import Iterable, List

from .classify import HEADER_WORDS, is_noise
from .models import RawRecipe
from .text import (
    CHECKBOX,
    collapse_whitespace,
    normalize_parentheses,
    split_items,
    strip_checkboxes,
)

log = logging.getLogger(__name__)

_STEP_HEADERS = "|".join(w for w in HEADER_WORDS if w != "ingredients")

_FUSED_INSTRUCTIONS = re.compile(r"^instructions?", re.I)
_NUMBERED_HEADER_ONLY = re.compile(r"^\d+\s+(?:%s)\s*$" % _STEP_HEADERS, re.I)
_NUMBERED_HEADER_PREFIX = re.compile(r"^\d+\s+(?:%s)\s+" % _STEP_HEADERS, re.I)
_HEADER_ONLY = re.compile(r"^(?:%s)\s*$" % _STEP_HEADERS, re.I)
_HEADER_PREFIX = re.compile(r"^(?:%s)\s+" % _STEP_HEADERS, re.I)
_STEP_NUMBER = re.compile(r"^\d+\.?\s+")

_NUMERIC = re.compile(r"^\d+$")
_SINGLE_LETTER = re.compile(r"^[a-z]$")

INGREDIENT_MIN_LENGTH = 3
INGREDIENT_FRAGMENT_GAP = 5
INSTRUCTION_MIN_LENGTH = 5
INSTRUCTION_FRAGMENT_GAP = 10


def clean_instruction_text(text: str) -> str:
    """
    Strip the header and numbering debris scrapers leave on a step.

    Returns an empty string when nothing but a header is left, e.g.
    "1 Preparation". Step numbers are dropped as the formatter numbers steps
    itself.
    """
    cleaned = strip_checkboxes(text)
    # "InstructionsPreheat the oven" -> "Preheat the oven"
    cleaned = _FUSED_INSTRUCTIONS.sub("", cleaned).strip()

    if _NUMBERED_HEADER_ONLY.match(cleaned):
        return ""
    cleaned = _NUMBERED_HEADER_PREFIX.sub("", cleaned).strip()

    if _HEADER_ONLY.match(cleaned):
        return ""
    cleaned = _HEADER_PREFIX.sub("", cleaned).strip()

    cleaned = _STEP_NUMBER.sub("", cleaned)
    return collapse_whitespace(cleaned)


def _dedupe(items: Iterable[str]) -> List[str]:
    seen = set()
    out = []
    for item in items:
        key = item.strip().lower()
        if key in seen:
            continue
        seen.add(key)
        out.append(item)
    return out


def _drop_fragments(items: List[str], min_length: int, gap: int, allow_letters: bool) -> List[str]:
    # dict keeps insertion order, the scan below depends on it
    seen = {}
    result = []

    for item in items:
        key = item.strip().lower()
        if key in seen:
            continue

        if len(key) < min_length and not (
            _NUMERIC.match(key) or (allow_letters and _SINGLE_LETTER.match(key))
        ):
            continue

        is_fragment = False
        for seen_key in seen:
            if len(key) < len(seen_key) and key in seen_key and len(seen_key) - len(key) >= gap:
                is_fragment = True
                break
            if len(key) > len(seen_key) and seen_key in key and len(key) - len(seen_key) >= gap:
                result.remove(seen[seen_key])
                del seen[seen_key]
                break

        if is_fragment:
            log.debug("dropping fragment %r", item)
            continue

        seen[key] = item
        result.append(item)

    return result


def normalize_ingredients(raw: Iterable[str]) -> List[str]:
    cleaned = []
    for ingredient in raw:
        if not isinstance(ingredient, str) or not ingredient.strip():
            continue
        ingredient = ingredient.strip()
        if CHECKBOX in ingredient:
            pieces = split_items(ingredient)
        else:
            pieces = [ingredient]
        # a line break inside one ingredient is markup layout, not a separator
        cleaned.extend(collapse_whitespace(normalize_parentheses(piece)) for piece in pieces)

    kept = [item for item in cleaned if item and not is_noise(item)]
    return _drop_fragments(
        _dedupe(kept),
        min_length=INGREDIENT_MIN_LENGTH,
        gap=INGREDIENT_FRAGMENT_GAP,
        allow_letters=True,
    )


def normalize_instructions(raw: Iterable[str]) -> List[str]:
    cleaned = []
    for instruction in raw:
        if not isinstance(instruction, str) or not instruction.strip():
            continue
        # several glued steps: clean each one on its own. Two glyphs already
        # mean three pieces, so the threshold is >= 2, not > 2.
        if instruction.count(CHECKBOX) >= 2:
            cleaned.extend(clean_instruction_text(piece) for piece in split_items(instruction))
        else:
            cleaned.append(clean_instruction_text(instruction))

    kept = [item for item in cleaned if item and not is_noise(item)]
    return _drop_fragments(
        _dedupe(kept),
        min_length=INSTRUCTION_MIN_LENGTH,
        gap=INSTRUCTION_FRAGMENT_GAP,
        allow_letters=False,
    )


def clean_recipe(raw: RawRecipe) -> RawRecipe:
    """Return a copy of ``raw`` with both lists normalized."""
    return raw.model_copy(
        update={
            "ingredients": normalize_ingredients(raw.ingredients),
            "instructions": normalize_instructions(raw.instructions),
        }
    )
