"""
Extract a schema.org Recipe from the structured data embedded in a page:
JSON-LD first, then microdata.
"""

import logging
import re
from typing import Any, Iterator, List, Optional, Union

import extruct
import orjson
from w3lib.html import get_base_url

from .classify import is_noise
from .heuristic import parse_document
from .models import RawRecipe
from .text import CHECKBOX, clean_text, split_items

log = logging.getLogger(__name__)

_ISO_DUR = re.compile(r"P(?:(?P<days>\d+)D)?T(?:(?P<hours>\d+)H)?(?:(?P<minutes>\d+)M)?")


def parse_time(value: Any) -> Optional[int]:
    """
    Minutes from a schema.org duration.

    Accepts a number, an integer string ("45") or an ISO 8601 duration
    ("PT1H30M"). Anything else gives None.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return int(value) if value >= 0 else None
    if not isinstance(value, str):
        return None

    s = value.strip()
    try:
        minutes = int(s)
    except ValueError:
        pass
    else:
        return minutes if minutes >= 0 else None

    m = _ISO_DUR.search(s)
    if m is None:
        return None
    days = int(m.group("days") or 0)
    hours = int(m.group("hours") or 0)
    minutes = int(m.group("minutes") or 0)
    return days * 1440 + hours * 60 + minutes


# ---------- locating the Recipe object ----------

def iter_jsonld_objects(block: Any) -> Iterator[dict]:
    """Yield all dict-like JSON-LD objects of a block, flattening lists and @graph."""
    candidates = block if isinstance(block, list) else [block]
    for obj in candidates:
        if not isinstance(obj, dict):
            continue
        yield obj
        graph = obj.get("@graph")
        if isinstance(graph, list):
            for item in graph:
                if isinstance(item, dict):
                    yield item


def _is_recipe(obj: dict) -> bool:
    t = obj.get("@type")
    return t == "Recipe" or (isinstance(t, list) and "Recipe" in t)


def _find_jsonld_recipe(tree) -> Optional[dict]:
    for i, script in enumerate(tree.xpath('//script[@type="application/ld+json"]')):
        payload = script.xpath("string()").strip()
        if not payload:
            continue
        try:
            block = orjson.loads(payload)
        except orjson.JSONDecodeError as e:
            log.warning("skipping malformed JSON-LD block #%d: %s", i, e)
            continue
        for obj in iter_jsonld_objects(block):
            if _is_recipe(obj):
                return obj
    return None


def _find_microdata_recipe(content: bytes, final_url: str) -> Optional[dict]:
    base = get_base_url(content.decode(errors="ignore"), final_url)
    data = extruct.extract(
        content,
        base_url=base,
        syntaxes=["microdata"],
        uniform=True,
        errors="log",
    )
    for item in data.get("microdata", []):
        if isinstance(item, dict) and _is_recipe(item):
            return item
    return None


# ---------- field mapping ----------

def _coerce_list(v) -> list:
    if v is None:
        return []
    return v if isinstance(v, list) else [v]


def _as_text_list(maybe_list) -> List[str]:
    out = []
    for x in _coerce_list(maybe_list):
        if isinstance(x, dict) and "text" in x:
            x = x["text"]
        if x is None:
            continue
        s = clean_text(str(x))
        if s:
            out.append(s)
    return out


def _extract_instructions(instr) -> List[str]:
    """Flatten various instruction formats (strings, HowToStep arrays, sections)."""
    steps = []

    def add_text(val):
        if val is None:
            return
        s = clean_text(str(val))
        if s:
            steps.append(s)

    if isinstance(instr, str):
        for line in instr.split("\n"):
            add_text(line)
        return steps

    if isinstance(instr, list):
        for it in instr:
            if isinstance(it, dict):
                # HowToSection groups its steps under itemListElement
                if "itemListElement" in it:
                    steps.extend(_extract_instructions(it["itemListElement"]))
                else:
                    add_text(it.get("text") or it.get("name"))
            elif isinstance(it, str):
                add_text(it)
        return steps

    if isinstance(instr, dict):
        return _extract_instructions([instr])

    return steps


def _resplit(items: List[str]) -> List[str]:
    # some plugins ship the whole list as one checkbox- or newline-separated string
    if len(items) == 1 and (CHECKBOX in items[0] or "\n" in items[0]):
        return split_items(items[0])
    return items


def _serves(obj: dict) -> Optional[str]:
    value = obj.get("recipeYield") or obj.get("yield")
    if isinstance(value, list):
        value = next((v for v in value if v not in (None, "")), None)
    if value in (None, ""):
        return None
    return clean_text(str(value)) or None


def _to_raw_recipe(obj: dict, final_url: str, extraction: str) -> RawRecipe:
    title = obj.get("name") or obj.get("headline") or ""
    ingredients = _resplit(_as_text_list(obj.get("recipeIngredient") or obj.get("ingredients")))
    instructions = _resplit(_extract_instructions(obj.get("recipeInstructions")))

    return RawRecipe(
        title=clean_text(str(title)),
        ingredients=[i for i in ingredients if not is_noise(i)],
        instructions=[s for s in instructions if not is_noise(s)],
        serves=_serves(obj),
        total_time_min=parse_time(obj.get("totalTime")),
        source_url=final_url,
        extraction=extraction,
    )


def parse_structured(content: Union[bytes, str], final_url: str) -> Optional[RawRecipe]:
    if isinstance(content, str):
        content = content.encode("utf-8")
    tree = parse_document(content)
    if tree is None:
        return None

    obj = _find_jsonld_recipe(tree)
    if obj is not None:
        return _to_raw_recipe(obj, final_url, "json-ld")

    obj = _find_microdata_recipe(content, final_url)
    if obj is not None:
        return _to_raw_recipe(obj, final_url, "microdata")

    return None
