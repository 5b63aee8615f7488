"""
Predicates for lines that look like content but are really page furniture:
section headers ("Ingredients", "1 Preparation") and metadata ("Serves: 4",
"(US cup = 240ml)"). Matching is pattern based and conservative; a missed
header is acceptable, dropping a real ingredient is not.
"""

import re

HEADER_WORDS = ("ingredients", "instructions", "preparation", "directions", "steps", "method")

_HEADER_PATTERNS = [
    re.compile(r"^(?:%s):?\s*$" % "|".join(HEADER_WORDS)),
    re.compile(r"^to make "),
    re.compile(r"^how to "),
    re.compile(r"^\d+\s+(?:%s)\s*$" % "|".join(HEADER_WORDS)),
    # two headers whose separator got lost: "InstructionsPreparation"
    re.compile(r"^instructions?preparation\s*$"),
]

_METADATA_PATTERNS = [
    re.compile(r"^ingredients?\s*\("),
    re.compile(r"^instructions?:?\s*$"),
    re.compile(r"^\(us cup\s*="),
    re.compile(r"^\(.*cup.*\)$"),
    re.compile(r"^serves?:"),
    re.compile(r"^yield:"),
    re.compile(r"^prep time:"),
    re.compile(r"^cook time:"),
    re.compile(r"^total time:"),
]


def _key(text: str) -> str:
    return text.strip().lower()


def is_section_header(text: str) -> bool:
    lower = _key(text)
    return any(p.search(lower) for p in _HEADER_PATTERNS)


def is_metadata(text: str) -> bool:
    lower = _key(text)
    return any(p.search(lower) for p in _METADATA_PATTERNS)


def is_noise(text: str) -> bool:
    return is_section_header(text) or is_metadata(text)
