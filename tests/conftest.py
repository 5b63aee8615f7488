import json

import pytest


def _script(block):
    payload = block if isinstance(block, str) else json.dumps(block)
    return f'<script type="application/ld+json">{payload}</script>'


@pytest.fixture
def make_page():
    """Build an HTML page from JSON-LD blocks (dicts, lists or raw strings) and a body."""

    def build(*blocks, body="", head=""):
        scripts = "".join(_script(b) for b in blocks)
        return (
            f"<!DOCTYPE html><html><head>{head}{scripts}</head>"
            f"<body>{body}</body></html>"
        ).encode("utf-8")

    return build


@pytest.fixture
def pancakes():
    return {
        "@context": "https://schema.org",
        "@type": "Recipe",
        "name": "Fluffy Pancakes",
        "recipeYield": ["4", "4 servings"],
        "totalTime": "PT1H30M",
        "recipeIngredient": [
            "Ingredients",
            "2 cups flour",
            "1 tbsp sugar",
            "2 eggs",
        ],
        "recipeInstructions": [
            {"@type": "HowToStep", "text": "Whisk the flour and sugar together."},
            {"@type": "HowToStep", "text": "Beat in the eggs until smooth."},
        ],
    }
