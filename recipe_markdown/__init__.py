"""Extract recipes from web pages and render them as clean markdown."""

from .errors import FetchError, RecipeScrapeError, UnsupportedSiteError
from .models import RawRecipe, RenderedRecipe
from .pipeline import extract_from_html, extract_recipe

__all__ = [
    "FetchError",
    "RawRecipe",
    "RecipeScrapeError",
    "RenderedRecipe",
    "UnsupportedSiteError",
    "extract_from_html",
    "extract_recipe",
]
