"""
Fetch a recipe page and turn it into a RenderedRecipe.

    fetch -> structured data -> (heuristic fallback) -> validate -> normalize -> format

Either a complete RenderedRecipe comes out or a RecipeScrapeError is raised;
there's no partial result.
"""

import logging
from typing import Optional, Tuple, Union

import httpx

from . import config
from .errors import FetchError, UnsupportedSiteError
from .heuristic import UNTITLED, parse_heuristic
from .markdown import format_recipe_markdown
from .models import RawRecipe, RenderedRecipe
from .normalize import clean_recipe
from .structured import parse_structured

log = logging.getLogger(__name__)

HEADERS = {
    "User-Agent": config.USER_AGENT,
    "Accept": config.ACCEPT,
    "Accept-Language": config.ACCEPT_LANGUAGE,
}


# ---------- fetch ----------

def _get(client: httpx.Client, url: str) -> Tuple[str, bytes]:
    try:
        resp = client.get(url)
        resp.raise_for_status()
    except httpx.HTTPStatusError as e:
        status = e.response.status_code
        raise FetchError(
            f"Failed to fetch: {status} {e.response.reason_phrase}", status_code=status
        ) from e
    except (httpx.HTTPError, httpx.InvalidURL) as e:
        raise FetchError(f"Failed to fetch: {e}") from e
    return str(resp.url), resp.content


def fetch(url: str, client: Optional[httpx.Client] = None) -> Tuple[str, bytes]:
    """GET a page; returns the final URL (after redirects) and the raw body."""
    if client is not None:
        return _get(client, url)
    with httpx.Client(headers=HEADERS, follow_redirects=True, timeout=config.FETCH_TIMEOUT) as client:
        return _get(client, url)


# ---------- extraction ----------

def find_recipe(content: Union[bytes, str], final_url: str) -> Optional[RawRecipe]:
    recipe = parse_structured(content, final_url)
    if recipe is not None and recipe.ingredients:
        log.info("extracted %s recipe from %s", recipe.extraction, final_url)
        return recipe

    log.info("no structured ingredients on %s, trying heuristic extraction", final_url)
    recipe = parse_heuristic(content, final_url)
    if recipe is not None and recipe.ingredients:
        return recipe
    return None


def render_recipe(raw: RawRecipe, include_time: bool = True, include_yield: bool = True) -> RenderedRecipe:
    title = raw.title.strip() or UNTITLED
    recipe = clean_recipe(raw.model_copy(update={"title": title}))
    return RenderedRecipe(
        title=title,
        markdown=format_recipe_markdown(recipe, include_time=include_time, include_yield=include_yield),
        serves=recipe.serves,
        total_time_min=recipe.total_time_min,
    )


def extract_from_html(
    content: Union[bytes, str],
    url: str,
    include_time: bool = True,
    include_yield: bool = True,
) -> RenderedRecipe:
    raw = find_recipe(content, url)
    if raw is None:
        log.warning("no recipe found on %s", url)
        raise UnsupportedSiteError()
    return render_recipe(raw, include_time=include_time, include_yield=include_yield)


def extract_recipe(
    url: str,
    include_time: bool = True,
    include_yield: bool = True,
    client: Optional[httpx.Client] = None,
) -> RenderedRecipe:
    final_url, content = fetch(url, client=client)
    log.debug("fetched %d bytes from %s", len(content), final_url)
    return extract_from_html(content, final_url, include_time=include_time, include_yield=include_yield)
