import httpx
import pytest

from recipe_markdown.errors import FetchError, UnsupportedSiteError
from recipe_markdown.pipeline import HEADERS, extract_from_html, extract_recipe, fetch, find_recipe

URL = "https://example.com/recipes/pancakes"

HEURISTIC_BODY = """
<h1>Grandma's Pancakes</h1>
<ul class="ingredients"><li>1 cup flour</li><li>1 cup milk</li></ul>
<ol class="instructions"><li>Mix everything into a smooth batter.</li></ol>
"""


def _client(handler):
    return httpx.Client(transport=httpx.MockTransport(handler))


def test_structured_recipe_end_to_end(make_page, pancakes):
    rendered = extract_from_html(make_page(pancakes), URL)

    assert rendered.title == "Fluffy Pancakes"
    assert rendered.serves == "4"
    assert rendered.total_time_min == 90
    assert rendered.markdown.startswith(f"**Link to original recipe:** {URL}\n")
    assert "- 2 cups flour\n- 1 tbsp sugar\n- 2 eggs\n" in rendered.markdown
    assert "1. Whisk the flour and sugar together.\n2. Beat in the eggs until smooth.\n" in rendered.markdown
    assert "Fluffy Pancakes" not in rendered.markdown


def test_empty_structured_ingredients_fall_back_to_heuristic(make_page):
    page = make_page({"@type": "Recipe", "name": "Pancakes", "recipeIngredient": []}, body=HEURISTIC_BODY)

    raw = find_recipe(page, URL)
    assert raw.extraction == "heuristic"
    assert raw.ingredients == ["1 cup flour", "1 cup milk"]

    rendered = extract_from_html(page, URL)
    assert rendered.title == "Grandma's Pancakes"
    assert rendered.serves is None


def test_no_usable_recipe_raises(make_page):
    page = make_page({"@type": "Recipe", "name": "Pancakes", "recipeIngredient": []}, body="<p>Nothing here</p>")
    assert find_recipe(page, URL) is None
    with pytest.raises(UnsupportedSiteError, match="may not be supported"):
        extract_from_html(page, URL)


def test_heuristic_instructions_only_is_unusable():
    page = b"<html><body><ol class='instructions'><li>Boil the water first.</li></ol></body></html>"
    with pytest.raises(UnsupportedSiteError):
        extract_from_html(page, URL)


def test_blank_title_defaults(make_page):
    page = make_page({"@type": "Recipe", "name": "   ", "recipeIngredient": ["2 eggs"]})
    assert extract_from_html(page, URL).title == "Untitled Recipe"


def test_flags_are_passed_to_formatter(make_page, pancakes):
    rendered = extract_from_html(make_page(pancakes), URL, include_time=False, include_yield=False)
    assert "Serves" not in rendered.markdown
    assert "Total Time" not in rendered.markdown
    assert rendered.serves == "4"


def test_extract_recipe_fetches_and_renders(make_page, pancakes):
    page = make_page(pancakes)
    seen = []

    def handler(request):
        seen.append(str(request.url))
        return httpx.Response(200, content=page, headers={"Content-Type": "text/html; charset=utf-8"})

    with _client(handler) as client:
        rendered = extract_recipe(URL, client=client)

    assert seen == [URL]
    assert rendered.title == "Fluffy Pancakes"
    assert URL in rendered.markdown


def test_fetch_returns_final_url_and_body():
    def handler(request):
        return httpx.Response(200, content=b"<html></html>")

    with _client(handler) as client:
        assert fetch(URL, client=client) == (URL, b"<html></html>")


def test_http_error_status_is_fetch_error():
    def handler(request):
        return httpx.Response(404)

    with _client(handler) as client:
        with pytest.raises(FetchError) as exc_info:
            extract_recipe(URL, client=client)

    assert exc_info.value.status_code == 404
    assert str(exc_info.value) == "Failed to fetch: 404 Not Found"


def test_transport_error_is_fetch_error():
    def handler(request):
        raise httpx.ConnectError("connection refused", request=request)

    with _client(handler) as client:
        with pytest.raises(FetchError, match="connection refused") as exc_info:
            extract_recipe(URL, client=client)

    assert exc_info.value.status_code is None


def test_browser_like_headers():
    assert HEADERS["User-Agent"].startswith("Mozilla/5.0")
    assert "text/html" in HEADERS["Accept"]
    assert HEADERS["Accept-Language"].startswith("en")


def _bullets(markdown):
    ingredients = markdown.split("## Ingredients")[1].split("## Instructions")[0]
    return [line[2:] for line in ingredients.splitlines() if line.startswith("- ")]


@pytest.mark.parametrize(
    "body, expected",
    [
        (
            '<div class="recipe-ingredients-container"><ul>'
            "<li>2 cups stock</li><li>1 onion, diced</li></ul></div>",
            ["2 cups stock", "1 onion, diced"],
        ),
        (
            '<ul><li class="ingredient">\n  2 cups\n  chicken stock\n</li>'
            '<li class="ingredient">1 onion</li></ul>',
            ["2 cups chicken stock", "1 onion"],
        ),
    ],
)
def test_heuristic_ingredients_read_back_from_markdown(make_page, body, expected):
    rendered = extract_from_html(make_page(body=body), URL)
    assert _bullets(rendered.markdown) == expected


def test_multiline_structured_ingredients_read_back_from_markdown(make_page):
    page = make_page({"@type": "Recipe", "name": "Soup", "recipeIngredient": ["2 cups\nchicken stock", "1 onion"]})
    rendered = extract_from_html(page, URL)
    assert _bullets(rendered.markdown) == ["2 cups chicken stock", "1 onion"]
    assert "- 2 cups chicken stock\n- 1 onion\n" in rendered.markdown
