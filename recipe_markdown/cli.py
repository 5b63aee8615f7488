"""
Console recipe scraper: fetches each URL, extracts the recipe and prints it
as markdown (or JSON with --json).
"""

import argparse
import logging
import sys

import orjson

from . import config
from .errors import RecipeScrapeError
from .models import RenderedRecipe
from .pipeline import extract_recipe


def print_pretty(r: RenderedRecipe):
    print("=" * 80)
    print(r.title)
    print("=" * 80)
    print(r.markdown)


def build_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(
        prog="recipe-markdown",
        description="Extract recipes from web pages as clean markdown",
    )
    ap.add_argument("url", nargs="+", help="Recipe URL(s)")
    ap.add_argument(
        "--json", action="store_true", help="Output JSON instead of pretty text"
    )
    ap.add_argument(
        "--no-time", dest="include_time", action="store_false", help="Leave out the total time line"
    )
    ap.add_argument(
        "--no-yield", dest="include_yield", action="store_false", help="Leave out the serves line"
    )
    return ap


def main(argv=None):
    args = build_parser().parse_args(argv)
    logging.basicConfig(level=config.LOG_LEVEL, format=config.LOG_FORMAT, stream=sys.stderr)

    error = 0
    for u in args.url:
        try:
            rec = extract_recipe(u, include_time=args.include_time, include_yield=args.include_yield)
        except RecipeScrapeError as e:
            error = 1
            sys.stderr.write(f"[ERROR] {u}: {e}\n")
            continue

        if args.json:
            sys.stdout.flush()
            sys.stdout.buffer.write(
                orjson.dumps(rec.model_dump(exclude_none=True), option=orjson.OPT_INDENT_2)
            )
            sys.stdout.write("\n")
            sys.stdout.flush()
        else:
            print_pretty(rec)

    sys.exit(error)


if __name__ == "__main__":
    main()
