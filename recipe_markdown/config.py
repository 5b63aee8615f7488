import os

USER_AGENT = os.getenv(
    "RECIPE_MARKDOWN_USER_AGENT",
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36",
)
ACCEPT = "text/html,application/xhtml+xml,application/xml;q=0.9,*/*;q=0.8"
ACCEPT_LANGUAGE = "en-US,en;q=0.9"

FETCH_TIMEOUT = float(os.getenv("RECIPE_MARKDOWN_FETCH_TIMEOUT", "20"))

LOG_LEVEL = os.getenv("RECIPE_MARKDOWN_LOG_LEVEL", "INFO").upper()
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

CORS_ORIGINS = [
    origin.strip()
    for origin in os.getenv(
        "RECIPE_MARKDOWN_CORS_ORIGINS",
        "http://localhost:5173,http://127.0.0.1:5173,http://localhost:3000",
    ).split(",")
    if origin.strip()
]
