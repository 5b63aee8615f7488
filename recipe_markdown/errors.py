from typing import Optional


class RecipeScrapeError(Exception):
    """Base class for terminal extraction failures."""


class FetchError(RecipeScrapeError):
    """The page could not be fetched (transport error or non-2xx status)."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class UnsupportedSiteError(RecipeScrapeError):
    """Neither extractor found a usable ingredient list."""

    def __init__(
        self,
        message: str = "Could not extract recipe data from this URL. The site may not be supported.",
    ):
        super().__init__(message)
