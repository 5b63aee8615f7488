import logging
from typing import Optional

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, ConfigDict, Field, HttpUrl

from recipe_markdown import FetchError, UnsupportedSiteError, extract_recipe

log = logging.getLogger(__name__)

router = APIRouter(tags=["recipes"])


class ScrapeRequest(BaseModel):
    url: HttpUrl


class ScrapeResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    title: str
    markdown: str
    serves: Optional[str] = None
    total_time: Optional[int] = Field(default=None, alias="totalTime")


# POST /api/scrape-recipe
@router.post(
    "/api/scrape-recipe",
    response_model=ScrapeResponse,
    response_model_exclude_none=True,
)
def scrape_recipe(body: ScrapeRequest):
    url = str(body.url)
    try:
        rec = extract_recipe(url)
    except FetchError as e:
        log.error("error scraping %s: %s", url, e)
        raise HTTPException(status_code=502, detail=str(e))
    except UnsupportedSiteError as e:
        log.error("error scraping %s: %s", url, e)
        raise HTTPException(status_code=422, detail=str(e))

    return ScrapeResponse(
        title=rec.title,
        markdown=rec.markdown,
        serves=rec.serves,
        total_time=rec.total_time_min,
    )
