"""Recipe scraping endpoints."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Request
from pydantic import BaseModel

from recipe_relay.api.dependencies import get_scraper_service
from recipe_relay.middleware.rate_limit import rate_limit_dependency
from recipe_relay.models.recipe import RecipeDocument
from recipe_relay.services.recipe_extractor import extract_recipe
from recipe_relay.services.scraper_service import ScraperService
from recipe_relay.utils.exceptions import ValidationError

logger = logging.getLogger(__name__)
router = APIRouter(tags=["recipes"])


class URLRequest(BaseModel):
    """Request model for URL extraction (JSON body)."""

    url: Optional[str] = None


class HTMLRequest(BaseModel):
    """Request model for extraction from supplied markup."""

    html: str


@router.post("/get-recipe", response_model=RecipeDocument)
async def get_recipe(
    request: Request,
    req: URLRequest,
    _: None = Depends(rate_limit_dependency),
    scraper_service: ScraperService = Depends(get_scraper_service),
) -> RecipeDocument:
    """Fetch a recipe page and return its fields as JSON."""
    if not req.url or not req.url.strip():
        raise ValidationError("Missing URL")

    logger.info(
        "Route /get-recipe called",
        extra={
            "request_id": getattr(request.state, "request_id", None),
            "route": "/get-recipe",
            "params": {"url": req.url[:200]},
        },
    )

    return await scraper_service.scrape(req.url)


@router.post("/recipes/from-html", response_model=RecipeDocument)
async def recipe_from_html(
    req: HTMLRequest,
    _: None = Depends(rate_limit_dependency),
    scraper_service: ScraperService = Depends(get_scraper_service),
) -> RecipeDocument:
    """Extract a recipe from markup the caller already has."""
    return extract_recipe(req.html, scraper_service.selectors)
