import logging
from urllib.parse import quote

from fastapi import APIRouter, HTTPException, Request

from app.config import Config
from app.models.extract_request import ExtractRequest
from app.models.extract_response import ExtractResponse
from app.models.plugin import PluginView
from app.routers.pages import limiter
from app.services.directory import load_plugin
from app.services.slug import InvalidPluginURL, extract_plugin_slug

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api", tags=["API"])


@router.post("/extract", response_model=ExtractResponse, summary="Extract a plugin slug from a URL")
async def extract(body: ExtractRequest) -> ExtractResponse:
    try:
        slug = extract_plugin_slug(body.url)
    except InvalidPluginURL as exc:
        logger.info("Rejected plugin URL", extra={"plugin_url": body.url})
        raise HTTPException(status_code=400, detail=str(exc))

    return ExtractResponse(slug=slug, guide_url=f"/{quote(slug)}")


@router.get(
    "/plugins/{slug}",
    response_model=PluginView,
    summary="Normalised directory metadata for one plugin",
    description=(
        "Fetches `plugin_information` from the WordPress.org directory and "
        "returns it with every field defaulted, plus the derived "
        "`star_count` and `rating_label`.  Upstream failures are reported "
        "as 404, the same as an unknown slug."
    ),
)
@limiter.limit(Config.PLUGIN_PAGE_RATE_LIMIT)
async def plugin_metadata(request: Request, slug: str) -> PluginView:
    plugin = await load_plugin(slug)
    if plugin is None:
        raise HTTPException(status_code=404, detail="Plugin not found.")
    return plugin
