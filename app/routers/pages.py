import logging
from urllib.parse import quote

from fastapi import APIRouter, Form, Request
from fastapi.responses import HTMLResponse, PlainTextResponse, RedirectResponse, Response
from slowapi import Limiter
from slowapi.util import get_remote_address

from app.config import Config
from app.services.directory import load_plugin
from app.services.plugin_info import Fallback
from app.services.rendering import render_guide_markdown, templates
from app.services.slug import InvalidPluginURL, extract_plugin_slug

logger = logging.getLogger(__name__)

limiter = Limiter(key_func=get_remote_address)
router = APIRouter(tags=["Pages"])

EXAMPLE_URL = "https://wordpress.org/plugins/wp-rss-aggregator/"


@router.get("/", response_class=HTMLResponse, summary="Landing form")
async def landing(request: Request) -> HTMLResponse:
    return _render_form(request)


@router.post("/", summary="Submit a plugin URL")
async def submit(request: Request, plugin_url: str = Form("")) -> Response:
    """Extract the slug from *plugin_url* and redirect to its review guide.

    Invalid input keeps the user on the form with an inline message.
    """
    try:
        slug = extract_plugin_slug(plugin_url)
    except InvalidPluginURL as exc:
        logger.info("Rejected plugin URL", extra={"plugin_url": plugin_url})
        return _render_form(request, plugin_url=plugin_url, error=str(exc), status_code=400)

    return RedirectResponse(url=f"/{quote(slug)}", status_code=303)


@router.get("/{slug}", response_class=HTMLResponse, summary="Review guide for one plugin")
@limiter.limit(Config.PLUGIN_PAGE_RATE_LIMIT)
async def plugin_page(request: Request, slug: str) -> HTMLResponse:
    plugin = await load_plugin(slug)
    if plugin is None:
        return templates.TemplateResponse(
            request, "not_found.html", {"slug": slug}, status_code=404
        )

    return templates.TemplateResponse(
        request,
        "plugin.html",
        {"plugin": plugin, "placeholder_icon": Fallback.ICON.value},
    )


@router.get("/{slug}/guide.md", response_class=PlainTextResponse, summary="Review guide as Markdown")
@limiter.limit(Config.PLUGIN_PAGE_RATE_LIMIT)
async def plugin_guide_markdown(request: Request, slug: str) -> PlainTextResponse:
    plugin = await load_plugin(slug)
    if plugin is None:
        return PlainTextResponse(f'Plugin "{slug}" not found.\n', status_code=404)

    return PlainTextResponse(render_guide_markdown(plugin), media_type="text/markdown")


def _render_form(
    request: Request, plugin_url: str = "", error: str = "", status_code: int = 200
) -> HTMLResponse:
    return templates.TemplateResponse(
        request,
        "index.html",
        {"plugin_url": plugin_url, "error": error, "example_url": EXAMPLE_URL},
        status_code=status_code,
    )
