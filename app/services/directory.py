"""Client for the public WordPress.org plugin directory API."""

import json
import logging
from typing import Any, Optional

import httpx

from app.config import Config
from app.models.plugin import PluginView
from app.services.plugin_info import normalize_plugin
from app.services.slug import is_valid_slug

logger = logging.getLogger(__name__)

MAX_CONTENT_SIZE = 2 * 1024 * 1024  # 2 MB; plugin_information bodies are ~100 KB


async def fetch_plugin_info(
    slug: str,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> Optional[Any]:
    """Fetch ``plugin_information`` for *slug* and return the decoded JSON body.

    A single attempt is made.  Any failure (non-2xx status, transport error
    or timeout, oversized or non-JSON body) is logged and reported as *None*,
    which callers treat the same as "plugin does not exist".
    """
    params = {"action": "plugin_information", "request[slug]": slug}
    try:
        body = await _get(Config.PLUGIN_API_URL, params, transport)
    except httpx.HTTPStatusError as exc:
        logger.warning(
            "Directory API returned HTTP %d for %s", exc.response.status_code, slug
        )
        return None
    except (httpx.HTTPError, RuntimeError) as exc:
        logger.warning("Directory API request failed for %s: %s", slug, exc)
        return None

    try:
        return json.loads(body)
    except ValueError as exc:
        logger.warning("Directory API sent invalid JSON for %s: %s", slug, exc)
        return None


async def _get(url: str, params: dict, transport: Optional[httpx.AsyncBaseTransport]) -> bytes:
    """GET *url* and return the raw body.

    Raises:
        httpx.HTTPError: on network or HTTP errors.
        RuntimeError: if the response body exceeds MAX_CONTENT_SIZE.
    """
    async with httpx.AsyncClient(
        timeout=Config.PLUGIN_API_TIMEOUT, follow_redirects=True, transport=transport
    ) as client:
        async with client.stream("GET", url, params=params) as response:
            logger.info("Directory API GET %s -> %d", response.url, response.status_code)
            response.raise_for_status()

            content_length = response.headers.get("content-length")
            if content_length and content_length.isdigit() and int(content_length) > MAX_CONTENT_SIZE:
                raise RuntimeError("Response body exceeds the maximum allowed size.")

            chunks = []
            total = 0
            async for chunk in response.aiter_bytes():
                total += len(chunk)
                if total > MAX_CONTENT_SIZE:
                    raise RuntimeError("Response body exceeds the maximum allowed size.")
                chunks.append(chunk)

            return b"".join(chunks)


async def load_plugin(slug: str) -> Optional[PluginView]:
    """Fetch and normalise *slug*; *None* means the not-found page should render."""
    if not is_valid_slug(slug):
        logger.info("Rejected malformed plugin slug %r", slug)
        return None
    return normalize_plugin(await fetch_plugin_info(slug), slug)
