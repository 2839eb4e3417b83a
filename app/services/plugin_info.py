"""Normalisation of raw plugin-directory metadata into a :class:`PluginView`.

The directory API returns a loosely typed JSON object: any field may be
absent, ``null`` or of an unexpected type (``icons`` is sometimes a list,
``rating`` sometimes a string).  :func:`normalize_plugin` never raises on such
input; every field falls back to a safe default independently.  A payload
that is not a JSON object at all, or the directory's own ``{"error": ...}``
answer, means the plugin could not be found.
"""

import html
import logging
import math
from enum import Enum
from typing import Any, List, Optional

from bs4 import BeautifulSoup

from app.models.plugin import PluginView, RatingBar

logger = logging.getLogger(__name__)


class Fallback(str, Enum):
    """Static fallback values used when a metadata field is missing."""

    PLUGIN_NAME = "Plugin Name"
    # WordPress.org-style grey "cog" icon, embedded so it never needs a fetch.
    ICON = (
        "data:image/svg+xml;base64,"
        "PHN2ZyB3aWR0aD0iMTI4IiBoZWlnaHQ9IjEyOCIgdmlld0JveD0iMCAwIDEyOCAxMjgiIGZpbGw9Im5vbmUiIHht"
        "bG5zPSJodHRwOi8vd3d3LnczLm9yZy8yMDAwL3N2ZyI+CjxyZWN0IHdpZHRoPSIxMjgiIGhlaWdodD0iMTI4IiBy"
        "eD0iOCIgZmlsbD0iIzIzMjgyZCIvPgo8Y2lyY2xlIGN4PSI2NCIgY3k9IjY0IiByPSI0NCIgZmlsbD0iIzM3NGE1"
        "NSIvPgo8Y2lyY2xlIGN4PSI2NCIgY3k9IjY0IiByPSIzMiIgZmlsbD0iIzQ5NWY2YyIvPgo8Y2lyY2xlIGN4PSI2"
        "NCIgY3k9IjY0IiByPSIyMCIgZmlsbD0iIzVjNzM4MSIvPgo8Y2lyY2xlIGN4PSI2NCIgY3k9IjY0IiByPSIxMCIg"
        "ZmlsbD0iI2ZmZiIvPgo8L3N2Zz4="
    )


# Highest resolution first; the order decides which icon renders for plugins
# that only ship part of the set.
_ICON_KEYS = ("2x", "1x", "default")
_BANNER_KEYS = ("high", "low")
_STAR_LEVELS = (5, 4, 3, 2, 1)


def normalize_plugin(raw: Any, slug: str) -> Optional[PluginView]:
    """Return a :class:`PluginView` for *raw*, or *None* if the plugin is not found.

    *raw* is whatever the directory client obtained: the decoded JSON body,
    or *None* when the fetch or the JSON decoding failed.
    """
    if not isinstance(raw, dict):
        if raw is not None:
            logger.warning("Unexpected plugin payload type for %s: %s", slug, type(raw).__name__)
        return None
    if "error" in raw and not raw.get("name"):
        logger.info("Directory reported no plugin for %s: %s", slug, raw.get("error"))
        return None

    num_ratings = _as_count(raw.get("num_ratings"))

    return PluginView(
        slug=slug,
        name=decode_entities(_as_text(raw.get("name"))).strip() or Fallback.PLUGIN_NAME.value,
        version=_as_text(raw.get("version")),
        author=_strip_html(_as_text(raw.get("author"))),
        requires=_as_text(raw.get("requires")),
        tested=_as_text(raw.get("tested")),
        downloaded=_as_count(raw.get("downloaded")),
        rating=_as_rating(raw.get("rating")),
        num_ratings=num_ratings,
        short_description=_strip_html(_as_text(raw.get("short_description"))),
        icon_url=resolve_icon(raw.get("icons")),
        banner_url=_first_url(raw.get("banners"), _BANNER_KEYS),
        ratings=_rating_bars(raw.get("ratings"), num_ratings),
    )


def resolve_icon(icons: Any) -> str:
    """Pick the best icon URL from an ``icons`` mapping: 2x, 1x, default, placeholder."""
    return _first_url(icons, _ICON_KEYS) or Fallback.ICON.value


def decode_entities(text: str) -> str:
    """Decode HTML entities (``&#8211;``, ``&amp;`` …); plain text is returned unchanged."""
    return html.unescape(text)


def _strip_html(text: str) -> str:
    """Return the visible text of an HTML fragment (author links, descriptions)."""
    if not text:
        return ""
    if "<" not in text:
        return decode_entities(text).strip()
    return BeautifulSoup(text, "lxml").get_text(" ", strip=True)


def _first_url(mapping: Any, keys: tuple) -> Optional[str]:
    if not isinstance(mapping, dict):
        return None
    for key in keys:
        value = mapping.get(key)
        if isinstance(value, str) and value.strip():
            return value.strip()
    return None


def _as_text(value: Any) -> str:
    if isinstance(value, str):
        return value.strip()
    return ""


def _as_number(value: Any) -> Optional[float]:
    # bool is an int subclass; True is not a rating
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return None
    return None


def _as_count(value: Any) -> int:
    number = _as_number(value)
    if number is None or not math.isfinite(number) or number < 0:
        return 0
    return int(number)


def _as_rating(value: Any) -> float:
    number = _as_number(value)
    if number is None or math.isnan(number):
        return 0
    return min(max(number, 0.0), 100.0)


def _rating_bars(ratings: Any, num_ratings: int) -> List[RatingBar]:
    """Build the 5→1 star breakdown; missing levels count as zero."""
    if not isinstance(ratings, dict):
        ratings = {}
    total = num_ratings or 1
    bars = []
    for stars in _STAR_LEVELS:
        # JSON object keys are strings, but tolerate int keys from other sources
        count = _as_count(ratings.get(str(stars), ratings.get(stars)))
        bars.append(RatingBar(stars=stars, count=count, percent=f"{min(count / total, 1) * 100:.1f}"))
    return bars
