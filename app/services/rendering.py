"""Template setup and helpers shared by the page routes."""

import re
from pathlib import Path
from typing import Optional
from urllib.parse import urlparse

from fastapi.templating import Jinja2Templates
from markdownify import markdownify

from app.config import Config
from app.models.plugin import PluginView

TEMPLATES_DIR = Path(__file__).resolve().parent.parent / "templates"

templates = Jinja2Templates(directory=str(TEMPLATES_DIR))


def image_src(url: Optional[str], fallback: Optional[str] = None) -> Optional[str]:
    """Return *url* if it may be used as an ``<img>`` source, else *fallback*.

    Inline ``data:`` images are always allowed; remote images must be served
    over http(s) from a host on the ``IMAGE_DOMAINS`` allow-list.
    """
    if not url:
        return fallback
    if url.startswith("data:image/"):
        return url
    parsed = urlparse(url)
    if parsed.scheme in ("http", "https") and (parsed.hostname or "") in Config.IMAGE_DOMAINS:
        return url
    return fallback


templates.env.globals["image_src"] = image_src


def render_guide_markdown(plugin: PluginView) -> str:
    """Return the step-by-step review instructions for *plugin* as Markdown."""
    html = templates.get_template("guide.html").render(plugin=plugin)
    markdown = markdownify(html, heading_style="ATX").strip()
    return re.sub(r"\n{3,}", "\n\n", markdown) + "\n"
