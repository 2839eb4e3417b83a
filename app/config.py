"""Service configuration from environment."""

import os


def _str(val: str | None, default: str) -> str:
    if val is None or val.strip() == "":
        return default
    return val.strip()


def _float(val: str | None, default: float) -> float:
    if val is None or val.strip() == "":
        return default
    try:
        return float(val.strip())
    except ValueError:
        return default


def _list(val: str | None, default: list[str]) -> list[str]:
    if val is None or val.strip() == "":
        return default
    return [s.strip().lower() for s in val.split(",") if s.strip()]


class Config:
    """Configuration from env vars."""

    PLUGIN_API_URL: str = _str(os.getenv("PLUGIN_API_URL"), "https://api.wordpress.org/plugins/info/1.2/")
    PLUGIN_API_TIMEOUT: float = _float(os.getenv("PLUGIN_API_TIMEOUT"), 10.0)
    # Hosts allowed as <img> sources on the review guide page.
    IMAGE_DOMAINS: list[str] = _list(os.getenv("IMAGE_DOMAINS"), ["ps.w.org", "s.w.org"])
    PLUGIN_PAGE_RATE_LIMIT: str = _str(os.getenv("PLUGIN_PAGE_RATE_LIMIT"), "30/minute")
