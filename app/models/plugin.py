from decimal import ROUND_HALF_UP, Decimal
from typing import List, Optional

from pydantic import BaseModel, computed_field

PLUGIN_PAGE_BASE = "https://wordpress.org/plugins/"
REVIEW_PAGE_BASE = "https://wordpress.org/support/plugin/"


class RatingBar(BaseModel):
    """One row of the "N stars" breakdown on the reviews page."""

    stars: int
    count: int
    percent: str  # one decimal, ready for a CSS width


class PluginView(BaseModel):
    """Fully defaulted, render-safe view of one directory plugin."""

    slug: str
    name: str
    version: str = ""
    author: str = ""
    requires: str = ""
    tested: str = ""
    downloaded: int = 0
    rating: float = 0  # 0–100, as stored by the directory
    num_ratings: int = 0
    short_description: str = ""
    icon_url: str
    banner_url: Optional[str] = None
    ratings: List[RatingBar] = []

    @computed_field
    @property
    def star_count(self) -> int:
        """Number of filled star icons (0–5), rounded half up."""
        return int(_stars(self.rating).quantize(Decimal("1"), rounding=ROUND_HALF_UP))

    @computed_field
    @property
    def rating_label(self) -> str:
        stars = _stars(self.rating).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
        return f"{stars} out of 5 stars"

    @property
    def plugin_url(self) -> str:
        return f"{PLUGIN_PAGE_BASE}{self.slug}/"

    @property
    def review_url(self) -> str:
        return f"{REVIEW_PAGE_BASE}{self.slug}/reviews/"


def _stars(rating: float) -> Decimal:
    # Exact value of the float quotient, so 87 / 20 (4.3499...) labels as 4.3
    # and the exact tie 85 / 20 (4.25) rounds up to 4.3.
    return Decimal(rating / 20)
