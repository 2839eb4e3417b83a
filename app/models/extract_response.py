from pydantic import BaseModel


class ExtractResponse(BaseModel):
    slug: str
    guide_url: str
    """Relative URL of the review guide page for *slug*."""
