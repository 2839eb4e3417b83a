from pydantic import BaseModel, Field


class ExtractRequest(BaseModel):
    url: str = Field(
        description="A WordPress.org plugin URL, e.g. https://wordpress.org/plugins/wp-rss-aggregator/",
        examples=["https://wordpress.org/plugins/wp-rss-aggregator/"],
    )
