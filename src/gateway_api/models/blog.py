"""Blog Pydantic models."""

from pydantic import BaseModel, ConfigDict, Field


class BlogSummaryResponse(BaseModel):
    """One catalog entry."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    link: str
    published_at: str = Field(alias="publishedAt")
    excerpt: str
    image_url: str = Field(alias="imageUrl")
    keywords: list[str] = Field(default_factory=list)


class BlogListResponse(BaseModel):
    """Search results; `error` is set when the catalog could not be loaded."""

    items: list[BlogSummaryResponse]
    total: int
    matched: int
    error: str | None = None


class ArticleBodyResponse(BlogSummaryResponse):
    """Extracted article: summary fields plus paragraphs and rendered HTML."""

    id: str
    paragraphs: list[str] = Field(default_factory=list)
    body_html: str = Field(alias="bodyHtml")
