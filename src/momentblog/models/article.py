"""文章领域模型."""

from typing import Literal

from pydantic import BaseModel, Field

from momentblog.models.microcms import MicroCMSImage


class TocHeading(BaseModel):
    """目录条目."""

    id: str = Field(description="锚点 ID")
    text: str = Field(description="标题文本")
    level: Literal[1, 2, 3] = Field(description="标题级别 (h1/h2/h3)")


class TableOfContents(BaseModel):
    """文章目录."""

    headings: list[TocHeading] = Field(default_factory=list)


class AdjacentArticle(BaseModel):
    """相邻文章引用."""

    slug: str
    title: str


class ArticleNavigation(BaseModel):
    """上一篇/下一篇."""

    previous: AdjacentArticle | None = None
    next: AdjacentArticle | None = None


class ArticleListItem(BaseModel):
    """列表页文章."""

    id: str
    slug: str
    title: str
    excerpt: str = Field(default="", description="纯文本摘要（最多 150 字符）")
    eyecatch_url: str | None = None
    category_names: list[str] = Field(default_factory=list)
    published_at: str = Field(description="发布时间 (ISO 8601)")


class ArticleDetail(BaseModel):
    """详情页文章."""

    id: str
    slug: str
    title: str
    content: str = Field(description="已注入锚点的 HTML")
    eyecatch: MicroCMSImage | None = None
    category_names: list[str] = Field(default_factory=list)
    published_at: str
    table_of_contents: TableOfContents
    navigation: ArticleNavigation


class OpenGraph(BaseModel):
    """社交分享预览字段."""

    title: str
    description: str
    type: str = "article"
    published_time: str | None = None
    images: list[str] = Field(default_factory=list)


class ArticleMetadata(BaseModel):
    """详情页元数据."""

    title: str
    description: str
    open_graph: OpenGraph
