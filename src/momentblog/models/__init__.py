"""数据模型."""

from momentblog.models.article import (
    AdjacentArticle,
    ArticleDetail,
    ArticleListItem,
    ArticleMetadata,
    ArticleNavigation,
    OpenGraph,
    TableOfContents,
    TocHeading,
)
from momentblog.models.filters import CategoryFilter
from momentblog.models.microcms import (
    MicroCMSBlog,
    MicroCMSCategory,
    MicroCMSImage,
    MicroCMSListResponse,
)

__all__ = [
    "AdjacentArticle",
    "ArticleDetail",
    "ArticleListItem",
    "ArticleMetadata",
    "ArticleNavigation",
    "CategoryFilter",
    "MicroCMSBlog",
    "MicroCMSCategory",
    "MicroCMSImage",
    "MicroCMSListResponse",
    "OpenGraph",
    "TableOfContents",
    "TocHeading",
]
