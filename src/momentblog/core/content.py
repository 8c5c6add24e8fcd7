"""内容服务 - 从 microCMS 拉取并转换文章."""

import logging
from collections.abc import AsyncGenerator

from momentblog.config import get_settings
from momentblog.core.microcms import MicroCMSClient, MicroCMSConfig, MicroCMSError
from momentblog.core.transforms import (
    build_article_metadata,
    build_navigation,
    to_article_detail,
    to_list_item,
)
from momentblog.models.article import ArticleDetail, ArticleListItem, ArticleMetadata
from momentblog.models.filters import CategoryFilter
from momentblog.models.microcms import MicroCMSBlog

logger = logging.getLogger(__name__)

# 发布时间倒序（最新在前）
NEWEST_FIRST = "-publishedAt"


class ContentService:
    """内容服务（只读，每次请求重新获取）."""

    def __init__(
        self,
        client: MicroCMSClient,
        endpoint: str = "blogs",
        page_size: int = 100,
    ) -> None:
        self.client = client
        self.endpoint = endpoint
        self.page_size = page_size

    async def fetch_all_articles(self) -> list[ArticleListItem]:
        """
        获取全部文章（按发布时间倒序）.

        按 offset 顺序逐页请求，直到累计数量达到 totalCount。
        任意一页失败则整体失败。
        """
        blogs: list[MicroCMSBlog] = []
        offset = 0

        while True:
            logger.debug(f"获取文章列表: offset={offset}, limit={self.page_size}")
            response = await self.client.get_list(
                self.endpoint,
                limit=self.page_size,
                offset=offset,
                orders=NEWEST_FIRST,
            )
            blogs.extend(response.contents)

            if len(blogs) >= response.total_count:
                break

            if not response.contents:
                msg = (
                    f"分页响应不完整: 已获取 {len(blogs)} 篇，"
                    f"totalCount={response.total_count}"
                )
                raise MicroCMSError(msg)

            offset += self.page_size

        logger.info(f"共获取 {len(blogs)} 篇文章")
        return [to_list_item(blog) for blog in blogs]

    async def fetch_article_slugs(self) -> list[str]:
        """获取全部文章 slug（用于生成静态路径）."""
        articles = await self.fetch_all_articles()
        return [article.slug for article in articles]

    async def fetch_article_by_slug(self, slug: str) -> ArticleDetail:
        """获取单篇文章详情（含上一篇/下一篇）."""
        blog = await self.client.get(self.endpoint, slug)

        # 需要全量列表来确定相邻文章
        articles = await self.fetch_all_articles()
        navigation = build_navigation(articles, slug)

        return to_article_detail(blog, navigation)

    async def fetch_article_metadata(self, slug: str) -> ArticleMetadata:
        """获取详情页元数据."""
        article = await self.fetch_article_by_slug(slug)
        return build_article_metadata(article)

    async def fetch_category_filters(self) -> list[CategoryFilter]:
        """
        统计各分类的文章数.

        同一文章重复列出同一分类时只计一次；按首次出现顺序返回。
        """
        articles = await self.fetch_all_articles()
        return count_categories(articles)


def count_categories(articles: list[ArticleListItem]) -> list[CategoryFilter]:
    """按分类名统计文章数."""
    counts: dict[str, int] = {}

    for article in articles:
        for name in dict.fromkeys(article.category_names):
            counts[name] = counts.get(name, 0) + 1

    return [
        CategoryFilter(id=name, name=name, count=count)
        for name, count in counts.items()
    ]


async def get_content_service() -> AsyncGenerator[ContentService, None]:
    """获取内容服务（用于依赖注入，每个请求独立的客户端）."""
    settings = get_settings()
    config = MicroCMSConfig(
        service_domain=settings.microcms_service_domain,
        api_key=settings.microcms_api_key,
        timeout_seconds=settings.microcms_timeout_seconds,
    )

    async with MicroCMSClient(config) as client:
        yield ContentService(
            client,
            endpoint=settings.microcms_endpoint,
            page_size=settings.microcms_page_size,
        )
