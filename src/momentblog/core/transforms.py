"""microCMS 记录到领域模型的转换."""

from momentblog.models.article import (
    AdjacentArticle,
    ArticleDetail,
    ArticleListItem,
    ArticleMetadata,
    ArticleNavigation,
    OpenGraph,
)
from momentblog.models.microcms import MicroCMSBlog
from momentblog.utils.html_parser import (
    extract_table_of_contents,
    inject_heading_anchors,
    strip_tags,
)

EXCERPT_LENGTH = 150
DESCRIPTION_LENGTH = 160


def extract_excerpt(html: str, max_length: int = EXCERPT_LENGTH) -> str:
    """提取纯文本摘要，超长时截断并追加 '...'."""
    text = strip_tags(html).strip()
    if len(text) > max_length:
        return text[:max_length] + "..."
    return text


def _category_names(blog: MicroCMSBlog) -> list[str]:
    return [category.name for category in blog.categories]


def _published_at(blog: MicroCMSBlog) -> str:
    # 未发布的草稿没有 publishedAt
    return blog.published_at or blog.created_at


def to_list_item(blog: MicroCMSBlog) -> ArticleListItem:
    """转换为列表页文章."""
    return ArticleListItem(
        id=blog.id,
        slug=blog.id,
        title=blog.title,
        excerpt=extract_excerpt(blog.content),
        eyecatch_url=blog.eyecatch.url if blog.eyecatch else None,
        category_names=_category_names(blog),
        published_at=_published_at(blog),
    )


def to_article_detail(
    blog: MicroCMSBlog, navigation: ArticleNavigation
) -> ArticleDetail:
    """转换为详情页文章（注入锚点并生成目录）."""
    content = inject_heading_anchors(blog.content)
    toc = extract_table_of_contents(content)

    return ArticleDetail(
        id=blog.id,
        slug=blog.id,
        title=blog.title,
        content=content,
        eyecatch=blog.eyecatch,
        category_names=_category_names(blog),
        published_at=_published_at(blog),
        table_of_contents=toc,
        navigation=navigation,
    )


def build_navigation(items: list[ArticleListItem], slug: str) -> ArticleNavigation:
    """
    根据文章在排序列表中的位置计算上一篇/下一篇.

    列表按发布时间倒序；slug 不在列表中时两侧均为空。
    """
    index = next((i for i, item in enumerate(items) if item.slug == slug), None)
    if index is None:
        return ArticleNavigation()

    previous = items[index - 1] if index > 0 else None
    following = items[index + 1] if index < len(items) - 1 else None

    return ArticleNavigation(
        previous=(
            AdjacentArticle(slug=previous.slug, title=previous.title)
            if previous
            else None
        ),
        next=(
            AdjacentArticle(slug=following.slug, title=following.title)
            if following
            else None
        ),
    )


def build_article_metadata(article: ArticleDetail) -> ArticleMetadata:
    """生成详情页元数据（标题、描述、Open Graph）."""
    description = strip_tags(article.content).strip()[:DESCRIPTION_LENGTH]

    return ArticleMetadata(
        title=article.title,
        description=description,
        open_graph=OpenGraph(
            title=article.title,
            description=description,
            type="article",
            published_time=article.published_at,
            images=[article.eyecatch.url] if article.eyecatch else [],
        ),
    )
