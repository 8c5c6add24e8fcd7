"""文章 API."""

import logging

from fastapi import APIRouter, Depends, HTTPException, Query

from momentblog.config import get_settings
from momentblog.core.content import ContentService, get_content_service
from momentblog.core.listing import (
    ChangePage,
    ListingMode,
    build_listing_view,
    initial_state,
    reduce,
)
from momentblog.core.microcms import ArticleNotFoundError
from momentblog.models.article import ArticleDetail, ArticleMetadata

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/articles", tags=["articles"])


@router.get("")
async def list_articles(
    category: str | None = Query(None, description="按分类筛选"),
    page: int = Query(1, ge=1, description="页码"),
    service: ContentService = Depends(get_content_service),
) -> dict:
    """获取文章列表（页码分页）."""
    articles = await service.fetch_all_articles()

    state = initial_state(
        get_settings().listing_page_size,
        mode=ListingMode.PAGED,
        category_id=category,
    )
    # 超出范围的页码返回空列表
    state = reduce(state, ChangePage(page))
    view = build_listing_view(state, articles)

    return {
        "total": view.total_count,
        "page": view.page,
        "total_pages": view.total_pages,
        "items": view.items,
    }


@router.get("/slugs")
async def list_slugs(
    service: ContentService = Depends(get_content_service),
) -> dict:
    """获取全部文章 slug."""
    slugs = await service.fetch_article_slugs()
    return {"total": len(slugs), "slugs": slugs}


@router.get("/{slug}")
async def get_article(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> ArticleDetail:
    """获取文章详情."""
    try:
        return await service.fetch_article_by_slug(slug)
    except ArticleNotFoundError:
        logger.info(f"文章不存在: {slug}")
        raise HTTPException(status_code=404, detail="文章不存在") from None


@router.get("/{slug}/metadata")
async def get_article_metadata(
    slug: str,
    service: ContentService = Depends(get_content_service),
) -> ArticleMetadata:
    """获取文章元数据（标题、描述、Open Graph）."""
    try:
        return await service.fetch_article_metadata(slug)
    except ArticleNotFoundError:
        logger.info(f"文章不存在: {slug}")
        raise HTTPException(status_code=404, detail="文章不存在") from None
