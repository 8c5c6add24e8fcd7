"""首页列表 API（分类筛选 + 加载更多）."""

from fastapi import APIRouter, Depends, Query

from momentblog.config import get_settings
from momentblog.core.content import (
    ContentService,
    count_categories,
    get_content_service,
)
from momentblog.core.listing import (
    ListingMode,
    LoadMoreCompleted,
    LoadMoreStarted,
    build_listing_view,
    initial_state,
    reduce,
)

router = APIRouter(prefix="/api/listing", tags=["listing"])


@router.get("")
async def get_listing(
    category: str | None = Query(None, description="按分类筛选"),
    loads: int = Query(0, ge=0, le=100, description="已点击加载更多的次数"),
    service: ContentService = Depends(get_content_service),
) -> dict:
    """获取首页列表初始数据."""
    articles = await service.fetch_all_articles()

    state = initial_state(
        get_settings().load_more_page_size,
        mode=ListingMode.LOAD_MORE,
        category_id=category,
    )
    for _ in range(loads):
        if not build_listing_view(state, articles).has_more:
            break
        state = reduce(reduce(state, LoadMoreStarted()), LoadMoreCompleted())

    view = build_listing_view(state, articles)

    return {
        "selected_category_id": view.selected_category_id,
        "categories": count_categories(articles),
        "items": view.items,
        "has_more": view.has_more,
        "loaded_count": view.loaded_count,
        "total_count": view.total_count,
    }
