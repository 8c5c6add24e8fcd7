"""分类 API."""

from fastapi import APIRouter, Depends

from momentblog.core.content import ContentService, get_content_service

router = APIRouter(prefix="/api/categories", tags=["categories"])


@router.get("")
async def list_categories(
    service: ContentService = Depends(get_content_service),
) -> dict:
    """获取分类及文章数."""
    categories = await service.fetch_category_filters()
    return {
        "total": len(categories),
        "categories": categories,
    }
