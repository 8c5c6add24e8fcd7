"""分类筛选模型."""

from pydantic import BaseModel, Field


class CategoryFilter(BaseModel):
    """分类筛选项."""

    id: str = Field(description="分类名（作为筛选键）")
    name: str = Field(description="显示名")
    count: int = Field(default=0, ge=0, description="包含该分类的文章数")
