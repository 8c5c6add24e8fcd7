"""microCMS API 响应模型."""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, model_validator


class MicroCMSImage(BaseModel):
    """microCMS 图片字段."""

    url: str
    width: int | None = None
    height: int | None = None


class MicroCMSCategory(BaseModel):
    """microCMS 分类."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str
    name: str
    created_at: str | None = Field(default=None, alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")


class MicroCMSBlog(BaseModel):
    """microCMS 博客文章原始记录."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(description="内容 ID，同时作为 slug")
    title: str = ""
    content: str = Field(default="", description="富文本 HTML")
    eyecatch: MicroCMSImage | None = None
    categories: list[MicroCMSCategory] = Field(default_factory=list)
    published_at: str | None = Field(default=None, alias="publishedAt")
    created_at: str = Field(alias="createdAt")
    updated_at: str | None = Field(default=None, alias="updatedAt")
    revised_at: str | None = Field(default=None, alias="revisedAt")

    @model_validator(mode="before")
    @classmethod
    def _normalize_categories(cls, data: Any) -> Any:
        """单个 category 或 categories 列表统一为列表."""
        if not isinstance(data, dict):
            return data

        data = dict(data)
        single = data.pop("category", None)
        many = data.get("categories")

        if many is None:
            many = []
        elif isinstance(many, dict):
            many = [many]

        if isinstance(single, dict) and not many:
            many = [single]

        data["categories"] = many
        if data.get("content") is None:
            data["content"] = ""
        return data


class MicroCMSListResponse(BaseModel):
    """microCMS 列表响应."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    contents: list[MicroCMSBlog] = Field(default_factory=list)
    total_count: int = Field(alias="totalCount")
    offset: int = 0
    limit: int = 0
