"""应用配置管理."""

from functools import lru_cache

from pydantic import Field, ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict


class ConfigurationError(Exception):
    """必需配置缺失."""


class Settings(BaseSettings):
    """应用配置（环境变量）."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # microCMS 配置（必需）
    microcms_service_domain: str = Field(min_length=1)
    microcms_api_key: str = Field(min_length=1)

    # microCMS 请求配置
    microcms_endpoint: str = "blogs"
    microcms_page_size: int = Field(default=100, ge=1, le=100)  # microCMS 单次上限
    microcms_timeout_seconds: float = 30.0

    # 列表配置
    listing_page_size: int = Field(default=10, ge=1)
    load_more_page_size: int = Field(default=6, ge=1)


@lru_cache
def get_settings() -> Settings:
    """获取应用配置（带缓存），必需项缺失时拒绝启动."""
    try:
        return Settings()  # type: ignore[call-arg]
    except ValidationError as e:
        names = sorted(
            str(error["loc"][0]).upper() for error in e.errors() if error["loc"]
        )
        msg = f"环境变量缺失或无效: {', '.join(names)}"
        raise ConfigurationError(msg) from e
