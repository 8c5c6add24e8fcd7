"""microCMS 内容 API 客户端."""

import logging
from dataclasses import dataclass
from typing import Any
from urllib.parse import quote

import httpx

from momentblog.models.microcms import MicroCMSBlog, MicroCMSListResponse

logger = logging.getLogger(__name__)


@dataclass
class MicroCMSConfig:
    """microCMS 连接配置."""

    service_domain: str
    api_key: str
    timeout_seconds: float = 30.0

    @property
    def base_url(self) -> str:
        return f"https://{self.service_domain}.microcms.io/api/v1"


class MicroCMSError(Exception):
    """microCMS API 错误（请求失败或响应异常）."""


class ArticleNotFoundError(MicroCMSError):
    """内容 ID 不存在."""

    def __init__(self, content_id: str) -> None:
        self.content_id = content_id
        super().__init__(f"内容不存在: {content_id}")


class MicroCMSClient:
    """microCMS 内容 API 客户端（只读）."""

    def __init__(
        self,
        config: MicroCMSConfig,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.config = config
        self._client = httpx.AsyncClient(
            base_url=config.base_url,
            headers={"X-MICROCMS-API-KEY": config.api_key},
            timeout=config.timeout_seconds,
            transport=transport,
        )

    async def close(self) -> None:
        """关闭客户端."""
        await self._client.aclose()

    async def __aenter__(self) -> "MicroCMSClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def _request(
        self, path: str, params: dict[str, Any] | None = None
    ) -> httpx.Response:
        """发送 GET 请求，网络错误统一转为 MicroCMSError."""
        try:
            return await self._client.get(path, params=params)
        except httpx.HTTPError as e:
            logger.error(f"microCMS 请求失败: {path} - {e}")
            msg = f"microCMS 请求失败: {e}"
            raise MicroCMSError(msg) from e

    def _raise_for_status(self, response: httpx.Response, path: str) -> None:
        if response.status_code != 200:
            logger.error(f"microCMS 返回错误: {path} - HTTP {response.status_code}")
            msg = f"microCMS 返回 HTTP {response.status_code}: {path}"
            raise MicroCMSError(msg)

    async def get_list(
        self,
        endpoint: str,
        limit: int = 10,
        offset: int = 0,
        orders: str | None = None,
    ) -> MicroCMSListResponse:
        """获取一页内容列表."""
        path = f"/{endpoint}"
        params: dict[str, Any] = {"limit": limit, "offset": offset}
        if orders:
            params["orders"] = orders

        response = await self._request(path, params=params)
        self._raise_for_status(response, path)

        try:
            return MicroCMSListResponse.model_validate(response.json())
        except ValueError as e:
            msg = f"microCMS 列表响应格式错误: {path}"
            raise MicroCMSError(msg) from e

    async def get(self, endpoint: str, content_id: str) -> MicroCMSBlog:
        """按 ID 获取单条内容."""
        path = f"/{endpoint}/{quote(content_id, safe='')}"

        response = await self._request(path)
        if response.status_code == 404:
            raise ArticleNotFoundError(content_id)
        self._raise_for_status(response, path)

        try:
            return MicroCMSBlog.model_validate(response.json())
        except ValueError as e:
            msg = f"microCMS 内容响应格式错误: {path}"
            raise MicroCMSError(msg) from e
