"""测试配置和 fixtures."""

from collections.abc import AsyncGenerator, Generator
from typing import Any

import httpx
import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from momentblog.config import get_settings
from momentblog.core.content import ContentService, get_content_service
from momentblog.core.microcms import MicroCMSClient, MicroCMSConfig
from momentblog.main import app

SERVICE_DOMAIN = "moment-test"
API_KEY = "test-api-key"


def make_blog(
    index: int,
    categories: list[str] | None = None,
    content: str | None = None,
    published: bool = True,
    eyecatch: bool = False,
) -> dict[str, Any]:
    """构造 microCMS 原始文章记录（index 越小越新）."""
    day = 28 - index
    blog: dict[str, Any] = {
        "id": f"article-{index:02d}",
        "title": f"Article {index}",
        "content": content
        if content is not None
        else f"<h2>Introduction</h2><p>Body of article {index}</p>",
        "categories": [
            {"id": name, "name": name, "createdAt": "2025-01-01T00:00:00.000Z"}
            for name in (categories or [])
        ],
        "createdAt": f"2025-01-{day:02d}T00:00:00.000Z",
        "updatedAt": f"2025-01-{day:02d}T00:00:00.000Z",
        "revisedAt": f"2025-01-{day:02d}T00:00:00.000Z",
    }
    if published:
        blog["publishedAt"] = f"2025-02-{day:02d}T09:00:00.000Z"
    if eyecatch:
        blog["eyecatch"] = {
            "url": f"https://images.microcms-assets.io/{index}.png",
            "width": 1200,
            "height": 630,
        }
    return blog


def make_blogs(count: int = 12) -> list[dict[str, Any]]:
    """构造文章集合：每 3 篇中 1 篇属于 design，其余属于 tech."""
    return [
        make_blog(i, categories=["design"] if i % 3 == 0 else ["tech"])
        for i in range(count)
    ]


class FakeMicroCMS:
    """模拟 microCMS 内容 API."""

    def __init__(self, blogs: list[dict[str, Any]]) -> None:
        self.blogs = blogs
        self.requests: list[httpx.Request] = []
        self.fail_on_offset: int | None = None
        self.fail_get = False
        self.reported_total: int | None = None

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)

        if request.headers.get("X-MICROCMS-API-KEY") != API_KEY:
            return httpx.Response(
                401, json={"message": "X-MICROCMS-API-KEY header is invalid."}
            )

        parts = request.url.path.removeprefix("/api/v1/").split("/")
        if len(parts) == 1:
            return self._list(request)
        return self._get(parts[1])

    @property
    def list_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.count("/") == 3]

    def _list(self, request: httpx.Request) -> httpx.Response:
        limit = int(request.url.params.get("limit", "10"))
        offset = int(request.url.params.get("offset", "0"))

        if self.fail_on_offset is not None and offset == self.fail_on_offset:
            return httpx.Response(500, json={"message": "Internal Server Error"})

        ordered = sorted(
            self.blogs,
            key=lambda b: b.get("publishedAt") or b["createdAt"],
            reverse=True,
        )
        total = self.reported_total if self.reported_total is not None else len(ordered)
        return httpx.Response(
            200,
            json={
                "contents": ordered[offset : offset + limit],
                "totalCount": total,
                "offset": offset,
                "limit": limit,
            },
        )

    def _get(self, content_id: str) -> httpx.Response:
        if self.fail_get:
            return httpx.Response(503, json={"message": "Service Unavailable"})
        for blog in self.blogs:
            if blog["id"] == content_id:
                return httpx.Response(200, json=blog)
        return httpx.Response(404, json={"message": "Content is not found."})


@pytest.fixture(autouse=True)
def settings_env(monkeypatch: pytest.MonkeyPatch) -> Generator[None, None, None]:
    """设置必需的环境变量."""
    monkeypatch.setenv("MICROCMS_SERVICE_DOMAIN", SERVICE_DOMAIN)
    monkeypatch.setenv("MICROCMS_API_KEY", API_KEY)
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


@pytest.fixture
def fake_cms() -> FakeMicroCMS:
    """12 篇文章的模拟内容源（4 篇 design）."""
    return FakeMicroCMS(make_blogs())


@pytest_asyncio.fixture
async def microcms_client(
    fake_cms: FakeMicroCMS,
) -> AsyncGenerator[MicroCMSClient, None]:
    """连接模拟内容源的客户端."""
    client = MicroCMSClient(
        MicroCMSConfig(service_domain=SERVICE_DOMAIN, api_key=API_KEY),
        transport=httpx.MockTransport(fake_cms.handler),
    )
    yield client
    await client.close()


@pytest.fixture
def content_service(microcms_client: MicroCMSClient) -> ContentService:
    """每页 5 条的内容服务（12 篇需要 3 页）."""
    return ContentService(microcms_client, endpoint="blogs", page_size=5)


@pytest_asyncio.fixture
async def client(fake_cms: FakeMicroCMS) -> AsyncGenerator[AsyncClient, None]:
    """创建测试用的 HTTP 客户端."""

    async def override_get_content_service() -> AsyncGenerator[ContentService, None]:
        async with MicroCMSClient(
            MicroCMSConfig(service_domain=SERVICE_DOMAIN, api_key=API_KEY),
            transport=httpx.MockTransport(fake_cms.handler),
        ) as cms_client:
            yield ContentService(cms_client, page_size=5)

    app.dependency_overrides[get_content_service] = override_get_content_service

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
