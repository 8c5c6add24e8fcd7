"""Moment Works 博客内容服务入口."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from momentblog.api import articles, categories, listing
from momentblog.config import get_settings
from momentblog.core.microcms import MicroCMSError

# 配置日志
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """应用生命周期管理."""
    # 必需配置缺失时抛出 ConfigurationError，拒绝启动
    logger.info("正在检查配置...")
    app_settings = get_settings()

    logger.info(
        f"内容源: {app_settings.microcms_service_domain}.microcms.io"
        f"/{app_settings.microcms_endpoint}"
    )
    logger.info("Moment Works 博客服务启动完成！")
    yield

    logger.info("Moment Works 博客服务已关闭")


app = FastAPI(
    title="Moment Works Blog",
    description="博客内容服务 - microCMS 文章列表、详情、目录与分类筛选",
    version="0.1.0",
    lifespan=lifespan,
)

# CORS 配置
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET"],
    allow_headers=["*"],
)


@app.exception_handler(MicroCMSError)
async def microcms_error_handler(request: Request, exc: MicroCMSError) -> JSONResponse:
    """内容源不可用时整页失败，提示可重试."""
    logger.error(f"加载文章失败: {request.url.path} - {exc}")
    return JSONResponse(
        status_code=502,
        content={"detail": "unable to load articles", "retryable": True},
    )


# 注册路由
app.include_router(articles.router)
app.include_router(categories.router)
app.include_router(listing.router)


@app.get("/")
async def root() -> dict:
    """根路径."""
    return {
        "name": "Moment Works Blog",
        "version": "0.1.0",
        "description": "博客内容服务",
    }


@app.get("/health")
async def health() -> dict:
    """健康检查."""
    return {"status": "ok"}


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "momentblog.main:app",
        host="0.0.0.0",
        port=8000,
        reload=True,
    )
