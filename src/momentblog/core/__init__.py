"""核心业务逻辑."""

from momentblog.core.content import ContentService
from momentblog.core.listing import ListingController, ListingState
from momentblog.core.microcms import (
    ArticleNotFoundError,
    MicroCMSClient,
    MicroCMSConfig,
    MicroCMSError,
)

__all__ = [
    "ArticleNotFoundError",
    "ContentService",
    "ListingController",
    "ListingState",
    "MicroCMSClient",
    "MicroCMSConfig",
    "MicroCMSError",
]
