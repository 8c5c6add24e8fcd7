"""文章列表状态机 - 分类筛选 + 分页/加载更多."""

import asyncio
import logging
import math
from collections.abc import Callable
from dataclasses import dataclass, field, replace
from urllib.parse import parse_qsl, urlencode

from momentblog.models.article import ArticleListItem

logger = logging.getLogger(__name__)

CATEGORY_PARAM = "category"


class ListingMode:
    """列表模式."""

    PAGED = "paged"  # 页码分页（博客列表页）
    LOAD_MORE = "load_more"  # 加载更多（首页）


class EventSource:
    """状态变更来源."""

    USER = "user"
    NAVIGATION = "navigation"  # 浏览器前进/后退


@dataclass(frozen=True)
class SelectCategory:
    """选择分类（None 表示全部）."""

    category_id: str | None
    source: str = EventSource.USER


@dataclass(frozen=True)
class LoadMoreStarted:
    """开始加载更多."""


@dataclass(frozen=True)
class LoadMoreCompleted:
    """加载更多完成."""


@dataclass(frozen=True)
class ChangePage:
    """切换页码."""

    page: int


ListingEvent = SelectCategory | LoadMoreStarted | LoadMoreCompleted | ChangePage


@dataclass(frozen=True)
class ListingState:
    """列表状态."""

    page_size: int
    visible_count: int
    mode: str = ListingMode.LOAD_MORE
    page: int = 1
    selected_category_id: str | None = None
    is_loading: bool = False


@dataclass
class ListingView:
    """列表渲染数据（由状态派生）."""

    items: list[ArticleListItem] = field(default_factory=list)
    selected_category_id: str | None = None
    page: int = 1
    total_pages: int = 0
    has_more: bool = False
    loaded_count: int = 0
    total_count: int = 0
    is_loading: bool = False


def initial_state(
    page_size: int,
    mode: str = ListingMode.LOAD_MORE,
    category_id: str | None = None,
) -> ListingState:
    """创建初始状态."""
    return ListingState(
        page_size=page_size,
        visible_count=page_size,
        mode=mode,
        selected_category_id=category_id or None,
    )


def reduce(state: ListingState, event: ListingEvent) -> ListingState:
    """纯状态转移函数 (state, event) -> state."""
    if isinstance(event, SelectCategory):
        category_id = event.category_id or None
        if (
            event.source == EventSource.NAVIGATION
            and category_id == state.selected_category_id
        ):
            return state
        # 切换分类总是回到第一页
        return replace(
            state,
            selected_category_id=category_id,
            visible_count=state.page_size,
            page=1,
            is_loading=False,
        )

    if isinstance(event, LoadMoreStarted):
        if state.is_loading:
            return state
        return replace(state, is_loading=True)

    if isinstance(event, LoadMoreCompleted):
        if not state.is_loading:
            return state
        return replace(
            state,
            visible_count=state.visible_count + state.page_size,
            is_loading=False,
        )

    if isinstance(event, ChangePage):
        return replace(state, page=max(1, event.page))

    return state


def filter_articles(
    articles: list[ArticleListItem], category_id: str | None
) -> list[ArticleListItem]:
    """按分类名筛选文章."""
    if not category_id:
        return list(articles)
    return [article for article in articles if category_id in article.category_names]


def build_listing_view(
    state: ListingState, articles: list[ArticleListItem]
) -> ListingView:
    """先筛选、后分页，生成渲染数据."""
    filtered = filter_articles(articles, state.selected_category_id)
    total = len(filtered)

    total_pages = math.ceil(total / state.page_size)

    if state.mode == ListingMode.PAGED:
        start = (state.page - 1) * state.page_size
        items = filtered[start : start + state.page_size]
        has_more = state.page < total_pages
    else:
        items = filtered[: state.visible_count]
        has_more = state.visible_count < total

    return ListingView(
        items=items,
        selected_category_id=state.selected_category_id,
        page=state.page,
        total_pages=total_pages,
        has_more=has_more,
        loaded_count=len(items),
        total_count=total,
        is_loading=state.is_loading,
    )


def category_from_query(query: str) -> str | None:
    """从 URL 查询串读取分类."""
    for key, value in parse_qsl(query):
        if key == CATEGORY_PARAM:
            return value or None
    return None


def with_category(query: str, category_id: str | None) -> str:
    """设置或删除查询串中的分类参数，保留其余参数."""
    params = [(key, value) for key, value in parse_qsl(query) if key != CATEGORY_PARAM]
    if category_id:
        params.append((CATEGORY_PARAM, category_id))
    return urlencode(params)


class ListingController:
    """
    列表控制器.

    持有状态并把用户操作和 URL 变化转为事件。用户选择分类时写回 URL，
    由 URL 变化（前进/后退）触发的选择不再写回，避免循环导航。
    """

    def __init__(
        self,
        articles: list[ArticleListItem],
        page_size: int,
        mode: str = ListingMode.LOAD_MORE,
        query: str = "",
        load_more_delay: float = 0.1,
        on_url_change: Callable[[str], None] | None = None,
    ) -> None:
        self.articles = articles
        self.load_more_delay = load_more_delay
        self._query = query
        self._on_url_change = on_url_change
        self._mounted = True
        self.state = initial_state(page_size, mode, category_from_query(query))

    @property
    def view(self) -> ListingView:
        """当前渲染数据."""
        return build_listing_view(self.state, self.articles)

    @property
    def query(self) -> str:
        """当前 URL 查询串."""
        return self._query

    def dispatch(self, event: ListingEvent) -> ListingState:
        """应用事件."""
        self.state = reduce(self.state, event)
        return self.state

    def select_category(self, category_id: str | None) -> None:
        """用户选择分类."""
        self.dispatch(SelectCategory(category_id, source=EventSource.USER))

        self._query = with_category(self._query, self.state.selected_category_id)
        if self._on_url_change:
            self._on_url_change(self._query)

    def sync_from_url(self, query: str) -> None:
        """URL 变化（前进/后退）同步到状态，不回写 URL."""
        self._query = query
        self.dispatch(
            SelectCategory(category_from_query(query), source=EventSource.NAVIGATION)
        )

    def change_page(self, page: int) -> None:
        """切换页码（超出范围时截断到最后一页）."""
        total_pages = max(1, self.view.total_pages)
        self.dispatch(ChangePage(min(page, total_pages)))

    async def load_more(self) -> None:
        """加载下一批（短暂延迟仅用于交互反馈）."""
        if not self._mounted or self.state.is_loading or not self.view.has_more:
            return

        self.dispatch(LoadMoreStarted())
        await asyncio.sleep(self.load_more_delay)

        if not self._mounted:
            logger.debug("列表已卸载，丢弃加载结果")
            return

        self.dispatch(LoadMoreCompleted())

    def unmount(self) -> None:
        """卸载（之后不再更新状态）."""
        self._mounted = False
