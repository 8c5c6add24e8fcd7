"""HTML 解析工具."""

import logging
import re
from collections import Counter

from bs4 import BeautifulSoup

from momentblog.models.article import TableOfContents, TocHeading

logger = logging.getLogger(__name__)

HEADING_TAGS = ["h1", "h2", "h3"]

_TAG_RE = re.compile(r"<[^>]*>")
_NON_WORD_RE = re.compile(r"[^A-Za-z0-9_\s-]")
_SEPARATOR_RE = re.compile(r"[\s_-]+")


def slugify(text: str) -> str:
    """
    将文本转换为 URL 安全的 slug.

    只保留 ASCII 字母数字和连字符，其余字符直接删除（不做音译）。
    不保证唯一性。

    Args:
        text: 任意文本

    Returns:
        小写、以连字符分隔的 slug
    """
    slug = text.lower().strip()
    slug = _NON_WORD_RE.sub("", slug)
    slug = _SEPARATOR_RE.sub("-", slug)
    return slug.strip("-")


def strip_tags(html: str) -> str:
    """移除所有 <...> 标签（不解码实体）."""
    if not html:
        return ""
    return _TAG_RE.sub("", html)


def inject_heading_anchors(html: str) -> str:
    """
    为 h1/h2/h3 注入锚点 ID.

    每个标题的 ID 为 ``{slug}-{n}``，n 为同一 slug 的出现序号（从 1 开始），
    第一个 "Introduction" 即为 ``introduction-1``。已有的 id 会被覆盖。

    Args:
        html: 原始 HTML 片段

    Returns:
        注入 ID 后的 HTML
    """
    if not html:
        return ""

    # html.parser 不会补全 <html>/<body>，片段原样输出
    soup = BeautifulSoup(html, "html.parser")
    occurrences: Counter[str] = Counter()

    for heading in soup.find_all(HEADING_TAGS):
        base = slugify(heading.get_text())
        occurrences[base] += 1
        anchor_id = f"{base}-{occurrences[base]}"
        if not base:
            logger.warning(f"标题文本无法生成 slug，使用退化 ID: {anchor_id}")
        heading["id"] = anchor_id

    return str(soup)


def extract_table_of_contents(html: str) -> TableOfContents:
    """
    从已注入锚点的 HTML 中提取目录.

    缺少 id 的标题回退到 slugify(text)，此时不保证唯一。
    """
    if not html:
        return TableOfContents()

    soup = BeautifulSoup(html, "lxml")
    headings: list[TocHeading] = []

    for heading in soup.find_all(HEADING_TAGS):
        text = heading.get_text()
        anchor_id = heading.get("id")
        if isinstance(anchor_id, list):
            anchor_id = anchor_id[0] if anchor_id else None
        if not anchor_id:
            anchor_id = slugify(text)

        headings.append(
            TocHeading(
                id=anchor_id,
                text=text,
                level=int(heading.name[1]),
            )
        )

    return TableOfContents(headings=headings)
