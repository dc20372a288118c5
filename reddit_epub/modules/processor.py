"""单个页面的处理流程：抓取、解析、组装、查找续篇"""

from __future__ import annotations
from typing import Optional, Tuple

from ..models import Chapter, ParsedPage
from ..utils import escape, safe_print
from .assembler import assemble_chapter
from .fetcher import PageFetcher
from .link_resolver import LinkMatcher, find_next_page
from .parser import parse_page


__all__ = ['process_page']


def process_page(
    url: str,
    fetcher: PageFetcher,
    matcher: LinkMatcher,
) -> Tuple[Chapter, ParsedPage, Optional[str]]:
    """
    完整处理一个页面。
    返回 (章节, 解析后的页面, 续篇URL或None)，任何阶段失败都直接抛出。
    """
    raw = fetcher.fetch(url)
    page = parse_page(raw)

    html, title = assemble_chapter(page, url)
    safe_print(f"📖 {escape(title)} - {escape(page.author)}: [blue]{escape(url)}[/blue]")

    next_url = find_next_page(html, matcher, source_url=url)
    return Chapter(title=title, html=html, source_url=url), page, next_url
