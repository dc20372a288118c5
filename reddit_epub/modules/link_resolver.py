"""在渲染后的章节中查找『下一篇』链接"""
from __future__ import annotations

from typing import Iterable, Optional

from bs4 import BeautifulSoup

from ..errors import ParseError

__all__ = ['LinkMatcher', 'KeywordLinkMatcher', 'find_next_page']

DEFAULT_KEYWORDS = ('next', 'forward')


class LinkMatcher:
    """判断一个链接是否是续篇链接"""

    def matches(self, text: str, href: str) -> bool:
        raise NotImplementedError


class KeywordLinkMatcher(LinkMatcher):
    """链接文字包含任一关键词（不区分大小写），且目标地址包含论坛域名片段"""

    def __init__(self, host_marker: str, keywords: Iterable[str] = DEFAULT_KEYWORDS):
        self.host_marker = host_marker
        self.keywords = tuple(k.lower() for k in keywords)

    def matches(self, text: str, href: str) -> bool:
        text = text.lower()
        if not any(keyword in text for keyword in self.keywords):
            return False
        return self.host_marker in href

    def __repr__(self) -> str:
        return f"KeywordLinkMatcher({self.host_marker!r}, {self.keywords!r})"


def find_next_page(html: str, matcher: LinkMatcher, source_url: Optional[str] = None) -> Optional[str]:
    """按文档顺序返回第一个匹配的链接，没有则返回 None"""
    try:
        soup = BeautifulSoup(html, 'html.parser')
        links = soup.find_all('a', href=True)
    except Exception as e:
        raise ParseError(f"章节 HTML 解析失败: {e}", url=source_url) from e

    for link in links:
        href = link.get('href', '')
        if matcher.matches(link.get_text(), href):
            return href

    return None
