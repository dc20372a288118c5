from typing import Callable, Iterable, List, Optional, Set

from .errors import CycleError
from .models import BookState, ForumConfig
from .modules import (
    KeywordLinkMatcher,
    LinkMatcher,
    PageFetcher,
    SiteDetector,
    normalize_url,
    process_page,
)
from .modules.link_resolver import DEFAULT_KEYWORDS
from .utils import escape, safe_print

CYCLE_STOP = 'stop'
CYCLE_ERROR = 'error'


class ThreadEpubCrawler:
    """沿着『下一篇』链接逐页抓取帖子，把每页作为一章加入整本书"""

    def __init__(
        self,
        fetcher: PageFetcher,
        detector: SiteDetector,
        matcher: Optional[LinkMatcher] = None,
        keywords: Iterable[str] = DEFAULT_KEYWORDS,
        on_cycle: str = CYCLE_STOP,
    ):
        if on_cycle not in (CYCLE_STOP, CYCLE_ERROR):
            raise ValueError(f"未知的循环处理方式: {on_cycle}")
        self.fetcher = fetcher
        self.detector = detector
        self.matcher = matcher
        self.keywords = tuple(keywords)
        self.on_cycle = on_cycle

    def _matcher_for(self, forum: ForumConfig) -> LinkMatcher:
        """未注入匹配器时，按当前论坛的域名片段构造关键词匹配器"""
        if self.matcher is not None:
            return self.matcher
        return KeywordLinkMatcher(forum.host_marker, self.keywords)

    def crawl_chain(self, start_url: str, book: BookState) -> int:
        """
        从一个起始URL出发抓取整条章节链，返回本链新增的章节数。
        遇到重复页面时按 on_cycle 停止本链或抛出 CycleError。
        """
        visited: Set[str] = set()
        current_url: Optional[str] = start_url
        added = 0

        while current_url:
            forum = self.detector.detect_site(current_url)
            key = normalize_url(current_url, forum)
            if key in visited:
                if self.on_cycle == CYCLE_ERROR:
                    raise CycleError("检测到章节链循环", url=current_url)
                safe_print(f"⚠️ [yellow]检测到章节链循环，已在 {escape(current_url)} 停止。[/yellow]")
                break
            visited.add(key)

            chapter, page, next_url = process_page(current_url, self.fetcher, self._matcher_for(forum))
            book.set_author(page.author)
            book.add_chapter(chapter)
            added += 1

            current_url = next_url

        return added

    def crawl(
        self,
        start_urls: List[str],
        title: str,
        language: str = 'en',
        on_chain_done: Optional[Callable[[str, int], None]] = None,
    ) -> BookState:
        """依次抓取每条章节链，章节按发现顺序拼接；任何错误都会中止整个运行"""
        book = BookState(title=title, language=language)

        for start_url in start_urls:
            safe_print(f"🔗 开始抓取章节链: [blue]{escape(start_url)}[/blue]", style="cyan")
            added = self.crawl_chain(start_url, book)
            if on_chain_done:
                on_chain_done(start_url, added)

        return book
