"""页面抓取：URL 规范化、缓存优先、单次 GET 请求"""
from __future__ import annotations

from typing import Optional
from urllib.parse import urlparse, urlunparse

import requests

from ..errors import FetchError, ParseError
from ..models import ForumConfig, RawPage
from ..utils import escape, safe_print, debug_print
from .cache import PageCache, MemoryCache
from .site_detector import SiteDetector

__all__ = ['normalize_url', 'create_session', 'PageFetcher']


def normalize_url(url: str, forum: ForumConfig) -> str:
    """
    将新版前端域名替换为旧版前端，并在路径后追加结构化数据后缀。
    规范化结果相同的 URL 共享同一个缓存条目。
    """
    try:
        parsed = urlparse(url.strip())
    except ValueError as e:
        raise ParseError(f"无效的链接地址: {e}", url=url) from e
    netloc = parsed.netloc.lower()
    if forum.old_host and netloc in forum.web_hosts:
        netloc = forum.old_host

    path = parsed.path or '/'
    if not path.endswith(forum.data_suffix):
        path += forum.data_suffix

    return urlunparse((parsed.scheme or 'https', netloc, path, '', parsed.query, ''))


def create_session(forum: ForumConfig) -> requests.Session:
    session = requests.Session()
    session.headers.update({
        'User-Agent': forum.user_agent,
        'Accept': forum.accept,
    })
    return session


class PageFetcher:
    """按页面标识获取原始字节，先查缓存再访问网络，不重试"""

    def __init__(
        self,
        detector: SiteDetector,
        cache: Optional[PageCache] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ):
        self.detector = detector
        self.cache = cache if cache is not None else MemoryCache()
        self.session = session
        self.timeout = timeout

    def fetch(self, url: str) -> RawPage:
        forum = self.detector.detect_site(url, silent=True)
        normalized = normalize_url(url, forum)

        cached = self.cache.get(normalized)
        if cached is not None:
            debug_print(f"📁 命中缓存: {escape(normalized)}")
            return RawPage(url=normalized, content=cached)

        safe_print(f"🌐 fetching [blue]{escape(normalized)}[/blue]")
        if self.session is None:
            self.session = create_session(forum)
        headers = {'User-Agent': forum.user_agent, 'Accept': forum.accept}

        try:
            response = self.session.get(normalized, headers=headers, timeout=self.timeout)
            response.raise_for_status()
            content = response.content
        except requests.RequestException as e:
            raise FetchError(f"获取页面失败: {e}", url=normalized) from e

        self.cache.put(normalized, content)
        return RawPage(url=normalized, content=content)
