from typing import Optional, Dict
from urllib.parse import urlparse

from ..errors import ParseError
from ..models import ForumConfig
from ..utils import safe_print

REDDIT_CONFIG = ForumConfig(
    name='Reddit',
    web_hosts=('www.reddit.com', 'reddit.com', 'new.reddit.com'),
    old_host='old.reddit.com',
    host_marker='reddit.com',
)

LOCAL_CONFIG = ForumConfig(
    name='本地测试论坛',
    web_hosts=(),
    old_host=None,
    host_marker='localhost',
)

class SiteDetector:
    """论坛检测和适配器"""

    def __init__(self):
        self._detection_cache: Dict[str, ForumConfig] = {}
        self._warned: set = set()

        self.site_configs = {
            'reddit.com': REDDIT_CONFIG,
            'localhost': LOCAL_CONFIG,
            '127.0.0.1': ForumConfig(
                name='本地测试论坛',
                web_hosts=(),
                old_host=None,
                host_marker='127.0.0.1',
            ),
        }
        self.default_config = REDDIT_CONFIG

    def detect_site(self, url: str, silent: bool = False) -> ForumConfig:
        """根据域名返回论坛配置，未知域名回退到 Reddit 配置"""
        try:
            domain = urlparse(url).netloc.lower().split(':')[0]
        except ValueError as e:
            raise ParseError(f"无效的链接地址: {e}", url=url) from e

        if domain in self._detection_cache:
            return self._detection_cache[domain]

        config: Optional[ForumConfig] = None
        for site_key, site_config in self.site_configs.items():
            if domain == site_key or domain.endswith('.' + site_key):
                config = site_config
                break

        if config is None:
            config = self.default_config
            if not silent and domain not in self._warned:
                safe_print(f"⚠️ [yellow]未识别的论坛域名 {domain}，使用 {config.name} 配置[/yellow]")
                self._warned.add(domain)

        self._detection_cache[domain] = config
        return config
