"""流水线各阶段的错误类型，任何一种都会终止整个运行"""

from typing import Optional

__all__ = [
    'RedditEpubError',
    'ConfigError',
    'FetchError',
    'DecodeError',
    'AssemblyError',
    'ParseError',
    'OutputError',
    'CycleError',
]


class RedditEpubError(Exception):
    """所有错误的基类，可携带出错页面的URL"""

    def __init__(self, message: str, url: Optional[str] = None):
        super().__init__(message)
        self.message = message
        self.url = url

    def __str__(self) -> str:
        if self.url:
            return f"{self.message}: {self.url}"
        return self.message


class ConfigError(RedditEpubError):
    """参数缺失或无效（如书名为空）"""


class FetchError(RedditEpubError):
    """网络请求或缓存读写失败"""


class DecodeError(RedditEpubError):
    """页面数据结构无效或为空"""


class AssemblyError(RedditEpubError):
    """主帖缺少标题或正文"""


class ParseError(RedditEpubError):
    """渲染后的章节或其中的链接无法解析"""


class OutputError(RedditEpubError):
    """EPUB 序列化或写出失败"""


class CycleError(RedditEpubError):
    """章节链中出现重复页面"""
