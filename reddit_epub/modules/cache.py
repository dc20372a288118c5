"""按内容寻址的响应缓存：键为规范化URL的 sha256"""
from __future__ import annotations

import glob
import hashlib
import os
import tempfile
import time
from typing import Dict, Optional

from filelock import FileLock

from ..errors import FetchError
from ..utils import debug_print

__all__ = ['cache_key', 'PageCache', 'FileCache', 'MemoryCache']

CACHE_PREFIX = 'redditepub-'
CACHE_SUFFIX = '.json'


def cache_key(url: str) -> str:
    """规范化URL的 sha256 十六进制摘要"""
    return hashlib.sha256(url.encode('utf-8')).hexdigest()


class PageCache:
    """缓存接口，get 未命中时返回 None"""

    def get(self, url: str) -> Optional[bytes]:
        raise NotImplementedError

    def put(self, url: str, content: bytes) -> None:
        raise NotImplementedError

    def invalidate(self, url: str) -> None:
        raise NotImplementedError


class MemoryCache(PageCache):
    """仅在本次运行内有效的内存缓存"""

    def __init__(self):
        self._entries: Dict[str, bytes] = {}

    def get(self, url: str) -> Optional[bytes]:
        return self._entries.get(cache_key(url))

    def put(self, url: str, content: bytes) -> None:
        self._entries[cache_key(url)] = content

    def invalidate(self, url: str) -> None:
        self._entries.pop(cache_key(url), None)

    def __len__(self) -> int:
        return len(self._entries)


class FileCache(PageCache):
    """
    文件系统缓存，文件名形如 redditepub-<hash>.json。
    ttl 为 None 时条目永不过期。
    """

    def __init__(self, directory: Optional[str] = None, prefix: str = CACHE_PREFIX,
                 ttl: Optional[float] = None):
        self.directory = directory or tempfile.gettempdir()
        self.prefix = prefix
        self.ttl = ttl

    def path_for(self, url: str) -> str:
        return os.path.join(self.directory, f"{self.prefix}{cache_key(url)}{CACHE_SUFFIX}")

    def get(self, url: str) -> Optional[bytes]:
        path = self.path_for(url)
        try:
            if self.ttl is not None and time.time() - os.path.getmtime(path) > self.ttl:
                debug_print(f"⌛ 缓存已过期: {path}")
                return None
            with open(path, 'rb') as f:
                return f.read()
        except FileNotFoundError:
            return None
        except OSError as e:
            raise FetchError(f"读取缓存失败 {path}: {e}", url=url) from e

    def put(self, url: str, content: bytes) -> None:
        path = self.path_for(url)
        tmp_path = f"{path}.tmp"
        try:
            os.makedirs(self.directory, exist_ok=True)
            with FileLock(f"{path}.lock", timeout=10):
                fd = os.open(tmp_path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, 0o600)
                with os.fdopen(fd, 'wb') as f:
                    f.write(content)
                os.replace(tmp_path, path)
        except OSError as e:
            raise FetchError(f"写入缓存失败 {path}: {e}", url=url) from e
        finally:
            # 锁文件保留，删除后其他进程可能各自锁住不同的文件
            if os.path.exists(tmp_path):
                os.remove(tmp_path)

    def invalidate(self, url: str) -> None:
        try:
            os.remove(self.path_for(url))
        except FileNotFoundError:
            pass

    def entries(self) -> list:
        pattern = os.path.join(self.directory, f"{self.prefix}*{CACHE_SUFFIX}")
        return sorted(glob.glob(pattern))
