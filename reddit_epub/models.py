from dataclasses import dataclass, field
from typing import List, Optional, Tuple

@dataclass(frozen=True)
class ForumConfig:
    name: str
    web_hosts: Tuple[str, ...]  # 需要替换成旧版前端的域名
    old_host: Optional[str]  # 旧版前端域名，页面结构更稳定
    host_marker: str  # 后续链接必须包含的域名片段
    data_suffix: str = '.json'  # 请求结构化数据的后缀
    user_agent: str = 'Reddit Epub/0.1'
    accept: str = 'application/json'

@dataclass(frozen=True)
class RawPage:
    url: str
    content: bytes

@dataclass(frozen=True)
class Comment:
    author: str
    body: Optional[str]  # None 表示字段缺失，与空字符串不同
    comment_id: Optional[str] = None

@dataclass
class ParsedPage:
    author: str
    post_id: str
    title: Optional[str]
    body: Optional[str]
    subreddit: Optional[str] = None
    comments: List[Comment] = field(default_factory=list)

@dataclass(frozen=True)
class Chapter:
    title: str
    html: str
    source_url: str

@dataclass
class BookState:
    """一次运行中累积的整本书"""
    title: str
    author: Optional[str] = None
    language: str = 'en'
    chapters: List[Chapter] = field(default_factory=list)

    def add_chapter(self, chapter: Chapter) -> None:
        self.chapters.append(chapter)

    def set_author(self, author: str) -> None:
        # 以最后处理的页面作者为准
        self.author = author
