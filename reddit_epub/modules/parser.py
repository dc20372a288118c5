"""
帖子页面 JSON 解析。

响应是两项的列表：第 0 项是主帖 listing（一个子节点），第 1 项是评论
listing（零个或多个顶层评论）。只读取流水线需要的字段，其余字段忽略。
作者、ID 等必有字段严格校验；标题、正文等可选字段缺失时保留为 None。
"""
from __future__ import annotations

import json
from typing import Any, List, Optional

from ..errors import DecodeError
from ..models import Comment, ParsedPage, RawPage
from .utils import decode_payload

__all__ = ['parse_thread', 'parse_page']

# 折叠评论的占位节点，没有作者和正文
MORE_KIND = 'more'


def _children(listing: Any, index: int, url: Optional[str]) -> List[dict]:
    if not isinstance(listing, dict):
        raise DecodeError(f"第 {index} 项 listing 不是对象", url=url)
    data = listing.get('data')
    if not isinstance(data, dict):
        raise DecodeError(f"第 {index} 项 listing 缺少 data", url=url)
    children = data.get('children')
    if not isinstance(children, list):
        raise DecodeError(f"第 {index} 项 listing 缺少 children", url=url)
    return children


def _required_str(data: dict, key: str, url: Optional[str]) -> str:
    value = data.get(key)
    if not isinstance(value, str):
        raise DecodeError(f"缺少必需字段 {key!r}", url=url)
    return value


def _optional_str(data: dict, key: str, url: Optional[str]) -> Optional[str]:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise DecodeError(f"字段 {key!r} 类型错误", url=url)
    return value


def parse_thread(raw: bytes, url: Optional[str] = None) -> ParsedPage:
    """把原始响应字节解码为 ParsedPage，结构无效时抛出 DecodeError"""
    try:
        document = json.loads(decode_payload(raw))
    except ValueError as e:
        raise DecodeError(f"JSON 解码失败: {e}", url=url) from e

    if not isinstance(document, list) or len(document) < 2:
        raise DecodeError("页面数据应为两项 listing", url=url)

    root_children = _children(document[0], 0, url)
    if not root_children:
        raise DecodeError("主帖 listing 为空", url=url)

    post = root_children[0].get('data') if isinstance(root_children[0], dict) else None
    if not isinstance(post, dict):
        raise DecodeError("主帖缺少 data", url=url)

    comments: List[Comment] = []
    for child in _children(document[1], 1, url):
        if not isinstance(child, dict):
            raise DecodeError("评论节点不是对象", url=url)
        if child.get('kind') == MORE_KIND:
            continue
        data = child.get('data')
        if not isinstance(data, dict):
            raise DecodeError("评论缺少 data", url=url)
        comments.append(Comment(
            author=_required_str(data, 'author', url),
            body=_optional_str(data, 'body', url),
            comment_id=_optional_str(data, 'id', url),
        ))

    return ParsedPage(
        author=_required_str(post, 'author', url),
        post_id=_required_str(post, 'id', url),
        title=_optional_str(post, 'title', url),
        body=_optional_str(post, 'selftext', url),
        subreddit=_optional_str(post, 'subreddit', url),
        comments=comments,
    )


def parse_page(page: RawPage) -> ParsedPage:
    return parse_thread(page.content, url=page.url)
