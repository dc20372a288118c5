"""测试用的论坛数据和假 HTTP 会话"""

import json
from unittest.mock import MagicMock

import requests

from reddit_epub.modules import SiteDetector, normalize_url


def make_listing(author='op', title='Part One', selftext='Once upon a time.',
                 comments=(), post_id='abc', more=False):
    """生成与论坛 JSON 接口相同结构的两项 listing，comments 为 (作者, 正文) 元组"""
    post = {'id': post_id, 'author': author, 'subreddit': 'testfic'}
    if title is not None:
        post['title'] = title
    if selftext is not None:
        post['selftext'] = selftext

    children = []
    for index, (comment_author, body) in enumerate(comments):
        data = {'id': f'{post_id}c{index}', 'author': comment_author}
        if body is not None:
            data['body'] = body
        children.append({'kind': 't1', 'data': data})
    if more:
        children.append({'kind': 'more', 'data': {'count': 2, 'children': ['x', 'y']}})

    return [
        {'kind': 'Listing', 'data': {'children': [{'kind': 't3', 'data': post}]}},
        {'kind': 'Listing', 'data': {'children': children}},
    ]


def make_payload(**kwargs) -> bytes:
    return json.dumps(make_listing(**kwargs)).encode('utf-8')


def make_response(content: bytes, status_error=None):
    response = MagicMock()
    response.content = content
    if status_error is not None:
        response.raise_for_status.side_effect = status_error
    return response


class FakeForum:
    """按规范化 URL 返回预置页面的假会话，未登记的页面返回 404"""

    def __init__(self):
        self.detector = SiteDetector()
        self.pages = {}
        self.session = MagicMock()
        self.session.get.side_effect = self._get

    def add(self, url: str, payload: bytes):
        self.pages[normalize_url(url, self.detector.detect_site(url, silent=True))] = payload

    def _get(self, url, **kwargs):
        if url not in self.pages:
            return make_response(b'', status_error=requests.HTTPError(f"404 Client Error: {url}"))
        return make_response(self.pages[url])

    @property
    def requested_urls(self):
        return [call.args[0] for call in self.session.get.call_args_list]
