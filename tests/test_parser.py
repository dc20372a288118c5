"""
帖子 JSON 解析
"""

import json
import unittest

from reddit_epub.errors import DecodeError
from reddit_epub.modules import parse_page, parse_thread
from reddit_epub.models import RawPage

from .fixtures import make_listing, make_payload


class TestParseThread(unittest.TestCase):
    def test_post_and_comments(self):
        raw = make_payload(author='op', title='Part One', selftext='Body text.', post_id='abc',
                           comments=[('op', 'first'), ('reader', 'nice'), ('op', 'second')])

        page = parse_thread(raw)

        self.assertEqual(page.author, 'op')
        self.assertEqual(page.post_id, 'abc')
        self.assertEqual(page.title, 'Part One')
        self.assertEqual(page.body, 'Body text.')
        self.assertEqual(page.subreddit, 'testfic')
        # 解析阶段保留全部评论，按原始顺序
        self.assertEqual([(c.author, c.body) for c in page.comments],
                         [('op', 'first'), ('reader', 'nice'), ('op', 'second')])

    def test_more_placeholders_are_skipped(self):
        page = parse_thread(make_payload(comments=[('op', 'a')], more=True))
        self.assertEqual(len(page.comments), 1)

    def test_absent_and_empty_fields_differ(self):
        absent = parse_thread(make_payload(title=None, selftext=None, comments=[('op', None)]))
        empty = parse_thread(make_payload(selftext='', comments=[('op', '')]))

        self.assertIsNone(absent.title)
        self.assertIsNone(absent.body)
        self.assertIsNone(absent.comments[0].body)
        self.assertEqual(empty.body, '')
        self.assertEqual(empty.comments[0].body, '')

    def test_extra_fields_are_ignored(self):
        listing = make_listing()
        post = listing[0]['data']['children'][0]['data']
        post.update({'ups': 12, 'all_awardings': [], 'edited': False, 'media_embed': {}})
        page = parse_thread(json.dumps(listing).encode('utf-8'))
        self.assertEqual(page.author, 'op')

    def test_utf8_bom_and_unicode(self):
        raw = b'\xef\xbb\xbf' + make_payload(title='第一章 Café')
        self.assertEqual(parse_thread(raw).title, '第一章 Café')

    def test_parse_page_reports_url(self):
        url = "https://old.reddit.com/r/testfic/comments/abc/part_one/.json"
        with self.assertRaises(DecodeError) as ctx:
            parse_page(RawPage(url=url, content=b'<html>rate limited</html>'))
        self.assertEqual(ctx.exception.url, url)


class TestParseThreadErrors(unittest.TestCase):
    def assertDecodeError(self, document):
        raw = document if isinstance(document, bytes) else json.dumps(document).encode('utf-8')
        with self.assertRaises(DecodeError):
            parse_thread(raw)

    def test_not_json(self):
        self.assertDecodeError(b'not json at all')

    def test_not_a_two_entry_listing(self):
        self.assertDecodeError({'kind': 'Listing'})
        self.assertDecodeError([make_listing()[0]])

    def test_empty_root_listing(self):
        listing = make_listing()
        listing[0]['data']['children'] = []
        self.assertDecodeError(listing)

    def test_missing_children(self):
        listing = make_listing()
        del listing[1]['data']['children']
        self.assertDecodeError(listing)

    def test_post_without_author(self):
        listing = make_listing()
        del listing[0]['data']['children'][0]['data']['author']
        self.assertDecodeError(listing)

    def test_post_without_id(self):
        listing = make_listing()
        del listing[0]['data']['children'][0]['data']['id']
        self.assertDecodeError(listing)

    def test_comment_without_author(self):
        listing = make_listing(comments=[('op', 'x')])
        del listing[1]['data']['children'][0]['data']['author']
        self.assertDecodeError(listing)

    def test_wrong_field_type(self):
        listing = make_listing()
        listing[0]['data']['children'][0]['data']['title'] = 42
        self.assertDecodeError(listing)


if __name__ == '__main__':
    unittest.main()
