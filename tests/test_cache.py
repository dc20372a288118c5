"""
文件缓存与缓存清理工具
"""

import os
import stat
import tempfile
import time
import unittest

from reddit_epub.cleanup_cache import cleanup_cache_files
from reddit_epub.modules import FileCache, MemoryCache, cache_key

URL = "https://old.reddit.com/r/testfic/comments/abc/part_one/.json"
OTHER_URL = "https://old.reddit.com/r/testfic/comments/def/part_two/.json"


class TestFileCache(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.directory = self._tmp.name
        self.cache = FileCache(directory=self.directory)

    def tearDown(self):
        self._tmp.cleanup()

    def test_file_name_is_content_addressed(self):
        name = os.path.basename(self.cache.path_for(URL))
        self.assertRegex(name, r'^redditepub-[0-9a-f]{64}\.json$')
        self.assertIn(cache_key(URL), name)

    def test_miss_returns_none(self):
        self.assertIsNone(self.cache.get(URL))

    def test_put_then_get(self):
        self.cache.put(URL, b'{"a": 1}')
        self.assertEqual(self.cache.get(URL), b'{"a": 1}')
        self.assertIsNone(self.cache.get(OTHER_URL))

    def test_put_leaves_no_temp_file(self):
        self.cache.put(URL, b'data')
        names = os.listdir(self.directory)
        self.assertFalse([n for n in names if n.endswith('.tmp')])
        self.assertEqual(self.cache.entries(), [self.cache.path_for(URL)])

    @unittest.skipUnless(os.name == 'posix', "Windows 上 filelock 会自行删除锁文件")
    def test_put_keeps_lock_file_across_writes(self):
        """锁文件在写入后保留，后续写入复用同一个锁文件"""
        lock_path = f"{self.cache.path_for(URL)}.lock"
        open(lock_path, 'w').close()
        inode = os.stat(lock_path).st_ino

        self.cache.put(URL, b'first')
        self.cache.put(URL, b'second')

        self.assertTrue(os.path.exists(lock_path))
        self.assertEqual(os.stat(lock_path).st_ino, inode)
        self.assertEqual(self.cache.get(URL), b'second')

    @unittest.skipUnless(os.name == 'posix', "文件权限仅在 POSIX 上检查")
    def test_entry_is_private(self):
        self.cache.put(URL, b'data')
        mode = stat.S_IMODE(os.stat(self.cache.path_for(URL)).st_mode)
        self.assertEqual(mode, 0o600)

    def test_entries_never_expire_by_default(self):
        self.cache.put(URL, b'data')
        old = time.time() - 10 * 365 * 24 * 3600
        os.utime(self.cache.path_for(URL), (old, old))
        self.assertEqual(self.cache.get(URL), b'data')

    def test_ttl_expires_old_entries(self):
        cache = FileCache(directory=self.directory, ttl=60)
        cache.put(URL, b'data')
        self.assertEqual(cache.get(URL), b'data')

        old = time.time() - 120
        os.utime(cache.path_for(URL), (old, old))
        self.assertIsNone(cache.get(URL))

    def test_invalidate(self):
        self.cache.put(URL, b'data')
        self.cache.invalidate(URL)
        self.assertIsNone(self.cache.get(URL))
        # 不存在的条目不报错
        self.cache.invalidate(OTHER_URL)

    def test_entries_ignore_foreign_files(self):
        self.cache.put(URL, b'data')
        with open(os.path.join(self.directory, 'unrelated.json'), 'w') as f:
            f.write('{}')
        self.assertEqual(self.cache.entries(), [self.cache.path_for(URL)])


class TestMemoryCache(unittest.TestCase):
    def test_put_get_invalidate(self):
        cache = MemoryCache()
        cache.put(URL, b'data')
        self.assertEqual(cache.get(URL), b'data')
        cache.invalidate(URL)
        self.assertIsNone(cache.get(URL))
        self.assertEqual(len(cache), 0)


class TestCleanupCache(unittest.TestCase):
    def setUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.cache = FileCache(directory=self._tmp.name)
        self.cache.put(URL, b'one')
        self.cache.put(OTHER_URL, b'two')

    def tearDown(self):
        self._tmp.cleanup()

    def test_dry_run_keeps_files(self):
        found, errors = cleanup_cache_files(self.cache, [], dry_run=True)
        self.assertEqual((found, errors), (2, 0))
        self.assertEqual(len(self.cache.entries()), 2)

    def test_execute_removes_all(self):
        removed, errors = cleanup_cache_files(self.cache, [])
        self.assertEqual((removed, errors), (2, 0))
        self.assertEqual(self.cache.entries(), [])

    def test_execute_for_one_thread_url(self):
        """传入帖子原始 URL 时按规范化结果定位缓存条目"""
        removed, _ = cleanup_cache_files(
            self.cache, ["https://www.reddit.com/r/testfic/comments/abc/part_one/"])
        self.assertEqual(removed, 1)
        self.assertIsNone(self.cache.get(URL))
        self.assertEqual(self.cache.get(OTHER_URL), b'two')


if __name__ == '__main__':
    unittest.main()
