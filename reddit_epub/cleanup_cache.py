#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
论坛帖子转 EPUB - 缓存清理工具
Reddit Epub - Cache Cleanup Tool

转换过程从不删除缓存条目，需要刷新内容时用本工具显式清理
"""

import argparse
import os
import sys
from typing import List, Optional, Tuple

from .errors import RedditEpubError
from .modules.cache import FileCache
from .modules.fetcher import normalize_url
from .modules.site_detector import SiteDetector
from .utils import safe_print


def cleanup_cache_files(cache: FileCache, urls: List[str], dry_run: bool = False) -> Tuple[int, int]:
    """清理缓存文件，指定 URL 时只清理对应条目"""
    if urls:
        detector = SiteDetector()
        targets = [cache.path_for(normalize_url(url, detector.detect_site(url, silent=True))) for url in urls]
        targets = [path for path in targets if os.path.exists(path)]
    else:
        targets = cache.entries()

    if not targets:
        safe_print("✅ 未发现任何缓存文件")
        return 0, 0

    safe_print(f"🔍 发现 {len(targets)} 个缓存文件:")
    for path in targets:
        safe_print(f"   📄 {path}")

    if dry_run:
        safe_print("\n🔬 [预览模式] 以上文件将被删除 (使用 --execute 实际执行)", markup=False)
        return len(targets), 0

    safe_print("\n🧹 开始清理...")

    success_count = 0
    error_count = 0

    for path in targets:
        try:
            os.remove(path)
            safe_print(f"✅ 已删除: {path}")
            success_count += 1
        except OSError as e:
            safe_print(f"❌ 删除失败: {path} - {e}")
            error_count += 1

    return success_count, error_count


def main(argv: Optional[List[str]] = None) -> int:
    parser = argparse.ArgumentParser(
        prog='reddit-epub-cleanup',
        description="🧹 论坛帖子缓存清理工具",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  reddit-epub-cleanup                          # 预览临时目录下的全部缓存
  reddit-epub-cleanup --execute                # 清理全部缓存
  reddit-epub-cleanup -d /path/to/cache        # 预览指定目录
  reddit-epub-cleanup --execute URL1 URL2      # 只清理指定页面的缓存
        """
    )

    parser.add_argument('urls', nargs='*', metavar='URL',
                        help='只清理这些帖子页面的缓存')
    parser.add_argument('-d', '--directory', default=None,
                        help='缓存目录 (默认: 系统临时目录)')
    parser.add_argument('--execute', action='store_true',
                        help='实际执行清理操作 (默认: 预览模式)')

    args = parser.parse_args(argv)
    cache = FileCache(directory=args.directory)

    if not os.path.isdir(cache.directory):
        safe_print(f"❌ 错误: '{cache.directory}' 不是一个目录")
        return 1

    safe_print(f"🔍 扫描目录: {os.path.abspath(cache.directory)}")

    try:
        success_count, error_count = cleanup_cache_files(cache, args.urls, dry_run=not args.execute)
    except RedditEpubError as e:
        safe_print(f"❌ 错误: {e}", markup=False)
        return 1

    if args.execute:
        safe_print(f"📊 清理结果: 成功删除 {success_count} 个, 失败 {error_count} 个")

    return 0 if error_count == 0 else 1


if __name__ == "__main__":
    sys.exit(main())
