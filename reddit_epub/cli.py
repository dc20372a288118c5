#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
论坛帖子转 EPUB - 命令行接口
Reddit Epub - Command Line Interface
"""

import argparse
import os
import sys
from typing import List, Optional

from . import __version__
from .crawler import ThreadEpubCrawler, CYCLE_STOP, CYCLE_ERROR
from .errors import ConfigError, RedditEpubError
from .modules import (
    FileCache,
    MemoryCache,
    PageFetcher,
    SiteDetector,
    book_identifier,
    sanitize_filename,
    write_epub,
    write_epub_file,
)
from .modules.link_resolver import DEFAULT_KEYWORDS
from .utils import (clean_and_validate_url, print_chapter_summary,
                    print_status_table, safe_print, set_debug)

VERSION = f'v{__version__}'


def create_cli_parser() -> argparse.ArgumentParser:
    """创建命令行参数解析器"""
    parser = argparse.ArgumentParser(
        prog='reddit-epub',
        description='📚 沿着作者的『下一篇』链接把论坛帖子串成一本 EPUB',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
使用示例:
  reddit-epub -t "书名" https://www.reddit.com/r/HFY/comments/abc/part_1/ > book.epub
  reddit-epub -t "书名" -o book.epub URL1 URL2          # 多条章节链按顺序拼接
  reddit-epub -t "书名" --no-cache URL                  # 不读写磁盘缓存
  reddit-epub -t "书名" --on-cycle error URL            # 链接循环时报错退出
  reddit-epub --list-sites                               # 显示支持的论坛

说明:
  • EPUB 默认写到标准输出，提示信息写到标准错误
  • 每页只保留主帖正文和楼主本人的顶层评论
  • 任何一页失败都会中止整个运行，不会输出不完整的书
        """
    )

    parser.add_argument('urls', nargs='*', metavar='URL', help='章节链的起始帖子URL，可指定多个')
    parser.add_argument('-t', '--title', default='', help='书名 (必填)')
    parser.add_argument('-o', '--output',
                        help='输出文件或目录 (默认: 标准输出)')
    parser.add_argument('--language', default='en', help='书籍语言 (默认: en)')

    # 缓存相关
    cache_group = parser.add_mutually_exclusive_group()
    cache_group.add_argument('--cache-dir', help='缓存目录 (默认: 系统临时目录)')
    cache_group.add_argument('--no-cache', action='store_true', help='仅使用本次运行的内存缓存')
    parser.add_argument('--cache-ttl', type=float, default=None,
                        help='缓存有效期(秒)，默认永不过期')

    # 链接识别
    parser.add_argument('--keyword', action='append', dest='keywords',
                        help=f'续篇链接关键词，可重复 (默认: {", ".join(DEFAULT_KEYWORDS)})')
    parser.add_argument('--on-cycle', choices=[CYCLE_STOP, CYCLE_ERROR], default=CYCLE_STOP,
                        help='章节链出现循环时的处理方式 (默认: stop)')

    # 其他选项
    parser.add_argument('--timeout', type=float, default=None, help='单次请求超时(秒)，默认不限')
    parser.add_argument('--list-sites', action='store_true', help='显示支持的论坛列表')
    parser.add_argument('--debug', action='store_true', help='启用调试输出')
    parser.add_argument('--version', action='version', version=f'%(prog)s {VERSION}')

    return parser


def show_supported_sites():
    """显示支持的论坛列表"""
    detector = SiteDetector()
    info = {}
    for site_key, config in detector.site_configs.items():
        info[site_key] = f"{config.name} (链接需包含 {config.host_marker})"
    print_status_table(info)


def resolve_output_path(output: str, title: str) -> str:
    """输出参数是目录时，用书名生成文件名"""
    if os.path.isdir(output):
        return os.path.join(output, f"{sanitize_filename(title) or 'book'}.epub")
    return output


def validate_args(args) -> List[str]:
    """在任何网络请求之前校验参数，返回清理后的起始URL"""
    if not args.title or not args.title.strip():
        raise ConfigError("必须设置书名 (-t/--title)")
    if not args.urls:
        raise ConfigError("至少需要一个起始URL")
    if args.cache_ttl is not None and args.cache_ttl < 0:
        raise ConfigError("--cache-ttl 不能为负数")
    if args.keywords and any(not keyword.strip() for keyword in args.keywords):
        raise ConfigError("--keyword 不能为空")
    return [clean_and_validate_url(url) for url in args.urls]


def run(args, stdout=None) -> None:
    """执行一次完整的转换，失败时抛出 RedditEpubError"""
    start_urls = validate_args(args)
    title = args.title.strip()

    if args.no_cache:
        cache = MemoryCache()
    else:
        cache = FileCache(directory=args.cache_dir, ttl=args.cache_ttl)

    detector = SiteDetector()
    fetcher = PageFetcher(detector, cache=cache, timeout=args.timeout)
    crawler = ThreadEpubCrawler(
        fetcher,
        detector,
        keywords=args.keywords or DEFAULT_KEYWORDS,
        on_cycle=args.on_cycle,
    )

    def on_chain_done(start_url: str, added: int):
        safe_print(f"✅ [green]章节链完成，共 {added} 章[/green]")

    book = crawler.crawl(start_urls, title, language=args.language, on_chain_done=on_chain_done)
    print_chapter_summary(book.title, book.author, book.chapters)

    identifier = book_identifier(title, start_urls)
    if args.output:
        write_epub_file(book, identifier, resolve_output_path(args.output, title))
    else:
        stream = stdout if stdout is not None else sys.stdout.buffer
        write_epub(book, identifier, stream)


def main(argv: Optional[List[str]] = None, stdout=None) -> int:
    parser = create_cli_parser()
    args = parser.parse_args(argv)

    if args.list_sites:
        show_supported_sites()
        return 0

    set_debug(args.debug)

    try:
        run(args, stdout=stdout)
    except RedditEpubError as e:
        safe_print(f"❌ {type(e).__name__}: {e}", style="bold red", markup=False)
        return 1
    except KeyboardInterrupt:
        safe_print("\n👋 用户取消，程序退出", style="yellow")
        return 130

    return 0


if __name__ == "__main__":
    sys.exit(main())
