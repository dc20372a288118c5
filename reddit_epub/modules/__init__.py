from __future__ import annotations

# 流水线各阶段的子模块
from .utils import (
    sanitize_filename,
    detect_encoding,
    decode_payload,
)
from .cache import cache_key, PageCache, FileCache, MemoryCache
from .fetcher import normalize_url, create_session, PageFetcher
from .parser import parse_thread, parse_page
from .assembler import compose_markdown, render_markdown, assemble_chapter
from .link_resolver import LinkMatcher, KeywordLinkMatcher, find_next_page
from .processor import process_page
from .epub_builder import book_identifier, build_epub, render_epub, write_epub, write_epub_file
from .site_detector import SiteDetector

__all__ = [
    'sanitize_filename',
    'detect_encoding',
    'decode_payload',

    'cache_key',
    'PageCache',
    'FileCache',
    'MemoryCache',

    'normalize_url',
    'create_session',
    'PageFetcher',

    'parse_thread',
    'parse_page',

    'compose_markdown',
    'render_markdown',
    'assemble_chapter',

    'LinkMatcher',
    'KeywordLinkMatcher',
    'find_next_page',

    'process_page',

    'book_identifier',
    'build_epub',
    'render_epub',
    'write_epub',
    'write_epub_file',

    'SiteDetector',
]
