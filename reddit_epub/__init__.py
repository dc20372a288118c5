"""论坛帖子章节链转 EPUB"""

__version__ = '0.1.0'
