"""把累积的章节写成一个 EPUB 文件"""
from __future__ import annotations

import hashlib
import io
from typing import BinaryIO, Iterable

from ebooklib import epub

from ..errors import OutputError
from ..models import BookState
from ..utils import safe_print

__all__ = ['book_identifier', 'build_epub', 'render_epub', 'write_epub', 'write_epub_file']

BASE_CSS = """
body { font-family: serif; margin: 0.5em; line-height: 1.5; }
h1 { font-size: 1.4em; margin-bottom: 1em; }
hr { border: 0; border-top: 1px solid #999; margin: 1.5em 0; }
blockquote { margin-left: 1em; padding-left: 0.8em; border-left: 3px solid #ccc; color: #444; }
"""


def book_identifier(title: str, source_urls: Iterable[str]) -> str:
    """由书名和起始URL生成稳定的标识，同样的输入得到同样的书"""
    digest = hashlib.sha256(title.encode('utf-8'))
    for url in source_urls:
        digest.update(b'\n' + url.encode('utf-8'))
    return f"urn:sha256:{digest.hexdigest()}"


def build_epub(book: BookState, identifier: str) -> epub.EpubBook:
    ebook = epub.EpubBook()
    ebook.set_identifier(identifier)
    ebook.set_title(book.title)
    ebook.set_language(book.language)
    if book.author:
        ebook.add_author(book.author)

    css_item = epub.EpubItem(uid="style_default", file_name="style/default.css",
                             media_type="text/css", content=BASE_CSS)
    ebook.add_item(css_item)

    epub_chapters = []
    for index, chapter in enumerate(book.chapters, start=1):
        item = epub.EpubHtml(title=chapter.title, file_name=f"chapter_{index:04d}.xhtml",
                             lang=book.language)
        item.content = chapter.html
        item.add_item(css_item)
        ebook.add_item(item)
        epub_chapters.append(item)

    ebook.toc = tuple(epub_chapters)
    ebook.add_item(epub.EpubNcx())
    ebook.add_item(epub.EpubNav())
    ebook.spine = ['nav'] + epub_chapters
    return ebook


def render_epub(book: BookState, identifier: str) -> bytes:
    """在内存中完成序列化，失败时不会产生任何输出"""
    if not book.chapters:
        raise OutputError("没有任何章节可写入")

    buffer = io.BytesIO()
    try:
        epub.write_epub(buffer, build_epub(book, identifier), {})
    except Exception as e:
        raise OutputError(f"EPUB 序列化失败: {e}") from e

    data = buffer.getvalue()
    if not data:
        raise OutputError("EPUB 序列化结果为空")
    return data


def write_epub(book: BookState, identifier: str, stream: BinaryIO) -> int:
    """写出到二进制流，返回写入的字节数"""
    data = render_epub(book, identifier)
    try:
        stream.write(data)
        stream.flush()
    except OSError as e:
        raise OutputError(f"写出 EPUB 失败: {e}") from e

    safe_print(f"💾 已写出 EPUB，共 {len(book.chapters)} 章，{len(data)} 字节")
    return len(data)


def write_epub_file(book: BookState, identifier: str, path: str) -> int:
    """序列化成功后才创建输出文件"""
    data = render_epub(book, identifier)
    try:
        with open(path, 'wb') as f:
            f.write(data)
    except OSError as e:
        raise OutputError(f"写出 EPUB 失败: {e}") from e

    safe_print(f"💾 EPUB 已保存到: [cyan]{path}[/cyan]（{len(book.chapters)} 章）")
    return len(data)
