"""章节组装：标题 + 主帖正文 + 楼主的后续评论 + 来源链接"""
from __future__ import annotations

from typing import Tuple

import markdown

from ..errors import AssemblyError
from ..models import ParsedPage

__all__ = ['compose_markdown', 'render_markdown', 'assemble_chapter']

SEPARATOR = "\n\n---\n\n"
MARKDOWN_EXTENSIONS = ['extra', 'sane_lists', 'pymdownx.magiclink', 'pymdownx.tilde']
# 裸链接自动转换为 <a>，~~删除线~~ 渲染为 <del>，不启用 ~下标~
MARKDOWN_EXTENSION_CONFIGS = {
    'pymdownx.tilde': {'subscript': False},
}


def compose_markdown(page: ParsedPage, source_url: str) -> str:
    """拼接章节的 Markdown 原文，只保留作者与楼主相同的评论"""
    if page.title is None:
        raise AssemblyError("主帖缺少标题", url=source_url)
    if page.body is None:
        raise AssemblyError("主帖缺少正文", url=source_url)

    text = f"# {page.title}\n\n{page.body}"

    for comment in page.comments:
        if comment.author != page.author or comment.body is None:
            continue
        text += SEPARATOR + comment.body

    text += f"\n\n[{source_url}]({source_url})"
    return text


def render_markdown(text: str) -> str:
    return markdown.markdown(
        text,
        extensions=MARKDOWN_EXTENSIONS,
        extension_configs=MARKDOWN_EXTENSION_CONFIGS,
        output_format='xhtml',
    )


def assemble_chapter(page: ParsedPage, source_url: str) -> Tuple[str, str]:
    """返回 (章节 HTML, 章节标题)"""
    text = compose_markdown(page, source_url)
    return render_markdown(text), page.title
