from typing import Dict, List
import string
from urllib.parse import urlparse

from rich.console import Console
from rich.panel import Panel
from rich.table import Table
from rich import box
from rich.markup import escape

from .errors import ConfigError

__all__ = [
    'console',
    'safe_print',
    'debug_print',
    'set_debug',
    'print_status_table',
    'print_chapter_summary',
    'clean_and_validate_url',
    'escape',
]

# 标准输出留给 EPUB 数据，所有提示信息走标准错误
console = Console(stderr=True)

_debug_enabled = False


def set_debug(enabled: bool) -> None:
    global _debug_enabled
    _debug_enabled = enabled


def safe_print(*args, **kwargs):
    """输出提示信息到标准错误"""
    message = ' '.join(str(arg) for arg in args)
    console.print(message, **kwargs)


def debug_print(*args, **kwargs):
    """仅在 --debug 模式下输出"""
    if _debug_enabled:
        safe_print(*args, style="dim", **kwargs)


def print_status_table(info: Dict[str, str]):
    """打印状态信息表格"""
    table = Table(box=box.ROUNDED, border_style="green")
    table.add_column("项目", style="cyan", no_wrap=True)
    table.add_column("值", style="magenta")

    for key, value in info.items():
        table.add_row(key, value)

    console.print(table)


def print_chapter_summary(title: str, author: str, chapters: List):
    """打印整本书的章节摘要"""
    info_text = f"📕 书名: [bold cyan]{escape(title)}[/bold cyan]"
    info_text += f"\n✍️ 作者: [bold]{escape(author or '未知')}[/bold]"
    info_text += f"\n📚 总章节数: [bold green]{len(chapters)}[/bold green]"

    if len(chapters) > 0:
        info_text += f"\n🔖 首章: [italic]{escape(chapters[0].title)}[/italic]"
        info_text += f"\n🔖 末章: [italic]{escape(chapters[-1].title)}[/italic]"

    panel = Panel(
        info_text,
        title="📋 章节信息",
        border_style="blue",
        box=box.ROUNDED
    )
    console.print(panel)


def clean_and_validate_url(url: str) -> str:
    """
    清理和验证起始URL，移除复制粘贴时混入的异常字符

    Args:
        url: 原始URL字符串

    Returns:
        str: 清理后的有效URL

    Raises:
        ConfigError: 如果URL格式无效
    """
    if not url or not url.strip():
        raise ConfigError("URL不能为空")

    url = url.strip()

    # 移除常见的全角括号等异常字符
    abnormal_chars = ['】', '【', '」', '「', '》', '《', '）', '（', '｝', '｛', '］', '［']
    for char in abnormal_chars:
        url = url.replace(char, '')

    # 移除不可见字符和控制字符
    printable_chars = set(string.printable) - set(string.whitespace)
    url = ''.join(char for char in url if char in printable_chars)

    if not url.startswith(('http://', 'https://')):
        if url.startswith('www.') or '.' in url:
            url = 'https://' + url
        else:
            raise ConfigError("无效的URL格式", url=url)

    try:
        parsed = urlparse(url)
    except ValueError as e:
        raise ConfigError(f"无效的URL格式: {e}", url=url) from e
    if not parsed.netloc:
        raise ConfigError("URL缺少域名部分", url=url)

    return url
