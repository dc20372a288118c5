"""解析专用工具函数"""
from __future__ import annotations

import re

import chardet

__all__ = [
    'sanitize_filename',
    'detect_encoding',
    'decode_payload',
]


def sanitize_filename(text: str) -> str:
    """清理文本作为安全的文件名 (跨平台字符过滤)"""
    return re.sub(r'[\\/*?:"<>|]', "", text).strip()


def detect_encoding(raw: bytes) -> str:
    """检测响应字节的编码，优先 BOM，其次 chardet，默认 UTF-8"""
    if raw.startswith(b'\xef\xbb\xbf'):
        return 'utf-8-sig'

    detected = chardet.detect(raw[:10240])
    if detected and detected['encoding'] and detected['confidence'] > 0.7:
        return detected['encoding']

    return 'utf-8'


def decode_payload(raw: bytes) -> str:
    """把响应字节解码为文本，非 UTF-8 时交给 chardet 判断"""
    try:
        return raw.decode('utf-8-sig')
    except UnicodeDecodeError:
        return raw.decode(detect_encoding(raw), errors='replace')
