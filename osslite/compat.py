# -*- coding: utf-8 -*-

"""
字符串与字节之间的转换。
"""

from urllib.parse import quote as urlquote, unquote as urlunquote
from urllib.parse import urlparse


def to_bytes(data):
    """若输入为str，则转为utf-8编码的bytes；其他则原样返回。"""
    if isinstance(data, str):
        return data.encode(encoding='utf-8')
    else:
        return data


def to_string(data):
    """若输入为bytes，则认为是utf-8编码，并返回str。"""
    if isinstance(data, bytes):
        return data.decode('utf-8')
    else:
        return data
