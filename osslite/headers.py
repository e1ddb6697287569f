# -*- coding: utf-8 -*-
"""
osslite.headers
~~~~~~~~~~~~~~~
这个模块包含http请求里header的key定义，以及构造请求头部集合的函数。
"""

import re

from requests.exceptions import InvalidHeader as _RequestsInvalidHeader
from requests.structures import CaseInsensitiveDict
from requests.utils import check_header_validity

from .exceptions import InvalidHeader

OSS_HEADER_PREFIX = "x-oss-"
OSS_USER_METADATA_PREFIX = "x-oss-meta-"

OSS_CANNED_ACL = "x-oss-acl"
OSS_OBJECT_ACL = "x-oss-object-acl"

OSS_COPY_OBJECT_SOURCE = "x-oss-copy-source"

OSS_REQUEST_ID = "x-oss-request-id"

OSS_HASH_CRC64_ECMA = "x-oss-hash-crc64ecma"
OSS_OBJECT_TYPE = "x-oss-object-type"

DATE = "Date"
AUTHORIZATION = "Authorization"
CONTENT_TYPE = "Content-Type"
CONTENT_MD5 = "Content-MD5"
CONTENT_LENGTH = "Content-Length"
LAST_MODIFIED = "Last-Modified"
ETAG = "ETag"
RANGE = "Range"
IF_MODIFIED_SINCE = "If-Modified-Since"

# RFC 7230 token
_TOKEN_RE = re.compile(r"^[!#$%&'*+\-.^_`|~0-9A-Za-z]+$")


def make_headers(headers=None):
    """校验并复制用户提供的HTTP头部，返回 `CaseInsensitiveDict` 。

    int等非字符串的值会转换为str。头部名称必须是合法的HTTP token，头部值不能包含回车、换行，且必须能用latin-1编码。

    :raises: :class:`InvalidHeader <osslite.exceptions.InvalidHeader>`
    """
    result = CaseInsensitiveDict()
    if not headers:
        return result

    for name, value in headers.items():
        if value is not None and not isinstance(value, (str, bytes)):
            value = str(value)

        check_header(name, value)
        result[name] = value

    return result


def check_header(name, value):
    if not isinstance(name, str) or not _TOKEN_RE.match(name):
        raise InvalidHeader(name, value, 'name is not a valid HTTP token')

    if value is None:
        return

    try:
        check_header_validity((name, value))
    except _RequestsInvalidHeader as e:
        raise InvalidHeader(name, value, str(e))

    if isinstance(value, str):
        try:
            value.encode('latin-1')
        except UnicodeEncodeError:
            raise InvalidHeader(name, value, 'value is not latin-1 encodable')
    else:
        # bytes values are decoded as utf-8 when signing
        try:
            value.decode('utf-8')
        except UnicodeDecodeError:
            raise InvalidHeader(name, value, 'bytes value is not utf-8 decodable')
