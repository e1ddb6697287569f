# -*- coding: utf-8 -*-

"""
osslite.exceptions
~~~~~~~~~~~~~~~~~~

异常类。

    - :class:`ClientError` ：本地产生的错误，如非法的HTTP头部、无法解析的XML、缺失的响应头部等；
    - :class:`RequestError` ：网络层错误，包装了底层HTTP库抛出的异常；
    - :class:`ServerError` ：服务器返回了非2XX的状态码，包含操作类型和状态码。
"""

import re

import xml.etree.ElementTree as ElementTree
from xml.parsers import expat

from .compat import to_string


_OSS_ERROR_TO_EXCEPTION = {} # populated at end of module


OSS_CLIENT_ERROR_STATUS = -1
OSS_REQUEST_ERROR_STATUS = -2

OPERATION_GET = 'get'
OPERATION_PUT = 'put'
OPERATION_COPY = 'copy'
OPERATION_DELETE = 'delete'
OPERATION_HEAD = 'head'
OPERATION_POST = 'post'


class OssError(Exception):
    def __init__(self, status, headers, body, details):
        #: HTTP 状态码
        self.status = status

        #: 请求ID，用于跟踪一个OSS请求
        self.request_id = headers.get('x-oss-request-id', '')

        #: HTTP响应体（部分）
        self.body = body

        #: 详细错误信息，是一个string到string的dict
        self.details = details

        #: OSS错误码
        self.code = self.details.get('Code', '')

        #: OSS错误信息
        self.message = self.details.get('Message', '')

    def __str__(self):
        return str(self.details)


class ClientError(OssError):
    def __init__(self, message):
        OssError.__init__(self, OSS_CLIENT_ERROR_STATUS, {}, 'ClientError: ' + message, {})

    def __str__(self):
        return self.body


class InvalidHeader(ClientError):
    """HTTP头部的名称或值无法作为合法的HTTP头部发送。在签名之前抛出。"""
    def __init__(self, name, value, reason):
        ClientError.__init__(self, 'invalid header {0!r}: {1}'.format(name, reason))
        self.name = name
        self.value = value


class XmlDecodeError(ClientError):
    """响应体不是合法的XML，或者XML的结构不符合预期。"""
    pass


class MissingHeader(ClientError):
    """响应中缺少必需的头部，如HEAD请求的 `Last-Modified` 、 `Content-Length` 。"""
    def __init__(self, header):
        ClientError.__init__(self, 'response header {0!r} is missing'.format(header))
        self.header = header


class InconsistentError(ClientError):
    pass


class RequestError(OssError):
    def __init__(self, e):
        OssError.__init__(self, OSS_REQUEST_ERROR_STATUS, {}, 'RequestError: ' + str(e), {})
        self.exception = e

    def __str__(self):
        return self.body


class ServerError(OssError):
    def __init__(self, status, headers, body, details, operation=''):
        OssError.__init__(self, status, headers, body, details)

        #: 出错的操作类型，如 'get' 、 'put' 、 'copy' 、 'delete' 、 'head' 、 'post'
        self.operation = operation

    def __str__(self):
        return '{0} error, status code: {1}, details: {2}'.format(self.operation.upper(), self.status, self.details)


class NotFound(ServerError):
    status = 404
    code = ''


class MalformedXml(ServerError):
    status = 400
    code = 'MalformedXML'


class InvalidArgument(ServerError):
    status = 400
    code = 'InvalidArgument'

    def __init__(self, status, headers, body, details, operation=''):
        super(InvalidArgument, self).__init__(status, headers, body, details, operation)
        self.name = details.get('ArgumentName')
        self.value = details.get('ArgumentValue')


class InvalidObjectName(ServerError):
    status = 400
    code = 'InvalidObjectName'


class NoSuchBucket(NotFound):
    status = 404
    code = 'NoSuchBucket'


class NoSuchKey(NotFound):
    status = 404
    code = 'NoSuchKey'


class NoSuchUpload(NotFound):
    status = 404
    code = 'NoSuchUpload'


class Conflict(ServerError):
    status = 409
    code = ''


class BucketNotEmpty(Conflict):
    status = 409
    code = 'BucketNotEmpty'


class NotModified(ServerError):
    status = 304
    code = ''


class AccessDenied(ServerError):
    status = 403
    code = 'AccessDenied'


def make_exception(resp, operation, body=None):
    """根据非2XX的响应构造 :class:`ServerError` 或其子类。

    :param resp: 响应，需要有 `status` 和 `headers` 属性
    :param operation: 操作类型，如 'get'
    :param body: 响应体。为None时调用 `resp.read(4096)` 读取；异步传输需要调用者先读出响应体。
    """
    status = resp.status
    headers = resp.headers
    if body is None:
        body = resp.read(4096)
    details = _parse_error_body(body)
    code = details.get('Code', '')

    try:
        klass = _OSS_ERROR_TO_EXCEPTION[(status, code)]
    except KeyError:
        klass = _OSS_ERROR_TO_EXCEPTION.get((status, ''), ServerError)

    return klass(status, headers, body, details, operation)


def _walk_subclasses(klass):
    for sub in klass.__subclasses__():
        yield sub
        for subsub in _walk_subclasses(sub):
            yield subsub


for klass in _walk_subclasses(ServerError):
    status = getattr(klass, 'status', None)
    code = getattr(klass, 'code', None)

    if status is not None and code is not None:
        _OSS_ERROR_TO_EXCEPTION[(status, code)] = klass


ElementTreeParseError = (ElementTree.ParseError, expat.ExpatError)


def _parse_error_body(body):
    if not body:
        return {}

    try:
        root = ElementTree.fromstring(body)
        if root.tag != 'Error':
            return {}

        details = {}
        for child in root:
            details[child.tag] = child.text
        return details
    except ElementTreeParseError:
        return _guess_error_details(body)


def _guess_error_details(body):
    details = {}
    body = to_string(body)

    if '<Error>' not in body or '</Error>' not in body:
        return details

    m = re.search('<Code>(.*)</Code>', body)
    if m:
        details['Code'] = m.group(1)

    m = re.search('<Message>(.*)</Message>', body)
    if m:
        details['Message'] = m.group(1)

    return details
