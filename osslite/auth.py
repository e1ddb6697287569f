# -*- coding: utf-8 -*-

"""
osslite.auth
~~~~~~~~~~~~

请求签名。

待签名字符串（StringToSign）的格式为::

    VERB + "\\n"
    + Content-MD5 + "\\n"
    + Content-Type + "\\n"
    + Date + "\\n"
    + CanonicalizedOSSHeaders
    + CanonicalizedResource

签名为以AccessKeySecret为密钥的HMAC-SHA1，经过Base64编码后以 `OSS AccessKeyId:Signature` 的形式放在Authorization头部中。
"""

import hmac
import hashlib
import logging

from requests.structures import CaseInsensitiveDict

from . import utils
from .compat import to_bytes, to_string, urlquote
from .headers import OSS_HEADER_PREFIX, AUTHORIZATION, DATE

logger = logging.getLogger(__name__)


def sign(verb, key_id, key_secret, bucket_name, key, signable_resource, headers):
    """计算Authorization头部的值。

    :param verb: HTTP方法，如'GET'、'PUT'
    :param key_id: AccessKeyId
    :param key_secret: AccessKeySecret
    :param bucket_name: Bucket名，列举Bucket时为空串
    :param key: 对象名，Bucket级别的操作为空串
    :param signable_resource: :func:`encode_resources <osslite.resources.encode_resources>` 返回的 `signable`
    :param headers: HTTP头部

    :return: 形如 `OSS AccessKeyId:Signature` 的字符串
    """
    string_to_sign = get_string_to_sign(verb, bucket_name, key, signable_resource, headers)
    signature = make_signature(key_secret, string_to_sign)

    return "OSS {0}:{1}".format(key_id, signature)


def make_signature(key_secret, string_to_sign):
    logger.debug('Make signature: string to be signed = {0!r}'.format(string_to_sign))

    h = hmac.new(to_bytes(key_secret), to_bytes(string_to_sign), hashlib.sha1)
    return utils.b64encode_as_string(h.digest())


def get_string_to_sign(verb, bucket_name, key, signable_resource, headers):
    if not isinstance(headers, CaseInsensitiveDict):
        headers = CaseInsensitiveDict(headers or {})

    content_md5 = _header_value(headers, 'content-md5')
    if content_md5:
        content_md5 = utils.b64encode_as_string(content_md5)

    content_type = _header_value(headers, 'content-type')
    date = _header_value(headers, 'date')

    return '\n'.join([verb,
                      content_md5,
                      content_type,
                      date,
                      get_canonical_headers(headers) + get_canonical_resource(bucket_name, key, signable_resource)])


def get_canonical_headers(headers):
    """把名称中含有 `x-oss-` 的头部按名称排序，每个头部转换为 `name:value\\n` 并连接起来。名称一律为小写。"""
    if isinstance(headers, CaseInsensitiveDict):
        items = headers.lower_items()
    else:
        items = ((k.lower(), v) for k, v in headers.items())

    canon_headers = []
    for k, v in items:
        if OSS_HEADER_PREFIX in k and v is not None:
            canon_headers.append((k, to_string(v)))

    canon_headers.sort(key=lambda x: x[0])

    return ''.join(k + ':' + v + '\n' for k, v in canon_headers)


def get_canonical_resource(bucket_name, key, signable_resource):
    if signable_resource:
        subresource = '?' + signable_resource
    else:
        subresource = ''

    if not bucket_name:
        return '/' + subresource
    else:
        return '/{0}/{1}{2}'.format(bucket_name, key, subresource)


def _header_value(headers, name):
    value = headers.get(name)
    if value is None:
        return ''
    return to_string(value)


class AuthBase(object):
    """用于保存用户AccessKeyId、AccessKeySecret，以及计算签名的对象。"""
    def __init__(self, access_key_id, access_key_secret):
        self.id = access_key_id.strip()
        self.secret = access_key_secret.strip()


class Auth(AuthBase):
    """签名认证。

    用法::

        >>> auth = osslite.Auth('your-access-key-id', 'your-access-key-secret')
        >>> auth.sign('GET', 'my-bucket', 'hello.txt', '', {'Date': 'Tue, 01 Jun 2021 12:00:00 GMT'})
        'OSS your-access-key-id:...'
    """
    def __init__(self, access_key_id, access_key_secret):
        super(Auth, self).__init__(access_key_id, access_key_secret)
        logger.debug("Init Auth: access_key_id: {0}, access_key_secret: ******".format(self.id))

    def sign(self, verb, bucket_name, key, signable_resource, headers):
        return sign(verb, self.id, self.secret, bucket_name, key, signable_resource, headers)

    def _sign_request(self, req, bucket_name, key, signable_resource):
        req.headers[AUTHORIZATION] = self.sign(req.method, bucket_name, key, signable_resource, req.headers)

    def _sign_url(self, req, bucket_name, key, signable_resource, expiration_time):
        req.headers[DATE] = str(expiration_time)
        string_to_sign = get_string_to_sign(req.method, bucket_name, key, signable_resource, req.headers)
        signature = make_signature(self.secret, string_to_sign)

        params = {'OSSAccessKeyId': self.id,
                  'Expires': str(expiration_time),
                  'Signature': signature}

        return _append_query(req.url, '&'.join(_param_to_quoted_query(k, v) for k, v in params.items()))


class AnonymousAuth(object):
    """用于匿名用户。

    .. note::
        匿名用户只能读取public-read的Bucket，或是读取、写入public-read-write的Bucket。
        不能进行Service、Bucket相关的操作，如列举Bucket等。
    """
    def _sign_request(self, req, bucket_name, key, signable_resource):
        pass

    def _sign_url(self, req, bucket_name, key, signable_resource, expiration_time):
        return req.url


def _append_query(url, query):
    if url.endswith('?'):
        return url + query
    elif '?' in url:
        return url + '&' + query
    else:
        return url + '?' + query


def _param_to_quoted_query(k, v):
    if v:
        return urlquote(k, '') + '=' + urlquote(v, '')
    else:
        return urlquote(k, '')
