# -*- coding: utf-8 -*-

"""
osslite.builder
~~~~~~~~~~~~~~~

构造带签名的请求：URL、Date头部、Authorization头部。所有的接口都通过 :class:`RequestBuilder` 发出请求。
"""

import logging
import time

from . import utils
from .compat import urlparse
from .headers import make_headers, check_header, DATE, OSS_COPY_OBJECT_SOURCE
from .resources import encode_resources

logger = logging.getLogger(__name__)

_ENDPOINT_TYPE_ALIYUN = 0
_ENDPOINT_TYPE_CNAME = 1
_ENDPOINT_TYPE_IP = 2


def _normalize_endpoint(endpoint):
    endpoint = endpoint.strip()

    if not endpoint.startswith('http://') and not endpoint.startswith('https://'):
        return 'http://' + endpoint
    else:
        return endpoint


def _determine_endpoint_type(netloc, is_cname):
    if utils.is_ip_or_localhost(netloc):
        return _ENDPOINT_TYPE_IP

    if is_cname:
        return _ENDPOINT_TYPE_CNAME
    else:
        return _ENDPOINT_TYPE_ALIYUN


class _UrlMaker(object):
    def __init__(self, endpoint, is_cname):
        p = urlparse(_normalize_endpoint(endpoint))

        self.scheme = p.scheme
        self.netloc = p.netloc
        self.type = _determine_endpoint_type(p.netloc, is_cname)

    def __call__(self, bucket_name, key, queryable_resource):
        if self.type == _ENDPOINT_TYPE_CNAME:
            return '{0}://{1}/{2}?{3}'.format(self.scheme, self.netloc, key, queryable_resource)

        if self.type == _ENDPOINT_TYPE_IP:
            if bucket_name:
                return '{0}://{1}/{2}/{3}?{4}'.format(self.scheme, self.netloc, bucket_name, key, queryable_resource)
            else:
                return '{0}://{1}/{2}?{3}'.format(self.scheme, self.netloc, key, queryable_resource)

        if not bucket_name:
            assert not key
            return '{0}://{1}/?{2}'.format(self.scheme, self.netloc, queryable_resource)

        return '{0}://{1}.{2}/{3}?{4}'.format(self.scheme, bucket_name, self.netloc, key, queryable_resource)


class RequestBuilder(object):
    """把HTTP方法、对象名、头部和参数组装成带签名的 `(url, headers)` 。

    :param auth: :class:`Auth <osslite.auth.Auth>` 或 :class:`AnonymousAuth <osslite.auth.AnonymousAuth>`
    :param endpoint: 访问域名，如 'oss-cn-hangzhou.aliyuncs.com' 或 'https://oss-cn-hangzhou.aliyuncs.com'
    :param bucket_name: 缺省的Bucket名，列举Bucket时为空串
    :param is_cname: `endpoint` 是否为CNAME
    :param clock: 返回UNIX时间的函数，缺省为 `time.time` ，每次构造请求时调用一次
    """
    def __init__(self, auth, endpoint, bucket_name='', is_cname=False, clock=None):
        self.auth = auth
        self.endpoint = _normalize_endpoint(endpoint)
        self.bucket_name = bucket_name
        self.is_cname = is_cname
        self.clock = clock or time.time

        self._make_url = _UrlMaker(self.endpoint, is_cname)

    def host(self, bucket_name, key, queryable_resource):
        return self._make_url(bucket_name, key, queryable_resource)

    def with_bucket(self, bucket_name):
        return RequestBuilder(self.auth, self.endpoint, bucket_name, self.is_cname, self.clock)

    def build_request(self, method, key, headers=None, resources=None, bucket_name=None):
        """返回 `(url, headers)` 。

        :param method: HTTP方法
        :param key: 对象名，Bucket级别的操作为空串
        :param headers: 用户指定的HTTP头部
        :param resources: 查询参数，参数名到参数值（或None）的映射
        :param bucket_name: 本次请求使用的Bucket名。为None则使用构造时的Bucket名。

        :raises: 如果头部不合法，则抛出 :class:`InvalidHeader <osslite.exceptions.InvalidHeader>`
        """
        headers = make_headers(headers)
        return self._build(method, key, headers, resources, bucket_name)

    def build_copy_request(self, method, source, key, headers=None, resources=None, bucket_name=None):
        """同 :func:`build_request` ，但在签名前加上 `x-oss-copy-source: source` 头部。"""
        headers = make_headers(headers)
        check_header(OSS_COPY_OBJECT_SOURCE, source)
        headers[OSS_COPY_OBJECT_SOURCE] = source
        return self._build(method, key, headers, resources, bucket_name)

    def _build(self, method, key, headers, resources, bucket_name):
        if bucket_name is None:
            bucket_name = self.bucket_name

        signable, queryable = encode_resources(resources)
        url = self.host(bucket_name, key, queryable)

        headers[DATE] = utils.http_date(self.clock())

        req = _SignableRequest(method, url, headers)
        self.auth._sign_request(req, bucket_name, key, signable)

        logger.debug("Build request: method: {0}, url: {1}".format(method, url))
        return url, req.headers

    def sign_url(self, method, key, expires, headers=None, resources=None, bucket_name=None):
        if bucket_name is None:
            bucket_name = self.bucket_name

        signable, queryable = encode_resources(resources)
        url = self.host(bucket_name, key, queryable)

        req = _SignableRequest(method, url, make_headers(headers))
        return self.auth._sign_url(req, bucket_name, key, signable, int(self.clock()) + expires)


class _SignableRequest(object):
    def __init__(self, method, url, headers):
        self.method = method
        self.url = url
        self.headers = headers
