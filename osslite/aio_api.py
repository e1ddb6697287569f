# -*- coding: utf-8 -*-

"""
osslite.aio_api
~~~~~~~~~~~~~~~

这个模块包含了用于访问OSS的异步接口，基于asyncio和aiohttp。

:class:`AsyncService` 、 :class:`AsyncBucket` 和 :mod:`osslite.api` 中的同步接口共用同一个
:class:`RequestBuilder <osslite.builder.RequestBuilder>` 以及XML解析函数，只是HTTP请求通过
:class:`AsyncSession <osslite.aio_http.AsyncSession>` 发送。

用法::

    >>> async with osslite.AsyncBucket(auth, 'oss-cn-hangzhou.aliyuncs.com', 'your-bucket') as bucket:
    ...     await bucket.put_object('readme.txt', 'content of the object')
    ...     result = await bucket.get_object('readme.txt')
    ...     content = await result.read()
"""

import logging

from . import xml_utils
from . import aio_http
from . import http
from . import utils
from . import exceptions
from . import defaults

from .api import _list_resources, _calc_data_crc
from .builder import RequestBuilder
from .headers import make_headers, OSS_OBJECT_ACL, RANGE
from .models import *

logger = logging.getLogger(__name__)


class _AsyncBase(object):
    def __init__(self, auth, endpoint, bucket_name, is_cname, session, connect_timeout,
                 app_name='', clock=None):
        self.auth = auth
        self.session = session or aio_http.AsyncSession()
        self.timeout = defaults.get(connect_timeout, defaults.connect_timeout)
        self.app_name = app_name

        self.builder = RequestBuilder(auth, endpoint, bucket_name, is_cname, clock)

    @property
    def endpoint(self):
        return self.builder.endpoint

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def close(self):
        await self.session.close()

    async def _do(self, method, key, data=None, headers=None, resources=None, operation=None, copy_source=None):
        operation = operation or method.lower()

        if copy_source is None:
            url, headers = self.builder.build_request(method, key, headers=headers, resources=resources)
        else:
            url, headers = self.builder.build_copy_request(method, copy_source, key,
                                                           headers=headers, resources=resources)

        req = http.Request(method, url, data=data, headers=headers, app_name=self.app_name)
        resp = await self.session.do_request(req, timeout=self.timeout)
        if resp.status // 100 != 2:
            body = await resp.read()
            e = exceptions.make_exception(resp, operation, body)
            logger.info("Exception: {0}".format(e))
            raise e

        return resp

    async def _parse_result(self, resp, parse_func, klass):
        result = klass(resp)
        parse_func(result, await resp.read())
        return result


class AsyncService(_AsyncBase):
    """:class:`Service <osslite.Service>` 的异步版本。

    :param auth: 包含了用户认证信息的Auth对象
    :param str endpoint: 访问域名

    :param session: 会话。如果是None表示新建会话，非None则复用传入的会话
    :type session: osslite.aio_http.AsyncSession

    :param float connect_timeout: 连接超时时间，以秒为单位。
    :param str app_name: 应用名。该参数不为空，则在User Agent中加入其值。
    :param clock: 返回UNIX时间的函数，缺省为 `time.time`
    """
    def __init__(self, auth, endpoint,
                 session=None,
                 connect_timeout=None,
                 app_name='',
                 clock=None):
        super(AsyncService, self).__init__(auth, endpoint, '', False, session, connect_timeout,
                                           app_name=app_name, clock=clock)

    async def list_buckets(self, prefix='', marker='', max_keys=100, resources=None):
        """根据前缀罗列用户的Bucket。参数和返回值同 :func:`Service.list_buckets <osslite.Service.list_buckets>` 。"""
        resp = await self._do('GET', '', resources=_list_resources(resources,
                                                                   prefix=prefix,
                                                                   marker=marker,
                                                                   max_keys=max_keys))
        logger.debug("List buckets done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return await self._parse_result(resp, xml_utils.parse_list_buckets, ListBucketsResult)


class AsyncBucket(_AsyncBase):
    """:class:`Bucket <osslite.Bucket>` 的异步版本。不包括本地文件相关的接口以及 `object_exists` 。

    :param auth: 包含了用户认证信息的Auth对象
    :param str endpoint: 访问域名或者CNAME
    :param str bucket_name: Bucket名
    :param bool is_cname: 如果endpoint是CNAME则设为True；反之，则为False。

    :param session: 会话。如果是None表示新建会话，非None则复用传入的会话
    :type session: osslite.aio_http.AsyncSession

    :param float connect_timeout: 连接超时时间，以秒为单位。
    :param str app_name: 应用名。该参数不为空，则在User Agent中加入其值。
    :param bool enable_crc: 上传时是否校验CRC64
    :param clock: 返回UNIX时间的函数，缺省为 `time.time`
    """
    def __init__(self, auth, endpoint, bucket_name,
                 is_cname=False,
                 session=None,
                 connect_timeout=None,
                 app_name='',
                 enable_crc=True,
                 clock=None):
        bucket_name = bucket_name.strip()
        utils.check_bucket_name(bucket_name)

        super(AsyncBucket, self).__init__(auth, endpoint, bucket_name, is_cname, session, connect_timeout,
                                          app_name=app_name, clock=clock)
        self.bucket_name = bucket_name
        self.is_cname = is_cname
        self.enable_crc = enable_crc

    def with_bucket(self, bucket_name):
        """返回访问另一个Bucket的 :class:`AsyncBucket` 对象，会话是共享的。"""
        return AsyncBucket(self.auth, self.endpoint, bucket_name,
                           is_cname=self.is_cname,
                           session=self.session,
                           connect_timeout=self.timeout,
                           app_name=self.app_name,
                           enable_crc=self.enable_crc,
                           clock=self.builder.clock)

    def sign_url(self, method, key, expires, headers=None, params=None):
        """生成签名URL。不发送请求，因此不是协程。"""
        return self.builder.sign_url(method, key, expires, headers=headers, resources=params)

    async def list_objects(self, prefix='', delimiter='', marker='', max_keys=100, headers=None):
        resp = await self._do('GET', '',
                              headers=headers,
                              resources=_list_resources(None,
                                                        prefix=prefix,
                                                        delimiter=delimiter,
                                                        marker=marker,
                                                        max_keys=max_keys))
        logger.debug("List objects done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return await self._parse_result(resp, xml_utils.parse_list_objects, ListObjectsResult)

    async def put_object(self, key, data, headers=None, resources=None):
        headers = utils.set_content_type(make_headers(headers), key)

        client_crc = None
        if self.enable_crc:
            client_crc = _calc_data_crc(data)

        resp = await self._do('PUT', key, data=data, headers=headers, resources=resources)
        logger.debug("Put object done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        resp.release()
        result = PutObjectResult(resp)

        if self.enable_crc and result.crc is not None:
            utils.check_crc('put object', client_crc, result.crc, result.request_id)

        return result

    async def get_object(self, key, byte_range=None, headers=None, resources=None):
        """下载一个文件。返回值的 `read()` 是协程::

            >>> result = await bucket.get_object('readme.txt')
            >>> content = await result.read()
        """
        headers = make_headers(headers)

        range_string = utils.make_range_string(byte_range)
        if range_string:
            headers[RANGE] = range_string

        resp = await self._do('GET', key, headers=headers, resources=resources)
        logger.debug("Get object done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))

        return AsyncGetObjectResult(resp)

    async def head_object(self, key, headers=None):
        resp = await self._do('HEAD', key, headers=headers)
        resp.release()
        return HeadObjectResult(resp)

    async def get_object_meta(self, key):
        resp = await self._do('HEAD', key)
        resp.release()
        return ObjectMeta(resp)

    async def copy_object(self, source_bucket_name, source_key, target_key, headers=None):
        resp = await self._do('PUT', target_key,
                              headers=headers,
                              operation=exceptions.OPERATION_COPY,
                              copy_source='/' + source_bucket_name + '/' + source_key)
        resp.release()
        return PutObjectResult(resp)

    async def delete_object(self, key):
        resp = await self._do('DELETE', key)
        resp.release()
        return RequestResult(resp)

    async def put_object_acl(self, key, permission):
        resp = await self._do('PUT', key, resources={'acl': None}, headers={OSS_OBJECT_ACL: permission})
        resp.release()
        return RequestResult(resp)

    async def get_object_acl(self, key):
        resp = await self._do('GET', key, resources={'acl': None})
        return await self._parse_result(resp, xml_utils.parse_get_object_acl, GetObjectAclResult)

    async def init_multipart_upload(self, key, headers=None):
        headers = utils.set_content_type(make_headers(headers), key)

        resp = await self._do('POST', key, resources={'uploads': None}, headers=headers)
        return await self._parse_result(resp, xml_utils.parse_init_multipart_upload, InitMultipartUploadResult)

    async def upload_part(self, key, upload_id, part_number, data):
        client_crc = None
        if self.enable_crc:
            client_crc = _calc_data_crc(data)

        resp = await self._do('PUT', key,
                              resources={'uploadId': upload_id, 'partNumber': str(part_number)},
                              data=data)
        resp.release()
        result = PutObjectResult(resp)

        if self.enable_crc and result.crc is not None:
            utils.check_crc('upload part', client_crc, result.crc, result.request_id)

        return result

    async def complete_multipart_upload(self, key, upload_id, parts, headers=None):
        parts = sorted(parts, key=lambda p: p.part_number)
        data = xml_utils.to_complete_upload_request(parts)

        resp = await self._do('POST', key,
                              resources={'uploadId': upload_id},
                              data=data,
                              headers=headers)
        return await self._parse_result(resp, xml_utils.parse_complete_multipart_upload,
                                        CompleteMultipartUploadResult)

    async def abort_multipart_upload(self, key, upload_id):
        resp = await self._do('DELETE', key, resources={'uploadId': upload_id})
        resp.release()
        return RequestResult(resp)
