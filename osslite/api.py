# -*- coding: utf-8 -*-

"""
osslite.api
~~~~~~~~~~~

这个模块包含了用于访问OSS的同步接口。

对象上传方法中的data参数
----------------------
诸如 :func:`put_object <Bucket.put_object>` 这样的上传接口都会有 `data` 参数用于接收用户数据。`data` 可以是下述类型
    - str类型
    - bytes类型
    - file-like object


返回值
------
:class:`Service` 和 :class:`Bucket` 类的方法都是返回 :class:`RequestResult <osslite.models.RequestResult>`
及其子类。`RequestResult` 包含了HTTP响应的状态码、头部以及OSS Request ID，而它的子类则包含用户真正想要的结果。例如，
`ListBucketsResult.buckets` 就是返回的Bucket信息列表；`GetObjectResult` 则是一个file-like object，可以调用 `read()` 来获取响应的
HTTP包体。


异常
----
当HTTP请求失败时，即响应状态码不是2XX时，抛出 :class:`ServerError <osslite.exceptions.ServerError>` 或是其子类，
其 `operation` 成员表明出错的操作类型。网络错误抛出 :class:`RequestError <osslite.exceptions.RequestError>` 。
不做重试。


.. _byte_range:

指定下载范围
-----------
:func:`get_object <Bucket.get_object>` 可以接受 `byte_range` 参数，表明读取数据的范围。该参数是一个二元tuple：(start, last)。
参见 :func:`make_range_string <osslite.utils.make_range_string>` 。


分页罗列
-------
:func:`list_buckets <Service.list_buckets>` 、 :func:`list_objects <Bucket.list_objects>` 都支持分页查询。
首次调用将 `marker` 设为空串，后续的调用使用返回值中的 `next_marker` 。 `is_truncated` 为 `False` 说明已经到了最后一页。
"""

import logging

from . import xml_utils
from . import http
from . import utils
from . import exceptions
from . import defaults
from . import models

from .builder import RequestBuilder
from .headers import make_headers, OSS_OBJECT_ACL, RANGE, IF_MODIFIED_SINCE
from .models import *

logger = logging.getLogger(__name__)


class _Base(object):
    def __init__(self, auth, endpoint, bucket_name, is_cname, session, connect_timeout,
                 app_name='', clock=None):
        self.auth = auth
        self.session = session or http.Session()
        self.timeout = defaults.get(connect_timeout, defaults.connect_timeout)
        self.app_name = app_name

        self.builder = RequestBuilder(auth, endpoint, bucket_name, is_cname, clock)

    @property
    def endpoint(self):
        return self.builder.endpoint

    def _do(self, method, key, data=None, headers=None, resources=None, operation=None, copy_source=None):
        operation = operation or method.lower()

        if copy_source is None:
            url, headers = self.builder.build_request(method, key, headers=headers, resources=resources)
        else:
            url, headers = self.builder.build_copy_request(method, copy_source, key,
                                                           headers=headers, resources=resources)

        req = http.Request(method, url, data=data, headers=headers, app_name=self.app_name)
        resp = self.session.do_request(req, timeout=self.timeout)
        if resp.status // 100 != 2:
            e = exceptions.make_exception(resp, operation)
            logger.info("Exception: {0}".format(e))
            raise e

        # connections are only released back to the pool once the body has been read
        content_length = models._hget(resp.headers, 'content-length', int)
        if content_length is not None and content_length == 0:
            resp.read()

        return resp

    def _parse_result(self, resp, parse_func, klass):
        result = klass(resp)
        parse_func(result, resp.read())
        return result


class Service(_Base):
    """用于Service操作的类，如罗列用户所有的Bucket。

    用法::

        >>> import osslite
        >>> auth = osslite.Auth('your-access-key-id', 'your-access-key-secret')
        >>> service = osslite.Service(auth, 'oss-cn-hangzhou.aliyuncs.com')
        >>> service.list_buckets()
        <osslite.models.ListBucketsResult object at 0x0299FAB0>

    :param auth: 包含了用户认证信息的Auth对象
    :param str endpoint: 访问域名，如杭州区域的域名为oss-cn-hangzhou.aliyuncs.com

    :param session: 会话。如果是None表示新开会话，非None则复用传入的会话
    :type session: osslite.http.Session

    :param float connect_timeout: 连接超时时间，以秒为单位。
    :param str app_name: 应用名。该参数不为空，则在User Agent中加入其值。
    :param clock: 返回UNIX时间的函数，缺省为 `time.time`
    """
    def __init__(self, auth, endpoint,
                 session=None,
                 connect_timeout=None,
                 app_name='',
                 clock=None):
        logger.debug("Init oss service, endpoint: {0}, connect_timeout: {1}, app_name: {2}".format(
            endpoint, connect_timeout, app_name))
        super(Service, self).__init__(auth, endpoint, '', False, session, connect_timeout,
                                      app_name=app_name, clock=clock)

    def list_buckets(self, prefix='', marker='', max_keys=100, resources=None):
        """根据前缀罗列用户的Bucket。

        :param str prefix: 只罗列Bucket名为该前缀的Bucket，空串表示罗列所有的Bucket
        :param str marker: 分页标志。首次调用传空串，后续使用返回值中的next_marker
        :param int max_keys: 每次调用最多返回的Bucket数目
        :param dict resources: 额外的查询参数

        :return: 罗列的结果
        :rtype: :class:`ListBucketsResult <osslite.models.ListBucketsResult>`
        """
        logger.debug("Start to list buckets, prefix: {0}, marker: {1}, max-keys: {2}".format(prefix, marker, max_keys))

        resp = self._do('GET', '', resources=_list_resources(resources,
                                                             prefix=prefix,
                                                             marker=marker,
                                                             max_keys=max_keys))
        logger.debug("List buckets done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return self._parse_result(resp, xml_utils.parse_list_buckets, ListBucketsResult)


class Bucket(_Base):
    """用于Object操作的类，诸如上传、下载、拷贝、删除文件，以及分片上传等。

    用法::

        >>> import osslite
        >>> auth = osslite.Auth('your-access-key-id', 'your-access-key-secret')
        >>> bucket = osslite.Bucket(auth, 'http://oss-cn-hangzhou.aliyuncs.com', 'your-bucket')
        >>> bucket.put_object('readme.txt', 'content of the object')
        <osslite.models.PutObjectResult object at 0x029B9930>

    Bucket名在构造之后不可修改，需要访问其他Bucket时用 :func:`with_bucket` 得到一个新的对象。

    :param auth: 包含了用户认证信息的Auth对象
    :type auth: osslite.Auth

    :param str endpoint: 访问域名或者CNAME
    :param str bucket_name: Bucket名
    :param bool is_cname: 如果endpoint是CNAME则设为True；反之，则为False。

    :param session: 会话。如果是None表示新开会话，非None则复用传入的会话
    :type session: osslite.http.Session

    :param float connect_timeout: 连接超时时间，以秒为单位。
    :param str app_name: 应用名。该参数不为空，则在User Agent中加入其值。
    :param bool enable_crc: 上传、下载时是否校验CRC64
    :param clock: 返回UNIX时间的函数，缺省为 `time.time`
    """

    ACL = 'acl'
    UPLOADS = 'uploads'

    def __init__(self, auth, endpoint, bucket_name,
                 is_cname=False,
                 session=None,
                 connect_timeout=None,
                 app_name='',
                 enable_crc=True,
                 clock=None):
        logger.debug("Init Bucket: {0}, endpoint: {1}, is_cname: {2}, connect_timeout: {3}, app_name: {4}, "
                     "enabled_crc: {5}".format(bucket_name, endpoint, is_cname, connect_timeout, app_name, enable_crc))

        bucket_name = bucket_name.strip()
        utils.check_bucket_name(bucket_name)

        super(Bucket, self).__init__(auth, endpoint, bucket_name, is_cname, session, connect_timeout,
                                     app_name=app_name, clock=clock)
        self.bucket_name = bucket_name
        self.is_cname = is_cname
        self.enable_crc = enable_crc

    def with_bucket(self, bucket_name):
        """返回访问另一个Bucket的 :class:`Bucket` 对象，认证信息、访问域名、会话以及其他设置保持不变。"""
        return Bucket(self.auth, self.endpoint, bucket_name,
                      is_cname=self.is_cname,
                      session=self.session,
                      connect_timeout=self.timeout,
                      app_name=self.app_name,
                      enable_crc=self.enable_crc,
                      clock=self.builder.clock)

    def sign_url(self, method, key, expires, headers=None, params=None):
        """生成签名URL。

        常见的用法是生成加签的URL以供授信用户下载，如为log.jpg生成一个5分钟后过期的下载链接::

            >>> bucket.sign_url('GET', 'log.jpg', 5 * 60)
            r'http://your-bucket.oss-cn-hangzhou.aliyuncs.com/log.jpg?OSSAccessKeyId=YourAccessKeyId&Expires=1447178011&Signature=UJfeJgvcypWq6Q%2Bm3IJcSHbvSak%3D'

        :param method: HTTP方法，如'GET'、'PUT'、'DELETE'等
        :type method: str
        :param key: 文件名
        :param expires: 过期时间（单位：秒），链接在当前时间再过expires秒后过期

        :param headers: 需要签名的HTTP头部，如名称以x-oss-meta-开头的头部（作为用户自定义元数据）、
            Content-Type头部等。对于下载，不需要填。
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :param params: 需要签名的HTTP查询参数

        :return: 签名URL。
        """
        logger.debug("Start to sign_url, method: {0}, bucket: {1}, key: {2}, expires: {3}, headers: {4}, "
                     "params: {5}".format(method, self.bucket_name, key, expires, headers, params))
        return self.builder.sign_url(method, key, expires, headers=headers, resources=params)

    def list_objects(self, prefix='', delimiter='', marker='', max_keys=100, headers=None):
        """根据前缀罗列Bucket里的文件。

        :param str prefix: 只罗列文件名为该前缀的文件
        :param str delimiter: 分隔符。可以用来模拟目录
        :param str marker: 分页标志。首次调用传空串，后续使用返回值的next_marker
        :param int max_keys: 最多返回文件的个数，文件和目录的和不能超过该值

        :param headers: HTTP头部
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :return: :class:`ListObjectsResult <osslite.models.ListObjectsResult>`
        """
        logger.debug("Start to List objects, bucket: {0}, prefix: {1}, delimiter: {2}, marker: {3}, "
                     "max-keys: {4}".format(self.bucket_name, prefix, delimiter, marker, max_keys))
        resp = self.__do_object('GET', '',
                                headers=headers,
                                resources=_list_resources(None,
                                                          prefix=prefix,
                                                          delimiter=delimiter,
                                                          marker=marker,
                                                          max_keys=max_keys))
        logger.debug("List objects done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return self._parse_result(resp, xml_utils.parse_list_objects, ListObjectsResult)

    def put_object(self, key, data, headers=None, resources=None):
        """上传一个普通文件。

        用法 ::
            >>> bucket.put_object('readme.txt', 'content of readme.txt')
            >>> with open(u'local_file.txt', 'rb') as f:
            >>>     bucket.put_object('remote_file.txt', f)

        :param key: 上传到OSS的文件名

        :param data: 待上传的内容。
        :type data: bytes，str或file-like object

        :param headers: 用户指定的HTTP头部。可以指定Content-Type、x-oss-meta-开头的头部等
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :param dict resources: 额外的查询参数

        :return: :class:`PutObjectResult <osslite.models.PutObjectResult>`

        :raises: 开启CRC校验且本地计算的CRC64和服务器返回的不一致时，抛出
            :class:`InconsistentError <osslite.exceptions.InconsistentError>`
        """
        headers = utils.set_content_type(make_headers(headers), key)

        client_crc = None
        if self.enable_crc:
            client_crc = _calc_data_crc(data)

        logger.debug("Start to put object, bucket: {0}, key: {1}, headers: {2}".format(self.bucket_name, key, headers))
        resp = self.__do_object('PUT', key, data=data, headers=headers, resources=resources)
        logger.debug("Put object done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        result = PutObjectResult(resp)

        if self.enable_crc and result.crc is not None:
            utils.check_crc('put object', client_crc, result.crc, result.request_id)

        return result

    def put_object_from_file(self, key, filename, headers=None):
        """上传一个本地文件到OSS的普通文件。

        :param str key: 上传到OSS的文件名
        :param str filename: 本地文件名，需要有可读权限

        :param headers: 用户指定的HTTP头部。可以指定Content-Type、x-oss-meta-开头的头部等
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :return: :class:`PutObjectResult <osslite.models.PutObjectResult>`
        """
        headers = utils.set_content_type(make_headers(headers), filename)
        logger.debug("Put object from file, bucket: {0}, key: {1}, file path: {2}".format(
            self.bucket_name, key, filename))
        with open(filename, 'rb') as f:
            return self.put_object(key, f, headers=headers)

    def get_object(self, key, byte_range=None, headers=None, resources=None):
        """下载一个文件。

        用法 ::

            >>> result = bucket.get_object('readme.txt')
            >>> print(result.read())
            'hello world'

        :param key: 文件名
        :param byte_range: 指定下载范围。参见 :ref:`byte_range`

        :param headers: HTTP头部
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :param dict resources: 额外的查询参数

        :return: file-like object

        :raises: 如果文件不存在，则抛出 :class:`NoSuchKey <osslite.exceptions.NoSuchKey>` ；还可能抛出其他异常
        """
        headers = make_headers(headers)

        range_string = utils.make_range_string(byte_range)
        if range_string:
            headers[RANGE] = range_string

        logger.debug("Start to get object, bucket: {0}, key: {1}, range: {2}, headers: {3}".format(
            self.bucket_name, key, range_string, headers))
        resp = self.__do_object('GET', key, headers=headers, resources=resources)
        logger.debug("Get object done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))

        return GetObjectResult(resp)

    def get_object_to_file(self, key, filename, byte_range=None, headers=None):
        """下载一个文件到本地文件。

        :param key: 文件名
        :param filename: 本地文件名。要求父目录已经存在，且有写权限。
        :param byte_range: 指定下载范围。参见 :ref:`byte_range`

        :param headers: HTTP头部
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :return: 如果文件不存在，则抛出 :class:`NoSuchKey <osslite.exceptions.NoSuchKey>` ；还可能抛出其他异常
        """
        logger.debug("Start to get object to file, bucket: {0}, key: {1}, file path: {2}".format(
            self.bucket_name, key, filename))
        with open(filename, 'wb') as f:
            result = self.get_object(key, byte_range=byte_range, headers=headers)

            crc = utils.Crc64()
            for chunk in result:
                f.write(chunk)
                crc.update(chunk)

            if self.enable_crc and byte_range is None:
                utils.check_crc('get', crc.crc, result.server_crc, result.request_id)

            return result

    def head_object(self, key, headers=None):
        """获取文件元信息。

        HTTP响应的头部包含了文件元信息，可以通过 `RequestResult` 的 `headers` 成员获得。
        用法 ::

            >>> result = bucket.head_object('readme.txt')
            >>> print(result.content_type)
            text/plain

        :param key: 文件名

        :param headers: HTTP头部
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :return: :class:`HeadObjectResult <osslite.models.HeadObjectResult>`

        :raises: 如果Bucket不存在或者Object不存在，则抛出 :class:`NotFound <osslite.exceptions.NotFound>`
        """
        logger.debug("Start to head object, bucket: {0}, key: {1}, headers: {2}".format(
            self.bucket_name, key, headers))

        resp = self.__do_object('HEAD', key, headers=headers)

        logger.debug("Head object done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return HeadObjectResult(resp)

    def get_object_meta(self, key):
        """获取文件基本元信息，包括该Object的ETag、Size（文件大小）、LastModified。

        :param key: 文件名

        :return: :class:`ObjectMeta <osslite.models.ObjectMeta>`

        :raises: 如果文件不存在，则抛出 :class:`NotFound <osslite.exceptions.NotFound>` ；
            响应中缺少必需的头部，则抛出 :class:`MissingHeader <osslite.exceptions.MissingHeader>`
        """
        logger.debug("Start to get object metadata, bucket: {0}, key: {1}".format(self.bucket_name, key))

        resp = self.__do_object('HEAD', key)

        logger.debug("Get object metadata done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return ObjectMeta(resp)

    def object_exists(self, key):
        """如果文件存在就返回True，否则返回False。如果Bucket不存在，或是发生其他错误，则抛出异常。"""

        # 如果我们用head_object来实现的话，由于HTTP HEAD请求没有响应体，只有响应头部，这样当发生404时，
        # 我们无法区分是NoSuchBucket还是NoSuchKey错误。
        #
        # 下面的实现是通过if-modified-since头部，把date设为当前时间1小时后，这样如果文件存在，则会返回
        # 304 (NotModified)；不存在，则会返回NoSuchKey。
        date = utils.http_date(self.builder.clock() + 60 * 60)

        logger.debug("Start to check if object exists, bucket: {0}, key: {1}".format(self.bucket_name, key))
        try:
            self.get_object(key, headers={IF_MODIFIED_SINCE: date})
        except exceptions.NotModified:
            return True
        except exceptions.NoSuchKey:
            return False
        else:
            raise RuntimeError('This is impossible')

    def copy_object(self, source_bucket_name, source_key, target_key, headers=None):
        """拷贝一个文件到当前Bucket。

        :param str source_bucket_name: 源Bucket名
        :param str source_key: 源文件名
        :param str target_key: 目标文件名

        :param headers: HTTP头部
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :return: :class:`PutObjectResult <osslite.models.PutObjectResult>`
        """
        logger.debug("Start to copy object, source bucket: {0}, source key: {1}, bucket: {2}, key: {3}, "
                     "headers: {4}".format(source_bucket_name, source_key, self.bucket_name, target_key, headers))
        resp = self.__do_object('PUT', target_key,
                                headers=headers,
                                operation=exceptions.OPERATION_COPY,
                                copy_source='/' + source_bucket_name + '/' + source_key)
        logger.debug("Copy object done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))

        return PutObjectResult(resp)

    def delete_object(self, key):
        """删除一个文件。

        :param str key: 文件名

        :return: :class:`RequestResult <osslite.models.RequestResult>`
        """
        logger.info("Start to delete object, bucket: {0}, key: {1}".format(self.bucket_name, key))
        resp = self.__do_object('DELETE', key)
        logger.debug("Delete object done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return RequestResult(resp)

    def put_object_acl(self, key, permission):
        """设置文件的ACL。

        :param str key: 文件名
        :param str permission: 可以是osslite.OBJECT_ACL_DEFAULT、osslite.OBJECT_ACL_PRIVATE、osslite.OBJECT_ACL_PUBLIC_READ或
            osslite.OBJECT_ACL_PUBLIC_READ_WRITE。

        :return: :class:`RequestResult <osslite.models.RequestResult>`
        """
        logger.debug("Start to put object acl, bucket: {0}, key: {1}, acl: {2}".format(
            self.bucket_name, key, permission))

        resp = self.__do_object('PUT', key, resources={Bucket.ACL: None}, headers={OSS_OBJECT_ACL: permission})
        logger.debug("Put object acl done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return RequestResult(resp)

    def get_object_acl(self, key):
        """获取文件的ACL。

        :return: :class:`GetObjectAclResult <osslite.models.GetObjectAclResult>`
        """
        logger.debug("Start to get object acl, bucket: {0}, key: {1}".format(self.bucket_name, key))
        resp = self.__do_object('GET', key, resources={Bucket.ACL: None})
        logger.debug("Get object acl done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return self._parse_result(resp, xml_utils.parse_get_object_acl, GetObjectAclResult)

    def init_multipart_upload(self, key, headers=None):
        """初始化分片上传。

        返回值中的 `upload_id` 以及Bucket名和Object名三元组唯一对应了此次分片上传事件。

        :param str key: 待上传的文件名

        :param headers: HTTP头部
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :return: :class:`InitMultipartUploadResult <osslite.models.InitMultipartUploadResult>`
        """
        headers = utils.set_content_type(make_headers(headers), key)

        logger.debug("Start to init multipart upload, bucket: {0}, keys: {1}, headers: {2}".format(
            self.bucket_name, key, headers))
        resp = self.__do_object('POST', key, resources={Bucket.UPLOADS: None}, headers=headers)
        logger.debug("Init multipart upload done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return self._parse_result(resp, xml_utils.parse_init_multipart_upload, InitMultipartUploadResult)

    def upload_part(self, key, upload_id, part_number, data):
        """上传一个分片。

        :param str key: 待上传文件名，这个文件名要和 :func:`init_multipart_upload` 的文件名一致。
        :param str upload_id: 分片上传ID
        :param int part_number: 分片号，最小值是1.
        :param data: 待上传数据。

        :return: :class:`PutObjectResult <osslite.models.PutObjectResult>`
        """
        client_crc = None
        if self.enable_crc:
            client_crc = _calc_data_crc(data)

        logger.debug(
            "Start to upload multipart, bucket: {0}, key: {1}, upload_id: {2}, part_number: {3}".format(
                self.bucket_name, key, upload_id, part_number))
        resp = self.__do_object('PUT', key,
                                resources={'uploadId': upload_id, 'partNumber': str(part_number)},
                                data=data)
        logger.debug("Upload multipart done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        result = PutObjectResult(resp)

        if self.enable_crc and result.crc is not None:
            utils.check_crc('upload part', client_crc, result.crc, result.request_id)

        return result

    def complete_multipart_upload(self, key, upload_id, parts, headers=None):
        """完成分片上传，创建文件。

        :param str key: 待上传的文件名，这个文件名要和 :func:`init_multipart_upload` 的文件名一致。
        :param str upload_id: 分片上传ID

        :param parts: PartInfo列表。PartInfo中的part_number和etag是必填项。其中的etag可以从 :func:`upload_part` 的返回值中得到。
        :type parts: list of `PartInfo <osslite.models.PartInfo>`

        :param headers: HTTP头部
        :type headers: 可以是dict，建议是osslite.CaseInsensitiveDict

        :return: :class:`CompleteMultipartUploadResult <osslite.models.CompleteMultipartUploadResult>`
        """
        parts = sorted(parts, key=lambda p: p.part_number)
        data = xml_utils.to_complete_upload_request(parts)

        logger.debug("Start to complete multipart upload, bucket: {0}, key: {1}, upload_id: {2}, parts: {3}".format(
            self.bucket_name, key, upload_id, data))

        resp = self.__do_object('POST', key,
                                resources={'uploadId': upload_id},
                                data=data,
                                headers=headers)
        logger.debug("Complete multipart upload done, req_id: {0}, status_code: {1}".format(
            resp.request_id, resp.status))

        return self._parse_result(resp, xml_utils.parse_complete_multipart_upload, CompleteMultipartUploadResult)

    def abort_multipart_upload(self, key, upload_id):
        """取消分片上传。

        :param str key: 待上传的文件名，这个文件名要和 :func:`init_multipart_upload` 的文件名一致。
        :param str upload_id: 分片上传ID

        :return: :class:`RequestResult <osslite.models.RequestResult>`
        """
        logger.debug("Start to abort multipart upload, bucket: {0}, key: {1}, upload_id: {2}".format(
            self.bucket_name, key, upload_id))

        resp = self.__do_object('DELETE', key,
                                resources={'uploadId': upload_id})
        logger.debug("Abort multipart done, req_id: {0}, status_code: {1}".format(resp.request_id, resp.status))
        return RequestResult(resp)

    def __do_object(self, method, key, **kwargs):
        return self._do(method, key, **kwargs)


def _list_resources(resources, prefix='', delimiter='', marker='', max_keys=100):
    """罗列接口的查询参数。值为空串的 `prefix` 、 `delimiter` 、 `marker` 不发送。"""
    result = dict(resources or {})

    for name, value in (('prefix', prefix), ('delimiter', delimiter), ('marker', marker)):
        if value:
            result[name] = value

    result['max-keys'] = str(max_keys)
    return result


def _calc_data_crc(data):
    """计算待上传数据的CRC64。对于file-like object，计算之后恢复读取位置；无法预先计算的数据返回None。"""
    if isinstance(data, (bytes, str)):
        return utils.calc_crc64(data)

    if hasattr(data, 'read') and hasattr(data, 'seek') and hasattr(data, 'tell'):
        position = data.tell()
        crc = utils.calc_crc64(data)
        data.seek(position)
        return crc

    return None
