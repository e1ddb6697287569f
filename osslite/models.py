# -*- coding: utf-8 -*-

"""
osslite.models
~~~~~~~~~~~~~~

该模块包含API接口所需要的输入参数以及返回值类型。
"""

from .exceptions import MissingHeader
from .headers import OSS_HASH_CRC64_ECMA, OSS_OBJECT_TYPE, LAST_MODIFIED, CONTENT_LENGTH, CONTENT_MD5, ETAG
from .utils import http_to_unixtime


def _hget(headers, key, converter=lambda x: x):
    if key in headers:
        return converter(headers[key])
    else:
        return None


def _hget_required(headers, key, converter=lambda x: x):
    if key not in headers:
        raise MissingHeader(key)
    return converter(headers[key])


def _get_etag(headers):
    return _hget(headers, 'etag', lambda x: x.strip('"'))


class PartInfo(object):
    """表示分片信息的类。

    :param int part_number: 分片号
    :param str etag: 分片的ETag
    :param int size: 分片的大小
    """
    def __init__(self, part_number, etag, size=None):
        self.part_number = part_number
        self.etag = etag
        self.size = size


class RequestResult(object):
    def __init__(self, resp):
        #: HTTP响应
        self.resp = resp

        #: HTTP状态码
        self.status = resp.status

        #: HTTP头
        self.headers = resp.headers

        #: 请求ID，用于跟踪一个OSS请求。提交工单时，最好能够提供请求ID
        self.request_id = resp.request_id


class HeadObjectResult(RequestResult):
    def __init__(self, resp):
        super(HeadObjectResult, self).__init__(resp)

        #: 文件类型，可以是'Normal'、'Multipart'、'Appendable'等
        self.object_type = _hget(self.headers, OSS_OBJECT_TYPE)

        #: 文件最后修改时间，类型为int
        self.last_modified = _hget(self.headers, 'last-modified', http_to_unixtime)

        #: 文件的MIME类型
        self.content_type = _hget(self.headers, 'content-type')

        #: Content-Length，可能是None。
        self.content_length = _hget(self.headers, 'content-length', int)

        #: HTTP ETag
        self.etag = _get_etag(self.headers)

        #: 文件 server_crc
        self.server_crc = _hget(self.headers, OSS_HASH_CRC64_ECMA, int)


class ObjectMeta(RequestResult):
    """HEAD请求返回的对象元信息。`Last-Modified` 、`Content-Length` 、`ETag` 缺失时抛出 :class:`MissingHeader <osslite.exceptions.MissingHeader>` 。"""
    def __init__(self, resp):
        super(ObjectMeta, self).__init__(resp)

        #: 文件最后修改时间，类型为int
        self.last_modified = _hget_required(self.headers, LAST_MODIFIED, http_to_unixtime)

        #: 文件大小，类型为int
        self.size = _hget_required(self.headers, CONTENT_LENGTH, int)

        #: HTTP ETag
        self.etag = _hget_required(self.headers, ETAG, lambda x: x.strip('"'))

        #: Content-MD5，可能是None
        self.md5 = _hget(self.headers, CONTENT_MD5)


class GetObjectResult(HeadObjectResult):
    def __init__(self, resp):
        super(GetObjectResult, self).__init__(resp)

    def read(self, amt=None):
        return self.resp.read(amt)

    def __iter__(self):
        return iter(self.resp)


class AsyncGetObjectResult(HeadObjectResult):
    def __init__(self, resp):
        super(AsyncGetObjectResult, self).__init__(resp)

    async def read(self, amt=None):
        return await self.resp.read(amt)


class PutObjectResult(RequestResult):
    def __init__(self, resp):
        super(PutObjectResult, self).__init__(resp)

        #: HTTP ETag
        self.etag = _get_etag(self.headers)

        #: 文件上传后，OSS上文件的CRC64值
        self.crc = _hget(resp.headers, OSS_HASH_CRC64_ECMA, int)


class InitMultipartUploadResult(RequestResult):
    def __init__(self, resp):
        super(InitMultipartUploadResult, self).__init__(resp)

        #: Bucket名
        self.bucket = ''

        #: 对象名
        self.key = ''

        #: 新生成的Upload ID
        self.upload_id = ''


class CompleteMultipartUploadResult(RequestResult):
    def __init__(self, resp):
        super(CompleteMultipartUploadResult, self).__init__(resp)
        self.location = ''
        self.bucket = ''
        self.key = ''
        self.etag = ''


class Owner(object):
    def __init__(self, display_name, owner_id):
        self.display_name = display_name
        self.id = owner_id


class SimplifiedObjectInfo(object):
    def __init__(self, key, last_modified, etag, type, size, storage_class, owner=None):
        #: 文件名，或公共前缀名。
        self.key = key

        #: 文件的最后修改时间，ISO8601格式的字符串
        self.last_modified = last_modified

        #: HTTP ETag
        self.etag = etag

        #: 文件类型
        self.type = type

        #: 文件大小
        self.size = size

        #: 文件的存储类别，是一个字符串。
        self.storage_class = storage_class

        #: owner信息, 类型为: class:`Owner <osslite.models.Owner>`
        self.owner = owner


class ListObjectsResult(RequestResult):
    def __init__(self, resp):
        super(ListObjectsResult, self).__init__(resp)

        #: Bucket名
        self.name = ''

        self.prefix = ''
        self.marker = ''
        self.max_keys = ''
        self.delimiter = ''

        #: True表示还有更多的文件可以罗列；False表示已经列举完毕。
        self.is_truncated = False

        #: 下一次罗列的分页标记符，即，可以作为 :func:`list_objects <osslite.Bucket.list_objects>` 的 `marker` 参数。
        self.next_marker = ''

        #: 本次罗列得到的文件列表。其中元素的类型为 :class:`SimplifiedObjectInfo` 。
        self.object_list = []

        #: 本次罗列得到的公共前缀列表，类型为str列表。
        self.prefix_list = []


class SimplifiedBucketInfo(object):
    """:func:`list_buckets <osslite.Service.list_buckets>` 结果中的单个元素类型。"""
    def __init__(self, name, creation_date, location, extranet_endpoint, intranet_endpoint, storage_class):
        #: Bucket名
        self.name = name

        #: Bucket的创建时间，ISO8601格式的字符串
        self.creation_date = creation_date

        #: Bucket所在的数据中心
        self.location = location

        #: Bucket外网访问域名
        self.extranet_endpoint = extranet_endpoint

        #: 同地域ECS访问Bucket的内网访问域名
        self.intranet_endpoint = intranet_endpoint

        #: Bucket存储类型，支持“Standard”、“IA”、“Archive”
        self.storage_class = storage_class


class ListBucketsResult(RequestResult):
    def __init__(self, resp):
        super(ListBucketsResult, self).__init__(resp)

        self.prefix = ''
        self.marker = ''
        self.max_keys = ''

        #: True表示还有更多的Bucket可以罗列；False表示已经列举完毕。
        self.is_truncated = False

        #: 下一次罗列的分页标记符，即，可以作为 :func:`list_buckets <osslite.Service.list_buckets>` 的 `marker` 参数。
        self.next_marker = ''

        #: Bucket的拥有者，类型为 :class:`Owner` 。
        self.owner = Owner('', '')

        #: 得到的Bucket列表，类型为 :class:`SimplifiedBucketInfo` 。
        self.buckets = []


class GetObjectAclResult(RequestResult):
    def __init__(self, resp):
        super(GetObjectAclResult, self).__init__(resp)
        self.acl = ''


OBJECT_ACL_DEFAULT = 'default'
OBJECT_ACL_PRIVATE = 'private'
OBJECT_ACL_PUBLIC_READ = 'public-read'
OBJECT_ACL_PUBLIC_READ_WRITE = 'public-read-write'
