# -*- coding: utf-8 -*-

"""
osslite.transfer
~~~~~~~~~~~~~~~~

该模块包含了上传本地文件的函数：小文件直接上传，大文件用分片上传。

不保存上传进度。分片上传失败时会取消本次分片上传，并抛出原来的异常；取消失败只记录日志。
"""

import logging
import os

from . import defaults
from . import exceptions
from . import utils

from .models import PartInfo

logger = logging.getLogger(__name__)


def upload_file(bucket, key, filename,
                headers=None,
                multipart_threshold=None,
                part_size=None):
    """上传本地文件。文件长度小于 `multipart_threshold` 时用 :func:`put_object <osslite.Bucket.put_object>` ，
    否则用分片上传。

    :param bucket: :class:`Bucket <osslite.Bucket>` 对象
    :param key: 上传到用户空间的文件名
    :param filename: 待上传本地文件名
    :param headers: 传给 `put_object` 或 `init_multipart_upload` 的HTTP头部
    :param multipart_threshold: 文件长度大于等于该值时，则用分片上传。缺省为 `defaults.multipart_threshold`
    :param part_size: 指定分片上传的每个分片的大小。缺省为 `defaults.part_size` ，分片数超过上限时会自动调大。

    :return: 直接上传时返回 :class:`PutObjectResult <osslite.models.PutObjectResult>` ；分片上传时返回
        :class:`CompleteMultipartUploadResult <osslite.models.CompleteMultipartUploadResult>`
    """
    size = os.path.getsize(filename)
    multipart_threshold = defaults.get(multipart_threshold, defaults.multipart_threshold)

    logger.debug("Start to upload file, bucket: {0}, key: {1}, filename: {2}, size: {3}".format(
        bucket.bucket_name, key, filename, size))

    if size >= multipart_threshold:
        uploader = MultipartUploader(bucket, key, filename, size,
                                     headers=headers,
                                     part_size=part_size)
        return uploader.upload()
    else:
        return bucket.put_object_from_file(key, filename, headers=headers)


def determine_part_size(total_size,
                        preferred_size=None):
    """确定分片大小，使得分片数不超过 `defaults.max_part_count` 。

    :param int total_size: 总共需要上传的长度
    :param int preferred_size: 用户期望的分片大小。缺省为 `defaults.part_size`

    :return: 分片大小
    """
    preferred_size = max(defaults.get(preferred_size, defaults.part_size), defaults.min_part_size)

    if total_size < preferred_size:
        return total_size

    if preferred_size * defaults.max_part_count < total_size:
        return total_size // defaults.max_part_count + 1
    else:
        return preferred_size


class MultipartUploader(object):
    """以分片上传的方式上传文件。

    :param bucket: :class:`Bucket <osslite.Bucket>` 对象
    :param key: 文件名
    :param filename: 待上传的文件名
    :param size: 文件总长度
    :param headers: 传给 `init_multipart_upload` 的HTTP头部
    :param part_size: 分片大小
    """
    def __init__(self, bucket, key, filename, size,
                 headers=None,
                 part_size=None):
        self.bucket = bucket
        self.key = key
        self.filename = filename
        self.size = size

        self.headers = utils.set_content_type(dict(headers or {}), filename)
        self.part_size = determine_part_size(size, part_size)

    def upload(self):
        upload_id = self.bucket.init_multipart_upload(self.key, headers=self.headers).upload_id
        logger.debug("Multipart upload initiated, key: {0}, upload_id: {1}, part_size: {2}".format(
            self.key, upload_id, self.part_size))

        try:
            parts = [self.__upload_part(upload_id, part_number, start, end)
                     for part_number, start, end in self.__split_parts()]
            return self.bucket.complete_multipart_upload(self.key, upload_id, parts)
        except Exception:
            logger.info("Multipart upload failed, abort upload_id: {0}".format(upload_id))
            self.__abort(upload_id)
            raise

    def __abort(self, upload_id):
        try:
            self.bucket.abort_multipart_upload(self.key, upload_id)
        except exceptions.OssError as e:
            logger.warning("Abort multipart upload failed, upload_id: {0}, exception: {1}".format(upload_id, e))

    def __split_parts(self):
        if self.size == 0:
            yield 1, 0, 0
            return

        for i in range(utils.how_many(self.size, self.part_size)):
            start = i * self.part_size
            end = min(start + self.part_size, self.size)
            yield i + 1, start, end

    def __upload_part(self, upload_id, part_number, start, end):
        with open(self.filename, 'rb') as f:
            f.seek(start, os.SEEK_SET)
            result = self.bucket.upload_part(self.key, upload_id, part_number,
                                             utils.SizedFileAdapter(f, end - start))

        logger.debug("Upload part done, key: {0}, part_number: {1}, etag: {2}".format(
            self.key, part_number, result.etag))
        return PartInfo(part_number, result.etag, size=end - start)
