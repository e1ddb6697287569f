# -*- coding: utf-8 -*-

"""
osslite.xml_utils
~~~~~~~~~~~~~~~~~

XML处理相关。

主要包括两类接口：
    - parse_开头的函数：用来解析服务器端返回的XML
    - to_开头的函数：用来生成发往服务器端的XML

XML的元素名是字段名的PascalCase形式，如 `MaxKeys` 、 `IsTruncated` 、 `StorageClass` 。
可选的元素缺失时取缺省值（空串、False、0、空列表）；XML无法解析或根元素不符合预期时抛出
:class:`XmlDecodeError <osslite.exceptions.XmlDecodeError>` 。
"""

import io
import logging
import xml.etree.ElementTree as ElementTree

from .models import (SimplifiedObjectInfo,
                     SimplifiedBucketInfo,
                     Owner)

from .compat import to_string, urlunquote
from .exceptions import XmlDecodeError, ElementTreeParseError

logger = logging.getLogger(__name__)


def _parse_root(body, tag):
    try:
        root = ElementTree.fromstring(body)
    except ElementTreeParseError as e:
        raise XmlDecodeError('parse xml: {0}'.format(e))

    if root.tag != tag:
        raise XmlDecodeError('parse xml: root element is {0}, expected {1}'.format(root.tag, tag))

    return root


def _find_tag_with_default(parent, path, default_value=''):
    child = parent.find(path)
    if child is None:
        return default_value

    if child.text is None:
        return ''

    return to_string(child.text)


def _find_bool(parent, path):
    text = _find_tag_with_default(parent, path)
    if text in ('', 'false'):
        return False
    elif text == 'true':
        return True
    else:
        raise XmlDecodeError("parse xml: value of " + path + " is not a boolean under " + parent.tag)


def _find_int(parent, path):
    text = _find_tag_with_default(parent, path)
    if not text:
        return 0

    try:
        return int(text)
    except ValueError:
        raise XmlDecodeError("parse xml: value of " + path + " is not an integer under " + parent.tag)


def _find_object(parent, path, url_encoded):
    name = _find_tag_with_default(parent, path)
    if url_encoded:
        return urlunquote(name)
    else:
        return name


def _is_url_encoding(root):
    node = root.find('EncodingType')
    if node is not None and to_string(node.text) == 'url':
        return True
    else:
        return False


def _find_owner(parent, path):
    owner_node = parent.find(path)
    if owner_node is None:
        return None

    return Owner(_find_tag_with_default(owner_node, 'DisplayName'), _find_tag_with_default(owner_node, 'ID'))


def _node_to_string(root):
    tree = ElementTree.ElementTree(root)

    with io.BytesIO() as f:
        tree.write(f, encoding='utf-8')
        return f.getvalue()


def parse_list_objects(result, body):
    root = _parse_root(body, 'ListBucketResult')
    url_encoded = _is_url_encoding(root)

    result.name = _find_tag_with_default(root, 'Name')
    result.prefix = _find_object(root, 'Prefix', url_encoded)
    result.marker = _find_object(root, 'Marker', url_encoded)
    result.max_keys = _find_tag_with_default(root, 'MaxKeys')
    result.delimiter = _find_object(root, 'Delimiter', url_encoded)
    result.is_truncated = _find_bool(root, 'IsTruncated')
    result.next_marker = _find_object(root, 'NextMarker', url_encoded)

    for contents_node in root.findall('Contents'):
        result.object_list.append(SimplifiedObjectInfo(
            _find_object(contents_node, 'Key', url_encoded),
            _find_tag_with_default(contents_node, 'LastModified'),
            _find_tag_with_default(contents_node, 'ETag').strip('"'),
            _find_tag_with_default(contents_node, 'Type'),
            _find_int(contents_node, 'Size'),
            _find_tag_with_default(contents_node, 'StorageClass'),
            _find_owner(contents_node, 'Owner')
        ))

    for prefix_node in root.findall('CommonPrefixes'):
        result.prefix_list.append(_find_object(prefix_node, 'Prefix', url_encoded))

    return result


def parse_list_buckets(result, body):
    root = _parse_root(body, 'ListAllMyBucketsResult')

    result.prefix = _find_tag_with_default(root, 'Prefix')
    result.marker = _find_tag_with_default(root, 'Marker')
    result.max_keys = _find_tag_with_default(root, 'MaxKeys')
    result.is_truncated = _find_bool(root, 'IsTruncated')
    result.next_marker = _find_tag_with_default(root, 'NextMarker')

    owner = _find_owner(root, 'Owner')
    if owner is not None:
        result.owner = owner

    for bucket_node in root.findall('Buckets/Bucket'):
        result.buckets.append(SimplifiedBucketInfo(
            _find_tag_with_default(bucket_node, 'Name'),
            _find_tag_with_default(bucket_node, 'CreationDate'),
            _find_tag_with_default(bucket_node, 'Location'),
            _find_tag_with_default(bucket_node, 'ExtranetEndpoint'),
            _find_tag_with_default(bucket_node, 'IntranetEndpoint'),
            _find_tag_with_default(bucket_node, 'StorageClass')
        ))

    return result


def parse_init_multipart_upload(result, body):
    root = _parse_root(body, 'InitiateMultipartUploadResult')

    result.bucket = _find_tag_with_default(root, 'Bucket')
    result.key = _find_tag_with_default(root, 'Key')
    result.upload_id = _find_tag_with_default(root, 'UploadId')

    return result


def parse_complete_multipart_upload(result, body):
    root = _parse_root(body, 'CompleteMultipartUploadResult')

    result.location = _find_tag_with_default(root, 'Location')
    result.bucket = _find_tag_with_default(root, 'Bucket')
    result.key = _find_tag_with_default(root, 'Key')
    result.etag = _find_tag_with_default(root, 'ETag').strip('"')

    return result


def parse_get_object_acl(result, body):
    root = _parse_root(body, 'AccessControlPolicy')
    result.acl = _find_tag_with_default(root, 'AccessControlList/Grant')

    return result


def to_complete_upload_request(parts):
    root = ElementTree.Element('CompleteMultipartUpload')
    for p in parts:
        part_node = ElementTree.SubElement(root, "Part")
        ElementTree.SubElement(part_node, 'PartNumber').text = str(p.part_number)
        ElementTree.SubElement(part_node, 'ETag').text = '"{0}"'.format(p.etag)

    return _node_to_string(root)
