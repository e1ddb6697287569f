# -*- coding: utf-8 -*-

"""
osslite.resources
~~~~~~~~~~~~~~~~~

子资源及查询参数的规范化编码。

签名和请求URL中的查询参数都按参数名排序。只有 :data:`SUBRESOURCE_KEYS` 中的参数参与签名，所有参数都会出现在URL里。
参数名和参数值都不做URL转义：如果值中含有 ``&`` 、 ``=`` 、 ``?`` 或空格，需要调用者事先编码。
"""

SUBRESOURCE_KEYS = frozenset(
    ['acl', 'uploads', 'location', 'cors', 'logging', 'website', 'referer', 'lifecycle',
     'delete', 'append', 'tagging', 'objectMeta', 'uploadId', 'partNumber', 'security-token',
     'position', 'img', 'style', 'styleName', 'replication', 'replicationProgress',
     'replicationLocation', 'cname', 'bucketInfo', 'comp', 'qos', 'live', 'status', 'vod',
     'startTime', 'endTime', 'symlink', 'x-oss-process',
     'response-content-type', 'response-content-language', 'response-expires',
     'response-cache-control', 'response-content-disposition', 'response-content-encoding',
     'udf', 'udfName', 'udfImage', 'udfId', 'udfImageDesc', 'udfApplication',
     'udfApplicationLog', 'restore', 'callback', 'callback-var']
)


def is_subresource(key):
    return key in SUBRESOURCE_KEYS


def encode_resources(params):
    """把参数集合编码为 `(signable, queryable)` 二元组。

    :param params: 参数名到参数值的映射。值为None表示只有参数名，如 `acl` ；空串则编码为 `key=` 。
    :type params: dict或None

    :return: `signable` 只包含 :data:`SUBRESOURCE_KEYS` 中的参数，用于签名；`queryable` 包含全部参数，用于URL。
        两者均按参数名排序，以 `&` 连接，不带前导的 `?` 。
    """
    if not params:
        return '', ''

    items = sorted(params.items(), key=lambda e: e[0])

    signable = '&'.join(_param_to_query(k, v) for k, v in items if is_subresource(k))
    queryable = '&'.join(_param_to_query(k, v) for k, v in items)

    return signable, queryable


def _param_to_query(k, v):
    if v is None:
        return k
    else:
        return k + '=' + str(v)
