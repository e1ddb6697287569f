# -*- coding: utf-8 -*-

import random
import string
import unittest
import tempfile
import os
import functools

import osslite

BUCKET_NAME = 'ming-oss-share'
ENDPOINT = 'http://oss-cn-hangzhou.aliyuncs.com'

ACCESS_KEY_ID = 'fake-access-key-id'
ACCESS_KEY_SECRET = 'fake-access-key-secret'

# Tue, 01 Jun 2021 12:00:00 GMT
FIXED_TIME = 1622548800
FIXED_DATE = 'Tue, 01 Jun 2021 12:00:00 GMT'

MTIME_STRING = 'Fri, 11 Dec 2015 13:01:41 GMT'
MTIME = 1449838901
REQUEST_ID = '566AB62EB06147681C283D73'
ETAG = '7AE1A589ED6B161CAD94ACDB98206DA6'

RAW_ETAG = '"' + ETAG + '"'


def fixed_clock():
    return FIXED_TIME


def random_string(n):
    return ''.join(random.choice(string.ascii_lowercase) for i in range(n))


def random_bytes(n):
    return osslite.to_bytes(random_string(n))


def bucket(**kwargs):
    return osslite.Bucket(osslite.Auth(ACCESS_KEY_ID, ACCESS_KEY_SECRET),
                          ENDPOINT, BUCKET_NAME, clock=fixed_clock, **kwargs)


def service():
    return osslite.Service(osslite.Auth(ACCESS_KEY_ID, ACCESS_KEY_SECRET),
                           ENDPOINT, clock=fixed_clock)


def calc_crc(data):
    crc = osslite.utils.Crc64()
    crc.update(data)
    return crc.crc


class RequestInfo(object):
    def __init__(self):
        self.reqs = []
        self.datas = []

    @property
    def req(self):
        return self.reqs[-1]

    @property
    def data(self):
        return self.datas[-1]


def merge_headers(dst, src):
    if not src:
        return

    for k, v in src.items():
        dst[k] = v


def make_headers(in_headers=None, **kwargs):
    headers = osslite.CaseInsensitiveDict({
        'Server': 'AliyunOSS',
        'Date': 'Fri, 11 Dec 2015 11:40:31 GMT',
        'Connection': 'keep-alive',
        'x-oss-request-id': REQUEST_ID
    })
    merge_headers(headers, kwargs)
    merge_headers(headers, in_headers)
    return headers


def r4head(length, in_status=200, in_headers=None):
    headers = make_headers(in_headers)
    merge_headers(headers, {
        'Content-Type': 'application/javascript',
        'Content-Length': str(length),
        'ETag': RAW_ETAG,
        'Last-Modified': MTIME_STRING,
        'x-oss-object-type': 'Normal'
    })
    merge_headers(headers, in_headers)

    return MockResponse(in_status, headers, b'')


def r4get(body, in_status=200, in_headers=None):
    resp = r4head(len(body), in_status=in_status, in_headers=in_headers)
    resp.body = osslite.to_bytes(body)

    return resp


def r4put(in_status=200, in_headers=None):
    headers = make_headers(in_headers)
    headers['Content-Length'] = '0'
    merge_headers(headers, in_headers)

    return MockResponse(in_status, headers, b'')


def r4delete(in_status=204, in_headers=None):
    return r4put(in_status, in_headers)


def r4xml(body, in_status=200, in_headers=None):
    body = osslite.to_bytes(body)
    headers = make_headers(in_headers)
    headers['Content-Type'] = 'application/xml'
    headers['Content-Length'] = str(len(body))
    merge_headers(headers, in_headers)

    return MockResponse(in_status, headers, body)


def r4error(status, code, message='', in_headers=None):
    body = '''<?xml version="1.0" encoding="UTF-8"?>
<Error>
  <Code>{0}</Code>
  <Message>{1}</Message>
  <RequestId>{2}</RequestId>
  <HostId>ming-oss-share.oss-cn-hangzhou.aliyuncs.com</HostId>
</Error>'''.format(code, message, REQUEST_ID)

    return r4xml(body, in_status=status, in_headers=in_headers)


def read_data(data):
    if data is None:
        return b''

    if isinstance(data, (str, bytes)):
        return osslite.to_bytes(data)

    result = b''
    while True:
        content = data.read(8192)
        if not content:
            return result
        result += content


def do4response(req, timeout, req_info=None, responses=None):
    if req_info is not None:
        req_info.reqs.append(req)
        req_info.datas.append(read_data(req.data))

    return responses.pop(0)


def mock_response(do_request, *responses):
    """让被patch的 `do_request` 依次返回 `responses` ，并记录收到的请求。"""
    req_info = RequestInfo()

    do_request.auto_spec = True
    do_request.side_effect = functools.partial(do4response, req_info=req_info, responses=list(responses))

    return req_info


class MockResponse(object):
    def __init__(self, status, headers, body):
        self.status = status
        self.headers = osslite.CaseInsensitiveDict(headers)
        self.body = osslite.to_bytes(body)
        self.request_id = self.headers.get('x-oss-request-id', '')

        self.offset = 0

    def read(self, amt=None):
        if self.offset >= len(self.body):
            return b''

        if amt is None:
            end = len(self.body)
        else:
            end = min(len(self.body), self.offset + amt)

        content = self.body[self.offset:end]
        self.offset = end
        return content

    def __iter__(self):
        return self

    def __next__(self):
        content = self.read(8192)
        if not content:
            raise StopIteration
        return content


class AsyncMockResponse(object):
    def __init__(self, response):
        self.response = response
        self.status = response.status
        self.headers = response.headers
        self.request_id = response.request_id
        self.released = False

    async def read(self, amt=None):
        return self.response.read(amt)

    def release(self):
        self.released = True


def async_response(response):
    return AsyncMockResponse(response)


class OssTestCase(unittest.TestCase):
    def __init__(self, *args, **kwargs):
        super(OssTestCase, self).__init__(*args, **kwargs)
        self.default_connect_timeout = osslite.defaults.connect_timeout
        self.default_multipart_threshold = osslite.defaults.multipart_threshold
        self.default_part_size = osslite.defaults.part_size
        self.default_min_part_size = osslite.defaults.min_part_size

    def setUp(self):
        osslite.defaults.connect_timeout = self.default_connect_timeout
        osslite.defaults.multipart_threshold = self.default_multipart_threshold
        osslite.defaults.part_size = self.default_part_size
        osslite.defaults.min_part_size = self.default_min_part_size

        self.temp_files = []

    def tearDown(self):
        osslite.defaults.min_part_size = self.default_min_part_size

        for temp_file in self.temp_files:
            if os.path.exists(temp_file):
                os.remove(temp_file)

    def tempname(self):
        fd, pathname = tempfile.mkstemp(suffix='test-download')
        os.close(fd)

        self.temp_files.append(pathname)
        return pathname

    def make_tempfile(self, content, suffix='test-upload'):
        fd, pathname = tempfile.mkstemp(suffix=suffix)

        os.write(fd, osslite.to_bytes(content))
        os.close(fd)

        self.temp_files.append(pathname)
        return pathname

    def assertUrlWithKey(self, url, key, query=''):
        self.assertEqual('http://ming-oss-share.oss-cn-hangzhou.aliyuncs.com/' + key + '?' + query, url)

    def assertSigned(self, req, bucket_name, key, signable=''):
        expected = osslite.auth.sign(req.method, ACCESS_KEY_ID, ACCESS_KEY_SECRET,
                                     bucket_name, key, signable, req.headers)
        self.assertEqual(req.headers['Authorization'], expected)
        self.assertEqual(req.headers['Date'], FIXED_DATE)
