# -*- coding: utf-8 -*-

import io
import os

import osslite
from osslite import exceptions

from mock import patch

from unittests.common import *


class TestObject(OssTestCase):
    @patch('osslite.Session.do_request')
    def test_head(self, do_request):
        req_info = mock_response(do_request, r4head(1024, in_headers={'x-oss-hash-crc64ecma': '12345'}))

        result = bucket().head_object('apbmntxqtvxjzini')

        self.assertEqual(req_info.req.method, 'HEAD')
        self.assertUrlWithKey(req_info.req.url, 'apbmntxqtvxjzini')
        self.assertSigned(req_info.req, BUCKET_NAME, 'apbmntxqtvxjzini')

        self.assertEqual(result.status, 200)
        self.assertEqual(result.request_id, REQUEST_ID)
        self.assertEqual(result.object_type, 'Normal')
        self.assertEqual(result.content_type, 'application/javascript')
        self.assertEqual(result.content_length, 1024)
        self.assertEqual(result.last_modified, MTIME)
        self.assertEqual(result.etag, ETAG)
        self.assertEqual(result.server_crc, 12345)

    @patch('osslite.Session.do_request')
    def test_head_not_found(self, do_request):
        mock_response(do_request, r4head(0, in_status=404))

        try:
            bucket().head_object('missing')
        except exceptions.NotFound as e:
            self.assertEqual(e.status, 404)
            self.assertEqual(e.operation, 'head')
        else:
            self.assertTrue(False)

    @patch('osslite.Session.do_request')
    def test_get_object_meta(self, do_request):
        mock_response(do_request, r4head(300))

        result = bucket().get_object_meta('meta.txt')

        self.assertEqual(result.last_modified, MTIME)
        self.assertEqual(result.size, 300)
        self.assertEqual(result.etag, ETAG)
        self.assertTrue(result.md5 is None)

    @patch('osslite.Session.do_request')
    def test_get_object_meta_missing_header(self, do_request):
        for header in ['Last-Modified', 'Content-Length', 'ETag']:
            resp = r4head(300)
            del resp.headers[header]
            mock_response(do_request, resp)

            try:
                bucket().get_object_meta('meta.txt')
            except exceptions.MissingHeader as e:
                self.assertEqual(e.header.lower(), header.lower())
            else:
                self.assertTrue(False)

    @patch('osslite.Session.do_request')
    def test_object_exists_true(self, do_request):
        req_info = mock_response(do_request, r4head(0, in_status=304))

        self.assertTrue(bucket().object_exists('sbowspxjhmccpmesjqcwagfw'))
        self.assertEqual(req_info.req.method, 'GET')
        self.assertEqual(req_info.req.headers['If-Modified-Since'], 'Tue, 01 Jun 2021 13:00:00 GMT')

    @patch('osslite.Session.do_request')
    def test_object_exists_false(self, do_request):
        mock_response(do_request, r4error(404, 'NoSuchKey'))

        self.assertFalse(bucket().object_exists('sbowspxjhmccpmesjqcwagfw'))

    @patch('osslite.Session.do_request')
    def test_object_exists_no_bucket(self, do_request):
        mock_response(do_request, r4error(404, 'NoSuchBucket'))

        self.assertRaises(exceptions.NoSuchBucket, bucket().object_exists, 'sbowspxjhmccpmesjqcwagfw')

    @patch('osslite.Session.do_request')
    def test_get(self, do_request):
        content = random_bytes(1023)
        req_info = mock_response(do_request, r4get(content))

        result = bucket().get_object('sjbhlsgsbecvlpbf')

        self.assertEqual(req_info.req.method, 'GET')
        self.assertUrlWithKey(req_info.req.url, 'sjbhlsgsbecvlpbf')
        self.assertSigned(req_info.req, BUCKET_NAME, 'sjbhlsgsbecvlpbf')
        self.assertTrue('Range' not in req_info.req.headers)

        self.assertEqual(result.read(), content)
        self.assertEqual(result.content_length, 1023)

    @patch('osslite.Session.do_request')
    def test_get_with_range_and_resources(self, do_request):
        content = random_bytes(100)
        req_info = mock_response(do_request, r4get(content, in_status=206))

        result = bucket().get_object('sjbhlsgsbecvlpbf', byte_range=(0, 99),
                                     resources={'response-content-type': 'text/plain'})

        self.assertEqual(req_info.req.headers['Range'], 'bytes=0-99')
        self.assertUrlWithKey(req_info.req.url, 'sjbhlsgsbecvlpbf', 'response-content-type=text/plain')
        self.assertSigned(req_info.req, BUCKET_NAME, 'sjbhlsgsbecvlpbf', 'response-content-type=text/plain')
        self.assertEqual(result.status, 206)
        self.assertEqual(result.read(), content)

    @patch('osslite.Session.do_request')
    def test_get_no_such_key(self, do_request):
        mock_response(do_request, r4error(404, 'NoSuchKey', 'The specified key does not exist.'))

        try:
            bucket().get_object('missing.txt')
        except exceptions.ServerError as e:
            self.assertTrue(isinstance(e, exceptions.NoSuchKey))
            self.assertEqual(e.operation, 'get')
            self.assertEqual(e.status, 404)
            self.assertEqual(e.code, 'NoSuchKey')
            self.assertEqual(e.request_id, REQUEST_ID)
        else:
            self.assertTrue(False)

    @patch('osslite.Session.do_request')
    def test_get_to_file(self, do_request):
        content = random_bytes(1023)
        mock_response(do_request, r4get(content, in_headers={'x-oss-hash-crc64ecma': str(calc_crc(content))}))

        filename = self.tempname()
        result = bucket().get_object_to_file('sjbhlsgsbecvlpbf', filename)

        self.assertEqual(result.request_id, REQUEST_ID)
        with open(filename, 'rb') as f:
            self.assertEqual(f.read(), content)

    @patch('osslite.Session.do_request')
    def test_get_to_file_crc_mismatch(self, do_request):
        content = random_bytes(1023)
        mock_response(do_request, r4get(content, in_headers={'x-oss-hash-crc64ecma': str(calc_crc(content) ^ 1)}))

        filename = self.tempname()
        self.assertRaises(exceptions.InconsistentError, bucket().get_object_to_file, 'sjbhlsgsbecvlpbf', filename)

    @patch('osslite.Session.do_request')
    def test_put_bytes(self, do_request):
        content = random_bytes(1024)
        req_info = mock_response(do_request, r4put(in_headers={'ETag': RAW_ETAG,
                                                               'x-oss-hash-crc64ecma': str(calc_crc(content))}))

        result = bucket().put_object('sjbhlsgsbecvlpbf.txt', content)

        self.assertEqual(req_info.req.method, 'PUT')
        self.assertUrlWithKey(req_info.req.url, 'sjbhlsgsbecvlpbf.txt')
        self.assertEqual(req_info.req.headers['Content-Type'], 'text/plain')
        self.assertSigned(req_info.req, BUCKET_NAME, 'sjbhlsgsbecvlpbf.txt')
        self.assertEqual(req_info.data, content)

        self.assertEqual(result.status, 200)
        self.assertEqual(result.etag, ETAG)
        self.assertEqual(result.crc, calc_crc(content))

    @patch('osslite.Session.do_request')
    def test_put_keeps_content_type(self, do_request):
        req_info = mock_response(do_request, r4put())

        bucket().put_object('a.txt', 'hello', headers={'content-type': 'application/octet-stream',
                                                       'x-oss-meta-author': 'ming'})

        self.assertEqual(req_info.req.headers['Content-Type'], 'application/octet-stream')
        self.assertEqual(req_info.req.headers['x-oss-meta-author'], 'ming')
        self.assertSigned(req_info.req, BUCKET_NAME, 'a.txt')

    @patch('osslite.Session.do_request')
    def test_put_crc_mismatch(self, do_request):
        content = random_bytes(1024)
        mock_response(do_request, r4put(in_headers={'x-oss-hash-crc64ecma': str(calc_crc(content) + 1)}))

        self.assertRaises(exceptions.InconsistentError, bucket().put_object, 'a.txt', content)

    @patch('osslite.Session.do_request')
    def test_put_crc_disabled(self, do_request):
        content = random_bytes(1024)
        mock_response(do_request, r4put(in_headers={'x-oss-hash-crc64ecma': str(calc_crc(content) + 1)}))

        result = bucket(enable_crc=False).put_object('a.txt', content)
        self.assertEqual(result.status, 200)

    @patch('osslite.Session.do_request')
    def test_put_file_object(self, do_request):
        content = random_bytes(1024)
        req_info = mock_response(do_request, r4put(in_headers={'x-oss-hash-crc64ecma': str(calc_crc(content[100:]))}))

        f = io.BytesIO(content)
        f.seek(100)

        bucket().put_object('a.bin', f)

        self.assertEqual(req_info.data, content[100:])

    @patch('osslite.Session.do_request')
    def test_put_from_file(self, do_request):
        content = random_bytes(1024)
        filename = self.make_tempfile(content, suffix='.html')
        req_info = mock_response(do_request, r4put(in_headers={'x-oss-hash-crc64ecma': str(calc_crc(content))}))

        bucket().put_object_from_file('sjbhlsgsbecvlpbf', filename)

        self.assertEqual(req_info.req.headers['Content-Type'], 'text/html')
        self.assertEqual(req_info.data, content)

    @patch('osslite.Session.do_request')
    def test_put_error(self, do_request):
        mock_response(do_request, r4error(403, 'AccessDenied'))

        try:
            bucket().put_object('a.txt', 'hello')
        except exceptions.AccessDenied as e:
            self.assertEqual(e.operation, 'put')
        else:
            self.assertTrue(False)

    @patch('osslite.Session.do_request')
    def test_copy_object(self, do_request):
        body = '''<?xml version="1.0" encoding="UTF-8"?>
<CopyObjectResult>
  <ETag>"{0}"</ETag>
  <LastModified>2015-12-12T00:36:29.000Z</LastModified>
</CopyObjectResult>'''.format(ETAG)
        req_info = mock_response(do_request, r4xml(body, in_headers={'ETag': RAW_ETAG}))

        result = bucket().copy_object('src-bucket', 'src.txt', 'dst.txt')

        req = req_info.req
        self.assertEqual(req.method, 'PUT')
        self.assertUrlWithKey(req.url, 'dst.txt')
        self.assertEqual(req.headers['x-oss-copy-source'], '/src-bucket/src.txt')
        self.assertSigned(req, BUCKET_NAME, 'dst.txt')
        self.assertTrue('x-oss-copy-source:/src-bucket/src.txt\n' in
                        osslite.auth.get_string_to_sign('PUT', BUCKET_NAME, 'dst.txt', '', req.headers))

        self.assertEqual(result.etag, ETAG)

    @patch('osslite.Session.do_request')
    def test_copy_error_operation(self, do_request):
        mock_response(do_request, r4error(404, 'NoSuchKey'))

        try:
            bucket().copy_object('src-bucket', 'src.txt', 'dst.txt')
        except exceptions.NoSuchKey as e:
            self.assertEqual(e.operation, 'copy')
        else:
            self.assertTrue(False)

    @patch('osslite.Session.do_request')
    def test_delete(self, do_request):
        req_info = mock_response(do_request, r4delete())

        result = bucket().delete_object('sjbhlsgsbecvlpbf')

        self.assertEqual(req_info.req.method, 'DELETE')
        self.assertUrlWithKey(req_info.req.url, 'sjbhlsgsbecvlpbf')
        self.assertSigned(req_info.req, BUCKET_NAME, 'sjbhlsgsbecvlpbf')
        self.assertEqual(result.status, 204)
        self.assertEqual(result.request_id, REQUEST_ID)

    @patch('osslite.Session.do_request')
    def test_put_acl(self, do_request):
        req_info = mock_response(do_request, r4put())

        bucket().put_object_acl('acl.txt', osslite.OBJECT_ACL_PRIVATE)

        req = req_info.req
        self.assertEqual(req.method, 'PUT')
        self.assertUrlWithKey(req.url, 'acl.txt', 'acl')
        self.assertEqual(req.headers['x-oss-object-acl'], 'private')
        self.assertSigned(req, BUCKET_NAME, 'acl.txt', 'acl')

    @patch('osslite.Session.do_request')
    def test_get_acl(self, do_request):
        body = '''<?xml version="1.0" encoding="UTF-8"?>
<AccessControlPolicy>
  <Owner>
    <ID>1047205513514293</ID>
    <DisplayName>1047205513514293</DisplayName>
  </Owner>
  <AccessControlList>
    <Grant>default</Grant>
  </AccessControlList>
</AccessControlPolicy>'''
        req_info = mock_response(do_request, r4xml(body))

        result = bucket().get_object_acl('acl.txt')

        self.assertUrlWithKey(req_info.req.url, 'acl.txt', 'acl')
        self.assertSigned(req_info.req, BUCKET_NAME, 'acl.txt', 'acl')
        self.assertEqual(result.acl, osslite.OBJECT_ACL_DEFAULT)

    @patch('osslite.Session.do_request')
    def test_list_objects(self, do_request):
        body = '''<?xml version="1.0" encoding="UTF-8"?>
<ListBucketResult>
  <Name>ming-oss-share</Name>
  <Prefix>fun</Prefix>
  <Marker></Marker>
  <MaxKeys>10</MaxKeys>
  <Delimiter>/</Delimiter>
  <IsTruncated>true</IsTruncated>
  <NextMarker>fun/b.txt</NextMarker>
  <Contents>
    <Key>fun/a.txt</Key>
    <LastModified>2015-12-12T00:36:29.000Z</LastModified>
    <ETag>"{0}"</ETag>
    <Type>Normal</Type>
    <Size>10</Size>
    <StorageClass>Standard</StorageClass>
  </Contents>
  <CommonPrefixes>
    <Prefix>fun/dir/</Prefix>
  </CommonPrefixes>
</ListBucketResult>'''.format(ETAG)
        req_info = mock_response(do_request, r4xml(body))

        result = bucket().list_objects(prefix='fun', delimiter='/', max_keys=10)

        self.assertEqual(req_info.req.method, 'GET')
        self.assertEqual(req_info.req.url,
                         'http://ming-oss-share.oss-cn-hangzhou.aliyuncs.com/?delimiter=/&max-keys=10&prefix=fun')
        self.assertSigned(req_info.req, BUCKET_NAME, '')

        self.assertTrue(result.is_truncated)
        self.assertEqual(result.next_marker, 'fun/b.txt')
        self.assertEqual([o.key for o in result.object_list], ['fun/a.txt'])
        self.assertEqual(result.object_list[0].etag, ETAG)
        self.assertEqual(result.prefix_list, ['fun/dir/'])

    @patch('osslite.Session.do_request')
    def test_request_error(self, do_request):
        import requests

        def raise_error(req, timeout):
            try:
                raise requests.ConnectionError('refused')
            except requests.RequestException as e:
                raise exceptions.RequestError(e) from e

        do_request.side_effect = raise_error

        self.assertRaises(exceptions.RequestError, bucket().get_object, 'a.txt')

    def test_invalid_header_raised_before_sending(self):
        with patch('osslite.Session.do_request') as do_request:
            self.assertRaises(exceptions.InvalidHeader, bucket().put_object, 'a.txt', 'data',
                              headers={'x-oss-meta-a': 'line1\r\nline2'})
            self.assertFalse(do_request.called)

    def test_sign_url(self):
        url = bucket().sign_url('GET', 'logo.jpg', 300)

        expires = FIXED_TIME + 300
        signature = osslite.auth.make_signature(ACCESS_KEY_SECRET,
                                                'GET\n\n\n{0}\n/{1}/logo.jpg'.format(expires, BUCKET_NAME))

        self.assertEqual(url, 'http://ming-oss-share.oss-cn-hangzhou.aliyuncs.com/logo.jpg?'
                              'OSSAccessKeyId={0}&Expires={1}&Signature={2}'.format(
                                  ACCESS_KEY_ID, expires, osslite.urlquote(signature, '')))

    def test_invalid_bucket_name(self):
        self.assertRaises(exceptions.ClientError, osslite.Bucket, osslite.Auth('ak', 'sk'), ENDPOINT, 'Bad_Bucket')

    @patch('osslite.Session.do_request')
    def test_with_bucket(self, do_request):
        req_info = mock_response(do_request, r4delete(), r4delete())

        b = bucket()
        other = b.with_bucket('other-bucket')

        other.delete_object('a.txt')
        b.delete_object('a.txt')

        self.assertEqual(req_info.reqs[0].url, 'http://other-bucket.oss-cn-hangzhou.aliyuncs.com/a.txt?')
        self.assertSigned(req_info.reqs[0], 'other-bucket', 'a.txt')
        self.assertEqual(req_info.reqs[1].url, 'http://ming-oss-share.oss-cn-hangzhou.aliyuncs.com/a.txt?')
        self.assertTrue(other.session is b.session)
        self.assertEqual(b.bucket_name, BUCKET_NAME)

    @patch('osslite.Session.do_request')
    def test_user_agent(self, do_request):
        req_info = mock_response(do_request, r4delete())

        bucket(app_name='my-app').delete_object('a.txt')

        self.assertTrue(req_info.req.headers['User-Agent'].startswith('osslite-python/' + osslite.__version__))
        self.assertTrue(req_info.req.headers['User-Agent'].endswith('/my-app'))

    @patch('osslite.Session.do_request')
    def test_default_user_agent(self, do_request):
        req_info = mock_response(do_request, r4delete())

        bucket().delete_object('a.txt')

        self.assertEqual(req_info.req.headers['User-Agent'], osslite.http.USER_AGENT)
        self.assertTrue(req_info.req.headers['Accept-Encoding'] is None)

    @patch('osslite.Session.do_request')
    def test_connect_timeout(self, do_request):
        mock_response(do_request, r4delete())

        bucket(connect_timeout=5).delete_object('a.txt')

        self.assertEqual(do_request.call_args[1]['timeout'], 5)


if __name__ == '__main__':
    unittest.main()
