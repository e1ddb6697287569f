# -*- coding: utf-8 -*-

import xml.etree.ElementTree as ElementTree

import osslite
from osslite import exceptions
from osslite.transfer import determine_part_size

from mock import patch

from unittests.common import *
from unittests.test_multipart import r4init, r4complete, UPLOAD_ID


class TestDeterminePartSize(OssTestCase):
    def test_small_file(self):
        self.assertEqual(determine_part_size(1024, 10 * 1024 * 1024), 1024)

    def test_preferred_size(self):
        self.assertEqual(determine_part_size(100 * 1024 * 1024, 10 * 1024 * 1024), 10 * 1024 * 1024)
        self.assertEqual(determine_part_size(100 * 1024 * 1024), osslite.defaults.part_size)

    def test_too_many_parts(self):
        total = 200 * 1024 * 10000
        size = determine_part_size(total, 100 * 1024)

        self.assertTrue(size * osslite.defaults.max_part_count >= total)
        self.assertEqual(size, total // 10000 + 1)

    def test_min_part_size(self):
        self.assertEqual(determine_part_size(1024 * 1024, 1), osslite.defaults.min_part_size)


class TestUploadFile(OssTestCase):
    @patch('osslite.Session.do_request')
    def test_small_file_uses_put(self, do_request):
        content = random_bytes(1024)
        filename = self.make_tempfile(content, suffix='.txt')
        req_info = mock_response(do_request, r4put(in_headers={'ETag': RAW_ETAG,
                                                               'x-oss-hash-crc64ecma': str(calc_crc(content))}))

        result = osslite.upload_file(bucket(), 'small.txt', filename)

        self.assertEqual(len(req_info.reqs), 1)
        self.assertEqual(req_info.req.method, 'PUT')
        self.assertUrlWithKey(req_info.req.url, 'small.txt')
        self.assertEqual(req_info.data, content)
        self.assertEqual(result.etag, ETAG)

    @patch('osslite.Session.do_request')
    def test_multipart(self, do_request):
        osslite.defaults.min_part_size = 100

        content = random_bytes(250)
        filename = self.make_tempfile(content)
        req_info = mock_response(do_request,
                                 r4init('big.bin'),
                                 r4put(in_headers={'ETag': '"P1"', 'x-oss-hash-crc64ecma': str(calc_crc(content[:100]))}),
                                 r4put(in_headers={'ETag': '"P2"', 'x-oss-hash-crc64ecma': str(calc_crc(content[100:200]))}),
                                 r4put(in_headers={'ETag': '"P3"', 'x-oss-hash-crc64ecma': str(calc_crc(content[200:]))}),
                                 r4complete('big.bin'))

        result = osslite.upload_file(bucket(), 'big.bin', filename, multipart_threshold=200, part_size=100)

        self.assertEqual([r.method for r in req_info.reqs], ['POST', 'PUT', 'PUT', 'PUT', 'POST'])
        self.assertEqual(req_info.datas[1], content[:100])
        self.assertEqual(req_info.datas[2], content[100:200])
        self.assertEqual(req_info.datas[3], content[200:])
        self.assertUrlWithKey(req_info.reqs[3].url, 'big.bin', 'partNumber=3&uploadId=' + UPLOAD_ID)

        root = ElementTree.fromstring(req_info.datas[4])
        self.assertEqual([p.find('ETag').text for p in root.findall('Part')], ['"P1"', '"P2"', '"P3"'])

        self.assertEqual(result.key, 'big.bin')

    @patch('osslite.Session.do_request')
    def test_multipart_failure_aborts(self, do_request):
        osslite.defaults.min_part_size = 100

        content = random_bytes(250)
        filename = self.make_tempfile(content)
        req_info = mock_response(do_request,
                                 r4init('big.bin'),
                                 r4put(in_headers={'ETag': '"P1"'}),
                                 r4error(403, 'AccessDenied'),
                                 r4delete())

        self.assertRaises(exceptions.AccessDenied, osslite.upload_file, bucket(), 'big.bin', filename,
                          multipart_threshold=200, part_size=100)

        self.assertEqual([r.method for r in req_info.reqs], ['POST', 'PUT', 'PUT', 'DELETE'])
        self.assertUrlWithKey(req_info.reqs[3].url, 'big.bin', 'uploadId=' + UPLOAD_ID)

    @patch('osslite.Session.do_request')
    def test_multipart_io_error_aborts(self, do_request):
        osslite.defaults.min_part_size = 100

        filename = self.make_tempfile(random_bytes(250))
        responses = [r4init('big.bin'), r4delete()]
        methods = []

        def do4io_error(req, timeout):
            methods.append(req.method)
            if req.method == 'PUT':
                raise IOError('disk error')
            return responses.pop(0)

        do_request.side_effect = do4io_error

        self.assertRaises(IOError, osslite.upload_file, bucket(), 'big.bin', filename,
                          multipart_threshold=200, part_size=100)

        self.assertEqual(methods, ['POST', 'PUT', 'DELETE'])

    @patch('osslite.Session.do_request')
    def test_abort_error_keeps_original_exception(self, do_request):
        osslite.defaults.min_part_size = 100

        filename = self.make_tempfile(random_bytes(250))
        req_info = mock_response(do_request,
                                 r4init('big.bin'),
                                 r4error(403, 'AccessDenied'),
                                 r4error(404, 'NoSuchUpload'))

        self.assertRaises(exceptions.AccessDenied, osslite.upload_file, bucket(), 'big.bin', filename,
                          multipart_threshold=200, part_size=100)

        self.assertEqual([r.method for r in req_info.reqs], ['POST', 'PUT', 'DELETE'])


if __name__ == '__main__':
    unittest.main()
