# -*- coding: utf-8 -*-

import unittest

import osslite
from osslite.headers import make_headers, check_header
from osslite.exceptions import InvalidHeader, ClientError


class TestHeaders(unittest.TestCase):
    def test_make_headers(self):
        headers = make_headers({'Content-Type': 'text/plain', 'x-oss-meta-size': 100, 'x-oss-meta-none': None})

        self.assertTrue(isinstance(headers, osslite.CaseInsensitiveDict))
        self.assertEqual(headers['content-type'], 'text/plain')
        self.assertEqual(headers['X-Oss-Meta-Size'], '100')
        self.assertTrue(headers['x-oss-meta-none'] is None)

    def test_make_headers_empty(self):
        self.assertEqual(len(make_headers()), 0)
        self.assertEqual(len(make_headers({})), 0)

    def test_invalid_name(self):
        for name in ['', 'with space', 'colon:', 'new\nline', u'中文']:
            self.assertRaises(InvalidHeader, make_headers, {name: 'v'})

    def test_invalid_value(self):
        try:
            make_headers({'x-oss-meta-a': 'a\r\nx-oss-meta-b: b'})
        except InvalidHeader as e:
            self.assertEqual(e.name, 'x-oss-meta-a')
            self.assertEqual(e.status, osslite.exceptions.OSS_CLIENT_ERROR_STATUS)
            self.assertTrue(isinstance(e, ClientError))
        else:
            self.assertTrue(False)

    def test_non_latin1_value(self):
        self.assertRaises(InvalidHeader, check_header, 'x-oss-meta-name', u'名字')

    def test_non_utf8_bytes_value(self):
        try:
            make_headers({'x-oss-meta-a': b'caf\xe9'})
        except InvalidHeader as e:
            self.assertEqual(e.name, 'x-oss-meta-a')
        else:
            self.assertTrue(False)

    def test_non_utf8_bytes_value_rejected_before_signing(self):
        builder = osslite.RequestBuilder(osslite.Auth('ak', 'sk'), 'oss.example.com', 'mybucket',
                                         clock=lambda: 1622548800)

        self.assertRaises(InvalidHeader, builder.build_request, 'PUT', 'k', headers={'x-oss-meta-a': b'caf\xe9'})

    def test_valid_values(self):
        check_header('x-oss-meta-name', 'abc def')
        check_header('Content-MD5', 'ODBGOERFMDMzQTczRUY3NUE3NzA5QzdFNUYzMDQxNEM=')
        check_header('x-oss-meta-bytes', b'raw')
        check_header('x-oss-meta-none', None)


if __name__ == '__main__':
    unittest.main()
