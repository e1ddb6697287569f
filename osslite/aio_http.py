# -*- coding: utf-8 -*-

"""
osslite.aio_http
~~~~~~~~~~~~~~~~

异步的HTTP Adapters，基于aiohttp。和 :mod:`osslite.http` 一样，`AsyncSession` 只负责发送已经签好名的请求。
"""

import asyncio
import logging

import aiohttp

from .compat import to_bytes
from .exceptions import RequestError

logger = logging.getLogger(__name__)


class AsyncSession(object):
    """对 `aiohttp.ClientSession` 的封装。`ClientSession` 在第一次发送请求时创建，需要调用 :func:`close` 关闭。

    :param session: 用户提供的 `aiohttp.ClientSession` 。为None则自行创建。
    """
    def __init__(self, session=None):
        self.session = session

    def _ensure_session(self):
        if self.session is None:
            # tell aiohttp not to add 'Accept-Encoding: gzip, deflate' by default
            self.session = aiohttp.ClientSession(skip_auto_headers=('Accept-Encoding',))
        return self.session

    async def do_request(self, req, timeout):
        logger.debug("Send async request: method: {0}, url: {1}".format(req.method, req.url))

        session = self._ensure_session()
        try:
            response = await session.request(req.method, req.url,
                                             data=_read_body(req.data),
                                             headers=_drop_empty(req.headers),
                                             timeout=aiohttp.ClientTimeout(connect=timeout, sock_read=timeout))
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise RequestError(e) from e

        return AsyncResponse(response)

    async def close(self):
        if self.session is not None:
            await self.session.close()
            self.session = None


class AsyncResponse(object):
    def __init__(self, response):
        self.response = response
        self.status = response.status
        self.headers = response.headers
        self.request_id = response.headers.get('x-oss-request-id', '')

        logger.debug("Get async response: status: {0}, request id: {1}".format(self.status, self.request_id))

    async def read(self, amt=None):
        try:
            if amt is None:
                return await self.response.read()
            else:
                return await self.response.content.read(amt)
        except aiohttp.ClientError as e:
            raise RequestError(e) from e

    def release(self):
        self.response.release()


def _drop_empty(headers):
    return dict((k, v) for k, v in headers.items() if v is not None)


def _read_body(data):
    if data is None or isinstance(data, bytes):
        return data

    if hasattr(data, 'read'):
        return to_bytes(data.read())

    return to_bytes(data)
