import asyncio
import unittest
from unittest.mock import AsyncMock, MagicMock, patch

import aiohttp

from svgterminal import config, http


def mock_session(status=200, json=None, text=None, get_error=None):
    """Return a mock of aiohttp.ClientSession answering every request with a
    single response"""
    response = MagicMock()
    response.status = status
    response.json = AsyncMock(return_value=json)
    response.text = AsyncMock(return_value=text)

    session = MagicMock()
    if get_error is not None:
        session.get.side_effect = get_error
    else:
        session.get.return_value.__aenter__.return_value = response

    client_session = MagicMock()
    client_session.return_value.__aenter__.return_value = session
    return client_session, session, response


class TestFetch(unittest.IsolatedAsyncioTestCase):
    async def test_fetch_json(self):
        client_session, session, _ = mock_session(json={'a': 1})
        with patch('aiohttp.ClientSession', client_session):
            data = await http.fetch_json('https://example.com/a.json', timeout=2500)
        self.assertEqual(data, {'a': 1})
        session.get.assert_called_once_with('https://example.com/a.json')
        _, kwargs = client_session.call_args
        self.assertEqual(kwargs['timeout'].total, 2.5)
        self.assertEqual(kwargs['headers'], {'User-Agent': http.USER_AGENT})

    async def test_default_timeout(self):
        client_session, _, _ = mock_session(json={})
        with patch('aiohttp.ClientSession', client_session):
            await http.fetch_json('https://example.com')
        _, kwargs = client_session.call_args
        self.assertEqual(kwargs['timeout'].total, config.DEFAULT_FETCH_TIMEOUT / 1000)

    async def test_fetch_text(self):
        client_session, _, _ = mock_session(text='hello')
        with patch('aiohttp.ClientSession', client_session):
            self.assertEqual(await http.fetch_text('https://example.com'), 'hello')

    async def test_http_error(self):
        client_session, _, response = mock_session(status=404)
        with patch('aiohttp.ClientSession', client_session):
            with self.assertLogs('svgterminal.http', level='WARNING') as logs:
                self.assertIsNone(await http.fetch_json('https://example.com'))
        self.assertIn('404', logs.output[0])
        response.json.assert_not_called()

    async def test_failures(self):
        test_cases = {
            'timeout': {'get_error': asyncio.TimeoutError()},
            'connection': {'get_error': aiohttp.ClientConnectionError('refused')},
            'invalid json': {},
        }
        for name, kwargs in test_cases.items():
            with self.subTest(case=name):
                client_session, _, response = mock_session(**kwargs)
                response.json.side_effect = ValueError('Expecting value')
                with patch('aiohttp.ClientSession', client_session):
                    with self.assertLogs('svgterminal.http', level='WARNING'):
                        self.assertIsNone(await http.fetch_json('https://example.com'))
