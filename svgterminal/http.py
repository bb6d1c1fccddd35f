"""HTTP requests made by blocks fetching live data

None of these functions raise on network or decoding errors: failures are
logged as warnings and None is returned so that blocks can fall back to
static content.
"""

import asyncio
import logging

import aiohttp

from svgterminal import __version__
from svgterminal.config import DEFAULT_FETCH_TIMEOUT

logger = logging.getLogger(__name__)

USER_AGENT = 'svgterminal/{}'.format(__version__)


async def _fetch(url, timeout_ms, read):
    timeout = aiohttp.ClientTimeout(total=timeout_ms / 1000)
    headers = {'User-Agent': USER_AGENT}
    try:
        async with aiohttp.ClientSession(timeout=timeout, headers=headers) as session:
            async with session.get(url) as response:
                if response.status >= 400:
                    logger.warning('HTTP {} from {}'.format(response.status, url))
                    return None
                return await read(response)
    except asyncio.TimeoutError:
        logger.warning('Timeout after {}ms fetching {}'.format(timeout_ms, url))
    except aiohttp.ClientError as exc:
        logger.warning('Fetch failed for {}: {}'.format(url, exc))
    except ValueError as exc:
        # Invalid JSON or undecodable body
        logger.warning('Invalid response from {}: {}'.format(url, exc))
    return None


async def fetch_json(url, timeout=DEFAULT_FETCH_TIMEOUT):
    """Return the JSON document at url decoded, or None on failure

    :param url: URL of the document
    :param timeout: Timeout of the whole request in milliseconds
    """
    async def read(response):
        return await response.json(content_type=None)
    return await _fetch(url, timeout, read)


async def fetch_text(url, timeout=DEFAULT_FETCH_TIMEOUT):
    """Return the body of the response at url as text, or None on failure"""
    async def read(response):
        return await response.text()
    return await _fetch(url, timeout, read)
