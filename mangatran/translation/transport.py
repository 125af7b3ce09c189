"""Default HTTP transport for the chat-completions endpoint (aiohttp)."""

import asyncio
import logging
from typing import Any, Awaitable, Callable, Dict, Optional

import aiohttp

from mangatran.core.exceptions import TransportError

logger = logging.getLogger(__name__)

# async fetch(url, payload) -> decoded JSON body; raises on failure
Fetch = Callable[[str, Dict[str, Any]], Awaitable[Dict[str, Any]]]


class AiohttpFetcher:
    """
    POSTs a JSON body and returns the decoded JSON reply.

    A fresh ClientSession is opened for every call, so attempts share no
    connection state and can be cancelled independently.
    """

    def __init__(self, timeout: Optional[float] = 30.0, headers: Optional[Dict[str, str]] = None):
        self.timeout = timeout
        self.headers = {"Content-Type": "application/json"}
        if headers:
            self.headers.update(headers)

    async def __call__(self, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        client_timeout = aiohttp.ClientTimeout(total=self.timeout)
        try:
            async with aiohttp.ClientSession(timeout=client_timeout) as session:
                async with session.post(url, json=payload, headers=self.headers) as response:
                    if response.status < 200 or response.status >= 300:
                        raise TransportError(
                            f"Translation request failed with status {response.status}",
                            url=url,
                            status=response.status
                        )
                    return await response.json(content_type=None)
        except TransportError:
            raise
        except asyncio.TimeoutError as e:
            raise TransportError(
                f"Translation request timed out after {self.timeout}s",
                url=url,
                original_error=e,
                timeout=True
            ) from e
        except aiohttp.ClientError as e:
            raise TransportError(
                f"Translation request failed: {e}",
                url=url,
                original_error=e
            ) from e
