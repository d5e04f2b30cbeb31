#!/usr/bin/env python3
"""
HTTP-only engine module.

HeadlessEngine loads documents with plain HTTP requests. It has no script
runtime, so every operation that needs one fails with notSupported.
"""

import asyncio
import logging

from ..core.errors import ActionError, ActionFailure
from ..utils.http import ContentFetcher, handle_response
from .common.interface import DEFAULT_TIMEOUT_SECONDS, BrowserEngine, PostAction

logger = logging.getLogger(__name__)


class HeadlessEngine(BrowserEngine):
    """
    Engine backed by httpx.

    Args:
        user_agent: User agent setting (see resolve_user_agent)
        timeout_seconds: Request timeout in seconds
        client: Optional preconfigured httpx.AsyncClient
    """

    supports_scripts = False

    def __init__(self, user_agent=None, timeout_seconds=DEFAULT_TIMEOUT_SECONDS, client=None):
        super().__init__(user_agent=user_agent, timeout_seconds=timeout_seconds)
        self._fetcher = ContentFetcher(
            client=client, user_agent=self.user_agent, timeout=timeout_seconds
        )

    async def open(self, url, post_action=PostAction()):
        """
        Load ``url`` and retain the body as the current content.

        Raises:
            ActionFailure: networkRequestFailure for transport errors and
            non-2xx statuses, timeout when the request times out,
            notSupported for validate post-actions
        """
        if post_action.kind == "validate":
            raise ActionFailure(ActionError.NOT_SUPPORTED)

        with self._loading():
            logger.debug("GET %s", url)
            response = await self._fetcher.fetch_response(url)
            data = handle_response(response.content, status_code=response.status_code)
            final_url = str(response.url)
            self._slot.store(data, final_url)

        if post_action.kind == "wait":
            await asyncio.sleep(post_action.duration)
        return data, final_url

    async def run(self, script):
        raise ActionFailure(ActionError.NOT_SUPPORTED)

    async def open_and_run(self, script, post_action=PostAction()):
        raise ActionFailure(ActionError.NOT_SUPPORTED)

    async def close(self):
        await self._fetcher.close()
        self._slot.clear()
