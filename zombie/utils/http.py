#!/usr/bin/env python3
"""
HTTP response handling module.

This module maps HTTP responses onto the error taxonomy so every engine
reports failures the same way, and provides the ContentFetcher used to
download resources outside the main document flow.
"""

import logging

import httpx

from ..core.errors import ERROR_STATUS, SUCCESS_STATUS, ActionError, ActionFailure

logger = logging.getLogger(__name__)


def is_success_status(status_code):
    """Only 2xx responses count as success."""
    return isinstance(status_code, int) and 200 <= status_code < 300


def get_response_category(response_code):
    """
    Get the category of an HTTP response code.

    Args:
        response_code: HTTP status code

    Returns:
        str: Category name (informational, success, redirect, client_error, server_error, unknown)
    """
    if not isinstance(response_code, int):
        return 'unknown'

    if 100 <= response_code < 200:
        return 'informational'
    elif 200 <= response_code < 300:
        return 'success'
    elif 300 <= response_code < 400:
        return 'redirect'
    elif 400 <= response_code < 500:
        return 'client_error'
    elif 500 <= response_code < 600:
        return 'server_error'
    else:
        return 'unknown'


def handle_response(data, status_code=None, error=None):
    """
    Turn a response (or transport error) into its body or a failure.

    Args:
        data: Response body, may be None
        status_code: HTTP status; when absent it is derived from ``error``
        error: Transport-level exception, if any

    Returns:
        bytes: The body (empty bytes when there was none)

    Raises:
        ActionFailure: networkRequestFailure for transport errors or non-2xx statuses
    """
    if status_code is None:
        status_code = SUCCESS_STATUS if error is None else ERROR_STATUS
    if error is not None or not is_success_status(status_code):
        logger.debug(
            "Request failed (%s, status %s): %s",
            get_response_category(status_code), status_code, error,
        )
        raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)
    return data or b""


class ContentFetcher:
    """
    Downloads resources over HTTP.

    Args:
        client: Optional preconfigured httpx.AsyncClient; one is created
                lazily otherwise
        user_agent: User-Agent header for the created client
        timeout: Request timeout in seconds for the created client
    """

    def __init__(self, client=None, user_agent=None, timeout=30.0):
        self._client = client
        self._owns_client = client is None
        self._user_agent = user_agent
        self._timeout = timeout

    @property
    def client(self):
        if self._client is None:
            headers = {"User-Agent": str(self._user_agent)} if self._user_agent else {}
            self._client = httpx.AsyncClient(
                headers=headers, timeout=self._timeout, follow_redirects=True
            )
        return self._client

    async def fetch_response(self, url):
        """
        Request ``url`` and return the raw httpx response.

        Raises:
            ActionFailure: timeout if the request times out, networkRequestFailure
            for other transport errors
        """
        try:
            return await self.client.get(url)
        except httpx.TimeoutException as e:
            logger.debug("Request to %s timed out: %s", url, e)
            raise ActionFailure(ActionError.TIMEOUT)
        except httpx.HTTPError as e:
            logger.debug("Request to %s failed: %s", url, e)
            raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)

    async def fetch(self, url):
        """
        Download ``url`` and return its body.

        Raises:
            ActionFailure: On transport errors or non-2xx statuses
        """
        response = await self.fetch_response(url)
        return handle_response(response.content, status_code=response.status_code)

    async def close(self):
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
