"""Tests for HTTP status handling and the content fetcher."""

import httpx
import pytest

from zombie.core.errors import ActionError, ActionFailure
from zombie.utils.http import (ContentFetcher, get_response_category, handle_response,
                               is_success_status)


class TestStatusMapping:
    """Tests for status classification."""

    def test_only_2xx_succeeds(self):
        assert is_success_status(200)
        assert is_success_status(204)
        assert not is_success_status(301)
        assert not is_success_status(404)
        assert not is_success_status(None)

    def test_categories(self):
        assert get_response_category(302) == "redirect"
        assert get_response_category(503) == "server_error"
        assert get_response_category("x") == "unknown"

    def test_handle_response_success(self):
        assert handle_response(b"body", status_code=200) == b"body"
        assert handle_response(None, status_code=204) == b""

    def test_handle_response_error_status(self):
        with pytest.raises(ActionFailure) as info:
            handle_response(b"", status_code=500)
        assert info.value.error is ActionError.NETWORK_REQUEST_FAILURE

    def test_handle_response_transport_error(self):
        with pytest.raises(ActionFailure):
            handle_response(b"", error=OSError("reset"))


class TestContentFetcher:
    """Tests for ContentFetcher."""

    @pytest.mark.asyncio
    async def test_fetch_returns_bytes(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(200, content=b"\x89PNG"))
        fetcher = ContentFetcher(client=httpx.AsyncClient(transport=transport))
        assert await fetcher.fetch("https://example.com/logo.png") == b"\x89PNG"

    @pytest.mark.asyncio
    async def test_fetch_error_status(self):
        transport = httpx.MockTransport(lambda request: httpx.Response(403))
        fetcher = ContentFetcher(client=httpx.AsyncClient(transport=transport))
        with pytest.raises(ActionFailure) as info:
            await fetcher.fetch("https://example.com/logo.png")
        assert info.value.error is ActionError.NETWORK_REQUEST_FAILURE

    @pytest.mark.asyncio
    async def test_close_keeps_borrowed_client(self):
        client = httpx.AsyncClient(transport=httpx.MockTransport(lambda r: httpx.Response(200)))
        fetcher = ContentFetcher(client=client)
        await fetcher.close()
        assert not client.is_closed
        await client.aclose()
