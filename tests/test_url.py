"""Tests for URL helpers."""

import pytest

from zombie.core.errors import ActionError, ActionFailure
from zombie.utils.url import is_valid_url, resolve_url, validate_url


class TestValidation:
    """Tests for is_valid_url and validate_url."""

    def test_valid_urls(self):
        assert is_valid_url("https://example.com/path")
        assert is_valid_url("file:///tmp/page.html")
        assert is_valid_url("about:blank")

    def test_invalid_urls(self):
        assert not is_valid_url("")
        assert not is_valid_url("example.com")
        assert not is_valid_url("http://")
        assert not is_valid_url("ftp://example.com")
        assert not is_valid_url(None)

    def test_validate_strips(self):
        assert validate_url("  https://example.com ") == "https://example.com"

    def test_validate_raises_invalid_url(self):
        with pytest.raises(ActionFailure) as info:
            validate_url("nope")
        assert info.value.error is ActionError.INVALID_URL


class TestResolve:
    """Tests for resolve_url."""

    def test_relative(self):
        assert resolve_url("https://example.com/a/b", "c.png") == "https://example.com/a/c.png"

    def test_absolute(self):
        assert resolve_url(None, "https://cdn.example.com/x.png") == "https://cdn.example.com/x.png"

    def test_unresolvable(self):
        assert resolve_url(None, "/x.png") is None
        assert resolve_url("https://example.com", None) is None

