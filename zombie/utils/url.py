#!/usr/bin/env python3
"""
URL handling module.

This module contains functions for validating URLs before navigation
and resolving resource references found in documents.
"""

from urllib.parse import urljoin, urlparse

from ..core.errors import ActionError, ActionFailure

NAVIGABLE_SCHEMES = {"http", "https", "file", "about", "data"}


def is_valid_url(url):
    """
    Check whether a URL can be handed to an engine for navigation.

    Args:
        url: URL string

    Returns:
        bool: True for absolute http(s) URLs with a host, or other navigable schemes
    """
    if not isinstance(url, str) or not url.strip():
        return False
    try:
        parsed = urlparse(url.strip())
    except ValueError:
        return False

    scheme = parsed.scheme.lower()
    if scheme not in NAVIGABLE_SCHEMES:
        return False
    if scheme in ("http", "https"):
        return bool(parsed.netloc)
    return True


def validate_url(url):
    """
    Return the stripped URL or fail with invalidURL.

    Raises:
        ActionFailure: invalidURL if the URL cannot be navigated to
    """
    if not is_valid_url(url):
        raise ActionFailure(ActionError.INVALID_URL)
    return url.strip()


def resolve_url(base_url, reference):
    """
    Resolve a resource reference (e.g. an img src) against the page URL.

    Args:
        base_url: URL of the page containing the reference (may be None)
        reference: The raw reference from the document

    Returns:
        str: Absolute URL, or None if the reference cannot be made absolute
    """
    if not reference:
        return None
    resolved = urljoin(base_url or "", reference.strip())
    parsed = urlparse(resolved)
    if parsed.scheme in ("http", "https") and parsed.netloc:
        return resolved
    if parsed.scheme in ("file", "data"):
        return resolved
    return None

