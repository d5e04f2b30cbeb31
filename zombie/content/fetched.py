#!/usr/bin/env python3
"""
Fetched content cache module.

This module holds binary content downloaded for fetchable elements (such as
image data). Entries are keyed by element identity, not value, and are
dropped automatically once the element is garbage collected.
"""

import threading
import weakref

from ..core.errors import ActionError, ActionFailure


class FetchedContentCache:
    """Thread-safe, identity-keyed store of fetched bytes."""

    def __init__(self):
        self._storage = weakref.WeakKeyDictionary()
        self._lock = threading.Lock()

    def get(self, element):
        """Return the bytes stored for ``element``, or None."""
        with self._lock:
            return self._storage.get(element)

    def set(self, element, data):
        """Store ``data`` for ``element``; passing None removes the entry."""
        with self._lock:
            if data is None:
                self._storage.pop(element, None)
            else:
                self._storage[element] = bytes(data)

    def clear(self):
        with self._lock:
            self._storage.clear()

    def __contains__(self, element):
        with self._lock:
            return element in self._storage

    def __len__(self):
        with self._lock:
            return len(self._storage)


shared_cache = FetchedContentCache()


def instance_from_data(content_type, data):
    """
    Convert fetched bytes into the requested content type.

    Args:
        content_type: bytes for the raw data, or str for UTF-8 text

    Raises:
        ActionFailure: transformFailure if the conversion is not possible
    """
    if content_type is bytes:
        return bytes(data)
    if content_type is str:
        try:
            return bytes(data).decode("utf-8")
        except UnicodeDecodeError:
            raise ActionFailure(ActionError.TRANSFORM_FAILURE)
    raise ActionFailure(ActionError.TRANSFORM_FAILURE)
