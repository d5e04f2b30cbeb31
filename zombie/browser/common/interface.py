#!/usr/bin/env python3
"""
Browser engine interface definition module.

This module defines the contract every rendering engine satisfies (HTTP-only
fetchers as well as full JavaScript renderers), the post-navigation policy
type, and the factory that picks an engine implementation at runtime.
"""

import threading
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Optional, Tuple

from ...core.errors import ActionError, ActionFailure
from ...utils.user_agent import resolve_user_agent

DEFAULT_TIMEOUT_SECONDS = 30.0

Content = Tuple[bytes, Optional[str]]


@dataclass(frozen=True)
class PostAction:
    """
    What an engine does after a navigation or script step settles.

    Attributes:
        kind: 'none', 'wait' or 'validate'
        duration: Seconds to pause for 'wait'
        script: Predicate script polled for 'validate'
    """

    kind: str = "none"
    duration: float = 0.0
    script: Optional[str] = None

    @classmethod
    def none(cls):
        return cls("none")

    @classmethod
    def wait(cls, duration):
        """Pause ``duration`` seconds after the step."""
        if duration < 0:
            raise ValueError("wait duration must not be negative")
        return cls("wait", duration=float(duration))

    @classmethod
    def validate(cls, script):
        """Poll ``script`` until it reports true or the engine timeout elapses."""
        return cls("validate", script=script)


class ContentSlot:
    """
    The single "current content" slot of an engine.

    Writes replace the previous content; the lock only keeps a read from
    observing half of a write.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._data = None
        self._url = None

    def store(self, data, url):
        with self._lock:
            self._data = bytes(data)
            self._url = url

    def load(self) -> Content:
        """
        Raises:
            ActionFailure: notFound if nothing has been loaded yet
        """
        with self._lock:
            if self._data is None:
                raise ActionFailure(ActionError.NOT_FOUND)
            return self._data, self._url

    def clear(self):
        with self._lock:
            self._data = None
            self._url = None

    @property
    def has_content(self):
        with self._lock:
            return self._data is not None


class BrowserEngine(ABC):
    """
    Abstract base class for rendering engines.

    An engine instance keeps one current-content slot and is meant to serve
    one action chain at a time; concurrent chains need their own engines.
    """

    supports_scripts = True

    def __init__(self, user_agent=None, timeout_seconds=DEFAULT_TIMEOUT_SECONDS):
        self._user_agent = resolve_user_agent(user_agent)
        self._timeout_seconds = timeout_seconds
        self._slot = ContentSlot()
        self._state = "idle"

    @property
    def user_agent(self) -> str:
        return self._user_agent

    @property
    def timeout_seconds(self) -> float:
        return self._timeout_seconds

    @property
    def state(self) -> str:
        """'idle' or 'loading'."""
        return self._state

    @contextmanager
    def _loading(self):
        self._state = "loading"
        try:
            yield
        finally:
            self._state = "idle"

    @abstractmethod
    async def open(self, url: str, post_action: PostAction = PostAction()) -> Content:
        """Navigate to ``url`` and return the loaded bytes and final URL."""

    @abstractmethod
    async def run(self, script: str) -> str:
        """Evaluate ``script`` in the current page and return its result as text."""

    @abstractmethod
    async def open_and_run(self, script: str, post_action: PostAction = PostAction()) -> Content:
        """Evaluate a navigating ``script`` and return the content loaded afterwards."""

    async def current_content(self) -> Content:
        """
        Content retained from the last successful load.

        Raises:
            ActionFailure: notFound if no content has been loaded
        """
        return self._slot.load()

    async def close(self) -> None:
        """Release engine resources."""

    def __repr__(self):
        return f"<{type(self).__name__} state={self._state}>"


class EngineFactory:
    """Factory class for creating engine instances."""

    ENGINES = ("headless", "selenium", "playwright")

    @staticmethod
    def create(
        engine: str = "headless",
        user_agent: Optional[str] = None,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
        **kwargs: Any
    ) -> BrowserEngine:
        """
        Create an engine of the specified type.

        Args:
            engine: Engine to use ('headless', 'selenium' or 'playwright')
            user_agent: User agent setting (see resolve_user_agent)
            timeout_seconds: Engine timeout used by loads and polling waits
            **kwargs: Additional engine-specific options

        Returns:
            BrowserEngine: An instance implementing the engine contract

        Raises:
            ValueError: If the engine name is unknown
        """
        name = engine.lower()
        if name == "headless":
            from ..headless import HeadlessEngine
            return HeadlessEngine(user_agent=user_agent, timeout_seconds=timeout_seconds, **kwargs)
        elif name == "selenium":
            from ..selenium.driver import SeleniumEngine
            return SeleniumEngine(user_agent=user_agent, timeout_seconds=timeout_seconds, **kwargs)
        elif name == "playwright":
            from ..playwright.driver import PlaywrightEngine
            return PlaywrightEngine(user_agent=user_agent, timeout_seconds=timeout_seconds, **kwargs)
        raise ValueError(f"Unknown engine: {engine}")
