#!/usr/bin/env python3
"""
Automation facade module.

This module contains the Zombie class, the navigation API that ties an
engine, the document model and Action together. Every operation returns an
Action; nothing touches the engine until the Action is executed.
"""

import logging
from typing import Any, Callable, List, Optional, Type

from ..browser.common.interface import BrowserEngine, EngineFactory, PostAction
from ..browser.navigator import selector_present_script, set_attribute_script, wait_until
from ..content.elements import HTMLElement
from ..content.fetched import shared_cache
from ..content.page import HTMLPage, JSONPage, Page, decode_json, decode_json_list, json_content
from ..content.parser import parse_json
from ..content.search import SearchType
from ..utils.http import ContentFetcher
from ..utils.url import validate_url
from .action import Action
from .errors import ActionError, ActionFailure

logger = logging.getLogger(__name__)


class Zombie:
    """
    Headless navigation over a pluggable engine.

    Args:
        engine: BrowserEngine to drive; an engine is built with
                EngineFactory.create when not given
        name: Name used in log messages
        fetcher: ContentFetcher used by fetch; created from the engine's
                 user agent and timeout when not given
        **engine_options: Passed to EngineFactory.create when no engine is given
    """

    def __init__(self, engine: Optional[BrowserEngine] = None, name: str = "Zombie",
                 fetcher: Optional[ContentFetcher] = None, **engine_options):
        self.name = name
        self.engine = engine if engine is not None else EngineFactory.create(**engine_options)
        self._fetcher = fetcher

    @property
    def user_agent(self) -> str:
        return self.engine.user_agent

    @property
    def timeout_seconds(self) -> float:
        return self.engine.timeout_seconds

    @property
    def fetcher(self) -> ContentFetcher:
        if self._fetcher is None:
            self._fetcher = ContentFetcher(
                user_agent=self.engine.user_agent, timeout=self.engine.timeout_seconds
            )
        return self._fetcher

    @staticmethod
    def _parse(page_type: Type[Page], data, url):
        try:
            return page_type.parse(data, url)
        except ActionFailure:
            raise
        except Exception as e:
            logger.debug("Could not parse %s as %s: %s", url, page_type.__name__, e)
            raise ActionFailure(ActionError.PARSING_FAILURE)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def open(self, url: str, page_type: Type[Page] = HTMLPage,
             post_action: PostAction = PostAction()) -> Action:
        """
        Load ``url`` and parse it as ``page_type``.

        Fails with invalidURL for malformed URLs, with the engine's error
        when loading fails, and with parsingFailure if the content does not
        parse.
        """
        async def operation():
            target = validate_url(url)
            logger.debug("[%s] Opening %s", self.name, target)
            data, final_url = await self.engine.open(target, post_action)
            return self._parse(page_type, data, final_url)
        return Action(operation)

    def opener(self, page_type: Type[Page] = HTMLPage,
               post_action: PostAction = PostAction()) -> Callable[[str], Action]:
        """Curried open: returns ``url -> Action`` for use with and_then."""
        return lambda url: self.open(url, page_type, post_action)

    def inspect(self, page_type: Type[Page] = HTMLPage) -> Action:
        """Parse the engine's current content without a new load."""
        async def operation():
            data, url = await self.engine.current_content()
            return self._parse(page_type, data, url)
        return Action(operation)

    # ------------------------------------------------------------------
    # Searching
    # ------------------------------------------------------------------

    def find_all(self, page: HTMLPage, search_type: SearchType,
                 element_type: Type[HTMLElement] = HTMLElement) -> Action:
        """All elements of ``element_type`` matching ``search_type``; notFound when empty."""
        async def operation():
            return page.find_elements(search_type, element_type)
        return Action(operation)

    def find(self, page: HTMLPage, search_type: SearchType,
             element_type: Type[HTMLElement] = HTMLElement) -> Action:
        """First element of ``element_type`` matching ``search_type``."""
        return self.find_all(page, search_type, element_type).map(lambda elements: elements[0])

    def get_all(self, search_type: SearchType,
                element_type: Type[HTMLElement] = HTMLElement) -> Callable[[HTMLPage], Action]:
        return lambda page: self.find_all(page, search_type, element_type)

    def get(self, search_type: SearchType,
            element_type: Type[HTMLElement] = HTMLElement) -> Callable[[HTMLPage], Action]:
        return lambda page: self.find(page, search_type, element_type)

    # ------------------------------------------------------------------
    # Scripts
    # ------------------------------------------------------------------

    def execute(self, script: str) -> Action:
        """Evaluate ``script`` in the current page and yield its result as text."""
        async def operation():
            result = await self.engine.run(script)
            logger.debug("SCRIPT RESULT: %s", result)
            return result
        return Action(operation)

    def execute_on(self, script: str) -> Callable[[Any], Action]:
        """Curried execute, ignoring the page it is chained after."""
        return lambda _page: self.execute(script)

    def wait_for(self, selector: str, page_type: Type[Page] = HTMLPage) -> Action:
        """
        Wait until ``selector`` matches a node, then inspect the page.

        Fails with timeout if nothing matched within the engine timeout.
        """
        async def operation():
            await wait_until(self.engine, selector_present_script(selector))
            data, url = await self.engine.current_content()
            return self._parse(page_type, data, url)
        return Action(operation)

    def set_attribute(self, key: str, value: Optional[str],
                      page_type: Type[Page] = HTMLPage) -> Callable[[HTMLElement], Action]:
        """
        Returns ``element -> Action[Page]`` setting an attribute in the live page.

        The node is located again through the query the element was found
        with; the page is re-read afterwards.
        """
        def set_on(element):
            async def operation():
                if element.query is None:
                    raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)
                await self.engine.run(set_attribute_script(element.query, key, value))
                data, url = await self.engine.current_content()
                return self._parse(page_type, data, url)
            return Action(operation)
        return set_on

    # ------------------------------------------------------------------
    # Redirects
    # ------------------------------------------------------------------

    def _redirect(self, element, page_type, post_action):
        async def operation():
            script = element.action_script()
            if not script:
                logger.debug("[%s] %r has no action script", self.name, element)
                raise ActionFailure(ActionError.NETWORK_REQUEST_FAILURE)
            data, url = await self.engine.open_and_run(script, post_action)
            return self._parse(page_type, data, url)
        return Action(operation)

    def click(self, link, page_type: Type[Page] = HTMLPage,
              post_action: PostAction = PostAction()) -> Action:
        """Follow a link and parse the page it leads to."""
        return self._redirect(link, page_type, post_action)

    def press(self, button, page_type: Type[Page] = HTMLPage,
              post_action: PostAction = PostAction()) -> Action:
        """Run a button's onclick script and parse the resulting page."""
        return self._redirect(button, page_type, post_action)

    def swap(self, frame, page_type: Type[Page] = HTMLPage,
             post_action: PostAction = PostAction()) -> Action:
        """Replace the current page with a frame's document."""
        return self._redirect(frame, page_type, post_action)

    def submit(self, form, page_type: Type[Page] = HTMLPage,
               post_action: PostAction = PostAction()) -> Action:
        """Submit a form and parse the response page."""
        return self._redirect(form, page_type, post_action)

    # ------------------------------------------------------------------
    # Downloads
    # ------------------------------------------------------------------

    def fetch(self, element) -> Action:
        """
        Download a fetchable element's resource into the shared cache.

        Yields the element itself; read the data with
        ``element.fetched_content()``.
        """
        async def operation():
            url = element.fetch_url
            if url is None:
                raise ActionFailure(ActionError.NOT_FOUND)
            data = await self.fetcher.fetch(url)
            shared_cache.set(element, data)
            return element
        return Action(operation)

    # ------------------------------------------------------------------
    # Combinators
    # ------------------------------------------------------------------

    @staticmethod
    def map(f: Callable[[Any], Any]) -> Callable[[Any], Action]:
        """Lift ``f`` into ``value -> Action``; a None result is notFound."""
        def checked(value):
            result = f(value)
            if result is None:
                raise ActionFailure(ActionError.NOT_FOUND)
            return result
        return lambda value: Action.value(value).map(checked)

    @staticmethod
    def collect(step: Callable[[Any], Action], until: Callable[[Any], bool]) -> Callable[[Any], Action]:
        return lambda initial: Action.collect(initial, step, until)

    @staticmethod
    def batch(f: Callable[[Any], Action]) -> Callable[[List[Any]], Action]:
        return lambda elements: Action.batch(elements, f)

    # ------------------------------------------------------------------
    # JSON
    # ------------------------------------------------------------------

    def parse(self, data) -> Action:
        """Parse JSON text or bytes into Python objects."""
        async def operation():
            if isinstance(data, JSONPage):
                return data.content()
            return parse_json(data)
        return Action(operation)

    def decode(self, parsable, model) -> Action:
        """Decode a JSON object (or JSONParsable) into ``model``."""
        async def operation():
            return decode_json(json_content(parsable), model)
        return Action(operation)

    def decode_all(self, parsable, model) -> Action:
        """Decode a JSON array (or JSONParsable) into a list of ``model``."""
        async def operation():
            return decode_json_list(json_content(parsable), model)
        return Action(operation)

    # ------------------------------------------------------------------
    # Debugging and lifecycle
    # ------------------------------------------------------------------

    def dump(self) -> Action:
        """Log the engine's current content and yield it as text (None when empty)."""
        async def operation():
            try:
                data, _ = await self.engine.current_content()
            except ActionFailure:
                logger.info("No Output available.")
                return None
            html = data.decode("utf-8", errors="replace")
            logger.info(html)
            return html
        return Action(operation)

    async def close(self):
        """Release the engine and the download client."""
        await self.engine.close()
        if self._fetcher is not None:
            await self._fetcher.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc, tb):
        await self.close()

    def __repr__(self):
        return f"<Zombie {self.name!r} engine={self.engine!r}>"
