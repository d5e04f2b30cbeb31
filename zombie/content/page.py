#!/usr/bin/env python3
"""
Page model module.

This module contains the parsed-document roots (HTML and JSON pages) and the
JSON decode contract. A page is built once from raw bytes and an optional
URL and is not modified afterwards.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, List, Optional, Protocol, Type, TypeVar

from ..core.errors import ActionError, ActionFailure
from .elements import HTMLElement
from .markdown import html_to_markdown
from .parser import parse_html, parse_json, select
from .search import SearchType

logger = logging.getLogger(__name__)

E = TypeVar("E", bound=HTMLElement)
D = TypeVar("D")


class Page(ABC):
    """Root of a parsed document loaded from ``url``."""

    def __init__(self, data, url: Optional[str] = None):
        self.url = url
        self._data = bytes(data) if not isinstance(data, str) else data.encode("utf-8")

    @property
    def data(self) -> bytes:
        """The raw bytes the page was parsed from."""
        return self._data

    @classmethod
    def parse(cls, data, url=None):
        """
        Parse raw bytes into a page of this kind.

        Raises:
            ActionFailure: parsingFailure if the bytes cannot be parsed
        """
        if data is None:
            raise ActionFailure(ActionError.PARSING_FAILURE)
        return cls(data, url)

    @classmethod
    def page_with_data(cls, data, url=None):
        """Like parse, but return None instead of raising."""
        try:
            return cls.parse(data, url)
        except ActionFailure:
            return None

    @abstractmethod
    def __str__(self):
        ...

    def __repr__(self):
        return f"<{type(self).__name__} url={self.url!r}>"


class HTMLPage(Page):
    """A parsed HTML document."""

    def __init__(self, data, url=None):
        super().__init__(data, url)
        self.document = parse_html(self._data, url)

    def query(self, selector: str) -> list:
        """Run a raw CSS selector and return matching nodes in document order."""
        return select(self.document, selector)

    def find_elements(self, search_type: SearchType, element_type: Type[E] = HTMLElement) -> List[E]:
        """
        Search the page for elements of ``element_type``.

        Args:
            search_type: The search to run
            element_type: Element class to produce; supplies the base tag

        Returns:
            list: Matching elements in document order, each carrying the
            compiled query

        Raises:
            ActionFailure: notFound if nothing matches
        """
        query = search_type.query_for(element_type)
        elements = []
        for node in self.query(query):
            element = element_type.from_node(node, query=query, page=self)
            if element is not None:
                elements.append(element)
        if not elements:
            logger.debug("No %s found for query %r", element_type.__name__, query)
            raise ActionFailure(ActionError.NOT_FOUND)
        return elements

    def find_first(self, search_type: SearchType, element_type: Type[E] = HTMLElement) -> E:
        """First match of find_elements."""
        return self.find_elements(search_type, element_type)[0]

    @property
    def html(self) -> str:
        return str(self.document)

    @property
    def text(self) -> str:
        return " ".join(self.document.get_text().split())

    @property
    def title(self) -> Optional[str]:
        if self.document.title is None:
            return None
        return self.document.title.get_text().strip() or None

    def to_markdown(self) -> str:
        return html_to_markdown(self.html, self.url or "")

    def __str__(self):
        return self.html


class JSONParsable(Protocol):
    """Objects exposing JSON content for decoding."""

    def content(self) -> Any:
        ...


class JSONDecodable(Protocol):
    """
    Models that can be produced from a JSON object.

    ``decode`` returns None when the object does not describe a model.
    """

    @classmethod
    def decode(cls, json_object: dict):
        ...


class JSONPage(Page):
    """A parsed JSON document."""

    def __init__(self, data, url=None):
        super().__init__(data, url)
        self._json = parse_json(self._data)

    def content(self) -> Any:
        return self._json

    def __str__(self):
        return repr(self._json)


def decode_json(json_object, model: Type[D]) -> D:
    """
    Decode a single JSON object into ``model``.

    Raises:
        ActionFailure: parsingFailure if the input is not an object or the
        model rejects it
    """
    if not isinstance(json_object, dict):
        raise ActionFailure(ActionError.PARSING_FAILURE)
    decoded = model.decode(json_object)
    if decoded is None:
        raise ActionFailure(ActionError.PARSING_FAILURE)
    return decoded


def decode_json_list(json_array, model: Type[D]) -> List[D]:
    """
    Decode a JSON array of objects into a list of ``model``.

    Anything other than a list decodes to an empty list; the first element
    the model rejects fails the whole decode.
    """
    if not isinstance(json_array, list):
        return []
    return [decode_json(item, model) for item in json_array]


def json_content(parsable):
    """Content of a JSONParsable, or the value itself for plain dicts/lists."""
    if isinstance(parsable, (dict, list)):
        return parsable
    return parsable.content()
