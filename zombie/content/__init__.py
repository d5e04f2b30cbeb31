"""
Content module for parsing documents and searching them.

This package contains the search language, the HTML/JSON page model, the
typed element views and markdown conversion.
"""

from .elements import ELEMENT_TYPES, HTMLElement
from .fetched import shared_cache
from .markdown import html_to_markdown
from .page import HTMLPage, JSONPage, Page
from .search import SearchType

__all__ = [
    "SearchType",
    "Page",
    "HTMLPage",
    "JSONPage",
    "HTMLElement",
    "ELEMENT_TYPES",
    "shared_cache",
    "html_to_markdown",
]
