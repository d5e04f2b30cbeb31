#!/usr/bin/env python3
"""
Document parsing module.

This module wraps BeautifulSoup and soupsieve behind the small contract the
document model needs: parse raw bytes into a tree, run a selector against
it, and decode JSON documents.
"""

import json
import logging
import re

import soupsieve
from bs4 import BeautifulSoup, Tag

from ..core.errors import ActionError, ActionFailure

logger = logging.getLogger(__name__)

HTML_PARSER = "html.parser"

_CONTAINS_OWN = re.compile(r":containsOwn\(([^)]*)\)")
_MARKUP_TAG = re.compile(r"<[^>]+>")


def decode_bytes(data):
    """
    Decode document bytes as UTF-8.

    Raises:
        ActionFailure: parsingFailure if the bytes are not valid UTF-8
    """
    if isinstance(data, str):
        return data
    try:
        return bytes(data).decode("utf-8")
    except (UnicodeDecodeError, TypeError):
        raise ActionFailure(ActionError.PARSING_FAILURE)


def parse_html(data, url=None):
    """
    Parse HTML bytes into a BeautifulSoup tree.

    Args:
        data: Raw HTML bytes (or an already decoded string)
        url: URL the document was loaded from (informational)

    Returns:
        BeautifulSoup: The parsed document

    Raises:
        ActionFailure: parsingFailure if the data cannot be decoded
    """
    html = decode_bytes(data)
    soup = BeautifulSoup(html, HTML_PARSER)
    logger.debug("Parsed HTML document (%d bytes) from %s", len(html), url or "<no url>")
    return soup


def translate_selector(selector):
    """
    Rewrite selector extensions into soupsieve syntax.

    ``:containsOwn(text)`` becomes ``:-soup-contains-own("text")``.
    """
    def _replace(match):
        text = match.group(1).strip()
        if len(text) >= 2 and text[0] == text[-1] and text[0] in "'\"":
            text = text[1:-1]
        return ':-soup-contains-own("{}")'.format(text.replace('"', '\\"'))

    return _CONTAINS_OWN.sub(_replace, selector)


def select(root, selector):
    """
    Run a CSS selector against a tree.

    Args:
        root: BeautifulSoup document or Tag to search within
        selector: CSS selector string

    Returns:
        list: Matching nodes in document order; empty if nothing matches or
        the selector cannot be understood by the query engine
    """
    try:
        return list(root.select(translate_selector(selector)))
    except soupsieve.SelectorSyntaxError as e:
        logger.debug("Selector %r rejected by query engine: %s", selector, e)
        return []


def is_node(obj):
    return isinstance(obj, Tag)


def parse_json(data):
    """
    Parse JSON bytes, ignoring any markup wrapped around the payload.

    Renderers often wrap JSON responses in ``<pre>`` tags, so tags are
    stripped before decoding.

    Raises:
        ActionFailure: parsingFailure if the payload is not valid JSON
    """
    text = _MARKUP_TAG.sub("", decode_bytes(data))
    try:
        return json.loads(text)
    except ValueError:
        logger.warning("Error parsing JSON!")
        raise ActionFailure(ActionError.PARSING_FAILURE)
