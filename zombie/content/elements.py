#!/usr/bin/env python3
"""
Element model module.

This module contains the typed element views produced by searching a page.
Each class declares the CSS tag name used as the base of compiled queries
for that kind; elements are read-only projections over a parsed node.
"""

from typing import Dict, List, Optional

from ..utils.url import resolve_url
from .fetched import instance_from_data, shared_cache
from .parser import is_node, select


class HTMLElement:
    """
    A view over one node of a parsed HTML document.

    Attributes:
        node: The underlying BeautifulSoup tag
        query: The compiled query that produced this element, if any
        page: The page the element was found on, if any
    """

    css_tag_name = "*"

    def __init__(self, node, query: Optional[str] = None, page=None):
        self.node = node
        self.query = query
        self.page = page

    @classmethod
    def from_node(cls, node, query=None, page=None):
        """
        Wrap a parsed node as this element kind.

        Returns:
            HTMLElement: The wrapped element, or None if ``node`` is not an element node
        """
        if not is_node(node):
            return None
        return cls(node, query=query, page=page)

    @property
    def text(self) -> str:
        """Text content of the element with whitespace collapsed."""
        return " ".join(self.node.get_text().split())

    @property
    def content(self) -> str:
        """Inner HTML of the element."""
        return self.node.decode_contents()

    @property
    def inner_content(self) -> str:
        """Outer HTML of the element."""
        return str(self.node)

    @property
    def tag_name(self) -> str:
        return self.node.name

    def attribute(self, key: str) -> Optional[str]:
        """
        Look up an attribute value (case-insensitive on the key).

        Returns:
            str: The attribute value, or None if it is unset or empty
        """
        value = self.node.attrs.get(key.lower())
        if value is None:
            return None
        if isinstance(value, (list, tuple)):
            value = " ".join(value)
        return value or None

    object_for_key = attribute

    def children(self, element_type=None) -> List["HTMLElement"]:
        """Direct child elements wrapped as ``element_type``."""
        element_type = element_type or HTMLElement
        page = self.page
        wrapped = (element_type.from_node(child, page=page) for child in self.node.children)
        return [element for element in wrapped if element is not None]

    def children_with_tag_name(self, tag_name, element_type=None) -> List["HTMLElement"]:
        """Descendant elements matching ``tag_name``, in document order."""
        element_type = element_type or HTMLElement
        page = self.page
        wrapped = (element_type.from_node(node, query=tag_name, page=page)
                   for node in select(self.node, tag_name))
        return [element for element in wrapped if element is not None]

    def has_children(self) -> bool:
        return any(is_node(child) for child in self.node.children)

    def __str__(self):
        return self.inner_content

    def __repr__(self):
        return f"<{type(self).__name__} {self.tag_name} query={self.query!r}>"


class HTMLRedirectable(HTMLElement):
    """An element that can trigger navigation through a script."""

    action_attribute = "onclick"

    def action_script(self) -> Optional[str]:
        """
        Script that performs this element's action.

        Returns:
            str: The script, or None if the element is not actionable
        """
        return self.attribute(self.action_attribute)


class HTMLLink(HTMLRedirectable):
    """The <a> element."""

    css_tag_name = "a"
    action_attribute = "href"

    @property
    def href(self) -> Optional[str]:
        return self.attribute("href")

    @property
    def link_text(self) -> str:
        return self.text

    def action_script(self) -> Optional[str]:
        href = self.href
        if href is None:
            return None
        return f"window.location.href='{href}';"


class HTMLButton(HTMLRedirectable):
    """The <button> element."""

    css_tag_name = "button"


class HTMLFrame(HTMLRedirectable):
    """The <iframe> element."""

    css_tag_name = "iframe"
    action_attribute = "src"

    @property
    def source(self) -> Optional[str]:
        return self.attribute("src")

    def action_script(self) -> Optional[str]:
        source = self.source
        if source is None:
            return None
        return f"window.location.href='{source}';"


class HTMLForm(HTMLElement):
    """
    The <form> element.

    Named <input> fields found anywhere inside the form are collected into
    ``inputs``, mapping field name to value (None for an empty value).
    """

    css_tag_name = "form"

    def __init__(self, node, query=None, page=None):
        super().__init__(node, query=query, page=page)
        self.inputs: Dict[str, Optional[str]] = self._collect_inputs()

    def _collect_inputs(self):
        inputs = {}
        for field in self.node.find_all("input"):
            name = field.get("name")
            if name:
                inputs[name] = field.get("value") or None
        return inputs

    def field(self, name) -> Optional[str]:
        """Value of the named input field, or None."""
        return self.inputs.get(name)

    def __getitem__(self, name):
        return self.inputs[name]

    def __contains__(self, name):
        return name in self.inputs

    @property
    def name(self) -> Optional[str]:
        return self.attribute("name")

    @property
    def id(self) -> Optional[str]:
        return self.attribute("id")

    @property
    def action(self) -> Optional[str]:
        return self.attribute("action")

    def action_script(self) -> Optional[str]:
        """Script submitting this form, addressed by name or else by id."""
        if self.name:
            return f"document.{self.name}.submit();"
        if self.id:
            return f"document.getElementById('{self.id}').submit();"
        return None


class HTMLFetchable:
    """Mixin for elements referencing downloadable content."""

    source_attribute = "src"

    @property
    def fetch_url(self) -> Optional[str]:
        """Absolute URL of the referenced resource, or None."""
        page = self.page
        base_url = page.url if page is not None else None
        return resolve_url(base_url, self.attribute(self.source_attribute))

    def fetched_content(self, content_type=bytes):
        """
        Content previously downloaded for this element.

        Args:
            content_type: bytes or str

        Returns:
            The converted content, or None if nothing has been fetched

        Raises:
            ActionFailure: transformFailure if the content cannot be converted
        """
        data = shared_cache.get(self)
        if data is None:
            return None
        return instance_from_data(content_type, data)


class HTMLImage(HTMLFetchable, HTMLElement):
    """The <img> element."""

    css_tag_name = "img"

    @property
    def source(self) -> Optional[str]:
        return self.attribute("src")


class HTMLTableColumn(HTMLElement):
    """The <td> element."""

    css_tag_name = "td"


class HTMLTableRow(HTMLElement):
    """The <tr> element."""

    css_tag_name = "tr"

    @property
    def columns(self) -> List[HTMLTableColumn]:
        return [cell for cell in self.children(HTMLTableColumn) if cell.tag_name in ("td", "th")]


class HTMLTable(HTMLElement):
    """The <table> element."""

    css_tag_name = "table"

    @property
    def rows(self) -> List[HTMLTableRow]:
        """Rows of the table, looking through thead/tbody/tfoot sections."""
        rows = []
        for child in self.children(HTMLTableRow):
            if child.tag_name in ("thead", "tbody", "tfoot"):
                rows.extend(row for row in child.children(HTMLTableRow) if row.tag_name == "tr")
            elif child.tag_name == "tr":
                rows.append(child)
        return rows


ELEMENT_TYPES = {
    "element": HTMLElement,
    "link": HTMLLink,
    "button": HTMLButton,
    "form": HTMLForm,
    "image": HTMLImage,
    "frame": HTMLFrame,
    "table": HTMLTable,
    "row": HTMLTableRow,
    "column": HTMLTableColumn,
}
