#!/usr/bin/env python3
"""
Search type module.

This module contains the SearchType class, which describes a document query
in structured form and compiles it into a single CSS selector string for the
element kind being searched for.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class SearchType:
    """
    A typed document query.

    Operands are inserted into the compiled selector as-is; callers must pass
    values that are already valid for the selector grammar.

    Attributes:
        kind: Variant name ('id', 'name', 'text', 'class', 'attribute',
              'contains' or 'query')
        operands: String operands for the variant
    """

    kind: str
    operands: Tuple[str, ...]

    @classmethod
    def id(cls, value):
        """Match the element with the given id."""
        return cls("id", (value,))

    @classmethod
    def name(cls, value):
        """Match elements whose name attribute equals the value."""
        return cls("name", (value,))

    @classmethod
    def text(cls, value):
        """Match elements whose own text contains the value."""
        return cls("text", (value,))

    @classmethod
    def class_(cls, value):
        """Match elements carrying the given class name."""
        return cls("class", (value,))

    @classmethod
    def attribute(cls, key, value):
        """Match elements whose attribute equals the value."""
        return cls("attribute", (key, value))

    @classmethod
    def contains(cls, key, value):
        """Match elements whose attribute contains the value."""
        return cls("contains", (key, value))

    @classmethod
    def query(cls, selector):
        """Use a raw CSS selector; the element tag is ignored."""
        return cls("query", (selector,))

    def compile(self, base_tag="*"):
        """
        Compile the search into a CSS selector.

        Args:
            base_tag: Tag name of the element kind searched for ('*' for any)

        Returns:
            str: The selector string

        Raises:
            ValueError: If the variant is unknown
        """
        if self.kind == "id":
            return f"{base_tag}#{self.operands[0]}"
        elif self.kind == "name":
            return f"{base_tag}[name='{self.operands[0]}']"
        elif self.kind == "text":
            return f"{base_tag}:containsOwn({self.operands[0]})"
        elif self.kind == "class":
            return f"{base_tag}.{self.operands[0]}"
        elif self.kind == "attribute":
            key, value = self.operands
            return f"{base_tag}[{key}='{value}']"
        elif self.kind == "contains":
            key, value = self.operands
            return f"{base_tag}[{key}*='{value}']"
        elif self.kind == "query":
            return self.operands[0]
        raise ValueError(f"Unknown search type: {self.kind}")

    def query_for(self, element_type):
        """Compile the search for an element class exposing ``css_tag_name``."""
        return self.compile(element_type.css_tag_name)

    @classmethod
    def from_args(cls, kind, *operands):
        """
        Build a SearchType from a variant name and operands (used by the CLI).

        Raises:
            ValueError: If the variant is unknown or the operand count is wrong
        """
        arity = {"id": 1, "name": 1, "text": 1, "class": 1,
                 "attribute": 2, "contains": 2, "query": 1}
        if kind not in arity:
            raise ValueError(f"Unknown search type: {kind}")
        if len(operands) != arity[kind]:
            raise ValueError(
                f"Search type '{kind}' expects {arity[kind]} argument(s), got {len(operands)}"
            )
        return cls(kind, tuple(operands))
