"""Tests for SearchType compilation."""

import pytest

from zombie.content.elements import HTMLElement, HTMLForm, HTMLLink
from zombie.content.parser import translate_selector
from zombie.content.search import SearchType


class TestCompile:
    """Tests for SearchType.compile."""

    def test_id(self):
        assert SearchType.id("x").compile("div") == "div#x"

    def test_class_any_tag(self):
        assert SearchType.class_("c").compile("*") == "*.c"

    def test_attribute(self):
        assert SearchType.attribute("data-k", "v").compile("a") == "a[data-k='v']"

    def test_name(self):
        assert SearchType.name("q").compile("input") == "input[name='q']"

    def test_contains(self):
        assert SearchType.contains("href", "next").compile("a") == "a[href*='next']"

    def test_text(self):
        assert SearchType.text("Hello").compile("p") == "p:containsOwn(Hello)"

    def test_query_ignores_tag(self):
        assert SearchType.query("ul > li").compile("a") == "ul > li"

    def test_default_tag_is_any(self):
        assert SearchType.id("x").compile() == "*#x"

    def test_unknown_kind(self):
        with pytest.raises(ValueError):
            SearchType("xpath", ("//a",)).compile()


class TestQueryFor:
    """Tests for element-kind base tags."""

    def test_uses_element_tag(self):
        assert SearchType.id("f").query_for(HTMLForm) == "form#f"
        assert SearchType.class_("nav").query_for(HTMLLink) == "a.nav"
        assert SearchType.class_("nav").query_for(HTMLElement) == "*.nav"


class TestFromArgs:
    """Tests for SearchType.from_args."""

    def test_builds_variant(self):
        assert SearchType.from_args("attribute", "k", "v") == SearchType.attribute("k", "v")

    def test_wrong_arity(self):
        with pytest.raises(ValueError):
            SearchType.from_args("attribute", "k")

    def test_unknown_variant(self):
        with pytest.raises(ValueError):
            SearchType.from_args("xpath", "//a")


class TestTranslateSelector:
    """Tests for containsOwn rewriting."""

    def test_rewrites_contains_own(self):
        assert translate_selector("p:containsOwn(Hi)") == 'p:-soup-contains-own("Hi")'

    def test_strips_quotes(self):
        assert translate_selector("p:containsOwn('Hi')") == 'p:-soup-contains-own("Hi")'

    def test_leaves_plain_selectors(self):
        assert translate_selector("div.c > a") == "div.c > a"
