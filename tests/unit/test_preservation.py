"""Unit tests for the preservation pass."""

import pytest

from tree2md.ast import ElementNode, TextNode, document, element, iter_descendants
from tree2md.engine.preservation import analyze_preservation
from tree2md.translators import TranslatorCollection, TranslatorConfig, TranslatorFactory, create_default_translators


@pytest.fixture
def translators(options):
    return create_default_translators(options)


@pytest.mark.unit
class TestAnalyzePreservation:
    """Tests for which nodes are flagged as able to produce output."""

    def test_text_node_is_preserved(self, translators):
        paragraph = element("p", "x")
        flags = analyze_preservation(document(paragraph), translators)
        assert flags[paragraph] is True
        assert flags[paragraph.children[0]] is True

    def test_empty_element_is_not_preserved(self, translators):
        paragraph = element("p")
        root = document(paragraph)
        flags = analyze_preservation(root, translators)
        assert flags[paragraph] is False
        assert flags[root] is False

    def test_contentless_element_preserves_ancestors(self, translators):
        div = element("div", element("span", element("br")))
        flags = analyze_preservation(div, translators)
        assert flags[div] is True
        assert flags[div.children[0]] is True

    def test_childless_factory_rule_is_preserved(self, translators):
        anchor = element("a", href="http://x")
        flags = analyze_preservation(document(anchor), translators)
        assert flags[anchor] is True

    def test_preserve_if_empty_rule(self):
        translators = TranslatorCollection({"td": TranslatorConfig(preserve_if_empty=True)})
        cell = element("td")
        other = element("span")
        flags = analyze_preservation(element("tr", cell, other), translators)
        assert flags[cell] is True
        assert flags[other] is False

    def test_factory_rule_counts_even_without_base_flag(self):
        translators = TranslatorCollection({"x-widget": TranslatorFactory(lambda ctx: None)})
        widget = element("x-widget")
        assert analyze_preservation(widget, translators)[widget] is True

    def test_children_of_contentless_elements_get_flags(self, translators):
        inner = element("span")
        image = element("img", inner, src="a.png")
        flags = analyze_preservation(document(image), translators)
        assert flags[image] is True
        assert inner in flags
        assert flags[inner] is False

    def test_every_node_gets_a_flag(self, translators):
        root = document(
            element("p", "a", element("em"), element("b", "c")),
            element("ul", element("li"), element("li", "x")),
        )
        flags = analyze_preservation(root, translators)
        assert len(flags) == 1 + sum(1 for _ in iter_descendants(root))

    def test_any_preserved_child_preserves_parent(self, translators):
        # The preserved child is the last one; earlier siblings are empty
        parent = element("div", element("span"), element("span"), TextNode("z"))
        flags = analyze_preservation(parent, translators)
        assert flags[parent] is True
        assert flags[parent.children[0]] is False

    def test_deep_nesting_does_not_recurse(self, translators):
        root = ElementNode("div")
        current = root
        for _ in range(5000):
            child = ElementNode("div")
            current.children.append(child)
            current = child
        current.children.append(TextNode("deep"))

        flags = analyze_preservation(root, translators)
        assert flags[root] is True
        assert flags[current] is True
