"""Unit tests for metadata propagation."""

import pytest

from tree2md.ast import element
from tree2md.engine.metadata import EMPTY_METADATA, ListCounter, MetadataStore, NodeMetadata, derive_metadata


@pytest.mark.unit
class TestDeriveMetadata:
    """Tests for the contexts opened by lists, pre blocks and tables."""

    def test_unordered_list_opens_context(self):
        metadata = derive_metadata(element("ul"), None)
        assert metadata.list_kind == "ul"
        assert metadata.indent_level == 0
        assert metadata.list_item_number == 0
        assert isinstance(metadata.list_counter, ListCounter)

    def test_nested_list_indents(self):
        outer = derive_metadata(element("ul"), None)
        inner = derive_metadata(element("ol"), outer)
        assert inner.list_kind == "ol"
        assert inner.indent_level == 1
        assert inner.list_counter is not outer.list_counter

    def test_ordered_items_are_numbered(self):
        ol = derive_metadata(element("ol"), None)
        first = derive_metadata(element("li"), ol)
        second = derive_metadata(element("li"), ol)
        assert (first.list_item_number, second.list_item_number) == (1, 2)

    def test_ordered_list_start_attribute(self):
        ol = derive_metadata(element("ol", start="5"), None)
        assert derive_metadata(element("li"), ol).list_item_number == 5

    def test_invalid_start_attribute_is_ignored(self):
        ol = derive_metadata(element("ol", start="v"), None)
        assert derive_metadata(element("li"), ol).list_item_number == 1

    def test_unordered_item_inherits_unchanged(self):
        ul = derive_metadata(element("ul"), None)
        assert derive_metadata(element("li"), ul) is ul

    def test_pre_preserves_whitespace(self):
        metadata = derive_metadata(element("pre"), None)
        assert metadata.preserve_whitespace
        assert not metadata.no_escape

    def test_table_context_is_the_table(self):
        table = element("table")
        assert derive_metadata(table, None).table_context is table

    def test_plain_element_returns_inherited_object(self):
        inherited = NodeMetadata(no_escape=True)
        assert derive_metadata(element("span"), inherited) is inherited
        assert derive_metadata(element("span"), None) is None

    def test_derived_copy_keeps_other_fields(self):
        inherited = NodeMetadata(no_escape=True)
        metadata = derive_metadata(element("ul"), inherited)
        assert metadata.no_escape
        assert inherited.list_kind is None


@pytest.mark.unit
class TestListCounter:
    """Tests for the shared item counter."""

    def test_advance_and_retract(self):
        counter = ListCounter()
        assert counter.advance() == 1
        assert counter.advance() == 2
        counter.retract()
        assert counter.advance() == 2


@pytest.mark.unit
class TestMetadataStore:
    """Tests for recording metadata only where it changed."""

    def test_records_only_changed_metadata(self):
        store = MetadataStore()
        unchanged = element("span")
        changed = element("ul")
        inherited = NodeMetadata()

        store.record(unchanged, inherited, inherited)
        store.record(changed, inherited.derive(list_kind="ul"), inherited)

        assert unchanged not in store
        assert store.get(changed).list_kind == "ul"
        assert store.get(unchanged) is None
        assert len(store) == 1

    def test_none_is_not_recorded(self):
        store = MetadataStore()
        node = element("p")
        store.record(node, None, None)
        assert node not in store

    def test_empty_metadata_defaults(self):
        assert EMPTY_METADATA == NodeMetadata()
        assert EMPTY_METADATA.translators is None
