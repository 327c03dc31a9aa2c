"""
AST node tests
"""

import dataclasses

import pytest

from matchertext.models.ast import (
    Attribute,
    Comment,
    Element,
    Reference,
    Text,
    attribute_new,
    comment_new,
    element_new,
    nodes_equal,
    rawText_new,
    reference_new,
    text_new,
)


class TestFactories:
    """Test the node constructors"""

    def test_leaf_nodes(self):
        assert text_new("x") == Text("x", raw=False)
        assert rawText_new("x") == Text("x", raw=True)
        assert reference_new("amp") == Reference("amp")
        assert comment_new("note") == Comment("note")

    def test_attribute(self):
        a = attribute_new("href", text_new("x"), reference_new("amp"))
        assert a.name == "href"
        assert a.value == [Text("x"), Reference("amp")]

    def test_element_splits_attributes(self):
        """Leading attributes go to attributes, the rest to content"""
        elt = element_new("a", attribute_new("href", text_new("x")), text_new("link"))
        assert elt.attributes == [Attribute("href", [Text("x")])]
        assert elt.content == [Text("link")]

    def test_element_without_attributes(self):
        elt = element_new("p")
        assert elt.attributes == []
        assert elt.content == []


class TestImmutability:
    """Nodes are values: frozen, and cloned before modification"""

    def test_frozen(self):
        with pytest.raises(dataclasses.FrozenInstanceError):
            Text("x").content = "y"

    def test_element_clone_has_own_lists(self):
        elt = element_new("p", attribute_new("a"), text_new("x"))
        copy = elt.clone()
        copy.content.append(text_new("y"))
        copy.attributes.clear()
        assert elt.content == [Text("x")]
        assert elt.attributes == [Attribute("a", [])]

    def test_attribute_clone_has_own_value(self):
        a = attribute_new("a", text_new("x"))
        copy = a.clone()
        copy.value.append(text_new("y"))
        assert a.value == [Text("x")]

    def test_leaf_clone_is_equal(self):
        for node in [Text("x"), Reference("y"), Comment("z")]:
            assert node.clone() == node


class TestEquality:
    """Test deep structural equality"""

    def test_equal_trees(self):
        a = [element_new("p", attribute_new("k", text_new("v")), element_new("em", text_new("x")))]
        b = [element_new("p", attribute_new("k", text_new("v")), element_new("em", text_new("x")))]
        assert nodes_equal(a, b)

    def test_kinds_differ(self):
        assert not nodes_equal([Text("amp")], [Reference("amp")])
        assert not nodes_equal([Text("x")], [Comment("x")])

    def test_raw_flag_matters(self):
        assert not nodes_equal([text_new("x")], [rawText_new("x")])

    def test_length_matters(self):
        assert not nodes_equal([Text("x")], [Text("x"), Text("")])
        assert nodes_equal([], [])

    def test_nested_difference(self):
        a = [Element("p", [], [Element("em", [], [Text("x")])])]
        b = [Element("p", [], [Element("em", [], [Text("y")])])]
        assert not nodes_equal(a, b)
