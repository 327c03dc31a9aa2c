"""
AST transformer tests

Tests the entity, quote and matcher transformers on their own and
inside the tree parser, and the order in which the tree parser
applies them.
"""

import pytest

from matchertext.lib.errors import TransformerContractError
from matchertext.lib.transform import (
    EntityTransformer,
    MatcherTransformer,
    QuoteTransformer,
    minmlEscaper,
    numericEscaper,
)
from matchertext.lib.treeparser import TreeParser, minml_parse
from matchertext.models.ast import Attribute, Element, Reference, Text, nodes_equal


def aText(s):
    return Text(s)


def aRef(name):
    return Reference(name)


class TestMatcherTransformer:
    """Test escaping of unmatched matchers"""

    def test_nothing_to_escape(self):
        cases = [
            [],
            [aText("abc")],
            [aText("a(b)c{d}e[f]g")],
            [aText("a(b[c{d"), aRef("foo"), aText("e}f]g)h")],
        ]
        for nodes in cases:
            expected = list(nodes)
            assert nodes_equal(MatcherTransformer().transform(nodes), expected)

    def test_unmatched_in_one_text(self):
        out = MatcherTransformer().transform([aText("a)b]c}d{e[f(g")])
        assert nodes_equal(out, [
            aText("a"), aRef("#41"),
            aText("b"), aRef("#93"),
            aText("c"), aRef("#125"),
            aText("d"), aRef("#123"),
            aText("e"), aRef("#91"),
            aText("f"), aRef("#40"),
            aText("g"),
        ])

    def test_unmatched_around_other_nodes(self):
        out = MatcherTransformer().transform([aText("a)b]c}d"), aRef("foo"), aText("e{f[g(h")])
        assert nodes_equal(out, [
            aText("a"), aRef("#41"),
            aText("b"), aRef("#93"),
            aText("c"), aRef("#125"),
            aText("d"), aRef("foo"),
            aText("e"), aRef("#123"),
            aText("f"), aRef("#91"),
            aText("g"), aRef("#40"),
            aText("h"),
        ])

    def test_pairs_span_text_nodes(self):
        """Text nodes are scanned as one stream"""
        nodes = [aText("a("), aText("b)"), aText("[c"), aText("]")]
        assert nodes_equal(MatcherTransformer().transform(list(nodes)), nodes)

    def test_matchers_alone(self):
        out = MatcherTransformer().transform([aText(")")])
        assert nodes_equal(out, [aRef("#41")])

    def test_minml_escaper(self):
        out = MatcherTransformer(minmlEscaper).transform([aText("a(b]c")])
        assert nodes_equal(out, [aText("a"), aRef("(<)"), aText("b"), aRef("[>]"), aText("c")])

    def test_escapers(self):
        assert numericEscaper(ord("(")) == "#40"
        assert numericEscaper(ord("}")) == "#125"
        assert [minmlEscaper(ord(c)) for c in "()[]{}"] == ["(<)", "(>)", "[<]", "[>]", "{<}", "{>}"]

    def test_custom_escaper(self):
        out = MatcherTransformer(lambda b: f"#x{b:x}").transform([aText("x(")])
        assert nodes_equal(out, [aText("x"), aRef("#x28")])

    def test_raw_flag_kept(self):
        out = MatcherTransformer().transform([Text("x)y", raw=True)])
        assert nodes_equal(out, [Text("x", raw=True), aRef("#41"), Text("y", raw=True)])

    def test_utf8_text(self):
        """Offsets are bytes, pieces are still whole characters"""
        out = MatcherTransformer().transform([aText("é)λ")])
        assert nodes_equal(out, [aText("é"), aRef("#41"), aText("λ")])

    def test_idempotent(self):
        once = MatcherTransformer().transform([aText("a)b(c"), aRef("r"), aText("]")])
        twice = MatcherTransformer().transform(list(once))
        assert nodes_equal(once, twice)

    def test_elements_are_opaque(self):
        """Only the Text nodes of the list itself are scanned"""
        inner = Element("em", [], [aText("(")])
        out = MatcherTransformer().transform([aText("a"), inner, aText(")")])
        assert nodes_equal(out, [aText("a"), inner, aRef("#41")])


class TestEntityTransformer:
    """Test character reference substitution"""

    def test_html_entities(self):
        nodes = minml_parse("[star][cir][larr]", EntityTransformer())
        assert nodes_equal(nodes, [aText("☆"), aText("○"), aText("←")])

    def test_minml_entities(self):
        nodes = minml_parse("[--][+-][-->]", EntityTransformer())
        assert nodes_equal(nodes, [aText("–"), aText("±"), aText("→")])

    def test_html_names_win(self):
        nodes = minml_parse("[amp][lt][copy]", EntityTransformer())
        assert nodes_equal(nodes, [aText("&"), aText("<"), aText("©")])

    def test_unknown_left_alone(self):
        nodes = minml_parse("[nosuch] [#123]", EntityTransformer())
        assert nodes_equal(nodes, [aRef("nosuch"), aText(" "), aRef("#123")])

    def test_inside_elements(self):
        nodes = minml_parse("p[a [amp] b]", EntityTransformer())
        assert nodes == [Element("p", [], [aText("a "), aText("&"), aText(" b")])]

    def test_attribute_values_untouched(self):
        """Attribute values are not passed through transformers"""
        nodes = minml_parse("a{title=[[amp]]}[x]", EntityTransformer())
        assert nodes == [Element("a", [Attribute("title", [aRef("amp")])], [aText("x")])]


class TestQuoteTransformer:
    """Test directed quotation marks"""

    def test_quotes(self):
        t = (EntityTransformer(), QuoteTransformer())
        assert nodes_equal(minml_parse("'[quote]", *t),
                           [aText("‘"), aText("quote"), aText("’")])
        assert nodes_equal(minml_parse('"[quote]', *t),
                           [aText("“"), aText("quote"), aText("”")])

    def test_nested_quotes(self):
        nodes = minml_parse("'[a \"[b]]", QuoteTransformer())
        assert nodes_equal(nodes, [
            aText("‘"), aText("a "), aText("“"), aText("b"), aText("”"), aText("’"),
        ])

    def test_other_elements_kept(self):
        nodes = minml_parse("em[x]", QuoteTransformer())
        assert nodes == [Element("em", [], [aText("x")])]

    def test_unchanged_list_returned(self):
        nodes = [aText("x")]
        assert QuoteTransformer().transform(nodes) is nodes


class Recorder:
    """Transformer that records each list it is given"""

    def __init__(self):
        self.calls = []

    def transform(self, nodes):
        self.calls.append(list(nodes))
        return nodes


class Upper:
    """Transformer that upper-cases text"""

    def transform(self, nodes):
        return [Text(n.content.upper(), n.raw) if isinstance(n, Text) else n for n in nodes]


class TestTreeParserTransforms:
    """Test how the tree parser applies its transformers"""

    def test_bottom_up(self):
        """Children are transformed before their parents see them"""
        rec = Recorder()
        TreeParser("p{k=v}[em[x]] y").transformer_add(Upper()).transformer_add(rec).ast_parse()
        assert rec.calls == [
            [],                                             # em attributes
            [aText("X")],                                   # em content
            [Attribute("k", [aText("v")])],                 # p attributes
            [Element("em", [], [aText("X")])],              # p content
            [Element("p", [Attribute("k", [aText("v")])], [Element("em", [], [aText("X")])]),
             aText(" Y")],                                  # document
        ]

    def test_order_of_addition(self):
        """Transformers run in the order they were added"""
        first = minml_parse("'[[amp]]", EntityTransformer(), QuoteTransformer())
        assert nodes_equal(first, [aText("‘"), aText("&"), aText("’")])

    def test_transformer_add_chains(self):
        tp = TreeParser("x")
        assert tp.transformer_add(Upper()) is tp

    def test_attribute_contract(self):
        """Turning an attribute into anything else is a programming error"""

        class Flatten:
            def transform(self, nodes):
                return [aText(n.name) if isinstance(n, Attribute) else n for n in nodes]

        with pytest.raises(TransformerContractError):
            minml_parse("p{a=x}[]", Flatten())

    def test_dropping_nodes(self):
        class DropRefs:
            def transform(self, nodes):
                return [n for n in nodes if not isinstance(n, Reference)]

        assert minml_parse("a [b] c", DropRefs()) == [aText("a "), aText(" c")]
