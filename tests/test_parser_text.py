"""
MinML parser tests - literal text, references, raw text and comments

Each table row is MinML source and the nodes it must parse to, with no
transformers applied.
"""

import pytest

from matchertext.lib.errors import MatchertextSyntaxError, MinmlSyntaxError
from matchertext.lib.parser import MinmlParser
from matchertext.lib.treeparser import TreeParser, minml_parse
from matchertext.models.ast import Comment, Reference, Text, nodes_equal


def aText(s):
    return Text(s)


def aRaw(s):
    return Text(s, raw=True)


def aRef(name):
    return Reference(name)


def assert_parses(table):
    for source, expected in table:
        nodes = TreeParser(source).ast_parse()
        assert nodes_equal(nodes, expected), f"{source!r} parsed to {nodes!r}"


class TestLiteralText:
    """Test text that contains no markup"""

    def test_plain(self):
        assert_parses([
            ("", []),
            ("foo", [aText("foo")]),
            ("a(b)c", [aText("a(b)c")]),
            ("()[]{}", [aText("()[]{}")]),
            ("([{x}])", [aText("([{x}])")]),
            (" [ [ ] ] ", [aText(" [ [ ] ] ")]),
        ])

    def test_brackets_are_not_references_with_spaces(self):
        """Whitespace inside a bracket pair means it is literal"""
        assert_parses([
            ("[]", [aText("[]")]),
            ("[ x ]", [aText("[ x ]")]),
            ("[xx ]", [aText("[xx ]")]),
            ("[ xx]", [aText("[ xx]")]),
        ])

    def test_space_sucking_inside_brackets(self):
        assert_parses([
            ("[> x]", [aText("[x]")]),
            ("[x <]", [aText("[x]")]),
            ("[> x <]", [aText("[x]")]),
        ])

    def test_space_sucking_around_brackets_and_braces(self):
        assert_parses([
            ("a <[x y]", [aText("a[x y]")]),
            ("a <{x y}", [aText("a{x y}")]),
            ("> <{> <}> <", [aText(">{}<")]),
            ("> <[> <]> <", [aText(">[]<")]),
            ("> <{> x <}> <", [aText(">{x}<")]),
            ("> <[> x <]> <", [aText(">[x]<")]),
        ])

    def test_parentheses_never_suck(self):
        assert_parses([
            ("a <(x y)", [aText("a <(x y)")]),
            ("> <(> <)> <", [aText("> <(> <)> <")]),
            ("> <(> x <)> <", [aText("> <(> x <)> <")]),
        ])

    def test_unicode_text(self):
        assert_parses([
            ("«héllo»", [aText("«héllo»")]),
            ("(λ [> μ <])", [aText("(λ [μ])")]),
        ])

    def test_invalid_utf8(self):
        """Text must decode as UTF-8"""
        with pytest.raises(UnicodeDecodeError):
            TreeParser(b"a\xffb").ast_parse()


class TestReferences:
    """Test character references"""

    def test_simple(self):
        assert_parses([
            ("[amp]", [aRef("amp")]),
            ("[#123]", [aRef("#123")]),
            ("[#x12ab]", [aRef("#x12ab")]),
        ])

    def test_liberal_names(self):
        """Any non-empty name without whitespace is a reference"""
        assert_parses([
            ("[?]", [aRef("?")]),
            ("[#]", [aRef("#")]),
            ("[#a]", [aRef("#a")]),
            ("[#x]", [aRef("#x")]),
            ("[#x@]", [aRef("#x@")]),
            ("[#xg]", [aRef("#xg")]),
            ("[--]", [aRef("--")]),
            ("[<-->]", [aRef("<-->")]),
            ("[1/2]", [aRef("1/2")]),
        ])

    def test_surrounding_text(self):
        assert_parses([
            (" [amp]", [aText(" "), aRef("amp")]),
            ("<[amp]", [aText("<"), aRef("amp")]),
            ("x <[amp]", [aText("x"), aRef("amp")]),
            ("[amp] ", [aRef("amp"), aText(" ")]),
            ("[amp]>", [aRef("amp"), aText(">")]),
            ("[amp]>x", [aRef("amp"), aText(">x")]),
            ("[amp]> x", [aRef("amp"), aText("x")]),
        ])

    def test_inside_literal_pairs(self):
        assert_parses([
            ("([amp])", [aText("("), aRef("amp"), aText(")")]),
            ("[[amp]]", [aText("["), aRef("amp"), aText("]")]),
            ("{[amp]}", [aText("{"), aRef("amp"), aText("}")]),
            ("(\t<[amp]>\n)", [aText("("), aRef("amp"), aText(")")]),
            ("[\r\n<[amp]>\n\r]", [aText("["), aRef("amp"), aText("]")]),
            ("{ \t\n<[amp]>\n\t }", [aText("{"), aRef("amp"), aText("}")]),
        ])

    def test_matcher_escapes(self):
        """[(<)] and friends name a single matcher"""
        assert_parses([
            ("[(<)]", [aRef("(<)")]),
            ("[(>)]", [aRef("(>)")]),
            ("[[<]]", [aRef("[<]")]),
            ("[[>]]", [aRef("[>]")]),
            ("[{<}]", [aRef("{<}")]),
            ("[{>}]", [aRef("{>}")]),
            ("a [(<)] b", [aText("a "), aRef("(<)"), aText(" b")]),
        ])

    def test_not_matcher_escapes(self):
        """Escapes must be written exactly, with no sucked space"""
        assert_parses([
            ("[<]", [aText("[<]")]),
            ("[>]", [aText("[>]")]),
            ("((<))", [aText("((<))")]),
            ("{(<)}", [aText("{(<)}")]),
            ("[{> >}]", [aText("[{>}]")]),
            ("[{< <}]", [aText("[{<}]")]),
            ("[(<) <]", [aText("[(<)]")]),
        ])

    def test_nested_content_is_not_a_reference(self):
        assert_parses([
            ("[x [y]]", [aText("[x "), aRef("y"), aText("]")]),
            ("[(x)]", [aText("[(x)]")]),
        ])


class TestRawText:
    """Test +[...] raw sections"""

    def test_raw(self):
        assert_parses([
            ("+[]", []),
            ("+[x]", [aRaw("x")]),
            ("+[p[]]", [aRaw("p[]")]),
            ("+[p[x]]", [aRaw("p[x]")]),
            ("+[[x]]", [aRaw("[x]")]),
            ("+[+[x]]", [aRaw("+[x]")]),
            ("+[x[y]z]", [aRaw("x[y]z")]),
            ("+[() <[> <]> {}]", [aRaw("() <[> <]> {}")]),
            (" <+[x]> ", [aRaw("x")]),
            ("a <+[x]> b", [aText("a"), aRaw("x"), aText("b")]),
        ])

    def test_raw_must_nest(self):
        with pytest.raises(MatchertextSyntaxError):
            minml_parse("+[x(]")


class TestComments:
    """Test -[...] comments"""

    def test_comments(self):
        assert_parses([
            ("-[]", []),
            ("-[x]", [Comment("x")]),
            (" <-[x]> ", [Comment("x")]),
            ("-[> abc <]", [Comment("> abc <")]),
            ("-[> ({[]}) <]", [Comment("> ({[]}) <")]),
            ("a -[note] b", [aText("a "), Comment("note"), aText(" b")]),
        ])

    def test_handler_without_comment_drops_them(self):
        """A text handler lacking comment() never sees comments"""

        class Texts:
            def __init__(self):
                self.seen = []

            def text(self, data, raw):
                self.seen.append(data)

            def reference(self, name):
                self.seen.append(name)

            def element(self, name):
                raise AssertionError("no elements expected")

        h = Texts()
        MinmlParser("a -[c] b").all_read(h)
        assert h.seen == [b"a ", b" b"]


class TestMatchertextErrors:
    """Test that malformed matchertext is rejected"""

    def test_bad_nesting(self):
        for source in ["a(b", "b)c", "a[b", "a]b", "a{b", "a}b", "a(]b", "a{)b"]:
            with pytest.raises(MatchertextSyntaxError):
                minml_parse(source)

    def test_stray_top_level_closer(self):
        """A closer left at top level is a MinML error"""
        with pytest.raises(MinmlSyntaxError) as exc:
            minml_parse("ab]c")
        assert exc.value.msg == "expected end of file, found ']'"
        assert exc.value.position.offset == 2

    def test_cleared_errors_keep_parsing(self):
        tp = TreeParser("a]b", errorHook=lambda e: None)
        assert tp.ast_parse() == [aText("a"), aText("b")]

    def test_reader_set(self):
        tp = TreeParser()
        tp.reader_set("[amp]")
        assert tp.ast_parse() == [aRef("amp")]

    def test_nesting_too_deep(self):
        """Input nested past the interpreter stack is rejected, not a crash"""
        for source in ["(" * 5000 + ")" * 5000, "p[" * 5000 + "]" * 5000]:
            with pytest.raises(MatchertextSyntaxError) as exc:
                minml_parse(source)
            assert exc.value.msg == "nesting too deep"

    def test_parser_usable_after_deep_nesting(self):
        tp = TreeParser("[" * 5000 + "]" * 5000)
        with pytest.raises(MatchertextSyntaxError):
            tp.ast_parse()
        tp.reader_set("x [amp]")
        assert tp.ast_parse() == [aText("x "), aRef("amp")]
