"""
Bantam Scanner Tests

Tests for token classification, lexical errors and line numbers.
"""

import io

import pytest
from bantam import ErrorHandler, ErrorKind, Scanner, SourceFile
from bantam.tokens import Token, TokenKind, MAX_STRING_LENGTH
from conftest import scan_source


def kinds(source):
    tokens, _ = scan_source(source)
    return [t.kind for t in tokens[:-1]]


def spellings(source):
    tokens, _ = scan_source(source)
    return [t.spelling for t in tokens[:-1]]


def single(source):
    tokens, handler = scan_source(source)
    assert len(tokens) == 2, tokens
    return tokens[0], handler


def messages(handler):
    return [e.message for e in handler.get_error_list()]


# =============================================================================
# Basics
# =============================================================================

class TestScannerBasics:

    def test_empty_source(self):
        tokens, handler = scan_source("")
        assert len(tokens) == 1
        assert tokens[0].kind == TokenKind.EOF
        assert tokens[0].spelling == ""
        assert not handler.errors_found()

    def test_whitespace_only(self):
        tokens, _ = scan_source("   \t\n  \r\n ")
        assert [t.kind for t in tokens] == [TokenKind.EOF]

    def test_eof_repeats_with_same_line(self):
        scanner = Scanner(io.StringIO("class A\n"), ErrorHandler())
        scanner.tokenize()
        eofs = [scanner.scan() for _ in range(3)]
        assert all(t.kind == TokenKind.EOF and t.spelling == "" for t in eofs)
        assert len({t.line_num for t in eofs}) == 1

    def test_given_source_file_is_left_open(self, tmp_path):
        path = tmp_path / "A.btm"
        path.write_text("class A", encoding="utf-8")
        source = SourceFile(str(path))
        with Scanner(source, ErrorHandler()) as scanner:
            scanner.scan()
        assert not source._reader.closed
        assert scanner.scan().spelling == "A"
        source.close()

    def test_opened_path_is_closed(self, tmp_path):
        path = tmp_path / "A.btm"
        path.write_text("class A", encoding="utf-8")
        with Scanner(str(path), ErrorHandler()) as scanner:
            scanner.scan()
        assert scanner.source_file._reader.closed

    def test_token_str(self):
        assert str(Token(TokenKind.IDENTIFIER, "x", 3)) == "IDENTIFIER 'x' (line 3)"


class TestScannerIdentifiers:

    @pytest.mark.parametrize("text", ["x", "Foo", "a1", "snake_case_2", "A_"])
    def test_identifier(self, text):
        token, handler = single(text)
        assert token.kind == TokenKind.IDENTIFIER
        assert token.spelling == text
        assert not handler.errors_found()

    @pytest.mark.parametrize("keyword,expected_kind", [
        ("class", TokenKind.CLASS),
        ("extends", TokenKind.EXTENDS),
        ("if", TokenKind.IF),
        ("else", TokenKind.ELSE),
        ("while", TokenKind.WHILE),
        ("for", TokenKind.FOR),
        ("break", TokenKind.BREAK),
        ("new", TokenKind.NEW),
        ("cast", TokenKind.CAST),
        ("return", TokenKind.RETURN),
        ("var", TokenKind.VAR),
        ("true", TokenKind.BOOLEAN),
        ("false", TokenKind.BOOLEAN),
    ])
    def test_keywords(self, keyword, expected_kind):
        token, _ = single(keyword)
        assert token.kind == expected_kind
        assert token.spelling == keyword

    @pytest.mark.parametrize("text", ["classy", "If", "this", "super", "null"])
    def test_near_keywords_are_identifiers(self, text):
        token, _ = single(text)
        assert token.kind == TokenKind.IDENTIFIER

    def test_leading_underscore_is_illegal(self):
        tokens, handler = scan_source("_x")
        assert tokens[0].kind == TokenKind.ERROR
        assert tokens[0].spelling == "_"
        assert tokens[1].kind == TokenKind.IDENTIFIER
        assert messages(handler) == ["illegal character"]

    def test_identifier_stops_at_operator(self):
        assert spellings("abc+def") == ["abc", "+", "def"]


class TestScannerIntegers:

    @pytest.mark.parametrize("text", ["0", "42", "007", "2147483647", "0002147483647"])
    def test_integer(self, text):
        token, handler = single(text)
        assert token.kind == TokenKind.INTCONST
        assert token.spelling == text
        assert not handler.errors_found()

    @pytest.mark.parametrize("text", ["2147483648", "9999999999", "0002147483648"])
    def test_integer_too_large(self, text):
        token, handler = single(text)
        assert token.kind == TokenKind.ERROR
        assert token.spelling == text
        errors = handler.get_error_list()
        assert [e.kind for e in errors] == [ErrorKind.LEX_ERROR]
        assert errors[0].message == "Integer too large"

    def test_huge_literal_is_an_error(self):
        text = "1" * 5000
        tokens, handler = scan_source(text + " x")
        assert [t.kind for t in tokens] == [TokenKind.ERROR, TokenKind.IDENTIFIER, TokenKind.EOF]
        assert tokens[0].spelling == text
        assert [e.message for e in handler.get_error_list()] == ["Integer too large"]

    def test_digits_then_letters(self):
        assert kinds("12ab") == [TokenKind.INTCONST, TokenKind.IDENTIFIER]

    def test_scanning_resumes_after_error(self):
        tokens, handler = scan_source("x = 99999999999; y")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER, TokenKind.ASSIGN, TokenKind.ERROR,
            TokenKind.SEMICOLON, TokenKind.IDENTIFIER, TokenKind.EOF,
        ]
        assert len(handler) == 1


class TestScannerStrings:

    @pytest.mark.parametrize("text", [
        '""',
        '"hello"',
        '"with spaces\tand tab"',
        r'"escapes \n \t \f \" \\"',
    ])
    def test_string(self, text):
        token, handler = single(text)
        assert token.kind == TokenKind.STRCONST
        assert token.spelling == text
        assert not handler.errors_found()

    def test_escaped_quote_does_not_terminate(self):
        tokens, _ = scan_source(r'"a\"b" c')
        assert tokens[0].spelling == r'"a\"b"'
        assert tokens[1].spelling == "c"

    def test_unterminated_string(self):
        token, handler = single('"abc')
        assert token.kind == TokenKind.ERROR
        assert token.spelling == '"abc'
        assert messages(handler) == ["unterminated string"]

    def test_unterminated_after_backslash(self):
        token, handler = single('"abc\\')
        assert token.kind == TokenKind.ERROR
        assert messages(handler) == ["unterminated string"]

    def test_illegal_escape(self):
        token, handler = single(r'"bad \q escape"')
        assert token.kind == TokenKind.ERROR
        assert token.spelling == r'"bad \q escape"'
        assert messages(handler) == ["illegal escape character"]

    def test_multiline_string(self):
        tokens, handler = scan_source('"first\nsecond" x')
        assert tokens[0].kind == TokenKind.ERROR
        assert tokens[0].line_num == 1
        assert tokens[1].spelling == "x"
        assert tokens[1].line_num == 2
        assert messages(handler) == ["spanning multiple lines"]

    def test_longest_legal_string(self):
        text = '"' + "a" * (MAX_STRING_LENGTH - 2) + '"'
        assert len(text) == 5000
        token, handler = single(text)
        assert token.kind == TokenKind.STRCONST
        assert not handler.errors_found()

    def test_string_too_long(self):
        text = '"' + "a" * (MAX_STRING_LENGTH - 1) + '"'
        assert len(text) == 5001
        token, handler = single(text)
        assert token.kind == TokenKind.ERROR
        assert messages(handler) == ["string larger than 5000 chars"]

    def test_whitespace_kept_inside_string(self):
        token, _ = single('"  a  b  "')
        assert token.spelling == '"  a  b  "'


class TestScannerOperators:

    @pytest.mark.parametrize("op,expected_kind", [
        ("+", TokenKind.PLUSMINUS),
        ("-", TokenKind.PLUSMINUS),
        ("*", TokenKind.MULDIV),
        ("/", TokenKind.MULDIV),
        ("%", TokenKind.MULDIV),
        ("++", TokenKind.UNARYINCR),
        ("--", TokenKind.UNARYDECR),
        ("!", TokenKind.UNARYNOT),
        ("=", TokenKind.ASSIGN),
        ("==", TokenKind.COMPARE),
        ("!=", TokenKind.COMPARE),
        ("<", TokenKind.COMPARE),
        (">", TokenKind.COMPARE),
        ("<=", TokenKind.COMPARE),
        (">=", TokenKind.COMPARE),
        ("&&", TokenKind.BINARYLOGIC),
        ("||", TokenKind.BINARYLOGIC),
        ("{", TokenKind.LCURLY),
        ("}", TokenKind.RCURLY),
        ("(", TokenKind.LPAREN),
        (")", TokenKind.RPAREN),
        (".", TokenKind.DOT),
        (";", TokenKind.SEMICOLON),
        (":", TokenKind.COLON),
        (",", TokenKind.COMMA),
    ])
    def test_operators(self, op, expected_kind):
        token, handler = single(op)
        assert token.kind == expected_kind
        assert token.spelling == op
        assert not handler.errors_found()

    def test_longest_match(self):
        assert spellings("a+++b") == ["a", "++", "+", "b"]
        assert spellings("x<==y") == ["x", "<=", "=", "y"]
        assert spellings("!!=") == ["!", "!="]

    @pytest.mark.parametrize("op", ["&", "|"])
    def test_single_bitwise_operator(self, op):
        tokens, handler = scan_source(f"a {op} b")
        assert tokens[1].kind == TokenKind.ERROR
        assert tokens[1].spelling == op
        assert tokens[2].spelling == "b"
        assert messages(handler) == ["bitwise logic not supported"]

    @pytest.mark.parametrize("char", ["#", "@", "$", "[", "?", "~"])
    def test_illegal_character(self, char):
        token, handler = single(char)
        assert token.kind == TokenKind.ERROR
        assert token.spelling == char
        assert messages(handler) == ["illegal character"]

    def test_every_lex_error_reported(self):
        _, handler = scan_source("# @ 9999999999 &")
        assert messages(handler) == [
            "illegal character",
            "illegal character",
            "Integer too large",
            "bitwise logic not supported",
        ]


class TestScannerComments:

    def test_line_comment(self):
        tokens, _ = scan_source("x // comment here\ny")
        assert [t.kind for t in tokens] == [
            TokenKind.IDENTIFIER, TokenKind.COMMENT, TokenKind.IDENTIFIER, TokenKind.EOF,
        ]
        assert tokens[1].spelling == "// comment here"
        assert tokens[2].line_num == 2

    def test_line_comment_at_eof(self):
        token, _ = single("// trailing")
        assert token.kind == TokenKind.COMMENT
        assert token.spelling == "// trailing"

    def test_block_comment(self):
        tokens, _ = scan_source("a /* one\ntwo */ b")
        assert tokens[1].kind == TokenKind.COMMENT
        assert tokens[1].spelling == "/* one\ntwo */"
        assert tokens[1].line_num == 1
        assert tokens[2].line_num == 2

    @pytest.mark.parametrize("text", ["/**/", "/***/", "/* a * b / c */", "/*/ still open */"])
    def test_block_comment_delimiters(self, text):
        token, handler = single(text)
        assert token.kind == TokenKind.COMMENT
        assert token.spelling == text
        assert not handler.errors_found()

    def test_unterminated_block_comment(self):
        tokens, handler = scan_source("x\n/* never\nclosed")
        assert tokens[1].kind == TokenKind.ERROR
        assert tokens[1].line_num == 2
        assert messages(handler) == ["unterminated block comment"]
        assert handler.get_error_list()[0].line_num == 2


class TestScannerLineNumbers:

    def test_line_numbers(self):
        tokens, _ = scan_source("class A\n{\n\n  int x;\n}")
        assert [(t.spelling, t.line_num) for t in tokens[:-1]] == [
            ("class", 1), ("A", 1), ("{", 2), ("int", 4), ("x", 4), (";", 4), ("}", 5),
        ]

    def test_token_before_newline_keeps_its_line(self):
        tokens, _ = scan_source("a\nb\r\nc\rd")
        assert [t.line_num for t in tokens[:-1]] == [1, 2, 3, 4]

    def test_line_numbers_non_decreasing(self):
        source = 'class A {\n /* x\n y */ int f() {\n return "s" + 1; // c\n }\n}\n'
        tokens, _ = scan_source(source)
        lines = [t.line_num for t in tokens]
        assert lines == sorted(lines)

    def test_diagnostic_carries_filename(self, write_source):
        path = write_source("ok\n  #")
        handler = ErrorHandler()
        with Scanner(path, handler) as scanner:
            scanner.tokenize()
        error = handler.get_error_list()[0]
        assert error.filename == path
        assert error.line_num == 2
        assert str(error) == f"{path}:2: LEX_ERROR: illegal character"


class TestScannerReconstruction:

    @pytest.mark.parametrize("source", [
        'class A extends B { int x = 3 + 4 * 5; }',
        'class A {\n  void f() {\n    while (x <= 10) x++;\n    s = "a b\\n";\n  }\n}',
        'if (!a && b || c != d) { return -x--; } // done',
        'x = /* inline */ cast(Foo, y) % 2;',
        '# 99999999999 "oops',
    ])
    def test_spellings_reproduce_source(self, source):
        tokens, _ = scan_source(source)
        rebuilt = "".join(t.spelling for t in tokens)
        # Whitespace outside strings and comments is the only thing dropped
        assert rebuilt == "".join(_strip_token_gaps(source, tokens))


def _strip_token_gaps(source, tokens):
    """Return the source with the whitespace between tokens removed."""
    pieces = []
    pos = 0
    for token in tokens:
        if not token.spelling:
            continue
        start = source.index(token.spelling, pos)
        assert source[pos:start].strip() == ""
        pieces.append(token.spelling)
        pos = start + len(token.spelling)
    assert source[pos:].strip() == ""
    return pieces
