"""
Error Handling Tests

Tests for diagnostics, the error collector and token predicates.
"""

import pytest
from bantam import CompilationError, Diagnostic, ErrorHandler, ErrorKind, Token, TokenKind


class TestDiagnostic:

    @pytest.mark.parametrize("line_num,filename,expected", [
        (3, "A.btm", "A.btm:3: LEX_ERROR: illegal character"),
        (3, None, "line 3: LEX_ERROR: illegal character"),
        (None, "A.btm", "A.btm: LEX_ERROR: illegal character"),
        (None, None, "LEX_ERROR: illegal character"),
    ])
    def test_format(self, line_num, filename, expected):
        diagnostic = Diagnostic(ErrorKind.LEX_ERROR, "illegal character", line_num, filename)
        assert str(diagnostic) == expected


class TestErrorHandler:

    def test_starts_empty(self):
        handler = ErrorHandler()
        assert not handler.errors_found()
        assert len(handler) == 0
        assert handler.get_error_list() == []

    def test_register_keeps_order(self):
        handler = ErrorHandler()
        first = handler.register(ErrorKind.LEX_ERROR, "one", 1)
        handler.register(ErrorKind.PARSE_ERROR, "two", 2, "A.btm")
        assert handler.errors_found()
        assert [e.message for e in handler.get_error_list()] == ["one", "two"]
        assert handler.get_error_list()[0] is first

    def test_error_list_is_a_copy(self):
        handler = ErrorHandler()
        handler.register(ErrorKind.SEMANT_ERROR, "x")
        handler.get_error_list().clear()
        assert len(handler) == 1

    def test_clear(self):
        handler = ErrorHandler()
        handler.register(ErrorKind.LEX_ERROR, "x")
        handler.clear()
        assert not handler.errors_found()


class TestCompilationError:

    def test_message_is_first_diagnostic(self):
        handler = ErrorHandler()
        handler.register(ErrorKind.LEX_ERROR, "first", 1)
        handler.register(ErrorKind.PARSE_ERROR, "second", 2)
        error = CompilationError(handler)
        assert str(error) == "line 1: LEX_ERROR: first"
        assert len(error.errors) == 2

    def test_empty_handler(self):
        assert str(CompilationError(ErrorHandler())) == "compilation failed"


class TestTokenPredicates:

    def test_str(self):
        assert str(Token(TokenKind.STRCONST, '"hi"', 4)) == "STRCONST '\"hi\"' (line 4)"

    @pytest.mark.parametrize("kind,spelling,keyword,literal", [
        (TokenKind.CLASS, "class", True, False),
        (TokenKind.VAR, "var", True, False),
        (TokenKind.BOOLEAN, "true", False, True),
        (TokenKind.INTCONST, "7", False, True),
        (TokenKind.STRCONST, '""', False, True),
        (TokenKind.IDENTIFIER, "x", False, False),
    ])
    def test_keyword_and_literal(self, kind, spelling, keyword, literal):
        token = Token(kind, spelling, 1)
        assert token.is_keyword() is keyword
        assert token.is_literal() is literal

    def test_is_operator(self):
        minus = Token(TokenKind.PLUSMINUS, "-", 1)
        assert minus.is_operator()
        assert minus.is_operator("-")
        assert not minus.is_operator("+")
        assert not Token(TokenKind.SEMICOLON, ";", 1).is_operator()
