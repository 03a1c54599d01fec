"""
Bantam Scanner

Breaks the characters of a source file into a stream of tokens, one token
per call to ``scan``.
"""

import logging
import string
from typing import IO, List, Union

from .tokens import (
    Token, TokenKind, KEYWORDS, PUNCTUATORS, INT_MAX, MAX_STRING_LENGTH,
)
from .source import SourceFile, EOF, EOL, CR
from .errors import ErrorHandler, ErrorKind


logger = logging.getLogger(__name__)

# Sets rather than strings: EOF is the empty string, which every string contains
LETTERS = frozenset(string.ascii_letters)
DIGITS = frozenset(string.digits)
IDENTIFIER_CHARS = LETTERS | DIGITS | {'_'}
WHITESPACE = frozenset({' ', '\t', EOL, CR})
ESCAPE_CHARS = frozenset({'n', 't', 'f', '"', '\\'})
MAX_INT_DIGITS = str(INT_MAX)


class Scanner:
    """Lexical analyzer for Bantam source code."""

    def __init__(self, source: Union[str, IO[str], SourceFile], error_handler: ErrorHandler):
        """
        Initialize the scanner.

        Args:
            source: Filename, open text stream or SourceFile to read from
            error_handler: Collector for lexical errors
        """
        if isinstance(source, SourceFile):
            self.source_file = source
            self._owns_source = False
        else:
            self.source_file = SourceFile(source)
            self._owns_source = True
        self.filename = self.source_file.filename
        self.error_handler = error_handler
        # One character of lookahead; a blank is skipped like any whitespace
        self.current_char = ' '

    def close(self) -> None:
        """Close the source file if this scanner opened it."""
        if self._owns_source:
            self.source_file.close()

    def __enter__(self) -> 'Scanner':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def scan(self) -> Token:
        """
        Scan the next token.

        Whitespace between tokens is discarded; comments come back as
        COMMENT tokens. Once the input is exhausted every call returns an
        EOF token with an empty spelling.

        Returns:
            The next token
        """
        self.skip_whitespace()

        line = self.line_num()
        c = self.current_char

        if c == EOF:
            return Token(TokenKind.EOF, "", line)
        if c in LETTERS:
            return self.identifier(line)
        if c in DIGITS:
            return self.integer(line)
        if c == '"':
            return self.string(line)
        return self.operator(line)

    def tokenize(self) -> List[Token]:
        """
        Scan the remaining input.

        Returns:
            List of tokens ending with the EOF token
        """
        tokens = []
        while True:
            token = self.scan()
            tokens.append(token)
            if token.kind == TokenKind.EOF:
                return tokens

    def line_num(self) -> int:
        """
        Return the line of the current character.

        The source file has already moved to the next line when it hands
        out a newline, so a newline is reported on the line it ends.
        """
        line = self.source_file.get_current_line_number()
        return line - 1 if self.current_char == EOL else line

    def advance(self) -> str:
        """Consume the current character and return it."""
        c = self.current_char
        self.current_char = self.source_file.get_next_char()
        return c

    def skip_whitespace(self) -> None:
        while self.current_char in WHITESPACE:
            self.advance()

    def lex_error(self, message: str, spelling: str, line: int) -> Token:
        """Register a lexical error and return an ERROR token for the offending text."""
        self.error_handler.register(ErrorKind.LEX_ERROR, message, line, self.filename)
        logger.debug("%s:%d: %s %r", self.filename, line, message, spelling)
        return Token(TokenKind.ERROR, spelling, line)

    def identifier(self, line: int) -> Token:
        """Scan an identifier, keyword or boolean constant."""
        chars = []
        while self.current_char in IDENTIFIER_CHARS:
            chars.append(self.advance())

        spelling = ''.join(chars)
        return Token(KEYWORDS.get(spelling, TokenKind.IDENTIFIER), spelling, line)

    def integer(self, line: int) -> Token:
        """Scan an integer constant."""
        chars = []
        while self.current_char in DIGITS:
            chars.append(self.advance())

        spelling = ''.join(chars)
        # Compare lengths first so huge literals are never converted
        digits = spelling.lstrip('0')
        if len(digits) > len(MAX_INT_DIGITS) or (
                len(digits) == len(MAX_INT_DIGITS) and digits > MAX_INT_DIGITS):
            return self.lex_error("Integer too large", spelling, line)
        return Token(TokenKind.INTCONST, spelling, line)

    def string(self, line: int) -> Token:
        """Scan a string constant; the spelling keeps the surrounding quotes."""
        chars = [self.advance()]
        illegal_escape = False
        multiline = False

        while self.current_char != '"':
            if self.current_char == EOF:
                return self.lex_error("unterminated string", ''.join(chars), line)

            if self.current_char == '\\':
                chars.append(self.advance())
                if self.current_char == EOF:
                    continue
                if self.current_char not in ESCAPE_CHARS:
                    illegal_escape = True

            if self.current_char == EOL:
                multiline = True
            chars.append(self.advance())

        chars.append(self.advance())
        spelling = ''.join(chars)

        if illegal_escape:
            return self.lex_error("illegal escape character", spelling, line)
        if len(spelling) > MAX_STRING_LENGTH:
            return self.lex_error(f"string larger than {MAX_STRING_LENGTH} chars", spelling, line)
        if multiline:
            return self.lex_error("spanning multiple lines", spelling, line)
        return Token(TokenKind.STRCONST, spelling, line)

    def line_comment(self, line: int) -> Token:
        """Scan a // comment up to, not including, the end of the line."""
        chars = ['/', self.advance()]
        while self.current_char != EOL and self.current_char != EOF:
            chars.append(self.advance())
        return Token(TokenKind.COMMENT, ''.join(chars), line)

    def block_comment(self, line: int) -> Token:
        """Scan a /* ... */ comment, which may span lines."""
        chars = ['/', self.advance()]
        previous = ''

        while True:
            if self.current_char == EOF:
                return self.lex_error("unterminated block comment", ''.join(chars), line)
            c = self.advance()
            chars.append(c)
            if previous == '*' and c == '/':
                return Token(TokenKind.COMMENT, ''.join(chars), line)
            previous = c

    def operator(self, line: int) -> Token:
        """Scan an operator, punctuator or comment."""
        c = self.advance()

        if c in PUNCTUATORS:
            return Token(PUNCTUATORS[c], c, line)

        if c == '+' or c == '-':
            if self.current_char == c:
                self.advance()
                kind = TokenKind.UNARYINCR if c == '+' else TokenKind.UNARYDECR
                return Token(kind, c * 2, line)
            return Token(TokenKind.PLUSMINUS, c, line)

        if c == '*' or c == '%':
            return Token(TokenKind.MULDIV, c, line)

        if c == '/':
            if self.current_char == '/':
                return self.line_comment(line)
            if self.current_char == '*':
                return self.block_comment(line)
            return Token(TokenKind.MULDIV, c, line)

        if c == '=':
            if self.current_char == '=':
                self.advance()
                return Token(TokenKind.COMPARE, '==', line)
            return Token(TokenKind.ASSIGN, c, line)

        if c == '<' or c == '>' or c == '!':
            if self.current_char == '=':
                self.advance()
                return Token(TokenKind.COMPARE, c + '=', line)
            if c == '!':
                return Token(TokenKind.UNARYNOT, c, line)
            return Token(TokenKind.COMPARE, c, line)

        if c == '&' or c == '|':
            if self.current_char == c:
                self.advance()
                return Token(TokenKind.BINARYLOGIC, c * 2, line)
            return self.lex_error("bitwise logic not supported", c, line)

        return self.lex_error("illegal character", c, line)
