"""
Bantam Token Definitions

Defines all token kinds and the Token class for lexical analysis.
"""

from enum import Enum, auto
from dataclasses import dataclass

import numpy as np


# Largest INTCONST (signed 32-bit)
INT_MAX = int(np.iinfo(np.int32).max)

# Longest legal string constant, surrounding quotes included
MAX_STRING_LENGTH = 5000


class TokenKind(Enum):
    """All token kinds in Bantam."""

    # Delimiters
    LCURLY = auto()        # {
    RCURLY = auto()        # }
    LPAREN = auto()        # (
    RPAREN = auto()        # )
    DOT = auto()           # .
    SEMICOLON = auto()     # ;
    COLON = auto()         # :
    COMMA = auto()         # ,

    # Operators
    ASSIGN = auto()        # =
    PLUSMINUS = auto()     # + -
    MULDIV = auto()        # * / %
    UNARYNOT = auto()      # !
    COMPARE = auto()       # < > <= >= == !=
    UNARYINCR = auto()     # ++
    UNARYDECR = auto()     # --
    BINARYLOGIC = auto()   # && ||

    # Literals
    IDENTIFIER = auto()
    INTCONST = auto()
    STRCONST = auto()
    BOOLEAN = auto()

    # Keywords
    CLASS = auto()
    EXTENDS = auto()
    IF = auto()
    ELSE = auto()
    WHILE = auto()
    FOR = auto()
    BREAK = auto()
    NEW = auto()
    CAST = auto()
    RETURN = auto()
    VAR = auto()

    # Special
    COMMENT = auto()
    ERROR = auto()
    EOF = auto()


# Keyword mapping, consulted after an identifier has been collected
KEYWORDS = {
    'class': TokenKind.CLASS,
    'extends': TokenKind.EXTENDS,
    'if': TokenKind.IF,
    'else': TokenKind.ELSE,
    'while': TokenKind.WHILE,
    'for': TokenKind.FOR,
    'break': TokenKind.BREAK,
    'new': TokenKind.NEW,
    'cast': TokenKind.CAST,
    'return': TokenKind.RETURN,
    'var': TokenKind.VAR,
    'true': TokenKind.BOOLEAN,
    'false': TokenKind.BOOLEAN,
}

# Single-character punctuators
PUNCTUATORS = {
    '{': TokenKind.LCURLY,
    '}': TokenKind.RCURLY,
    '(': TokenKind.LPAREN,
    ')': TokenKind.RPAREN,
    '.': TokenKind.DOT,
    ';': TokenKind.SEMICOLON,
    ':': TokenKind.COLON,
    ',': TokenKind.COMMA,
}

OPERATOR_KINDS = frozenset({
    TokenKind.ASSIGN, TokenKind.PLUSMINUS, TokenKind.MULDIV,
    TokenKind.UNARYNOT, TokenKind.COMPARE, TokenKind.UNARYINCR,
    TokenKind.UNARYDECR, TokenKind.BINARYLOGIC,
})


@dataclass
class Token:
    """Represents a single token from the source code."""

    kind: TokenKind
    spelling: str
    line_num: int

    def __str__(self) -> str:
        return f"{self.kind.name} '{self.spelling}' (line {self.line_num})"

    def __repr__(self) -> str:
        return f"Token({self.kind.name}, {self.spelling!r}, line={self.line_num})"

    def is_keyword(self) -> bool:
        """Check if this token is a reserved word (booleans excluded)."""
        return self.kind in KEYWORDS.values() and self.kind != TokenKind.BOOLEAN

    def is_literal(self) -> bool:
        """Check if this token is a constant."""
        return self.kind in (TokenKind.INTCONST, TokenKind.STRCONST, TokenKind.BOOLEAN)

    def is_operator(self, *spellings: str) -> bool:
        """
        Check if this token is an operator.

        Operator kinds are coarse (PLUSMINUS covers both '+' and '-'), so
        callers can narrow the check to particular spellings.
        """
        if self.kind not in OPERATOR_KINDS:
            return False
        return not spellings or self.spelling in spellings
