"""
Bantam Compiler Front-End

A Python front-end for the Bantam language: a scanner turning source text
into tokens and a recursive descent parser turning tokens into an AST.
"""

import io

from .tokens import Token, TokenKind
from .source import SourceFile
from .errors import BantamError, CompilationError, Diagnostic, ErrorHandler, ErrorKind
from .scanner import Scanner
from .ast import *
from .parser import Parser
from .printer import ASTPrinter, SourcePrinter

__version__ = "0.1.0"
__all__ = [
    "Token",
    "TokenKind",
    "SourceFile",
    "Scanner",
    "Parser",
    "ASTVisitor",
    "ASTPrinter",
    "SourcePrinter",
    "BantamError",
    "CompilationError",
    "Diagnostic",
    "ErrorHandler",
    "ErrorKind",
    "parse_source",
    "parse_file",
]


def parse_source(source: str, error_handler: ErrorHandler = None) -> Program:
    """
    Parse Bantam source code.

    Args:
        source: Bantam source code string
        error_handler: Collector for diagnostics; a fresh one by default

    Returns:
        Program AST node

    Raises:
        CompilationError: If the source has lexical or parse errors
    """
    return Parser(error_handler).parse(io.StringIO(source))


def parse_file(filepath: str, error_handler: ErrorHandler = None) -> Program:
    """
    Parse a Bantam source file.

    Args:
        filepath: Path to the source file

    Returns:
        Program AST node
    """
    return Parser(error_handler).parse(filepath)
