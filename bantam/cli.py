"""
Command-line drivers for the Bantam front-end.

Usage:
  bantam-scanner FILE [FILE ...]
  bantam-parser [--source] FILE [FILE ...]

The scanner driver lists every token of each file followed by an error
count and always exits with 0. The parser driver prints the AST of each
file (or canonical source with --source), reports diagnostics on stderr
and exits with 1 if any file failed to parse.
"""

import argparse
import logging
import sys
from typing import List, Optional

from .errors import CompilationError, ErrorHandler
from .parser import Parser
from .printer import ASTPrinter, SourcePrinter
from .scanner import Scanner
from .tokens import TokenKind


logger = logging.getLogger(__name__)


def _configure_logging(verbose: bool) -> None:
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(name)s: %(message)s")


def scan_file(path: str) -> None:
    """Print the tokens of one file followed by its error count."""
    error_handler = ErrorHandler()
    print(path)

    with Scanner(path, error_handler) as scanner:
        token = scanner.scan()
        while token.kind != TokenKind.EOF:
            print(token)
            token = scanner.scan()

    if error_handler.errors_found():
        print(f"{len(error_handler)} errors found")
    else:
        print("No errors found")


def scanner_main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="bantam-scanner", description="List the tokens of Bantam source files.")
    ap.add_argument("paths", nargs="+", help="Bantam source files to scan")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debugging information")
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    for path in args.paths:
        try:
            scan_file(path)
        except (OSError, UnicodeDecodeError) as e:
            print(f"{path}: {e}")

    return 0


def parser_main(argv: Optional[List[str]] = None) -> int:
    ap = argparse.ArgumentParser(prog="bantam-parser", description="Parse Bantam source files and print their AST.")
    ap.add_argument("paths", nargs="+", help="Bantam source files to parse")
    ap.add_argument("--source", action="store_true", help="Print canonical source instead of the tree")
    ap.add_argument("-v", "--verbose", action="store_true", help="Log debugging information")
    args = ap.parse_args(argv)
    _configure_logging(args.verbose)

    status = 0
    for path in args.paths:
        error_handler = ErrorHandler()
        try:
            program = Parser(error_handler).parse(path)
        except CompilationError as e:
            for diagnostic in e.errors:
                print(diagnostic, file=sys.stderr)
            print(f"{len(e.errors)} errors found", file=sys.stderr)
            status = 1
            continue
        except (OSError, UnicodeDecodeError) as e:
            print(f"{path}: {e}", file=sys.stderr)
            status = 1
            continue

        printer = SourcePrinter() if args.source else ASTPrinter()
        print(printer.print(program))

    logger.debug("parser exiting with status %d", status)
    return status


if __name__ == "__main__":
    raise SystemExit(parser_main())
