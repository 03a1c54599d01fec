"""
Bantam Compiler Errors

Defines the diagnostic collector shared by the scanner and the parser,
and the exception classes raised by the front-end.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional


logger = logging.getLogger(__name__)


class ErrorKind(Enum):
    """Phase that produced a diagnostic."""

    LEX_ERROR = "LEX_ERROR"
    PARSE_ERROR = "PARSE_ERROR"
    SEMANT_ERROR = "SEMANT_ERROR"


@dataclass
class Diagnostic:
    """A single error collected during compilation."""

    kind: ErrorKind
    message: str
    line_num: Optional[int] = None
    filename: Optional[str] = None

    def __str__(self) -> str:
        """Format the diagnostic with its location information."""
        parts = []

        if self.filename:
            parts.append(self.filename)

        if self.line_num is not None:
            if parts:
                parts.append(str(self.line_num))
            else:
                parts.append(f"line {self.line_num}")

        if parts:
            return f"{':'.join(parts)}: {self.kind.value}: {self.message}"
        return f"{self.kind.value}: {self.message}"


class ErrorHandler:
    """Append-only collector of diagnostics for one compilation run."""

    def __init__(self):
        self._errors: List[Diagnostic] = []

    def register(self, kind: ErrorKind, message: str,
                 line_num: Optional[int] = None,
                 filename: Optional[str] = None) -> Diagnostic:
        """
        Record a diagnostic.

        Args:
            kind: Phase reporting the error
            message: Human-readable description
            line_num: Source line of the offending construct
            filename: Source file of the offending construct

        Returns:
            The recorded diagnostic
        """
        diagnostic = Diagnostic(kind, message, line_num, filename)
        self._errors.append(diagnostic)
        logger.debug("registered %s", diagnostic)
        return diagnostic

    def errors_found(self) -> bool:
        """Check if any diagnostic has been recorded."""
        return bool(self._errors)

    def get_error_list(self) -> List[Diagnostic]:
        """Return the recorded diagnostics in registration order."""
        return list(self._errors)

    def clear(self) -> None:
        self._errors.clear()

    def __len__(self) -> int:
        return len(self._errors)


class BantamError(Exception):
    """Base exception for all Bantam front-end errors."""
    pass


class CompilationError(BantamError):
    """
    Raised to abort compilation.

    Carries the ErrorHandler so the driver can render every diagnostic
    collected so far.
    """

    def __init__(self, error_handler: ErrorHandler):
        self.error_handler = error_handler
        errors = error_handler.get_error_list()
        super().__init__(str(errors[0]) if errors else "compilation failed")

    @property
    def errors(self) -> List[Diagnostic]:
        return self.error_handler.get_error_list()
