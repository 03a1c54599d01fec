"""
Bantam Source Files

Buffered character reader feeding the scanner one character at a time.
"""

import os
from typing import IO, Union


# Returned by get_next_char once the input is exhausted
EOF = ""
EOL = "\n"
CR = "\r"


class SourceFile:
    """
    Character source for the scanner.

    Wraps either a filename (opened here and closed by ``close``) or an
    already-open text stream (left open for its owner). CR, LF and CR+LF
    are all returned as a single EOL character.

    The line counter advances as soon as a newline is returned, so while
    the newline itself is the most recent character the reported line is
    already the following one.
    """

    BUFFER_SIZE = 4096

    def __init__(self, source: Union[str, os.PathLike, IO[str]], encoding: str = "utf-8"):
        """
        Initialize the source file.

        Args:
            source: Path of the file to read, or an open text stream
            encoding: Encoding used when opening a path

        Raises:
            OSError: If the file cannot be opened
        """
        if isinstance(source, (str, os.PathLike)):
            self.filename = os.fspath(source)
            # newline='' keeps CR visible so that it can be normalized here
            self._reader = open(self.filename, "r", encoding=encoding, newline="")
            self._owns_reader = True
        else:
            self.filename = str(getattr(source, "name", "<stream>"))
            self._reader = source
            self._owns_reader = False

        self._buffer = ""
        self._pos = 0
        self._exhausted = False
        self._line_num = 1

    def get_next_char(self) -> str:
        """
        Return the next character of the input, or EOF once it is exhausted.

        Raises:
            OSError: If the underlying stream fails to read
        """
        c = self._read()

        if c == CR:
            if self._peek() == EOL:
                self._read()
            c = EOL

        if c == EOL:
            self._line_num += 1

        return c

    def get_current_line_number(self) -> int:
        """Return the current (1-based) line number."""
        return self._line_num

    def close(self) -> None:
        """Release the underlying file if this object opened it."""
        if self._owns_reader and not self._reader.closed:
            self._reader.close()

    def __enter__(self) -> 'SourceFile':
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.close()

    def _fill(self) -> bool:
        """Refill the buffer when it is used up. Returns False at end of input."""
        if self._pos < len(self._buffer):
            return True
        if self._exhausted:
            return False

        chunk = self._reader.read(self.BUFFER_SIZE)
        if not chunk:
            self._exhausted = True
            return False

        self._buffer = chunk
        self._pos = 0
        return True

    def _read(self) -> str:
        if not self._fill():
            return EOF
        c = self._buffer[self._pos]
        self._pos += 1
        return c

    def _peek(self) -> str:
        if not self._fill():
            return EOF
        return self._buffer[self._pos]
