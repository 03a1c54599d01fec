"""
SourceFile Tests

Character reading, newline normalization and line counting.
"""

import io

import pytest
from bantam.source import SourceFile, EOF, EOL


def read_all(text):
    """Return (char, line) pairs up to and including the first EOF."""
    source = SourceFile(io.StringIO(text))
    pairs = []
    while True:
        c = source.get_next_char()
        pairs.append((c, source.get_current_line_number()))
        if c == EOF:
            return pairs


class TestSourceFileReading:

    def test_empty_input(self):
        source = SourceFile(io.StringIO(""))
        assert source.get_next_char() == EOF
        assert source.get_current_line_number() == 1

    def test_characters_in_order(self):
        chars = [c for c, _ in read_all("ab c")]
        assert chars == ["a", "b", " ", "c", EOF]

    def test_eof_is_sticky(self):
        source = SourceFile(io.StringIO("x\n"))
        source.get_next_char()
        source.get_next_char()
        for _ in range(3):
            assert source.get_next_char() == EOF
            assert source.get_current_line_number() == 2

    def test_reads_across_buffer_boundaries(self):
        text = "a" * (SourceFile.BUFFER_SIZE * 2 + 7)
        chars = [c for c, _ in read_all(text)]
        assert "".join(chars[:-1]) == text


class TestSourceFileNewlines:

    @pytest.mark.parametrize("newline", ["\n", "\r", "\r\n"])
    def test_newline_forms_count_once(self, newline):
        pairs = read_all(f"a{newline}b")
        assert pairs == [("a", 1), (EOL, 2), ("b", 2), (EOF, 2)]

    def test_crlf_split_across_buffers(self):
        text = "a" * (SourceFile.BUFFER_SIZE - 1) + "\r\nb"
        pairs = read_all(text)
        assert pairs[-3:] == [(EOL, 2), ("b", 2), (EOF, 2)]

    def test_mixed_newlines(self):
        pairs = read_all("1\r\n2\n3\r4")
        lines = {c: line for c, line in pairs if c not in (EOL, EOF)}
        assert lines == {"1": 1, "2": 2, "3": 3, "4": 4}

    def test_blank_lines(self):
        pairs = read_all("\n\n\nx")
        assert pairs[-2] == ("x", 4)


class TestSourceFileResources:

    def test_opens_and_closes_path(self, tmp_path):
        path = tmp_path / "A.btm"
        path.write_text("class", encoding="utf-8")
        with SourceFile(str(path)) as source:
            assert source.filename == str(path)
            assert source.get_next_char() == "c"
        assert source._reader.closed

    def test_stream_is_left_open(self):
        stream = io.StringIO("x")
        with SourceFile(stream):
            pass
        assert not stream.closed

    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(OSError):
            SourceFile(str(tmp_path / "missing.btm"))

    def test_read_errors_propagate(self):
        class BrokenStream:
            def read(self, size):
                raise OSError("disk on fire")

        source = SourceFile(BrokenStream())
        with pytest.raises(OSError):
            source.get_next_char()
