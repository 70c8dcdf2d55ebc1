"""
Tests for the integer scanner, header parser, and body parser.

Verifies:
  1. Scanner stops on first non-digit and accepts INT_MAX exactly.
  2. Scanner rejects INT_MAX + 1 and longer numbers with an overflow.
  3. Header parsing after comments, with trailing white space and CR.
  4. Header syntax errors, including blank lines in strict mode.
  5. Body events arrive in order, with literal bounds and clause counts checked.
  6. End-of-file inside comments in lenient and strict modes.
"""

import io

import pytest

import cnfstream
import cnfparse
from cnfstream import Cursor, SyntaxException, OverflowException


class RecordingWriter:
    def __init__(self):
        self.events = []

    def literal(self, lit):
        self.events.append(lit)

    def terminator(self):
        self.events.append(0)


def cursorOn(text, chunkSize = None):
    cursor = Cursor(io.StringIO(text), chunkSize)
    cursor.next()
    return cursor

def parse(text, strict = False):
    cursor = Cursor(io.StringIO(text))
    header = cnfparse.parseHeader(cursor, strict)
    writer = RecordingWriter()
    parser = cnfparse.parseBody(cursor, header, writer, strict)
    return header, parser, writer.events

def syntaxMessage(text, strict = False):
    with pytest.raises(SyntaxException) as info:
        parse(text, strict)
    return info.value.value


def test_scan_integer_stops_on_non_digit():
    cursor = cursorOn("1234 5")
    assert cnfparse.scanInteger(cursor) == 1234
    assert cursor.ch == ' '

def test_scan_integer_at_end_of_stream():
    cursor = cursorOn("007")
    assert cnfparse.scanInteger(cursor) == 7
    assert cursor.ch == cnfstream.EOF

def test_scan_integer_across_chunks():
    cursor = cursorOn("98765x", chunkSize = 2)
    assert cnfparse.scanInteger(cursor) == 98765
    assert cursor.ch == 'x'

def test_scan_integer_max():
    cursor = cursorOn(str(cnfparse.INT_MAX) + "\n")
    assert cnfparse.scanInteger(cursor) == 2147483647

def test_scan_integer_overflow():
    for text in [str(cnfparse.INT_MAX + 1), "2147483650", "99999999999", "21474836470"]:
        cursor = cursorOn(text)
        with pytest.raises(OverflowException) as info:
            cnfparse.scanInteger(cursor, "literal")
        assert info.value.value == "literal too large"


def test_header_after_comments():
    cursor = Cursor(io.StringIO("c first\nc\nc second line\np cnf 12 34\n1 0\n"))
    header = cnfparse.parseHeader(cursor)
    assert header == cnfparse.Header(12, 34)
    assert cursor.ch == '\n'
    assert cursor.next() == '1'

def test_header_trailing_white_space():
    for text in ["p cnf 3 4 \n", "p cnf 3 4\t \t\n", "p cnf 3 4\r\n", "p cnf 3 4 \r\n"]:
        header = cnfparse.parseHeader(Cursor(io.StringIO(text)))
        assert (header.variables, header.clauses) == (3, 4)
        assert str(header) == "p cnf 3 4"

def test_header_blank_lines_lenient():
    header = cnfparse.parseHeader(Cursor(io.StringIO("\n  \t\nc x\n\r\np cnf 1 1\n")))
    assert header == cnfparse.Header(1, 1)

def test_header_blank_lines_strict():
    for text in ["\np cnf 1 1\n", "  \np cnf 1 1\n", "c x\n\np cnf 1 1\n"]:
        with pytest.raises(SyntaxException) as info:
            cnfparse.parseHeader(Cursor(io.StringIO(text)), strict = True)
        assert info.value.value == "expected header"

@pytest.mark.parametrize("text, message", [
    ("", "expected header"),
    ("q cnf 1 1\n", "expected header"),
    ("  p cnf 1 1\n", "expected header"),
    ("c unterminated", "end-of-file in comment"),
    ("p cnf", "invalid header"),
    ("p  cnf 1 1\n", "invalid header"),
    ("p CNF 1 1\n", "invalid header"),
    ("p cnf x 1\n", "invalid number of variables"),
    ("p cnf -1 1\n", "invalid number of variables"),
    ("p cnf 1  1\n", "invalid number of clauses"),
    ("p cnf 1\t1\n", "expected space after variables"),
    ("p cnf 1 \n", "invalid number of clauses"),
    ("p cnf 1 1", "expected newline after header"),
    ("p cnf 1 1 x\n", "expected newline after header"),
    ("p cnf 1 1x\n", "expected newline after header"),
])
def test_header_errors(text, message):
    with pytest.raises(SyntaxException) as info:
        cnfparse.parseHeader(Cursor(io.StringIO(text)))
    assert info.value.value == message

def test_header_overflow():
    with pytest.raises(OverflowException) as info:
        cnfparse.parseHeader(Cursor(io.StringIO("p cnf 2147483648 1\n")))
    assert info.value.value == "number of variables too large"
    with pytest.raises(OverflowException) as info:
        cnfparse.parseHeader(Cursor(io.StringIO("p cnf 1 2147483648\n")))
    assert info.value.value == "number of clauses too large"


def test_body_events():
    header, parser, events = parse("p cnf 3 2\n1 -2 0\n  3\n-1\t2 0\n")
    assert events == [1, -2, 0, 3, -1, 2, 0]
    assert parser.parsedClauses == 2
    assert parser.literalCount == 5
    assert parser.complete()

def test_body_comments_between_literals():
    header, parser, events = parse("p cnf 3 2\n1 c inside\n-2 0\nc between\n3c glued\n0\n")
    assert events == [1, -2, 0, 3, 0]

def test_body_carriage_returns():
    header, parser, events = parse("p cnf 2 2\r\n1 2 0\r\n-1\r-2\r0\r\n")
    assert events == [1, 2, 0, -1, -2, 0]

def test_body_negative_zero_terminates():
    header, parser, events = parse("p cnf 2 1\n1 -0\n")
    assert events == [1, 0]

def test_body_empty_clause_and_empty_formula():
    assert parse("p cnf 0 1\n0\n")[2] == [0]
    assert parse("p cnf 0 0\n")[2] == []
    assert parse("p cnf 5 0\nc nothing\n")[2] == []

def test_body_literal_at_variable_bound():
    header, parser, events = parse("p cnf 2147483647 1\n2147483647 -2147483647 0\n")
    assert events == [2147483647, -2147483647, 0]

def test_body_literal_overflow():
    with pytest.raises(OverflowException) as info:
        parse("p cnf 2147483647 1\n2147483648 0\n")
    assert info.value.value == "literal too large"

@pytest.mark.parametrize("text, message", [
    ("p cnf 1 1\n2 0\n", "literal exceeds declared variable count"),
    ("p cnf 1 1\n-2 0\n", "literal exceeds declared variable count"),
    ("p cnf 2 1\n1 2", "missing clause terminator"),
    ("p cnf 2 2\n1 2 0\n", "clause missing"),
    ("p cnf 1 2\n1 0\n", "clause missing"),
    ("p cnf 2 1\n1 0\n2 0\n", "too many clauses"),
    ("p cnf 2 0\n0\n", "too many clauses"),
    ("p cnf 2 1\nx 0\n", "invalid literal"),
    ("p cnf 2 1\n- 1 0\n", "invalid literal"),
    ("p cnf 2 1\n--1 0\n", "invalid literal"),
    ("p cnf 2 1\n+1 0\n", "invalid literal"),
    ("p cnf 2 1\n1-2 0\n", "expected separator after literal"),
    ("p cnf 2 1\n1 0x\n", "expected separator after literal"),
    ("p cnf 2 1\n1 2 c open clause", "end-of-file in comment"),
    ("p cnf 2 2\n1 2 0\nc missing clause", "end-of-file in comment"),
])
def test_body_errors(text, message):
    assert syntaxMessage(text) == message

def test_trailing_comment_lenient():
    header, parser, events = parse("p cnf 2 1\n1 2 0\nc done")
    assert events == [1, 2, 0]
    header, parser, events = parse("p cnf 2 1\n1 2 0 c done")
    assert events == [1, 2, 0]

def test_trailing_comment_strict():
    assert syntaxMessage("p cnf 2 1\n1 2 0\nc done", strict = True) == "end-of-file in comment"
    # Terminated comment is fine in either mode
    header, parser, events = parse("p cnf 2 1\n1 2 0\nc done\n", strict = True)
    assert events == [1, 2, 0]

def test_exception_strings():
    ex = SyntaxException("invalid literal")
    assert str(ex) == "Syntax Exception: invalid literal"
    assert isinstance(ex, cnfstream.NormalizeException)
    assert str(OverflowException("literal too large")) == "Overflow Exception: literal too large"
