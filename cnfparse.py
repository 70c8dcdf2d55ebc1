#####################################################################################
# Copyright (c) 2022 Randal E. Bryant, Carnegie Mellon University
#
# Permission is hereby granted, free of charge, to any person obtaining a copy of this software and
# associated documentation files (the "Software"), to deal in the Software without restriction,
# including without limitation the rights to use, copy, modify, merge, publish, distribute,
# sublicense, and/or sell copies of the Software, and to permit persons to whom the Software is
# furnished to do so, subject to the following conditions:
#
# The above copyright notice and this permission notice shall be included in all copies or
# substantial portions of the Software.
#
# THE SOFTWARE IS PROVIDED "AS IS", WITHOUT WARRANTY OF ANY KIND, EXPRESS OR IMPLIED, INCLUDING BUT
# NOT LIMITED TO THE WARRANTIES OF MERCHANTABILITY, FITNESS FOR A PARTICULAR PURPOSE AND
# NONINFRINGEMENT. IN NO EVENT SHALL THE AUTHORS OR COPYRIGHT HOLDERS BE LIABLE FOR ANY CLAIM,
# DAMAGES OR OTHER LIABILITY, WHETHER IN AN ACTION OF CONTRACT, TORT OR OTHERWISE, ARISING FROM, OUT
# OF OR IN CONNECTION WITH THE SOFTWARE OR THE USE OR OTHER DEALINGS IN THE SOFTWARE.
########################################################################################

# Streaming parser for DIMACS CNF.
# Works one character at a time from a cnfstream.Cursor and hands each
# literal and clause terminator to a writer as soon as it is recognized.

from cnfstream import EOF, SyntaxException, OverflowException

######################################################################################
# Syntax
######################################################################################
#   c ...                   -- Comment, up to end of line.  Allowed anywhere a token may start
#   p cnf VARS CLAUSES      -- Header.  Single spaces, optional trailing white space
#   [-]VAR ... 0            -- Clause.  Literals separated by white space
######################################################################################

INT_MAX = 2**31 - 1

horizontalSpace = (' ', '\t', '\r')
whiteSpace = (' ', '\t', '\r', '\n')

def isDigit(ch):
    return ch != EOF and '0' <= ch <= '9'

# Accumulate decimal number.  Cursor must be on first digit.
# Leaves cursor on first non-digit
def scanInteger(cursor, what = "number"):
    value = ord(cursor.ch) - ord('0')
    while isDigit(cursor.next()):
        digit = ord(cursor.ch) - ord('0')
        if INT_MAX // 10 < value:
            raise OverflowException("%s too large" % what)
        value *= 10
        if INT_MAX - digit < value:
            raise OverflowException("%s too large" % what)
        value += digit
    return value

# Consume rest of comment line.  Cursor on 'c' at start.
# Returns False if stream ended before the newline
def skipComment(cursor):
    while True:
        ch = cursor.next()
        if ch == '\n':
            return True
        if ch == EOF:
            return False


class Header:
    variables = 0
    clauses = 0

    def __init__(self, variables, clauses):
        self.variables = variables
        self.clauses = clauses

    def __eq__(self, other):
        return isinstance(other, Header) and (self.variables, self.clauses) == (other.variables, other.clauses)

    def __str__(self):
        return "p cnf %d %d" % (self.variables, self.clauses)


# Read comments and 'p cnf' line.
# Lenient mode also skips lines holding only white space.
# Leaves cursor on the header's newline
def parseHeader(cursor, strict = False):
    ch = cursor.next()
    while True:
        if ch == 'c':
            if not skipComment(cursor):
                raise SyntaxException("end-of-file in comment")
            ch = cursor.next()
        elif not strict and ch in whiteSpace:
            while ch in horizontalSpace:
                ch = cursor.next()
            if ch != '\n':
                raise SyntaxException("expected header")
            ch = cursor.next()
        else:
            break
    if ch != 'p':
        raise SyntaxException("expected header")
    for expected in " cnf ":
        if cursor.next() != expected:
            raise SyntaxException("invalid header")
    if not isDigit(cursor.next()):
        raise SyntaxException("invalid number of variables")
    variables = scanInteger(cursor, "number of variables")
    if cursor.ch != ' ':
        raise SyntaxException("expected space after variables")
    if not isDigit(cursor.next()):
        raise SyntaxException("invalid number of clauses")
    clauses = scanInteger(cursor, "number of clauses")
    ch = cursor.ch
    while ch in horizontalSpace:
        ch = cursor.next()
    if ch != '\n':
        raise SyntaxException("expected newline after header")
    return Header(variables, clauses)


# Clause section.  Checks literals against header and counts terminators
class BodyParser:
    cursor = None
    header = None
    writer = None
    strict = False
    parsedClauses = 0
    literalCount = 0
    # Clause has at least one literal but no terminator yet
    pending = False

    def __init__(self, cursor, header, writer, strict = False):
        self.cursor = cursor
        self.header = header
        self.writer = writer
        self.strict = strict
        self.parsedClauses = 0
        self.literalCount = 0
        self.pending = False

    def complete(self):
        return not self.pending and self.parsedClauses == self.header.clauses

    def finish(self):
        if self.pending:
            raise SyntaxException("missing clause terminator")
        if self.parsedClauses < self.header.clauses:
            raise SyntaxException("clause missing")

    # Cursor on first character of literal
    def parseLiteral(self):
        cursor = self.cursor
        sign = 1
        ch = cursor.ch
        if ch == '-':
            sign = -1
            ch = cursor.next()
        if not isDigit(ch):
            raise SyntaxException("invalid literal")
        magnitude = scanInteger(cursor, "literal")
        if magnitude > self.header.variables:
            raise SyntaxException("literal exceeds declared variable count")
        ch = cursor.ch
        if ch != EOF and ch != 'c' and ch not in whiteSpace:
            raise SyntaxException("expected separator after literal")
        if magnitude == 0:
            if self.parsedClauses == self.header.clauses:
                raise SyntaxException("too many clauses")
            self.parsedClauses += 1
            self.pending = False
            self.writer.terminator()
        else:
            self.literalCount += 1
            self.pending = True
            self.writer.literal(sign * magnitude)

    # Process remainder of stream
    def parse(self):
        cursor = self.cursor
        ch = cursor.next()
        while True:
            if ch == EOF:
                self.finish()
                return self
            if ch == 'c':
                if not skipComment(cursor):
                    # Trailing comment without newline is harmless once formula is done
                    if self.strict or not self.complete():
                        raise SyntaxException("end-of-file in comment")
                    return self
                ch = cursor.next()
            elif ch in whiteSpace:
                ch = cursor.next()
            else:
                self.parseLiteral()
                # Lookahead is separator, comment start, or EOF
                ch = cursor.ch


def parseBody(cursor, header, writer, strict = False):
    return BodyParser(cursor, header, writer, strict).parse()
