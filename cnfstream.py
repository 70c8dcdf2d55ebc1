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

# Streams for CNF normalization: exceptions, character cursor, and
# opening of plain, standard, and xz-compressed files

import io
import os
import sys
import subprocess

class NormalizeException(Exception):

    def __init__(self, value):
        self.value = value

    def __str__(self):
        return "Normalize Exception: " + str(self.value)

# Can't open, read, or write a stream
class IoException(NormalizeException):

    def __str__(self):
        return "IO Exception: " + str(self.value)

# Malformed header or body
class SyntaxException(NormalizeException):

    def __str__(self):
        return "Syntax Exception: " + str(self.value)

# Decimal number beyond the largest signed 32-bit integer
class OverflowException(NormalizeException):

    def __str__(self):
        return "Overflow Exception: " + str(self.value)


# Value of lookahead character at end of stream
EOF = ''

# Every byte maps to one character, so no input can fail to decode
encoding = 'latin-1'

xzProgram = "xz"
xzSuffix = ".xz"

def isStandard(path):
    return path is None or path == '-'

def isCompressed(path):
    return not isStandard(path) and path.endswith(xzSuffix)


# Single character lookahead over a text stream.
# Reads in fixed-size chunks, so memory use does not depend on the input size
class Cursor:
    file = None
    buffer = ""
    position = 0
    ch = EOF
    chunkSize = 64 * 1024

    def __init__(self, file, chunkSize = None):
        self.file = file
        if chunkSize is not None:
            self.chunkSize = chunkSize
        self.buffer = ""
        self.position = 0
        self.ch = EOF

    # Advance to next character.  Returns it and leaves it in self.ch
    def next(self):
        if self.position >= len(self.buffer):
            try:
                self.buffer = self.file.read(self.chunkSize)
            except OSError as ex:
                raise IoException("read error: %s" % str(ex))
            self.position = 0
            if len(self.buffer) == 0:
                self.ch = EOF
                return self.ch
        self.ch = self.buffer[self.position]
        self.position += 1
        return self.ch


# Common part of input and output streams.
# Optionally backed by an xz subprocess, which must be waited for on close
class Stream:
    name = ""
    file = None
    process = None
    # Standard streams are detached rather than closed
    standard = False

    def __enter__(self):
        return self

    def __exit__(self, excType, excValue, traceback):
        # Don't let a complaint from xz hide the first error
        self.close(check = excType is None)
        return False

    def release(self):
        if self.file is None:
            return
        file = self.file
        self.file = None
        if self.standard:
            if isinstance(file, io.TextIOWrapper):
                file.detach()
            else:
                file.flush()
        else:
            file.close()

    def finishProcess(self, check):
        if self.process is None:
            return
        code = self.process.wait()
        self.process = None
        if check and code != 0:
            raise IoException("'%s' failed with exit code %d" % (xzProgram, code))

    def close(self, check = True):
        released = False
        try:
            self.release()
            released = True
        except OSError as ex:
            if check:
                raise IoException("can not close '%s': %s" % (self.name, str(ex)))
        finally:
            # Close failure is reported in preference to the exit code
            self.finishProcess(check and released)


class InputStream(Stream):

    def __init__(self, path = None):
        self.process = None
        self.standard = isStandard(path)
        if self.standard:
            self.name = "<stdin>"
            buffer = getattr(sys.stdin, 'buffer', None)
            if buffer is None:
                self.file = sys.stdin
            else:
                self.file = io.TextIOWrapper(buffer, encoding = encoding, newline = '')
            return
        self.name = path
        if isCompressed(path):
            if not os.access(path, os.R_OK) or os.path.isdir(path):
                raise IoException("can not read input file '%s'" % path)
            try:
                self.process = subprocess.Popen([xzProgram, "-c", "-d", path], stdout = subprocess.PIPE)
            except OSError:
                raise IoException("can not read input file '%s'" % path)
            self.file = io.TextIOWrapper(self.process.stdout, encoding = encoding, newline = '')
        else:
            try:
                self.file = open(path, 'r', encoding = encoding, newline = '')
            except OSError:
                raise IoException("can not read input file '%s'" % path)


class OutputStream(Stream):
    # File receiving output of xz
    target = None

    def __init__(self, path = None):
        self.process = None
        self.target = None
        self.standard = isStandard(path)
        if self.standard:
            self.name = "<stdout>"
            buffer = getattr(sys.stdout, 'buffer', None)
            if buffer is None:
                self.file = sys.stdout
            else:
                sys.stdout.flush()
                self.file = io.TextIOWrapper(buffer, encoding = encoding, newline = '')
            return
        self.name = path
        try:
            if isCompressed(path):
                self.target = open(path, 'wb')
            else:
                self.file = open(path, 'w', encoding = encoding, newline = '')
        except OSError:
            raise IoException("can not write output file '%s'" % path)
        if self.target is not None:
            try:
                self.process = subprocess.Popen([xzProgram, "-c"], stdin = subprocess.PIPE, stdout = self.target)
            except OSError:
                self.target.close()
                self.target = None
                raise IoException("can not write output file '%s'" % path)
            self.file = io.TextIOWrapper(self.process.stdin, encoding = encoding, newline = '')

    def close(self, check = True):
        try:
            Stream.close(self, check)
        finally:
            if self.target is not None:
                self.target.close()
                self.target = None


def openInput(path = None):
    return InputStream(path)

def openOutput(path = None):
    return OutputStream(path)
