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

# Rendering of normalized CNF.
# Writers receive events from the parser: header, literal, and terminator

from cnfstream import IoException

# Generic writer
class Writer:
    outfile = None
    clauseCount = 0

    def __init__(self, outfile):
        self.outfile = outfile
        self.clauseCount = 0

    def emit(self, text):
        try:
            self.outfile.write(text)
        except OSError as ex:
            raise IoException("write error: %s" % str(ex))

    def header(self, header):
        pass

    def literal(self, lit):
        self.emit("%d " % lit)

    def terminator(self):
        self.clauseCount += 1

    def finish(self):
        try:
            self.outfile.flush()
        except OSError as ex:
            raise IoException("write error: %s" % str(ex))


# Full DIMACS.  One clause per line
class StandardWriter(Writer):

    def header(self, header):
        self.emit("p cnf %d %d\n" % (header.variables, header.clauses))

    def terminator(self):
        Writer.terminator(self)
        self.emit("0\n")


# Format used by the global benchmark database (GBD) for hashing.
# No header, all clauses on one line separated by single spaces, no final newline
class GbdWriter(Writer):
    # Some literal or terminator already written for current clause
    clauseOpen = False

    def __init__(self, outfile):
        Writer.__init__(self, outfile)
        self.clauseOpen = False

    def openClause(self):
        if self.clauseOpen:
            return
        if self.clauseCount > 0:
            self.emit(" ")
        self.clauseOpen = True

    def literal(self, lit):
        self.openClause()
        Writer.literal(self, lit)

    def terminator(self):
        self.openClause()
        Writer.terminator(self)
        self.emit("0")
        self.clauseOpen = False


def makeWriter(outfile, gbd = False):
    if gbd:
        return GbdWriter(outfile)
    return StandardWriter(outfile)
