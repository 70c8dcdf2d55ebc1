#!/usr/bin/python3

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

# Normalize CNF in DIMACS format: remove all comments and redundant white space,
# checking syntax along the way.

import sys
import getopt

import cnfstream
import cnfparse
import cnfwrite

def usage(name):
    print("Usage: %s [-h] [-g] [-s] [-v VLEVEL] [INPUT [OUTPUT]]" % name)
    print("  -h | --help      Print this message")
    print("  -g | --gbd       Produce single-line GBD format (no header)")
    print("  -s | --strict    Reject blank lines before header and unterminated final comment")
    print("  -v | --verbose VLEVEL  Set verbosity level (0-2)")
    print("  INPUT            Input file in DIMACS format")
    print("  OUTPUT           Output file produced in DIMACS format")
    print("")
    print("Either file can be '-' to denote <stdin> respectively <stdout>,")
    print("which are also the defaults.  Files ending in '.xz' are (de)compressed with 'xz'.")


class Options:
    gbd = False
    strict = False
    verbLevel = 0

    def __init__(self, gbd = False, strict = False, verbLevel = 0):
        self.gbd = gbd
        self.strict = strict
        self.verbLevel = verbLevel


# Body of formula, once header is known.  Returns body parser holding counts
def transcribe(cursor, header, outfile, options):
    writer = cnfwrite.makeWriter(outfile, options.gbd)
    writer.header(header)
    parser = cnfparse.parseBody(cursor, header, writer, options.strict)
    writer.finish()
    return parser

# Normalize from one open text stream to another
def normalize(infile, outfile, options = None):
    if options is None:
        options = Options()
    cursor = cnfstream.Cursor(infile)
    header = cnfparse.parseHeader(cursor, options.strict)
    return transcribe(cursor, header, outfile, options)

# Normalize between named files.
# Output isn't opened until the header has been read
def normalizeFiles(iname, oname, options = None):
    if options is None:
        options = Options()
    with cnfstream.openInput(iname) as instream:
        if options.verbLevel >= 2:
            print("c Reading '%s'" % instream.name, file = sys.stderr)
        cursor = cnfstream.Cursor(instream.file)
        header = cnfparse.parseHeader(cursor, options.strict)
        if options.verbLevel >= 2:
            print("c Found header '%s'" % str(header), file = sys.stderr)
        with cnfstream.openOutput(oname) as outstream:
            if options.verbLevel >= 2:
                print("c Writing '%s'" % outstream.name, file = sys.stderr)
            return transcribe(cursor, header, outstream.file, options)

def inputName(iname):
    return "<stdin>" if cnfstream.isStandard(iname) else iname

def die(iname, message):
    sys.stderr.write("normalize: error in '%s': %s\n" % (inputName(iname), message))
    return 1

def run(name, args):
    options = Options()
    try:
        optlist, args = getopt.gnu_getopt(args, "hgsv:", ["help", "gbd", "strict", "verbose="])
    except getopt.GetoptError as ex:
        sys.stderr.write("normalize: error: %s\n" % str(ex))
        return 1
    for (opt, val) in optlist:
        if opt in ('-h', '--help'):
            usage(name)
            return 0
        elif opt in ('-g', '--gbd'):
            options.gbd = True
        elif opt in ('-s', '--strict'):
            options.strict = True
        elif opt in ('-v', '--verbose'):
            try:
                options.verbLevel = int(val)
            except ValueError:
                sys.stderr.write("normalize: error: invalid verbosity level '%s'\n" % val)
                return 1
    iname = args[0] if len(args) > 0 else None
    oname = args[1] if len(args) > 1 else None
    if len(args) > 2:
        return die(iname, "too many files")
    try:
        parser = normalizeFiles(iname, oname, options)
    except cnfstream.NormalizeException as ex:
        return die(iname, ex.value)
    if options.verbLevel >= 1:
        header = parser.header
        print("c normalized '%s' with %d variables and %d clauses (%d literals)" %
              (inputName(iname), header.variables, header.clauses, parser.literalCount), file = sys.stderr)
    return 0

def main():
    sys.exit(run(sys.argv[0], sys.argv[1:]))

if __name__ == "__main__":
    main()
