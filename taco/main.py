"""Runs taco programs, or the interactive shell when no file is given. Called from the taco console script.

Basic program flow:
    1. Scanner (core/scanner.py): source text to tokens, reporting lexical errors as it goes
    2. Parser (lang/parser.py): tokens to statements, reporting every syntax error
    3. Interpreter (lang/interpreter.py): walks the statements against the session's global scope

A file is only executed if it scanned and parsed cleanly. Exit status is 65 after a lexical or syntax error, 70 after
a runtime error and 0 otherwise. The shell never exits on error.
"""

import argparse
import sys

from taco.lang.error import ErrorHandler
from taco.lang.session import Session
from taco.lang.shell import Shell


def build_parser():
    parser = argparse.ArgumentParser(prog="taco", description="taco language interpreter")
    parser.add_argument("file", help="file to interpret and run (if empty, goes to interactive mode)", nargs="?")
    parser.add_argument("--tokens", action="store_true", help="print every token before running")
    parser.add_argument("--ast", action="store_true", help="print every statement tree before running")
    parser.add_argument("--fail-fast", action="store_true", help="stop parsing at the first syntax error")
    parser.add_argument("--no-color", dest="color", action="store_false", help="do not color diagnostics")
    return parser


def main(argv=None):
    """Runs taco interpreter. Returns the exit status."""
    args = build_parser().parse_args(argv)

    options = dict(color=args.color, fail_fast=args.fail_fast, dump_tokens=args.tokens, dump_ast=args.ast)

    if args.file is not None:
        sess = Session(**options)
        with ErrorHandler(color=args.color):
            sess.run_file(args.file)
            return sess.exit_code
        return 1  # the file could not be read, or the run was interrupted

    sess = Session(echo=True, **options)
    with sess.error_handler:
        Shell(sess).cmdloop()
    return Session.EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
