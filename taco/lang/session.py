"""Session control for the taco language: the two entry points the shell and the command line call into, scan+parse a
unit of source and execute statements, plus the flags recording whether either failed.

A session owns one global Environment, so bindings survive from one unit to the next (one line to the next in the
shell). Flags are only cleared by reset, which the shell calls after every line.
"""

import sys

from taco.core.scanner import Scanner
from taco.lang.environment import Environment
from taco.lang.error import ErrorHandler, TacoError, TacoRuntimeError
from taco.lang.interpreter import Interpreter
from taco.lang.parser import Parser


class Session:
    """Governs a taco session, with control over the global scope and error flags."""

    EXIT_OK = 0
    EXIT_SYNTAX = 65   # a lexical or syntax error occurred
    EXIT_RUNTIME = 70  # a runtime error occurred

    # Python frames available to parsing and evaluation. Nesting deeper than this is reported as
    # "Expression nesting too deep."
    RECURSION_LIMIT = 10000

    def __init__(self, out=None, err=None, color=True, echo=False, fail_fast=False, dump_tokens=False,
                 dump_ast=False):
        if sys.getrecursionlimit() < Session.RECURSION_LIMIT:
            sys.setrecursionlimit(Session.RECURSION_LIMIT)

        self.out = out if out is not None else sys.stdout
        self.error_handler = ErrorHandler(err, color)
        self.interpreter = Interpreter(self.out, echo)
        self.environment = Environment()

        self.fail_fast = fail_fast      # stop parsing a unit at its first syntax error
        self.dump_tokens = dump_tokens  # write every scanned token to self.out
        self.dump_ast = dump_ast        # write every parsed statement tree to self.out

        self.had_error = False
        self.had_runtime_error = False

    @property
    def exit_code(self):
        if self.had_error:
            return Session.EXIT_SYNTAX
        elif self.had_runtime_error:
            return Session.EXIT_RUNTIME
        return Session.EXIT_OK

    def reset(self):
        """Clears error flags and recorded errors. Bindings are kept."""
        self.had_error = False
        self.had_runtime_error = False
        self.error_handler.clear()

    def scan(self, source, line=1):
        """Scans source into tokens, reporting lexical errors. line is the number of source's first line. Returns the
        tokens and the lexical errors found.
        """
        scanner = Scanner(source, self.error_handler, line)
        tokens = scanner.scan_tokens()

        if scanner.errors:
            self.had_error = True
        if self.dump_tokens:
            for token in tokens:
                print(token, file=self.out)

        return tokens, scanner.errors

    def parse(self, source, line=1):
        """Scans and parses source. Returns its statements, or None if a lexical or syntax error was reported."""
        tokens, lex_errors = self.scan(source, line)

        parser = Parser(tokens, self.error_handler, self.fail_fast)
        statements = parser.parse()

        if parser.errors:
            self.had_error = True
        if self.dump_ast:
            for stmt in statements:
                print(stmt.display(), file=self.out)

        if lex_errors or parser.errors:
            return None
        return statements

    def execute(self, statements):
        """Executes statements against the global scope. Returns whether they all ran without a runtime error."""
        try:
            self.interpreter.interpret(statements, self.environment)
        except TacoRuntimeError as error:
            self.error_handler.report(error)
            self.had_runtime_error = True
            return False
        return True

    def run(self, source, line=1):
        """Parses then executes source. Nothing is executed if source has any lexical or syntax error."""
        statements = self.parse(source, line)
        if statements is None:
            return False
        return self.execute(statements)

    def run_file(self, path):
        """Runs the whole file at path as one unit."""
        try:
            with open(path, "r", encoding="utf-8") as file:
                source = file.read()
        except (OSError, UnicodeDecodeError):
            raise TacoError(f"'{path}' could not be opened")

        return self.run(source)
