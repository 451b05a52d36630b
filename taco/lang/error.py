"""Error handling for the taco language. Only TacoErrors should be encountered while running a program: if another type
of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Three kinds of TacoError exist, one per stage:
    - LexError: reported by the scanner as it goes; never raised, scanning continues past it
    - ParseError: built by the parser when an expectation fails; carries the offending token
    - TacoRuntimeError: raised while evaluating; carries the token whose evaluation failed
"""

import sys

from termcolor import colored

from taco.core.tokens import TokenKind


class TacoError(Exception):
    """Templates an error message so that it can be reported by ErrorHandler. line is None when the error does not
    originate from source text (a keyboard interrupt, for instance).
    """

    def __init__(self, msg, line=None, internal=False):
        super().__init__(msg)
        self.msg = msg
        self.line = line
        self.internal = internal


class LexError(TacoError):
    """Unexpected character or unterminated string found while scanning."""

    def __init__(self, msg, line):
        super().__init__(msg, line)


class ParseError(TacoError):
    """A parser expectation failed at token."""

    def __init__(self, token, msg):
        super().__init__(msg, token.line)
        self.token = token

    @property
    def where(self):
        """Location suffix used in reports: at end of input or at the offending lexeme."""
        if self.token.kind is TokenKind.EOF:
            return " at end"
        return f" at '{self.token.lexeme}'"


class TacoRuntimeError(TacoError):
    """Type mismatch, division by zero or unresolved name found while evaluating token's expression."""

    def __init__(self, token, msg, internal=False):
        super().__init__(msg, token.line, internal)
        self.token = token


class ErrorHandler:
    """Diagnostics sink for a session. Writes one line per error/warning to stream and remembers every error it
    reported. Also a context manager that reports TacoErrors raised inside it instead of letting them escape.
    """
    ERROR = "red"
    WARNING = "magenta"

    def __init__(self, stream=None, color=True):
        self.stream = stream if stream is not None else sys.stderr
        self.color = color
        self.errors = []

    @staticmethod
    def format_error(error, label="Error"):
        """Returns the plain text report of error: '[line N] Error<where>: msg' for lexical and syntax errors,
        '[Line N] Error: msg' for runtime errors.
        """
        where = error.where if isinstance(error, ParseError) else ""

        if error.line is None:
            prefix = ""
        elif isinstance(error, TacoRuntimeError):
            prefix = f"[Line {error.line}] "
        else:
            prefix = f"[line {error.line}] "

        internal = "[internal] " if error.internal else ""
        return f"{internal}{prefix}{label}{where}: {error.msg}"

    def _highlight(self, text, label, color):
        """Colors the first occurrence of label in text, if coloring is enabled."""
        if not self.color:
            return text
        return text.replace(label, colored(label, color, attrs=["bold"]), 1)

    def report(self, error):
        """Writes error to self.stream and records it."""
        self.errors.append(error)
        print(self._highlight(ErrorHandler.format_error(error), "Error", ErrorHandler.ERROR), file=self.stream)

    def warn(self, msg, line=None):
        """Writes a warning to self.stream. Warnings are not errors and are not recorded."""
        text = ErrorHandler.format_error(TacoError(msg, line), label="Warning")
        print(self._highlight(text, "Warning", ErrorHandler.WARNING), file=self.stream)

    def clear(self):
        """Forgets every error reported so far."""
        self.errors = []

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False
        elif exc_type is KeyboardInterrupt:
            self.report(TacoError("keyboard interrupt"))
            return True
        elif issubclass(exc_type, TacoError):
            self.report(exc_val)
            return True

        self.report(TacoError(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True))
        return False
