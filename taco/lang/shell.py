"""Handles interactive mode for the taco interpreter. Uses cmd as backend."""

import cmd
import io

from taco.core.scanner import Scanner
from taco.core.tokens import TokenKind
from taco.lang.error import ErrorHandler


class Shell(cmd.Cmd):
    """taco interpreter shell. Never exits on an error: the session's flags are reset after every line."""
    intro = "taco interpreter :: Python backend\nType '?' or 'help' for more information."
    prompt = ">> "
    secondary_prompt = ".. "  # used for line continuations
    _tmp_prompt = ">> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess

        self._tmp_line = ""
        self._tmp_line_num = 0  # line number the pending continuation started on
        self.line_num = 0

    @staticmethod
    def needs_continuation(source):
        """Whether source stops inside a multi-line string or an unclosed block."""
        scanner = Scanner(source, ErrorHandler(io.StringIO(), color=False))
        tokens = scanner.scan_tokens()
        if scanner.open_string:
            return True

        depth = 0
        for token in tokens:
            if token.kind is TokenKind.LEFT_BRACE:
                depth += 1
            elif token.kind is TokenKind.RIGHT_BRACE:
                depth -= 1
        return depth > 0

    def default(self, line):
        """Executes arbitrary taco source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            self.line_num += 1
            if not self._tmp_line:
                self._tmp_line_num = self.line_num

            source = self._tmp_line + line + "\n"
            if Shell.needs_continuation(source):
                self._tmp_line = source
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt

            try:
                self.sess.run(source, self._tmp_line_num)
            finally:
                self.sess.reset()

    def do_help(self, arg):
        """Doesnt return docs, but rather a short intro."""
        print("Welcome to the taco interpreter!\n\n"
              "taco is a small expression language. Statements end with ';':\n"
              "    let x = 5;          binds x in the current scope\n"
              "    print x + 1;        prints 6\n"
              "    { let x = 1; }      runs statements in a new scope\n\n"
              "Values are integers, floats, strings (\"...\" or `...` across lines), true, false and nil.\n"
              "Type 'exit' or press Ctrl-D to leave.", file=self.stdout)

    def emptyline(self):
        """Do not repeat previous command on empty line, but keep blank lines of a pending continuation."""
        if self._tmp_line:
            self.default("")
        return False

    def do_EOF(self, arg):
        """Exits interpreter."""
        print(file=self.stdout)
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
