"""Lexical analysis for the taco language: turns source text into a list of Tokens in a single left-to-right pass.

Lexical grammar, loosely:

```
<comment>   ::= "#" <char>* "\n"              ; dropped
              | "/*" <char>* "*/"             ; dropped, may span lines, ends at the first "*/"
<string>    ::= '"' <char>* '"'               ; may not contain a newline
              | "`" <char>* "`"               ; may span lines
<integer>   ::= <digit>+
<float>     ::= <digit>+ "." <digit>+
<ident>     ::= (<alpha> | "_") (<alpha> | <digit> | "_")*   ; keywords are resolved from tokens.KEYWORDS
```

Lexical errors never stop the scanner: they are reported through the ErrorHandler, collected in Scanner.errors, and
the offending character (or unterminated string) is skipped.
"""

from taco.core.tokens import KEYWORDS, OPERATORS, PUNCTUATION, Token, TokenKind
from taco.lang.error import ErrorHandler, LexError


class Scanner:
    """Scans one unit of source. line is the number of the first line of source, so that an interactive session can
    keep counting lines across inputs.
    """

    def __init__(self, source, error_handler=None, line=1):
        self.source = source
        self.error_handler = error_handler if error_handler is not None else ErrorHandler()

        self.tokens = []
        self.errors = []
        self.open_string = False  # source ended inside a backtick string

        self.start = 0    # first character of the lexeme being scanned
        self.current = 0  # character about to be consumed
        self.line = line

    @staticmethod
    def is_digit(char):
        return "0" <= char <= "9"

    @staticmethod
    def is_alpha(char):
        return char.isalpha() or char == "_"

    @staticmethod
    def is_alphanumeric(char):
        return Scanner.is_digit(char) or Scanner.is_alpha(char)

    def is_at_end(self):
        return self.current >= len(self.source)

    def advance(self):
        """Consumes and returns the current character."""
        self.current += 1
        return self.source[self.current - 1]

    def match(self, expected):
        """Consumes the current character only if it is expected."""
        if self.is_at_end() or self.source[self.current] != expected:
            return False
        self.current += 1
        return True

    def peek(self):
        if self.is_at_end():
            return "\0"
        return self.source[self.current]

    def peek_next(self):
        if self.current + 1 >= len(self.source):
            return "\0"
        return self.source[self.current + 1]

    @property
    def lexeme(self):
        return self.source[self.start:self.current]

    def add_token(self, kind, literal=""):
        self.tokens.append(Token(kind, self.lexeme, literal, self.line))

    def error(self, msg):
        """Reports a lexical error at the current line. Does not raise."""
        error = LexError(msg, self.line)
        self.errors.append(error)
        self.error_handler.report(error)

    def scan_tokens(self):
        """Scans all of self.source. The returned list always ends with exactly one EOF token."""
        while not self.is_at_end():
            self.start = self.current
            self.scan_token()

        self.tokens.append(Token(TokenKind.EOF, "", "", self.line))
        return self.tokens

    def scan_token(self):
        char = self.advance()

        if char in PUNCTUATION:
            self.add_token(PUNCTUATION[char], char)

        elif char in OPERATORS:
            single, double = OPERATORS[char]
            kind = double if self.match("=") else single
            self.add_token(kind, self.lexeme)

        elif char == "/":
            if self.match("*"):
                self.block_comment()
            else:
                self.add_token(TokenKind.SLASH, char)

        elif char == "#":
            while self.peek() != "\n" and not self.is_at_end():
                self.advance()

        elif char in " \r\t":
            pass

        elif char == "\n":
            self.line += 1

        elif char == "\"":
            self.string()

        elif char == "`":
            self.multiline_string()

        elif Scanner.is_digit(char):
            self.number()

        elif Scanner.is_alpha(char):
            self.identifier()

        else:
            self.error("Unexpected character.")

    def block_comment(self):
        """Consumes everything up to and including the first '*/'. Interior '*' and '/' do not end the comment."""
        while not self.is_at_end():
            if self.peek() == "*" and self.peek_next() == "/":
                self.advance()
                self.advance()
                return
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        self.error_handler.warn("Unterminated block comment.", self.line)

    def string(self):
        while self.peek() != "\"" and not self.is_at_end():
            if self.peek() == "\n":
                self.error("Unterminated string.")
                return  # the newline is scanned next, so line counting stays correct
            self.advance()

        if self.is_at_end():
            self.error("Unterminated string.")
            return

        self.advance()  # closing "
        self.add_token(TokenKind.STRING, self.source[self.start + 1:self.current - 1])

    def multiline_string(self):
        while self.peek() != "`" and not self.is_at_end():
            if self.peek() == "\n":
                self.line += 1
            self.advance()

        if self.is_at_end():
            self.open_string = True
            self.error("Unterminated string.")
            return

        self.advance()  # closing `
        self.add_token(TokenKind.STRING, self.source[self.start + 1:self.current - 1])

    def number(self):
        kind = TokenKind.INTEGER
        while Scanner.is_digit(self.peek()):
            self.advance()

        # a '.' is only part of the number when a digit follows it
        if self.peek() == "." and Scanner.is_digit(self.peek_next()):
            kind = TokenKind.FLOAT
            self.advance()
            while Scanner.is_digit(self.peek()):
                self.advance()

        self.add_token(kind, self.lexeme)

    def identifier(self):
        while Scanner.is_alphanumeric(self.peek()):
            self.advance()

        self.add_token(KEYWORDS.get(self.lexeme, TokenKind.IDENTIFIER))


def scan(source, error_handler=None, line=1):
    """Convenience wrapper: scans source and returns its tokens."""
    return Scanner(source, error_handler, line).scan_tokens()
