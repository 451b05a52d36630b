"""Recursive-descent parser for the taco language. Precedence is encoded by call nesting, lowest first:

```
assignment  ->  equality  ->  comparison  ->  term  ->  factor  ->  unary  ->  primary
   =            == !=         < <= > >=       + -       * /        ! -        literals, names, ( ... )
```

Every binary level is left-associative; assignment and unary are right-associative.

Errors do not escape parse(): each one is reported through the ErrorHandler as soon as it is found and collected in
Parser.errors. In the default error-collecting mode the parser then synchronizes to the next statement boundary and
keeps going, so one pass reports every syntax error; with fail_fast it stops at the first one. Either way, callers
must not execute the statements of a unit whose parser has errors.
"""

from taco.core.expression import Assign, Binary, Grouping, Literal, Unary, Variable, nil
from taco.core.tokens import TokenKind
from taco.core.value import Value
from taco.lang.error import ErrorHandler, ParseError
from taco.lang.statement import BlockStmt, ExpressionStmt, LetStmt, PrintStmt


class Parser:
    """Parses one list of tokens, as produced by Scanner.scan_tokens, into statements."""

    EQUALITY = (TokenKind.BANG_EQUAL, TokenKind.EQUAL_EQUAL)
    COMPARISON = (TokenKind.GREATER, TokenKind.GREATER_EQUAL, TokenKind.LESS, TokenKind.LESS_EQUAL)
    TERM = (TokenKind.MINUS, TokenKind.PLUS)
    FACTOR = (TokenKind.SLASH, TokenKind.STAR)
    UNARY = (TokenKind.BANG, TokenKind.MINUS)

    # tokens that begin a statement, where synchronize stops
    STATEMENT_STARTS = (
        TokenKind.CLASS, TokenKind.FUNCTION, TokenKind.LET, TokenKind.FOR,
        TokenKind.IF, TokenKind.WHILE, TokenKind.PRINT, TokenKind.RETURN,
    )

    def __init__(self, tokens, error_handler=None, fail_fast=False):
        self.tokens = tokens
        self.error_handler = error_handler if error_handler is not None else ErrorHandler()
        self.fail_fast = fail_fast

        self.current = 0
        self.errors = []

    def parse(self):
        """Returns the statements that parsed cleanly. Syntax errors are in self.errors afterwards."""
        statements = []

        while not self.is_at_end() and not (self.fail_fast and self.errors):
            try:
                statements.append(self.declaration())
            except ParseError as error:
                self.errors.append(error)
                if self.fail_fast:
                    break
                self.synchronize()

        return statements

    # ----------------------------------------------------------------------------------------------------------------
    # statements

    def declaration(self):
        try:
            if self.match(TokenKind.LET):
                return self.let_declaration()
            return self.statement()
        except RecursionError:
            raise self.error(self.peek(), "Expression nesting too deep.")

    def statement(self):
        if self.match(TokenKind.PRINT):
            return self.print_statement()
        elif self.match(TokenKind.LEFT_BRACE):
            return self.block()
        return self.expression_statement()

    def let_declaration(self):
        name = self.consume(TokenKind.IDENTIFIER, "Expect variable name.")

        initializer = nil(name)
        if self.match(TokenKind.EQUAL):
            initializer = self.expression()

        if not self.match(TokenKind.SEMICOLON):
            raise self.error(self.previous(), "Expect ';' after variable declaration.")
        return LetStmt(name, initializer)

    def print_statement(self):
        keyword = self.previous()
        value = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after value.")
        return PrintStmt(keyword, value)

    def block(self):
        brace = self.previous()
        statements = []

        while not self.check(TokenKind.RIGHT_BRACE) and not self.is_at_end():
            statements.append(self.declaration())

        self.consume(TokenKind.RIGHT_BRACE, "Expect '}' after block.")
        return BlockStmt(brace, statements)

    def expression_statement(self):
        expr = self.expression()
        self.consume(TokenKind.SEMICOLON, "Expect ';' after expression.")
        return ExpressionStmt(expr)

    # ----------------------------------------------------------------------------------------------------------------
    # expressions

    def expression(self):
        return self.assignment()

    def assignment(self):
        expr = self.equality()

        if self.match(TokenKind.EQUAL):
            equals = self.previous()
            value = self.assignment()

            if isinstance(expr, Variable):
                return Assign(expr.name, value)

            # no unwinding: the tokens are consumed as well-formed, only the target is wrong
            self.errors.append(self.error(equals, "Invalid assignment target."))

        return expr

    def binary(self, operand, operators):
        """Parses one left-associative binary precedence level: operand (operator operand)*."""
        expr = operand()

        while self.match(*operators):
            operator = self.previous()
            right = operand()
            expr = Binary(expr, operator, right)

        return expr

    def equality(self):
        return self.binary(self.comparison, Parser.EQUALITY)

    def comparison(self):
        return self.binary(self.term, Parser.COMPARISON)

    def term(self):
        return self.binary(self.factor, Parser.TERM)

    def factor(self):
        return self.binary(self.unary, Parser.FACTOR)

    def unary(self):
        if self.match(*Parser.UNARY):
            operator = self.previous()
            return Unary(operator, self.unary())
        return self.primary()

    def primary(self):
        if self.match(TokenKind.FALSE, TokenKind.TRUE, TokenKind.NIL, TokenKind.INTEGER, TokenKind.FLOAT):
            return Literal(Value.from_text(self.previous().lexeme), self.previous())

        elif self.match(TokenKind.STRING):
            return Literal(Value.string(self.previous().literal), self.previous())

        elif self.match(TokenKind.IDENTIFIER):
            return Variable(self.previous())

        elif self.match(TokenKind.LEFT_PAREN):
            expr = self.expression()
            self.consume(TokenKind.RIGHT_PAREN, "Expect ')' after expression.")
            return Grouping(expr)

        raise self.error(self.peek(), "Expect expression.")

    # ----------------------------------------------------------------------------------------------------------------
    # token stream

    def consume(self, kind, msg):
        """Consumes the current token if it is of kind, else raises a ParseError at it."""
        if self.check(kind):
            return self.advance()
        raise self.error(self.peek(), msg)

    def match(self, *kinds):
        for kind in kinds:
            if self.check(kind):
                self.advance()
                return True
        return False

    def check(self, kind):
        if self.is_at_end():
            return False
        return self.peek().kind is kind

    def advance(self):
        if not self.is_at_end():
            self.current += 1
        return self.previous()

    def is_at_end(self):
        return self.peek().kind is TokenKind.EOF

    def peek(self):
        return self.tokens[self.current]

    def previous(self):
        return self.tokens[self.current - 1]

    def error(self, token, msg):
        """Reports a syntax error at token and returns it, for the caller to raise if it has to unwind."""
        error = ParseError(token, msg)
        self.error_handler.report(error)
        return error

    def synchronize(self):
        """Discards tokens until just after a ';' or just before a token that begins a statement."""
        self.advance()

        while not self.is_at_end():
            if self.previous().kind is TokenKind.SEMICOLON:
                return
            elif self.peek().kind in Parser.STATEMENT_STARTS:
                return
            self.advance()
