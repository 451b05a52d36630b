"""Statements of the taco language, the units a program is made of. Statements wrap expressions from
taco.core.expression and, like them, render to a canonical text form used for equality and display.

```
<let_stmt>    ::= "let" <identifier> ("=" <expression>)? ";"   ; binds in the innermost scope, nil if no initializer
<print_stmt>  ::= "print" <expression> ";"                      ; writes the value of expression
<block_stmt>  ::= "{" <declaration>* "}"                        ; runs its statements in a fresh inner scope
<expr_stmt>   ::= <expression> ";"                              ; evaluated for its effect
```
"""

from abc import ABC, abstractmethod


class Statement(ABC):
    """Superclass representing any statement."""

    def __init__(self):
        self._cls = type(self).__name__
        self._expr = None

    @property
    def expr(self):
        """Canonical text form, rendered on first use."""
        if self._expr is None:
            self._expr = self.render()
        return self._expr

    @abstractmethod
    def render(self):
        """This method should return the canonical text form of this statement."""

    @property
    @abstractmethod
    def token(self):
        """Token identifying where this statement starts, used for errors that cannot name a better one."""

    def display(self, indents=0):
        """Readable tree of this statement and its expression, in the same format as Expr.display."""
        return f"{'    ' * indents}{self._cls}(expr='{self.expr}', nodes=[\n{self.body_display(indents + 1)}\n" \
               f"{'    ' * indents}])"

    def body_display(self, indents):
        return self.expression.display(indents)

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and other.expr == self.expr

    def __hash__(self):
        return hash(self.expr)


class ExpressionStmt(Statement):
    """Bare expression followed by ';'."""

    def __init__(self, expression):
        self.expression = expression
        super().__init__()

    def render(self):
        return f"{self.expression.expr};"

    @property
    def token(self):
        return self.expression.token


class PrintStmt(Statement):
    """print <expression>;"""

    def __init__(self, keyword, expression):
        self.keyword = keyword
        self.expression = expression
        super().__init__()

    def render(self):
        return f"print {self.expression.expr};"

    @property
    def token(self):
        return self.keyword


class LetStmt(Statement):
    """let <name> = <initializer>; initializer is a nil Literal when the source omits it."""

    def __init__(self, name, initializer):
        self.name = name
        self.initializer = initializer
        super().__init__()

    @property
    def expression(self):
        return self.initializer

    def render(self):
        return f"let {self.name.lexeme} = {self.initializer.expr};"

    @property
    def token(self):
        return self.name


class BlockStmt(Statement):
    """{ <statements> } with its own scope."""

    def __init__(self, brace, statements):
        self.brace = brace
        self.statements = list(statements)
        super().__init__()

    def render(self):
        return "{ " + "".join(f"{stmt.expr} " for stmt in self.statements) + "}"

    def body_display(self, indents):
        return ",\n".join(stmt.display(indents) for stmt in self.statements)

    @property
    def token(self):
        return self.brace

    def display(self, indents=0):
        if not self.statements:
            return f"{'    ' * indents}{self._cls}(expr='{self.expr}')"
        return super().display(indents)
