"""Expression syntax tree for the taco language.

Formally, taco expressions can be defined as

```
<expression> ::= <identifier> "=" <expression>            ; "assign"
                                                          ; - right-associative, lowest precedence
               | <expression> <binary-op> <expression>    ; "binary"
                                                          ; - left-associative, see parser.py for precedence
               | ("!" | "-") <expression>                 ; "unary"
               | "(" <expression> ")"                     ; "grouping"
               | <identifier>                             ; "variable"
               | <literal>                                ; integer, float, string, true, false, nil
```

Every node renders to a canonical, fully parenthesized text form (its expr attribute), which is what equality and
repr are based on: `1 + 2 * 3` becomes `(+ 1 (* 2 3))`. Nodes are immutable once built.
"""

from abc import ABC, abstractmethod

from taco.core.value import Kind, Value


class Expr(ABC):
    """Superclass that represents any expression node."""

    def __init__(self, *nodes):
        self.nodes = list(nodes)
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
        """This method should return the canonical text form of this node, built from the text form of its nodes."""

    @property
    @abstractmethod
    def token(self):
        """The token this node is reported at when its evaluation fails."""

    def display(self, indents=0):
        """Recursively displays the tree in readable format.

        Format:
        <Expr>(expr='<expr>', nodes=[
            <Expr>(expr='<expr>', nodes=[
                ...
                <Expr>(expr='<expr>')  # <-- if nodes is empty
            ])
        ])
        """
        result = f"{'    ' * indents}{self._cls}(expr='{self.expr}'"
        if self.nodes:
            result += ", nodes=["
            for node in self.nodes:
                result += "\n" + node.display(indents + 1) + ","
            result = result[:-1] + f"\n{'    ' * indents}]"
        return result + ")"

    def __repr__(self):
        return f"{self._cls}('{self.expr}')"

    def __str__(self):
        return self.expr

    def __eq__(self, other):
        return isinstance(other, type(self)) and self.expr == other.expr

    def __hash__(self):
        return hash(self.expr)


class Literal(Expr):
    """A constant value. source is the token the literal was read from; a literal the parser synthesizes (the implicit
    nil of `let x;`) borrows a nearby token.
    """

    def __init__(self, value, source):
        self.value = value
        self.source = source
        super().__init__()

    def render(self):
        if self.value.kind is Kind.STRING:
            return f"\"{self.value.data}\""
        return str(self.value)

    @property
    def token(self):
        return self.source

    @property
    def is_nil(self):
        return self.value.kind is Kind.NIL


class Grouping(Expr):
    """Parenthesized expression."""

    def __init__(self, inner):
        super().__init__(inner)

    @property
    def inner(self):
        return self.nodes[0]

    def render(self):
        return f"(group {self.inner.expr})"

    @property
    def token(self):
        return self.inner.token


class Unary(Expr):
    """Prefix operator applied to one operand."""

    def __init__(self, operator, right):
        self.operator = operator
        super().__init__(right)

    @property
    def right(self):
        return self.nodes[0]

    def render(self):
        return f"({self.operator.lexeme} {self.right.expr})"

    @property
    def token(self):
        return self.operator


class Binary(Expr):
    """Infix operator applied to two operands, left evaluated first."""

    def __init__(self, left, operator, right):
        self.operator = operator
        super().__init__(left, right)

    @property
    def left(self):
        return self.nodes[0]

    @property
    def right(self):
        return self.nodes[1]

    def spine(self):
        """This node followed by its chain of Binary left operands, outermost first. `1 + 2 + 3` parses as
        (+ (+ 1 2) 3), so the spine of a long flat chain is as long as the chain itself.
        """
        nodes = [self]
        while isinstance(nodes[-1].left, Binary):
            nodes.append(nodes[-1].left)
        return nodes

    def render(self):
        spine = self.spine()
        prefix = "".join(f"({node.operator.lexeme} " for node in spine)
        suffix = "".join(f" {node.right.expr})" for node in reversed(spine))
        return prefix + spine[-1].left.expr + suffix

    @property
    def token(self):
        return self.operator


class Variable(Expr):
    """Reference to a name bound with let."""

    def __init__(self, name):
        self.name = name
        super().__init__()

    def render(self):
        return self.name.lexeme

    @property
    def token(self):
        return self.name


class Assign(Expr):
    """Rebinding of a name that some enclosing scope already defines."""

    def __init__(self, name, value):
        self.name = name
        super().__init__(value)

    @property
    def value(self):
        return self.nodes[0]

    def render(self):
        return f"(= {self.name.lexeme} {self.value.expr})"

    @property
    def token(self):
        return self.name


def nil(source):
    """Literal nil, used for let statements without an initializer."""
    return Literal(Value.nil(), source)
