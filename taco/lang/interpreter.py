"""Tree-walking interpreter for the taco language. Walks statements and expressions as the parser built them, keeping no
program state of its own: bindings live in the Environment passed in, output goes to self.out.

Operand rules are strict, as there is no implicit conversion between kinds:
    - + accepts two Integers, two Floats or two Strings (concatenation)
    - - * / < <= > >= accept two Integers or two Floats
    - == != accept two operands of the same kind, one of Boolean, Integer, Float or String
    - unary - accepts an Integer or a Float, ! accepts anything (only nil and false are falsy)

Any violation, a division by zero, an integer result outside 64 bits or an unknown name raises TacoRuntimeError.
"""

import operator
import sys

from taco.core.expression import Assign, Binary, Grouping, Literal, Unary, Variable
from taco.core.tokens import TokenKind
from taco.core.value import Kind, Value
from taco.lang.error import TacoRuntimeError
from taco.lang.statement import BlockStmt, ExpressionStmt, LetStmt, PrintStmt


def _divide(left, right):
    """Integer division truncating toward zero."""
    quotient = abs(left) // abs(right)
    return quotient if (left < 0) == (right < 0) else -quotient


class Interpreter:
    """Executes statements against an Environment. If echo, expression statements also write their value."""

    ARITHMETIC = {
        TokenKind.PLUS: ("addition", operator.add, operator.add),
        TokenKind.MINUS: ("subtraction", operator.sub, operator.sub),
        TokenKind.STAR: ("multiplication", operator.mul, operator.mul),
        TokenKind.SLASH: ("division", _divide, operator.truediv),
    }
    COMPARISON = {
        TokenKind.GREATER: ("greater than", operator.gt),
        TokenKind.GREATER_EQUAL: ("greater than or equal", operator.ge),
        TokenKind.LESS: ("less than", operator.lt),
        TokenKind.LESS_EQUAL: ("less than or equal", operator.le),
    }
    EQUALITY = {
        TokenKind.EQUAL_EQUAL: ("equality", operator.eq),
        TokenKind.BANG_EQUAL: ("inequality", operator.ne),
    }
    COMPARABLE = (Kind.BOOLEAN, Kind.INTEGER, Kind.FLOAT, Kind.STRING)

    def __init__(self, out=None, echo=False):
        self.out = out if out is not None else sys.stdout
        self.echo = echo

    def write(self, value):
        print(value, file=self.out)

    def interpret(self, statements, environment):
        """Executes statements in order. The first TacoRuntimeError stops execution and propagates."""
        for stmt in statements:
            self.execute(stmt, environment)

    def execute(self, stmt, environment):
        try:
            if isinstance(stmt, LetStmt):
                if isinstance(stmt.initializer, Literal) and stmt.initializer.is_nil:
                    value = Value.nil()
                else:
                    value = self.evaluate(stmt.initializer, environment)
                environment.define(stmt.name.lexeme, value)

            elif isinstance(stmt, PrintStmt):
                self.write(self.evaluate(stmt.expression, environment))

            elif isinstance(stmt, ExpressionStmt):
                value = self.evaluate(stmt.expression, environment)
                if self.echo:
                    self.write(value)

            elif isinstance(stmt, BlockStmt):
                self.interpret(stmt.statements, environment.child())

            else:
                raise TacoRuntimeError(stmt.token, f"Unknown statement '{stmt}'.", internal=True)

        except RecursionError:
            raise TacoRuntimeError(stmt.token, "Expression nesting too deep.")

    def evaluate(self, expr, environment):
        """Returns the Value of expr."""
        if isinstance(expr, Literal):
            return expr.value

        elif isinstance(expr, Grouping):
            return self.evaluate(expr.inner, environment)

        elif isinstance(expr, Variable):
            return environment.get(expr.name)

        elif isinstance(expr, Assign):
            value = self.evaluate(expr.value, environment)
            environment.assign(expr.name, value)
            return value

        elif isinstance(expr, Unary):
            return self.evaluate_unary(expr, environment)

        elif isinstance(expr, Binary):
            return self.evaluate_binary(expr, environment)

        raise TacoRuntimeError(expr.token, f"Unknown expression '{expr}'.", internal=True)

    def evaluate_unary(self, expr, environment):
        right = self.evaluate(expr.right, environment)

        if expr.operator.kind is TokenKind.BANG:
            return Value.boolean(not right.is_truthy())

        elif expr.operator.kind is TokenKind.MINUS:
            if not right.is_number:
                raise TacoRuntimeError(expr.operator, "Invalid operand for unary minus.")
            return Interpreter.number(right.kind, -right.data, expr.operator)

        raise TacoRuntimeError(expr.operator, f"Invalid unary operator '{expr.operator.lexeme}'.", internal=True)

    def evaluate_binary(self, expr, environment):
        """Folds expr's left spine in a loop, innermost operator first, so flat chains of any length evaluate without
        recursing once per operator. Operands are still evaluated left to right.
        """
        spine = expr.spine()
        left = self.evaluate(spine[-1].left, environment)
        for node in reversed(spine):
            right = self.evaluate(node.right, environment)
            left = self.apply_binary(node.operator, left, right)
        return left

    def apply_binary(self, token, left, right):
        if token.kind is TokenKind.PLUS and left.kind is Kind.STRING and right.kind is Kind.STRING:
            return Value.string(left.data + right.data)

        elif token.kind in Interpreter.ARITHMETIC:
            name, integer_op, float_op = Interpreter.ARITHMETIC[token.kind]
            Interpreter.check_numbers(token, name, left, right)

            if token.kind is TokenKind.SLASH and right.data == 0:
                raise TacoRuntimeError(token, "Division by zero.")

            op = integer_op if left.kind is Kind.INTEGER else float_op
            return Interpreter.number(left.kind, op(left.data, right.data), token)

        elif token.kind in Interpreter.COMPARISON:
            name, op = Interpreter.COMPARISON[token.kind]
            Interpreter.check_numbers(token, name, left, right)
            return Value.boolean(op(left.data, right.data))

        elif token.kind in Interpreter.EQUALITY:
            name, op = Interpreter.EQUALITY[token.kind]
            if left.kind is not right.kind or left.kind not in Interpreter.COMPARABLE:
                raise TacoRuntimeError(token, Interpreter.invalid_operands(name, left, right))
            return Value.boolean(op(left.data, right.data))

        raise TacoRuntimeError(token, f"Invalid binary operator '{token.lexeme}'.", internal=True)

    @staticmethod
    def invalid_operands(name, left, right):
        return f"Invalid operands for {name}: {left.kind} and {right.kind}."

    @staticmethod
    def check_numbers(token, name, left, right):
        """Raises unless left and right are both Integers or both Floats."""
        if not left.is_number or left.kind is not right.kind:
            raise TacoRuntimeError(token, Interpreter.invalid_operands(name, left, right))

    @staticmethod
    def number(kind, result, token):
        """Wraps an arithmetic result as a Value of kind, reporting integer overflow at token."""
        if kind is Kind.FLOAT:
            return Value.float(result)
        try:
            return Value.integer(result)
        except OverflowError:
            raise TacoRuntimeError(token, "Integer overflow.")
