import unittest

from taco.core.expression import Assign, Binary, Grouping, Literal, Unary, Variable, nil
from taco.core.tokens import Token, TokenKind
from taco.core.value import Value


def token(kind, lexeme, line=1):
    return Token(kind, lexeme, "", line)


def integer(number, line=1):
    return Literal(Value.integer(number), token(TokenKind.INTEGER, str(number), line))


PLUS = token(TokenKind.PLUS, "+")
STAR = token(TokenKind.STAR, "*")
MINUS = token(TokenKind.MINUS, "-")
BANG = token(TokenKind.BANG, "!")
X = token(TokenKind.IDENTIFIER, "x", 4)


class ExprTestCase(unittest.TestCase):

    def test_render(self):
        cases = {
            "1": integer(1),
            "2.5": Literal(Value.float(2.5), token(TokenKind.FLOAT, "2.5")),
            "\"ab\"": Literal(Value.string("ab"), token(TokenKind.STRING, "\"ab\"")),
            "true": Literal(Value.boolean(True), token(TokenKind.TRUE, "true")),
            "nil": nil(X),
            "x": Variable(X),
            "(- 1)": Unary(MINUS, integer(1)),
            "(! (! x))": Unary(BANG, Unary(BANG, Variable(X))),
            "(group 1)": Grouping(integer(1)),
            "(+ 1 (* 2 3))": Binary(integer(1), PLUS, Binary(integer(2), STAR, integer(3))),
            "(* (group (+ 1 2)) 3)": Binary(Grouping(Binary(integer(1), PLUS, integer(2))), STAR, integer(3)),
            "(= x (+ x 1))": Assign(X, Binary(Variable(X), PLUS, integer(1))),
        }
        for expected, case in cases.items():
            self.assertEqual(expected, case.expr, repr(case))
            self.assertEqual(expected, str(case), repr(case))

    def test_equality(self):
        self.assertEqual(integer(1, line=1), integer(1, line=9))
        self.assertEqual(Binary(integer(1), PLUS, integer(2)), Binary(integer(1), PLUS, integer(2)))

        should_differ = [
            (integer(1), Grouping(integer(1))),
            (Variable(X), Literal(Value.string("x"), X)),
            (Binary(integer(1), PLUS, integer(2)), Binary(integer(2), PLUS, integer(1))),
        ]
        for left, right in should_differ:
            self.assertNotEqual(left, right, (left, right))

    def test_children(self):
        binary = Binary(integer(1), PLUS, integer(2))
        self.assertEqual([integer(1), integer(2)], binary.nodes)
        self.assertEqual(integer(1), binary.left)
        self.assertEqual(integer(2), binary.right)

        self.assertEqual(integer(3), Unary(MINUS, integer(3)).right)
        self.assertEqual(integer(3), Grouping(integer(3)).inner)
        self.assertEqual(integer(3), Assign(X, integer(3)).value)
        self.assertEqual([], Variable(X).nodes)

    def test_token(self):
        cases = {
            Variable(X): X,
            Assign(X, integer(1)): X,
            Unary(MINUS, Variable(X)): MINUS,
            Binary(Variable(X), PLUS, integer(1)): PLUS,
            Grouping(Variable(X)): X,
            nil(X): X,
        }
        for case, expected in cases.items():
            self.assertEqual(expected, case.token, repr(case))

    def test_nil(self):
        self.assertTrue(nil(X).is_nil)
        self.assertFalse(integer(0).is_nil)
        self.assertEqual(Value.nil(), nil(X).value)

    def test_display(self):
        self.assertEqual("Literal(expr='1')", integer(1).display())
        self.assertEqual(
            "Binary(expr='(+ 1 (- 2))', nodes=[\n"
            "    Literal(expr='1'),\n"
            "    Unary(expr='(- 2)', nodes=[\n"
            "        Literal(expr='2')\n"
            "    ])\n"
            "])",
            Binary(integer(1), PLUS, Unary(MINUS, integer(2))).display()
        )

    def test_repr(self):
        self.assertEqual("Binary('(+ 1 2)')", repr(Binary(integer(1), PLUS, integer(2))))
        self.assertEqual("Variable('x')", repr(Variable(X)))

    def test_spine(self):
        chain = Binary(Binary(Binary(integer(1), PLUS, integer(2)), STAR, integer(3)), MINUS, Grouping(integer(4)))
        self.assertEqual(["*", "+"], [node.operator.lexeme for node in chain.spine()[1:]])
        self.assertIs(chain, chain.spine()[0])
        self.assertEqual("(- (* (+ 1 2) 3) (group 4))", chain.expr)

        # a grouping ends the spine
        grouped = Binary(Grouping(Binary(integer(1), PLUS, integer(2))), PLUS, integer(3))
        self.assertEqual(1, len(grouped.spine()))

    def test_long_chain(self):
        chain = integer(1)
        for __ in range(20000):
            chain = Binary(chain, PLUS, integer(1))

        self.assertEqual(20000, len(chain.spine()))
        self.assertEqual("(+ " * 20000 + "1" + " 1)" * 20000, chain.expr)
        self.assertEqual("(+ 1 1)", chain.spine()[-1].expr)


if __name__ == '__main__':
    unittest.main()
