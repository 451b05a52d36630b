import io
import unittest

from taco.core.scanner import scan
from taco.core.tokens import TokenKind
from taco.lang.error import ErrorHandler
from taco.lang.parser import Parser
from taco.lang.session import Session
from taco.lang.statement import BlockStmt, ExpressionStmt, LetStmt, PrintStmt


def parse(source, fail_fast=False):
    """Returns (statements, errors, reported text) for source."""
    handler = ErrorHandler(io.StringIO(), color=False)
    parser = Parser(scan(source, handler), handler, fail_fast)
    statements = parser.parse()
    return statements, parser.errors, handler.stream.getvalue()


class ParserTestCase(unittest.TestCase):

    def test_precedence(self):
        cases = {
            "1 + 2 * 3;": "(+ 1 (* 2 3))",
            "(1 + 2) * 3;": "(* (group (+ 1 2)) 3)",
            "1 - 2 - 3;": "(- (- 1 2) 3)",
            "8 / 4 / 2;": "(/ (/ 8 4) 2)",
            "8 / 4 * 2;": "(* (/ 8 4) 2)",
            "1 + 2 > 3 * 4;": "(> (+ 1 2) (* 3 4))",
            "1 < 2 == 3 >= 4;": "(== (< 1 2) (>= 3 4))",
            "a != b == c;": "(== (!= a b) c)",
            "-!x;": "(- (! x))",
            "--1;": "(- (- 1))",
            "-1 * 2;": "(* (- 1) 2)",
            "x = y = 3;": "(= x (= y 3))",
            "x = 1 + 2;": "(= x (+ 1 2))",
            "((1));": "(group (group 1))",
            "\"ab\" + \"cd\";": "(+ \"ab\" \"cd\")",
            "1.5 <= 2.0;": "(<= 1.5 2)",
            "true != nil;": "(!= true nil)",
        }
        for case, expected in cases.items():
            statements, errors, __ = parse(case)
            self.assertEqual([], errors, case)
            self.assertEqual(1, len(statements), case)
            self.assertIsInstance(statements[0], ExpressionStmt, case)
            self.assertEqual(expected, statements[0].expression.expr, case)

    def test_statements(self):
        cases = {
            "let x;": (LetStmt, "let x = nil;"),
            "let x = 1 + 2;": (LetStmt, "let x = (+ 1 2);"),
            "let y = x;": (LetStmt, "let y = x;"),
            "print x;": (PrintStmt, "print x;"),
            "print \"hi\";": (PrintStmt, "print \"hi\";"),
            "x;": (ExpressionStmt, "x;"),
            "{}": (BlockStmt, "{ }"),
            "{ let a = 1; print a; }": (BlockStmt, "{ let a = 1; print a; }"),
            "{ { print 1; } }": (BlockStmt, "{ { print 1; } }"),
        }
        for case, (cls, expected) in cases.items():
            statements, errors, __ = parse(case)
            self.assertEqual([], errors, case)
            self.assertEqual(1, len(statements), case)
            self.assertIsInstance(statements[0], cls, case)
            self.assertEqual(expected, statements[0].expr, case)

    def test_statement_sequence(self):
        statements, errors, __ = parse("let x = 5;\nprint x + 1;\nx;")
        self.assertEqual([], errors)
        self.assertEqual(["let x = 5;", "print (+ x 1);", "x;"], [stmt.expr for stmt in statements])
        self.assertEqual(1, statements[0].name.line)
        self.assertEqual(2, statements[1].keyword.line)

    def test_literals(self):
        statements, __, __ = parse("let a = 1; let b = \"1\"; let c = 1.0; let d = true;")
        self.assertEqual(["Integer", "String", "Float", "Boolean"],
                         [str(stmt.initializer.value.kind) for stmt in statements])

    def test_syntax_errors(self):
        cases = {
            "let ;": ("Expect variable name.", ";", "[line 1] Error at ';': Expect variable name."),
            "let 1 = 2;": ("Expect variable name.", "1", "[line 1] Error at '1': Expect variable name."),
            "let taco = 1;": ("Expect variable name.", "taco", "[line 1] Error at 'taco': Expect variable name."),
            "let function;": ("Expect variable name.", "function",
                              "[line 1] Error at 'function': Expect variable name."),
            "let x = 1": ("Expect ';' after variable declaration.", "1",
                          "[line 1] Error at '1': Expect ';' after variable declaration."),
            "print 1": ("Expect ';' after value.", "", "[line 1] Error at end: Expect ';' after value."),
            "1 2;": ("Expect ';' after expression.", "2", "[line 1] Error at '2': Expect ';' after expression."),
            "1 +": ("Expect expression.", "", "[line 1] Error at end: Expect expression."),
            "(1 + 2;": ("Expect ')' after expression.", ";", "[line 1] Error at ';': Expect ')' after expression."),
            "{ print 1;": ("Expect '}' after block.", "", "[line 1] Error at end: Expect '}' after block."),
            "1 = 2;": ("Invalid assignment target.", "=", "[line 1] Error at '=': Invalid assignment target."),
            ";": ("Expect expression.", ";", "[line 1] Error at ';': Expect expression."),
            "\n\n)": ("Expect expression.", ")", "[line 3] Error at ')': Expect expression."),
        }
        for case, (msg, lexeme, report) in cases.items():
            __, errors, reported = parse(case)
            self.assertEqual(1, len(errors), case)
            self.assertEqual(msg, errors[0].msg, case)
            self.assertEqual(lexeme, errors[0].token.lexeme, case)
            self.assertEqual(report + "\n", reported, case)

    def test_error_at_end_token(self):
        __, errors, __ = parse("1 +")
        self.assertEqual(TokenKind.EOF, errors[0].token.kind)

    def test_error_collecting(self):
        statements, errors, reported = parse("let ; print 1; let = 2; print 3;")
        self.assertEqual(["print 1;", "print 3;"], [stmt.expr for stmt in statements])
        self.assertEqual(["Expect variable name.", "Expect variable name."], [error.msg for error in errors])
        self.assertEqual(["\";\"", "\"=\""], [f"\"{error.token.lexeme}\"" for error in errors])
        self.assertEqual(2, len(reported.splitlines()))

        statements, errors, __ = parse("print 1; let ; print 2;")
        self.assertEqual(["print 1;", "print 2;"], [stmt.expr for stmt in statements])
        self.assertEqual(1, len(errors))

    def test_fail_fast(self):
        statements, errors, reported = parse("let ; print 1; let = 2; print 3;", fail_fast=True)
        self.assertEqual([], statements)
        self.assertEqual(1, len(errors))
        self.assertEqual("[line 1] Error at ';': Expect variable name.\n", reported)

        statements, errors, __ = parse("print 1; let ; print 2;", fail_fast=True)
        self.assertEqual(["print 1;"], [stmt.expr for stmt in statements])
        self.assertEqual(1, len(errors))

        statements, errors, __ = parse("1 = 2; print 3;", fail_fast=True)
        self.assertEqual(["Invalid assignment target."], [error.msg for error in errors])
        self.assertEqual(["1;"], [stmt.expr for stmt in statements])

    def test_synchronize(self):
        # stops before a token that begins a statement
        statements, errors, __ = parse("1 + * 2 print 3;")
        self.assertEqual(["print 3;"], [stmt.expr for stmt in statements])
        self.assertEqual(1, len(errors))

        # stops after a ';'
        statements, errors, __ = parse("1 + ; 2;")
        self.assertEqual(["2;"], [stmt.expr for stmt in statements])
        self.assertEqual(1, len(errors))

        # an error inside a block abandons the block, so its closing brace is an error of its own
        statements, errors, __ = parse("{ let ; } print 4;")
        self.assertEqual(["Expect variable name.", "Expect expression."], [error.msg for error in errors])
        self.assertEqual(["print 4;"], [stmt.expr for stmt in statements])

    def test_deep_nesting(self):
        # a session makes room for realistic nesting depths
        sess = Session(out=io.StringIO(), err=io.StringIO(), color=False)
        source = "print " + "(" * 200 + "1" + ")" * 200 + ";"
        statements, errors, __ = parse(source)
        self.assertEqual([], errors)
        self.assertEqual("print " + "(group " * 200 + "1" + ")" * 200 + ";", statements[0].expr)
        self.assertTrue(sess.run(source))
        self.assertEqual("1\n", sess.out.getvalue())

        source = "(" * 5000 + "1" + ")" * 5000 + ";"
        statements, errors, __ = parse(source)
        self.assertEqual([], statements)
        self.assertEqual(["Expression nesting too deep."], [error.msg for error in errors])

    def test_empty(self):
        should_pass = ["", "   ", "# nothing\n", "/* nothing */"]
        for case in should_pass:
            self.assertEqual(([], [], ""), parse(case), case)


if __name__ == '__main__':
    unittest.main()
