import unittest

from lamb.lang.error import InvalidTokenError, UnexpectedTokenError
from lamb.pure.lexical import Token, TokenKind, lex
from lamb.pure.syntax import (Atom, Define, Expr, ExprList, Invocation, Lambda, Let, Number, OptExprList, Parser,
                              Program, parse)


def name(text):
    return Token(TokenKind.NAME, text, text)


def integer(value):
    return Token(TokenKind.INT, value, str(value))


OPAREN = Token(TokenKind.OPAREN, text="(")
CPAREN = Token(TokenKind.CPAREN, text=")")


class ParserTestCase(unittest.TestCase):

    def test_atoms(self):
        cases = {
            "42": Atom(Number(integer(42))),
            "2.5": Atom(Number(Token(TokenKind.FLOAT, 2.5, "2.5"))),
            '"hi"': Atom(Token(TokenKind.STRING, "hi", '"hi"')),
            "x": Atom(name("x")),
        }
        for case, expected in cases.items():
            self.assertEqual(Program(ExprList(Expr(expected), OptExprList())), parse(case), case)

    def test_expr_list(self):
        program = parse("1 2 3")
        self.assertEqual([1, 2, 3], [expr.form.value.token.literal for expr in program.exprs])

        rest = program.exprs.rest
        self.assertFalse(rest.is_epsilon)
        self.assertTrue(rest.exprs.rest.exprs.rest.is_epsilon)

    def test_forms(self):
        cases = {
            "define x 1": Define(Token(TokenKind.DEFINE, text="define"), name("x"), Expr(Atom(Number(integer(1))))),
            "let (x 1) x": Let(Token(TokenKind.LET, text="let"), OPAREN, name("x"), Expr(Atom(Number(integer(1)))),
                               CPAREN, Expr(Atom(name("x")))),
            "lambda (x) x": Lambda(Token(TokenKind.LAMBDA, text="lambda"), OPAREN, name("x"), CPAREN,
                                   Expr(Atom(name("x")))),
            "(f 1)": Invocation(OPAREN, ExprList(Expr(Atom(name("f"))),
                                                 OptExprList(ExprList(Expr(Atom(Number(integer(1)))),
                                                                      OptExprList()))), CPAREN),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case).exprs.expr.form, case)

    def test_nested(self):
        program = parse("define f let (m 8) lambda (x) (+ (- m 1) x)\n(f 3)")
        define, call = list(program.exprs)

        self.assertIsInstance(define.form, Define)
        self.assertIsInstance(define.form.value.form, Let)
        self.assertIsInstance(define.form.value.form.body.form, Lambda)
        self.assertIsInstance(call.form, Invocation)
        self.assertEqual(2, len(list(call.form.exprs)))

    def test_unexpected_token(self):
        should_raise = ["(", "", ")", "(f 1", "1 )", "define", "define 1 2", "let x 1", "let (x 1 x",
                        "lambda x x", "lambda (1) x", "lambda (x y) x", "()"]
        for case in should_raise:
            self.assertRaises(UnexpectedTokenError, parse, case)

    def test_invalid_token(self):
        should_raise = ["@@@", "1 @", "(f #t)", "define x @", "let (x 1) ;x"]
        for case in should_raise:
            self.assertRaises(InvalidTokenError, parse, case)

    def test_error_details(self):
        with self.assertRaises(UnexpectedTokenError) as context:
            parse("(")
        self.assertEqual(TokenKind.LAMBDA, context.exception.expected)
        self.assertIsNone(context.exception.found)

        with self.assertRaises(UnexpectedTokenError) as context:
            parse("lambda (1) x")
        self.assertEqual(TokenKind.NAME, context.exception.expected)
        self.assertEqual(integer(1), context.exception.found)

        with self.assertRaises(InvalidTokenError) as context:
            parse("(f @x y)")
        self.assertEqual("@x y)", context.exception.remainder)

    def test_long_program(self):
        program = parse("\n".join(f"define x{i} {i}" for i in range(2000)) + "\nx1999")
        exprs = list(program.exprs)

        self.assertEqual(2001, len(exprs))
        self.assertEqual("x1999", exprs[-1].form.value.literal)
        self.assertEqual(6001, len(list(program.tokens())))

    def test_parser_is_independent(self):
        tokens = lex("1 2")
        first, second = Parser(tokens), Parser(tokens)
        self.assertEqual(first.parse(), second.parse())
        self.assertEqual(2, first.pos)

    def test_text(self):
        cases = {
            "(f  1\n 2)": "(f 1 2)",
            "let (x 1) x": "let (x 1) x",
            '(string-append "a" "b")': '(string-append "a" "b")',
        }
        for case, expected in cases.items():
            self.assertEqual(expected, parse(case).text, case)

    def test_display(self):
        self.assertEqual("Program(\n"
                         "    ExprList(\n"
                         "        Expr(\n"
                         "            Atom(\n"
                         "                Token(NAME, 'x')\n"
                         "            )\n"
                         "        )\n"
                         "        OptExprList(\n"
                         "        )\n"
                         "    )\n"
                         ")", parse("x").display())


if __name__ == '__main__':
    unittest.main()
