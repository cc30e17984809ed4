import unittest

from monkey.interpreter import parse
from monkey.lang.error import IntegerLiteralOverflow, InvalidToken, ParseError, UnexpectedToken
from monkey.lang.syntax import (BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
                                Identifier, IfExpression, InfixExpression, InfixOperator, IntegerLiteral, LetStatement,
                                PrefixExpression, PrefixOperator, Program, ReturnStatement, StringLiteral)
from monkey.lang.token import Token, TokenKind


def expression_of(source):
    program = parse(source)
    assert len(program.statements) == 1, program
    stmt, = program.statements
    assert isinstance(stmt, ExpressionStatement), stmt
    return stmt.expression


class StatementTestCase(unittest.TestCase):

    def test_let_statements(self):
        program = parse("let x = 5;\nlet y = 10;\nlet foobar = 838383;")

        expected = [("x", 5), ("y", 10), ("foobar", 838383)]
        self.assertEqual(len(expected), len(program.statements))
        for stmt, (name, value) in zip(program.statements, expected):
            self.assertEqual(LetStatement(Identifier(name), IntegerLiteral(value)), stmt)

    def test_let_without_semicolon(self):
        cases = {
            "let x = 5": 1,
            "let x = 5\nlet y = x": 2,
            "let x = 5 x": 2,
            "let f = fn(x) { x }\nf(1);": 2,
        }
        for case, num_stmts in cases.items():
            self.assertEqual(num_stmts, len(parse(case).statements), case)

        program = parse("let x = 5\nx")
        self.assertEqual(ExpressionStatement(Identifier("x")), program.statements[1])

    def test_return_statements(self):
        program = parse("return 5;\nreturn 10;\nreturn 993322;")

        self.assertEqual(3, len(program.statements))
        for stmt, value in zip(program.statements, [5, 10, 993322]):
            self.assertEqual(ReturnStatement(IntegerLiteral(value)), stmt)

    def test_return_requires_semicolon(self):
        with self.assertRaises(UnexpectedToken) as ctx:
            parse("return 5")
        self.assertIs(TokenKind.SEMICOLON, ctx.exception.expected)
        self.assertEqual(Token(TokenKind.EOF), ctx.exception.got)

        self.assertRaises(UnexpectedToken, parse, "fn() { return 5 }")

    def test_empty_program(self):
        self.assertEqual(Program(()), parse(""))
        self.assertEqual(Program(()), parse("  \n\t"))


class ExpressionTestCase(unittest.TestCase):

    def test_literals(self):
        cases = {
            "foobar;": Identifier("foobar"),
            "5;": IntegerLiteral(5),
            '"hello world";': StringLiteral("hello world"),
            "true;": BooleanLiteral(True),
            "false": BooleanLiteral(False),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expression_of(case), case)

    def test_prefix_expressions(self):
        cases = {
            "!5;": PrefixExpression(PrefixOperator.BANG, IntegerLiteral(5)),
            "-15;": PrefixExpression(PrefixOperator.MINUS, IntegerLiteral(15)),
            "!true": PrefixExpression(PrefixOperator.BANG, BooleanLiteral(True)),
        }
        for case, expected in cases.items():
            self.assertEqual(expected, expression_of(case), case)

    def test_infix_expressions(self):
        operators = {
            "+": InfixOperator.PLUS,
            "-": InfixOperator.MINUS,
            "*": InfixOperator.ASTERISK,
            "/": InfixOperator.SLASH,
            ">": InfixOperator.GT,
            "<": InfixOperator.LT,
            "==": InfixOperator.EQ,
            "!=": InfixOperator.NOT_EQ,
        }
        for symbol, operator in operators.items():
            case = f"5 {symbol} 6;"
            expected = InfixExpression(operator, IntegerLiteral(5), IntegerLiteral(6))
            self.assertEqual(expected, expression_of(case), case)

    def test_operator_precedence(self):
        cases = {
            "5 + 5 * 10;": "(5+(5*10))",
            "- a * b": "((-a)*b)",
            "!-a": "(!(-a))",
            "a + b + c": "((a+b)+c)",
            "a + b - c": "((a+b)-c)",
            "a * b * c": "((a*b)*c)",
            "a * b / c": "((a*b)/c)",
            "a + b / c": "(a+(b/c))",
            "a + b * c + d / e - f": "(((a+(b*c))+(d/e))-f)",
            "5 > 4 == 3 < 4": "((5>4)==(3<4))",
            "5 < 4 != 3 > 4": "((5<4)!=(3>4))",
            "3 + 4 * 5 == 3 * 1 + 4 * 5": "((3+(4*5))==((3*1)+(4*5)))",
            "true == false": "(true==false)",
            "3 > 5 == false": "((3>5)==false)",
            "1 + (2 + 3) + 4": "((1+(2+3))+4)",
            "(5 + 5) * 2": "((5+5)*2)",
            "2 / (5 + 5)": "(2/(5+5))",
            "-(5 + 5)": "(-(5+5))",
            "!(true == true)": "(!(true==true))",
            "a + add(b * c) + d": "((a+add((b*c)))+d)",
            "add(a, b, 1, 2 * 3, 4 + 5, add(6, 7 * 8))": "add(a,b,1,(2*3),(4+5),add(6,(7*8)))",
            "add(a + b + c * d / f + g)": "add((((a+b)+((c*d)/f))+g))",
            "-f(x)": "(-f(x))",
            "f(x)(y)": "f(x)(y)",
        }
        for case, expected in cases.items():
            self.assertEqual(expected, str(expression_of(case)), case)

    def test_render_statements(self):
        cases = {
            "-5;": "(-5);",
            "5 + 5 * 10;": "(5+(5*10));",
            "(5 + 5 ) * 10;": "((5+5)*10);",
            "true;": "true;",
            "let x = false;": "let x = false;",
            "return x;": "return x;",
            "if (x) { 2 + 3 }": "if(x){(2+3);};",
            "if (x) { 2 + 3; 4/2; } else { 5; }": "if(x){(2+3);(4/2);}else{5;};",
            "fn(){ 5; }": "fn(){5;};",
            "fn(x, y) { x + y; }": "fn(x,y){(x+y);};",
            "add(1, 2*3);": "add(1,(2*3));",
            "add(1, minus(4, -1));": "add(1,minus(4,(-1)));",
        }
        for case, expected in cases.items():
            program = parse(case)
            self.assertEqual(1, len(program.statements), case)
            self.assertEqual(expected, str(program.statements[0]), case)

    def test_render_program(self):
        self.assertEqual("let x = 1;\n(x+1);\n", str(parse("let x = 1; x + 1")))

    def test_if_expression(self):
        expected = IfExpression(
            InfixExpression(InfixOperator.LT, Identifier("x"), Identifier("y")),
            BlockStatement((ExpressionStatement(Identifier("x")),)),
        )
        self.assertEqual(expected, expression_of("if (x < y) { x }"))

    def test_if_else_expression(self):
        expected = IfExpression(
            InfixExpression(InfixOperator.LT, Identifier("x"), Identifier("y")),
            BlockStatement((ExpressionStatement(Identifier("x")),)),
            BlockStatement((ExpressionStatement(Identifier("y")),)),
        )
        self.assertEqual(expected, expression_of("if (x < y) { x } else { y }"))

    def test_function_literal(self):
        expected = FunctionLiteral(
            (Identifier("x"), Identifier("y")),
            BlockStatement((ExpressionStatement(InfixExpression(InfixOperator.PLUS, Identifier("x"),
                                                                Identifier("y"))),)),
        )
        self.assertEqual(expected, expression_of("fn(x, y) { x + y; }"))

    def test_function_parameters(self):
        cases = {
            "fn() {};": [],
            "fn(x) {};": ["x"],
            "fn(x, y, z) {};": ["x", "y", "z"],
        }
        for case, expected in cases.items():
            params = [param.name for param in expression_of(case).parameters]
            self.assertEqual(expected, params, case)

    def test_call_expression(self):
        expected = CallExpression(Identifier("add"), (
            IntegerLiteral(1),
            InfixExpression(InfixOperator.ASTERISK, IntegerLiteral(2), IntegerLiteral(3)),
            InfixExpression(InfixOperator.PLUS, IntegerLiteral(4), IntegerLiteral(5)),
        ))
        self.assertEqual(expected, expression_of("add(1, 2 * 3, 4 + 5);"))
        self.assertEqual(CallExpression(Identifier("f"), ()), expression_of("f()"))

    def test_block_ends_at_end_of_input(self):
        expected = FunctionLiteral((), BlockStatement((ExpressionStatement(IntegerLiteral(1)),)))
        self.assertEqual(expected, expression_of("fn() { 1"))

    def test_display(self):
        display = parse("let x = -1;").display()
        self.assertIn("LetStatement(", display)
        self.assertIn("name=Identifier(", display)
        self.assertIn("operator=-", display)
        self.assertIn("value=1", display)


class ParseErrorTestCase(unittest.TestCase):

    def test_unexpected_token(self):
        cases = {
            "let = 5;": (TokenKind.IDENT, Token(TokenKind.ASSIGN)),
            "let x 5;": (TokenKind.ASSIGN, Token(TokenKind.INT, 5)),
            "let 5 = x;": (TokenKind.IDENT, Token(TokenKind.INT, 5)),
            "(1 + 2": (TokenKind.RPAREN, Token(TokenKind.EOF)),
            "if x { 1 }": (TokenKind.LPAREN, Token(TokenKind.IDENT, "x")),
            "if (x) 1": (TokenKind.LBRACE, Token(TokenKind.INT, 1)),
            "if (x { 1 }": (TokenKind.RPAREN, Token(TokenKind.LBRACE)),
            "if (x) { 1 } else 2": (TokenKind.LBRACE, Token(TokenKind.INT, 2)),
            "fn x { x }": (TokenKind.LPAREN, Token(TokenKind.IDENT, "x")),
            "fn(x) x": (TokenKind.LBRACE, Token(TokenKind.IDENT, "x")),
            "fn(x y) { x }": (TokenKind.RPAREN, Token(TokenKind.IDENT, "y")),
            "add(1, 2": (TokenKind.RPAREN, Token(TokenKind.EOF)),
        }
        for case, (expected, got) in cases.items():
            with self.assertRaises(UnexpectedToken, msg=case) as ctx:
                parse(case)
            self.assertIs(expected, ctx.exception.expected, case)
            self.assertEqual(got, ctx.exception.got, case)

    def test_invalid_token(self):
        cases = {
            "@": Token(TokenKind.ILLEGAL, "@"),
            "5 + ;": Token(TokenKind.SEMICOLON),
            ")": Token(TokenKind.RPAREN),
            "let x = ;": Token(TokenKind.SEMICOLON),
            "fn(1) { 1 }": Token(TokenKind.INT, 1),
            "fn(x, 1) { 1 }": Token(TokenKind.INT, 1),
            "else { 1 }": Token(TokenKind.ELSE),
            "1 + }": Token(TokenKind.RBRACE),
        }
        for case, token in cases.items():
            with self.assertRaises(InvalidToken, msg=case) as ctx:
                parse(case)
            self.assertEqual(token, ctx.exception.invalid, case)

    def test_stops_at_first_error(self):
        with self.assertRaises(InvalidToken) as ctx:
            parse("let x = 1;\n@;\nlet = 2;")
        self.assertEqual((2, 1), ctx.exception.position)

    def test_integer_literal_overflow(self):
        self.assertRaises(IntegerLiteralOverflow, parse, "let x = 2147483648;")

    def test_errors_are_parse_errors(self):
        should_raise = ["let = 1;", "@", "99999999999", "return 1"]
        for case in should_raise:
            self.assertRaises(ParseError, parse, case)

    def test_messages(self):
        cases = {
            "let x 5;": "expected '=', got '5'",
            "(1": "expected ')', got 'end of input'",
            "let = 1;": "expected 'IDENT', got '='",
            "$": "invalid token '$'",
            '1 + "s" +': "invalid token 'end of input'",
        }
        for case, msg in cases.items():
            with self.assertRaises(ParseError, msg=case) as ctx:
                parse(case)
            self.assertEqual(msg, str(ctx.exception), case)


if __name__ == '__main__':
    unittest.main()
