"""Pratt (precedence climbing) parser for the Monkey language. Consumes a Lexer's tokens and builds a Program.

The parser keeps two tokens, cur_token and peek_token. Every parse_* method starts with cur_token on the first token
of what it parses and returns with cur_token on the last one.

There is no error recovery: the first syntax error is raised and parsing stops.
"""

from monkey.lang.error import InvalidToken, UnexpectedToken
from monkey.lang.token import Precedence, TokenKind
from monkey.lang.syntax import (BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
                                Identifier, IfExpression, InfixExpression, InfixOperator, IntegerLiteral, LetStatement,
                                PrefixExpression, PrefixOperator, Program, ReturnStatement, StringLiteral)

PREFIX_OPERATORS = {
    TokenKind.BANG: PrefixOperator.BANG,
    TokenKind.MINUS: PrefixOperator.MINUS,
}

INFIX_OPERATORS = {
    TokenKind.PLUS: InfixOperator.PLUS,
    TokenKind.MINUS: InfixOperator.MINUS,
    TokenKind.ASTERISK: InfixOperator.ASTERISK,
    TokenKind.SLASH: InfixOperator.SLASH,
    TokenKind.EQ: InfixOperator.EQ,
    TokenKind.NOT_EQ: InfixOperator.NOT_EQ,
    TokenKind.LT: InfixOperator.LT,
    TokenKind.GT: InfixOperator.GT,
}


class Parser:

    def __init__(self, lexer):
        self.lexer = lexer
        self.cur_token = None
        self.peek_token = None

        self.prefix_parse_fns = {
            TokenKind.IDENT: self.parse_identifier,
            TokenKind.INT: self.parse_integer_literal,
            TokenKind.STRING: self.parse_string_literal,
            TokenKind.TRUE: self.parse_boolean,
            TokenKind.FALSE: self.parse_boolean,
            TokenKind.BANG: self.parse_prefix_expression,
            TokenKind.MINUS: self.parse_prefix_expression,
            TokenKind.LPAREN: self.parse_grouped_expression,
            TokenKind.IF: self.parse_if_expression,
            TokenKind.FUNCTION: self.parse_function_literal,
        }
        self.infix_parse_fns = {kind: self.parse_infix_expression for kind in INFIX_OPERATORS}
        self.infix_parse_fns[TokenKind.LPAREN] = self.parse_call_expression

        self.next_token()
        self.next_token()

    def next_token(self):
        self.cur_token = self.peek_token
        self.peek_token = self.lexer.next_token()

    def cur_token_is(self, kind):
        return self.cur_token.kind is kind

    def peek_token_is(self, kind):
        return self.peek_token.kind is kind

    def expect_peek(self, kind):
        """Advances if peek_token is of the given kind, raises UnexpectedToken otherwise."""
        if not self.peek_token_is(kind):
            raise UnexpectedToken(kind, self.peek_token)
        self.next_token()

    def parse_program(self):
        statements = []
        while not self.cur_token_is(TokenKind.EOF):
            statements.append(self.parse_statement())
            self.next_token()
        return Program(tuple(statements))

    def parse_statement(self):
        if self.cur_token_is(TokenKind.LET):
            return self.parse_let_statement()
        elif self.cur_token_is(TokenKind.RETURN):
            return self.parse_return_statement()
        return self.parse_expression_statement()

    def parse_let_statement(self):
        """let <identifier> = <expression>, with an optional trailing semicolon."""
        self.expect_peek(TokenKind.IDENT)
        name = self.parse_identifier()

        self.expect_peek(TokenKind.ASSIGN)
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return LetStatement(name, value)

    def parse_return_statement(self):
        """return <expression>; (the semicolon is required)"""
        self.next_token()
        value = self.parse_expression(Precedence.LOWEST)

        self.expect_peek(TokenKind.SEMICOLON)
        return ReturnStatement(value)

    def parse_expression_statement(self):
        expression = self.parse_expression(Precedence.LOWEST)

        if self.peek_token_is(TokenKind.SEMICOLON):
            self.next_token()
        return ExpressionStatement(expression)

    def parse_block_statement(self):
        """Parses statements from the current '{' up to the matching '}' or the end of input."""
        self.next_token()

        statements = []
        while not self.cur_token_is(TokenKind.RBRACE) and not self.cur_token_is(TokenKind.EOF):
            statements.append(self.parse_statement())
            self.next_token()
        return BlockStatement(tuple(statements))

    def parse_expression(self, precedence):
        """Parses a prefix expression, then folds it into infix and call expressions as long as the next operator binds
        tighter than precedence. Operators of equal precedence therefore associate to the left.
        """
        prefix = self.prefix_parse_fns.get(self.cur_token.kind)
        if prefix is None:
            raise InvalidToken(self.cur_token)
        left = prefix()

        while not self.peek_token_is(TokenKind.SEMICOLON) and precedence < self.peek_token.precedence:
            infix = self.infix_parse_fns.get(self.peek_token.kind)
            if infix is None:
                return left

            self.next_token()
            left = infix(left)

        return left

    def parse_identifier(self):
        return Identifier(self.cur_token.literal)

    def parse_integer_literal(self):
        return IntegerLiteral(self.cur_token.literal)

    def parse_string_literal(self):
        return StringLiteral(self.cur_token.literal)

    def parse_boolean(self):
        return BooleanLiteral(self.cur_token_is(TokenKind.TRUE))

    def parse_prefix_expression(self):
        operator = PREFIX_OPERATORS[self.cur_token.kind]
        self.next_token()
        return PrefixExpression(operator, self.parse_expression(Precedence.PREFIX))

    def parse_infix_expression(self, left):
        operator = INFIX_OPERATORS[self.cur_token.kind]
        precedence = self.cur_token.precedence
        self.next_token()
        return InfixExpression(operator, left, self.parse_expression(precedence))

    def parse_grouped_expression(self):
        self.next_token()
        expression = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)
        return expression

    def parse_if_expression(self):
        """if (<condition>) { ... } [else { ... }]"""
        self.expect_peek(TokenKind.LPAREN)
        self.next_token()
        condition = self.parse_expression(Precedence.LOWEST)
        self.expect_peek(TokenKind.RPAREN)

        self.expect_peek(TokenKind.LBRACE)
        consequence = self.parse_block_statement()

        alternative = None
        if self.peek_token_is(TokenKind.ELSE):
            self.next_token()
            self.expect_peek(TokenKind.LBRACE)
            alternative = self.parse_block_statement()

        return IfExpression(condition, consequence, alternative)

    def parse_function_literal(self):
        """fn (<parameters>) { ... }"""
        self.expect_peek(TokenKind.LPAREN)
        parameters = self.parse_function_parameters()

        self.expect_peek(TokenKind.LBRACE)
        return FunctionLiteral(parameters, self.parse_block_statement())

    def parse_function_parameters(self):
        """Comma-separated identifiers up to ')'. Anything but an identifier in parameter position is an error."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        parameters = []
        self.next_token()
        while True:
            if not self.cur_token_is(TokenKind.IDENT):
                raise InvalidToken(self.cur_token)
            parameters.append(self.parse_identifier())

            if not self.peek_token_is(TokenKind.COMMA):
                break
            self.next_token()
            self.next_token()

        self.expect_peek(TokenKind.RPAREN)
        return tuple(parameters)

    def parse_call_expression(self, function):
        return CallExpression(function, self.parse_call_arguments())

    def parse_call_arguments(self):
        """Comma-separated expressions up to ')'."""
        if self.peek_token_is(TokenKind.RPAREN):
            self.next_token()
            return ()

        arguments = []
        self.next_token()
        arguments.append(self.parse_expression(Precedence.LOWEST))
        while self.peek_token_is(TokenKind.COMMA):
            self.next_token()
            self.next_token()
            arguments.append(self.parse_expression(Precedence.LOWEST))

        self.expect_peek(TokenKind.RPAREN)
        return tuple(arguments)
