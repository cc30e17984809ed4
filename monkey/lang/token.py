"""Lexical units of the Monkey language.

A Token is either a bare tag (punctuation, operators, keywords) or a tag carrying a payload:

```
IDENT    ::= [a-zA-Z_]+             ; payload: name (ASCII letters and underscores only)
INT      ::= [0-9]+                 ; payload: 32-bit signed integer
STRING   ::= '"' <any char>* '"'    ; payload: raw text between the quotes, no escapes
```

Tokens compare by kind and payload only: the source position is carried for error messages and
is never part of equality.
"""

from dataclasses import dataclass, field
from enum import Enum, IntEnum


class TokenKind(Enum):
    ILLEGAL = "ILLEGAL"
    EOF = "EOF"

    IDENT = "IDENT"
    INT = "INT"
    STRING = "STRING"

    ASSIGN = "="
    PLUS = "+"
    MINUS = "-"
    BANG = "!"
    ASTERISK = "*"
    SLASH = "/"
    LT = "<"
    GT = ">"
    EQ = "=="
    NOT_EQ = "!="

    COMMA = ","
    SEMICOLON = ";"
    LPAREN = "("
    RPAREN = ")"
    LBRACE = "{"
    RBRACE = "}"

    FUNCTION = "fn"
    LET = "let"
    TRUE = "true"
    FALSE = "false"
    IF = "if"
    ELSE = "else"
    RETURN = "return"

    def __str__(self):
        return self.value


KEYWORDS = {
    "fn": TokenKind.FUNCTION,
    "let": TokenKind.LET,
    "true": TokenKind.TRUE,
    "false": TokenKind.FALSE,
    "if": TokenKind.IF,
    "else": TokenKind.ELSE,
    "return": TokenKind.RETURN,
}

SINGLE_CHARS = {
    ";": TokenKind.SEMICOLON,
    ",": TokenKind.COMMA,
    "(": TokenKind.LPAREN,
    ")": TokenKind.RPAREN,
    "{": TokenKind.LBRACE,
    "}": TokenKind.RBRACE,
    "+": TokenKind.PLUS,
    "-": TokenKind.MINUS,
    "*": TokenKind.ASTERISK,
    "/": TokenKind.SLASH,
    "<": TokenKind.LT,
    ">": TokenKind.GT,
}


class Precedence(IntEnum):
    """Binding power of operators, lowest to highest."""
    LOWEST = 1
    EQUALS = 2       # == !=
    LESSGREATER = 3  # < >
    SUM = 4          # + -
    PRODUCT = 5      # * /
    PREFIX = 6       # !x -x
    CALL = 7         # f(x)


PRECEDENCES = {
    TokenKind.EQ: Precedence.EQUALS,
    TokenKind.NOT_EQ: Precedence.EQUALS,
    TokenKind.LT: Precedence.LESSGREATER,
    TokenKind.GT: Precedence.LESSGREATER,
    TokenKind.PLUS: Precedence.SUM,
    TokenKind.MINUS: Precedence.SUM,
    TokenKind.ASTERISK: Precedence.PRODUCT,
    TokenKind.SLASH: Precedence.PRODUCT,
    TokenKind.LPAREN: Precedence.CALL,
}


@dataclass(frozen=True)
class Token:
    kind: TokenKind
    literal: object = None
    line: int = field(default=0, compare=False)
    col: int = field(default=0, compare=False)

    @staticmethod
    def keyword(ident):
        """Returns the keyword kind matching ident, or None if ident is not a keyword."""
        return KEYWORDS.get(ident)

    @property
    def precedence(self):
        return PRECEDENCES.get(self.kind, Precedence.LOWEST)

    @property
    def text(self):
        """Source-like rendering of this token, used in error messages."""
        if self.kind is TokenKind.EOF:
            return "end of input"
        elif self.kind is TokenKind.STRING:
            return f'"{self.literal}"'
        elif self.literal is not None:
            return str(self.literal)
        return self.kind.value

    def __repr__(self):
        if self.literal is None:
            return f"Token({self.kind.name})"
        return f"Token({self.kind.name}, {self.literal!r})"

    def __str__(self):
        return self.text
