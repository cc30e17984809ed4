"""Lexical analysis for the Monkey language. The Lexer reads source text one character at a time and produces Tokens on
demand: there is no backing token list.

Lexical rules:

```
whitespace   ::= " " | "\\t" | "\\n" | "\\r"          ; skipped between tokens
operator     ::= "==" | "!=" | "=" | "!" | "+" | "-" | "*" | "/" | "<" | ">"
delimiter    ::= ";" | "," | "(" | ")" | "{" | "}"
identifier   ::= [a-zA-Z_]+                           ; ASCII only, keywords: fn let true false if else return
integer      ::= [0-9]+                               ; must fit in a 32-bit signed integer
string       ::= '"' <char>* ('"' | <end of input>)   ; no escape sequences
```

Any other character becomes an ILLEGAL token, which the parser reports as a syntax error.
"""

from monkey.lang.error import IntegerLiteralOverflow
from monkey.lang.objects import INT_MAX
from monkey.lang.token import SINGLE_CHARS, Token, TokenKind

EOF_CHAR = ""  # sentinel for end of input
WHITESPACE = (" ", "\t", "\n", "\r")


def is_letter(char):
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_digit(char):
    return "0" <= char <= "9"


class Lexer:
    """Two-character window (cur, peek) over the source. line and col give the 1-based position of cur."""

    def __init__(self, source):
        self._chars = iter(source)
        self.cur = EOF_CHAR
        self.peek = EOF_CHAR

        self.line = 1
        self.col = -1

        self.read_char()
        self.read_char()

    def read_char(self):
        """Advances one character and returns the character that was current."""
        char = self.cur
        if char == "\n":
            self.line += 1
            self.col = 1
        else:
            self.col += 1

        self.cur = self.peek
        self.peek = next(self._chars, EOF_CHAR)
        return char

    def skip_whitespace(self):
        while self.cur in WHITESPACE:
            self.read_char()

    def next_token(self):
        """Returns the next token. Once the end of input is reached, keeps returning EOF tokens."""
        self.skip_whitespace()
        line, col = self.line, self.col

        if self.cur == EOF_CHAR:
            return Token(TokenKind.EOF, line=line, col=col)
        elif is_letter(self.cur):
            return self.read_ident(line, col)
        elif is_digit(self.cur):
            return self.read_number(line, col)
        elif self.cur == '"':
            return self.read_string(line, col)

        if self.cur == "=" and self.peek == "=":
            self.read_char()
            kind = TokenKind.EQ
        elif self.cur == "=":
            kind = TokenKind.ASSIGN
        elif self.cur == "!" and self.peek == "=":
            self.read_char()
            kind = TokenKind.NOT_EQ
        elif self.cur == "!":
            kind = TokenKind.BANG
        elif self.cur in SINGLE_CHARS:
            kind = SINGLE_CHARS[self.cur]
        else:
            return Token(TokenKind.ILLEGAL, self.read_char(), line, col)

        self.read_char()
        return Token(kind, line=line, col=col)

    def read_ident(self, line, col):
        """Reads one identifier and converts it to a keyword token if it is one."""
        chars = []
        while is_letter(self.cur):
            chars.append(self.read_char())
        ident = "".join(chars)

        keyword = Token.keyword(ident)
        if keyword is not None:
            return Token(keyword, line=line, col=col)
        return Token(TokenKind.IDENT, ident, line, col)

    def read_number(self, line, col):
        chars = []
        while is_digit(self.cur):
            chars.append(self.read_char())

        token = Token(TokenKind.INT, int("".join(chars)), line, col)
        if token.literal > INT_MAX:
            raise IntegerLiteralOverflow(token)
        return token

    def read_string(self, line, col):
        """Reads a string literal up to the closing quote (or the end of input). The quotes are not part of the
        literal.
        """
        self.read_char()

        chars = []
        while self.cur != '"' and self.cur != EOF_CHAR:
            chars.append(self.read_char())

        if self.cur == '"':
            self.read_char()
        return Token(TokenKind.STRING, "".join(chars), line, col)

    def __iter__(self):
        """Yields tokens up to and including the first EOF token."""
        while True:
            token = self.next_token()
            yield token
            if token.kind is TokenKind.EOF:
                break
