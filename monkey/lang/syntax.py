"""Abstract syntax tree of the Monkey language.

```
<program>    ::= <statement>*
<statement>  ::= "let" <identifier> "=" <expression> [";"]      ; LetStatement
               | "return" <expression> ";"                     ; ReturnStatement
               | <expression> [";"]                            ; ExpressionStatement
<block>      ::= "{" <statement>* "}"                          ; BlockStatement
<expression> ::= <identifier> | <integer> | <string> | "true" | "false"
               | <prefix-op> <expression>                      ; PrefixExpression
               | <expression> <infix-op> <expression>          ; InfixExpression
               | "(" <expression> ")"
               | "if" "(" <expression> ")" <block> ["else" <block>]
               | "fn" "(" [<identifier> ("," <identifier>)*] ")" <block>
               | <expression> "(" [<expression> ("," <expression>)*] ")"
```

Nodes are immutable and form a strict tree. str() of a node gives a compact rendering with every prefix and infix
expression parenthesized, e.g. `5 + 5 * 10` renders as `(5+(5*10))`.
"""

from dataclasses import dataclass, fields
from enum import Enum
from typing import Optional, Tuple


class PrefixOperator(Enum):
    BANG = "!"
    MINUS = "-"

    def __str__(self):
        return self.value


class InfixOperator(Enum):
    PLUS = "+"
    MINUS = "-"
    ASTERISK = "*"
    SLASH = "/"
    EQ = "=="
    NOT_EQ = "!="
    LT = "<"
    GT = ">"

    def __str__(self):
        return self.value


class Node:
    """Superclass of every AST node."""

    def display(self, indents=0):
        """Recursively displays the tree with a readable format.

        Format:
        <Node>(
            <field>=<Node>(...),
            <field>=[
                <Node>(...),
            ],
            <field>=<value>
        )
        """
        pad = "    " * indents
        result = f"{type(self).__name__}("

        for field in fields(self):
            value = getattr(self, field.name)
            if isinstance(value, Node):
                value = value.display(indents + 1).lstrip()
            elif isinstance(value, tuple):
                items = "".join(f"\n{item.display(indents + 2)}," for item in value)
                value = f"[{items}\n{pad}    ]" if value else "[]"
            elif isinstance(value, Enum):
                value = str(value)
            else:
                value = repr(value)
            result += f"\n{pad}    {field.name}={value},"

        return f"{pad}{result.rstrip(',')}\n{pad})"


class Statement(Node):
    """Superclass of statements."""


class Expression(Node):
    """Superclass of expressions."""


@dataclass(frozen=True)
class Identifier(Expression):
    name: str

    def __str__(self):
        return self.name


@dataclass(frozen=True)
class StringLiteral(Expression):
    value: str

    def __str__(self):
        return self.value


@dataclass(frozen=True)
class IntegerLiteral(Expression):
    value: int

    def __str__(self):
        return str(self.value)


@dataclass(frozen=True)
class BooleanLiteral(Expression):
    value: bool

    def __str__(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class PrefixExpression(Expression):
    operator: PrefixOperator
    right: Expression

    def __str__(self):
        return f"({self.operator}{self.right})"


@dataclass(frozen=True)
class InfixExpression(Expression):
    operator: InfixOperator
    left: Expression
    right: Expression

    def __str__(self):
        return f"({self.left}{self.operator}{self.right})"


@dataclass(frozen=True)
class LetStatement(Statement):
    name: Identifier
    value: Expression

    def __str__(self):
        return f"let {self.name} = {self.value};"


@dataclass(frozen=True)
class ReturnStatement(Statement):
    value: Expression

    def __str__(self):
        return f"return {self.value};"


@dataclass(frozen=True)
class ExpressionStatement(Statement):
    expression: Expression

    def __str__(self):
        return f"{self.expression};"


@dataclass(frozen=True)
class BlockStatement(Statement):
    statements: Tuple[Statement, ...]

    def __str__(self):
        return "".join(str(stmt) for stmt in self.statements)


@dataclass(frozen=True)
class IfExpression(Expression):
    condition: Expression
    consequence: BlockStatement
    alternative: Optional[BlockStatement] = None

    def __str__(self):
        if self.alternative is None:
            return f"if({self.condition}){{{self.consequence}}}"
        return f"if({self.condition}){{{self.consequence}}}else{{{self.alternative}}}"


@dataclass(frozen=True)
class FunctionLiteral(Expression):
    parameters: Tuple[Identifier, ...]
    body: BlockStatement

    def __str__(self):
        params = ",".join(str(param) for param in self.parameters)
        return f"fn({params}){{{self.body}}}"


@dataclass(frozen=True)
class CallExpression(Expression):
    function: Expression
    arguments: Tuple[Expression, ...]

    def __str__(self):
        args = ",".join(str(arg) for arg in self.arguments)
        return f"{self.function}({args})"


@dataclass(frozen=True)
class Program(Node):
    """Root of the tree: the statements of one parsed source text."""
    statements: Tuple[Statement, ...]

    def __str__(self):
        return "".join(f"{stmt}\n" for stmt in self.statements)
