"""Runtime values of the Monkey language.

Every value the evaluator computes is an Object: Integer, Boolean, String, Null or Function (a closure). Values are
immutable once constructed. A Function shares, rather than copies, the Environment it was defined in.
"""

from dataclasses import dataclass
from enum import Enum

INT_MIN = -2 ** 31
INT_MAX = 2 ** 31 - 1


class ObjectType(Enum):
    INTEGER = "INTEGER"
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    NULL = "NULL"
    FUNCTION = "FUNCTION"

    def __str__(self):
        return self.value


class Object:
    """Superclass of all runtime values."""
    type = None

    def is_truthy(self):
        """null and false are falsy, everything else (including 0) is truthy."""
        return True

    def inspect(self):
        raise NotImplementedError()

    def __str__(self):
        return self.inspect()


@dataclass(frozen=True)
class Integer(Object):
    value: int
    type = ObjectType.INTEGER

    def inspect(self):
        return str(self.value)


@dataclass(frozen=True)
class Boolean(Object):
    value: bool
    type = ObjectType.BOOLEAN

    def is_truthy(self):
        return self.value

    def inspect(self):
        return "true" if self.value else "false"


@dataclass(frozen=True)
class String(Object):
    value: str
    type = ObjectType.STRING

    def inspect(self):
        return self.value


@dataclass(frozen=True)
class Null(Object):
    type = ObjectType.NULL

    def is_truthy(self):
        return False

    def inspect(self):
        return "null"


NULL = Null()
TRUE = Boolean(True)
FALSE = Boolean(False)


@dataclass(frozen=True, eq=False)
class Function(Object):
    """Closure: parameters and body of a function literal, plus the Environment it was evaluated in."""
    parameters: tuple
    body: object
    env: object
    type = ObjectType.FUNCTION

    def inspect(self):
        params = ",".join(param.name for param in self.parameters)
        return f"fn({params}){{{self.body}}}"

    def __repr__(self):
        return f"Function({self.inspect()!r})"
