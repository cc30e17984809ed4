"""Error handling for the Monkey language. Only MonkeyErrors should be encountered while running a program: if another
type of error makes it all the way to ErrorHandler, it is assumed to be an internal issue.

Taxonomy:
- ParseError: raised by the lexer/parser. Parsing stops at the first error, there is no recovery.
- EvaluationError: raised by the evaluator. Evaluation of the current program stops immediately.
"""

import sys

from termcolor import colored

from monkey.lang.token import TokenKind


class MonkeyError(Exception):
    """Templates an error message so that it can be displayed with its offending snippets highlighted. token is the
    token that caused the error, if known, and is used to point at the error in the source.
    """

    def __init__(self, msg, exprs=None, token=None, diagnosis=True, internal=False):
        if exprs is None:
            exprs = ()
        if not isinstance(exprs, (tuple, list)):
            exprs = (exprs,)

        self.template = msg
        self.exprs = tuple(str(expr) for expr in exprs)
        self.msg = msg.format(*self.exprs)
        self.token = token

        self.diagnosis = diagnosis
        self.internal = internal

        super().__init__(self.msg)

    def colored_msg(self):
        """Returns self.msg with expr snippets bolded."""
        return self.template.format(*(colored(expr, attrs=["bold"]) for expr in self.exprs))

    @property
    def position(self):
        """(line, col) of the offending token, or None if unknown."""
        if self.token is None or not self.token.line:
            return None
        return self.token.line, self.token.col


class ParseError(MonkeyError):
    """Syntax error: raised by the lexer or parser."""


class UnexpectedToken(ParseError):

    def __init__(self, expected, got):
        self.expected = expected
        self.got = got
        super().__init__("expected '{}', got '{}'", (expected, got.text), token=got)


class InvalidToken(ParseError):
    """Token that cannot start an expression (or appear where it was found)."""

    def __init__(self, token):
        self.invalid = token
        super().__init__("invalid token '{}'", token.text, token=token)


class IntegerLiteralOverflow(ParseError):

    def __init__(self, token):
        self.literal = token.literal
        super().__init__("integer literal '{}' does not fit in 32 bits", token.text, token=token)


class EvaluationError(MonkeyError):
    """Runtime error: raised by the evaluator."""


class IdentifierNotFound(EvaluationError):

    def __init__(self, name):
        self.name = name
        super().__init__("identifier not found: '{}'", name)


class TypeMismatch(EvaluationError):

    def __init__(self, left, operator, right):
        self.left, self.operator, self.right = left, operator, right
        super().__init__("type mismatch: '{}'", f"{left} {operator} {right}")


class UnknownOperator(EvaluationError):

    def __init__(self, left, operator, right):
        self.left, self.operator, self.right = left, operator, right
        super().__init__("unknown operator: '{}'", f"{left} {operator} {right}")


class IncorrectNumberOfArgs(EvaluationError):

    def __init__(self, expected, got):
        self.expected = expected
        self.got = got
        super().__init__("wrong number of arguments: expected {}, got {}", (expected, got))


class NotAFunction(EvaluationError):

    def __init__(self, kind):
        self.kind = kind
        super().__init__("not a function: '{}'", kind)


class IntegerOverflow(EvaluationError):
    """left is None for prefix operations."""

    def __init__(self, left, operator, right):
        self.left, self.operator, self.right = left, operator, right
        expr = f"{operator}{right}" if left is None else f"{left} {operator} {right}"
        super().__init__("integer overflow: '{}'", expr)


class DivisionByZero(EvaluationError):

    def __init__(self, left):
        self.left = left
        super().__init__("division by zero: '{}'", f"{left} / 0")


class RecursionDepthExceeded(EvaluationError):
    """limit is None when the host stack ran out before the call depth limit was reached."""

    def __init__(self, limit=None):
        self.limit = limit
        if limit is None:
            super().__init__("maximum recursion depth exceeded (host stack exhausted)")
        else:
            super().__init__("maximum recursion depth exceeded (limit: {})", limit)


class ErrorHandler:
    """Context manager that will silently suppress Python errors and print Monkey errors."""
    ERROR = "red"
    STEP = "cyan"

    def __init__(self, fatal=True, verbose=False):
        self.fatal = fatal
        self.verbose = verbose
        self.traceback = {}

    def register_file(self, path):
        """Registers path in traceback."""
        self.traceback[path] = (None, None)

    def register_line(self, path, source, line_num):
        """Registers source (starting at line line_num of path) in traceback. Should be called prior to Session add/run.
        """
        self.traceback[path] = (source, line_num)

    def remove_line(self, path):
        """Removes source from traceback given path. Should be called after successful Session add/run."""
        self.traceback[path] = (None, None)

    def register_step(self, kind, text):
        """Prints an intermediate result (parsed program, evaluated value) if verbose."""
        if self.verbose:
            print(colored(f"[{kind}] ", ErrorHandler.STEP, attrs=["bold"]) + str(text))

    @staticmethod
    def diagnose(error, line):
        """Returns offending token of line highlighted and bolded, with a caret line underneath."""
        start = min(error.token.col - 1, len(line))
        width = 1 if error.token.kind is TokenKind.EOF else len(error.token.text)
        end = min(start + width, len(line)) if start < len(line) else start + 1

        diagnosis = "  " + line[:start]
        diagnosis += colored(line[start:end], ErrorHandler.ERROR, attrs=["bold"])
        diagnosis += line[end:] + "\n"

        diagnosis += "  " + " " * start
        diagnosis += colored("^" + "~" * (end - start - 1), ErrorHandler.ERROR, attrs=["bold"])

        return diagnosis

    def throw(self, error):
        """Prints error using error and self.traceback, which maps each file to (source, first line number) of the
        code that was running when error was raised. Exits if self.fatal.
        """
        error_msg = ""
        offending_line = None

        for file, (source, line_num) in self.traceback.items():
            if source is None:
                continue

            lines = source.splitlines()
            position = error.position
            if position and position[0] <= len(lines):
                line, col = position
                offending_line = lines[line - 1]
                error_msg += colored(f"{file}:{line_num + line - 1}:{col}: ", attrs=["bold"])
            else:
                error_msg += colored(f"{file}:{line_num}: ", attrs=["bold"])

        if error.internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])

        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + error.colored_msg()
        print(error_msg)

        if offending_line is not None and error.diagnosis:
            print(ErrorHandler.diagnose(error, offending_line))

        if self.fatal:
            sys.exit(1)
        self.traceback = {path: (None, None) for path in self.traceback}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        do_exit = False
        if exc_type is KeyboardInterrupt:
            self.throw(MonkeyError("keyboard interrupt", diagnosis=False))
        elif exc_type is SystemExit:
            do_exit = True
        elif exc_type is RecursionError:
            self.throw(MonkeyError("maximum recursion depth exceeded", diagnosis=False))
        elif exc_type is not None and issubclass(exc_type, MonkeyError):
            self.throw(exc_val)
        elif exc_type is not None:
            self.throw(MonkeyError("unknown error: '{}'", f"{exc_type.__name__}: {exc_val}", internal=True))
            do_exit = True

        return not do_exit
