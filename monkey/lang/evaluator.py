"""Tree-walking evaluator for the Monkey language. Walks a Program and computes Objects, threading Environments through
the walk. There is no intermediate representation.

Semantics worth knowing:
- `return` stops evaluation up to the nearest function call, or the whole program at top level.
- Blocks (`if` bodies, function bodies) do not open a new scope: only function calls do.
- A call's scope encloses the Environment the function was defined in, not the caller's: scoping is lexical.
- Integers are 32-bit signed: overflow and division by zero are errors, division truncates toward zero.
"""

from monkey.lang.environment import Environment
from monkey.lang.error import (DivisionByZero, IncorrectNumberOfArgs, IntegerOverflow, NotAFunction,
                               RecursionDepthExceeded, TypeMismatch, UnknownOperator)
from monkey.lang.objects import (FALSE, INT_MAX, INT_MIN, NULL, TRUE, Boolean, Function, Integer, ObjectType,
                                 String)
from monkey.lang.syntax import (BlockStatement, BooleanLiteral, CallExpression, ExpressionStatement, FunctionLiteral,
                                Identifier, IfExpression, InfixExpression, InfixOperator, IntegerLiteral, LetStatement,
                                PrefixExpression, PrefixOperator, ReturnStatement, StringLiteral)

PRIMITIVES = (ObjectType.INTEGER, ObjectType.BOOLEAN, ObjectType.STRING)


class ReturnSignal(Exception):
    """Raised by a return statement, caught at the function call (or program) boundary."""

    def __init__(self, value):
        super().__init__(self.__class__.__name__)
        self.value = value


def native_bool(value):
    return TRUE if value else FALSE


class Evaluator:
    """Evaluates Programs. depth counts the function calls currently active."""
    RECURSION_LIMIT = 100

    def __init__(self, max_depth=None):
        self.max_depth = max_depth if max_depth is not None else Evaluator.RECURSION_LIMIT
        self.depth = 0

    def evaluate(self, program, env):
        """Evaluates program's statements in env and returns the value of the last one, or the value of the first
        return statement reached.
        """
        self.depth = 0
        result = NULL
        try:
            for stmt in program.statements:
                result = self.eval_statement(stmt, env)
        except ReturnSignal as signal:
            return signal.value
        except RecursionError:
            raise RecursionDepthExceeded() from None
        return result

    def eval_statement(self, stmt, env):
        if isinstance(stmt, ExpressionStatement):
            return self.eval_expression(stmt.expression, env)
        elif isinstance(stmt, LetStatement):
            env.set(stmt.name.name, self.eval_expression(stmt.value, env))
            return NULL
        elif isinstance(stmt, ReturnStatement):
            raise ReturnSignal(self.eval_expression(stmt.value, env))
        elif isinstance(stmt, BlockStatement):
            return self.eval_block(stmt, env)
        raise TypeError(f"not a statement: {stmt!r}")

    def eval_block(self, block, env):
        """Evaluates block in env (no new scope). A ReturnSignal passes through untouched."""
        result = NULL
        for stmt in block.statements:
            result = self.eval_statement(stmt, env)
        return result

    def eval_expression(self, expr, env):
        if isinstance(expr, IntegerLiteral):
            return Integer(expr.value)
        elif isinstance(expr, BooleanLiteral):
            return native_bool(expr.value)
        elif isinstance(expr, StringLiteral):
            return String(expr.value)
        elif isinstance(expr, Identifier):
            return env.lookup(expr.name)
        elif isinstance(expr, PrefixExpression):
            return self.eval_prefix_expression(expr.operator, self.eval_expression(expr.right, env))
        elif isinstance(expr, InfixExpression):
            left = self.eval_expression(expr.left, env)
            right = self.eval_expression(expr.right, env)
            return self.eval_infix_expression(expr.operator, left, right)
        elif isinstance(expr, IfExpression):
            return self.eval_if_expression(expr, env)
        elif isinstance(expr, FunctionLiteral):
            return Function(expr.parameters, expr.body, env)
        elif isinstance(expr, CallExpression):
            function = self.eval_expression(expr.function, env)
            arguments = [self.eval_expression(arg, env) for arg in expr.arguments]
            return self.apply_function(function, arguments)
        raise TypeError(f"not an expression: {expr!r}")

    def eval_if_expression(self, expr, env):
        if self.eval_expression(expr.condition, env).is_truthy():
            return self.eval_block(expr.consequence, env)
        elif expr.alternative is not None:
            return self.eval_block(expr.alternative, env)
        return NULL

    def apply_function(self, function, arguments):
        """Binds arguments to function's parameters in a new scope enclosing the function's own Environment and
        evaluates its body there.
        """
        if not isinstance(function, Function):
            raise NotAFunction(function.type)
        if len(arguments) != len(function.parameters):
            raise IncorrectNumberOfArgs(len(function.parameters), len(arguments))
        if self.depth >= self.max_depth:
            raise RecursionDepthExceeded(self.max_depth)

        scope = Environment(function.env)
        for param, arg in zip(function.parameters, arguments):
            scope.set(param.name, arg)

        self.depth += 1
        try:
            return self.eval_block(function.body, scope)
        except ReturnSignal as signal:
            return signal.value
        finally:
            self.depth -= 1

    @staticmethod
    def eval_prefix_expression(operator, right):
        if operator is PrefixOperator.BANG:
            return native_bool(not right.is_truthy())

        # '-' on anything but an integer yields null
        if right.type is not ObjectType.INTEGER:
            return NULL
        if right.value == INT_MIN:
            raise IntegerOverflow(None, operator, right.value)
        return Integer(-right.value)

    @staticmethod
    def eval_infix_expression(operator, left, right):
        """Both operands must be of the same primitive type. Mixing integers, booleans and strings is a TypeMismatch;
        any operation involving null or a function yields null.
        """
        if left.type is ObjectType.INTEGER and right.type is ObjectType.INTEGER:
            return Evaluator.eval_integer_infix_expression(operator, left.value, right.value)

        elif left.type is ObjectType.BOOLEAN and right.type is ObjectType.BOOLEAN:
            if operator is InfixOperator.EQ:
                return native_bool(left.value == right.value)
            elif operator is InfixOperator.NOT_EQ:
                return native_bool(left.value != right.value)
            raise UnknownOperator(left.type, operator, right.type)

        elif left.type is ObjectType.STRING and right.type is ObjectType.STRING:
            if operator is InfixOperator.PLUS:
                return String(left.value + right.value)
            elif operator is InfixOperator.EQ:
                return native_bool(left.value == right.value)
            elif operator is InfixOperator.NOT_EQ:
                return native_bool(left.value != right.value)
            raise UnknownOperator(left.type, operator, right.type)

        elif left.type in PRIMITIVES and right.type in PRIMITIVES:
            raise TypeMismatch(left.type, operator, right.type)

        return NULL

    @staticmethod
    def eval_integer_infix_expression(operator, left, right):
        if operator is InfixOperator.EQ:
            return native_bool(left == right)
        elif operator is InfixOperator.NOT_EQ:
            return native_bool(left != right)
        elif operator is InfixOperator.LT:
            return native_bool(left < right)
        elif operator is InfixOperator.GT:
            return native_bool(left > right)

        if operator is InfixOperator.PLUS:
            value = left + right
        elif operator is InfixOperator.MINUS:
            value = left - right
        elif operator is InfixOperator.ASTERISK:
            value = left * right
        else:
            if right == 0:
                raise DivisionByZero(left)
            value = abs(left) // abs(right)
            if (left < 0) != (right < 0):
                value = -value

        if not INT_MIN <= value <= INT_MAX:
            raise IntegerOverflow(left, operator, right)
        return Integer(value)
