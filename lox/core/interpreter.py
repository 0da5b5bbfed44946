"""Tree-walking evaluator.

Runtime values are None (nil), bool, float (every number), str, or a LoxCallable. Executing a statement yields an
outcome: None when it completed normally, or a Returning when a return statement is unwinding towards the nearest
call. Runtime errors are LoxRuntimeErrors; the first one aborts the whole program and goes to the reporter.
"""

import math

from lox.core import ast
from lox.core.callable import LoxCallable, LoxFunction, Returning
from lox.core.environment import Environment
from lox.core.errors import LoxRuntimeError
from lox.core.natives import install
from lox.core.tokens import TokenType


def is_truthy(value):
    """nil and false are falsy; everything else (0 and "" included) is truthy."""
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    return True


def is_equal(a, b):
    """nil only equals nil; values of different types are never equal; NaN is unequal to itself."""
    if a is None:
        return b is None
    return type(a) is type(b) and a == b


def is_number(value):
    return isinstance(value, float)


def format_number(number):
    """Integral values below 1e21 print without a fractional part, everything else uses the shortest repr."""
    if math.isnan(number):
        return "NaN"
    if math.isinf(number):
        return "Infinity" if number > 0 else "-Infinity"
    if number.is_integer() and abs(number) < 1e21:
        if number == 0 and math.copysign(1.0, number) < 0:
            return "-0"
        return str(int(number))
    return repr(number)


def stringify(value):
    if value is None:
        return "nil"
    if isinstance(value, bool):
        return "true" if value else "false"
    if is_number(value):
        return format_number(value)
    return str(value)


def divide(left, right):
    """IEEE-754 division: dividing by zero gives a signed infinity, or NaN for 0/0."""
    if right == 0:
        if left == 0 or math.isnan(left):
            return math.nan
        return math.copysign(math.inf, left) * math.copysign(1.0, right)
    return left / right


ARITHMETIC = {
    TokenType.MINUS: lambda left, right: left - right,
    TokenType.STAR: lambda left, right: left * right,
    TokenType.SLASH: divide,
    TokenType.GREATER: lambda left, right: left > right,
    TokenType.GREATER_EQUAL: lambda left, right: left >= right,
    TokenType.LESS: lambda left, right: left < right,
    TokenType.LESS_EQUAL: lambda left, right: left <= right,
}


class Interpreter:
    """Evaluates statement lists against a persistent global environment.

    reporter must provide runtime_error(error). out is the stream print statements write to (None means stdout);
    clock is the host time source behind the clock() native.
    """

    def __init__(self, reporter, out=None, clock=None):
        self.reporter = reporter
        self.out = out

        self.globals = Environment()
        install(self.globals, clock)
        self.env = self.globals

    def interpret(self, statements):
        """Executes a program. Returns False if a runtime error aborted it."""
        try:
            for stmt in statements:
                if isinstance(self.execute(stmt), Returning):
                    break  # return at top level ends the program
        except LoxRuntimeError as error:
            self.reporter.runtime_error(error)
            return False
        return True

    # statements

    def execute(self, stmt):
        match stmt:
            case ast.Expression(expression):
                self.evaluate(expression)
            case ast.Print(expression):
                print(stringify(self.evaluate(expression)), file=self.out)
            case ast.Var(name, initializer):
                value = None if initializer is None else self.evaluate(initializer)
                self.env.define(name.lexeme, value)
            case ast.Block(statements):
                return self.execute_block(statements, Environment(self.env))
            case ast.If(condition, then_branch, else_branch):
                if is_truthy(self.evaluate(condition)):
                    return self.execute(then_branch)
                if else_branch is not None:
                    return self.execute(else_branch)
            case ast.While(condition, body):
                while is_truthy(self.evaluate(condition)):
                    outcome = self.execute(body)
                    if outcome is not None:
                        return outcome
            case ast.Function(name):
                self.env.define(name.lexeme, LoxFunction(stmt, self.env))
            case ast.Return(_, value):
                return Returning(None if value is None else self.evaluate(value))
            case _:
                raise TypeError(f"unknown statement: {stmt!r}")
        return None

    def execute_block(self, statements, env):
        """Runs statements in env, restoring the current environment however the block is left."""
        previous = self.env
        try:
            self.env = env
            for stmt in statements:
                outcome = self.execute(stmt)
                if outcome is not None:
                    return outcome
        finally:
            self.env = previous
        return None

    # expressions

    def evaluate(self, expr):
        match expr:
            case ast.Literal(value):
                return value
            case ast.Grouping(expression):
                return self.evaluate(expression)
            case ast.Unary(operator, right):
                return self._unary(operator, self.evaluate(right))
            case ast.Binary(left, operator, right):
                return self._binary(operator, self.evaluate(left), self.evaluate(right))
            case ast.Logical(left, operator, right):
                return self._logical(left, operator, right)
            case ast.Variable(name):
                return self.env.get(name)
            case ast.Assign(name, value):
                value = self.evaluate(value)
                self.env.assign(name, value)
                return value
            case ast.Call(callee, paren, arguments):
                return self._call(callee, paren, arguments)
            case _:
                raise TypeError(f"unknown expression: {expr!r}")

    def _unary(self, operator, right):
        if operator.type == TokenType.BANG:
            return not is_truthy(right)

        if not is_number(right):
            raise LoxRuntimeError(operator, "Operand must be a number.")
        return -right

    def _binary(self, operator, left, right):
        if operator.type == TokenType.EQUAL_EQUAL:
            return is_equal(left, right)
        if operator.type == TokenType.BANG_EQUAL:
            return not is_equal(left, right)

        if operator.type == TokenType.PLUS:
            if is_number(left) and is_number(right):
                return left + right
            if isinstance(left, str) and isinstance(right, str):
                return left + right
            raise LoxRuntimeError(operator, "Operands must be two numbers or two strings.")

        if not (is_number(left) and is_number(right)):
            raise LoxRuntimeError(operator, "Operands must be numbers.")
        return ARITHMETIC[operator.type](left, right)

    def _logical(self, left, operator, right):
        """Short-circuits and returns the deciding operand itself, not a bool."""
        left = self.evaluate(left)

        if operator.type == TokenType.OR:
            if is_truthy(left):
                return left
        elif not is_truthy(left):
            return left

        return self.evaluate(right)

    def _call(self, callee, paren, arguments):
        callee = self.evaluate(callee)
        arguments = [self.evaluate(argument) for argument in arguments]

        if not isinstance(callee, LoxCallable):
            raise LoxRuntimeError(paren, "Can only call functions and classes.")
        if len(arguments) != callee.arity:
            raise LoxRuntimeError(paren, f"Expected {callee.arity} arguments but got {len(arguments)}.")

        return callee.call(self, arguments)
