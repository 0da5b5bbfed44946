"""Callable values: functions declared in lox source and native functions supplied by the host.

Both variants share one invocation protocol: the interpreter checks the argument count against arity, then calls
call(interpreter, arguments).
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from lox.core.environment import Environment


@dataclass(frozen=True)
class Returning:
    """Outcome of a statement that executed a return: unwinds statement sequences up to the nearest call."""
    value: object


class LoxCallable(ABC):
    """Superclass of every value that can be called."""

    @property
    @abstractmethod
    def arity(self):
        """Exact number of arguments every call must supply."""

    @abstractmethod
    def call(self, interpreter, arguments):
        """Invokes this callable with already-evaluated arguments and returns its result."""


class LoxFunction(LoxCallable):
    """Function declared in source, paired with the environment active at its declaration (its closure)."""

    def __init__(self, declaration, closure):
        self.declaration = declaration
        self.closure = closure

    @property
    def arity(self):
        return len(self.declaration.params)

    def call(self, interpreter, arguments):
        """Runs the body in a fresh activation environment enclosed by the closure, not by the caller's scope."""
        env = Environment(self.closure)
        for param, argument in zip(self.declaration.params, arguments):
            env.define(param.lexeme, argument)

        outcome = interpreter.execute_block(self.declaration.body, env)
        if isinstance(outcome, Returning):
            return outcome.value
        return None

    def __str__(self):
        return f"<fn {self.declaration.name.lexeme}>"

    def __repr__(self):
        return f"LoxFunction('{self.declaration.name.lexeme}')"


class NativeFunction(LoxCallable):
    """Host function exposed to lox code. function receives the arguments positionally."""

    def __init__(self, name, arity, function):
        self.name = name
        self._arity = arity
        self.function = function

    @property
    def arity(self):
        return self._arity

    def call(self, interpreter, arguments):
        return self.function(*arguments)

    def __str__(self):
        return "<native fn>"

    def __repr__(self):
        return f"NativeFunction('{self.name}')"
