"""Scope chain for lexical scoping.

An Environment maps names to values and links to its enclosing Environment (None at the global scope). Environments
are shared by reference: every closure and active call frame that captured one keeps it alive, so a scope can outlive
the block or call that created it. Python's reference counting frees it once nothing refers to it.
"""

from lox.core.errors import LoxRuntimeError


class Environment:

    def __init__(self, enclosing=None):
        self.enclosing = enclosing
        self.values = {}

    def define(self, name, value):
        """Binds name in this scope, shadowing or overwriting any existing binding."""
        self.values[name] = value

    def get(self, name):
        """Value bound to the name token in the nearest scope that defines it."""
        env = self._resolve(name)
        return env.values[name.lexeme]

    def assign(self, name, value):
        """Rebinds the name token in the nearest scope that already defines it."""
        env = self._resolve(name)
        env.values[name.lexeme] = value

    def _resolve(self, name):
        env = self
        while env is not None:
            if name.lexeme in env.values:
                return env
            env = env.enclosing
        raise LoxRuntimeError(name, f"Undefined variable '{name.lexeme}'.")

    def __repr__(self):
        content = ", ".join(self.values)
        return f"[{content}]" + (f" < {self.enclosing}" if self.enclosing else "")
