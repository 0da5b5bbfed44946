"""Errors raised by the lox core. Reporting them is up to the embedder (see lox.lang.error)."""


class LoxError(Exception):
    """Superclass of every error the lox core raises."""


class ParseError(LoxError):
    """Raised inside the parser at a malformed construct. Caught at the declaration boundary, never escapes parse."""


class LoxRuntimeError(LoxError):
    """Aborts evaluation of the whole program. token locates the error in the source."""

    def __init__(self, token, message):
        super().__init__(message)
        self.token = token
        self.message = message
