"""Error handling for the lox language. The error types live in lox.core.errors and are re-exported here. Only
LoxErrors should be raised by the core during a run: if another type of error makes it all the way to ErrorHandler,
it is assumed to be an internal issue (or stack exhaustion).

ErrorHandler doubles as the diagnostic sink the core reports into:
    - error(line, message)      lexical problems
    - error_at(token, message)  syntax problems, located "at end" or "at '<lexeme>'"
    - runtime_error(error)      the single fatal runtime error of a run
"""

import sys

from termcolor import colored

from lox.core.errors import LoxError, LoxRuntimeError, ParseError  # re-exported for embedders
from lox.core.tokens import TokenType


class ErrorHandler:
    """Context manager and diagnostic sink. Prints diagnostics in color and keeps plain-text copies in diagnostics."""
    ERROR = "red"
    SYNTAX_EXIT = 65
    RUNTIME_EXIT = 70

    def __init__(self, fatal=True, stream=None):
        self.fatal = fatal
        self.stream = stream  # None means sys.stderr at report time
        self.diagnostics = []
        self.had_error = False
        self.had_runtime_error = False

    def reset(self):
        """Clears error state. Should be called before every run."""
        self.diagnostics = []
        self.had_error = False
        self.had_runtime_error = False

    def error(self, line, message):
        """Reports a lexical error."""
        self.report(line, "", message)

    def error_at(self, token, message):
        """Reports a syntax error located at token."""
        if token.type == TokenType.EOF:
            self.report(token.line, " at end", message)
        else:
            self.report(token.line, f" at '{token.lexeme}'", message)

    def report(self, line, where, message):
        self.diagnostics.append(f"[line {line}] Error{where}: {message}")
        self._print(colored(f"[line {line}] ", attrs=["bold"]) +
                    colored(f"Error{where}: ", ErrorHandler.ERROR, attrs=["bold"]) + message)
        self.had_error = True

    def runtime_error(self, error):
        """Reports the runtime error that aborted evaluation."""
        self.diagnostics.append(f"{error.message}\n[line {error.token.line}]")
        self._print(colored(error.message, ErrorHandler.ERROR, attrs=["bold"]) + f"\n[line {error.token.line}]")
        self.had_runtime_error = True

    def throw(self, message, internal=False):
        """Reports a host-level failure that escaped the core, then exits if fatal."""
        error_msg = ""
        if internal:
            error_msg += colored("[internal] ", ErrorHandler.ERROR, attrs=["bold"])
        error_msg += colored("error: ", ErrorHandler.ERROR, attrs=["bold"]) + message

        self.diagnostics.append(("[internal] " if internal else "") + "error: " + message)
        self._print(error_msg)
        self.had_runtime_error = True

        if self.fatal:
            sys.exit(ErrorHandler.RUNTIME_EXIT)

    def exit_status(self):
        """Process exit status matching the errors seen so far (0 if none)."""
        if self.had_error:
            return ErrorHandler.SYNTAX_EXIT
        if self.had_runtime_error:
            return ErrorHandler.RUNTIME_EXIT
        return 0

    def _print(self, text):
        print(text, file=self.stream if self.stream is not None else sys.stderr)

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        if exc_type is None or exc_type is SystemExit:
            return False

        if exc_type is KeyboardInterrupt:
            self.throw("keyboard interrupt")
        elif exc_type is RecursionError:
            self.throw("stack overflow")
        else:
            self.throw(f"unknown error: '{exc_type.__name__}: {exc_val}'", internal=True)

        return True
