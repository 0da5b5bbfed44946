"""Session control for the lox language: runs source text through scanner, parser and interpreter, either for a
whole script file or one prompt line at a time.
"""

from dataclasses import dataclass, field

from lox.core.interpreter import Interpreter
from lox.core.parser import Parser
from lox.core.scanner import Scanner


@dataclass
class RunResult:
    """What happened during one run. Evaluation never starts if had_error is set."""
    diagnostics: list = field(default_factory=list)
    had_error: bool = False          # lexical or syntax error
    had_runtime_error: bool = False

    @property
    def ok(self):
        return not (self.had_error or self.had_runtime_error)


class Session:
    """Governs a lox session. Globals persist between runs, so prompt lines can build on each other."""

    def __init__(self, error_handler, out=None, clock=None):
        self.error_handler = error_handler
        self.interpreter = Interpreter(error_handler, out=out, clock=clock)

    def parse(self, source):
        """Scans and parses source without executing it. Returns (statements, RunResult)."""
        self.error_handler.reset()

        tokens = Scanner(source, self.error_handler).scan_tokens()
        statements = Parser(tokens, self.error_handler).parse()

        return statements, self._result()

    def run(self, source):
        """Runs source. Lexical and syntax errors are all reported and nothing is executed; a runtime error stops
        execution at the offending statement.
        """
        statements, result = self.parse(source)
        if result.had_error:
            return result

        self.interpreter.interpret(statements)
        return self._result()

    def run_file(self, path):
        """Runs the script at path."""
        with open(path, "r", encoding="utf-8") as file:
            return self.run(file.read())

    def _result(self):
        return RunResult(list(self.error_handler.diagnostics),
                         self.error_handler.had_error,
                         self.error_handler.had_runtime_error)
