import io
import unittest

from lox.core import errors
from lox.core.tokens import Token, TokenType
from lox.lang import error
from lox.lang.error import ErrorHandler, LoxRuntimeError


class ErrorHandlerTestCase(unittest.TestCase):

    def setUp(self):
        self.stream = io.StringIO()
        self.handler = ErrorHandler(fatal=False, stream=self.stream)

    def test_lexical_error(self):
        self.handler.error(3, "Unexpected character.")
        self.assertEqual(["[line 3] Error: Unexpected character."], self.handler.diagnostics)
        self.assertTrue(self.handler.had_error)
        self.assertIn("Unexpected character.", self.stream.getvalue())

    def test_error_at_token(self):
        cases = {
            Token(TokenType.SEMICOLON, ";", None, 2): "[line 2] Error at ';': Expect expression.",
            Token(TokenType.EOF, "", None, 5): "[line 5] Error at end: Expect expression.",
        }
        for token, expected in cases.items():
            self.handler.reset()
            self.handler.error_at(token, "Expect expression.")
            self.assertEqual([expected], self.handler.diagnostics, token)

    def test_runtime_error(self):
        error = LoxRuntimeError(Token(TokenType.MINUS, "-", None, 4), "Operand must be a number.")
        self.handler.runtime_error(error)
        self.assertEqual(["Operand must be a number.\n[line 4]"], self.handler.diagnostics)
        self.assertTrue(self.handler.had_runtime_error)
        self.assertFalse(self.handler.had_error)

    def test_reset(self):
        self.handler.error(1, "Unexpected character.")
        self.handler.reset()
        self.assertEqual([], self.handler.diagnostics)
        self.assertFalse(self.handler.had_error)
        self.assertEqual(0, self.handler.exit_status())

    def test_exit_status(self):
        self.handler.runtime_error(LoxRuntimeError(Token(TokenType.NIL, "nil", None, 1), "Can only call functions."))
        self.assertEqual(ErrorHandler.RUNTIME_EXIT, self.handler.exit_status())

        self.handler.error(1, "Unexpected character.")
        self.assertEqual(ErrorHandler.SYNTAX_EXIT, self.handler.exit_status())

    def test_context_manager_converts_host_errors(self):
        cases = {
            RecursionError: "error: stack overflow",
            KeyboardInterrupt: "error: keyboard interrupt",
            ValueError: "[internal] error: unknown error: 'ValueError: boom'",
        }
        for exc_type, expected in cases.items():
            self.handler.reset()
            with self.handler:
                raise exc_type("boom")
            self.assertEqual([expected], self.handler.diagnostics, exc_type)
            self.assertTrue(self.handler.had_runtime_error)

    def test_fatal_context_manager_exits(self):
        handler = ErrorHandler(fatal=True, stream=self.stream)
        with self.assertRaises(SystemExit) as context:
            with handler:
                raise RecursionError()
        self.assertEqual(ErrorHandler.RUNTIME_EXIT, context.exception.code)

    def test_error_types_are_shared_with_core(self):
        cases = ["LoxError", "ParseError", "LoxRuntimeError"]
        for case in cases:
            self.assertIs(getattr(errors, case), getattr(error, case), case)

    def test_system_exit_passes_through(self):
        with self.assertRaises(SystemExit):
            with self.handler:
                raise SystemExit(0)
        self.assertEqual([], self.handler.diagnostics)


if __name__ == '__main__':
    unittest.main()
