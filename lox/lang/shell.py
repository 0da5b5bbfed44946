"""Handles interactive/command-line mode for the lox interpreter. Uses cmd as backend."""

import cmd
import io

from lox.core.scanner import Scanner
from lox.core.tokens import TokenType
from lox.lang.error import ErrorHandler


class Shell(cmd.Cmd):
    """Lox interpreter shell."""
    intro = "Lox interpreter :: Python backend\nType 'help' for more information, 'exit' to quit."
    prompt = "> "
    secondary_prompt = ". "  # used for line continuations
    _tmp_prompt = "> "       # also used for prompt swapping in line continuations

    def __init__(self, sess, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.sess = sess
        self._tmp_line = ""

    @staticmethod
    def needs_continuation(line):
        """Whether line leaves a block open and so must continue on the next line. Braces inside strings and
        comments do not count; lexical errors are left for the real run to report.
        """
        tokens = Scanner(line, ErrorHandler(fatal=False, stream=io.StringIO())).scan_tokens()
        depth = 0
        for token in tokens:
            if token.type == TokenType.LEFT_BRACE:
                depth += 1
            elif token.type == TokenType.RIGHT_BRACE:
                depth -= 1
        return depth > 0

    def default(self, line):
        """Runs arbitrary lox source."""
        with self.sess.error_handler:  # needed because cmd.Cmd automatically exits on Exception
            line = self._tmp_line + line + "\n"

            if self.needs_continuation(line):
                self._tmp_line = line
                self.prompt = self.secondary_prompt
                return

            self._tmp_line = ""
            self.prompt = self._tmp_prompt
            self.sess.run(line)

    def do_help(self, arg):
        """Prints a short introduction to the language."""
        print("Welcome to the lox interpreter!\n\n"
              "Lox is a small dynamically-typed scripting language with first-class functions \n"
              "and closures. Statements end with ';'. Try 'var a = 1 + 2;' and then 'print a;'.\n"
              "Functions are declared with 'fun', e.g. 'fun add(a, b) { return a + b; }'.")

    def emptyline(self):
        """Do not repeat previous command on empty line."""
        return ""

    def do_EOF(self, arg):
        """Exits interpreter."""
        print()
        return self.do_exit(arg)

    def do_exit(self, arg):
        """Exits interpreter."""
        return True
