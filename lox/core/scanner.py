"""Lexical analysis: a single left-to-right pass turning source text into an ordered list of Tokens.

Lexical problems (unexpected characters, unterminated strings) are handed to the reporter and scanning carries on, so
every lexical error in a source is found in one pass. The token list always ends with an EOF token.
"""

from lox.core.tokens import KEYWORDS, Token, TokenType


SINGLE = {
    "(": TokenType.LEFT_PAREN,
    ")": TokenType.RIGHT_PAREN,
    "{": TokenType.LEFT_BRACE,
    "}": TokenType.RIGHT_BRACE,
    ",": TokenType.COMMA,
    ".": TokenType.DOT,
    "-": TokenType.MINUS,
    "+": TokenType.PLUS,
    ";": TokenType.SEMICOLON,
    "*": TokenType.STAR,
}

# one-character operator: (its type, type when followed by '=')
PAIRED = {
    "!": (TokenType.BANG, TokenType.BANG_EQUAL),
    "=": (TokenType.EQUAL, TokenType.EQUAL_EQUAL),
    "<": (TokenType.LESS, TokenType.LESS_EQUAL),
    ">": (TokenType.GREATER, TokenType.GREATER_EQUAL),
}

WHITESPACE = " \r\t"


def is_digit(char):
    return "0" <= char <= "9"


def is_alpha(char):
    return "a" <= char <= "z" or "A" <= char <= "Z" or char == "_"


def is_alphanumeric(char):
    return is_alpha(char) or is_digit(char)


class Scanner:
    """Scans one source string. reporter must provide error(line, message)."""

    def __init__(self, source, reporter):
        self.source = source
        self.reporter = reporter
        self.tokens = []

        self._start = 0    # first char of the lexeme being scanned
        self._current = 0  # char under consideration
        self._line = 1

    def scan_tokens(self):
        """Scans the whole source and returns the token list, terminated by EOF."""
        while not self._at_end():
            self._start = self._current
            self._scan_token()

        self.tokens.append(Token(TokenType.EOF, "", None, self._line))
        return self.tokens

    def _scan_token(self):
        char = self._advance()

        if char in SINGLE:
            self._add_token(SINGLE[char])
        elif char in PAIRED:
            single, double = PAIRED[char]
            self._add_token(double if self._match("=") else single)
        elif char == "/":
            if self._match("/"):
                while self._peek() != "\n" and not self._at_end():
                    self._advance()
            else:
                self._add_token(TokenType.SLASH)
        elif char in WHITESPACE:
            pass
        elif char == "\n":
            self._line += 1
        elif char == "\"":
            self._string()
        elif is_digit(char):
            self._number()
        elif is_alpha(char):
            self._identifier()
        else:
            self.reporter.error(self._line, "Unexpected character.")

    def _identifier(self):
        while is_alphanumeric(self._peek()):
            self._advance()

        text = self.source[self._start:self._current]
        self._add_token(KEYWORDS.get(text, TokenType.IDENTIFIER))

    def _number(self):
        while is_digit(self._peek()):
            self._advance()

        # a trailing '.' is only part of the number if a digit follows it
        if self._peek() == "." and is_digit(self._peek_next()):
            self._advance()
            while is_digit(self._peek()):
                self._advance()

        self._add_token(TokenType.NUMBER, float(self.source[self._start:self._current]))

    def _string(self):
        while self._peek() != "\"" and not self._at_end():
            if self._peek() == "\n":
                self._line += 1
            self._advance()

        if self._at_end():
            self.reporter.error(self._line, "Unterminated string.")
            return

        self._advance()  # closing quote
        self._add_token(TokenType.STRING, self.source[self._start + 1:self._current - 1])

    def _add_token(self, token_type, literal=None):
        text = self.source[self._start:self._current]
        self.tokens.append(Token(token_type, text, literal, self._line))

    def _match(self, expected):
        if self._at_end() or self.source[self._current] != expected:
            return False
        self._current += 1
        return True

    def _advance(self):
        self._current += 1
        return self.source[self._current - 1]

    def _peek(self):
        if self._at_end():
            return "\0"
        return self.source[self._current]

    def _peek_next(self):
        if self._current + 1 >= len(self.source):
            return "\0"
        return self.source[self._current + 1]

    def _at_end(self):
        return self._current >= len(self.source)
