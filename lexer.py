"""
Lexer for the Pascal subset.

Overview:
- This module implements a small hand-written lexical analyzer (scanner) that
    transforms source text into `Token` objects defined in `tokens.py`, one
    token per call to `next_token()`.
- It recognizes the reserved words (case-insensitively), identifiers, integer
    and real literals, quoted strings, one- and two-character operators
    (`:=`, `<>`, `<=`, `>=`) and punctuation, and skips whitespace and both
    Pascal comment forms, `{ ... }` and `(* ... *)`.

Examples:
    Input:  "x := x + 1.5;"
    Tokens: [IDENTIFIER('x'), COLON_EQUALS, IDENTIFIER('x'), PLUS, REAL(1.5), SEMICOLON]

Implementation notes:
- The lexer is a simple stateful scanner using `self.pos` and `self.current_char`.
- Two-character operators are checked first so `:=` is not split into `:` `=`.
- The lexer never raises: an unexpected character or an unterminated string
    becomes an `ERROR` token and the parser reports it as a syntax error.
- Once the input is exhausted every further call returns an `EOF` token.
"""

from __future__ import annotations
from typing import Optional, List
from tokens import Token, TokenType, KEYWORDS


def is_digit(ch: Optional[str]) -> bool:
    """ASCII digits only; `str.isdigit` also accepts characters like `²`."""
    return ch is not None and "0" <= ch <= "9"


class Lexer:
    def __init__(self, text: str):
        self.text = text
        self.pos = 0
        self.line = 1
        self.current_char = self.text[self.pos] if self.text else None

        self.two_char_operators = {
            ":=": TokenType.COLON_EQUALS,
            "<>": TokenType.NOT_EQUALS,
            "<=": TokenType.LESS_EQUALS,
            ">=": TokenType.GREATER_EQUALS,
        }

    def advance(self) -> None:
        """Advance to next character."""
        if self.current_char == "\n":
            self.line += 1

        self.pos += 1
        if self.pos < len(self.text):
            self.current_char = self.text[self.pos]
        else:
            self.current_char = None

    def peek_char(self) -> Optional[str]:
        """Look at next character without consuming it."""
        next_pos = self.pos + 1
        if next_pos < len(self.text):
            return self.text[next_pos]
        return None

    def skip_whitespace(self) -> None:
        """Skip whitespace characters."""
        while self.current_char is not None and self.current_char.isspace():
            self.advance()

    def skip_comment(self) -> None:
        """Skip a `{ ... }` or `(* ... *)` comment.

        An unterminated comment silently runs to the end of the input.
        """
        if self.current_char == "{":
            while self.current_char is not None and self.current_char != "}":
                self.advance()
            self.advance()
            return

        # Consume the opening `(*`.
        self.advance()
        self.advance()
        while self.current_char is not None:
            if self.current_char == "*" and self.peek_char() == ")":
                self.advance()
                self.advance()
                return
            self.advance()

    def number(self) -> Token:
        """Scan an INTEGER or REAL literal."""
        line = self.line
        start = self.pos
        is_real = False

        while is_digit(self.current_char):
            self.advance()

        # A fraction needs a digit after the point, otherwise `end.` and
        # `5.` would swallow the period.
        peek = self.peek_char()
        if self.current_char == "." and is_digit(peek):
            is_real = True
            self.advance()
            while is_digit(self.current_char):
                self.advance()

        if self.current_char in ("e", "E"):
            next_pos = self.pos + 1
            if next_pos < len(self.text) and self.text[next_pos] in "+-":
                next_pos += 1
            if next_pos < len(self.text) and is_digit(self.text[next_pos]):
                is_real = True
                while self.pos < next_pos:
                    self.advance()
                while is_digit(self.current_char):
                    self.advance()

        text = self.text[start : self.pos]
        if is_real:
            return Token(TokenType.REAL, text, line, float(text))
        return Token(TokenType.INTEGER, text, line, int(text))

    def identifier(self) -> Token:
        """Scan an identifier or reserved word."""
        line = self.line
        start = self.pos

        while self.current_char is not None and (
            self.current_char.isalnum() or self.current_char == "_"
        ):
            self.advance()

        text = self.text[start : self.pos]
        token_type = KEYWORDS.get(text.lower(), TokenType.IDENTIFIER)
        return Token(token_type, text, line)

    def string(self) -> Token:
        """Scan a quoted string; `''` inside the quotes is one quote."""
        line = self.line
        start = self.pos
        chars = []

        self.advance()  # Consume opening quote
        while True:
            if self.current_char is None or self.current_char == "\n":
                return Token(TokenType.ERROR, self.text[start : self.pos], line)
            if self.current_char == "'":
                if self.peek_char() == "'":
                    chars.append("'")
                    self.advance()
                    self.advance()
                    continue
                self.advance()
                break
            chars.append(self.current_char)
            self.advance()

        value = "".join(chars)
        text = self.text[start : self.pos]
        if len(value) == 1:
            return Token(TokenType.CHARACTER, text, line, value)
        return Token(TokenType.STRING, text, line, value)

    def next_token(self) -> Token:
        """Lexical analyzer that returns tokens one at a time."""
        while self.current_char is not None:
            if self.current_char.isspace():
                self.skip_whitespace()
                continue

            if self.current_char == "{" or (
                self.current_char == "(" and self.peek_char() == "*"
            ):
                self.skip_comment()
                continue

            line = self.line

            # Handle two-character operators first so `:=` is not lexed as `:` `=`.
            pair = self.current_char + (self.peek_char() or "")
            if pair in self.two_char_operators:
                self.advance()
                self.advance()
                return Token(self.two_char_operators[pair], pair, line)

            match self.current_char:
                case "+":
                    self.advance()
                    return Token(TokenType.PLUS, "+", line)
                case "-":
                    self.advance()
                    return Token(TokenType.MINUS, "-", line)
                case "*":
                    self.advance()
                    return Token(TokenType.STAR, "*", line)
                case "/":
                    self.advance()
                    return Token(TokenType.SLASH, "/", line)
                case "(":
                    self.advance()
                    return Token(TokenType.LPAREN, "(", line)
                case ")":
                    self.advance()
                    return Token(TokenType.RPAREN, ")", line)
                case ".":
                    self.advance()
                    return Token(TokenType.PERIOD, ".", line)
                case ",":
                    self.advance()
                    return Token(TokenType.COMMA, ",", line)
                case ";":
                    self.advance()
                    return Token(TokenType.SEMICOLON, ";", line)
                case ":":
                    self.advance()
                    return Token(TokenType.COLON, ":", line)
                case "=":
                    self.advance()
                    return Token(TokenType.EQUALS, "=", line)
                case "<":
                    self.advance()
                    return Token(TokenType.LESS_THAN, "<", line)
                case ">":
                    self.advance()
                    return Token(TokenType.GREATER_THAN, ">", line)
                case "'":
                    return self.string()

            if is_digit(self.current_char):
                return self.number()

            if self.current_char.isalpha():
                return self.identifier()

            # Unrecognized character: hand it to the parser as an ERROR token.
            bad = self.current_char
            self.advance()
            return Token(TokenType.ERROR, bad, line)

        return Token(TokenType.EOF, "", self.line)

    def tokenize(self) -> List[Token]:
        """Return all tokens from the input string."""
        tokens = []
        while True:
            token = self.next_token()
            tokens.append(token)
            if token.type == TokenType.EOF:
                break
        return tokens
