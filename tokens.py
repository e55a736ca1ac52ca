"""Token definitions for the lexer.

This module defines the `TokenType` enum for all token kinds recognized by
the Pascal lexer and a small frozen `Token` dataclass that records the token
type, its source spelling, the line it started on and, for literals, the
decoded value. Tokens are the atomic units produced by the lexer and consumed
by the parser.
"""

from __future__ import annotations
from enum import Enum, auto
from dataclasses import dataclass
from typing import Optional


class TokenType(Enum):
    # Literals
    IDENTIFIER = auto()
    INTEGER = auto()
    REAL = auto()
    STRING = auto()
    CHARACTER = auto()

    # Arithmetic operators
    PLUS = auto()
    MINUS = auto()
    STAR = auto()
    SLASH = auto()

    # Punctuation
    COLON_EQUALS = auto()
    PERIOD = auto()
    COMMA = auto()
    SEMICOLON = auto()
    COLON = auto()
    LPAREN = auto()
    RPAREN = auto()

    # Relational operators
    EQUALS = auto()
    NOT_EQUALS = auto()
    LESS_THAN = auto()
    LESS_EQUALS = auto()
    GREATER_THAN = auto()
    GREATER_EQUALS = auto()

    # Keywords
    PROGRAM = auto()
    BEGIN = auto()
    END = auto()
    REPEAT = auto()
    UNTIL = auto()
    WHILE = auto()
    DO = auto()
    IF = auto()
    THEN = auto()
    ELSE = auto()
    WRITE = auto()
    WRITELN = auto()
    DIV = auto()
    MOD = auto()
    AND = auto()
    OR = auto()
    NOT = auto()

    # Special
    ERROR = auto()
    EOF = auto()

    def __str__(self) -> str:
        return self.name


KEYWORDS = {
    "program": TokenType.PROGRAM,
    "begin": TokenType.BEGIN,
    "end": TokenType.END,
    "repeat": TokenType.REPEAT,
    "until": TokenType.UNTIL,
    "while": TokenType.WHILE,
    "do": TokenType.DO,
    "if": TokenType.IF,
    "then": TokenType.THEN,
    "else": TokenType.ELSE,
    "write": TokenType.WRITE,
    "writeln": TokenType.WRITELN,
    "div": TokenType.DIV,
    "mod": TokenType.MOD,
    "and": TokenType.AND,
    "or": TokenType.OR,
    "not": TokenType.NOT,
}


@dataclass(frozen=True)
class Token:
    type: TokenType
    text: str = ""
    line: int = 1
    value: Optional[str | int | float] = None

    def __repr__(self) -> str:
        return f"Token({self.type}, {self.text!r}, line={self.line})"
