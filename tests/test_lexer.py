from lexer import Lexer
from tokens import TokenType
from tests.utils import lex


def test_lexer_recognizes_keywords_case_insensitively():
    tokens = lex("PROGRAM Begin end WhIlE")
    types = [t.type for t in tokens]

    assert types == [
        TokenType.PROGRAM,
        TokenType.BEGIN,
        TokenType.END,
        TokenType.WHILE,
        TokenType.EOF,
    ]
    # Original spelling is kept for diagnostics
    assert tokens[1].text == "Begin"


def test_lexer_recognizes_operators_and_punctuation():
    tokens = lex(":= <> <= >= < > = : ; . , ( ) + - * /")
    types = [t.type for t in tokens]

    assert types == [
        TokenType.COLON_EQUALS,
        TokenType.NOT_EQUALS,
        TokenType.LESS_EQUALS,
        TokenType.GREATER_EQUALS,
        TokenType.LESS_THAN,
        TokenType.GREATER_THAN,
        TokenType.EQUALS,
        TokenType.COLON,
        TokenType.SEMICOLON,
        TokenType.PERIOD,
        TokenType.COMMA,
        TokenType.LPAREN,
        TokenType.RPAREN,
        TokenType.PLUS,
        TokenType.MINUS,
        TokenType.STAR,
        TokenType.SLASH,
        TokenType.EOF,
    ]


def test_lexer_numbers():
    tokens = lex("42 3.14 1e3 2.5E-2 5.")

    assert tokens[0].type == TokenType.INTEGER and tokens[0].value == 42
    assert tokens[1].type == TokenType.REAL and tokens[1].value == 3.14
    assert tokens[2].type == TokenType.REAL and tokens[2].value == 1000.0
    assert tokens[3].type == TokenType.REAL and tokens[3].value == 0.025
    # A trailing period is not a fraction
    assert tokens[4].type == TokenType.INTEGER and tokens[4].value == 5
    assert tokens[5].type == TokenType.PERIOD


def test_lexer_strings_and_characters():
    tokens = lex("'hello' 'a' 'it''s'")

    assert tokens[0].type == TokenType.STRING and tokens[0].value == "hello"
    assert tokens[1].type == TokenType.CHARACTER and tokens[1].value == "a"
    assert tokens[2].type == TokenType.STRING and tokens[2].value == "it's"
    assert tokens[2].text == "'it''s'"


def test_lexer_skips_comments_and_counts_lines():
    tokens = lex("{ comment }\nx (* spans\ntwo lines *) y")

    assert [t.text for t in tokens[:2]] == ["x", "y"]
    assert tokens[0].line == 2
    assert tokens[1].line == 3


def test_lexer_reports_bad_input_as_error_tokens():
    tokens = lex("x @ y 'open")
    types = [t.type for t in tokens]

    assert types == [
        TokenType.IDENTIFIER,
        TokenType.ERROR,
        TokenType.IDENTIFIER,
        TokenType.ERROR,
        TokenType.EOF,
    ]
    assert tokens[1].text == "@"


def test_lexer_returns_eof_indefinitely():
    lexer = Lexer("x")
    assert lexer.next_token().type == TokenType.IDENTIFIER
    assert lexer.next_token().type == TokenType.EOF
    assert lexer.next_token().type == TokenType.EOF


def test_lexer_non_ascii_digits_are_error_tokens():
    tokens = lex("x := 2²;")
    types = [t.type for t in tokens]

    assert types == [
        TokenType.IDENTIFIER,
        TokenType.COLON_EQUALS,
        TokenType.INTEGER,
        TokenType.ERROR,
        TokenType.SEMICOLON,
        TokenType.EOF,
    ]
    assert tokens[2].value == 2
    assert tokens[3].text == "²"
