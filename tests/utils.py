from lexer import Lexer
from parser import Parser
from executor import Executor
from symbols import SymbolTable


def lex(text: str):
    """Return a list of tokens for the given source text."""
    return Lexer(text).tokenize()


def program_text(body: str, name: str = "test") -> str:
    """Wrap statements in a program header and BEGIN ... END."""
    return f"program {name};\nbegin\n{body}\nend.\n"


def parse_text(text: str):
    """Convenience: lex+parse a source text, returning (tree, parser)."""
    parser = Parser(Lexer(text))
    program = parser.parse_program()
    return program, parser


def run_text(text: str) -> SymbolTable:
    """Parse and execute source text; the parse must be error-free."""
    program, parser = parse_text(text)
    assert parser.error_count == 0
    Executor().execute(program)
    return parser.symbol_table
