from __future__ import annotations
from typing import List, Optional, Tuple
import sys

from lexer import Lexer
from tokens import Token
from ast_nodes import Node
from parser import Parser
from symbols import SymbolTable
from executor import Executor, format_real
from pretty_printer import PrettyPrinter
from ast_json import write_ast_json
from ast_viz import write_and_render

PARSE_ERROR_STATUS = 1


def lex(text: str) -> List[Token]:
    """Tokenize input string."""
    lexer = Lexer(text)
    return lexer.tokenize()


def parse(text: str) -> Tuple[Node, int, SymbolTable]:
    """Parse source text, returning the tree, error count and symbol table."""
    symbol_table = SymbolTable()
    parser = Parser(Lexer(text), symbol_table)
    program, error_count = parser.parse()
    return program, error_count, symbol_table


def run(text: str) -> SymbolTable:
    """Parse and execute a program that is expected to be error-free."""
    program, error_count, symbol_table = parse(text)
    if error_count:
        raise SyntaxError(f"{error_count} syntax error(s) in program")
    Executor().execute(program)
    return symbol_table


def process_program(
    text: str,
    *,
    print_tokens: bool = False,
    print_ast: bool = False,
    dump_ast_path: Optional[str] = None,
    viz_path: Optional[str] = None,
    viz_format: str = "svg",
    print_symbols: bool = False,
    execute: bool = True,
) -> int:
    """Process a single program: lex, parse, optionally print stages, execute.

    Returns the process exit status. A runtime error inside the program
    exits the process directly.
    """
    try:
        if print_tokens:
            tokens = lex(text)
            print(f"Tokens ({len(tokens)}):")
            for i, token in enumerate(tokens[:50]):
                print(f"  {i:3}: {token}")
            if len(tokens) > 50:
                print(f"  ... and {len(tokens) - 50} more")

        program, error_count, symbol_table = parse(text)

        if print_ast:
            print("\nAST:")
            print(PrettyPrinter.print_ast(program))

        if dump_ast_path:
            try:
                write_ast_json(program, dump_ast_path)
                print(f"Wrote AST JSON to {dump_ast_path}")
            except OSError as e:
                print(f"Failed to write AST JSON to {dump_ast_path}: {e}")

        # Optionally render visualization via Graphviz
        if viz_path:
            try:
                write_and_render(program, viz_path, fmt=viz_format)
                print(f"Wrote AST visualization to {viz_path}.{viz_format}")
            except Exception as e:
                print(f"Failed to render AST visualization to {viz_path}: {e}")

        if error_count:
            noun = "error" if error_count == 1 else "errors"
            print(f"\n{error_count} syntax {noun}.")
            return PARSE_ERROR_STATUS

        if execute:
            Executor().execute(program)
            sys.stdout.flush()

        if print_symbols:
            print("\nSymbols:")
            for entry in symbol_table:
                print(f"  {entry.name:<16} {format_real(entry.value, 0, 6)}")

        return 0

    except Exception as e:
        print(f"Unexpected error: {e}")
        import traceback

        traceback.print_exc()
        return PARSE_ERROR_STATUS


def interactive_mode(print_ast: bool = False, print_symbols: bool = False) -> None:
    """Run an interactive REPL reading one program per line from stdin."""
    print("\nInteractive Pascal Mode (type 'quit' to exit)")
    print("=" * 80)

    while True:
        try:
            text = input("\nEnter program: ").strip()
            if text.lower() in ("quit", "exit", "q"):
                print("Goodbye!")
                break

            if not text:
                continue

            process_program(text, print_ast=print_ast, print_symbols=print_symbols)
            print()

        except KeyboardInterrupt:
            print("\n\nExiting...")
            break
        except EOFError:
            break


if __name__ == "__main__":
    import argparse

    parser = argparse.ArgumentParser(
        description="Run a Pascal program from a file or interactively from stdin"
    )
    group = parser.add_mutually_exclusive_group()
    group.add_argument(
        "--file", "-f", dest="file", help="Path to source file to run"
    )
    group.add_argument(
        "--interactive",
        "-i",
        dest="interactive",
        action="store_true",
        help="Start interactive REPL mode",
    )
    # printing/verbosity options
    parser.add_argument(
        "--print-tokens", dest="print_tokens", action="store_true", help="Print tokens"
    )
    parser.add_argument(
        "--print-ast", dest="print_ast", action="store_true", help="Print the AST"
    )
    parser.add_argument(
        "--print-symbols",
        dest="print_symbols",
        action="store_true",
        help="Print every variable and its final value after the run",
    )
    parser.add_argument(
        "--no-execute",
        dest="execute",
        action="store_false",
        help="Parse (and print/dump) only; do not run the program",
    )
    parser.add_argument(
        "--dump-ast", dest="dump_ast", help="Path to write the AST as JSON"
    )
    parser.add_argument(
        "--viz-ast",
        dest="viz_ast",
        help="Path (without extension) to write Graphviz visualization of the AST",
    )
    parser.add_argument(
        "--viz-format",
        dest="viz_format",
        default="svg",
        help="Format for Graphviz output (svg, png, pdf, etc)",
    )

    args = parser.parse_args()

    if args.interactive:
        interactive_mode(print_ast=args.print_ast, print_symbols=args.print_symbols)
    elif args.file:
        try:
            with open(args.file, "r", encoding="utf-8") as fh:
                text = fh.read()
        except OSError as e:
            print(f"Failed to read file {args.file}: {e}")
            sys.exit(PARSE_ERROR_STATUS)

        status = process_program(
            text,
            print_tokens=args.print_tokens,
            print_ast=args.print_ast,
            dump_ast_path=args.dump_ast,
            viz_path=args.viz_ast,
            viz_format=args.viz_format,
            print_symbols=args.print_symbols,
            execute=args.execute,
        )
        sys.exit(status)
    else:
        parser.print_help()
