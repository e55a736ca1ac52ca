"""
Parser for the Pascal subset.

Overview and approach:
- This parser is a hand-written recursive-descent parser with one method per
    nonterminal and a single token of lookahead (`self.current`), pulled from
    the lexer on demand:

        Program           := PROGRAM identifier ';' CompoundStatement '.'
        CompoundStatement := BEGIN StatementList END
        StatementList     := (Statement (';' Statement)*)?
        Statement         := Assignment | CompoundStatement | RepeatStatement
                           | WhileStatement | IfStatement | WriteStatement
                           | WritelnStatement
        Expression        := SimpleExpression (RelOp SimpleExpression)?
        SimpleExpression  := [('+'|'-')] Term (('+'|'-'|OR) Term)*
        Term              := Factor (('*'|'/'|DIV|MOD|AND) Factor)*
        Factor            := identifier | integer | real | '(' Expression ')'
                           | NOT Expression

- Operator precedence falls out of the grammar levels: relational operators
    bind loosest, then the adding operators, then the multiplying operators.
    Each level builds left-associative trees.

Loops:
- REPEAT builds `LOOP[statements..., TEST[cond]]`, a post-test loop.
- WHILE builds `LOOP[TEST[NOT cond], COMPOUND]`. The guard is negated here
    so the LOOP's "exit when TEST is true" rule covers both forms, and the
    TEST comes first so the body never runs when the guard is false.

Symbols:
- An assignment target is entered into the symbol table on first use.
- Reading a name that was never assigned is a semantic error. The VARIABLE
    node is then bound to a detached entry that is not in the table, so the
    tree never carries a missing entry.

Errors and recovery:
- Every syntax or semantic error prints one diagnostic line and increments
    `error_count`; nothing is raised to the caller.
- After a syntax error, tokens are skipped up to the next `;`, END, UNTIL or
    end of input. Inside a statement the error also unwinds (via
    `SyntaxError`) to `parse_statement`, which drops the malformed statement
    and lets the statement list carry on.
"""

from __future__ import annotations
from typing import Optional, Tuple
from tokens import Token, TokenType
from ast_nodes import Node, NodeType
from lexer import Lexer
from symbols import SymbolTable, SymbolTableEntry


STATEMENT_STARTERS = frozenset(
    {
        TokenType.BEGIN,
        TokenType.IDENTIFIER,
        TokenType.REPEAT,
        TokenType.WHILE,
        TokenType.IF,
        TokenType.WRITE,
        TokenType.WRITELN,
    }
)

STATEMENT_FOLLOWERS = frozenset(
    {TokenType.SEMICOLON, TokenType.END, TokenType.UNTIL, TokenType.EOF}
)

RELATIONAL_OPERATORS = {
    TokenType.EQUALS: NodeType.EQ,
    TokenType.LESS_THAN: NodeType.LT,
    TokenType.LESS_EQUALS: NodeType.LE,
    TokenType.GREATER_EQUALS: NodeType.GE,
    TokenType.GREATER_THAN: NodeType.GT,
    TokenType.NOT_EQUALS: NodeType.NE,
}

SIMPLE_EXPRESSION_OPERATORS = {
    TokenType.PLUS: NodeType.ADD,
    TokenType.MINUS: NodeType.SUBTRACT,
    TokenType.OR: NodeType.OR_OP,
}

# DIV shares the real-division node with `/`.
TERM_OPERATORS = {
    TokenType.STAR: NodeType.MULTIPLY,
    TokenType.SLASH: NodeType.DIVIDE,
    TokenType.DIV: NodeType.DIVIDE,
    TokenType.MOD: NodeType.MODULUS,
    TokenType.AND: NodeType.AND_OP,
}


class Parser:
    def __init__(self, lexer: Lexer, symbol_table: Optional[SymbolTable] = None):
        self.lexer = lexer
        self.symbol_table = symbol_table if symbol_table is not None else SymbolTable()
        self.current = Token(TokenType.EOF, "", 1)
        self.error_count = 0

    def advance(self) -> Token:
        """Move to next token."""
        self.current = self.lexer.next_token()
        return self.current

    def match(self, token_type: TokenType) -> bool:
        """Check if current token matches type, consume if true."""
        if self.current.type == token_type:
            self.advance()
            return True
        return False

    def syntax_error(self, message: str) -> SyntaxError:
        """Report a syntax error and skip to the next statement follower.

        The returned exception is raised by callers that are in the middle of
        a statement; callers at list or program level just report.
        """
        text = self.current.text
        print(f"SYNTAX ERROR at line {self.current.line}: {message} at '{text}'")
        self.error_count += 1

        while self.current.type not in STATEMENT_FOLLOWERS:
            self.advance()

        return SyntaxError(message)

    def semantic_error(self, message: str) -> None:
        print(
            f"SEMANTIC ERROR at line {self.current.line}: {message} at '{self.current.text}'"
        )
        self.error_count += 1

    def parse(self) -> Tuple[Node, int]:
        """Parse a whole program, returning the tree and the error count."""
        program = self.parse_program()
        return program, self.error_count

    def parse_program(self) -> Node:
        """Parse: PROGRAM identifier ';' CompoundStatement '.'"""
        self.advance()  # first token
        program = Node(NodeType.PROGRAM, line=self.current.line)

        if not self.match(TokenType.PROGRAM):
            self.syntax_error("Expecting PROGRAM")

        if self.current.type == TokenType.IDENTIFIER:
            program.text = self.current.text
            self.symbol_table.enter(self.current.text)
            self.advance()
        else:
            self.syntax_error("Expecting program name")

        if not self.match(TokenType.SEMICOLON):
            self.syntax_error("Missing ;")

        if self.current.type != TokenType.BEGIN:
            self.syntax_error("Expecting BEGIN")

        program.adopt(self.parse_compound_statement())

        if self.current.type != TokenType.PERIOD:
            self.syntax_error("Expecting .")

        return program

    def parse_statement(self) -> Optional[Node]:
        """Parse one statement; None for an empty or malformed statement."""
        try:
            match self.current.type:
                case TokenType.IDENTIFIER:
                    return self.parse_assignment_statement()
                case TokenType.BEGIN:
                    return self.parse_compound_statement()
                case TokenType.REPEAT:
                    return self.parse_repeat_statement()
                case TokenType.WHILE:
                    return self.parse_while_statement()
                case TokenType.IF:
                    return self.parse_if_statement()
                case TokenType.WRITE:
                    return self.parse_write_statement()
                case TokenType.WRITELN:
                    return self.parse_writeln_statement()
                case TokenType.SEMICOLON:
                    return None  # empty statement
                case _:
                    raise self.syntax_error("Unexpected token")
        except SyntaxError:
            # Already reported; the rest of the statement has been skipped.
            return None

    def parse_statement_list(self, parent: Node, terminal: TokenType) -> None:
        """Parse statements separated by `;` into `parent` until `terminal`."""
        while self.current.type not in (terminal, TokenType.EOF):
            # An END or UNTIL that closes some other construct.
            if self.current.type in (TokenType.END, TokenType.UNTIL):
                break

            statement = self.parse_statement()
            if statement is not None:
                parent.adopt(statement)

            if self.current.type == TokenType.SEMICOLON:
                while self.match(TokenType.SEMICOLON):
                    pass
            elif self.current.type in STATEMENT_STARTERS:
                self.syntax_error("Missing ;")

    def parse_compound_statement(self) -> Node:
        """Parse: BEGIN StatementList END"""
        compound = Node(NodeType.COMPOUND, line=self.current.line)
        self.match(TokenType.BEGIN)

        self.parse_statement_list(compound, TokenType.END)

        if not self.match(TokenType.END):
            self.syntax_error("Expecting END")

        return compound

    def parse_assignment_statement(self) -> Node:
        """Parse: identifier ':=' Expression"""
        token = self.current
        assign = Node(NodeType.ASSIGN, line=token.line)

        # Assignment targets are declared by their first assignment.
        entry = self.symbol_table.enter(token.text)
        assign.adopt(
            Node(NodeType.VARIABLE, line=token.line, text=token.text, entry=entry)
        )
        self.advance()  # consume the target name

        if not self.match(TokenType.COLON_EQUALS):
            raise self.syntax_error("Missing :=")

        assign.adopt(self.parse_expression())
        return assign

    def parse_repeat_statement(self) -> Node:
        """Parse: REPEAT StatementList UNTIL Expression"""
        loop = Node(NodeType.LOOP, line=self.current.line)
        self.advance()  # consume REPEAT

        self.parse_statement_list(loop, TokenType.UNTIL)

        if self.current.type != TokenType.UNTIL:
            raise self.syntax_error("Expecting UNTIL")

        test = Node(NodeType.TEST, line=self.current.line, text=self.current.text)
        self.advance()  # consume UNTIL
        test.adopt(self.parse_expression())

        # The exit test comes last: the body always runs at least once.
        loop.adopt(test)
        return loop

    def parse_while_statement(self) -> Node:
        """Parse: WHILE Expression DO CompoundStatement"""
        keyword = self.current
        loop = Node(NodeType.LOOP, line=keyword.line)
        self.advance()  # consume WHILE

        test = Node(NodeType.TEST, line=self.current.line, text=keyword.text)
        negation = Node(NodeType.NOT_OP, line=self.current.line, text=keyword.text)
        negation.adopt(self.parse_expression())
        test.adopt(negation)
        loop.adopt(test)

        if not self.match(TokenType.DO):
            raise self.syntax_error("Expecting DO")

        if self.current.type != TokenType.BEGIN:
            raise self.syntax_error("Expecting BEGIN")

        loop.adopt(self.parse_compound_statement())
        return loop

    def parse_if_statement(self) -> Node:
        """Parse: IF Expression THEN Statement (ELSE Statement)?"""
        keyword = self.current
        if_node = Node(NodeType.IF_STATEMENT, line=keyword.line)
        self.advance()  # consume IF

        test = Node(NodeType.TEST, line=self.current.line, text=keyword.text)
        test.adopt(self.parse_expression())
        if_node.adopt(test)

        if not self.match(TokenType.THEN):
            raise self.syntax_error("Expecting THEN")

        if_node.adopt(self.parse_branch())

        if self.match(TokenType.ELSE):
            if_node.adopt(self.parse_branch())

        return if_node

    def parse_branch(self) -> Node:
        """Parse an IF branch; an empty branch becomes an empty COMPOUND."""
        line = self.current.line
        statement = self.parse_statement()
        if statement is None:
            return Node(NodeType.COMPOUND, line=line)
        return statement

    def parse_write_statement(self) -> Node:
        """Parse: WRITE '(' WriteArg ')'"""
        write = Node(NodeType.WRITE, line=self.current.line)
        self.advance()  # consume WRITE

        if self.current.type != TokenType.LPAREN:
            raise self.syntax_error("Missing left parenthesis")

        self.parse_write_arguments(write)
        return write

    def parse_writeln_statement(self) -> Node:
        """Parse: WRITELN ('(' WriteArg ')')?"""
        writeln = Node(NodeType.WRITELN, line=self.current.line)
        self.advance()  # consume WRITELN

        if self.current.type == TokenType.LPAREN:
            self.parse_write_arguments(writeln)
        return writeln

    def parse_write_arguments(self, node: Node) -> None:
        """Parse: '(' (Variable|String) (':' integer (':' integer)?)? ')'"""
        self.advance()  # consume (

        match self.current.type:
            case TokenType.IDENTIFIER:
                node.adopt(self.parse_variable())
            case TokenType.STRING | TokenType.CHARACTER:
                node.adopt(self.parse_string_constant())
            case _:
                raise self.syntax_error("Invalid WRITE or WRITELN statement")

        # Optional field width, then optional count of decimal places.
        if self.match(TokenType.COLON):
            if self.current.type != TokenType.INTEGER:
                raise self.syntax_error("Invalid field width")
            node.adopt(self.parse_integer_constant())

            if self.match(TokenType.COLON):
                if self.current.type != TokenType.INTEGER:
                    raise self.syntax_error("Invalid count of decimal places")
                node.adopt(self.parse_integer_constant())

        if not self.match(TokenType.RPAREN):
            raise self.syntax_error("Missing right parenthesis")

    def parse_expression(self) -> Node:
        """Parse: SimpleExpression (RelOp SimpleExpression)?"""
        expr = self.parse_simple_expression()

        node_type = RELATIONAL_OPERATORS.get(self.current.type)
        if node_type is not None:
            op = Node(node_type, line=self.current.line, text=self.current.text)
            self.advance()  # consume relational operator

            op.adopt(expr)
            op.adopt(self.parse_simple_expression())
            expr = op

        return expr

    def parse_simple_expression(self) -> Node:
        """Parse: [('+'|'-')] Term (('+'|'-'|OR) Term)*"""
        if self.current.type in (TokenType.PLUS, TokenType.MINUS):
            sign_type = (
                NodeType.POSITIVE
                if self.current.type == TokenType.PLUS
                else NodeType.NEGATE
            )
            expr = Node(sign_type, line=self.current.line, text=self.current.text)
            self.advance()  # consume the sign
            expr.adopt(self.parse_term())
        else:
            expr = self.parse_term()

        while self.current.type in SIMPLE_EXPRESSION_OPERATORS:
            op = Node(
                SIMPLE_EXPRESSION_OPERATORS[self.current.type],
                line=self.current.line,
                text=self.current.text,
            )
            self.advance()  # consume the operator

            op.adopt(expr)
            op.adopt(self.parse_term())
            expr = op

        return expr

    def parse_term(self) -> Node:
        """Parse: Factor (('*'|'/'|DIV|MOD|AND) Factor)*"""
        term = self.parse_factor()

        while self.current.type in TERM_OPERATORS:
            op = Node(
                TERM_OPERATORS[self.current.type],
                line=self.current.line,
                text=self.current.text,
            )
            self.advance()  # consume the operator

            op.adopt(term)
            op.adopt(self.parse_factor())
            term = op

        return term

    def parse_factor(self) -> Node:
        """Parse: identifier | integer | real | '(' Expression ')' | NOT Expression"""
        match self.current.type:
            case TokenType.IDENTIFIER:
                return self.parse_variable()

            case TokenType.INTEGER:
                return self.parse_integer_constant()

            case TokenType.REAL:
                return self.parse_real_constant()

            case TokenType.LPAREN:
                self.advance()  # consume (
                expr = self.parse_expression()
                if not self.match(TokenType.RPAREN):
                    raise self.syntax_error("Expecting )")
                return expr

            case TokenType.NOT:
                not_node = Node(
                    NodeType.NOT_OP, line=self.current.line, text=self.current.text
                )
                self.advance()  # consume NOT
                not_node.adopt(self.parse_expression())
                return not_node

            case _:
                raise self.syntax_error("Unexpected token")

    def parse_variable(self) -> Node:
        """Parse a variable read; the name must already be declared."""
        token = self.current

        entry = self.symbol_table.lookup(token.text)
        if entry is None:
            self.semantic_error("Undeclared identifier")
            entry = SymbolTableEntry(token.text)

        self.advance()  # consume the identifier
        return Node(NodeType.VARIABLE, line=token.line, text=token.text, entry=entry)

    def parse_integer_constant(self) -> Node:
        token = self.current
        self.advance()
        return Node(
            NodeType.INTEGER_CONSTANT, line=token.line, text=token.text, value=token.value
        )

    def parse_real_constant(self) -> Node:
        token = self.current
        self.advance()
        return Node(
            NodeType.REAL_CONSTANT, line=token.line, text=token.text, value=token.value
        )

    def parse_string_constant(self) -> Node:
        token = self.current
        self.advance()
        return Node(
            NodeType.STRING_CONSTANT, line=token.line, text=token.text, value=token.value
        )
