"""
Calc Parser
Line-oriented pyparsing grammar producing the AST consumed by the interpreter
"""

import dataclasses
import sys
from typing import List, Any

try:
    from pyparsing import (
        Forward, Regex, Suppress, ZeroOrMore, one_of, ParserElement
    )
    # Enable packrat parsing for performance
    ParserElement.enable_packrat()
except ImportError:
    raise ImportError("pyparsing library not found. Install with: pip install pyparsing")

from ast_nodes import (
    Assign, BinaryOp, Blank, Expr, IntLiteral, Paren, PrintExpr, Program,
    Statement, VarRef, fold_left, node_type
)
from error_handling import CalcParseError, create_enhanced_parser_with_errors, get_context_lines


class CalcGrammar:
    """Calc grammar definition using pyparsing"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._setup_grammar()

    def _setup_grammar(self):
        """Setup the grammar for one statement line"""

        # Forward declaration for parenthesized recursion
        expression = Forward()

        # Literals and names
        integer = Regex(r"[0-9]+").set_name("integer").set_parse_action(
            lambda t: IntLiteral(int(t[0]))
        )
        identifier = Regex(r"[A-Za-z_][A-Za-z0-9_]*").set_name("identifier")
        var_ref = identifier.copy().set_parse_action(lambda t: VarRef(t[0]))

        # Parenthesized expressions stay in the tree as Paren nodes
        parenthesized = (Suppress("(") + expression + Suppress(")")).set_parse_action(
            lambda t: Paren(t[0])
        )

        atom = integer | var_ref | parenthesized

        def make_chain(tokens):
            # tokens alternate operand, symbol, operand, ...
            items = list(tokens)
            return fold_left(items[0::2], items[1::2])

        # '*' '/' bind tighter than '+' '-'; both levels associate to the left
        term = (atom + ZeroOrMore(one_of("* /") + atom)).set_parse_action(make_chain)
        expression <<= (term + ZeroOrMore(one_of("+ -") + term)).set_parse_action(make_chain)
        expression.set_name("expression")

        assignment = (identifier + Suppress("=") + expression).set_parse_action(
            lambda t: ("ASSIGN", t[0], t[1])
        )

        statement = assignment | expression

        # Store the main parsers
        self.statement = statement
        self.assignment = assignment
        self.expression = expression
        self.atom = atom
        self.term = term
        self.identifier = identifier

    def parse_line(self, line_text: str, line_num: int, source_text: str,
                   filename: str = "<input>") -> Statement:
        """Parse one source line into a statement"""
        if not line_text.strip():
            return Blank(line=line_num)

        parse = create_enhanced_parser_with_errors(
            self.statement.parse_string, source_text, line_num, filename
        )
        result = parse(line_text, parse_all=True)[0]

        if isinstance(result, tuple) and result[0] == "ASSIGN":
            statement = Assign(result[1], result[2], line=line_num)
        else:
            statement = PrintExpr(result, line=line_num)

        if self.debug:
            print(f"Parsed line {line_num}: {node_type(statement)} {statement}", file=sys.stderr)
        return statement

    def parse_program(self, text: str, filename: str = "<input>") -> Program:
        """Parse a complete Calc program, one statement per line"""
        statements = [
            self.parse_line(line_text, line_num, text, filename)
            for line_num, line_text in enumerate(text.splitlines(), 1)
        ]
        return Program(statements, filename)

    def parse_expression(self, text: str, filename: str = "<input>") -> Expr:
        """Parse a single Calc expression"""
        parse = create_enhanced_parser_with_errors(
            self.expression.parse_string, text, 1, filename
        )
        return parse(text, parse_all=True)[0]


class CalcParser:
    """Main Calc parser: file and string front end over the grammar"""

    def __init__(self, debug: bool = False):
        self.debug = debug
        self.grammar = CalcGrammar(debug)

    def parse_file(self, filepath: str) -> Program:
        """Parse a Calc source file"""
        try:
            with open(filepath, 'r', encoding='utf-8') as f:
                content = f.read()
        except UnicodeDecodeError as e:
            raise CalcParseError(f"Cannot decode file {filepath}: {e}", filename=filepath)
        return self.grammar.parse_program(content, filepath)

    def parse_string(self, text: str, filename: str = "<input>") -> Program:
        """Parse Calc source code from string"""
        return self.grammar.parse_program(text, filename)

    def parse_statement(self, text: str, line_num: int = 1) -> Statement:
        """Parse a single line, as typed at the interactive prompt"""
        # text is the whole source here, so parse it as line 1 and renumber
        try:
            statement = self.grammar.parse_line(text, 1, text)
        except CalcParseError as e:
            e.line = line_num
            e.context = get_context_lines(text, 1, e.column, line_offset=line_num - 1)
            raise
        return dataclasses.replace(statement, line=line_num)

    def parse_expression(self, text: str, filename: str = "<input>") -> Expr:
        """Parse a single Calc expression"""
        return self.grammar.parse_expression(text, filename)


# Factory functions for creating parsers
def create_parser(debug: bool = False) -> CalcParser:
    """Create a Calc parser"""
    return CalcParser(debug=debug)


def create_debug_parser() -> CalcParser:
    """Create a Calc parser with debug enabled"""
    return CalcParser(debug=True)


# Utility functions for working with the AST
def children(node: Any) -> List[Any]:
    """Direct child nodes of an AST node"""
    if isinstance(node, Program):
        return list(node.statements)
    if isinstance(node, Assign):
        return [node.value_expr]
    if isinstance(node, PrintExpr):
        return [node.expr]
    if isinstance(node, BinaryOp):
        return [node.left, node.right]
    if isinstance(node, Paren):
        return [node.inner]
    return []


def pretty_print_ast(node: Any, indent: int = 0) -> str:
    """Pretty print an AST node for debugging"""
    result = "  " * indent + node_type(node)
    if isinstance(node, IntLiteral):
        result += f"({node.value})"
    elif isinstance(node, VarRef):
        result += f"({node.name!r})"
    elif isinstance(node, Assign):
        result += f"({node.name!r})"
    elif isinstance(node, BinaryOp):
        result += f"({node.operator.value!r})"
    elif isinstance(node, Program):
        result += f"({node.filename!r})"
    result += "\n"

    for child in children(node):
        result += pretty_print_ast(child, indent + 1)

    return result
