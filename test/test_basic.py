"""
Basic parsing tests for the Calc language
Tests the tree shapes the interpreter relies on
"""

import pytest
from ast_nodes import (
  Assign, BinaryOp, BinaryOperator, Blank, IntLiteral, Paren, PrintExpr, Program, VarRef
)
from error_handling import CalcParseError
from parsing import CalcGrammar, pretty_print_ast
from pyparsing import ParseException


class TestBasicParsing:
  """Test basic parsing functionality"""

  def test_simple_program_parsing(self, parser):
    """Test parsing of a simple program"""
    program = parser.parse_string("x = 42\nx\n")
    assert len(program) == 2
    assert program.statements[0] == Assign("x", IntLiteral(42))
    assert program.statements[1] == PrintExpr(VarRef("x"))

  def test_blank_lines(self, parser):
    """Empty and whitespace-only lines become Blank statements"""
    program = parser.parse_string("1\n\n   \n2")
    assert [type(s) for s in program] == [PrintExpr, Blank, Blank, PrintExpr]

  def test_trailing_newline_adds_no_statement(self, parser):
    assert len(parser.parse_string("1\n")) == 1

  def test_empty_program(self, parser):
    assert parser.parse_string("") == Program([])

  def test_line_numbers_recorded(self, parser):
    program = parser.parse_string("a = 1\n\na")
    assert [s.line for s in program] == [1, 2, 3]

  def test_identifiers(self, parser):
    program = parser.parse_string("total_2 = _tmp")
    assert program.statements[0] == Assign("total_2", VarRef("_tmp"))

  def test_windows_line_endings(self, parser):
    program = parser.parse_string("x = 1\r\nx\r\n")
    assert program.statements == (Assign("x", IntLiteral(1)), PrintExpr(VarRef("x")))


class TestExpressionShapes:
  """Precedence and associativity are encoded in the tree"""

  def test_multiplication_binds_tighter(self, parser):
    expr = parser.parse_expression("3 + 4 * 2")
    assert expr == BinaryOp(
        BinaryOperator.ADD,
        IntLiteral(3),
        BinaryOp(BinaryOperator.MUL, IntLiteral(4), IntLiteral(2)),
    )

  def test_parentheses_kept_as_paren_node(self, parser):
    expr = parser.parse_expression("(3 + 4) * 2")
    assert expr == BinaryOp(
        BinaryOperator.MUL,
        Paren(BinaryOp(BinaryOperator.ADD, IntLiteral(3), IntLiteral(4))),
        IntLiteral(2),
    )

  def test_subtraction_is_left_associative(self, parser):
    expr = parser.parse_expression("10 - 3 - 2")
    assert expr == BinaryOp(
        BinaryOperator.SUB,
        BinaryOp(BinaryOperator.SUB, IntLiteral(10), IntLiteral(3)),
        IntLiteral(2),
    )

  def test_division_is_left_associative(self, parser):
    expr = parser.parse_expression("8 / 4 / 2")
    assert expr.left == BinaryOp(BinaryOperator.DIV, IntLiteral(8), IntLiteral(4))
    assert expr.right == IntLiteral(2)

  def test_whitespace_insignificant(self, parser):
    assert parser.parse_expression("a+b*2") == parser.parse_expression("a  +\tb * 2")

  def test_nested_parentheses(self, parser):
    expr = parser.parse_expression("((x))")
    assert expr == Paren(Paren(VarRef("x")))


class TestGrammarElements:
  """Test individual grammar elements"""

  @pytest.fixture
  def grammar(self):
    return CalcGrammar()

  def test_integer_atom(self, grammar):
    result = grammar.atom.parse_string("007")
    assert result[0] == IntLiteral(7)

  def test_assignment_element(self, grammar):
    result = grammar.assignment.parse_string("y = 1 + 2")
    assert result[0][0] == "ASSIGN"
    assert result[0][1] == "y"

  def test_incomplete_expression(self, grammar):
    with pytest.raises(ParseException):
      grammar.expression.parse_string("1 +", parse_all=True)


class TestErrorHandling:
  """Test error handling and reporting"""

  def test_invalid_character(self, parser):
    with pytest.raises(CalcParseError) as exc_info:
      parser.parse_string("x = 1\ny = 2 % 3\n")
    error = exc_info.value
    assert error.line == 2
    assert error.column == 7
    assert error.got == "'% 3'"
    assert "Supported operators are + - * /" in error.suggestions

  def test_error_message_layout(self, parser):
    with pytest.raises(CalcParseError) as exc_info:
      parser.parse_string("1 +", filename="prog.calc")
    text = str(exc_info.value)
    assert text.startswith("Parse error at line 1, column")
    assert "of prog.calc" in text
    assert "^ Error here" in text
    assert "An operator needs an operand on its right" in text

  def test_unbalanced_parenthesis(self, parser):
    with pytest.raises(CalcParseError) as exc_info:
      parser.parse_string("(1 + 2")
    assert "Check that every '(' has a matching ')'" in exc_info.value.suggestions

  def test_decimal_rejected(self, parser):
    with pytest.raises(CalcParseError) as exc_info:
      parser.parse_string("1.5 * 2")
    assert any("integers" in s for s in exc_info.value.suggestions)

  def test_unary_minus_rejected(self, parser):
    with pytest.raises(CalcParseError):
      parser.parse_string("-5")

  def test_double_assignment_rejected(self, parser):
    with pytest.raises(CalcParseError):
      parser.parse_string("a = b = 1")

  def test_parse_error_keeps_cause(self, parser):
    with pytest.raises(CalcParseError) as exc_info:
      parser.parse_string("2 2")
    assert isinstance(exc_info.value.__cause__, ParseException)

  def test_single_line_error_keeps_details_after_first_line(self, parser):
    """Errors on later prompt lines report the line they were typed on"""
    with pytest.raises(CalcParseError) as exc_info:
      parser.parse_statement("y = 2 % 3", 2)
    error = exc_info.value
    assert error.line == 2
    assert error.column == 7
    assert error.got == "'% 3'"
    assert "Supported operators are + - * /" in error.suggestions
    assert error.context == "   2: y = 2 % 3\n" + " " * 12 + "^ Error here"
    assert str(error).startswith("Parse error at line 2, column 7:")

  def test_single_line_statement_numbered(self, parser):
    statement = parser.parse_statement("x = 1", 5)
    assert statement == Assign("x", IntLiteral(1))
    assert statement.line == 5


class TestPrettyPrint:

  def test_pretty_print_assignment(self, parser):
    statement = parser.parse_statement("x = (1 + y) * 2")
    assert pretty_print_ast(statement) == (
        "ASSIGN('x')\n"
        "  BINARY_OP('*')\n"
        "    PAREN\n"
        "      BINARY_OP('+')\n"
        "        INT_LITERAL(1)\n"
        "        VAR_REF('y')\n"
        "    INT_LITERAL(2)\n"
    )

  def test_pretty_print_program(self, parser):
    text = pretty_print_ast(parser.parse_string("1\n", filename="a.calc"))
    assert text == "PROGRAM('a.calc')\n  PRINT_EXPR\n    INT_LITERAL(1)\n"
