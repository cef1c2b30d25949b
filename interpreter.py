"""
Calc Interpreter
Tree-walking evaluator: statements in program order, expressions depth-first,
left operand before right. Effects go to a VariableStore and an OutputSink.
"""

import sys
from typing import Dict, Optional

from ast_nodes import (
  Assign,
  BinaryOp,
  BinaryOperator,
  Blank,
  Expr,
  IntLiteral,
  Paren,
  PrintExpr,
  Program,
  Statement,
  VarRef,
  node_type,
)
from arithmetic import OVERFLOW_POLICIES, OVERFLOW_WRAP, apply_operator, apply_overflow_policy
from error_handling import CalcRuntimeError
from memory import VariableStore
from output import OutputSink


DIVISION_BY_ZERO = "division by zero"


# ============================================================================
# EXECUTION CONTEXT
# ============================================================================

def make_execution_context(debug: bool = False, overflow: str = OVERFLOW_WRAP,
                           strict: bool = False) -> Dict:
  """Create the options dictionary threaded through evaluation"""
  if overflow not in OVERFLOW_POLICIES:
    raise ValueError(
        f"Unknown overflow policy: {overflow} (expected one of {', '.join(OVERFLOW_POLICIES)})")
  return {
      'debug': debug,
      'overflow': overflow,
      'strict': strict,
  }


def trace(context: Dict, message: str) -> None:
  """Debug trace; kept off the result channel"""
  if context['debug']:
    print(message, file=sys.stderr)


# ============================================================================
# STATEMENTS
# ============================================================================

def eval_statement(statement: Statement, store: VariableStore, sink: OutputSink,
                   context: Dict) -> None:
  """Run one statement to completion. Statements produce effects, not values."""
  line = getattr(statement, "line", None)
  trace(context, f"Evaluating: {node_type(statement)}" + (f" (line {line})" if line is not None else ""))

  if isinstance(statement, Assign):
    eval_assign(statement, store, sink, context)
  elif isinstance(statement, PrintExpr):
    eval_print_expr(statement, store, sink, context)
  elif isinstance(statement, Blank):
    eval_blank(statement, store, sink, context)
  else:
    raise TypeError(f"Unknown statement type: {type(statement).__name__}")


def eval_assign(statement: Assign, store: VariableStore, sink: OutputSink, context: Dict) -> None:
  """Evaluate the right-hand side and bind it, overwriting any previous value"""
  value = eval_expr(statement.value_expr, store, sink, context)
  store.set(statement.name, value)


def eval_print_expr(statement: PrintExpr, store: VariableStore, sink: OutputSink,
                    context: Dict) -> None:
  """Evaluate the expression and write its value to the result channel"""
  value = eval_expr(statement.expr, store, sink, context)
  sink.result(value)


def eval_blank(statement: Blank, store: VariableStore, sink: OutputSink, context: Dict) -> None:
  pass


# ============================================================================
# EXPRESSIONS
# ============================================================================

def eval_expr(expr: Expr, store: VariableStore, sink: OutputSink, context: Dict) -> int:
  """Evaluate an expression node to an integer"""
  if isinstance(expr, IntLiteral):
    return eval_int_literal(expr, store, sink, context)
  elif isinstance(expr, VarRef):
    return eval_var_ref(expr, store, sink, context)
  elif isinstance(expr, BinaryOp):
    return eval_binary_op(expr, store, sink, context)
  elif isinstance(expr, Paren):
    return eval_paren(expr, store, sink, context)
  raise TypeError(f"Unknown expression type: {type(expr).__name__}")


def eval_int_literal(expr: IntLiteral, store: VariableStore, sink: OutputSink, context: Dict) -> int:
  return apply_overflow_policy(expr.value, context['overflow'])


def eval_var_ref(expr: VarRef, store: VariableStore, sink: OutputSink, context: Dict) -> int:
  """Look up a variable; unbound names read as 0 unless strict mode is on"""
  if context['strict'] and expr.name not in store:
    raise CalcRuntimeError(f"undefined variable '{expr.name}'")
  return store.get(expr.name)


def eval_binary_op(expr: BinaryOp, store: VariableStore, sink: OutputSink, context: Dict) -> int:
  """Evaluate left, then right, then apply the operator"""
  left = eval_expr(expr.left, store, sink, context)
  right = eval_expr(expr.right, store, sink, context)

  if expr.operator is BinaryOperator.DIV and right == 0:
    # Recovered locally: report and continue with 0
    trace(context, f"Division by zero in: {expr}")
    sink.diagnostic(DIVISION_BY_ZERO)
    return 0

  return apply_operator(expr.operator, left, right, context['overflow'])


def eval_paren(expr: Paren, store: VariableStore, sink: OutputSink, context: Dict) -> int:
  return eval_expr(expr.inner, store, sink, context)


# ============================================================================
# PROGRAM EVALUATION
# ============================================================================

def execute(program: Program, store: VariableStore, sink: OutputSink,
            context: Optional[Dict] = None) -> None:
  """
  Execute every statement of program in order against store and sink.
  Returns nothing: prints and diagnostics are the only observable results.
  """
  if context is None:
    context = make_execution_context()

  for statement in program:
    try:
      eval_statement(statement, store, sink, context)
    except CalcRuntimeError as e:
      if e.line is None:
        e.line = getattr(statement, "line", None)
      raise


# ============================================================================
# FACTORY FUNCTIONS (for main.py)
# ============================================================================

class Interpreter:
  """Binds one execution context, store and sink together for a run or a session"""

  def __init__(self, context: Dict, store: Optional[VariableStore] = None,
               sink: Optional[OutputSink] = None):
    self.context = context
    self.store = store if store is not None else VariableStore()
    self.sink = sink if sink is not None else OutputSink()

  def interpret_program(self, program: Program) -> None:
    execute(program, self.store, self.sink, self.context)

  def interpret_statement(self, statement: Statement) -> None:
    execute(Program([statement]), self.store, self.sink, self.context)


def create_interpreter(debug: bool = False, overflow: str = OVERFLOW_WRAP, strict: bool = False,
                       store: Optional[VariableStore] = None,
                       sink: Optional[OutputSink] = None) -> Interpreter:
  """Factory function returning an interpreter with a fresh store unless one is given"""
  return Interpreter(make_execution_context(debug, overflow, strict), store, sink)


def create_debug_interpreter(**kwargs) -> Interpreter:
  """Factory function returning a debug interpreter"""
  return create_interpreter(debug=True, **kwargs)
