"""
Calc arithmetic
Integer operator semantics and the overflow policy applied to every result
"""

from typing import Callable, Dict
from ast_nodes import BinaryOperator
from error_handling import CalcRuntimeError


# ============================================================================
# INTEGER WIDTH
# ============================================================================

INT_BITS = 32
INT_MIN = -(2 ** (INT_BITS - 1))
INT_MAX = 2 ** (INT_BITS - 1) - 1

OVERFLOW_WRAP = "wrap"
OVERFLOW_CHECKED = "checked"
OVERFLOW_UNBOUNDED = "unbounded"
OVERFLOW_POLICIES = (OVERFLOW_WRAP, OVERFLOW_CHECKED, OVERFLOW_UNBOUNDED)


def wrap_int(value: int) -> int:
  """Reduce value to a signed 32-bit two's complement integer"""
  return (value - INT_MIN) % (2 ** INT_BITS) + INT_MIN


def check_int(value: int) -> int:
  """Return value unchanged, or raise if it does not fit in 32 bits"""
  if value < INT_MIN or value > INT_MAX:
    raise CalcRuntimeError("integer overflow")
  return value


def apply_overflow_policy(value: int, policy: str = OVERFLOW_WRAP) -> int:
  """Bring a mathematically exact result into range according to policy"""
  if policy == OVERFLOW_WRAP:
    return wrap_int(value)
  elif policy == OVERFLOW_CHECKED:
    return check_int(value)
  elif policy == OVERFLOW_UNBOUNDED:
    return value
  raise ValueError(f"Unknown overflow policy: {policy}")


# ============================================================================
# OPERATORS
# ============================================================================

def calc_add(x: int, y: int) -> int:
  """Addition"""
  return x + y


def calc_sub(x: int, y: int) -> int:
  """Subtraction"""
  return x - y


def calc_mul(x: int, y: int) -> int:
  """Multiplication"""
  return x * y


def calc_div(x: int, y: int) -> int:
  """Division truncating toward zero; the caller handles a zero divisor"""
  if y == 0:
    raise ZeroDivisionError("division by zero")
  quotient = abs(x) // abs(y)
  return quotient if (x < 0) == (y < 0) else -quotient


BUILTIN_OPERATORS: Dict[BinaryOperator, Callable[[int, int], int]] = {
    BinaryOperator.ADD: calc_add,
    BinaryOperator.SUB: calc_sub,
    BinaryOperator.MUL: calc_mul,
    BinaryOperator.DIV: calc_div,
}


def apply_operator(op: BinaryOperator, x: int, y: int, policy: str = OVERFLOW_WRAP) -> int:
  """Apply op to two integers and normalize the result"""
  return apply_overflow_policy(BUILTIN_OPERATORS[op](x, y), policy)
