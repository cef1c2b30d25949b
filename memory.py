"""
Calc variable store
Mutable identifier -> integer table owned by a single execution
"""

from typing import Dict


class VariableStore:
  """Calculator memory: unbound names read as 0, assignment overwrites"""

  def __init__(self, bindings: Dict[str, int] = None):
    self._bindings: Dict[str, int] = dict(bindings or {})

  def get(self, name: str) -> int:
    return self._bindings.get(name, 0)

  def set(self, name: str, value: int) -> None:
    self._bindings[name] = value

  def __contains__(self, name: str) -> bool:
    return name in self._bindings

  def __len__(self) -> int:
    return len(self._bindings)

  def snapshot(self) -> Dict[str, int]:
    """Copy of the current bindings, in first-assignment order"""
    return dict(self._bindings)

  def __repr__(self) -> str:
    return f"VariableStore({self._bindings!r})"
