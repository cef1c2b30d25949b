"""
Calc output sink
Two independent line-oriented channels: results and diagnostics
"""

import sys
from typing import Optional, TextIO


class OutputSink:
  """Writes printed values to one stream and recovered errors to another"""

  def __init__(self, result_stream: Optional[TextIO] = None,
               diagnostic_stream: Optional[TextIO] = None):
    # Resolved lazily so pytest's capsys sees the replaced streams
    self._result_stream = result_stream
    self._diagnostic_stream = diagnostic_stream

  @property
  def result_stream(self) -> TextIO:
    return self._result_stream if self._result_stream is not None else sys.stdout

  @property
  def diagnostic_stream(self) -> TextIO:
    return self._diagnostic_stream if self._diagnostic_stream is not None else sys.stderr

  def result(self, value: int) -> None:
    """Write one decimal integer line to the result channel"""
    self.result_stream.write(f"{value}\n")

  def diagnostic(self, message: str) -> None:
    """Write one line to the diagnostic channel"""
    self.diagnostic_stream.write(f"{message}\n")
