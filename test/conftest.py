"""
Test configuration for Calc tests
"""

import io
import pytest
import sys
from pathlib import Path

# Add the project root to Python path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

from memory import VariableStore
from output import OutputSink
from parsing import create_parser


@pytest.fixture
def parser():
  """Provide a fresh parser for each test"""
  return create_parser()


@pytest.fixture
def store():
  return VariableStore()


@pytest.fixture
def sink():
  """OutputSink writing to in-memory streams"""
  return OutputSink(io.StringIO(), io.StringIO())


def result_lines(sink):
  return sink.result_stream.getvalue().splitlines()


def diagnostic_lines(sink):
  return sink.diagnostic_stream.getvalue().splitlines()
