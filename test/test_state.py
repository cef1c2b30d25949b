"""
Tests for the variable store and output sink
"""

import io
from memory import VariableStore
from output import OutputSink


class TestVariableStore:

  def test_unbound_reads_zero(self, store):
    assert store.get("anything") == 0
    assert "anything" not in store

  def test_set_overwrites(self, store):
    store.set("x", 1)
    store.set("x", -5)
    assert store.get("x") == -5
    assert len(store) == 1

  def test_snapshot_is_a_copy(self, store):
    store.set("b", 2)
    store.set("a", 1)
    snapshot = store.snapshot()
    assert list(snapshot) == ["b", "a"]
    snapshot["c"] = 3
    assert "c" not in store

  def test_initial_bindings_copied(self):
    initial = {"x": 1}
    store = VariableStore(initial)
    store.set("x", 2)
    assert initial == {"x": 1}


class TestOutputSink:

  def test_channels_are_independent(self, sink):
    sink.result(10)
    sink.diagnostic("division by zero")
    sink.result(-3)
    assert sink.result_stream.getvalue() == "10\n-3\n"
    assert sink.diagnostic_stream.getvalue() == "division by zero\n"

  def test_defaults_follow_process_streams(self, capsys):
    sink = OutputSink()
    sink.result(1)
    sink.diagnostic("oops")
    captured = capsys.readouterr()
    assert captured.out == "1\n"
    assert captured.err == "oops\n"

  def test_custom_result_stream_only(self, capsys):
    results = io.StringIO()
    sink = OutputSink(result_stream=results)
    sink.result(7)
    sink.diagnostic("warn")
    assert results.getvalue() == "7\n"
    assert capsys.readouterr().err == "warn\n"
