"""
Tests for the calculation history.
"""

import dataclasses

import pytest

from calcpad.history import History, HistoryEntry


class TestHistory:
    """Test capacity and ordering."""

    def setup_method(self):
        self.history = History(capacity=5)

    def test_starts_empty(self):
        assert len(self.history) == 0
        assert self.history.entries() == []

    def test_formats_entries(self):
        entry = self.history.add("1+2", "3")
        assert str(entry) == "1+2 = 3"
        assert self.history.entries() == ["1+2 = 3"]

    def test_most_recent_first(self):
        self.history.add("1+1", "2")
        self.history.add("2+2", "4")
        assert self.history.entries() == ["2+2 = 4", "1+1 = 2"]

    def test_oldest_evicted_past_capacity(self):
        for i in range(6):
            self.history.add(f"{i}+0", str(i))
        entries = self.history.entries()
        assert len(entries) == 5
        assert entries[0] == "5+0 = 5"
        assert entries[-1] == "1+0 = 1"
        assert "0+0 = 0" not in entries

    def test_clear(self):
        self.history.add("1+1", "2")
        self.history.clear()
        assert len(self.history) == 0

    def test_zero_capacity_rejected(self):
        with pytest.raises(ValueError):
            History(capacity=0)

    def test_entry_holds_only_expression_and_result(self):
        entry = HistoryEntry("2+3", "5")
        assert [f.name for f in dataclasses.fields(HistoryEntry)] == ["expression", "result"]
        assert str(entry) == "2+3 = 5"
