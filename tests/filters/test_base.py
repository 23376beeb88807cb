"""
Tests for base filter functionality.

This module tests the EventFilter base class and FilterChain composition.
"""

from typing import List, Optional, Sequence

import pytest

from clusterevents.filters.base import EventFilter, FilterChain
from clusterevents.models import Event


class MockFilter(EventFilter):
    """Mock filter that keeps events by name and records its calls."""

    def __init__(self, label: str, keep_names=None, fail: bool = False):
        super().__init__()
        self.label = label
        self.keep_names = keep_names
        self.fail = fail
        self.calls: List[List[Event]] = []

    @property
    def name(self) -> str:
        return self.label

    @property
    def description(self) -> str:
        return f"Mock filter {self.label}"

    def filter_events(self, events: Sequence[Event]) -> Optional[List[Event]]:
        self.calls.append(list(events))
        if self.fail:
            return None
        if self.keep_names is None:
            return list(events)
        return [e for e in events if e.involved_object.name in self.keep_names]

    def validate_config(self) -> list:
        return ["bad"] if self.fail else []


class TestFilterChain:
    """Test FilterChain functionality."""

    def test_empty_chain_returns_copy(self, sample_events):
        """An empty chain returns the input unchanged but not aliased."""
        chain = FilterChain([])

        result = chain.filter_events(sample_events)

        assert result == sample_events
        assert result is not sample_events

    def test_stages_applied_in_order(self, sample_events):
        """Each stage sees the previous stage's output."""
        first = MockFilter("first", keep_names={"web-1", "api"})
        second = MockFilter("second", keep_names={"api", "db-0"})
        chain = FilterChain([first, second])

        result = chain.filter_events(sample_events)

        assert [e.involved_object.name for e in result] == ["api"]
        assert len(first.calls[0]) == 4
        assert [e.involved_object.name for e in second.calls[0]] == ["web-1", "web-1", "api"]

    def test_failed_stage_aborts_chain(self, sample_events):
        """A stage returning None makes the whole chain return None."""
        failing = MockFilter("failing", fail=True)
        after = MockFilter("after")
        chain = FilterChain([failing, after])

        assert chain.filter_events(sample_events) is None
        assert after.calls == []

    def test_empty_sequence_skips_remaining_stages(self, sample_events):
        """Once nothing is left, later stages are not called."""
        drop_all = MockFilter("drop_all", keep_names=set())
        after = MockFilter("after")
        chain = FilterChain([drop_all, after])

        assert chain.filter_events(sample_events) == []
        assert after.calls == []

    def test_empty_input(self):
        """An empty input yields an empty list."""
        chain = FilterChain([MockFilter("only")])

        assert chain.filter_events([]) == []

    def test_input_not_mutated(self, sample_events):
        """The caller's list is left untouched."""
        original = list(sample_events)
        chain = FilterChain([MockFilter("keep", keep_names={"api"})])

        chain.filter_events(sample_events)

        assert sample_events == original

    def test_chain_reusable(self, sample_events):
        """The same chain gives the same answer on repeated use."""
        chain = FilterChain([MockFilter("keep", keep_names={"db-0"})])

        assert chain.filter_events(sample_events) == chain.filter_events(sample_events)

    def test_add_and_len(self):
        chain = FilterChain()
        chain.add(MockFilter("a")).add(MockFilter("b"))

        assert len(chain) == 2
        assert str(chain) == "FilterChain(a -> b)"

    def test_validate_config_prefixes_filter_name(self):
        chain = FilterChain([MockFilter("ok"), MockFilter("broken", fail=True)])

        assert chain.validate_config() == ["broken: bad"]


class TestEventFilter:
    """Test the abstract base class contract."""

    def test_cannot_instantiate_abstract(self):
        with pytest.raises(TypeError):
            EventFilter()

    def test_str_and_repr(self):
        mock = MockFilter("demo")

        assert str(mock) == "demo: Mock filter demo"
        assert repr(mock) == "MockFilter(config={})"
