"""
Abstract Filter Base Classes

Defines the core interface shared by every event filter and the chain that
composes them. A filter takes an ordered sequence of events and returns a
new list holding the events it keeps, in their original order.
"""

import logging
from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from clusterevents.models import Event


class EventFilter(ABC):
    """
    Abstract base class for all event filters.

    Filters are stateless with respect to the events they see: they never
    mutate their input and never keep references to it after returning.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the filter with configuration.

        Args:
            config: Filter configuration dictionary
        """
        self.config = config or {}
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")

    @property
    @abstractmethod
    def name(self) -> str:
        """Short identifier of the filter."""
        pass

    @property
    @abstractmethod
    def description(self) -> str:
        """Human-readable description of what the filter keeps."""
        pass

    @abstractmethod
    def filter_events(self, events: Sequence[Event]) -> Optional[List[Event]]:
        """
        Select the events that pass this filter.

        Args:
            events: Events to filter, in order

        Returns:
            A new list of the kept events, or None if the filter could not
            run with its configuration
        """
        pass

    def validate_config(self) -> List[str]:
        """
        Validate the filter configuration.

        Returns:
            List of validation error messages (empty if valid)
        """
        return []

    def __str__(self) -> str:
        return f"{self.name}: {self.description}"

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(config={self.config})"


class FilterChain:
    """
    Applies filters one after another, each consuming the previous output.

    The chain stops early in two cases: a stage returns None (the chain
    returns None as well) or the sequence becomes empty (the chain returns
    an empty list without running the remaining stages).
    """

    def __init__(self, filters: Optional[Sequence[EventFilter]] = None):
        """
        Initialize the filter chain.

        Args:
            filters: Filters to apply, in order
        """
        self.filters: List[EventFilter] = list(filters or [])
        self.logger = logging.getLogger(__name__)

    def filter_events(self, events: Sequence[Event]) -> Optional[List[Event]]:
        """
        Run every filter in order over the events.

        Args:
            events: Events to filter

        Returns:
            The events that passed every stage, or None if a stage could
            not run
        """
        result: List[Event] = list(events)

        for filter_instance in self.filters:
            if not result:
                self.logger.debug(f"No events left, skipping {filter_instance.name} and later stages")
                break

            before = len(result)
            filtered = filter_instance.filter_events(result)
            if filtered is None:
                self.logger.debug(f"Filter {filter_instance.name} could not run, chain aborted")
                return None

            result = filtered
            self.logger.debug(f"Filter {filter_instance.name}: {before} -> {len(result)} events")

        return result

    def add(self, filter_instance: EventFilter) -> 'FilterChain':
        """Append a filter and return the chain."""
        self.filters.append(filter_instance)
        return self

    def validate_config(self) -> List[str]:
        """
        Validate all filters in the chain.

        Returns:
            List of validation error messages from all filters
        """
        errors = []
        for filter_instance in self.filters:
            filter_errors = filter_instance.validate_config()
            errors.extend([f"{filter_instance.name}: {error}" for error in filter_errors])
        return errors

    def __len__(self) -> int:
        return len(self.filters)

    def __str__(self) -> str:
        filter_names = [f.name for f in self.filters]
        return f"FilterChain({' -> '.join(filter_names)})"
