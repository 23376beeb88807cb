"""
Single-field event filters.

Filters events on one scalar field: severity, namespace, object name,
reason, object UID or reporting component. Every value-set filter accepts
all events when its set is empty.
"""

from abc import abstractmethod
from typing import Any, Dict, List, Optional, Sequence

from clusterevents.exceptions import ErrorCode, ValidationError
from clusterevents.filters.base import EventFilter
from clusterevents.filters.membership import StringAcceptor, acceptor_for
from clusterevents.models import Event


class WarningFilter(EventFilter):
    """Keep only events of type Warning."""

    @property
    def name(self) -> str:
        return "warnings"

    @property
    def description(self) -> str:
        return "Warning events only"

    def filter_events(self, events: Sequence[Event]) -> List[Event]:
        return [event for event in events if event.is_warning]


class ValueSetFilter(EventFilter):
    """
    Base class for filters that accept an event when one of its string
    fields is in a configured set.

    Subclasses set ``config_key`` (the configuration entry holding the
    accepted values) and implement ``field_value``.

    Configuration options:
    - <config_key>: list of accepted values (empty or missing = accept all)
    """

    config_key: str = ""
    field_label: str = ""

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        """
        Initialize the value-set filter.

        Raises:
            ValidationError: If the configured values are not a list of strings
        """
        super().__init__(config)
        raw = self.config.get(self.config_key)
        if not self._is_string_list(raw):
            raise ValidationError(
                f"{self.config_key} must be a list of strings",
                error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
                field_name=self.config_key,
                field_value=raw,
            )
        self.values: List[str] = list(raw or [])
        self.acceptor: StringAcceptor = acceptor_for(self.values)

    @property
    def name(self) -> str:
        return self.config_key

    @property
    def description(self) -> str:
        if not self.values:
            return f"No {self.field_label} filtering (all events pass)"
        shown = ', '.join(sorted(self.values)[:3])
        more = "..." if len(self.values) > 3 else ""
        return f"Events with {self.field_label} in: {shown}{more}"

    @abstractmethod
    def field_value(self, event: Event) -> str:
        """Return the event field compared against the configured values."""
        pass

    def filter_events(self, events: Sequence[Event]) -> List[Event]:
        return [event for event in events if self.acceptor.accepts(self.field_value(event))]

    def validate_config(self) -> List[str]:
        if not self._is_string_list(self.config.get(self.config_key)):
            return [f"{self.config_key} must be a list of strings"]
        return []

    @staticmethod
    def _is_string_list(raw: Any) -> bool:
        if raw is None:
            return True
        if isinstance(raw, (str, bytes)) or not isinstance(raw, (list, tuple, set, frozenset)):
            return False
        return all(isinstance(value, str) for value in raw)


class NamespaceFilter(ValueSetFilter):
    """Keep events whose involved object lives in one of the namespaces."""
    config_key = "namespaces"
    field_label = "namespace"

    def field_value(self, event: Event) -> str:
        return event.involved_object.namespace


class NameFilter(ValueSetFilter):
    """Keep events about objects with one of the names."""
    config_key = "names"
    field_label = "object name"

    def field_value(self, event: Event) -> str:
        return event.involved_object.name


class ReasonFilter(ValueSetFilter):
    config_key = "reasons"
    field_label = "reason"

    def field_value(self, event: Event) -> str:
        return event.reason


class UIDFilter(ValueSetFilter):
    config_key = "uids"
    field_label = "object UID"

    def field_value(self, event: Event) -> str:
        return str(event.involved_object.uid)


class ComponentFilter(ValueSetFilter):
    """Keep events reported by one of the components."""
    config_key = "components"
    field_label = "reporting component"

    def field_value(self, event: Event) -> str:
        return event.reporting_component
