"""
Cluster Event Data Model

Read-only containers for Kubernetes events and the (group, kind) pairs the
kind filter matches on. Events are normally decoded from the JSON/YAML
documents produced by ``kubectl get events -o json``; the retrieval itself
happens outside this package.
"""

from dataclasses import dataclass
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from dateutil import parser as date_parser

from clusterevents.exceptions import ErrorCode, ValidationError


class EventType(str, Enum):
    """Severity of an event as reported by the cluster."""
    NORMAL = "Normal"
    WARNING = "Warning"


class MatchMode(str, Enum):
    """How kind rules are evaluated."""
    STRICT = "strict"
    LEGACY = "legacy"


def parse_group_version(api_version: str) -> Tuple[str, str]:
    """
    Split an ``apiVersion`` string into its group and version.

    ``""`` and ``"v1"`` belong to the core group ``""``; ``"apps/v1"``
    belongs to ``apps``.

    Raises:
        ValueError: If the string holds more than one ``/``
    """
    if not api_version:
        return "", ""
    if "/" not in api_version:
        return "", api_version
    parts = api_version.split("/")
    if len(parts) != 2:
        raise ValueError(f"unexpected GroupVersion string: {api_version}")
    return parts[0], parts[1]


@dataclass(frozen=True)
class GroupKind:
    """
    An API group and object kind, independent of version.

    ``*`` and a leading ``-`` are ordinary characters here; only the kind
    filter gives them meaning.
    """
    group: str = ""
    kind: str = ""

    @classmethod
    def parse(cls, value: str) -> 'GroupKind':
        """
        Parse ``Kind.group`` notation.

        The text before the first ``.`` is the kind and the rest is the
        group, so ``Deployment.apps`` is ``(apps, Deployment)`` and ``Pod``
        is ``("", Pod)``.
        """
        value = value.strip()
        if not value:
            raise ValidationError(
                "Empty kind expression",
                error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
                field_name="kind",
                field_value=value,
            )
        kind, _, group = value.partition(".")
        return cls(group=group, kind=kind)

    @property
    def negated(self) -> 'GroupKind':
        """The exact-negative form of this pair."""
        return GroupKind(group=self.group, kind="-" + self.kind)

    def __str__(self) -> str:
        if not self.group:
            return self.kind
        return f"{self.kind}.{self.group}"


@dataclass(frozen=True)
class ObjectReference:
    """The object an event is about."""
    namespace: str = ""
    name: str = ""
    uid: str = ""
    kind: str = ""
    api_version: str = ""

    @property
    def group_kind(self) -> GroupKind:
        """
        Resolve the referenced object's (group, kind).

        An unparseable ``api_version`` is used whole as the group.
        """
        try:
            group, _ = parse_group_version(self.api_version)
        except ValueError:
            group = self.api_version
        return GroupKind(group=group, kind=self.kind)


@dataclass(frozen=True)
class Event:
    """
    A single cluster event.

    Instances are immutable; filters only ever select among them.
    """
    type: EventType = EventType.NORMAL
    involved_object: ObjectReference = ObjectReference()
    reason: str = ""
    message: str = ""
    reporting_component: str = ""
    last_timestamp: Optional[datetime] = None
    first_timestamp: Optional[datetime] = None
    count: int = 1
    name: str = ""
    namespace: str = ""

    @property
    def is_warning(self) -> bool:
        return self.type == EventType.WARNING

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> 'Event':
        """
        Build an event from a Kubernetes ``Event`` document.

        Args:
            data: Decoded JSON/YAML mapping for one event

        Returns:
            Event instance

        Raises:
            ValidationError: If the document is not a mapping or carries
                an unknown type or an unparseable timestamp
        """
        if not isinstance(data, dict):
            raise ValidationError(
                f"Event document must be a mapping, got {type(data).__name__}",
                error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
            )

        metadata = data.get('metadata') or {}
        involved = data.get('involvedObject') or {}

        raw_type = data.get('type') or EventType.NORMAL.value
        try:
            event_type = EventType(raw_type)
        except ValueError as e:
            raise ValidationError(
                f"Unknown event type {raw_type!r}",
                field_name='type',
                field_value=raw_type,
                cause=e,
            )

        # reportingComponent supersedes the older source.component field
        component = data.get('reportingComponent') or (data.get('source') or {}).get('component', '')

        return cls(
            type=event_type,
            involved_object=ObjectReference(
                namespace=involved.get('namespace', ''),
                name=involved.get('name', ''),
                uid=str(involved.get('uid', '')),
                kind=involved.get('kind', ''),
                api_version=involved.get('apiVersion', ''),
            ),
            reason=data.get('reason', ''),
            message=data.get('message', ''),
            reporting_component=component,
            last_timestamp=_parse_timestamp(data.get('lastTimestamp') or data.get('eventTime'), 'lastTimestamp'),
            first_timestamp=_parse_timestamp(data.get('firstTimestamp'), 'firstTimestamp'),
            count=int(data.get('count') or 1),
            name=metadata.get('name', ''),
            namespace=metadata.get('namespace', ''),
        )


def events_from_list(document: Dict[str, Any]) -> List[Event]:
    """
    Decode an ``EventList`` document (or a bare list of events).
    """
    items: Iterable[Any]
    if isinstance(document, list):
        items = document
    elif isinstance(document, dict) and 'items' in document:
        items = document.get('items') or []
    else:
        raise ValidationError(
            "Expected an EventList document with an 'items' field",
            error_code=ErrorCode.VALIDATION_MISSING_FIELD,
            field_name='items',
        )
    return [Event.from_dict(item) for item in items]


def _parse_timestamp(value: Any, field_name: str) -> Optional[datetime]:
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        parsed = value
    else:
        try:
            parsed = date_parser.isoparse(str(value))
        except (ValueError, TypeError) as e:
            raise ValidationError(
                f"Could not parse {field_name} {value!r}: {e}",
                error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
                field_name=field_name,
                field_value=value,
                cause=e,
            )
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
