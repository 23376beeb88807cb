"""
Configuration Models

Pydantic models for the event filter configuration, with validation,
defaults and field documentation.
"""

import re
from datetime import timedelta
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, field_validator

from clusterevents.exceptions import ClusterEventsError
from clusterevents.models import GroupKind, MatchMode

_DURATION_PART = re.compile(r"(\d+(?:\.\d+)?)(h|ms|m|s)")
_DURATION_UNITS = {
    'h': timedelta(hours=1),
    'm': timedelta(minutes=1),
    's': timedelta(seconds=1),
    'ms': timedelta(milliseconds=1),
}


def parse_duration(value: str) -> timedelta:
    """
    Parse a Go-style duration such as ``90s``, ``2m`` or ``1h30m``.

    A bare number is taken as seconds.
    """
    text = value.strip()
    if not text:
        raise ValueError("empty duration")
    try:
        return timedelta(seconds=float(text))
    except (ValueError, OverflowError):
        pass

    position = 0
    total = timedelta(0)
    for match in _DURATION_PART.finditer(text):
        if match.start() != position:
            break
        total += float(match.group(1)) * _DURATION_UNITS[match.group(2)]
        position = match.end()
    if position != len(text):
        raise ValueError(f"invalid duration {value!r}, expected e.g. 90s, 2m or 1h30m")
    return total


class EventFilterConfig(BaseModel):
    """Configuration for narrowing a list of cluster events."""

    model_config = ConfigDict(populate_by_name=True, extra='forbid')

    warnings_only: bool = Field(
        default=False,
        alias="warnings",
        description="Keep only Warning events"
    )
    namespaces: List[str] = Field(
        default=[],
        description="Keep events about objects in these namespaces (empty = all)"
    )
    names: List[str] = Field(
        default=[],
        description="Keep events about objects with these names (empty = all)"
    )
    uids: List[str] = Field(
        default=[],
        description="Keep events about objects with these UIDs (empty = all)"
    )
    reasons: List[str] = Field(
        default=[],
        description="Keep events with these reasons (empty = all)"
    )
    components: List[str] = Field(
        default=[],
        description="Keep events reported by these components (empty = all)"
    )
    kinds: List[str] = Field(
        default=[],
        description="Kind rules in Kind.group notation, e.g. Deployment.apps, -Pod.*, *.apps"
    )
    kind_match_mode: MatchMode = Field(
        default=MatchMode.STRICT,
        description="Kind rule evaluation: strict (exclusions first, no duplicates) or legacy"
    )
    around: Optional[str] = Field(
        default=None,
        description="Keep events near this time of day (HH:MM or HH:MM:SS)"
    )
    around_duration: timedelta = Field(
        default=timedelta(minutes=5),
        description="Half-width of the window around 'around' (e.g. 90s, 2m, 1h30m)"
    )

    @field_validator('namespaces', 'names', 'uids', 'reasons', 'components', 'kinds', mode='before')
    @classmethod
    def split_comma_separated(cls, v):
        """Accept comma-separated strings as well as lists."""
        if isinstance(v, str):
            return [item.strip() for item in v.split(',') if item.strip()]
        return v

    @field_validator('kinds')
    @classmethod
    def validate_kinds(cls, v):
        """Validate every kind expression parses."""
        for expression in v:
            try:
                kind = GroupKind.parse(expression).kind
            except ClusterEventsError as e:
                raise ValueError(e.message)
            if not kind.removeprefix("-"):
                raise ValueError(f"Kind expression {expression!r} has an empty kind")
        return v

    @field_validator('around_duration', mode='before')
    @classmethod
    def validate_around_duration(cls, v: Union[str, int, float, timedelta]):
        """Accept Go-style duration strings."""
        if isinstance(v, str):
            v = parse_duration(v)
        if isinstance(v, (int, float)):
            v = timedelta(seconds=v)
        if isinstance(v, timedelta) and v < timedelta(0):
            raise ValueError("around_duration must not be negative")
        return v

    @property
    def has_filters(self) -> bool:
        return any([
            self.warnings_only, self.namespaces, self.names, self.uids,
            self.reasons, self.components, self.kinds, self.around,
        ])
