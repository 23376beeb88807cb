"""
Time-window filtering around a time of day.

The anchor is the configured time of day on the calendar date of the last
event in the input, in that event's timezone. Events whose last timestamp
lies within the configured duration on either side of the anchor are kept.
"""

import re
from datetime import datetime, timedelta
from typing import Any, Dict, List, Optional, Sequence, Tuple

from rich.console import Console

from clusterevents.config.models import parse_duration
from clusterevents.exceptions import AroundFormatError, EmptyInputError
from clusterevents.filters.base import EventFilter
from clusterevents.models import Event

DEFAULT_AROUND_DURATION = timedelta(minutes=5)

_INTEGER = re.compile(r"[+-]?[0-9]+")

error_console = Console(stderr=True)


def parse_around(around: str) -> Tuple[int, int, int]:
    """
    Parse ``HH:MM`` or ``HH:MM:SS`` into hours, minutes and seconds.

    Values are not range checked; the anchor arithmetic normalises them.

    Raises:
        AroundFormatError: If the part count is not 2 or 3, or a part is
            not an integer
    """
    parts = around.split(":")
    if len(parts) < 2 or len(parts) > 3:
        raise AroundFormatError(
            f"invalid around time format, must be HH:MM or HH:MM:SS, got {around!r}",
            around=around,
        )

    values = []
    for label, part in zip(("hours", "minutes", "seconds"), parts):
        if not _INTEGER.fullmatch(part):
            raise AroundFormatError(f"invalid {label} value {part!r}", around=around)
        values.append(int(part))

    if len(values) == 2:
        values.append(0)
    return values[0], values[1], values[2]


def anchor_time(reference: datetime, hours: int, minutes: int, seconds: int) -> datetime:
    """
    Combine the calendar date and sub-second part of ``reference`` with a
    time of day, in the timezone of ``reference``.
    """
    midnight = datetime(reference.year, reference.month, reference.day, tzinfo=reference.tzinfo)
    return midnight + timedelta(
        hours=hours,
        minutes=minutes,
        seconds=seconds,
        microseconds=reference.microsecond,
    )


class AroundFilter(EventFilter):
    """
    Keep events that happened within a window around a time of day.

    Configuration options:
    - around: time of day, "HH:MM" or "HH:MM:SS"
    - around_duration: half-width of the window (timedelta, seconds or a
      duration string such as "90s" or "2m", default 5 minutes)

    A malformed ``around`` is reported on the diagnostic console and
    ``filter_events`` returns None instead of a list.
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None, console: Optional[Console] = None):
        """
        Initialize the around filter.

        Args:
            config: Configuration dictionary with around and around_duration
            console: Where diagnostics are written (stderr by default)
        """
        super().__init__(config)
        self.around: str = str(self.config.get('around') or '')
        self.duration = self._parse_duration(self.config.get('around_duration'))
        self.console = console or error_console

    @property
    def name(self) -> str:
        return "around"

    @property
    def description(self) -> str:
        return f"Events within {self.duration} of {self.around}"

    def filter_events(self, events: Sequence[Event]) -> Optional[List[Event]]:
        """
        Apply the time window.

        Raises:
            EmptyInputError: If ``events`` is empty; the anchor date comes
                from the last event
        """
        if not events:
            raise EmptyInputError(
                "around filter needs at least one event to derive the anchor date",
                filter_name=self.name,
            )

        try:
            hours, minutes, seconds = parse_around(self.around)
        except AroundFormatError as e:
            self.console.print(
                f"error parsing around time {self.around!r}: {e.message}",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return None

        reference = events[-1].last_timestamp
        if reference is None:
            self.console.print(
                "cannot apply around filter: last event has no timestamp",
                markup=False,
                highlight=False,
                soft_wrap=True,
            )
            return None

        anchor = anchor_time(reference, hours, minutes, seconds)
        earliest = anchor - self.duration
        latest = anchor + self.duration
        self.logger.debug(f"Keeping events between {earliest.isoformat()} and {latest.isoformat()}")

        ret = []
        for event in events:
            timestamp = event.last_timestamp
            if timestamp is None:
                continue
            if timestamp > latest or timestamp < earliest:
                continue
            ret.append(event)
        return ret

    def validate_config(self) -> List[str]:
        errors = []
        try:
            parse_around(self.around)
        except AroundFormatError as e:
            errors.append(e.message)
        if self.duration < timedelta(0):
            errors.append("around_duration must not be negative")
        return errors

    @staticmethod
    def _parse_duration(value: Any) -> timedelta:
        if value is None:
            return DEFAULT_AROUND_DURATION
        if isinstance(value, timedelta):
            return value
        if isinstance(value, str):
            return parse_duration(value)
        return timedelta(seconds=float(value))
