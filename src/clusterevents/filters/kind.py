"""
Kind and API group filtering.

Rules are written in ``Kind.group`` notation (see ``GroupKind.parse``):

- ``Deployment.apps``  include Deployments in the apps group
- ``Pod``              include Pods in the core group
- ``*.apps``           include every kind in the apps group
- ``Pod.*``            include Pods in any group
- ``*.*``              include everything
- a leading ``-`` on the kind turns any of the above into an exclusion,
  e.g. ``-Pod.*`` or ``-*.apps``

Two matching modes are supported. STRICT evaluates every exclusion before
any inclusion and keeps a matching event once. LEGACY keeps the older
two-pass exact/wildcard evaluation used by earlier releases of the
debugging CLI, quirks included: an event matching both an exact and a wildcard
inclusion is kept twice, and a wildcard exclusion does not retract an
exact inclusion.
"""

from dataclasses import dataclass
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from clusterevents.exceptions import ErrorCode, ValidationError
from clusterevents.filters.base import EventFilter
from clusterevents.models import Event, GroupKind, MatchMode

WILDCARD = "*"
NEGATION_PREFIX = "-"


@dataclass(frozen=True)
class KindRule:
    """
    An explicit kind matching rule.

    ``group`` and ``kind`` are concrete values or ``WILDCARD``; ``negate``
    turns the rule into an exclusion.
    """
    group: str
    kind: str
    negate: bool = False

    @classmethod
    def from_group_kind(cls, group_kind: GroupKind) -> 'KindRule':
        kind = group_kind.kind
        negate = kind.startswith(NEGATION_PREFIX)
        if negate:
            kind = kind[len(NEGATION_PREFIX):]
        return cls(group=group_kind.group, kind=kind, negate=negate)

    @classmethod
    def parse(cls, value: str) -> 'KindRule':
        return cls.from_group_kind(GroupKind.parse(value))

    def matches(self, group_kind: GroupKind) -> bool:
        """True if the rule's group and kind both cover ``group_kind``."""
        group_ok = self.group == WILDCARD or self.group == group_kind.group
        kind_ok = self.kind == WILDCARD or self.kind == group_kind.kind
        return group_ok and kind_ok

    def to_group_kind(self) -> GroupKind:
        kind = NEGATION_PREFIX + self.kind if self.negate else self.kind
        return GroupKind(group=self.group, kind=kind)

    def __str__(self) -> str:
        return str(self.to_group_kind())


RuleInput = Union[Mapping[GroupKind, bool], Iterable[Union[str, GroupKind, KindRule]]]


def build_rule_set(kinds: Optional[RuleInput]) -> Dict[GroupKind, bool]:
    """
    Normalise configured kinds into a rule set keyed by GroupKind.

    Accepts an existing mapping, or an iterable of ``Kind.group`` strings,
    GroupKind values or KindRules.
    """
    if not kinds:
        return {}
    if isinstance(kinds, Mapping):
        return dict(kinds)
    if isinstance(kinds, str):
        raise ValidationError(
            "kinds must be a list of Kind.group expressions, not a single string",
            error_code=ErrorCode.VALIDATION_FORMAT_ERROR,
            field_name="kinds",
            field_value=kinds,
        )

    rule_set: Dict[GroupKind, bool] = {}
    for item in kinds:
        if isinstance(item, KindRule):
            key = item.to_group_kind()
        elif isinstance(item, GroupKind):
            key = item
        else:
            key = GroupKind.parse(item)
        rule_set[key] = True
    return rule_set


class KindFilter(EventFilter):
    """
    Filter events by the group and kind of their involved object.

    Configuration options:
    - kinds: mapping of GroupKind to bool, or a list of ``Kind.group``
      expressions
    - match_mode: "strict" (default) or "legacy"
    """

    def __init__(self, config: Optional[Dict[str, Any]] = None):
        super().__init__(config)
        self.rule_set: Dict[GroupKind, bool] = build_rule_set(self.config.get('kinds'))
        self.rules: List[KindRule] = [KindRule.from_group_kind(key) for key in self.rule_set]
        self.match_mode = MatchMode(self.config.get('match_mode', MatchMode.STRICT))

    @property
    def name(self) -> str:
        return "kind"

    @property
    def description(self) -> str:
        if not self.rules:
            return "No kind rules (no events pass)"
        return f"Events matching kinds: {', '.join(str(rule) for rule in self.rules)}"

    def filter_events(self, events: Sequence[Event]) -> List[Event]:
        if self.match_mode == MatchMode.LEGACY:
            return self._filter_legacy(events)
        return self._filter_strict(events)

    def _filter_strict(self, events: Sequence[Event]) -> List[Event]:
        exclusions = [rule for rule in self.rules if rule.negate]
        inclusions = [rule for rule in self.rules if not rule.negate]

        ret = []
        for event in events:
            gk = event.involved_object.group_kind
            if any(rule.matches(gk) for rule in exclusions):
                continue
            if any(rule.matches(gk) for rule in inclusions):
                ret.append(event)
        return ret

    def _filter_legacy(self, events: Sequence[Event]) -> List[Event]:
        kinds = self.rule_set

        ret = []
        for event in events:
            gk = event.involved_object.group_kind
            anti_match = gk.negated

            if anti_match in kinds:
                continue
            if gk in kinds:
                ret.append(event)

            # wildcard exclusions stop the wildcard pass but keep an exact match
            anti_matched = False
            for key in kinds:
                if key.group == WILDCARD and key.kind == anti_match.kind:
                    anti_matched = True
                    break
                if key.kind == NEGATION_PREFIX + WILDCARD and key.group == gk.group:
                    anti_matched = True
                    break
            if anti_matched:
                continue

            for key in kinds:
                if key.group == WILDCARD and key.kind == WILDCARD:
                    ret.append(event)
                    break
                if key.group == WILDCARD and key.kind == gk.kind:
                    ret.append(event)
                    break
                if key.kind == WILDCARD and key.group == gk.group:
                    ret.append(event)
                    break
        return ret

    def validate_config(self) -> List[str]:
        errors = []
        for rule in self.rules:
            if not rule.kind:
                errors.append(f"rule {rule} has an empty kind")
        return errors
