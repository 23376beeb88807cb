"""
Filtering System for Cluster Events

Narrows a list of cluster events down to those relevant to a debugging
query: by severity, namespace, object name, UID, reason, reporting
component, involved object kind/group, or a time window. Filters are
composed with FilterChain, each stage consuming the previous stage's output.

Key Components:
- EventFilter: Abstract base class for all filters
- FilterChain: Sequential composition of filters
- FilterFactory: Builds filters and chains from configuration
- StringAcceptor: Membership predicate used by the field filters
"""

from .base import EventFilter, FilterChain
from .membership import AcceptAll, StringAcceptor, StringSet, accept_string, acceptor_for
from .fields import (
    ComponentFilter,
    NameFilter,
    NamespaceFilter,
    ReasonFilter,
    UIDFilter,
    ValueSetFilter,
    WarningFilter,
)
from .around import AroundFilter, parse_around
from .kind import KindFilter, KindRule, build_rule_set
from .factory import FilterFactory

__all__ = [
    "EventFilter",
    "FilterChain",
    "FilterFactory",
    "StringAcceptor",
    "AcceptAll",
    "StringSet",
    "accept_string",
    "acceptor_for",
    "ValueSetFilter",
    "WarningFilter",
    "NamespaceFilter",
    "NameFilter",
    "ReasonFilter",
    "UIDFilter",
    "ComponentFilter",
    "AroundFilter",
    "parse_around",
    "KindFilter",
    "KindRule",
    "build_rule_set",
]
