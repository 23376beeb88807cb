"""
clusterevents - filtering core for cluster event debugging

Narrows Kubernetes/OpenShift events to the ones relevant to a diagnostic
query. Retrieval of events and rendering of results live in the CLI that
embeds this package.
"""

__version__ = "0.1.0"

from clusterevents.models import Event, EventType, GroupKind, MatchMode, ObjectReference

__all__ = [
    "__version__",
    "Event",
    "EventType",
    "GroupKind",
    "MatchMode",
    "ObjectReference",
]
