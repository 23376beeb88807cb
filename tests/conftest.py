"""
Shared fixtures for the clusterevents test suite.
"""

import io
from datetime import datetime, timezone
from typing import Optional

import pytest
from rich.console import Console

from clusterevents.models import Event, EventType, ObjectReference


@pytest.fixture
def make_event():
    """Return a factory building events with sensible defaults."""
    def _make_event(
        name: str = "web-1",
        namespace: str = "default",
        kind: str = "Pod",
        api_version: str = "v1",
        uid: str = "uid-1",
        reason: str = "Scheduled",
        component: str = "default-scheduler",
        event_type: EventType = EventType.NORMAL,
        last_timestamp: Optional[datetime] = None,
    ) -> Event:
        return Event(
            type=event_type,
            involved_object=ObjectReference(
                namespace=namespace,
                name=name,
                uid=uid,
                kind=kind,
                api_version=api_version,
            ),
            reason=reason,
            reporting_component=component,
            last_timestamp=last_timestamp or datetime(2024, 3, 1, 10, 0, tzinfo=timezone.utc),
        )
    return _make_event


@pytest.fixture
def sample_events(make_event):
    """A small mixed set of events across namespaces, kinds and severities."""
    return [
        make_event(name="web-1", namespace="default", reason="Scheduled"),
        make_event(name="web-1", namespace="default", reason="BackOff",
                   event_type=EventType.WARNING, component="kubelet"),
        make_event(name="api", namespace="prod", kind="Deployment", api_version="apps/v1",
                   uid="uid-2", reason="ScalingReplicaSet", component="deployment-controller"),
        make_event(name="db-0", namespace="prod", kind="StatefulSet", api_version="apps/v1",
                   uid="uid-3", reason="FailedCreate", event_type=EventType.WARNING,
                   component="statefulset-controller"),
    ]


@pytest.fixture
def capture_console():
    """A rich console writing into an in-memory buffer (read via console.file)."""
    return Console(file=io.StringIO(), width=200, color_system=None)


@pytest.fixture
def sample_event_document():
    """A single event as returned by ``kubectl get events -o json``."""
    return {
        'apiVersion': 'v1',
        'kind': 'Event',
        'metadata': {'name': 'api.17b8a6c2d1e0f', 'namespace': 'prod'},
        'involvedObject': {
            'apiVersion': 'apps/v1',
            'kind': 'Deployment',
            'name': 'api',
            'namespace': 'prod',
            'uid': '6f1c2a4e-0b1d-4c8e-9a55-3c2f1d0e9b77',
        },
        'reason': 'ScalingReplicaSet',
        'message': 'Scaled up replica set api-7d9f to 3',
        'type': 'Normal',
        'reportingComponent': 'deployment-controller',
        'firstTimestamp': '2024-03-01T09:55:00Z',
        'lastTimestamp': '2024-03-01T10:00:00Z',
        'count': 2,
    }
