"""
Filter Factory for creating filter instances from configuration.

Provides a central place to build individual filters and filter chains from
configuration dictionaries or a validated EventFilterConfig.
"""

import logging
from typing import Any, Dict, List, Optional, Type

from rich.console import Console

from clusterevents.config.models import EventFilterConfig
from clusterevents.exceptions import ClusterEventsError, ErrorCode, FilterError
from clusterevents.filters.around import AroundFilter
from clusterevents.filters.base import EventFilter, FilterChain
from clusterevents.filters.fields import (
    ComponentFilter,
    NameFilter,
    NamespaceFilter,
    ReasonFilter,
    UIDFilter,
    WarningFilter,
)
from clusterevents.filters.kind import KindFilter

logger = logging.getLogger(__name__)


class FilterFactory:
    """
    Factory class for creating filter instances from configuration.

    ``create_from_config`` orders the chain so the around filter runs last,
    deriving its anchor date from the already narrowed events.
    """

    FILTER_REGISTRY: Dict[str, Type[EventFilter]] = {
        'warnings': WarningFilter,
        'namespace': NamespaceFilter,
        'name': NameFilter,
        'uid': UIDFilter,
        'reason': ReasonFilter,
        'component': ComponentFilter,
        'kind': KindFilter,
        'around': AroundFilter,
    }

    def __init__(self, console: Optional[Console] = None):
        """
        Initialize the filter factory.

        Args:
            console: Diagnostic console handed to filters that report
                configuration problems while filtering
        """
        self.console = console

    def create_filter(self, filter_type: str, config: Optional[Dict[str, Any]] = None) -> EventFilter:
        """
        Create a single filter instance.

        Args:
            filter_type: Registry key of the filter
            config: Configuration for the filter

        Returns:
            EventFilter instance

        Raises:
            FilterError: If the filter type is unknown
        """
        if filter_type not in self.FILTER_REGISTRY:
            available_types = ', '.join(sorted(self.FILTER_REGISTRY.keys()))
            raise FilterError(
                f"Unknown filter type '{filter_type}'. Available types: {available_types}",
                error_code=ErrorCode.FILTER_UNKNOWN_TYPE,
                filter_name=filter_type,
            )

        filter_class = self.FILTER_REGISTRY[filter_type]
        if filter_class is AroundFilter:
            return AroundFilter(config, console=self.console)
        return filter_class(config)

    def create_filter_chain(self, filter_configs: List[Dict[str, Any]]) -> FilterChain:
        """
        Create a filter chain from a list of filter configurations.

        Args:
            filter_configs: Dictionaries with a 'type' key and an optional
                'config' key

        Returns:
            FilterChain with the filters in the given order

        Raises:
            FilterError: If a configuration entry is invalid
        """
        filters = []
        for i, filter_config in enumerate(filter_configs):
            if 'type' not in filter_config:
                raise FilterError(
                    f"Filter configuration {i} missing 'type' field",
                    error_code=ErrorCode.VALIDATION_MISSING_FIELD,
                )
            try:
                filters.append(self.create_filter(filter_config['type'], filter_config.get('config', {})))
            except FilterError:
                raise
            except (ClusterEventsError, ValueError, TypeError) as e:
                raise FilterError(
                    f"Error creating filter {i}: {e}",
                    error_code=ErrorCode.VALIDATION_INVALID_INPUT,
                    filter_name=filter_config['type'],
                    cause=e,
                )

        return FilterChain(filters)

    def create_from_config(self, config: EventFilterConfig) -> FilterChain:
        """
        Create a filter chain from a validated configuration.

        Only filters with something to do are added; an empty configuration
        yields an empty chain that passes every event.
        """
        filter_configs: List[Dict[str, Any]] = []

        if config.warnings_only:
            filter_configs.append({'type': 'warnings'})
        if config.namespaces:
            filter_configs.append({'type': 'namespace', 'config': {'namespaces': config.namespaces}})
        if config.names:
            filter_configs.append({'type': 'name', 'config': {'names': config.names}})
        if config.uids:
            filter_configs.append({'type': 'uid', 'config': {'uids': config.uids}})
        if config.reasons:
            filter_configs.append({'type': 'reason', 'config': {'reasons': config.reasons}})
        if config.components:
            filter_configs.append({'type': 'component', 'config': {'components': config.components}})
        if config.kinds:
            filter_configs.append({
                'type': 'kind',
                'config': {'kinds': config.kinds, 'match_mode': config.kind_match_mode},
            })
        if config.around:
            filter_configs.append({
                'type': 'around',
                'config': {'around': config.around, 'around_duration': config.around_duration},
            })

        chain = self.create_filter_chain(filter_configs)
        logger.debug(f"Built {chain}")
        return chain
