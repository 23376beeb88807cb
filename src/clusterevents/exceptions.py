"""
Core Exception Hierarchy for clusterevents

Provides error classification with error codes, recovery suggestions and
context information. Filters themselves never let these escape into a
Filter Chain; they are raised by configuration loading, filter
construction and event decoding.
"""

import time
import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, List, Optional


class ErrorCode(Enum):
    """Standard error codes for different error categories."""

    # Configuration errors (3000-3999)
    CONFIG_INVALID_FORMAT = 3001
    CONFIG_INVALID_VALUE = 3003
    CONFIG_FILE_NOT_FOUND = 3004
    CONFIG_SCHEMA_VALIDATION = 3006

    # Filtering errors (4000-4999)
    FILTER_UNKNOWN_TYPE = 4001
    FILTER_EMPTY_INPUT = 4002
    FILTER_INVALID_AROUND = 4003

    # Validation errors (5000-5999)
    VALIDATION_INVALID_INPUT = 5001
    VALIDATION_MISSING_FIELD = 5002
    VALIDATION_FORMAT_ERROR = 5005

    # Generic/unknown errors (9000-9999)
    UNKNOWN_ERROR = 9000


@dataclass
class ErrorContext:
    """Contextual information about an error occurrence."""

    operation: str = ""
    filter_name: Optional[str] = None
    event_name: Optional[str] = None
    file_path: Optional[str] = None
    correlation_id: Optional[str] = None
    timestamp: float = field(default_factory=time.time)
    user_context: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        """Convert context to dictionary for serialization."""
        return {
            'operation': self.operation,
            'filter_name': self.filter_name,
            'event_name': self.event_name,
            'file_path': self.file_path,
            'correlation_id': self.correlation_id,
            'timestamp': self.timestamp,
            'user_context': self.user_context,
        }


@dataclass
class RecoverySuggestion:
    """Structured recovery suggestion for error resolution."""

    action: str
    description: str
    example: Optional[str] = None
    priority: int = 1  # 1 = highest

    def to_dict(self) -> Dict[str, Any]:
        """Convert suggestion to dictionary."""
        return {
            'action': self.action,
            'description': self.description,
            'example': self.example,
            'priority': self.priority,
        }


class ClusterEventsError(Exception):
    """
    Base exception for all clusterevents errors.

    Carries an error code, recovery suggestions and context so callers in
    the CLI layer can render a helpful message.
    """

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.UNKNOWN_ERROR,
        context: Optional[ErrorContext] = None,
        cause: Optional[Exception] = None,
        suggestions: Optional[List[RecoverySuggestion]] = None
    ):
        """
        Initialize the error.

        Args:
            message: Human-readable error description
            error_code: Standardized error code
            context: Contextual information about the error
            cause: Original exception that caused this error
            suggestions: List of recovery suggestions
        """
        super().__init__(message)

        self.message = message
        self.error_code = error_code
        self.context = context or ErrorContext()
        self.cause = cause
        self.suggestions = suggestions or []

        if not self.context.correlation_id:
            self.context.correlation_id = str(uuid.uuid4())[:8]

    def add_suggestion(self, suggestion: RecoverySuggestion) -> None:
        """Add a recovery suggestion to the error."""
        self.suggestions.append(suggestion)
        self.suggestions.sort(key=lambda s: s.priority)

    def get_user_message(self) -> str:
        """Get user-friendly error message with suggestions."""
        lines = [f"Error: {self.message}"]

        if self.error_code != ErrorCode.UNKNOWN_ERROR:
            lines.append(f"Error Code: {self.error_code.value}")

        if self.suggestions:
            lines.append("\nSuggested solutions:")
            for i, suggestion in enumerate(self.suggestions[:3], 1):
                lines.append(f"  {i}. {suggestion.action}")
                lines.append(f"     {suggestion.description}")
                if suggestion.example:
                    lines.append(f"     Example: {suggestion.example}")

        return "\n".join(lines)

    def get_debug_info(self) -> Dict[str, Any]:
        """Get comprehensive debug information."""
        return {
            'error_type': self.__class__.__name__,
            'message': self.message,
            'error_code': self.error_code.value,
            'context': self.context.to_dict(),
            'cause': {
                'type': type(self.cause).__name__ if self.cause else None,
                'message': str(self.cause) if self.cause else None
            },
            'suggestions': [s.to_dict() for s in self.suggestions],
        }


class ConfigurationError(ClusterEventsError):
    """Exception for configuration-related errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.CONFIG_INVALID_FORMAT,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if config_key:
            context.user_context['config_key'] = config_key
            context.user_context['config_value'] = config_value

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)

        if error_code == ErrorCode.CONFIG_FILE_NOT_FOUND:
            self.add_suggestion(RecoverySuggestion(
                action="Check the configuration path",
                description="Pass an existing YAML or JSON file, or omit the path to use the search locations.",
                example="clusterevents.yaml",
            ))
        elif error_code in (ErrorCode.CONFIG_INVALID_VALUE, ErrorCode.CONFIG_SCHEMA_VALIDATION):
            self.add_suggestion(RecoverySuggestion(
                action="Check configuration values",
                description="Review the configuration for invalid values and correct them.",
            ))


class ValidationError(ClusterEventsError):
    """Exception for input validation errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.VALIDATION_INVALID_INPUT,
        field_name: Optional[str] = None,
        field_value: Optional[Any] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if field_name:
            context.user_context['field_name'] = field_name
            context.user_context['field_value'] = field_value

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)


class AroundFormatError(ValidationError):
    """Raised when an ``around`` time of day is not HH:MM or HH:MM:SS."""

    def __init__(self, message: str, around: str, **kwargs):
        kwargs.setdefault('error_code', ErrorCode.FILTER_INVALID_AROUND)
        super().__init__(message, field_name='around', field_value=around, **kwargs)
        self.around = around
        self.add_suggestion(RecoverySuggestion(
            action="Use a 24-hour time of day",
            description="The around time must be HH:MM or HH:MM:SS.",
            example="14:05 or 14:05:30",
        ))


class FilterError(ClusterEventsError):
    """Exception for filter construction and usage errors."""

    def __init__(
        self,
        message: str,
        error_code: ErrorCode = ErrorCode.FILTER_UNKNOWN_TYPE,
        filter_name: Optional[str] = None,
        **kwargs
    ):
        context = kwargs.get('context') or ErrorContext()
        if filter_name:
            context.filter_name = filter_name

        kwargs['context'] = context
        kwargs['error_code'] = error_code

        super().__init__(message, **kwargs)


class EmptyInputError(FilterError):
    """Raised by filters that need at least one event to derive their anchor."""

    def __init__(self, message: str, **kwargs):
        kwargs['error_code'] = ErrorCode.FILTER_EMPTY_INPUT
        super().__init__(message, **kwargs)
