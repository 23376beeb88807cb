"""
Tests for the exception hierarchy.
"""

from clusterevents.exceptions import (
    AroundFormatError,
    ClusterEventsError,
    ConfigurationError,
    EmptyInputError,
    ErrorCode,
    FilterError,
    RecoverySuggestion,
    ValidationError,
)


class TestClusterEventsError:
    """Test base error behaviour."""

    def test_defaults(self):
        error = ClusterEventsError("Something broke")

        assert error.message == "Something broke"
        assert error.error_code == ErrorCode.UNKNOWN_ERROR
        assert len(error.context.correlation_id) == 8
        assert error.suggestions == []

    def test_suggestions_sorted_by_priority(self):
        error = ClusterEventsError("x")
        error.add_suggestion(RecoverySuggestion(action="later", description="", priority=2))
        error.add_suggestion(RecoverySuggestion(action="first", description="", priority=1))

        assert [s.action for s in error.suggestions] == ["first", "later"]

    def test_user_message(self):
        error = AroundFormatError("invalid hours value 'xx'", around="xx:00")

        message = error.get_user_message()

        assert "invalid hours value" in message
        assert str(ErrorCode.FILTER_INVALID_AROUND.value) in message
        assert "HH:MM" in message

    def test_debug_info(self):
        cause = ValueError("boom")
        error = ConfigurationError("bad config", cause=cause)

        info = error.get_debug_info()

        assert info['error_type'] == "ConfigurationError"
        assert info['cause'] == {'type': 'ValueError', 'message': 'boom'}


class TestSubclasses:
    """Test subclass context handling."""

    def test_hierarchy(self):
        assert issubclass(AroundFormatError, ValidationError)
        assert issubclass(EmptyInputError, FilterError)
        assert issubclass(FilterError, ClusterEventsError)

    def test_validation_error_context(self):
        error = ValidationError("bad", field_name="kinds", field_value=["-"])

        assert error.context.user_context == {'field_name': 'kinds', 'field_value': ['-']}

    def test_config_error_context(self):
        error = ConfigurationError("bad", config_key="around", config_value="noon", error_code=ErrorCode.CONFIG_INVALID_VALUE)

        assert error.context.user_context['config_key'] == "around"
        assert error.suggestions

    def test_filter_error_context(self):
        error = EmptyInputError("no events", filter_name="around")

        assert error.error_code == ErrorCode.FILTER_EMPTY_INPUT
        assert error.context.filter_name == "around"

    def test_around_error_keeps_input(self):
        assert AroundFormatError("bad", around="noon").around == "noon"
