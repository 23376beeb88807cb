"""
Tests for the membership predicates.
"""

from clusterevents.filters.membership import (
    AcceptAll,
    StringSet,
    accept_string,
    acceptor_for,
)


class TestAcceptors:
    """Test acceptor construction and behaviour."""

    def test_empty_values_accept_everything(self):
        for values in (None, [], set(), ()):
            acceptor = acceptor_for(values)
            assert isinstance(acceptor, AcceptAll)
            assert acceptor.accepts("anything")
            assert acceptor.accepts("")

    def test_explicit_set_membership(self):
        acceptor = acceptor_for(["default", "prod"])

        assert isinstance(acceptor, StringSet)
        assert acceptor.accepts("prod")
        assert not acceptor.accepts("staging")
        assert not acceptor.accepts("")

    def test_membership_is_case_sensitive(self):
        assert not StringSet(["Prod"]).accepts("prod")

    def test_accept_string_helper(self):
        assert accept_string([], "x")
        assert accept_string({"x"}, "x")
        assert not accept_string({"x"}, "y")
