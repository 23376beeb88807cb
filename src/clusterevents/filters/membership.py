"""
Membership predicates shared by the field filters.

An empty set of accepted values means "accept everything".
"""

from abc import ABC, abstractmethod
from typing import FrozenSet, Iterable, Optional


class StringAcceptor(ABC):
    """Decides whether a candidate string is accepted."""

    @abstractmethod
    def accepts(self, candidate: str) -> bool:
        pass


class AcceptAll(StringAcceptor):
    """Accepts every candidate."""

    def accepts(self, candidate: str) -> bool:
        return True

    def __repr__(self) -> str:
        return "AcceptAll()"


class StringSet(StringAcceptor):
    """Accepts candidates that are members of a fixed set."""

    def __init__(self, values: Iterable[str]):
        self.values: FrozenSet[str] = frozenset(values)

    def accepts(self, candidate: str) -> bool:
        return candidate in self.values

    def __repr__(self) -> str:
        return f"StringSet({sorted(self.values)})"


def acceptor_for(values: Optional[Iterable[str]]) -> StringAcceptor:
    """Build the acceptor for a configured value set."""
    values = frozenset(values or ())
    if not values:
        return AcceptAll()
    return StringSet(values)


def accept_string(values: Optional[Iterable[str]], candidate: str) -> bool:
    """Return True if ``values`` is empty or contains ``candidate``."""
    return acceptor_for(values).accepts(candidate)
