"""Canonical state transition helpers for lifecycle entities."""

from __future__ import annotations

from collections.abc import Hashable, Mapping

from app.core.exceptions import ConflictError


class InvalidTransitionError(ConflictError):
    """Raised when a disallowed state transition is attempted."""


class StateMachine:
    """Transition table over hashable states.

    A state with no outbound transitions is terminal.
    """

    def __init__(self, transitions: Mapping[Hashable, set]) -> None:
        self._transitions = {state: frozenset(targets) for state, targets in transitions.items()}

    def targets(self, current: Hashable) -> frozenset:
        return self._transitions.get(current, frozenset())

    def can_transition(self, current: Hashable, target: Hashable) -> bool:
        return target in self.targets(current)

    def assert_transition(self, current: Hashable, target: Hashable) -> None:
        if not self.can_transition(current=current, target=target):
            raise InvalidTransitionError(f"Transition not allowed: {_label(current)} -> {_label(target)}")

    def is_terminal(self, state: Hashable) -> bool:
        return not self.targets(state)


def _label(state: Hashable) -> str:
    return str(getattr(state, "value", state))
