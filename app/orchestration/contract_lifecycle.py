"""Contract status transition table.

Every contract status change goes through this table::

    DISPATCH: DRAFT -> SENT
    VIEW:     SENT -> VIEWED
    SIGN:     SENT | VIEWED -> SIGNED
    EXPIRE:   SENT | VIEWED -> EXPIRED

SIGNED and EXPIRED have no outbound transitions.
"""

from __future__ import annotations

import enum

from app.models.enums import ContractStatus
from app.orchestration.state_machine import InvalidTransitionError, StateMachine


class ContractAction(str, enum.Enum):
    DISPATCH = "dispatch"
    VIEW = "view"
    SIGN = "sign"
    EXPIRE = "expire"


CONTRACT_TRANSITIONS: dict[ContractAction, dict[ContractStatus, ContractStatus]] = {
    ContractAction.DISPATCH: {ContractStatus.DRAFT: ContractStatus.SENT},
    ContractAction.VIEW: {ContractStatus.SENT: ContractStatus.VIEWED},
    ContractAction.SIGN: {
        ContractStatus.SENT: ContractStatus.SIGNED,
        ContractStatus.VIEWED: ContractStatus.SIGNED,
    },
    ContractAction.EXPIRE: {
        ContractStatus.SENT: ContractStatus.EXPIRED,
        ContractStatus.VIEWED: ContractStatus.EXPIRED,
    },
}


def _build_state_machine() -> StateMachine:
    graph: dict[ContractStatus, set[ContractStatus]] = {status: set() for status in ContractStatus}
    for edges in CONTRACT_TRANSITIONS.values():
        for source, target in edges.items():
            graph[source].add(target)
    return StateMachine(graph)


contract_state_machine = _build_state_machine()

TERMINAL_STATUSES = frozenset(status for status in ContractStatus if contract_state_machine.is_terminal(status))


def sources_for(action: ContractAction) -> frozenset[ContractStatus]:
    """Statuses from which ``action`` is legal."""
    return frozenset(CONTRACT_TRANSITIONS[action])


def target_for(action: ContractAction) -> ContractStatus:
    """The single status ``action`` moves a contract into."""
    (target,) = set(CONTRACT_TRANSITIONS[action].values())
    return target


def next_status(current: ContractStatus, action: ContractAction) -> ContractStatus:
    """Return the status ``action`` leads to, or raise for an illegal move."""
    target = CONTRACT_TRANSITIONS[action].get(ContractStatus(current))
    if target is None:
        raise InvalidTransitionError(f"Cannot {action.value} a contract in status {ContractStatus(current).value}.")
    return target


def can_apply(current: ContractStatus, action: ContractAction) -> bool:
    return ContractStatus(current) in CONTRACT_TRANSITIONS[action]


def available_actions(current: ContractStatus) -> list[ContractAction]:
    """Actions that are legal from ``current``, in declaration order."""
    return [action for action in ContractAction if can_apply(current, action)]


def is_terminal(status: ContractStatus) -> bool:
    return ContractStatus(status) in TERMINAL_STATUSES
