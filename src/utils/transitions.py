"""Status transition tables and the policy checks built on them.

Each entity has one table mapping a current status to the statuses an admin
action may move it to. Tightening a policy means editing its table.
"""

from typing import Dict, FrozenSet

from core.exceptions import ConflictError
from models.enums import DesignStatus, TransactionStatus, WithdrawalStatus

_MODERATION_TARGETS = frozenset(
    {DesignStatus.APPROVED, DesignStatus.REJECTED, DesignStatus.FLAGGED}
)

# Moderation is an admin override: any status may be set to any moderation
# outcome, including re-moderating an already moderated design. Nothing goes
# back to PENDING.
DESIGN_TRANSITIONS: Dict[DesignStatus, FrozenSet[DesignStatus]] = {
    status: _MODERATION_TARGETS for status in DesignStatus
}

WITHDRAWAL_TRANSITIONS: Dict[WithdrawalStatus, FrozenSet[WithdrawalStatus]] = {
    WithdrawalStatus.PENDING: frozenset(
        {WithdrawalStatus.APPROVED, WithdrawalStatus.REJECTED}
    ),
    WithdrawalStatus.APPROVED: frozenset(),
    WithdrawalStatus.REJECTED: frozenset(),
}

# A second refund is refused with 409 instead of re-applying REFUNDED.
TRANSACTION_TRANSITIONS: Dict[TransactionStatus, FrozenSet[TransactionStatus]] = {
    TransactionStatus.PENDING: frozenset({TransactionStatus.REFUNDED}),
    TransactionStatus.COMPLETED: frozenset({TransactionStatus.REFUNDED}),
    TransactionStatus.FAILED: frozenset({TransactionStatus.REFUNDED}),
    TransactionStatus.REFUNDED: frozenset(),
}


def design_transition_allowed(current: DesignStatus, target: DesignStatus) -> bool:
    return target in DESIGN_TRANSITIONS[current]


def withdrawal_transition_allowed(
    current: WithdrawalStatus, target: WithdrawalStatus
) -> bool:
    return target in WITHDRAWAL_TRANSITIONS[current]


def transaction_transition_allowed(
    current: TransactionStatus, target: TransactionStatus
) -> bool:
    return target in TRANSACTION_TRANSITIONS[current]


def check_design_transition(current: DesignStatus, target: DesignStatus) -> None:
    if not design_transition_allowed(current, target):
        raise ConflictError(
            f"Design cannot move from {current.value} to {target.value}"
        )


def check_withdrawal_transition(
    current: WithdrawalStatus, target: WithdrawalStatus
) -> None:
    if not withdrawal_transition_allowed(current, target):
        raise ConflictError(f"Withdrawal already {current.value.lower()}")


def check_transaction_transition(
    current: TransactionStatus, target: TransactionStatus
) -> None:
    if not transaction_transition_allowed(current, target):
        raise ConflictError(f"Transaction already {current.value.lower()}")
