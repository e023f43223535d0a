from enum import Enum


class TransactionStatus(Enum):
    CREATED = 'CREATED'
    PENDING = 'PENDING'
    COMPLETED = 'COMPLETED'
    FAILED = 'FAILED'

    @property
    def is_terminal(self):
        return not _transitions[self]

    def can_transition_to(self, other):
        return TransactionStatus(other) in _transitions[self]


_transitions = {
    TransactionStatus.CREATED: {TransactionStatus.PENDING, TransactionStatus.FAILED},
    TransactionStatus.PENDING: {TransactionStatus.COMPLETED, TransactionStatus.FAILED},
    TransactionStatus.COMPLETED: set(),
    TransactionStatus.FAILED: set(),
}


class LedgerDirection(Enum):
    DEPOSIT = 'deposit'
    WITHDRAWAL = 'withdrawal'
