from ledger import types
from ledger.db.transaction import Withdrawal

from . import lifecycle


def create_withdrawal(user_id, currency_id, amount, status=None):
    return lifecycle.create_entry(Withdrawal, user_id, currency_id, amount, status=status)


def get_withdrawal(withdrawal_id):
    return lifecycle.get_entry(Withdrawal, withdrawal_id)


def user_withdrawals(user_id, status=None):
    return lifecycle.entries_for_user(Withdrawal, user_id, status=status)


def mark_withdrawal_pending(withdrawal_id):
    return lifecycle.transition_entry(Withdrawal, withdrawal_id, types.TransactionStatus.PENDING)


def complete_withdrawal(withdrawal_id):
    return lifecycle.transition_entry(Withdrawal, withdrawal_id, types.TransactionStatus.COMPLETED)


def fail_withdrawal(withdrawal_id):
    return lifecycle.transition_entry(Withdrawal, withdrawal_id, types.TransactionStatus.FAILED)
