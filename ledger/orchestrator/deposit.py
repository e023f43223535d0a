from ledger import types
from ledger.db.transaction import Deposit

from . import lifecycle


def create_deposit(user_id, currency_id, amount, status=None):
    return lifecycle.create_entry(Deposit, user_id, currency_id, amount, status=status)


def get_deposit(deposit_id):
    return lifecycle.get_entry(Deposit, deposit_id)


def user_deposits(user_id, status=None):
    return lifecycle.entries_for_user(Deposit, user_id, status=status)


def mark_deposit_pending(deposit_id):
    return lifecycle.transition_entry(Deposit, deposit_id, types.TransactionStatus.PENDING)


def complete_deposit(deposit_id):
    return lifecycle.transition_entry(Deposit, deposit_id, types.TransactionStatus.COMPLETED)


def fail_deposit(deposit_id):
    return lifecycle.transition_entry(Deposit, deposit_id, types.TransactionStatus.FAILED)
