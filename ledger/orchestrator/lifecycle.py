import logging
import uuid

from sqlalchemy import asc
from sqlalchemy.orm.exc import NoResultFound, StaleDataError

from ledger import types, schemata
from ledger.db import sqla_session
from ledger.exceptions import LedgerEntryNotFoundException, TransactionStatusException


logger = logging.getLogger('.ledger')


def commit_or_rollback():
    # storage errors go to the caller as they are, the session just gets usable again
    try:
        sqla_session.commit()
    except Exception:
        sqla_session.rollback()
        raise


def create_entry(model, user_id, currency_id, amount, status=None):
    """
    Record a new deposit or withdrawal.

    :param model: db.transaction.Deposit or db.transaction.Withdrawal
    :param user_id: UUID of an existing user
    :param currency_id: id of an existing currency
    :param amount: positive integer in the currency's minor unit
    :param status: TransactionStatus or its value; the storage default (CREATED) when None
    :return: persisted entry
    """
    if isinstance(status, types.TransactionStatus):
        status = status.value

    data = {
        'user_id': user_id,
        'currency_id': currency_id,
        'amount': amount,
        'status': status
    }

    entry_req = schemata.LedgerEntryRequest(data)
    entry_req.validate()

    entry = model(
        user_id=entry_req.user_id,
        currency_id=entry_req.currency_id,
        amount=entry_req.amount
    )
    if entry_req.status is not None:
        entry.status = types.TransactionStatus(entry_req.status)

    sqla_session.add(entry)
    commit_or_rollback()

    logger.info('%s %s recorded for user %s: %s in currency %s',
                model.direction.value, entry.id, entry.user_id, entry.amount, entry.currency_id)
    return entry


def as_uuid(value):
    return value if isinstance(value, uuid.UUID) else uuid.UUID(str(value))


def get_entry(model, entry_id, lock=False):
    entry_id = as_uuid(entry_id)
    entry_q = model.query.filter(model.id == entry_id)
    if lock:
        # fresh row, held until commit where the backend supports FOR UPDATE
        entry_q = entry_q.with_for_update().populate_existing()
    try:
        return entry_q.one()
    except NoResultFound as e:
        raise LedgerEntryNotFoundException(f'No {model.direction.value} with id {entry_id}') from e


def entries_for_user(model, user_id, status=None):
    user_id = as_uuid(user_id)
    entries_q = model.query.filter(model.user_id == user_id)
    if status is not None:
        entries_q = entries_q.filter(model.status == types.TransactionStatus(status))
    return entries_q.order_by(asc(model.created_at), asc(model.id)).all()


def transition_entry(model, entry_id, status):
    if isinstance(status, types.TransactionStatus):
        status = status.value

    transition_req = schemata.StatusTransitionRequest({'status': status})
    transition_req.validate()
    new_status = types.TransactionStatus(transition_req.status)

    entry = get_entry(model, entry_id, lock=True)
    current_status = entry.status
    if not current_status.can_transition_to(new_status):
        sqla_session.rollback()   # releases the row lock
        raise TransactionStatusException(
            f'{model.direction.value} {entry_id}: transition '
            f'{current_status.value} -> {new_status.value} is not allowed'
        )

    entry.status = new_status
    try:
        commit_or_rollback()
    except StaleDataError as e:
        raise TransactionStatusException(
            f'{model.direction.value} {entry_id}: status was changed concurrently, '
            f'{new_status.value} is not applied'
        ) from e

    logger.info('%s %s is %s now', model.direction.value, entry_id, new_status.value)
    return entry


def entry_record(entry):
    data = entry.to_dict()
    data['direction'] = entry.direction.value
    data['status'] = entry.status.value

    record = schemata.LedgerEntryRecord(data)
    record.validate()
    return record.to_primitive()
