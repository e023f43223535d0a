import logging
import uuid

from sqlalchemy import Table, Column, Integer, BigInteger, Uuid, DateTime, Enum, ForeignKey, CheckConstraint, event
from sqlalchemy.orm import attributes, column_property
from sqlalchemy.sql import functions

from ledger import types
from ledger.exceptions import LedgerImmutableRecordException, TransactionStatusException

from . import Base, meta
from .reference import User, Currency


logger = logging.getLogger('db')

# create_constraint only matters where there is no native ENUM (SQLite)
tx_status = Enum(types.TransactionStatus, name='tx_status', metadata=meta, create_constraint=True,
                 values_callable=lambda statuses: [x.value for x in statuses])


def ledger_entry_table(name):
    """
    Both ledger tables are built here so that their shapes cannot drift apart.

    :param name: table name, also used as the CHECK constraint prefix
    :return: sqlalchemy.Table bound to the shared metadata
    """
    return Table(
        name, meta,
        Column('id', Uuid, primary_key=True, default=uuid.uuid4),
        Column('user_id', Uuid, ForeignKey(User.id), nullable=False),
        Column('currency_id', Integer, ForeignKey(Currency.id), nullable=False),
        Column('amount', BigInteger, nullable=False),
        Column('status', tx_status, nullable=False, server_default=types.TransactionStatus.CREATED.value),
        Column('created_at', DateTime(timezone=True), nullable=False, server_default=functions.now()),
        Column('updated_at', DateTime(timezone=True), nullable=False, server_default=functions.now(),
               onupdate=functions.now()),
        CheckConstraint('amount > 0', name=f'{name}_amount_check'),
    )


class LedgerEntryMixin(object):
    direction = None

    # only 'status' (and 'updated_at' with it) moves after insert
    immutable_columns = ('user_id', 'currency_id', 'amount')

    @property
    def is_terminal(self):
        return self.status is not None and self.status.is_terminal


class Deposit(LedgerEntryMixin, Base):
    __table__ = ledger_entry_table('deposits')

    status = column_property(__table__.c.status, active_history=True)

    # UPDATE ... WHERE status = <loaded status>; a concurrent change raises StaleDataError
    __mapper_args__ = {
        'version_id_col': __table__.c.status,
        'version_id_generator': False
    }

    direction = types.LedgerDirection.DEPOSIT


class Withdrawal(LedgerEntryMixin, Base):
    __table__ = ledger_entry_table('withdrawals')

    status = column_property(__table__.c.status, active_history=True)

    # UPDATE ... WHERE status = <loaded status>; a concurrent change raises StaleDataError
    __mapper_args__ = {
        'version_id_col': __table__.c.status,
        'version_id_generator': False
    }

    direction = types.LedgerDirection.WITHDRAWAL


ledger_models = {
    types.LedgerDirection.DEPOSIT: Deposit,
    types.LedgerDirection.WITHDRAWAL: Withdrawal,
}


def guard_ledger_update(mapper, connection, target):
    for column_name in target.immutable_columns:
        history = attributes.get_history(target, column_name, passive=attributes.PASSIVE_NO_INITIALIZE)
        if history.has_changes():
            raise LedgerImmutableRecordException(
                f'{target!r}: {column_name} cannot be changed once recorded'
            )

    status_history = attributes.get_history(target, 'status', passive=attributes.PASSIVE_NO_INITIALIZE)
    if status_history.deleted and status_history.added:
        previous_status = types.TransactionStatus(status_history.deleted[0])
        new_status = types.TransactionStatus(status_history.added[0])
        if not previous_status.can_transition_to(new_status):
            raise TransactionStatusException(
                f'{target!r}: transition {previous_status.value} -> {new_status.value} is not allowed'
            )
        logger.debug('%r: %s -> %s', target, previous_status.value, new_status.value)


def forbid_ledger_delete(mapper, connection, target):
    raise LedgerImmutableRecordException(f'{target!r}: ledger records are never deleted')


for ledger_model in ledger_models.values():
    event.listen(ledger_model, 'before_update', guard_ledger_update)
    event.listen(ledger_model, 'before_delete', forbid_ledger_delete)
