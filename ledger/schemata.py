from schematics import types
from schematics.models import Model

from .types import TransactionStatus, LedgerDirection

# amount is stored as a signed 64-bit BIGINT
BIGINT_MAX = 2 ** 63 - 1


class LedgerEntryRequest(Model):
    user_id = types.UUIDType(required=True)
    currency_id = types.IntType(required=True)
    amount = types.IntType(required=True, min_value=1, max_value=BIGINT_MAX)
    status = types.StringType(choices=[x.value for x in TransactionStatus])


class StatusTransitionRequest(Model):
    status = types.StringType(required=True, choices=[x.value for x in TransactionStatus])


class LedgerEntryRecord(Model):
    id = types.UUIDType(required=True)
    direction = types.StringType(required=True, choices=[x.value for x in LedgerDirection])
    user_id = types.UUIDType(required=True)
    currency_id = types.IntType(required=True)
    amount = types.IntType(required=True, min_value=1, max_value=BIGINT_MAX)
    status = types.StringType(required=True, choices=[x.value for x in TransactionStatus])
    created_at = types.DateTimeType(required=True)
    updated_at = types.DateTimeType(required=True)
