import logging

generic_logger = logging.getLogger('.generic')
ledger_logger = logging.getLogger('.ledger')


class ExceptionBaseClass(Exception):
    logger = logging.getLogger('fallback')

    def __init__(self, m):
        super().__init__(m)
        self.logger.error(m)


class LedgerConfigException(ExceptionBaseClass):
    logger = generic_logger


class LedgerBaseClass(ExceptionBaseClass):
    logger = ledger_logger


class LedgerEntryNotFoundException(LedgerBaseClass):
    pass


class TransactionStatusException(LedgerBaseClass):
    pass


class LedgerImmutableRecordException(LedgerBaseClass):
    pass
