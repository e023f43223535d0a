import sys
import os
import logging
from logging.config import dictConfig

from sqlalchemy import create_engine, create_mock_engine, event
from sqlalchemy.exc import DisconnectionError

import sentry_sdk
from sentry_sdk.integrations.logging import LoggingIntegration

from ledger import db, config
from ledger.db import transaction  # noqa: F401  registers ledger tables on db.meta


def init_db(uri):
    engine = create_engine(uri, pool_pre_ping=True)

    @event.listens_for(engine, "connect")
    def connect(dbapi_connection, connection_record):
        connection_record.info['pid'] = os.getpid()

        # SQLite ignores REFERENCES clauses unless asked per connection
        if engine.dialect.name == 'sqlite':
            cursor = dbapi_connection.cursor()
            cursor.execute('PRAGMA foreign_keys=ON')
            cursor.close()

    @event.listens_for(engine, "checkout")
    def checkout(dbapi_connection, connection_record, connection_proxy):
        pid = os.getpid()
        if connection_record.info['pid'] != pid:
            connection_record.dbapi_connection = connection_proxy.dbapi_connection = None
            raise DisconnectionError(
                "Connection record belongs to pid %s, "
                "attempting to check out in pid %s" %
                (connection_record.info['pid'], pid)
            )

    db.sqla_session.remove()
    db.sqla_session.configure(bind=engine)

    db.meta.create_all(engine, checkfirst=True)

    return engine


def dump_db_ddl(stream=None):
    if stream is None:
        stream = sys.stdout

    def dump(sql, *multiparams, **params):
        stream.write(str(sql.compile(dialect=engine.dialect)).strip() + ';\n\n')

    engine = create_mock_engine('postgresql://', executor=dump)
    db.meta.create_all(engine, checkfirst=False)


def init_logging():
    if config['sentry_dsn']:
        sentry_sdk.init(
            dsn=config['sentry_dsn'],
            release=config['app_release'],
            environment=config['sentry_environment'],
            integrations=[LoggingIntegration(level=logging.INFO, event_level=logging.ERROR)],
        )

    logging_config = {
        'version': 1,
        'disable_existing_loggers': False,

        'formatters': {
            'console': {
                'format': '[%(asctime)s][%(levelname)s] %(name)s '
                          '%(filename)s:%(funcName)s:%(lineno)d | %(message)s',
                'datefmt': '%H:%M:%S',
            },
        },

        'handlers': {
            'console': {
                'level': 'DEBUG',
                'class': 'logging.StreamHandler',
                'formatter': 'console'
            },
        },

        'loggers': {
            '': {
                'handlers': ['console'],
                'level': 'DEBUG',
                'propagate': True,
            },
            'sqlalchemy': {
                'handlers': ['console'],
                'level': 'INFO',
                'propagate': False
            }
        }
    }

    dictConfig(logging_config)
