import logging
from os import environ

from ledger.utils import init_db, init_logging
from ledger.exceptions import LedgerConfigException
from ledger import config


logger = logging.getLogger('.generic')


def run(db_uri, sentry_dsn, app_release, sentry_environment):
    config['database_url'] = db_uri

    config['sentry_dsn'] = sentry_dsn
    config['app_release'] = app_release
    config['sentry_environment'] = sentry_environment
    init_logging()

    engine = init_db(db_uri)
    logger.info('Ledger schema is in place at %s', engine.url.render_as_string(hide_password=True))
    return engine


def main():
    try:
        db_uri = environ['DATABASE_URL']
    except KeyError as e:
        raise LedgerConfigException("DATABASE_URL env var isn't set. Can't create the schema.") from e

    return run(
        db_uri=db_uri,
        sentry_dsn=environ.get('SENTRY_DSN', None),
        app_release=environ.get('APP_VERSION', 'local_commit'),
        sentry_environment=environ.get('SENTRY_ENVIRONMENT', 'local')
    )
