from os import environ
from logging.config import fileConfig

from sqlalchemy import engine_from_config, pool

from alembic import context

from ledger import db
from ledger.exceptions import LedgerConfigException
from ledger.db import transaction  # noqa: F401

config = context.config

if config.config_file_name is not None:
    fileConfig(config.config_file_name, disable_existing_loggers=False)

target_metadata = db.meta


def database_url():
    url = environ.get('DATABASE_URL') or config.get_main_option('sqlalchemy.url')
    if not url:
        raise LedgerConfigException("DATABASE_URL env var isn't set. Can't run migrations.")
    return url


def run_migrations_offline():
    context.configure(
        url=database_url(),
        target_metadata=target_metadata,
        literal_binds=True,
        dialect_opts={'paramstyle': 'named'},
    )

    with context.begin_transaction():
        context.run_migrations()


def run_migrations_online():
    configuration = config.get_section(config.config_ini_section, {})
    configuration['sqlalchemy.url'] = database_url()

    connectable = engine_from_config(configuration, prefix='sqlalchemy.', poolclass=pool.NullPool)

    with connectable.connect() as connection:
        context.configure(connection=connection, target_metadata=target_metadata)

        with context.begin_transaction():
            context.run_migrations()


if context.is_offline_mode():
    run_migrations_offline()
else:
    run_migrations_online()
