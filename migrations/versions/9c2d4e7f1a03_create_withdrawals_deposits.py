"""create withdrawals and deposits

Revision ID: 9c2d4e7f1a03
Revises:
Create Date: 2023-10-12 15:00:03.000000

"""
from alembic import context, op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision = '9c2d4e7f1a03'
down_revision = None
branch_labels = None
depends_on = None

ledger_tables = ('deposits', 'withdrawals')

tx_status = postgresql.ENUM('CREATED', 'PENDING', 'COMPLETED', 'FAILED', name='tx_status', create_type=False)

# offline (--sql) output has no database to inspect, so the guards live in the SQL itself
create_tx_status_sql = """
DO $$ BEGIN
    CREATE TYPE tx_status AS ENUM ('CREATED', 'PENDING', 'COMPLETED', 'FAILED');
EXCEPTION
    WHEN duplicate_object THEN NULL;
END $$
"""

create_ledger_table_sql = """
CREATE TABLE IF NOT EXISTS {table_name} (
    id UUID PRIMARY KEY DEFAULT uuid_generate_v4(),
    user_id UUID NOT NULL REFERENCES users(id),
    currency_id INT NOT NULL REFERENCES currencies(id),
    amount BIGINT NOT NULL CONSTRAINT {table_name}_amount_check CHECK (amount > 0),
    status tx_status NOT NULL DEFAULT 'CREATED',
    created_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMPTZ NOT NULL DEFAULT CURRENT_TIMESTAMP
)
"""


def upgrade():
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    if context.is_offline_mode():
        op.execute(create_tx_status_sql)
        for table_name in ledger_tables:
            op.execute(create_ledger_table_sql.format(table_name=table_name))
        return

    bind = op.get_bind()
    tx_status.create(bind, checkfirst=True)

    # users and currencies belong to other migrations; existing ledger tables are left as they are
    existing_tables = sa.inspect(bind).get_table_names()
    for table_name in ledger_tables:
        if table_name in existing_tables:
            continue

        op.create_table(
            table_name,
            sa.Column('id', postgresql.UUID(as_uuid=True), primary_key=True,
                      server_default=sa.text('uuid_generate_v4()')),
            sa.Column('user_id', postgresql.UUID(as_uuid=True), sa.ForeignKey('users.id'), nullable=False),
            sa.Column('currency_id', sa.Integer, sa.ForeignKey('currencies.id'), nullable=False),
            sa.Column('amount', sa.BigInteger, nullable=False),
            sa.Column('status', tx_status, nullable=False, server_default='CREATED'),
            sa.Column('created_at', sa.DateTime(timezone=True), nullable=False,
                      server_default=sa.text('CURRENT_TIMESTAMP')),
            sa.Column('updated_at', sa.DateTime(timezone=True), nullable=False,
                      server_default=sa.text('CURRENT_TIMESTAMP')),
            sa.CheckConstraint('amount > 0', name=f'{table_name}_amount_check'),
        )


def downgrade():
    for table_name in reversed(ledger_tables):
        op.execute(f'DROP TABLE IF EXISTS {table_name}')

    op.execute('DROP TYPE IF EXISTS tx_status')
