import io
import os
import tempfile
import unittest

from sqlalchemy import inspect

from ledger import utils
from ledger import db
from ledger.db import sqla_session
from ledger.db.reference import User, Currency


LEDGER_COLUMNS = ['id', 'user_id', 'currency_id', 'amount', 'status', 'created_at', 'updated_at']


class TestCaseMixin:
    engine = None

    db_uri = os.environ.get('LEDGER_TEST_DATABASE_URL', 'sqlite://')

    @classmethod
    def init_db(cls):
        cls.engine = utils.init_db(cls.db_uri)

        db.meta.drop_all(cls.engine)
        db.meta.create_all(cls.engine)

    @classmethod
    def init_with_data(cls):
        currency = Currency(code='USD')
        other_currency = Currency(code='EUR')
        sqla_session.add_all([currency, other_currency])
        sqla_session.commit()

        cls.currency_id = currency.id
        cls.other_currency_id = other_currency.id
        cls.user_id = cls.new_user()

    @classmethod
    def new_user(cls):
        user = User()
        sqla_session.add(user)
        sqla_session.commit()
        return user.id

    @classmethod
    def cleanup_db(cls):
        sqla_session.remove()
        db.meta.drop_all(cls.engine)
        cls.engine.dispose()


class SchemaTest(unittest.TestCase, TestCaseMixin):
    @classmethod
    def setUpClass(cls):
        cls.init_db()

    @classmethod
    def tearDownClass(cls):
        cls.cleanup_db()

    def test_001_tables_created(self):
        table_names = inspect(self.engine).get_table_names()
        for table_name in ('deposits', 'withdrawals', 'users', 'currencies'):
            self.assertIn(table_name, table_names)

    def test_005_column_order(self):
        for table_name in ('deposits', 'withdrawals'):
            columns = [c['name'] for c in inspect(self.engine).get_columns(table_name)]
            self.assertEqual(columns, LEDGER_COLUMNS)

    def test_010_mandatory_columns(self):
        columns = {c['name']: c for c in inspect(self.engine).get_columns('deposits')}
        for column_name in LEDGER_COLUMNS:
            self.assertFalse(columns[column_name]['nullable'], column_name)

    def test_015_foreign_keys(self):
        for table_name in ('deposits', 'withdrawals'):
            fks = {
                tuple(fk['constrained_columns']): (fk['referred_table'], fk['referred_columns'])
                for fk in inspect(self.engine).get_foreign_keys(table_name)
            }
            self.assertEqual(fks[('user_id',)], ('users', ['id']))
            self.assertEqual(fks[('currency_id',)], ('currencies', ['id']))

    def test_020_create_all_again(self):
        db.meta.create_all(self.engine, checkfirst=True)
        db.meta.create_all(self.engine, checkfirst=True)

        table_names = inspect(self.engine).get_table_names()
        self.assertEqual(table_names.count('deposits'), 1)
        self.assertEqual(table_names.count('withdrawals'), 1)


class SchemaCreationIdempotencyTest(unittest.TestCase):
    def setUp(self):
        self.tmp_dir = tempfile.TemporaryDirectory()
        self.db_uri = 'sqlite:///' + os.path.join(self.tmp_dir.name, 'ledger.sqlite')
        self.engines = []

    def tearDown(self):
        sqla_session.remove()
        for engine in self.engines:
            engine.dispose()
        self.tmp_dir.cleanup()

    def test_001_init_db_twice(self):
        self.engines.append(utils.init_db(self.db_uri))
        engine = utils.init_db(self.db_uri)
        self.engines.append(engine)

        table_names = inspect(engine).get_table_names()
        self.assertEqual(sorted(table_names), ['currencies', 'deposits', 'users', 'withdrawals'])


class DdlDumpTest(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        stream = io.StringIO()
        utils.dump_db_ddl(stream)
        cls.ddl = stream.getvalue()

    def test_001_status_type(self):
        create_type = "CREATE TYPE tx_status AS ENUM ('CREATED', 'PENDING', 'COMPLETED', 'FAILED')"
        self.assertEqual(self.ddl.count(create_type), 1)
        self.assertLess(self.ddl.index(create_type), self.ddl.index('CREATE TABLE deposits'))

    def test_005_ledger_tables(self):
        for table_name in ('deposits', 'withdrawals'):
            self.assertIn(f'CREATE TABLE {table_name} (', self.ddl)
            self.assertIn(f'CONSTRAINT {table_name}_amount_check CHECK (amount > 0)', self.ddl)

    def test_010_column_types(self):
        self.assertIn('id UUID NOT NULL', self.ddl)
        self.assertIn('user_id UUID NOT NULL', self.ddl)
        self.assertIn('currency_id INTEGER NOT NULL', self.ddl)
        self.assertIn('amount BIGINT NOT NULL', self.ddl)
        self.assertIn("status tx_status DEFAULT 'CREATED' NOT NULL", self.ddl)
        for column_name in ('created_at', 'updated_at'):
            self.assertRegex(
                self.ddl,
                column_name + r' TIMESTAMP WITH TIME ZONE DEFAULT (now\(\)|CURRENT_TIMESTAMP) NOT NULL'
            )

    def test_015_references(self):
        self.assertIn('FOREIGN KEY(user_id) REFERENCES users (id)', self.ddl)
        self.assertIn('FOREIGN KEY(currency_id) REFERENCES currencies (id)', self.ddl)
