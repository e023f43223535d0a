#!/usr/bin/env python

from ledger.utils import dump_db_ddl

dump_db_ddl()
