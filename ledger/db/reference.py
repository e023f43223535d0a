"""
Entities referenced by the ledger tables.

Users and currencies are owned by their own subsystems; only the key columns
the foreign keys point at are declared here, so the ledger schema can be
created against an empty database. Against a database where these tables
already exist, ``create_all(checkfirst=True)`` leaves them untouched.
"""
import uuid

from sqlalchemy import Column, Integer, String, Uuid, DateTime
from sqlalchemy.sql import functions

from . import Base


class User(Base):
    __tablename__ = 'users'

    id = Column(Uuid, primary_key=True, default=uuid.uuid4)
    created_at = Column(DateTime(timezone=True), nullable=False, server_default=functions.now())


class Currency(Base):
    __tablename__ = 'currencies'

    id = Column(Integer, primary_key=True, autoincrement=True)
    code = Column(String(16), nullable=False, unique=True)
