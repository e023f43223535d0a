from sqlalchemy import inspect
from sqlalchemy.schema import MetaData
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker


class CustomBase(object):
    def to_dict(self):
        return {c.name: getattr(self, c.key) for c in self.__table__.columns}

    def __repr__(self):
        identity = inspect(self).identity   # never triggers a load, safe inside flush hooks
        return f'<{type(self).__name__} {identity[0] if identity else "transient"}>'


sqla_session = scoped_session(sessionmaker(autocommit=False, autoflush=True))
meta = MetaData()

Base = declarative_base(cls=CustomBase, metadata=meta)
Base.query = sqla_session.query_property()
