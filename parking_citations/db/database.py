import logging

from typing import NamedTuple

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, scoped_session, sessionmaker
from sqlalchemy.orm.query import Query
from sqlalchemy.orm.scoping import ScopedSession

from parking_citations import settings

LOG = logging.getLogger(__name__)

_DB_CONN_CACHE = None


class DatabaseConnection(NamedTuple):
    engine: Engine
    session: ScopedSession


def init_database() -> DatabaseConnection:
    """Connect lazily to settings.DATABASE_URI, once per process.

    The engine only opens a connection on first use, so importing the
    models does not require a reachable database.
    """
    global _DB_CONN_CACHE  # pylint: disable=global-statement

    if _DB_CONN_CACHE is None:
        engine = create_engine(settings.DATABASE_URI, pool_pre_ping=True)

        session = scoped_session(sessionmaker(bind=engine,
                                              autoflush=False,
                                              expire_on_commit=False))

        _DB_CONN_CACHE = DatabaseConnection(engine=engine, session=session)

    return _DB_CONN_CACHE


def create_tables() -> None:
    """Create any missing tables for the declared models."""
    engine = init_database().engine

    DeclarativeBase.metadata.create_all(engine)

    LOG.info(f'Tables ensured: {sorted(DeclarativeBase.metadata.tables)}')


DeclarativeBase = declarative_base()
DeclarativeBase.query: Query = init_database().session.query_property()
