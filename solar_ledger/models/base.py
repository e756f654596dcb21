"""
Database engine, session management, and base model.

This module is the foundation for all database operations.
Every model inherits from Base. Every request gets a session
from get_db().
"""

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, DeclarativeBase

from solar_ledger.config import get_settings

settings = get_settings()

# --- Connection Arguments ---
# The default database is a local SQLite file. SQLite refuses
# to use a connection from a thread other than the one that
# opened it, and FastAPI runs sync endpoints in a thread pool,
# so check_same_thread is turned off for SQLite only.
# Other databases get no extra arguments.
_connect_args = (
    {"check_same_thread": False}
    if settings.DATABASE_URL.startswith("sqlite")
    else {}
)

# --- Engine ---
# The engine manages a pool of database connections.
# pool_pre_ping=True tests connections before using them,
# which handles cases where the database restarted or a
# connection went stale. A settlement that fails halfway
# through an invoice because of a dead connection leaves
# the members out of step with each other.
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=_connect_args,
)

# --- Session Factory ---
# Each call to SessionLocal() creates a new session.
# autocommit=False means the routers decide when changes
# are saved: a card batch is committed once, after every
# installment has been added, while group settlement
# commits member by member.
# autoflush=False means SQLAlchemy won't send SQL to the
# database until the store flushes or the router commits.
SessionLocal = sessionmaker(
    bind=engine,
    autocommit=False,
    autoflush=False,
)


# --- Base Model Class ---
# Every database model (LedgerEntryRecord, CategoryRecord,
# CreditCardRecord) inherits from this class. SQLAlchemy uses
# it to track all models, and Alembic reads its metadata when
# generating migrations.
class Base(DeclarativeBase):
    pass


# --- Dependency for FastAPI ---
def get_db():
    """
    Provide a database session for a single request.

    This is a generator that FastAPI uses as a dependency.
    It creates a session, gives it to the endpoint function,
    and closes it when the request finishes, even if the
    endpoint raised.

    Tests replace this dependency with one bound to their own
    engine, see tests/conftest.py.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
