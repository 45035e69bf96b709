# agrorain/db.py
from contextlib import contextmanager
from typing import Generator, Optional

from sqlalchemy import Engine, create_engine
from sqlalchemy.orm import Session, sessionmaker

from . import config
from .models import Base


# --------------------------------------------------------------------
# Engine / session factory for the local store
# --------------------------------------------------------------------
def make_engine(url: Optional[str] = None) -> Engine:
    return create_engine(
        url or config.DB_URL,
        pool_pre_ping=True,   # stale connections are detected
        future=True,
    )


def make_session_factory(engine: Engine) -> sessionmaker:
    return sessionmaker(bind=engine, expire_on_commit=False, class_=Session, future=True)


def init_db(engine: Engine) -> None:
    """Creates the key/value table if missing (idempotent)."""
    Base.metadata.create_all(bind=engine)


# Usage: with get_session(factory) as s: ...
@contextmanager
def get_session(factory: sessionmaker) -> Generator[Session, None, None]:
    session = factory()
    try:
        yield session
    finally:
        session.close()
