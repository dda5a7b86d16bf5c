# app/data/database.py
from typing import Generator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker, Session

from app.utils.settings import DATABASE_URL, SQL_ECHO

Base = declarative_base()


def _configure_sqlite(engine: Engine) -> None:
    # pysqlite defers BEGIN; take the write lock up front so concurrent
    # checkouts serialise instead of failing on lock upgrade
    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN IMMEDIATE")


def make_engine(url: str = DATABASE_URL, echo: bool = SQL_ECHO) -> Engine:
    if url.startswith("sqlite"):
        engine = create_engine(
            url,
            echo=echo,
            connect_args={"check_same_thread": False, "timeout": 30},
        )
        _configure_sqlite(engine)
        return engine

    return create_engine(url, echo=echo, pool_pre_ping=True)


def make_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(bind=bind, autocommit=False, autoflush=False)


engine = make_engine()
SessionLocal = make_session_factory(engine)


def get_db() -> Generator[Session, None, None]:
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def init_db(bind: Engine = engine) -> None:
    # models must be registered on Base.metadata before create_all
    import app.data.models  # noqa: F401

    Base.metadata.create_all(bind=bind)
