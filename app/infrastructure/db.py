"""Database infrastructure setup."""

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session, sessionmaker

from app.infrastructure.config.settings import settings

# Engine creation is deferred until the first session is requested
_engine = None
_SessionLocal = None


def build_engine(database_url: str, echo: bool = False) -> Engine:
    """
    Create an engine for a database URL.

    Args:
        database_url: SQLAlchemy URL
        echo: Log SQL statements

    Returns:
        SQLAlchemy engine
    """
    if not database_url:
        raise ValueError("DATABASE_URL is required for database operations")
    connect_args = {}
    if database_url.startswith("sqlite"):
        # Sessions may be opened from FastAPI worker threads
        connect_args["check_same_thread"] = False
    engine = create_engine(
        database_url,
        pool_pre_ping=True,  # Verify connections before using
        echo=echo,
        connect_args=connect_args,
    )
    if database_url.startswith("sqlite"):
        enable_sqlite_savepoints(engine)
    return engine


def enable_sqlite_savepoints(engine: Engine) -> None:
    """
    Let SQLAlchemy drive SQLite transactions so SAVEPOINT works.

    pysqlite otherwise defers BEGIN until the first DML statement, and releasing a
    savepoint opened before it commits the whole transaction.
    """

    @event.listens_for(engine, "connect")
    def _disable_pysqlite_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


def _get_engine() -> Engine:
    """Get or create the database engine."""
    global _engine
    if _engine is None:
        _engine = build_engine(settings.database_url, echo=settings.debug_mode)
    return _engine


def get_db_session() -> Session:
    """
    Get a database session.

    Returns:
        SQLAlchemy session instance
    """
    global _SessionLocal
    if _SessionLocal is None:
        _SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=_get_engine())
    return _SessionLocal()
