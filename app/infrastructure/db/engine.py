from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from app.config import Settings

SQLITE_MEMORY_URL = "sqlite+aiosqlite:///:memory:"

# Plain reads after a row lock must see rows committed while the lock was awaited.
MYSQL_ISOLATION_LEVEL = "READ COMMITTED"


def _enable_sqlite_transactions(engine: AsyncEngine) -> None:
    # Let SQLAlchemy emit BEGIN itself so SAVEPOINT and rollbacks behave as on MySQL.
    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn):
        conn.exec_driver_sql("BEGIN")


def create_engine_for_url(url: str, echo: bool = False) -> AsyncEngine:
    if url.startswith("sqlite"):
        kwargs = {"echo": echo}
        if ":memory:" in url:
            # one shared connection, otherwise every checkout sees an empty database
            kwargs.update(poolclass=StaticPool, connect_args={"check_same_thread": False})
        engine = create_async_engine(url, **kwargs)
        _enable_sqlite_transactions(engine)
        return engine
    return create_async_engine(
        url,
        echo=echo,
        pool_pre_ping=True,
        pool_recycle=3600,
        isolation_level=MYSQL_ISOLATION_LEVEL,
    )


def build_engine(settings: Settings) -> AsyncEngine:
    if not settings.use_in_memory and not settings.database_url:
        raise RuntimeError("DATABASE_URL is required for SQL mode")
    return create_engine_for_url(settings.database_url or SQLITE_MEMORY_URL, echo=settings.sql_echo)


def build_sessionmaker(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
