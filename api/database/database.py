from __future__ import annotations

from contextlib import asynccontextmanager
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, AsyncIterator, Type, TypeVar, cast

from sqlalchemy import DateTime, TypeDecorator
from sqlalchemy.engine import Dialect, Result
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import NullPool
from sqlalchemy.sql import Executable, Select
from sqlalchemy.sql.expression import select as sa_select

from ..logger import get_logger
from ..settings import settings


T = TypeVar("T")

logger = get_logger(__name__)


class Base(DeclarativeBase):
    pass


def select(entity: Any, *args: Any) -> Select[Any]:
    """Shortcut for :meth:`sqlalchemy.future.select`"""

    if not args:
        return sa_select(entity)

    return sa_select(entity, *args)


def filter_by(cls: Any, *args: Any, **kwargs: Any) -> Select[Any]:
    """Shortcut for :meth:`sqlalchemy.future.Select.filter_by`"""

    return select(cls, *args).filter_by(**kwargs)


class UTCDateTime(TypeDecorator[datetime]):
    """Timezone aware datetime column, stored as naive UTC."""

    impl = DateTime
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        if value.tzinfo is not None:
            value = value.astimezone(timezone.utc)
        return value.replace(tzinfo=None)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        if value is None:
            return None
        return value.replace(tzinfo=timezone.utc)


class DB:
    """
    Database connection

    The session used by all queries is bound to the current context (see :func:`db_context`),
    so every request works on its own session.
    """

    def __init__(self, url: str, pool_recycle: int, pool_size: int, max_overflow: int, echo: bool):
        options: dict[str, Any] = {"pool_pre_ping": True, "pool_recycle": pool_recycle, "echo": echo}
        if url.startswith("sqlite"):
            options = {"poolclass": NullPool, "echo": echo}
        else:
            options |= {"pool_size": pool_size, "max_overflow": max_overflow}

        self.engine: AsyncEngine = create_async_engine(url, **options)
        self._sessionmaker = async_sessionmaker(self.engine, expire_on_commit=False)
        self._session: ContextVar[AsyncSession | None] = ContextVar("session", default=None)

    async def create_tables(self) -> None:
        """Create all tables defined by the models."""

        logger.debug("creating tables")
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_tables(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    def create_session(self) -> AsyncSession:
        return self._sessionmaker()

    @property
    def session(self) -> AsyncSession:
        if (session := self._session.get()) is None:
            raise RuntimeError("No database session in the current context")
        return session

    async def add(self, obj: T) -> T:
        """Add a new row to the database"""

        self.session.add(obj)
        return obj

    async def delete(self, obj: T) -> T:
        """Remove a row from the database"""

        await self.session.delete(obj)
        return obj

    async def exec(self, statement: Executable) -> Result[Any]:
        """Execute an sql statement and return the result"""

        return await self.session.execute(statement)

    async def all(self, statement: Select[Any]) -> list[Any]:
        """Execute an sql statement and return all results as a list"""

        return list((await self.exec(statement)).scalars())

    async def first(self, statement: Select[Any]) -> Any | None:
        """Execute an sql statement and return the first result"""

        return (await self.exec(statement)).scalar()

    async def exists(self, statement: Select[Any]) -> bool:
        """Execute an sql statement and return whether it returned at least one row"""

        return cast(bool, (await self.exec(sa_select(statement.exists()))).scalar())

    async def get(self, cls: Type[T], *args: Any, **kwargs: Any) -> T | None:
        """Shortcut for first(filter_by(...))"""

        return cast("T | None", await self.first(filter_by(cls, *args, **kwargs)))

    async def commit(self) -> None:
        """Send all pending changes to the database and commit the current transaction"""

        await self.session.commit()

    async def close(self) -> None:
        await self.engine.dispose()


@asynccontextmanager
async def db_context() -> AsyncIterator[AsyncSession]:
    """Open a new session, bind it to the current context and commit it on exit."""

    session = db.create_session()
    token = db._session.set(session)
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise
    finally:
        await session.close()
        db._session.reset(token)


def get_database() -> DB:
    return DB(
        settings.database_url,
        pool_recycle=settings.pool_recycle,
        pool_size=settings.pool_size,
        max_overflow=settings.max_overflow,
        echo=settings.sql_show_statements,
    )


db: DB = get_database()
