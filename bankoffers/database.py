"""Database configuration and the offer storage handle."""

from __future__ import annotations

from fastapi import Request
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from bankoffers.config import Settings


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class OfferStore:
    """Owns the async engine, its bounded connection pool and the session factory.

    One store is created per process (see the app lifespan) and handed to
    request handlers through ``get_store``. ``dispose()`` must be awaited
    before exit so pooled connections are released.
    """

    def __init__(
        self,
        database_url: str,
        *,
        pool_size: int = 10,
        max_overflow: int = 0,
        echo: bool = False,
    ) -> None:
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        # SQLite drivers pick their own pool class; sizing applies to server DBs.
        if not database_url.startswith("sqlite"):
            engine_kwargs["pool_size"] = pool_size
            engine_kwargs["max_overflow"] = max_overflow

        self.engine: AsyncEngine = create_async_engine(database_url, **engine_kwargs)
        self.session_maker = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "OfferStore":
        return cls(
            settings.sqlalchemy_url,
            pool_size=settings.db_pool_size,
            max_overflow=settings.db_max_overflow,
            echo=settings.debug,
        )

    @property
    def dialect_name(self) -> str:
        return self.engine.dialect.name

    def session(self) -> AsyncSession:
        """Return a new session; use it as an async context manager."""
        return self.session_maker()

    async def create_schema(self) -> None:
        """Create tables that do not exist yet."""
        # Ensure all model modules are imported before create_all.
        import bankoffers.models  # noqa: F401

        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        """Close every pooled connection."""
        await self.engine.dispose()

    def __repr__(self) -> str:
        return f"<OfferStore(url='{self.engine.url.render_as_string(hide_password=True)}')>"


def get_store(request: Request) -> OfferStore:
    """Dependency returning the store created in the app lifespan."""
    return request.app.state.store
