# propchat/db/session.py
from sqlalchemy.ext.asyncio import create_async_engine, AsyncEngine, AsyncSession
from sqlalchemy.ext.asyncio import async_sessionmaker
from sqlalchemy.pool import NullPool
from typing import Optional
from propchat.config import settings
from propchat.db.base_class import Base

_engine: Optional[AsyncEngine] = None
_session_factory: Optional[async_sessionmaker] = None


def get_engine() -> AsyncEngine:
    """Creates the engine on first use so importing the app never opens a driver."""
    global _engine, _session_factory
    if _engine is None:
        if settings.DATABASE_URL.startswith("postgresql+psycopg://"):
            _engine = create_async_engine(
                settings.DATABASE_URL,
                echo=settings.DEBUG,
                poolclass=NullPool,  # NullPool is recommended with PgBouncer
                connect_args={
                    "application_name": "property_chat",
                    "prepare_threshold": None,  # Disable prepared statements
                },
            )
        else:
            _engine = create_async_engine(settings.DATABASE_URL, echo=settings.DEBUG)

        _session_factory = async_sessionmaker(
            bind=_engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )
    return _engine


async def get_db():
    """Dependency function for FastAPI to get database sessions."""
    get_engine()
    async with _session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def init_db():
    """Initialize database tables."""
    async with get_engine().begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def close_db():
    """Close database engine and clean up connections."""
    global _engine, _session_factory
    if _engine is not None:
        await _engine.dispose()
        _engine = None
        _session_factory = None
