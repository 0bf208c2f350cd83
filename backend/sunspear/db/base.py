"""
Database base configuration and models

Async SQLAlchemy engine over the embedded SQLite store, the session factory,
and the columns every table shares.
"""

from datetime import datetime

from sunspear.config.settings import DatabaseConfig
from sqlalchemy import Column, Integer, DateTime
from sqlalchemy.ext.asyncio import create_async_engine, AsyncSession, async_sessionmaker
from sqlalchemy.orm import declarative_base
from sqlalchemy.pool import NullPool

DatabaseConfig.ensure_exists()

# No pool: a connection lives as long as its session, so none is ever shared
# between event loops. SQLite serializes writers; the busy timeout makes a
# second writer wait instead of failing with "database is locked".
async_engine = create_async_engine(
    DatabaseConfig.get_async_database_url(),
    poolclass=NullPool,
    connect_args={"timeout": DatabaseConfig.BUSY_TIMEOUT},
    echo=DatabaseConfig.ECHO,
)

AsyncSessionLocal = async_sessionmaker(
    async_engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autoflush=False,
)

Base = declarative_base()


class BaseModel:
    """Surrogate key and timestamps shared by every table"""

    id = Column(Integer, primary_key=True, autoincrement=True, comment="Primary Key ID")
    create_time = Column(DateTime, default=datetime.now, nullable=False, comment="Creation Time")
    update_time = Column(DateTime, default=datetime.now, onupdate=datetime.now, nullable=False, comment="Update Time")


async def init_db():
    """Create missing tables. Existing tables are left as they are."""
    # Importing the models registers them on Base.metadata
    from sunspear.db import models  # noqa: F401

    async with async_engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def dispose_db():
    await async_engine.dispose()
