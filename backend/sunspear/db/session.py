"""
Database session management

One short-lived session per repository call. Commits on success, rolls back on
any failure, and turns driver or ORM errors into PersistenceError.
"""

import logging
from contextlib import asynccontextmanager
from functools import wraps
from typing import AsyncGenerator
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from sunspear.utils.exceptions import PersistenceError
from .base import AsyncSessionLocal

logger = logging.getLogger(__name__)


@asynccontextmanager
async def async_session_scope() -> AsyncGenerator[AsyncSession, None]:
    """
    Transactional session scope

    Usage:
        async with async_session_scope() as session:
            session.add(row)
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except BaseException:
            await session.rollback()
            raise


def async_with_session(f):
    """
    Inject a session into a repository method

    The session is passed right after ``self``; the wrapped method never
    commits itself.

    Usage:
        @async_with_session
        async def get_project(self, session, project_id):
            return await session.get(ComposeProject, project_id)

    Raises:
        PersistenceError: on any SQLAlchemyError, with ``operation`` set to
            the method name
    """
    @wraps(f)
    async def wrapper(self, *args, **kwargs):
        try:
            async with async_session_scope() as session:
                return await f(self, session, *args, **kwargs)
        except SQLAlchemyError as e:
            logger.error(f"Store operation {f.__name__} failed: {e}", exc_info=True)
            raise PersistenceError(message=f"store operation {f.__name__} failed: {e}", operation=f.__name__) from e

    return wrapper
