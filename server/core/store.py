# server/core/store.py

import logging
from contextlib import asynccontextmanager
from dataclasses import dataclass
from typing import AsyncIterator, Optional, Protocol
from sqlalchemy import or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from core.errors import DuplicateAccount, StoreError
from database import ping_db
from models.user import User


logger = logging.getLogger(__name__)


@dataclass
class UserRecord:
    id: int
    username: str
    email: str
    password: str
    phone: Optional[str] = None


class UserStore(Protocol):
    """
    What the account operations need from persistence.
    Implementations report a uniqueness violation on insert as DuplicateAccount
    and any other infrastructure failure as StoreError.
    """

    async def create_user(self, username: str, email: str, password_hash: str, phone: Optional[str] = None) -> UserRecord: ...

    async def find_by_email(self, email: str) -> Optional[UserRecord]: ...

    async def find_by_id(self, user_id: int) -> Optional[UserRecord]: ...

    async def update_profile(self, user_id: int, username: Optional[str], email: Optional[str], phone: Optional[str]) -> None: ...

    async def update_password(self, user_id: int, password_hash: str) -> None: ...

    async def ping(self) -> None: ...


def _to_record(user: User) -> UserRecord:
    return UserRecord(
        id=user.id,
        username=user.username,
        email=user.email,
        password=user.password,
        phone=user.phone,
    )


# -------------------------------
# SQLAlchemy-backed store
# -------------------------------

class SQLUserStore:
    """UserStore over an async SQLAlchemy session factory; one session per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    @asynccontextmanager
    async def _session(self, action: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_factory() as session:
                yield session
        except SQLAlchemyError as exc:
            logger.exception("User store failure during %s", action)
            raise StoreError() from exc

    async def create_user(self, username, email, password_hash, phone=None) -> UserRecord:
        user = User(username=username, email=email, password=password_hash, phone=phone)
        async with self._session("create_user") as session:
            session.add(user)
            try:
                await session.commit()
            except IntegrityError as exc:
                await session.rollback()
                # only a username/email collision is a duplicate; other constraints are store failures
                taken = await session.execute(
                    select(User.id).where(or_(User.username == username, User.email == email)).limit(1)
                )
                if taken.first() is not None:
                    raise DuplicateAccount() from exc
                raise
            return _to_record(user)

    async def find_by_email(self, email) -> Optional[UserRecord]:
        async with self._session("find_by_email") as session:
            result = await session.execute(select(User).where(User.email == email))
            user = result.scalar_one_or_none()
            return _to_record(user) if user else None

    async def find_by_id(self, user_id) -> Optional[UserRecord]:
        async with self._session("find_by_id") as session:
            user = await session.get(User, user_id)
            return _to_record(user) if user else None

    async def update_profile(self, user_id, username, email, phone):
        async with self._session("update_profile") as session:
            await session.execute(
                update(User)
                .where(User.id == user_id)
                .values(username=username, email=email, phone=phone)
            )
            await session.commit()

    async def update_password(self, user_id, password_hash):
        async with self._session("update_password") as session:
            await session.execute(
                update(User).where(User.id == user_id).values(password=password_hash)
            )
            await session.commit()

    async def ping(self):
        try:
            await ping_db(self._session_factory)
        except SQLAlchemyError as exc:
            logger.exception("Database ping failed")
            raise StoreError("Database not connected") from exc
