# server/core/accounts.py

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Optional

from passlib.exc import PasswordValueError

from core.errors import BadCredentials, BadOldPassword, INVALID_LOGIN_MESSAGE, InvalidPassword, MissingFields, NotFound
from core.security import dummy_verify, hash_password, verify_password
from core.store import UserRecord, UserStore
from core.tokens import ACCESS_TOKEN_TTL, Identity, issue_token


logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Profile:
    """Public view of a user record; the password hash never leaves the store."""
    id: int
    username: str
    email: str
    phone: Optional[str] = None

    @classmethod
    def from_record(cls, record: UserRecord) -> "Profile":
        return cls(id=record.id, username=record.username, email=record.email, phone=record.phone)


@dataclass(frozen=True)
class LoginResult:
    identity: Identity
    token: str


class AccountService:
    """
    Register, login and profile/password management on top of a UserStore.
    Each method is one request/response transaction and raises an
    AuthServiceError subclass on failure.
    """

    def __init__(self, store: UserStore, secret: str, token_ttl: timedelta = ACCESS_TOKEN_TTL):
        if not secret:
            raise ValueError("A signing secret is required")
        self.store = store
        self._secret = secret
        self._token_ttl = token_ttl

    async def _hash(self, password: str) -> str:
        try:
            return await hash_password(password)
        except PasswordValueError as exc:
            # passlib refuses NUL bytes and passwords over 4096 bytes
            raise InvalidPassword() from exc

    async def register(self, username: str, email: str, password: str, phone: Optional[str] = None) -> Profile:
        if not username or not email or not password:
            raise MissingFields()

        hashed = await self._hash(password)
        record = await self.store.create_user(username, email, hashed, phone)
        logger.info("Registered user id=%s username=%s", record.id, record.username)
        return Profile.from_record(record)

    async def login(self, email: str, password: str) -> LoginResult:
        if not email or not password:
            raise MissingFields("Missing email or password")

        user = await self.store.find_by_email(email)
        if user is None:
            await dummy_verify()
            logger.info("Login rejected: unknown email")
            raise NotFound(INVALID_LOGIN_MESSAGE, status_code=BadCredentials.status_code)

        if not await verify_password(password, user.password):
            logger.info("Login rejected: wrong password for user id=%s", user.id)
            raise BadCredentials()

        identity = Identity(id=user.id, username=user.username)
        token = issue_token(identity, self._secret, self._token_ttl)
        logger.info("Login succeeded for user id=%s", user.id)
        return LoginResult(identity=identity, token=token)

    async def get_profile(self, identity: Identity) -> Profile:
        record = await self.store.find_by_id(identity.id)
        if record is None:
            raise NotFound()
        return Profile.from_record(record)

    async def update_profile(self, identity: Identity, username: Optional[str], email: Optional[str], phone: Optional[str]):
        # uniqueness is left to the store's constraints
        await self.store.update_profile(identity.id, username, email, phone)
        logger.info("Updated profile for user id=%s", identity.id)

    async def change_password(self, identity: Identity, old_password: str, new_password: str):
        if not old_password or not new_password:
            raise MissingFields("Missing old or new password")

        record = await self.store.find_by_id(identity.id)
        if record is None:
            raise NotFound()

        if not await verify_password(old_password, record.password):
            raise BadOldPassword()

        hashed = await self._hash(new_password)
        await self.store.update_password(identity.id, hashed)
        logger.info("Changed password for user id=%s", identity.id)

    async def ping(self):
        await self.store.ping()
