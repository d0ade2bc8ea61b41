"""
Shared fixtures: an in-memory UserStore double, an AccountService over it,
and a TestClient for the full app.
"""

import asyncio
import itertools
from dataclasses import replace

import pytest
from fastapi.testclient import TestClient

from config import Settings
from core.accounts import AccountService
from core.errors import DuplicateAccount
from core.store import UserRecord
from main import create_app


TEST_SECRET = "test-signing-secret"


class MemoryUserStore:
    """UserStore double; uniqueness is checked and applied without yielding in between."""

    def __init__(self):
        self.users: dict[int, UserRecord] = {}
        self._ids = itertools.count(1)

    async def create_user(self, username, email, password_hash, phone=None):
        await asyncio.sleep(0)
        if any(u.username == username or u.email == email for u in self.users.values()):
            raise DuplicateAccount()
        record = UserRecord(id=next(self._ids), username=username, email=email, password=password_hash, phone=phone)
        self.users[record.id] = record
        return replace(record)

    async def find_by_email(self, email):
        await asyncio.sleep(0)
        for user in self.users.values():
            if user.email == email:
                return replace(user)
        return None

    async def find_by_id(self, user_id):
        await asyncio.sleep(0)
        user = self.users.get(user_id)
        return replace(user) if user else None

    async def update_profile(self, user_id, username, email, phone):
        user = self.users.get(user_id)
        if user:
            self.users[user_id] = replace(user, username=username, email=email, phone=phone)

    async def update_password(self, user_id, password_hash):
        user = self.users.get(user_id)
        if user:
            self.users[user_id] = replace(user, password=password_hash)

    async def ping(self):
        return None


@pytest.fixture
def store():
    return MemoryUserStore()


@pytest.fixture
def accounts(store):
    return AccountService(store, TEST_SECRET)


@pytest.fixture
def settings():
    return Settings(jwt_secret=TEST_SECRET, app_env="test")


@pytest.fixture
def client(settings, store):
    app = create_app(settings, store=store)
    with TestClient(app) as test_client:
        yield test_client


@pytest.fixture
def secret():
    return TEST_SECRET
