# server/core/security.py

from fastapi.concurrency import run_in_threadpool
from passlib.context import CryptContext


BCRYPT_ROUNDS = 10

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def _verify(plain_password: str, hashed_password: str | None) -> bool:
    if not plain_password or not hashed_password:
        return False
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        # unrecognised or malformed hash
        return False


async def hash_password(password: str) -> str:
    """Salted bcrypt hash; runs in the thread pool so the event loop keeps serving."""
    return await run_in_threadpool(pwd_context.hash, password)


async def verify_password(plain_password: str, hashed_password: str | None) -> bool:
    return await run_in_threadpool(_verify, plain_password, hashed_password)


async def dummy_verify():
    """Spends the same time as a real verification, for lookups that found no user."""
    await run_in_threadpool(pwd_context.dummy_verify)
