# server/api/deps.py

from fastapi import Header, Request
from core.accounts import AccountService
from core.gate import authorize
from core.tokens import Identity


def get_account_service(request: Request) -> AccountService:
    return request.app.state.account_service


def get_current_identity(request: Request, authorization: str | None = Header(None)) -> Identity:
    """
    Authorization gate for protected routes.
    Rejects with 401 when no bearer token is sent and 403 when it does not verify;
    otherwise attaches the identity to `request.state.identity`.
    """
    identity = authorize(authorization, request.app.state.settings.jwt_secret)
    request.state.identity = identity
    return identity
