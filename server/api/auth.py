# server/api/auth.py

from pydantic import BaseModel
from fastapi import APIRouter, Depends, status
from api.deps import get_account_service
from core.accounts import AccountService


router = APIRouter()


class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None
    phone: str | None = None


class LoginRequest(BaseModel):
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    message: str
    token: str


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(req: RegisterRequest, accounts: AccountService = Depends(get_account_service)):
    await accounts.register(req.username, req.email, req.password, req.phone)
    return {"message": "User registered successfully"}


@router.post("/login", response_model=LoginResponse)
async def login(req: LoginRequest, accounts: AccountService = Depends(get_account_service)):
    result = await accounts.login(req.email, req.password)
    return {"message": "Login successful", "token": result.token}
