# server/api/profile.py

from pydantic import BaseModel, Field
from fastapi import APIRouter, Depends
from api.deps import get_account_service, get_current_identity
from core.accounts import AccountService
from core.tokens import Identity


router = APIRouter()


class ProfileResponse(BaseModel):
    id: int
    username: str
    email: str
    phone: str | None = None


class ProfileUpdate(BaseModel):
    username: str | None = None
    email: str | None = None
    phone: str | None = None


class PasswordChange(BaseModel):
    old_password: str | None = Field(None, alias="oldPassword")
    new_password: str | None = Field(None, alias="newPassword")


# -------------------------------
# Profile Management
# -------------------------------

@router.get("/profile", response_model=ProfileResponse)
async def read_profile(
    identity: Identity = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
):
    profile = await accounts.get_profile(identity)
    return ProfileResponse(id=profile.id, username=profile.username, email=profile.email, phone=profile.phone)


@router.put("/profile")
async def update_profile(
    req: ProfileUpdate,
    identity: Identity = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.update_profile(identity, req.username, req.email, req.phone)
    return {"message": "Profile updated successfully"}


# -------------------------------
# Password Management
# -------------------------------

@router.put("/change-password")
async def change_password(
    req: PasswordChange,
    identity: Identity = Depends(get_current_identity),
    accounts: AccountService = Depends(get_account_service),
):
    await accounts.change_password(identity, req.old_password, req.new_password)
    return {"message": "Password changed successfully"}
