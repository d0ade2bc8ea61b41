# server/api/health.py

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from api.deps import get_account_service
from core.accounts import AccountService
from core.errors import StoreError


router = APIRouter()


@router.get("/test-db")
async def check_database(accounts: AccountService = Depends(get_account_service)):
    try:
        await accounts.ping()
    except StoreError:
        return JSONResponse(status_code=500, content={"error": "Database not connected"})
    return {"message": "Database connected successfully"}
