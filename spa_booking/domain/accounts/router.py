"""Account router - registration, session and account endpoints"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Response
from sqlalchemy.orm import Session

from ...auth import Identity, get_current_identity, get_optional_identity, require_admin
from ...config import AUTH_COOKIE_NAME, COOKIE_SECURE, JWT_EXPIRE_MINUTES
from ...database import get_db
from ...shared.schemas import MessageResponse
from .schemas import (
    AccountCreate,
    AccountResponse,
    AccountUpdate,
    ChangePasswordRequest,
    LoginRequest,
    LoginResponse,
    RegisterRequest,
)
from .service import AccountService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/account", tags=["Accounts"])


def get_account_service(db: Session = Depends(get_db)) -> AccountService:
    """Dependency injection for AccountService"""
    return AccountService(db)


# ============================================================================
# AUTHENTICATION
# ============================================================================


@router.post("/login", response_model=LoginResponse)
async def login(
    data: LoginRequest,
    response: Response,
    service: AccountService = Depends(get_account_service),
):
    """Verify credentials and set the session cookie"""
    account, token = service.login(data)
    response.set_cookie(
        key=AUTH_COOKIE_NAME,
        value=token,
        httponly=True,
        secure=COOKIE_SECURE,
        samesite="lax",
        max_age=JWT_EXPIRE_MINUTES * 60,
        path="/",
    )
    return LoginResponse(message="Login successful", account=AccountResponse.model_validate(account))


@router.post("/register", response_model=AccountResponse, status_code=201)
async def register(
    data: RegisterRequest,
    service: AccountService = Depends(get_account_service),
):
    """Self-registration for customers"""
    return AccountResponse.model_validate(service.register(data))


@router.api_route("/logout", methods=["GET", "POST"], response_model=MessageResponse)
async def logout(response: Response):
    """Clear the session cookie"""
    response.delete_cookie(key=AUTH_COOKIE_NAME, path="/")
    return {"message": "Logout successful"}


@router.post("/changePassword", response_model=MessageResponse)
async def change_password(
    data: ChangePasswordRequest,
    identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
):
    """Change the password of the authenticated account"""
    return service.change_password(data, identity)


# ============================================================================
# CORE CRUD OPERATIONS
# ============================================================================


@router.get("", response_model=list[AccountResponse])
async def get_all_accounts(
    _admin: Identity = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
):
    """List every account (Admin only)"""
    return [AccountResponse.model_validate(a) for a in service.list_accounts()]


@router.post("", response_model=AccountResponse, status_code=201)
async def create_account(
    data: AccountCreate,
    identity: Optional[Identity] = Depends(get_optional_identity),
    service: AccountService = Depends(get_account_service),
):
    """Create an account; the role defaults to Customer"""
    return AccountResponse.model_validate(service.create_account(data, identity))


@router.get("/{account_id}", response_model=AccountResponse)
async def get_account(
    account_id: str,
    identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
):
    return AccountResponse.model_validate(service.get_visible_account(account_id, identity))


@router.put("/{account_id}", response_model=AccountResponse)
async def update_account(
    account_id: str,
    data: AccountUpdate,
    identity: Identity = Depends(get_current_identity),
    service: AccountService = Depends(get_account_service),
):
    return AccountResponse.model_validate(service.update_account(account_id, data, identity))


@router.delete("/{account_id}")
async def delete_account(
    account_id: str,
    _admin: Identity = Depends(require_admin),
    service: AccountService = Depends(get_account_service),
):
    """Deactivate an account (Admin only)"""
    account = service.deactivate_account(account_id)
    return {
        "message": "Account deactivated successfully",
        "account": AccountResponse.model_validate(account).model_dump(mode="json", by_alias=True),
    }
