"""Account service - Business logic for accounts and authentication"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...auth import Identity
from ...enums import RoleEnum
from ...errors import AuthenticationError, BadRequestError, ConflictError, ForbiddenError, NotFoundError
from ...models import Account
from ...security_utils import create_access_token, hash_password, verify_password
from .repository import AccountRepository
from .schemas import AccountCreate, AccountUpdate, ChangePasswordRequest, LoginRequest, RegisterRequest

logger = logging.getLogger(__name__)

STAFF_ROLES = {RoleEnum.STAFF, RoleEnum.ADMIN}


class AccountService:
    """Service layer for account business logic"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = AccountRepository()

    def list_accounts(self) -> list[Account]:
        accounts = self.repo.list_all(self.db)
        if not accounts:
            raise NotFoundError("No accounts found")
        return accounts

    def get_account(self, account_id: str) -> Account:
        account = self.repo.get(self.db, account_id)
        if not account:
            raise NotFoundError("Account not found")
        return account

    def get_visible_account(self, account_id: str, identity: Identity) -> Account:
        """Customers and therapists may only read their own account"""
        if identity.role not in STAFF_ROLES and identity.account_id != account_id:
            raise ForbiddenError("You can only access your own account")
        return self.get_account(account_id)

    def _ensure_unique(self, username: Optional[str], email: Optional[str], exclude_id: Optional[str] = None):
        if username:
            existing = self.repo.get_by_username(self.db, username)
            if existing and existing.id != exclude_id:
                raise ConflictError("Username already exists")
        if email:
            existing = self.repo.get_by_email(self.db, email)
            if existing and existing.id != exclude_id:
                raise ConflictError("Email already exists")

    def create_account(self, data: AccountCreate, identity: Optional[Identity] = None) -> Account:
        """Create an account; only an Admin may create non-Customer roles"""
        role = data.role or RoleEnum.CUSTOMER
        if role != RoleEnum.CUSTOMER and (identity is None or identity.role != RoleEnum.ADMIN):
            logger.warning(f"⚠️ Non-admin attempted to create a {role.value} account")
            raise ForbiddenError("Admin access required to assign this role")

        self._ensure_unique(data.username, data.email)

        account = self.repo.create(
            self.db,
            username=data.username,
            password=hash_password(data.password),
            email=data.email,
            role=role,
            dob=data.dob,
            phone=data.phone,
            avatar=data.avatar or "",
            is_active=True,
        )
        logger.info(f"🆕 Account created: {account.username} ({role.value})")
        return account

    def register(self, data: RegisterRequest) -> Account:
        return self.create_account(AccountCreate(**data.model_dump(), role=RoleEnum.CUSTOMER))

    def login(self, data: LoginRequest) -> tuple[Account, str]:
        """Verify credentials and issue a session token"""
        account = self.repo.get_by_login(self.db, data.username, data.email)
        if not account or not verify_password(data.password, account.password):
            logger.warning(f"⚠️ Failed login for {data.username or data.email}")
            raise AuthenticationError("Invalid username or password")

        if not account.is_active:
            logger.warning(f"⚠️ Inactive account {account.id} attempted to log in")
            raise ForbiddenError("Account is inactive")

        token = create_access_token(account.id, account.role.value)
        logger.info(f"✅ Account {account.username} logged in")
        return account, token

    def change_password(self, data: ChangePasswordRequest, identity: Identity) -> dict:
        account = self.get_account(identity.account_id)
        if not verify_password(data.old_password, account.password):
            raise BadRequestError("Old password is incorrect")

        self.repo.update(self.db, account, password=hash_password(data.new_password))
        logger.info(f"🔑 Password changed for account {account.id}")
        return {"message": "Password changed successfully"}

    def update_account(self, account_id: str, data: AccountUpdate, identity: Identity) -> Account:
        is_admin = identity.role == RoleEnum.ADMIN
        if not is_admin and identity.account_id != account_id:
            raise ForbiddenError("You can only update your own account")
        if not is_admin and (data.role is not None or data.is_active is not None):
            raise ForbiddenError("Admin access required to change role or status")

        account = self.get_account(account_id)
        self._ensure_unique(data.username, data.email, exclude_id=account.id)

        updates = data.model_dump(exclude_unset=True)
        return self.repo.update(self.db, account, **updates)

    def deactivate_account(self, account_id: str) -> Account:
        """Accounts are never hard-deleted; deletion clears the active flag"""
        account = self.get_account(account_id)
        account = self.repo.update(self.db, account, is_active=False)
        logger.info(f"🗑️ Account {account.id} deactivated")
        return account
