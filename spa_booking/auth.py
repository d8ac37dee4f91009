import logging
from typing import Callable, Optional

from fastapi import Depends, Request
from jose import ExpiredSignatureError, JWTError
from pydantic import BaseModel
from sqlalchemy.orm import Session

from .config import AUTH_COOKIE_NAME
from .database import get_db
from .enums import RoleEnum
from .errors import AppError, AuthenticationError, ForbiddenError
from .models import Account
from .security_utils import decode_access_token

logger = logging.getLogger(__name__)


class Identity(BaseModel):
    """Decoded session identity attached to request.state"""

    account_id: str
    role: RoleEnum


def _decode_identity(token: str) -> Identity:
    try:
        payload = decode_access_token(token)
    except ExpiredSignatureError as e:
        logger.info("ℹ️ Session token expired")
        raise AuthenticationError("Token expired") from e
    except JWTError as e:
        logger.warning(f"⚠️ Invalid session token: {e}")
        raise AuthenticationError("Invalid token") from e
    except Exception as e:
        logger.error(f"❌ Token verification failed: {type(e).__name__}: {e}")
        raise AppError("Authentication error", 500) from e

    account_id = payload.get("sub")
    role = payload.get("role")
    if not account_id or role not in {r.value for r in RoleEnum}:
        logger.warning(f"⚠️ Token missing claims. Available claims: {list(payload.keys())}")
        raise AuthenticationError("Invalid token")
    return Identity(account_id=account_id, role=RoleEnum(role))


async def get_current_identity(request: Request) -> Identity:
    """Verify the session cookie and attach the identity to the request"""
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        logger.warning(f"⚠️ No session cookie on {request.method} {request.url.path}")
        raise AuthenticationError("Authentication required")

    identity = _decode_identity(token)
    request.state.identity = identity
    logger.debug(f"✅ Authenticated account {identity.account_id} ({identity.role.value})")
    return identity


async def get_optional_identity(request: Request) -> Optional[Identity]:
    """
    Identity when a valid session cookie is present, None otherwise.

    An expired or invalid cookie counts as anonymous, so routes open to
    guests keep working for callers holding a stale session.
    """
    token = request.cookies.get(AUTH_COOKIE_NAME)
    if not token:
        return None
    try:
        identity = _decode_identity(token)
    except AuthenticationError as e:
        logger.info(f"ℹ️ Ignoring stale session cookie on {request.url.path}: {e.message}")
        return None
    request.state.identity = identity
    return identity


def require_identity(request: Request) -> Identity:
    """
    Read the identity stored by get_current_identity.

    Missing identity means a guard was wired without authentication, which is
    a programming error rather than a client error.
    """
    identity = getattr(request.state, "identity", None)
    if identity is None:
        logger.error(f"❌ Authorization ran before authentication on {request.url.path}")
        raise AppError("Authentication must run before authorization", 500)
    return identity


def require_roles(*roles: RoleEnum, detail: Optional[str] = None) -> Callable:
    """
    Build a dependency allowing only the given roles.

    The dependency depends on get_current_identity, so authentication always
    runs first for every route using it.
    """
    allowed = set(roles)
    message = detail or f"{' or '.join(r.value for r in roles)} access required"

    async def role_guard(
        request: Request, _identity: Identity = Depends(get_current_identity)
    ) -> Identity:
        identity = require_identity(request)
        if identity.role not in allowed:
            logger.warning(
                f"⚠️ Account {identity.account_id} ({identity.role.value}) denied on {request.url.path}"
            )
            raise ForbiddenError(message)
        return identity

    return role_guard


require_admin = require_roles(RoleEnum.ADMIN, detail="Admin access required")
require_staff = require_roles(RoleEnum.STAFF, RoleEnum.ADMIN, detail="Staff access required")


async def require_active_account(
    identity: Identity = Depends(get_current_identity),
    db: Session = Depends(get_db),
) -> Identity:
    """Reject identities whose account was deactivated after the token was issued"""
    account = db.query(Account).filter(Account.id == identity.account_id).first()
    if not account or not account.is_active:
        logger.warning(f"⚠️ Inactive or missing account {identity.account_id} rejected")
        raise ForbiddenError("Account is inactive")
    return identity
