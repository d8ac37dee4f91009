"""
Password hashing and session token helpers
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Optional

from jose import jwt as jose_jwt
from passlib.context import CryptContext

from .config import BCRYPT_ROUNDS, JWT_ALGORITHM, JWT_EXPIRE_MINUTES, JWT_SECRET

logger = logging.getLogger(__name__)

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


# ============================================================================
# PASSWORD SECURITY
# ============================================================================


def hash_password(password: str) -> str:
    """Hash password using bcrypt"""
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify password against bcrypt hash"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except Exception as e:
        logger.error(f"Password verification error: {e}")
        return False


# ============================================================================
# SESSION TOKENS
# ============================================================================


def create_access_token(
    account_id: str, role: str, expires_delta: Optional[timedelta] = None
) -> str:
    """
    Create a signed session token for an account

    Args:
        account_id: Stored in the ``sub`` claim
        role: Account role value, stored in the ``role`` claim
        expires_delta: Token lifetime (default JWT_EXPIRE_MINUTES)
    """
    expire = datetime.now(timezone.utc) + (expires_delta or timedelta(minutes=JWT_EXPIRE_MINUTES))
    to_encode = {"sub": account_id, "role": role, "exp": expire}
    return jose_jwt.encode(to_encode, JWT_SECRET, algorithm=JWT_ALGORITHM)


def decode_access_token(token: str) -> dict[str, Any]:
    """
    Verify signature and expiry of a session token.

    Raises jose's ExpiredSignatureError / JWTError, callers map them to 401s.
    """
    return jose_jwt.decode(token, JWT_SECRET, algorithms=[JWT_ALGORITHM])
