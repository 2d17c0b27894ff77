"""
Password hashing and JWT session tokens
"""

from datetime import timedelta
from typing import Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt
from passlib.context import CryptContext

from pdv.core.config import get_settings
from pdv.core.errors import AuthError
from pdv.core.time_utils import utcnow

settings = get_settings()
pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
    bcrypt__rounds=settings.BCRYPT_ROUNDS,
)


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def verify_password(plain_password: str, password_hash: str) -> bool:
    """Salted hash comparison; malformed hashes never verify"""
    try:
        return pwd_context.verify(plain_password, password_hash)
    except (ValueError, TypeError):
        return False


def token_lifetime_seconds() -> int:
    return settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES * 60


def create_access_token(
    user_id: int,
    email: str,
    role: str,
    tenant_id: int,
    expires_delta: Optional[timedelta] = None
) -> str:
    """Create JWT access token with user claims"""
    issued_at = utcnow()
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.JWT_ACCESS_TOKEN_EXPIRE_MINUTES)

    to_encode = {
        "sub": str(user_id),
        "email": email,
        "role": role,
        "tenant_id": tenant_id,
        "exp": issued_at + expires_delta,
        "iat": issued_at,
    }
    return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)


def decode_access_token(token: Optional[str]) -> Dict:
    """Decode and validate a JWT, raising AuthError with the failure reason"""
    if not token:
        raise AuthError("Token de acesso não fornecido", reason="missing")
    try:
        payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
    except ExpiredSignatureError:
        raise AuthError("Token expirado", reason="expired")
    except JWTError:
        raise AuthError("Token inválido", reason="invalid")

    if payload.get("sub") is None or payload.get("tenant_id") is None:
        raise AuthError("Token inválido", reason="invalid")
    return payload
