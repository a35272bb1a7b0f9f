# ebee/core/security.py
import hashlib
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

from jose import JWTError, jwt
from passlib.context import CryptContext

from ebee.core.config import settings

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")


def hash_password(password: str) -> str:
    if settings.ENVIRONMENT == "testing":
        # Salted sha256 in a bcrypt-shaped string: $2b$<salt>$<digest>
        salt = secrets.token_hex(8)
        digest = hashlib.sha256(salt.encode("utf-8") + password.encode("utf-8")).hexdigest()
        return f"$2b${salt}${digest}"

    # bcrypt only looks at the first 72 bytes
    pw_bytes = password.encode("utf-8")[:72]
    return pwd_context.hash(pw_bytes)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    if settings.ENVIRONMENT == "testing" and hashed_password.startswith("$2b$"):
        parts = hashed_password.split("$")
        if len(parts) != 4:
            return False
        _, _tag, salt, digest = parts
        expected = hashlib.sha256(salt.encode("utf-8") + plain_password.encode("utf-8")).hexdigest()
        return secrets.compare_digest(digest, expected)

    pw_bytes = plain_password.encode("utf-8")[:72]
    return pwd_context.verify(pw_bytes, hashed_password)


def create_access_token(user, expires_delta: Optional[timedelta] = None) -> str:
    """Issue a JWT carrying the user's identity and role."""
    expire = datetime.now(timezone.utc) + (
        expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    )
    to_encode = {
        "sub": str(user.id),
        "id": user.id,
        "userType": user.user_type.value,
        "email": user.email,
        "name": user.name,
        "phoneNumber": user.phone_number,
        "isApproved": user.is_approved,
        "exp": expire,
    }
    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def verify_token(token: str) -> Optional[dict]:
    try:
        return jwt.decode(token, settings.SECRET_KEY, algorithms=[settings.ALGORITHM])
    except JWTError:
        return None


def generate_reset_token() -> str:
    """40 hex characters, same shape as the links already sent out."""
    return secrets.token_hex(20)
