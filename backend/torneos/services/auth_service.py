from passlib.context import CryptContext
from jose import JWTError, jwt
from datetime import datetime, timedelta
from typing import Any, Dict, Optional
import os

from torneos.repositories.user_repository import UserRepository
from torneos.utils.errors import AuthenticationError, ForbiddenError

pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto")
ALGORITHM = "HS256"


def _secret_key() -> str:
    return os.getenv("SECRET_KEY", "testing_secret_key_for_development_only")


def verify_password(plain_password: str, hashed_password: str) -> bool:
    return pwd_context.verify(plain_password, hashed_password)

def hash_password(password: str) -> str:
    return pwd_context.hash(password)

def create_access_token(data: dict, expires_minutes: Optional[int] = None) -> str:
    if expires_minutes is None:
        expires_minutes = int(os.getenv("ACCESS_TOKEN_EXPIRE_MINUTES", "60"))

    to_encode = data.copy()
    expire = datetime.utcnow() + timedelta(minutes=expires_minutes)
    to_encode.update({"exp": expire, "type": "access"})
    return jwt.encode(to_encode, _secret_key(), algorithm=ALGORITHM)

def decode_access_token(token: str) -> dict:
    payload = jwt.decode(token, _secret_key(), algorithms=[ALGORITHM])
    if payload.get("type") != "access":
        raise JWTError("Invalid token type")
    return payload


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """The user row without its password hash."""
    return {k: v for k, v in user.items() if k != "password_hash"}


async def authenticate(users: UserRepository, email: str, password: str) -> Dict[str, Any]:
    """
    Check credentials and return the user row.

    Unknown emails and wrong passwords get the same message so the response
    does not reveal which accounts exist.
    """
    user = await users.find_by_email(email)
    if not user:
        raise AuthenticationError("Invalid credentials")

    if not user.get("activo", True):
        raise ForbiddenError("User is inactive. Contact the administrator")

    if not verify_password(password, user["password_hash"]):
        raise AuthenticationError("Invalid credentials")

    return user
