from fastapi import Depends
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError
from typing import Optional
import logging

from torneos.db import Database, get_db
from torneos.repositories.user_repository import UserRepository
from torneos.services.auth_service import decode_access_token
from torneos.utils.errors import AuthenticationError, ForbiddenError
from torneos.utils.permissions import principal_role

logger = logging.getLogger(__name__)

security = HTTPBearer(auto_error=False)

async def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    db: Database = Depends(get_db),
):
    """Resolve the bearer token to the user row (with ``rol_nombre``)."""
    if credentials is None:
        raise AuthenticationError("Authentication token not provided")

    try:
        payload = decode_access_token(credentials.credentials)
        user_id = int(payload.get("sub"))
    except (JWTError, TypeError, ValueError):
        logger.debug("Rejected bearer token")
        raise AuthenticationError("Invalid or expired token")

    user = await UserRepository(db).find_by_id(user_id)
    if user is None:
        raise AuthenticationError("Invalid or expired token")

    if not user.get("activo", True):
        raise ForbiddenError("User account is inactive")

    return user

def require_roles(allowed_roles):
    allowed = frozenset(allowed_roles)

    async def role_checker(current_user: dict = Depends(get_current_user)):
        if principal_role(current_user) not in allowed:
            raise ForbiddenError("Insufficient permissions")
        return current_user
    return role_checker

