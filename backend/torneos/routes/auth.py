from fastapi import APIRouter, Depends

from torneos.db import Database, get_db
from torneos.repositories.user_repository import UserRepository
from torneos.schemas.auth import LoginResponse, UserLogin
from torneos.services.auth_service import authenticate, create_access_token, public_user
from torneos.utils.errors import AuthenticationError, ForbiddenError
from torneos.utils.logger import EventTypes, log_event

router = APIRouter()

@router.post("/login", response_model=LoginResponse)
async def login(user_login: UserLogin, db: Database = Depends(get_db)):
    try:
        user = await authenticate(UserRepository(db), user_login.email, user_login.password)
    except (AuthenticationError, ForbiddenError) as e:
        await log_event(db, EventTypes.AUTH_FAILED, {"email": user_login.email, "reason": e.message})
        raise

    access_token = create_access_token({"sub": str(user["id"])})

    await log_event(db, EventTypes.AUTH_SUCCESS, {"email": user["email"]}, user_id=user["id"])

    return {
        "success": True,
        "message": "Login successful",
        "data": {
            "usuario": public_user(user),
            "access_token": access_token,
            "token_type": "bearer",
        },
    }
