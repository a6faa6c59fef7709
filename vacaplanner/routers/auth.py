from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.orm import Session
import logging

from vacaplanner.core.config import settings
from vacaplanner.core.limiter import limiter
from vacaplanner.database import get_db
from vacaplanner.models.user import User
from vacaplanner.routers.auth_deps import get_current_user
from vacaplanner.schemas.auth import (
    LoginRequest,
    RegisterRequest,
    RegisterResponse,
    Token,
    UserResponse,
)
from vacaplanner.services.audit import AuditService
from vacaplanner.services.user_service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
@limiter.limit(settings.auth_rate_limit)
def register(request: Request, payload: RegisterRequest, db: Session = Depends(get_db)):
    user, is_admin = UserService(db).register(payload)
    return RegisterResponse(
        message="Utente registrato con successo",
        user=UserResponse.model_validate(user),
        is_admin=is_admin,
    )


@router.post("/auth/login", response_model=Token)
@limiter.limit(settings.auth_rate_limit)
def login(request: Request, login_data: LoginRequest, db: Session = Depends(get_db)):
    # JSON body rather than form-data for frontend compatibility
    service = UserService(db)
    user = service.authenticate(login_data.email, login_data.password)

    AuditService.log(
        db,
        action="login",
        entity_type="user",
        entity_id=user.id,
        user_id=user.id,
        user_role=user.role,
        details={"email": user.email},
    )
    service.commit_or_rollback()
    db.refresh(user)

    return Token(
        access_token=service.issue_token(user),
        user=UserResponse.model_validate(user),
    )


@router.get("/auth/me", response_model=UserResponse)
def get_me(current_user: User = Depends(get_current_user)):
    return current_user
