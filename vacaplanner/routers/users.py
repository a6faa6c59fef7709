from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from vacaplanner.database import get_db
from vacaplanner.models.user import User
from vacaplanner.routers.auth_deps import get_current_user
from vacaplanner.schemas.auth import (
    BalanceResponse,
    ProfileUpdate,
    RoleUpdate,
    RoleUpdateResponse,
    UserResponse,
)
from vacaplanner.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.get("", response_model=List[UserResponse])
def list_users(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UserService(db).list_users()


@router.patch("/me", response_model=UserResponse)
def update_profile(
    update_data: ProfileUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    """Update the caller's profile and balance totals."""
    return UserService(db).update_profile(current_user, update_data)


@router.get("/me/balance", response_model=BalanceResponse)
def get_balance(
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return UserService(db).balance(current_user)


@router.patch("/{user_id}/role", response_model=RoleUpdateResponse)
def change_role(
    user_id: int,
    payload: RoleUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    target = UserService(db).change_role(current_user, user_id, payload.role)
    return RoleUpdateResponse(success=True, role=target.role)
