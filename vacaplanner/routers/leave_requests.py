from datetime import date
from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from vacaplanner.database import get_db
from vacaplanner.models.leave_request import LeaveStatus
from vacaplanner.models.user import User
from vacaplanner.routers.auth_deps import get_current_user
from vacaplanner.schemas.common import MessageResponse
from vacaplanner.schemas.leave import LeaveRequestCreate, LeaveRequestResponse, LeaveReview
from vacaplanner.services.leave_service import LeaveService

router = APIRouter(prefix="/leave-requests", tags=["leave-requests"])


@router.get("", response_model=List[LeaveRequestResponse])
def list_leave_requests(
    user_id: Optional[int] = Query(default=None, alias="userId"),
    status_filter: Optional[LeaveStatus] = Query(default=None, alias="status"),
    date_from: Optional[date] = Query(default=None, alias="from"),
    date_to: Optional[date] = Query(default=None, alias="to"),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeaveService(db).list_requests(
        user_id=user_id, status=status_filter, date_from=date_from, date_to=date_to
    )


@router.post("", response_model=LeaveRequestResponse, status_code=status.HTTP_201_CREATED)
def create_leave_request(
    payload: LeaveRequestCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeaveService(db).create_request(current_user, payload)


@router.patch("/{request_id}", response_model=LeaveRequestResponse)
def review_leave_request(
    request_id: int,
    review: LeaveReview,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return LeaveService(db).review_request(request_id, current_user, review.status)


@router.delete("/{request_id}", response_model=MessageResponse)
def delete_leave_request(
    request_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    LeaveService(db).delete_request(request_id, current_user)
    return MessageResponse(message="Richiesta eliminata con successo")
