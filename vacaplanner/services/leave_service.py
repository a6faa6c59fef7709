"""
Leave request workflow.

Status transitions and balance movements commit in a single transaction.
Rows touched by a review or deletion are read FOR UPDATE, and both the request
and the user row carry a version counter. A transition or balance write based
on a stale read raises StaleDataError, reported as 409, instead of silently
overwriting another writer's change.
"""
from datetime import date, datetime, timezone
from typing import List, Optional

from sqlalchemy.orm import joinedload
from sqlalchemy.orm.exc import StaleDataError

from vacaplanner.core.exceptions import (
    AccessDeniedError,
    BusinessValidationError,
    ConflictError,
    NotFoundError,
)
from vacaplanner.models.leave_request import LeaveRequest, LeaveStatus
from vacaplanner.models.user import User
from vacaplanner.schemas.leave import LeaveRequestCreate
from vacaplanner.services import balance_ledger
from vacaplanner.services.audit import AuditService
from vacaplanner.services.base import BaseService

CONCURRENT_UPDATE_MESSAGE = "La richiesta o il saldo sono stati modificati da un'altra operazione, riprovare"


def _request_state(leave: LeaveRequest) -> dict:
    return {
        "status": leave.status,
        "reviewed_by": leave.reviewed_by,
    }


def _balance_state(user: User) -> dict:
    return {
        "vacation_days_used": user.vacation_days_used,
        "personal_hours_used": user.personal_hours_used,
    }


class LeaveService(BaseService):

    def create_request(self, owner: User, payload: LeaveRequestCreate) -> LeaveRequest:
        # Schema validation already ran; re-check the ledger can price the request
        try:
            balance_ledger.compute_charge(
                payload.type, payload.start_date, payload.end_date,
                payload.start_time, payload.end_time,
            )
        except ValueError as e:
            raise BusinessValidationError("Dati non validi", details={"reason": str(e)})

        leave = LeaveRequest(
            user_id=owner.id,
            start_date=payload.start_date,
            end_date=payload.end_date,
            start_time=payload.start_time,
            end_time=payload.end_time,
            type=payload.type,
            reason=payload.reason,
            handover_notes=payload.handover_notes,
            status=LeaveStatus.PENDING,
        )
        self.db.add(leave)
        self.commit_or_rollback()
        self.db.refresh(leave)
        self.log_info("Leave request created", request_id=leave.id, owner_id=owner.id, leave_type=leave.type.value)
        return leave

    def get_request(self, request_id: int, for_update: bool = False) -> LeaveRequest:
        query = self.db.query(LeaveRequest).filter(LeaveRequest.id == request_id)
        if for_update:
            query = query.with_for_update()
        leave = query.first()
        if not leave:
            raise NotFoundError("Richiesta non trovata")
        return leave

    def list_requests(
        self,
        user_id: Optional[int] = None,
        status: Optional[LeaveStatus] = None,
        date_from: Optional[date] = None,
        date_to: Optional[date] = None,
    ) -> List[LeaveRequest]:
        query = self.db.query(LeaveRequest).options(
            joinedload(LeaveRequest.user),
            joinedload(LeaveRequest.reviewer),
        )
        if user_id is not None:
            query = query.filter(LeaveRequest.user_id == user_id)
        if status is not None:
            query = query.filter(LeaveRequest.status == status)
        # Overlap with the [date_from, date_to] window
        if date_to is not None:
            query = query.filter(LeaveRequest.start_date <= date_to)
        if date_from is not None:
            query = query.filter(LeaveRequest.end_date >= date_from)
        return query.order_by(LeaveRequest.created_at.desc(), LeaveRequest.id.desc()).all()

    def _lock_owner(self, leave: LeaveRequest) -> User:
        owner = (
            self.db.query(User)
            .filter(User.id == leave.user_id)
            .with_for_update()
            .first()
        )
        if not owner:
            raise NotFoundError("Utente non trovato")
        return owner

    def review_request(self, request_id: int, reviewer: User, status: LeaveStatus) -> LeaveRequest:
        if not reviewer.is_elevated:
            raise AccessDeniedError("Non autorizzato ad approvare o rifiutare richieste")
        if status not in (LeaveStatus.APPROVED, LeaveStatus.REJECTED):
            raise BusinessValidationError("Stato non valido")

        try:
            leave = self.get_request(request_id, for_update=True)
            if leave.status != LeaveStatus.PENDING:
                raise ConflictError("La richiesta è già stata elaborata")

            before = _request_state(leave)
            leave.status = status
            leave.reviewed_by = reviewer.id
            leave.reviewed_at = datetime.now(timezone.utc)

            details = {"owner_id": leave.user_id, "leave_type": leave.type}
            if status == LeaveStatus.APPROVED:
                owner = self._lock_owner(leave)
                charge = balance_ledger.charge_for_request(leave)
                balance_before = _balance_state(owner)
                balance_ledger.apply_charge(owner, charge)
                details.update({
                    "counter": charge.counter,
                    "units": charge.units,
                    "balance_before": balance_before,
                    "balance_after": _balance_state(owner),
                })

            AuditService.log(
                self.db,
                action="approve_leave" if status == LeaveStatus.APPROVED else "reject_leave",
                entity_type="leave_request",
                entity_id=leave.id,
                user_id=reviewer.id,
                user_role=reviewer.role,
                details=details,
                before_state=before,
                after_state=_request_state(leave),
            )
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            self.log_warning("Concurrent leave update detected", request_id=request_id)
            raise ConflictError(CONCURRENT_UPDATE_MESSAGE)
        except Exception:
            self.db.rollback()
            raise

        self.db.refresh(leave)
        self.log_info(
            "Leave request reviewed",
            request_id=leave.id,
            status=leave.status.value,
            reviewer_id=reviewer.id,
        )
        return leave

    def delete_request(self, request_id: int, caller: User) -> None:
        """
        Owner-only deletion, whatever the status.
        Deleting an APPROVED request gives its charge back, floored at zero.
        """
        try:
            leave = self.get_request(request_id, for_update=True)
            if leave.user_id != caller.id:
                raise AccessDeniedError("Non autorizzato a eliminare questa richiesta")

            details = {"leave_type": leave.type, "status": leave.status}
            if leave.status == LeaveStatus.APPROVED:
                owner = self._lock_owner(leave)
                charge = balance_ledger.charge_for_request(leave)
                balance_before = _balance_state(owner)
                balance_ledger.reverse_charge(owner, charge)
                details.update({
                    "counter": charge.counter,
                    "units": charge.units,
                    "balance_before": balance_before,
                    "balance_after": _balance_state(owner),
                })

            AuditService.log(
                self.db,
                action="delete_leave",
                entity_type="leave_request",
                entity_id=leave.id,
                user_id=caller.id,
                user_role=caller.role,
                details=details,
                before_state=_request_state(leave),
            )
            self.db.delete(leave)
            self.db.commit()
        except StaleDataError:
            self.db.rollback()
            self.log_warning("Concurrent leave update detected", request_id=request_id)
            raise ConflictError(CONCURRENT_UPDATE_MESSAGE)
        except Exception:
            self.db.rollback()
            raise

        self.log_info("Leave request deleted", request_id=request_id, owner_id=caller.id)
