import re
from datetime import date, datetime
from typing import Dict, List, Optional

from pydantic import Field, field_validator, model_validator

from vacaplanner.models.leave_request import LeaveStatus, LeaveType
from vacaplanner.schemas.auth import UserSummary
from vacaplanner.schemas.common import CamelModel

CLOCK_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")


class LeaveRequestCreate(CamelModel):
    start_date: date
    end_date: date
    type: LeaveType
    reason: Optional[str] = None
    handover_notes: Optional[str] = None
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    @field_validator("start_time", "end_time")
    @classmethod
    def validate_clock(cls, value: Optional[str]) -> Optional[str]:
        if value in (None, ""):
            return None
        if not CLOCK_PATTERN.match(value):
            raise ValueError("Orario non valido (formato HH:MM)")
        return value

    @model_validator(mode="after")
    def check_range(self):
        if self.end_date < self.start_date:
            raise ValueError("La data di fine precede la data di inizio")
        return self


class LeaveReview(CamelModel):
    status: LeaveStatus


class LeaveRequestResponse(CamelModel):
    id: int
    user_id: int
    start_date: date
    end_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None
    type: LeaveType
    status: LeaveStatus
    reason: Optional[str] = None
    handover_notes: Optional[str] = None
    reviewed_by: Optional[int] = None
    reviewed_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    user: Optional[UserSummary] = None
    reviewer: Optional[UserSummary] = None


class HolidayResponse(CamelModel):
    day: date = Field(alias="date")
    name: str
    local_name: str


class UserLeaveTotals(CamelModel):
    user_id: int
    name: str
    vacation: float = 0
    sick: float = 0
    personal: float = 0


class MonthlyLeaveTotals(CamelModel):
    month: int
    vacation: float = 0
    sick: float = 0
    personal: float = 0


class UpcomingLeave(CamelModel):
    id: int
    user_id: int
    name: str
    type: LeaveType
    start_date: date
    end_date: date
    days: float
    half_day_label: Optional[str] = None
    holidays: List[str] = Field(default_factory=list)


class AnalyticsSummary(CamelModel):
    year: int
    by_user: List[UserLeaveTotals] = Field(default_factory=list)
    by_month: List[MonthlyLeaveTotals] = Field(default_factory=list)
    totals: Dict[str, float] = Field(default_factory=dict)
    upcoming: List[UpcomingLeave] = Field(default_factory=list)
