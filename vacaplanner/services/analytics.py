from datetime import date
from typing import Dict, Optional

from vacaplanner.models.leave_request import LeaveRequest, LeaveStatus, LeaveType
from vacaplanner.models.user import User
from vacaplanner.schemas.leave import (
    AnalyticsSummary,
    MonthlyLeaveTotals,
    UpcomingLeave,
    UserLeaveTotals,
)
from vacaplanner.services.balance_ledger import calculate_days, half_day_label
from vacaplanner.services.base import BaseService
from vacaplanner.services.holidays import holidays_between

TYPE_FIELDS = {
    LeaveType.VACATION: "vacation",
    LeaveType.SICK: "sick",
    LeaveType.PERSONAL: "personal",
}


class AnalyticsService(BaseService):
    """Team-wide leave aggregates. Rejected requests are never counted."""

    def summary(self, year: int, today: Optional[date] = None) -> AnalyticsSummary:
        today = today or date.today()
        users = self.db.query(User).order_by(User.id).all()
        requests = (
            self.db.query(LeaveRequest)
            .filter(LeaveRequest.status != LeaveStatus.REJECTED)
            .order_by(LeaveRequest.start_date)
            .all()
        )

        by_user: Dict[int, UserLeaveTotals] = {
            u.id: UserLeaveTotals(user_id=u.id, name=u.name) for u in users
        }
        by_month = [MonthlyLeaveTotals(month=m) for m in range(1, 13)]
        upcoming = []

        for req in requests:
            days = calculate_days(req.type, req.start_date, req.end_date, req.start_time, req.end_time)
            field = TYPE_FIELDS[req.type]

            stat = by_user.get(req.user_id)
            if stat is not None:
                setattr(stat, field, getattr(stat, field) + days)

            # Trend is keyed on the month the absence starts in
            if req.start_date.year == year:
                month = by_month[req.start_date.month - 1]
                setattr(month, field, getattr(month, field) + days)

            if req.end_date >= today:
                partial_vacation = req.type == LeaveType.VACATION and req.is_partial_day
                upcoming.append(
                    UpcomingLeave(
                        id=req.id,
                        user_id=req.user_id,
                        name=req.user.name if req.user else "",
                        type=req.type,
                        start_date=req.start_date,
                        end_date=req.end_date,
                        days=days,
                        half_day_label=half_day_label(req.start_time) if partial_vacation else None,
                        holidays=[h.local_name for h in holidays_between(req.start_date, req.end_date)],
                    )
                )

        ranked = sorted(
            (s for s in by_user.values() if s.vacation or s.sick or s.personal),
            key=lambda s: s.vacation + s.sick + s.personal,
            reverse=True,
        )
        totals = {
            field: sum(getattr(s, field) for s in ranked)
            for field in TYPE_FIELDS.values()
        }
        return AnalyticsSummary(
            year=year,
            by_user=ranked,
            by_month=by_month,
            totals=totals,
            upcoming=upcoming,
        )
