# Models package
# Importing modules here ensures they are registered with SQLAlchemy Base
from . import user, leave_request, audit_log

# Explicit class exports for cleaner imports
from .user import User, UserRole
from .leave_request import LeaveRequest, LeaveStatus, LeaveType
from .audit_log import AuditLog

__all__ = [
    "User",
    "UserRole",
    "LeaveRequest",
    "LeaveStatus",
    "LeaveType",
    "AuditLog",
]
