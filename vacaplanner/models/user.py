"""
User Model.
Balance counters are kept in integer fixed-point units: vacation usage in
half days, personal-leave usage in minutes.
"""
from sqlalchemy import Column, Integer, String, Enum, DateTime, Date, Text
from sqlalchemy.sql import func
from sqlalchemy.orm import relationship
import enum
from vacaplanner.database import Base


class UserRole(str, enum.Enum):
    """
    - ADMIN: full access, first registered account
    - MANAGER: approves requests and manages roles
    - USER: self-service access
    """
    ADMIN = "ADMIN"
    MANAGER = "MANAGER"
    USER = "USER"


ELEVATED_ROLES = (UserRole.ADMIN, UserRole.MANAGER)


class User(Base):
    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    email = Column(String(255), unique=True, index=True, nullable=False)
    hashed_password = Column(String(255), nullable=False)
    name = Column(String(255), nullable=False)
    first_name = Column(String(255), nullable=True)
    last_name = Column(String(255), nullable=True)
    date_of_birth = Column(Date, nullable=True)

    role = Column(Enum(UserRole), default=UserRole.USER, nullable=False)

    # Profile
    avatar_url = Column(Text, nullable=True)
    job_title = Column(String(255), nullable=True)
    department = Column(String(255), nullable=True)
    bio = Column(Text, nullable=True)
    phone_number = Column(String(50), nullable=True)

    # Balance counters
    vacation_days_total = Column(Integer, default=22, nullable=False)
    vacation_half_days_used = Column(Integer, default=0, nullable=False)
    personal_hours_total = Column(Integer, default=32, nullable=False)
    personal_minutes_used = Column(Integer, default=0, nullable=False)

    version = Column(Integer, nullable=False, default=1)

    created_at = Column(DateTime(timezone=True), server_default=func.now())
    updated_at = Column(DateTime(timezone=True), server_default=func.now(), onupdate=func.now())

    leave_requests = relationship(
        "LeaveRequest",
        foreign_keys="[LeaveRequest.user_id]",
        back_populates="user",
        cascade="all, delete-orphan",
    )

    # Concurrent balance updates bump the version; a stale write raises StaleDataError
    __mapper_args__ = {"version_id_col": version}

    def __repr__(self):
        return f"<User {self.email} ({self.role.value})>"

    @property
    def is_elevated(self) -> bool:
        """Check if user can approve requests and change roles."""
        return self.role in ELEVATED_ROLES

    @property
    def vacation_days_used(self) -> float:
        return (self.vacation_half_days_used or 0) / 2

    @property
    def vacation_days_remaining(self) -> float:
        return self.vacation_days_total - self.vacation_days_used

    @property
    def personal_hours_used(self) -> float:
        return (self.personal_minutes_used or 0) / 60

    @property
    def personal_hours_remaining(self) -> float:
        return self.personal_hours_total - self.personal_hours_used
