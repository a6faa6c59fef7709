from typing import List, Tuple

from vacaplanner.core.config import settings
from vacaplanner.core.exceptions import (
    AccessDeniedError,
    AuthenticationError,
    BusinessValidationError,
    NotFoundError,
)
from vacaplanner.models.user import User, UserRole
from vacaplanner.schemas.auth import BalanceResponse, ProfileUpdate, RegisterRequest
from vacaplanner.services import auth as auth_service
from vacaplanner.services.audit import AuditService
from vacaplanner.services.base import BaseService


class UserService(BaseService):

    def register(self, payload: RegisterRequest) -> Tuple[User, bool]:
        """Create an account. The first account ever created becomes ADMIN."""
        email = payload.email.strip().lower()
        if self.db.query(User).filter(User.email == email).first():
            raise BusinessValidationError("Esiste già un account con questa email")

        if payload.first_name and payload.last_name and payload.date_of_birth:
            duplicate = self.db.query(User).filter(
                User.first_name == payload.first_name,
                User.last_name == payload.last_name,
                User.date_of_birth == payload.date_of_birth,
            ).first()
            if duplicate:
                raise BusinessValidationError("Esiste già un account con questi dati anagrafici")

        is_first_user = self.db.query(User).count() == 0
        user = User(
            email=email,
            hashed_password=auth_service.get_password_hash(payload.password),
            name=payload.display_name,
            first_name=payload.first_name,
            last_name=payload.last_name,
            date_of_birth=payload.date_of_birth,
            role=UserRole.ADMIN if is_first_user else UserRole.USER,
            vacation_days_total=settings.balances.vacation_days_total,
            vacation_half_days_used=0,
            personal_hours_total=settings.balances.personal_hours_total,
            personal_minutes_used=0,
        )
        self.db.add(user)
        self.db.flush()
        AuditService.log(
            self.db,
            action="register",
            entity_type="user",
            entity_id=user.id,
            user_id=user.id,
            user_role=user.role,
            details={"email": email, "is_admin": is_first_user},
        )
        self.commit_or_rollback()
        self.db.refresh(user)
        self.log_info("User registered", user_id=user.id, role=user.role.value)
        return user, is_first_user

    def authenticate(self, email: str, password: str) -> User:
        user = self.db.query(User).filter(User.email == email.strip().lower()).first()
        if not user or not auth_service.verify_password(password, user.hashed_password):
            self.log_warning("Failed login attempt", email=email)
            raise AuthenticationError("Email o password non corretti")
        return user

    def issue_token(self, user: User) -> str:
        return auth_service.create_access_token(
            data={"sub": str(user.id), "role": user.role.value}
        )

    def get_user(self, user_id: int) -> User:
        user = self.db.get(User, user_id)
        if not user:
            raise NotFoundError("Utente non trovato")
        return user

    def list_users(self) -> List[User]:
        return self.db.query(User).order_by(User.name).all()

    def update_profile(self, user: User, payload: ProfileUpdate) -> User:
        changes = payload.model_dump(exclude_unset=True)
        # The form sends an empty string to clear the avatar
        if "avatar_url" in changes and not changes["avatar_url"]:
            changes["avatar_url"] = None
        for field in ("name", "vacation_days_total", "personal_hours_total"):
            if field in changes and changes[field] is None:
                raise BusinessValidationError(f"Il campo {field} non può essere vuoto")

        for field, value in changes.items():
            setattr(user, field, value)
        self.commit_or_rollback()
        self.db.refresh(user)
        return user

    def change_role(self, actor: User, target_id: int, role: UserRole) -> User:
        if not actor.is_elevated:
            raise AccessDeniedError("Non autorizzato a modificare i ruoli")
        target = self.get_user(target_id)
        before = target.role
        target.role = role
        AuditService.log(
            self.db,
            action="change_role",
            entity_type="user",
            entity_id=target.id,
            user_id=actor.id,
            user_role=actor.role,
            details={"target": target.email},
            before_state={"role": before},
            after_state={"role": role},
        )
        self.commit_or_rollback()
        self.db.refresh(target)
        self.log_info("Role changed", target_id=target.id, role=role.value, actor_id=actor.id)
        return target

    def balance(self, user: User, refresh: bool = True) -> BalanceResponse:
        """Balance summary straight from the identity store."""
        if refresh:
            self.db.refresh(user)
        return BalanceResponse(
            user_id=user.id,
            vacation_days_total=user.vacation_days_total,
            vacation_days_used=user.vacation_days_used,
            vacation_days_remaining=user.vacation_days_remaining,
            personal_hours_total=user.personal_hours_total,
            personal_hours_used=user.personal_hours_used,
            personal_hours_remaining=user.personal_hours_remaining,
        )
