from datetime import date, datetime
from enum import Enum
from typing import Any, Optional

from sqlalchemy.orm import Session

from vacaplanner.models.audit_log import AuditLog
from vacaplanner.services.base import BaseService


def to_json_safe(value: Any) -> Any:
    """Reduce enums, dates and pydantic models to plain JSON values."""
    if hasattr(value, "model_dump"):
        return value.model_dump(mode="json")
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    if isinstance(value, dict):
        return {key: to_json_safe(item) for key, item in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json_safe(item) for item in value]
    return value


class AuditService(BaseService):
    """Append-only trail. Entries join the caller's transaction and are never committed here."""

    def log_action(
        self,
        action: str,
        entity_type: str,
        entity_id: Optional[int],
        user_id: Optional[int],
        user_role: Any,
        details: dict,
        before_state: Optional[dict] = None,
        after_state: Optional[dict] = None,
    ) -> AuditLog:
        entry = AuditLog(
            action=action,
            entity_type=entity_type,
            entity_id=entity_id,
            user_id=user_id,
            user_role=to_json_safe(user_role),
            details=to_json_safe(details),
            before_state=to_json_safe(before_state),
            after_state=to_json_safe(after_state),
        )
        self.db.add(entry)
        return entry

    @staticmethod
    def log(db: Session, *args, **kwargs) -> AuditLog:
        return AuditService(db).log_action(*args, **kwargs)
