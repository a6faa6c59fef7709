"""
Bearer-token authentication for API routes.

The token only names the account. The user row is reloaded on every request,
so balances and role are read from the database and never from the token.
"""
import logging
from typing import Optional

from fastapi import Depends
from fastapi.security import OAuth2PasswordBearer
from sqlalchemy.orm import Session

from vacaplanner.core.exceptions import AuthenticationError
from vacaplanner.database import get_db
from vacaplanner.models.user import User
from vacaplanner.services import auth as auth_service

logger = logging.getLogger(__name__)

oauth2_scheme = OAuth2PasswordBearer(tokenUrl="/api/auth/login", auto_error=False)


def _subject_id(payload: dict) -> Optional[int]:
    try:
        return int(payload.get("sub"))
    except (TypeError, ValueError):
        return None


def get_current_user(token: Optional[str] = Depends(oauth2_scheme), db: Session = Depends(get_db)) -> User:
    if not token:
        raise AuthenticationError()

    payload = auth_service.decode_access_token(token)
    if payload is None:
        logger.warning("Rejected bearer token", extra={"reason": "invalid"})
        raise AuthenticationError()
    if payload.get("error") == "TOKEN_EXPIRED":
        logger.info("Rejected bearer token", extra={"reason": "expired"})
        raise AuthenticationError("Sessione scaduta")
    if payload.get("type") != "access":
        logger.warning("Rejected bearer token", extra={"reason": "wrong_type"})
        raise AuthenticationError()

    user_id = _subject_id(payload)
    user = db.get(User, user_id) if user_id is not None else None
    if user is None:
        logger.warning("Rejected bearer token", extra={"reason": "unknown_subject"})
        raise AuthenticationError()
    return user
