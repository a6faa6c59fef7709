from typing import Any, Dict, Optional


class AppException(Exception):
    """Domain failure that the API turns into {"error": message, "code": error_code}."""

    status_code: int = 400
    error_code: str = "BAD_REQUEST"
    default_message: str = "Richiesta non valida"

    def __init__(
        self,
        message: Optional[str] = None,
        status_code: Optional[int] = None,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None,
    ):
        self.message = message or self.default_message
        if status_code is not None:
            self.status_code = status_code
        if error_code is not None:
            self.error_code = error_code
        self.details = details
        super().__init__(self.message)


class AuthenticationError(AppException):
    status_code = 401
    error_code = "AUTHENTICATION_FAILED"
    default_message = "Non autorizzato"


class AccessDeniedError(AppException):
    status_code = 403
    error_code = "ACCESS_DENIED"
    default_message = "Permessi insufficienti"


class NotFoundError(AppException):
    status_code = 404
    error_code = "NOT_FOUND"
    default_message = "Risorsa non trovata"


class BusinessValidationError(AppException):
    status_code = 400
    error_code = "VALIDATION_FAILED"
    default_message = "Dati non validi"


class ConflictError(AppException):
    """Request was already processed, or the owner's balance moved underneath us."""
    status_code = 409
    error_code = "CONFLICT"
    default_message = "Conflitto di aggiornamento"
