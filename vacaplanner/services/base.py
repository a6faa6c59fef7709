import logging
from sqlalchemy.orm import Session


class BaseService:
    """Common plumbing for services that work on a request-scoped session."""

    def __init__(self, db: Session):
        self.db = db
        self._logger = logging.getLogger(self.__class__.__module__)

    def log_info(self, message: str, **extra):
        self._logger.info(message, extra=extra or None)

    def log_warning(self, message: str, **extra):
        self._logger.warning(message, extra=extra or None)

    def commit_or_rollback(self):
        """Commit the unit of work; on failure roll back and re-raise."""
        try:
            self.db.commit()
        except Exception:
            self.db.rollback()
            raise
