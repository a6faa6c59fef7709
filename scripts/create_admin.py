import argparse
import logging
import os
import sys

# Run from the repository root
sys.path.append(os.getcwd())

from vacaplanner.core.config import settings
from vacaplanner.database import init_db, session_scope
from vacaplanner.models.user import User, UserRole
from vacaplanner.services.auth import get_password_hash

logging.basicConfig(level=logging.INFO, format="%(levelname)s: %(message)s")
logger = logging.getLogger(__name__)


def create_admin_user(email: str, password: str, name: str, role: UserRole = UserRole.ADMIN):
    """Create an elevated account, or promote the existing account with that email."""
    init_db()
    email = email.strip().lower()
    with session_scope() as db:
        existing_user = db.query(User).filter(User.email == email).first()
        if existing_user:
            if existing_user.role == role:
                logger.warning(f"'{email}' already has role {role.value}")
            else:
                existing_user.role = role
                logger.info(f"Promoted '{email}' to {role.value}")
            return

        db.add(User(
            email=email,
            hashed_password=get_password_hash(password),
            name=name,
            role=role,
            vacation_days_total=settings.balances.vacation_days_total,
            personal_hours_total=settings.balances.personal_hours_total,
        ))
        logger.info(f"Created {role.value} account '{email}'")


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Create or promote a VacaPlanner admin account")
    parser.add_argument("--email", default="admin@example.com")
    parser.add_argument("--password", default="Admin123!")
    parser.add_argument("--name", default="Amministratore")
    parser.add_argument("--role", choices=[UserRole.ADMIN.value, UserRole.MANAGER.value], default=UserRole.ADMIN.value)
    args = parser.parse_args()
    create_admin_user(args.email, args.password, args.name, UserRole(args.role))
