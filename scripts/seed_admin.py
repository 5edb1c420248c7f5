import argparse
import getpass
import os
import sys
from pathlib import Path

# Add project root to path
PROJECT_ROOT = Path(__file__).resolve().parents[1]
sys.path.insert(0, str(PROJECT_ROOT))

from app.core.exceptions import ConflictError, ValidationError
from app.core.logging_config import configure_logging
from app.database.db import get_session_factory
from app.models.enums import UserRole
from app.services.user_service import UserService


def seed_admin(email: str, name: str, password: str) -> int:
    db = get_session_factory()()
    try:
        service = UserService(db=db)
        existing = service.get_by_email(email)
        if existing is not None:
            print(f"User already exists: {existing.email} ({existing.role.value})")
            return 0

        user = service.register_user(email=email, name=name, password=password, role=UserRole.ADMIN)
        print(f"Created admin user: {user.email}")
        return 0
    except (ConflictError, ValidationError) as e:
        print(f"Could not create admin: {e}")
        return 1
    finally:
        db.close()


def main() -> int:
    parser = argparse.ArgumentParser(description="Create the first admin account.")
    parser.add_argument("--email", default=os.getenv("SEED_ADMIN_EMAIL"))
    parser.add_argument("--name", default=os.getenv("SEED_ADMIN_NAME", "Administrator"))
    args = parser.parse_args()

    if not args.email:
        parser.error("--email or SEED_ADMIN_EMAIL is required")

    password = os.getenv("SEED_ADMIN_PASSWORD") or getpass.getpass("Admin password: ")
    configure_logging()
    return seed_admin(args.email, args.name, password)


if __name__ == "__main__":
    sys.exit(main())
