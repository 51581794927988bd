"""
Activate an account once its email has been verified out of band:
  python -m biblioteca_auth.scripts.activate_user USERNAME
"""
import argparse
import logging
import sys

from biblioteca_auth.core.config import settings
from biblioteca_auth.core.database import SessionLocal
from biblioteca_auth.core.logging import configure_logging
from biblioteca_auth.models import UserStatus
from biblioteca_auth.services.store import SqlCredentialStore

logger = logging.getLogger(__name__)


def activate(store: SqlCredentialStore, username: str) -> bool:
    """Set the user's status to ACTIVE. Returns False if no such user exists."""
    with store.transaction():
        user = store.get_user_by_username(username)
        if user is None:
            return False
        user.status = int(UserStatus.ACTIVE)
        store.save_user(user)
    logger.info("Activated user %s", username)
    return True


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Activate a library user account.")
    parser.add_argument("username", help="Username to activate")
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    db = SessionLocal()
    try:
        if not activate(SqlCredentialStore(db), args.username.strip()):
            print(f"User '{args.username}' not found.", file=sys.stderr)
            return 1
        print(f"User '{args.username}' is now active.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
