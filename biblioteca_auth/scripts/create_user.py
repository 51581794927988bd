"""
Create a user through the registration flow. Run from project root:
  python -m biblioteca_auth.scripts.create_user NAME USERNAME EMAIL PASSWORD [--role N] [--active]
Example (first admin, already activated):
  python -m biblioteca_auth.scripts.create_user "Ana Admin" admin admin@example.org your-secure-password --role 3 --active
"""
import argparse
import sys

from pydantic import ValidationError as SchemaValidationError

from biblioteca_auth.core.config import settings
from biblioteca_auth.core.database import SessionLocal
from biblioteca_auth.core.logging import configure_logging
from biblioteca_auth.models import UserStatus
from biblioteca_auth.schemas.auth import RegisterRequest
from biblioteca_auth.services.auth import register_user
from biblioteca_auth.services.errors import ValidationError
from biblioteca_auth.services.roles import Role, role_name
from biblioteca_auth.services.store import SqlCredentialStore


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a library user.")
    parser.add_argument("name", help="Display name")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("email", help="Email address")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument(
        "--role",
        type=int,
        default=int(Role.STUDENT),
        choices=[int(r) for r in Role],
        help="1 = Estudiante, 2 = Bibliotecario, 3 = Admin",
    )
    parser.add_argument(
        "--active",
        action="store_true",
        help="Activate immediately instead of waiting for email verification",
    )
    args = parser.parse_args(argv)
    configure_logging(settings.LOG_LEVEL)

    try:
        body = RegisterRequest(
            name=args.name.strip(),
            username=args.username.strip(),
            email=args.email.strip(),
            password=args.password,
            role_id=args.role,
        )
    except SchemaValidationError as e:
        print(f"Invalid input: {e}", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        store = SqlCredentialStore(db)
        try:
            result = register_user(
                store,
                body,
                status=UserStatus.ACTIVE if args.active else UserStatus.INACTIVE,
            )
        except ValidationError as e:
            print(e.message, file=sys.stderr)
            return 1
        state = "active" if args.active else "inactive"
        print(
            f"Created user '{body.username}' (id={result.user_id}) "
            f"with role '{role_name(args.role)}', {state}."
        )
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
