"""
Create a user (e.g. first admin). Run from project root:
  python -m tasktracker.scripts.create_user EMAIL PASSWORD FIRST_NAME LAST_NAME [role]
Example:
  python -m tasktracker.scripts.create_user admin@example.com your-secure-password Ada Admin admin
"""
import argparse
import sys

from tasktracker.core.database import SessionLocal
from tasktracker.core.errors import Conflict
from tasktracker.core.security import (
    NAME_MAX_LEN,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
)
from tasktracker.models.user import USER_ROLES
from tasktracker.services.users import create_user


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Create a Task Tracker user.")
    parser.add_argument("email", help="Email address (unique)")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("first_name", help="First name")
    parser.add_argument("last_name", help="Last name")
    parser.add_argument("role", nargs="?", default="user", choices=list(USER_ROLES))
    args = parser.parse_args(argv)

    email = args.email.strip().lower()
    if "@" not in email or len(email) > 255:
        print("Invalid email address.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1
    for label, value in (("First name", args.first_name), ("Last name", args.last_name)):
        if not value.strip() or len(value) > NAME_MAX_LEN:
            print(f"{label} must be 1-{NAME_MAX_LEN} characters.", file=sys.stderr)
            return 1

    db = SessionLocal()
    try:
        user = create_user(
            db,
            email=email,
            password=args.password,
            first_name=args.first_name.strip(),
            last_name=args.last_name.strip(),
            role=args.role,
        )
    except Conflict:
        print(f"User '{email}' already exists.", file=sys.stderr)
        return 1
    finally:
        db.close()
    print(f"Created user '{user.email}' (id={user.id}) with role '{user.role}'.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
