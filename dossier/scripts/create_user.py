"""
Create an account (e.g. first admin). Run from project root:
  python -m dossier.scripts.create_user USERNAME PASSWORD [role]
Example:
  python -m dossier.scripts.create_user admin your-secure-password admin
"""
import argparse
import sys

from dossier.core.database import SessionLocal
from dossier.core.security import PASSWORD_MAX_LEN, PASSWORD_MIN_LEN, hash_password
from dossier.storage import SqlStorage


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a Dossier account.")
    parser.add_argument("username", help="Username (1-255 chars)")
    parser.add_argument("password", help="Password (8-128 chars)")
    parser.add_argument("role", nargs="?", default="user", choices=["user", "admin"])
    args = parser.parse_args()

    username = args.username.strip()
    if not username or len(username) > 255:
        print("Invalid username length.", file=sys.stderr)
        return 1
    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print("Password must be 8-128 characters.", file=sys.stderr)
        return 1

    db = SessionLocal()
    try:
        storage = SqlStorage(db)
        if storage.get_user_by_username(username) is not None:
            print(f"User '{username}' already exists.", file=sys.stderr)
            return 1
        storage.create_user(
            username,
            hash_password(args.password),
            is_admin=args.role == "admin",
        )
        print(f"Created user '{username}' with role '{args.role}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
