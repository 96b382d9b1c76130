"""
Create a confirmed user with a role (e.g. the first super admin). Run from project root:
  python -m app.scripts.create_user FIRST LAST EMAIL PHONE PASSWORD [role]
Example:
  python -m app.scripts.create_user Ada Admin admin@example.org +254700000001 your-secure-password super_admin

Roles must exist; run python -m app.scripts.seed_rbac first.
"""
import argparse
import sys

from sqlalchemy import or_, select

from app.core.config import get_settings
from app.core.database import build_engine, build_session_factory
from app.core.security import (
    CONFIRMATION_CODE_LENGTH,
    PASSWORD_MAX_LEN,
    PASSWORD_MIN_LEN,
    USER_ID_LENGTH,
    generate_code,
    hash_password,
)
from app.models import User
from app.services.permissions import assign_role, get_role


def main() -> int:
    parser = argparse.ArgumentParser(description="Create a confirmed user with a role.")
    parser.add_argument("first_name")
    parser.add_argument("last_name")
    parser.add_argument("email")
    parser.add_argument("phone_number")
    parser.add_argument("password", help=f"Password ({PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} chars)")
    parser.add_argument("role", nargs="?", default="super_admin")
    args = parser.parse_args()

    if not (PASSWORD_MIN_LEN <= len(args.password) <= PASSWORD_MAX_LEN):
        print(
            f"Password must be {PASSWORD_MIN_LEN}-{PASSWORD_MAX_LEN} characters.",
            file=sys.stderr,
        )
        return 1

    session_factory = build_session_factory(build_engine(get_settings()))
    db = session_factory()
    try:
        role = get_role(db, args.role)
        if role is None:
            print(f"Role '{args.role}' does not exist. Run seed_rbac first.", file=sys.stderr)
            return 1
        existing = db.execute(
            select(User.id).where(
                or_(User.email == args.email, User.phone_number == args.phone_number)
            )
        ).first()
        if existing:
            print("A user with this email or phone number already exists.", file=sys.stderr)
            return 1
        user = User(
            user_id=generate_code(USER_ID_LENGTH),
            first_name=args.first_name,
            last_name=args.last_name,
            email=args.email,
            phone_number=args.phone_number,
            role=role.role_name,
            password_hash=hash_password(args.password),
            confirmation_code=generate_code(CONFIRMATION_CODE_LENGTH),
            is_confirmed=True,
        )
        db.add(user)
        db.flush()
        assign_role(db, user.id, role)
        db.commit()
        print(f"Created user '{args.email}' ({user.user_id}) with role '{role.role_name}'.")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    sys.exit(main())
