# src/plume/scripts/tokens.py
"""
Issue a bearer token for a user, creating the account when it is missing.

Accounts are managed outside the API, so this is how authors, administrators
and signed-in readers obtain credentials:

    plume-token editor@example.com --name "Editor" --admin
"""

from __future__ import annotations

import argparse
import sys

from sqlalchemy.orm import Session

from plume.core.security import create_access_token
from plume.db.session import SessionLocal
from plume.models import User


def get_or_create_user(db: Session, email: str, name: str | None, is_admin: bool) -> User:
    """Return the user with ``email``, creating it when absent.

    An existing account is promoted when ``is_admin`` is set; it is never demoted.
    """
    email = email.strip().lower()
    user = db.query(User).filter(User.email == email).first()
    if user is None:
        user = User(email=email, name=name or email.split("@", 1)[0], is_admin=is_admin)
        db.add(user)
        print(f"[plume-token] created user {email}", file=sys.stderr)
    elif is_admin and not user.is_admin:
        user.is_admin = True
        print(f"[plume-token] promoted {email} to admin", file=sys.stderr)
    db.commit()
    db.refresh(user)
    return user


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(description="Print a bearer token for a Plume user")
    parser.add_argument("email", help="Account email; the account is created if missing")
    parser.add_argument("--name", default=None, help="Display name for a new account")
    parser.add_argument("--admin", action="store_true", help="Grant administrator rights")
    args = parser.parse_args(argv)

    db = SessionLocal()
    try:
        user = get_or_create_user(db, args.email, args.name, args.admin)
        print(create_access_token(user.id))
    finally:
        db.close()


if __name__ == "__main__":
    main()
