#!/usr/bin/env python3
"""Change a user's role.

Usage:
    python scripts/promote_admin.py [username] [--role admin|staff|user]
    python scripts/promote_admin.py --list

If no username is provided, promotes the first user found.
"""
import argparse
import sys
import os

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from vcat.database import get_session_local, init_db
from vcat.models.user import User, UserRole, AVAILABLE_ROLES


def promote_user(username: str = None, role: UserRole = UserRole.ADMIN):
    """Give a user the requested role."""
    init_db()

    SessionLocal = get_session_local()
    db = SessionLocal()

    try:
        if username:
            user = db.query(User).filter(User.username == username).first()
            if not user:
                print(f"Error: User '{username}' not found")
                return False
        else:
            # Get first user
            user = db.query(User).order_by(User.created_at.asc()).first()
            if not user:
                print("Error: No users found in database")
                return False

        if user.role == role:
            print(f"User '{user.username}' already has role {role.value}")
            return True

        old_role = user.role.value
        user.role = role
        db.commit()

        print(f"Successfully changed '{user.username}' from {old_role} to {role.value}")
        return True

    finally:
        db.close()


def list_users():
    """List all users."""
    SessionLocal = get_session_local()
    db = SessionLocal()

    try:
        users = db.query(User).order_by(User.created_at.asc()).all()
        if not users:
            print("No users found")
            return

        print("\nAll users:")
        print("-" * 60)
        for user in users:
            print(f"  {user.username} ({user.email}) - {user.role.value} {'[ACTIVE]' if user.is_active else '[INACTIVE]'}")
        print("-" * 60)

    finally:
        db.close()


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Change a user's role")
    parser.add_argument("username", nargs="?")
    parser.add_argument("--role", choices=AVAILABLE_ROLES, default=UserRole.ADMIN.value)
    parser.add_argument("--list", action="store_true", help="only list users")
    args = parser.parse_args()

    if args.list:
        list_users()
    else:
        ok = promote_user(args.username, UserRole(args.role))
        list_users()
        sys.exit(0 if ok else 1)
