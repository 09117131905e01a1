"""
Grant (or revoke) the admin capability by email.
Usage: python -m adboard.scripts.promote_admin user@example.com [--revoke]
"""
import argparse
import sys

from adboard.database import SessionLocal, ensure_tables_exist
from adboard.repos.user_repo import get_by_email, update


def main():
    parser = argparse.ArgumentParser(description="Grant or revoke admin for a registered user.")
    parser.add_argument("email", help="Email of a registered user")
    parser.add_argument("--revoke", action="store_true", help="Remove admin instead of granting it")
    args = parser.parse_args()

    email = args.email.strip()
    ensure_tables_exist()
    db = SessionLocal()
    try:
        user = get_by_email(db, email)
        if not user:
            print(f"User not found: {email}")
            sys.exit(1)
        update(db, user.id, is_admin=not args.revoke)
        print(f"{'Revoked admin from' if args.revoke else 'Promoted'} {email}{'' if args.revoke else ' to admin'}.")
    finally:
        db.close()


if __name__ == "__main__":
    main()
