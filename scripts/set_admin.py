"""Script to grant admin rights to a user by identity-provider UID."""
import sys
import os

# Add parent directory to path
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from inventory_hub.database import SessionLocal, engine, Base
from inventory_hub.models import User


def set_admin(uid, email=None):
    """Grant admin rights to ``uid``, creating the user record if needed."""
    # Create tables
    Base.metadata.create_all(bind=engine)

    db = SessionLocal()
    try:
        user = db.query(User).filter(User.uid == uid).first()
        if user is None:
            if not email:
                print(f"No user record for {uid}; pass an email to create one.")
                return 1
            user = User(uid=uid, email=email)
            db.add(user)
            print(f"Created user record for {email}")

        if user.is_admin:
            print(f"User {uid} is already an admin")
            return 0

        user.is_admin = True
        user.is_blocked = False
        db.commit()
        print(f"User {uid} is now an admin")
        return 0
    finally:
        db.close()


if __name__ == "__main__":
    if len(sys.argv) < 2:
        print("Usage: python scripts/set_admin.py USER_UID [USER_EMAIL]")
        sys.exit(2)
    sys.exit(set_admin(sys.argv[1], sys.argv[2] if len(sys.argv) > 2 else None))
