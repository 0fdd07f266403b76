"""
Create an admin account. Public signup refuses the ADMIN role, so this is the
only way to get one.

Run from project root:
  python scripts/create_admin.py

Override the defaults with ADMIN_USERNAME, ADMIN_PASSWORD, ADMIN_EMAIL and
ADMIN_PHONE in the environment (or .env).
"""
import os
import sys

sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from app.database import Base, SessionLocal, engine
from app.exceptions import DuplicateResourceError
import app.models  # noqa: F401
from app.schemas.user import UserSignupRequest
from app.services.users import UserService
from app.store import Store

# Default credentials (change if you want)
ADMIN_USERNAME = os.environ.get("ADMIN_USERNAME", "admin")
ADMIN_PASSWORD = os.environ.get("ADMIN_PASSWORD", "Password123!")
ADMIN_EMAIL = os.environ.get("ADMIN_EMAIL", "admin@spacefinders.demo")
ADMIN_PHONE = os.environ.get("ADMIN_PHONE", "5550000001")


def main():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        store = Store(db)
        data = UserSignupRequest(
            username=ADMIN_USERNAME,
            password=ADMIN_PASSWORD,
            email=ADMIN_EMAIL,
            phone=ADMIN_PHONE,
            role="ADMIN",
        )
        try:
            admin = UserService(store).add_user(data, allow_admin=True)
        except DuplicateResourceError as e:
            print(f"Admin not created: {e.message}")
            return
        store.commit()
        print(f"Created admin: {admin.username} (id={admin.id})")
        print(f"  password: {ADMIN_PASSWORD}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
