import argparse
from sqlalchemy import select
from sqlalchemy.orm import Session

from branch_api.core.db import SessionLocal, Base, engine
from branch_api.services.auth_service import create_user
from branch_api.schemas.user import UserCreate
from branch_api.models.user import User, UserRole


def main():
    parser = argparse.ArgumentParser(description="Create a branch administrator")
    parser.add_argument("email")
    parser.add_argument("password")
    parser.add_argument("--name", default="Branch Admin")
    args = parser.parse_args()

    Base.metadata.create_all(bind=engine)
    db: Session = SessionLocal()
    try:
        existing = db.scalars(select(User).where(User.email == args.email)).first()
        if existing:
            print("Admin already exists")
            return
        user = create_user(
            db,
            UserCreate(name=args.name, email=args.email, password=args.password, role=UserRole.ADMIN, is_active=True),
        )
        print(f"Created admin {user.email}")
    finally:
        db.close()


if __name__ == "__main__":
    main()
