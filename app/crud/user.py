from typing import Optional
from uuid import UUID
from sqlalchemy.orm import Session
from app.models.user import User, Role


def get_by_email(db: Session, email: str) -> Optional[User]:
    return db.query(User).filter(User.email == email).first()


def get_by_id(db: Session, user_id: UUID) -> Optional[User]:
    return db.query(User).filter(User.id == user_id).first()


def create(db: Session, email: str) -> User:
    user = User(email=email)

    db.add(user)
    db.commit()
    db.refresh(user)

    return user


def assign_role(user: User, role: Role) -> None:
    """
    Set the user's role if it has none yet. Does not commit; the caller
    commits together with the profile that triggered the assignment.
    """
    if user.role is None:
        user.role = role
