# utils/user_store.py
"""
Data access for user accounts.

Both operations return plain values and signal failures with exceptions:
``DuplicateEmailError`` when the store rejects an email that is already
taken, ``StorageError`` for any other database fault.
"""
import logging
from typing import Optional

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from models.users import User

logger = logging.getLogger(__name__)


class StorageError(Exception):
    """Raised when the underlying database operation fails."""


class DuplicateEmailError(StorageError):
    """Raised when an account with the given email already exists."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email!r} already exists")
        self.email = email


def normalize_email(email: str) -> str:
    return email.strip().lower()


def create_user(db: Session, name: str, email: str, hashed_password: str, phone: Optional[str] = None) -> int:
    """Insert a user row and return its id."""
    user = User(
        name=name,
        email=normalize_email(email),
        password=hashed_password,
        phone=phone,
        is_admin=False,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as e:
        db.rollback()
        raise DuplicateEmailError(user.email) from e
    except SQLAlchemyError as e:
        db.rollback()
        logger.exception("Failed to insert user %s", user.email)
        raise StorageError("insert user failed") from e

    db.refresh(user)
    return user.id


def find_user_by_email(db: Session, email: str) -> Optional[User]:
    try:
        return db.execute(
            select(User).where(User.email == normalize_email(email))
        ).scalar_one_or_none()
    except SQLAlchemyError as e:
        logger.exception("Failed to look up user %s", email)
        raise StorageError("lookup user failed") from e
