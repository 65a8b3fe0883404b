"""
User store: CRUD for user identity records on top of DBStorage.

Lookups raise NotFound on a miss and StoreError on any database failure,
so callers can tell the two apart. Email uniqueness is left to the
database constraint; a violation surfaces as EmailAlreadyRegistered.
"""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from models.user import User
from utils.exceptions import EmailAlreadyRegistered, NotFound, StoreError

logger = logging.getLogger(__name__)


def normalize_email(email: str) -> str:
    """Emails are stored and matched trimmed and lower-cased."""
    return email.strip().lower() if isinstance(email, str) else email


def _is_unique_violation(err: IntegrityError) -> bool:
    message = str(getattr(err, "orig", err)).lower()
    return "unique constraint" in message or "unique violation" in message


class UserStore:
    def __init__(self, storage):
        self.storage = storage

    def create(self, user: User) -> User:
        user.email = normalize_email(user.email)
        try:
            self.storage.new(user)
            self.storage.save()
        except IntegrityError as err:
            if _is_unique_violation(err):
                raise EmailAlreadyRegistered() from err
            logger.exception("integrity error creating user")
            raise StoreError() from err
        except SQLAlchemyError as err:
            logger.exception("failed to create user")
            raise StoreError() from err
        return user

    def get_by_id(self, user_id: str) -> User:
        try:
            user = self.storage.get(User, user_id)
        except SQLAlchemyError as err:
            logger.exception("failed to fetch user %s", user_id)
            raise StoreError() from err
        if user is None:
            raise NotFound("User not found")
        return user

    def get_by_email(self, email: str) -> User:
        session = self.storage.get_session()
        try:
            user = session.query(User).filter(User.email == normalize_email(email)).first()
        except SQLAlchemyError as err:
            logger.exception("failed to fetch user by email")
            raise StoreError() from err
        if user is None:
            raise NotFound("User not found")
        return user

    def list(self, page: int = 1, limit: int = 20) -> List[User]:
        session = self.storage.get_session()
        try:
            return (
                session.query(User)
                .order_by(User.created_at.asc(), User.id.asc())
                .offset((page - 1) * limit)
                .limit(limit)
                .all()
            )
        except SQLAlchemyError as err:
            logger.exception("failed to list users")
            raise StoreError() from err

    def count(self) -> int:
        try:
            return self.storage.count(User)
        except SQLAlchemyError as err:
            logger.exception("failed to count users")
            raise StoreError() from err
