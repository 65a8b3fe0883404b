"""User registration and lookup."""
from __future__ import annotations

import logging
import uuid
from typing import List, Tuple

from models.user import User
from utils.security import hash_password

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users):
        self.users = users

    def register(self, first_name: str, last_name: str, email: str, password: str) -> User:
        """
        Create a user with a hashed password. Duplicate emails are left to
        the store's unique constraint (EmailAlreadyRegistered).
        """
        user = User(
            id=str(uuid.uuid4()),
            first_name=first_name,
            last_name=last_name,
            email=email,
            password_hash=hash_password(password),
        )
        self.users.create(user)
        logger.info("registered user %s", user.id)
        return user

    def get(self, user_id: str) -> User:
        return self.users.get_by_id(user_id)

    def current(self, ctx) -> User:
        return self.users.get_by_id(ctx.user_id)

    def list(self, page: int = 1, limit: int = 20) -> Tuple[List[User], int]:
        return self.users.list(page=page, limit=limit), self.users.count()
