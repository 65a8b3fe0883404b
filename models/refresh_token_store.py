"""Refresh token store: persistence for RefreshToken records."""
from __future__ import annotations

import logging
from typing import List

from sqlalchemy.exc import SQLAlchemyError

from models.refresh_token import RefreshToken
from utils.exceptions import NotFound, StoreError

logger = logging.getLogger(__name__)


class RefreshTokenStore:
    def __init__(self, storage):
        self.storage = storage

    def create(self, refresh_token: RefreshToken) -> RefreshToken:
        return self.save(refresh_token)

    def save(self, refresh_token: RefreshToken) -> RefreshToken:
        try:
            self.storage.new(refresh_token)
            self.storage.save()
        except SQLAlchemyError as err:
            logger.exception("failed to persist refresh token for user %s", refresh_token.user_id)
            raise StoreError() from err
        return refresh_token

    def get_by_token(self, token: str) -> RefreshToken:
        session = self.storage.get_session()
        try:
            rt = session.query(RefreshToken).filter(RefreshToken.token == token).first()
        except SQLAlchemyError as err:
            logger.exception("failed to fetch refresh token")
            raise StoreError() from err
        if rt is None:
            raise NotFound("Refresh token not found")
        return rt

    def list_for_user(self, user_id: str) -> List[RefreshToken]:
        session = self.storage.get_session()
        try:
            return (
                session.query(RefreshToken)
                .filter(RefreshToken.user_id == user_id)
                .order_by(RefreshToken.created_at.asc())
                .all()
            )
        except SQLAlchemyError as err:
            logger.exception("failed to list refresh tokens for user %s", user_id)
            raise StoreError() from err
