"""SQLAlchemy models and stores."""
from models.base_model import Base
from models.user import User
from models.refresh_token import RefreshToken

__all__ = ["Base", "User", "RefreshToken"]
