"""SQLAlchemy ORM models.

Submission models (Base) live in the submissions DB.
Auth models (AuthBase) live in the auth DB.
"""

from checkup.models.base import Base, AuthBase
from checkup.models.submission import Submission, PropertyReport

from checkup.models.auth_models import User, UserSession

__all__ = [
    "Base", "Submission", "PropertyReport",
    "AuthBase", "User", "UserSession",
]
