# File: app/services/auth_service.py

"""
Authentication service.

  - Registration (unique username / email, hashed password)
  - Password verification
  - Resolving a session token to the owner id every other service scopes by
"""

import logging
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.exceptions import AuthRequired, Conflict
from app.core.security import check_password, hash_password, verify_token
from app.db.utils import atomic
from app.models.user import User
from app.repositories.user import UserRepository

logger = logging.getLogger(__name__)


def register_user(
    db: Session,
    *,
    username: str,
    email: str,
    password: str,
) -> User:
    """
    Create a user. Raises Conflict if the email or username is taken.
    """
    repo = UserRepository(db)

    if repo.get_by_email(email):
        raise Conflict("This email is already in use.")
    if repo.get_by_username(username):
        raise Conflict("This username is already in use.")

    try:
        with atomic(db):
            user = repo.create(username, email, hash_password(password))
    except IntegrityError as exc:
        # Lost a race with a concurrent registration
        raise Conflict("This email or username is already in use.") from exc

    logger.info("Registered user %s", user.id)
    return user


def authenticate_user(
    db: Session,
    *,
    email: str,
    password: str,
) -> Optional[User]:
    """
    Return the user if the credentials match, otherwise None.
    """
    user = UserRepository(db).get_by_email(email)
    if user is None or not check_password(password, user.password_hash):
        return None
    return user


def resolve_owner(db: Session, token: Optional[str], *, endpoint: str = "") -> int:
    """
    Turn a session token into the id of an existing user.

    Raises AuthRequired when the token is missing, invalid or expired, or
    when the user it names no longer exists.
    """
    user_id = verify_token(token) if token else None
    if user_id is None or UserRepository(db).get_by_id(user_id) is None:
        logger.info("%s - request without a valid session", endpoint or "api")
        raise AuthRequired()
    return user_id
