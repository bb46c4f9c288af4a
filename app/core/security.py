# File: app/core/security.py

"""
Security helpers for the Roadmap API.

Passwords are hashed with passlib. Sessions are signed, timestamped tokens
(itsdangerous) carrying only the user id; the token lives in an HttpOnly
cookie and is checked again on every request.
"""

from typing import Optional

from itsdangerous import BadSignature, SignatureExpired, URLSafeTimedSerializer
from passlib.context import CryptContext

from app.core.config import settings


SESSION_SALT = "roadmap-session"

pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")


def hash_password(password: str) -> str:
    return pwd_context.hash(password)


def check_password(password: str, password_hash: str) -> bool:
    return pwd_context.verify(password, password_hash)


def _serializer() -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.secret_key, salt=SESSION_SALT)


def create_access_token(user_id: int) -> str:
    """
    Sign a session token for ``user_id``.

    The token is opaque to the client; expiry is enforced when it is read
    back in ``verify_token`` rather than being embedded in the payload.
    """
    return _serializer().dumps({"sub": user_id})


def verify_token(token: str, max_age: Optional[int] = None) -> Optional[int]:
    """
    Return the user id carried by ``token``, or None if the token is
    tampered with, expired, or malformed.
    """
    if not token:
        return None
    max_age = settings.session_max_age_seconds if max_age is None else max_age
    try:
        payload = _serializer().loads(token, max_age=max_age)
    except (SignatureExpired, BadSignature):
        return None

    user_id = payload.get("sub") if isinstance(payload, dict) else None
    return user_id if isinstance(user_id, int) else None
