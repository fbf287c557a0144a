# Overview: Service-layer operations for auth; password hashing, login and token issuance.

"""
Authentication Service

SECURITY NOTES:
- Passwords hashed with bcrypt (cost factor 12)
- Unknown usernames and wrong passwords fail identically; a dummy bcrypt
  check runs for unknown users so response time does not reveal which
- Tokens are signed JWTs carrying the user id, valid for one hour
  (JWT_ACCESS_TOKEN_EXPIRES). No refresh, no revocation list.
"""

import bcrypt
from flask_jwt_extended import create_access_token

from ..extensions import db
from ..models import User


class InvalidCredentialsError(Exception):
    """Raised for any failed login, regardless of cause."""

    def __init__(self):
        super().__init__("Invalid credentials")


# Compared against when the username does not exist
_DUMMY_HASH = bcrypt.hashpw(b"medkit-dummy-password", bcrypt.gensalt(rounds=12)).decode("utf-8")


def hash_password(password: str) -> str:
    """Hash password using bcrypt with cost factor 12."""
    if not password:
        raise ValueError("Password is required")
    salt = bcrypt.gensalt(rounds=12)
    hashed = bcrypt.hashpw(password.encode('utf-8'), salt)
    return hashed.decode('utf-8')  # Store as string in database


def verify_password(password: str, password_hash: str) -> bool:
    """
    Verify password against bcrypt hash.

    Returns False for malformed hashes instead of raising.
    """
    try:
        return bcrypt.checkpw(password.encode('utf-8'), password_hash.encode('utf-8'))
    except ValueError:
        return False


def create_user(username: str, password: str) -> User:
    """
    Create an operator account.

    Raises:
        ValueError: username missing or already taken, password missing
    """
    username = (username or "").strip()
    if not username:
        raise ValueError("Username is required")

    existing = db.session.query(User).filter_by(username=username).first()
    if existing:
        raise ValueError("Username already exists")

    user = User(username=username, password_hash=hash_password(password))
    db.session.add(user)
    db.session.commit()
    return user


def authenticate(username: str, password: str) -> User:
    """
    Return the user for valid credentials.

    Raises:
        InvalidCredentialsError: unknown username or wrong password
    """
    user = db.session.query(User).filter_by(username=username).first()

    if user is None:
        verify_password(password, _DUMMY_HASH)
        raise InvalidCredentialsError()

    if not verify_password(password, user.password_hash):
        raise InvalidCredentialsError()

    return user


def issue_token(user: User) -> str:
    return create_access_token(identity=str(user.id))


def login(username: str, password: str) -> str:
    """Authenticate and return a signed one-hour token."""
    user = authenticate(username, password)
    return issue_token(user)
