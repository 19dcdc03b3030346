"""Password hashing and session token generation."""

import secrets

import bcrypt

# Min/max lengths for username and password validation.
USERNAME_MIN_LEN = 3
USERNAME_MAX_LEN = 50
PASSWORD_MIN_LEN = 6
PASSWORD_MAX_LEN = 100

SESSION_TOKEN_BYTES = 32


def hash_password(plain_password: str, rounds: int) -> str:
    """Hash a plain-text password for storage. rounds comes from Settings.BCRYPT_ROUNDS."""
    # bcrypt has a 72-byte limit; truncate to avoid errors (validation already limits length).
    pw_bytes = plain_password.encode("utf-8")[:72]
    return bcrypt.hashpw(pw_bytes, bcrypt.gensalt(rounds=rounds)).decode("utf-8")


def verify_password(plain_password: str, hashed: str) -> bool:
    """Verify a plain password against a stored hash."""
    pw_bytes = plain_password.encode("utf-8")[:72]
    try:
        return bcrypt.checkpw(pw_bytes, hashed.encode("utf-8"))
    except (ValueError, TypeError):
        return False


def new_session_token() -> str:
    """Opaque, URL-safe session identifier for the session cookie."""
    return secrets.token_urlsafe(SESSION_TOKEN_BYTES)
