"""Security utilities for Basic authentication."""

import base64
import binascii

from passlib.context import CryptContext

BASIC_SCHEME = "Basic "

# PBKDF2 work factor for stored credentials
DEFAULT_HASH_ROUNDS = 240_000


class AuthenticationError(Exception):
    """Credentials are missing, malformed or rejected."""


def create_password_context(rounds: int = DEFAULT_HASH_ROUNDS) -> CryptContext:
    """Build a password hashing context using salted PBKDF2-SHA256."""
    return CryptContext(
        schemes=["pbkdf2_sha256"],
        deprecated="auto",
        pbkdf2_sha256__default_rounds=rounds,
    )


pwd_context = create_password_context()


def hash_password(password: str, context: CryptContext = pwd_context) -> str:
    """Hash password."""
    return str(context.hash(password))


def verify_password(
    password: str, hashed_password: str, context: CryptContext = pwd_context
) -> bool:
    """Verify password; a malformed or unrecognized hash never matches."""
    try:
        return bool(context.verify(password, hashed_password))
    except (ValueError, TypeError):
        return False


def encode_basic_auth(username: str, password: str) -> str:
    """Build the value of an ``authorization`` header for Basic auth."""
    credentials = f"{username}:{password}".encode("utf-8")
    return BASIC_SCHEME + base64.b64encode(credentials).decode("ascii")


def decode_basic_auth(header: str) -> tuple[str, str]:
    """Extract the username and password from a Basic ``authorization`` header.

    The decoded payload is split on the first colon only, so passwords may
    contain colons.

    Raises:
        AuthenticationError: If the scheme, encoding or payload is invalid
    """
    if not header.startswith(BASIC_SCHEME):
        raise AuthenticationError("invalid authorization header format")

    encoded = header[len(BASIC_SCHEME):]
    try:
        credentials = base64.b64decode(encoded, validate=True).decode("utf-8")
    except (binascii.Error, UnicodeDecodeError) as exc:
        raise AuthenticationError("invalid base64 encoding") from exc

    username, separator, password = credentials.partition(":")
    if not separator:
        raise AuthenticationError("invalid credentials format")

    return username, password
