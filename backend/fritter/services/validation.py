"""
Fritter Backend: Input Validation Rules
========================================

What:  Business-rule checks shared by several services.
How:   Each helper raises the application exception that maps to the
       required status code; callers run them in the documented order.

Rules:
    content   blank after stripping → 400; longer than max_content_length → 413
    username  1 to 64 word characters (letters, digits, underscore) → else 400
    password  one or more non-whitespace characters, at most 72 bytes → else 400
    ids       anything that is not a UUID is reported as "not found" (404)
"""

import re
import uuid

from fritter.config import settings
from fritter.exceptions import NotFoundError, PayloadTooLargeError, ValidationError

USERNAME_PATTERN = re.compile(r"^\w+$")
PASSWORD_PATTERN = re.compile(r"^\S+$")

# Matches users.username String(64)
MAX_USERNAME_LENGTH = 64

# bcrypt only looks at the first 72 bytes of a password
MAX_PASSWORD_BYTES = 72


def validate_content(content: str, kind: str) -> str:
    """
    Checks freet or reply text and returns it unchanged.

    `kind` is the user-facing noun ("Freet", "Reply") used in messages.
    """
    if not content or not content.strip():
        raise ValidationError(
            message=f"{kind} content must be at least one character long.",
            field="content",
        )
    if len(content) > settings.max_content_length:
        raise PayloadTooLargeError(
            message=f"{kind} content must be no more than {settings.max_content_length} characters.",
            max_length=settings.max_content_length,
        )
    return content


def validate_username(username: str) -> str:
    if not username or not USERNAME_PATTERN.match(username):
        raise ValidationError(
            message="Username must be a nonempty alphanumeric string.",
            field="username",
        )
    if len(username) > MAX_USERNAME_LENGTH:
        raise ValidationError(
            message=f"Username must be at most {MAX_USERNAME_LENGTH} characters long.",
            field="username",
        )
    return username


def validate_password(password: str) -> str:
    if not password or not PASSWORD_PATTERN.match(password):
        raise ValidationError(
            message="Password must be a nonempty string without spaces.",
            field="password",
        )
    if len(password.encode("utf-8")) > MAX_PASSWORD_BYTES:
        raise ValidationError(
            message=f"Password must be at most {MAX_PASSWORD_BYTES} bytes long.",
            field="password",
        )
    return password


def parse_id(raw_id: str, resource: str) -> uuid.UUID:
    """Parses a path or body id; malformed ids are treated as missing rows."""
    try:
        return uuid.UUID(str(raw_id))
    except (TypeError, ValueError):
        raise NotFoundError(resource=resource, resource_id=str(raw_id))
