# core/password_policy.py

import re

from core.config import settings


SPECIAL_CHARS = re.compile(r"[^A-Za-z0-9]")


def validate_password(password: str) -> dict:
    """
    Checks a candidate password against the account policy.
    Returns {"is_valid", "message", "errors"} so the dashboard can list
    every unmet rule at once.
    """
    errors = []
    password = password or ""

    if len(password) < settings.PASSWORD_MIN_LENGTH:
        errors.append(f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters long")
    if not re.search(r"[A-Z]", password):
        errors.append("Password must contain at least one uppercase letter")
    if not re.search(r"[a-z]", password):
        errors.append("Password must contain at least one lowercase letter")
    if not re.search(r"[0-9]", password):
        errors.append("Password must contain at least one number")
    if not SPECIAL_CHARS.search(password):
        errors.append("Password must contain at least one special character")

    return {
        "is_valid": not errors,
        "message": "Password is valid" if not errors else errors[0],
        "errors": errors,
    }
