# core/errors.py

from fastapi import HTTPException, status


# ============================================================
# Error taxonomy
# ============================================================
class Unauthenticated(HTTPException):
    """Missing, malformed or rejected bearer token."""

    def __init__(self, detail: str = "Invalid authorization token"):
        super().__init__(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=detail,
            headers={"WWW-Authenticate": "Bearer"},
        )


class Forbidden(HTTPException):
    def __init__(self, detail: str = "Insufficient permissions"):
        super().__init__(status_code=status.HTTP_403_FORBIDDEN, detail=detail)


class NotFound(HTTPException):
    def __init__(self, detail: str = "Resource not found"):
        super().__init__(status_code=status.HTTP_404_NOT_FOUND, detail=detail)


class ProfileNotFound(NotFound):
    def __init__(self, detail: str = "User profile not found"):
        super().__init__(detail)


class ValidationFailed(HTTPException):
    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


class ReferentialConflict(HTTPException):
    """Delete refused because dependent rows still reference the target."""

    def __init__(self, detail: str):
        super().__init__(status_code=status.HTTP_400_BAD_REQUEST, detail=detail)


# ============================================================
# Supabase error translation
# ============================================================
def extract_supabase_error(error: Exception) -> str:
    """
    Safely extract readable details from Supabase Python client errors.
    Handles:
      • PostgREST errors (APIError.message)
      • GoTrue (Auth) errors
      • Generic Python exceptions
    """

    # Case 1: PostgREST / GoTrue errors carry .message
    message = getattr(error, "message", None)
    if message:
        return str(message)

    # Case 2: errors with args (common)
    if getattr(error, "args", None):
        return str(error.args[0])

    # Case 3: Plain string fallback
    return str(error) or "Unknown Supabase error"


# Raised by the membership database functions when a referenced row is missing
NO_DATA_FOUND = "P0002"


def supabase_error_code(error: Exception):
    """SQLSTATE / PostgREST code of a store error, if the client exposed one."""
    return getattr(error, "code", None)


def handle_supabase_error(error: Exception, operation: str = "Database operation") -> HTTPException:
    """
    Translate a failed write into a client-facing 400.
    Returns the exception (doesn't raise) so the caller can re-raise it.

    Args:
        error: The exception raised by the Supabase client
        operation: What failed (e.g. "Failed to create member")
    """
    from core.logging_config import logger

    error_detail = extract_supabase_error(error)
    logger.error(f"{operation}: {error_detail}")

    error_lower = error_detail.lower()
    if "duplicate" in error_lower or "unique" in error_lower:
        return ValidationFailed(f"{operation}: Record already exists")
    if "foreign key" in error_lower:
        return ValidationFailed(f"{operation}: Invalid reference")
    if "not-null" in error_lower or "null value" in error_lower:
        return ValidationFailed(f"{operation}: Missing required value")
    return ValidationFailed(operation)
