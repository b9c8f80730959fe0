# app/core/error_messages.py
"""Centralized error messages.

Entries are exception classes, so ``raise ErrorResponses.USER_EXISTS`` builds a
fresh instance on every raise.
"""
from app.core.exceptions import (
    Forbidden,
    NotFoundOrDenied,
    Unauthenticated,
    ValidationError,
)


def _error(base, message):
    return type(base.__name__, (base,), {"message": message})


class ErrorResponses:
    # auth
    USER_EXISTS = _error(ValidationError, "User already exists")
    INVALID_CREDENTIALS = _error(Unauthenticated, "Invalid credentials")
    INVALID_TOKEN = _error(Unauthenticated, "Invalid token")
    INVALID_ADMIN_SECRET = _error(Forbidden, "Invalid admin secret")
    ADMIN_ONLY = _error(Forbidden, "Access denied. Admin only.")

    # tasks
    MISSING_TASK_FIELDS = _error(ValidationError, "Title and description are required")
    ASSIGNEE_NOT_FOUND = _error(ValidationError, "Assigned user not found")
    TASK_NOT_FOUND = _error(NotFoundOrDenied, "Task not found or access denied")
