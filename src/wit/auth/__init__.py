"""Password reset flow at the boundary of the external auth provider."""

from wit.auth.client import AuthError, AuthProvider, HttpAuthProvider
from wit.auth.reset_password import (
    ResetOutcome,
    ResetPasswordForm,
    ResetResult,
    extract_reset_token,
    reset_password,
    validate_reset_form,
)

__all__ = [
    "AuthError",
    "AuthProvider",
    "HttpAuthProvider",
    "ResetOutcome",
    "ResetPasswordForm",
    "ResetResult",
    "extract_reset_token",
    "reset_password",
    "validate_reset_form",
]
