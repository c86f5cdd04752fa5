"""Reset-password form handling."""

import logging
import re
from enum import StrEnum

from pydantic import BaseModel, Field

from wit.auth.client import AuthError, AuthProvider

logger = logging.getLogger(__name__)

MIN_PASSWORD_LENGTH = 8
INVALID_RESET_TOKEN = "INVALID_RESET_TOKEN"

SUCCESS_MESSAGE = "Password reset successful!"
INVALID_TOKEN_MESSAGE = "This reset link is invalid or has expired. Please request a new one."
FAILED_MESSAGE = "Failed to reset password. Please try again."

_TOKEN_PATH = re.compile(r"/reset-password/(.+)")


class ResetOutcome(StrEnum):
    SUCCESS = "success"
    INVALID_INPUT = "invalid_input"
    INVALID_TOKEN = "invalid_token"
    FAILED = "failed"


class ResetResult(BaseModel):
    outcome: ResetOutcome
    message: str

    @property
    def ok(self) -> bool:
        return self.outcome == ResetOutcome.SUCCESS


class ResetPasswordForm(BaseModel):
    """Form submitted from the reset-password page."""

    password: str = Field(title="New Password", json_schema_extra={"format": "password"})
    confirm_password: str = Field(title="Confirm Password", json_schema_extra={"format": "password"})


def extract_reset_token(path: str) -> str | None:
    """Pull the reset token out of a ``/reset-password/<token>`` path."""
    match = _TOKEN_PATH.search(path)
    return match.group(1) if match else None


def validate_reset_form(token: str | None, password: str, confirm_password: str) -> str | None:
    """Check the form locally; returns an error message or None if it can be submitted."""
    if len(password) < MIN_PASSWORD_LENGTH:
        return f"Password must be at least {MIN_PASSWORD_LENGTH} characters"
    if password != confirm_password:
        return "Passwords do not match"
    if not token:
        return "Reset token is missing"
    return None


async def reset_password(
    provider: AuthProvider,
    token: str | None,
    password: str,
    confirm_password: str,
) -> ResetResult:
    """Validate the form and ask the auth provider to reset the password.

    Invalid input never reaches the provider. An invalid or expired token is
    reported separately so the caller can send the user to request a new
    link; any other failure can simply be retried.
    """
    error = validate_reset_form(token, password, confirm_password)
    if error:
        return ResetResult(outcome=ResetOutcome.INVALID_INPUT, message=error)

    try:
        await provider.reset_password(token, password)  # type: ignore[arg-type]
    except AuthError as e:
        if e.code == INVALID_RESET_TOKEN:
            return ResetResult(outcome=ResetOutcome.INVALID_TOKEN, message=INVALID_TOKEN_MESSAGE)
        logger.error(f"Password reset failed: {e}")
        return ResetResult(outcome=ResetOutcome.FAILED, message=e.message or FAILED_MESSAGE)
    except Exception as e:
        logger.error(f"Password reset failed: {e}")
        return ResetResult(outcome=ResetOutcome.FAILED, message=str(e) or FAILED_MESSAGE)

    return ResetResult(outcome=ResetOutcome.SUCCESS, message=SUCCESS_MESSAGE)
