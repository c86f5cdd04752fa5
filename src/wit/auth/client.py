"""Auth provider client."""

import asyncio
import logging
from abc import ABC, abstractmethod

import aiohttp

logger = logging.getLogger(__name__)


class AuthError(Exception):
    """Exception raised by the auth provider.

    ``code`` carries the provider's error code, e.g. ``INVALID_RESET_TOKEN``.
    """

    def __init__(self, message: str, code: str | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.code = code


class AuthProvider(ABC):
    """External service that owns accounts and reset tokens."""

    @abstractmethod
    async def reset_password(self, token: str, password: str) -> None:
        """Set a new password using a reset token.

        Raises:
            AuthError: If the token is rejected or the request fails.
        """
        pass


class HttpAuthProvider(AuthProvider):
    """Auth provider reached over HTTP."""

    def __init__(self, base_url: str, timeout: float = 30) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = aiohttp.ClientTimeout(total=timeout)

    async def reset_password(self, token: str, password: str) -> None:
        url = f"{self.base_url}/api/auth/reset-password/{token}"
        try:
            async with aiohttp.ClientSession(timeout=self.timeout) as session:
                async with session.post(url, json={"password": password}) as resp:
                    if resp.status < 400:
                        return
                    try:
                        body = await resp.json(content_type=None)
                    except ValueError:
                        body = None
        except asyncio.TimeoutError as e:
            raise AuthError("Request timed out") from e
        except aiohttp.ClientError as e:
            raise AuthError(str(e) or "Network error") from e

        error = body.get("error") if isinstance(body, dict) else None
        error = error if isinstance(error, dict) else {}
        logger.warning(f"Password reset rejected with status {resp.status}: {error.get('code')}")
        raise AuthError(error.get("message") or f"Request failed with status {resp.status}", error.get("code"))
