"""Resonite user session (login) client."""

import base64
import hashlib
import logging
import secrets
import string
from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import ValidationError

from resonite_records.adapters.resonite_models import (
    AuthResponse,
    LoginRequest,
    PasswordAuthentication,
)
from resonite_records.domain.session import LoginCredentials, Session
from resonite_records.errors import AuthError

_MACHINE_ID_ALPHABET = string.ascii_letters + string.digits + "_"
_MACHINE_ID_LENGTH = 128

_logger = logging.getLogger(__name__)


class AuthClient(Protocol):
    """Interface for acquiring an authenticated session."""

    async def create_session(self, credentials: LoginCredentials) -> Session:
        """Log in and return the session credential pair."""


@dataclass
class HttpxAuthClient(AuthClient):
    """Auth client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 30.0

    @classmethod
    def create(cls, base_url: str, timeout_seconds: float) -> "HttpxAuthClient":
        """Create an auth client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def create_session(self, credentials: LoginCredentials) -> Session:
        """Create a session via POST /userSessions."""
        request = LoginRequest(
            username=credentials.username,
            authentication=PasswordAuthentication(password=credentials.password),
            secret_machine_id=generate_machine_id(),
            remember_me=False,
        )
        headers = {"UID": generate_uid(), "TOTP": credentials.totp_code or ""}
        try:
            response = await self.http_client.post(
                f"{self.base_url}/userSessions",
                json=request.model_dump(by_alias=True),
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except httpx.RequestError as exc:
            raise AuthError(f"Authentication request failed: {exc}") from exc
        if not response.is_success:
            raise AuthError(
                f"Authentication failed with status {response.status_code}",
                {"body": response.text},
            )
        try:
            payload = AuthResponse.model_validate_json(response.text)
        except ValidationError as exc:
            raise AuthError("Failed to parse authentication response") from exc
        _logger.info("Authenticated as %s", payload.entity.user_id)
        return Session(user_id=payload.entity.user_id, token=payload.entity.token)

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()


def generate_machine_id() -> str:
    """Return a random 128 character machine id."""
    return "".join(
        secrets.choice(_MACHINE_ID_ALPHABET) for _ in range(_MACHINE_ID_LENGTH)
    )


def generate_uid() -> str:
    """Return an uppercase SHA-256 hex digest of a random nonce."""
    nonce = base64.b64encode(secrets.token_bytes(16)).decode("ascii")
    data = f"resonite-records-{nonce}".encode()
    return hashlib.sha256(data).hexdigest().upper()
