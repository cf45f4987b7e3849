"""Resonite records and profile API client."""

import logging
from dataclasses import dataclass
from typing import Protocol

import httpx
from pydantic import TypeAdapter, ValidationError

from resonite_records.adapters.resonite_models import RecordPayload, UserInfoPayload
from resonite_records.domain.profile import UserProfile
from resonite_records.domain.records import Record
from resonite_records.domain.session import Session
from resonite_records.errors import DecodeError, TransportError

_RECORD_LIST = TypeAdapter(list[RecordPayload])

_logger = logging.getLogger(__name__)


class ResoniteClient(Protocol):
    """Interface for Resonite record and profile interactions."""

    async def list_records(self, session: Session) -> list[Record]:
        """Return every record owned by the session's user."""

    async def delete_record(self, session: Session, record_id: str) -> None:
        """Delete a single record by id."""

    async def get_user_profile(self, session: Session) -> UserProfile:
        """Return the session user's profile."""

    async def update_user_profile(self, session: Session, profile: UserProfile) -> None:
        """Replace the editable profile fields of the session user."""


@dataclass
class HttpxResoniteClient(ResoniteClient):
    """Resonite client implemented with httpx."""

    base_url: str
    http_client: httpx.AsyncClient
    user_agent: str
    timeout_seconds: float = 30.0

    @classmethod
    def create(
        cls, base_url: str, user_agent: str, timeout_seconds: float
    ) -> "HttpxResoniteClient":
        """Create a Resonite client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            user_agent=user_agent,
            timeout_seconds=timeout_seconds,
        )

    async def list_records(self, session: Session) -> list[Record]:
        """Fetch all records via GET /users/{userId}/records."""
        response = await self._send(
            "GET", f"/users/{session.user_id}/records", session, action="get records"
        )
        try:
            payloads = _RECORD_LIST.validate_json(response.text)
        except ValidationError as exc:
            raise DecodeError(
                f"Failed to parse records response: {exc.error_count()} error(s)",
                body=response.text,
            ) from exc
        return [payload.to_record() for payload in payloads]

    async def delete_record(self, session: Session, record_id: str) -> None:
        """Delete a record via DELETE /users/{userId}/records/{id}."""
        await self._send(
            "DELETE",
            f"/users/{session.user_id}/records/{record_id}",
            session,
            action=f"delete record {record_id}",
        )

    async def get_user_profile(self, session: Session) -> UserProfile:
        """Fetch the user via GET /users/{userId} and return its profile."""
        response = await self._send(
            "GET", f"/users/{session.user_id}", session, action="get user info"
        )
        try:
            user_info = UserInfoPayload.model_validate_json(response.text)
        except ValidationError as exc:
            raise DecodeError(
                "Failed to parse user info response", body=response.text
            ) from exc
        return user_info.profile or UserProfile()

    async def update_user_profile(self, session: Session, profile: UserProfile) -> None:
        """Update the profile via PUT /users/{userId}/profile, omitting nulls."""
        await self._send(
            "PUT",
            f"/users/{session.user_id}/profile",
            session,
            action="update user profile",
            json=profile.model_dump(by_alias=True, exclude_none=True),
        )

    async def close(self) -> None:
        """Close the underlying HTTP client session."""
        await self.http_client.aclose()

    async def _send(
        self,
        method: str,
        path: str,
        session: Session,
        *,
        action: str,
        json: dict[str, object] | None = None,
    ) -> httpx.Response:
        """Issue one request and raise TransportError on any failure."""
        headers = {
            "Authorization": session.authorization,
            "Accept": "application/json, text/plain, */*",
            "User-Agent": self.user_agent,
        }
        try:
            response = await self.http_client.request(
                method,
                f"{self.base_url}{path}",
                headers=headers,
                json=json,
                timeout=self.timeout_seconds,
            )
        except httpx.RequestError as exc:
            _logger.debug("%s %s failed without response: %s", method, path, exc)
            raise TransportError(f"Failed to {action}: {exc}", status_code=None) from exc
        if not response.is_success:
            raise TransportError(
                f"Failed to {action} with status {response.status_code}",
                status_code=response.status_code,
                body=response.text,
            )
        return response
