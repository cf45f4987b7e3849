"""User profile service."""

from dataclasses import dataclass

from resonite_records.adapters.resonite_client import ResoniteClient
from resonite_records.domain.profile import UserProfile
from resonite_records.domain.session import Session


@dataclass
class ProfileService:
    """Service for reading and editing the session user's profile."""

    client: ResoniteClient

    async def get_profile(self, session: Session) -> UserProfile:
        """Return the current profile, empty if the user has none."""
        return await self.client.get_user_profile(session)

    async def update_profile(self, session: Session, profile: UserProfile) -> None:
        """Persist ``profile``; unset fields are left out of the request."""
        await self.client.update_user_profile(session, profile)

    @staticmethod
    def apply_edits(
        profile: UserProfile, tagline: str | None, description: str | None
    ) -> UserProfile:
        """Return a copy with non-blank edits applied."""
        updates: dict[str, object] = {}
        if tagline and tagline.strip():
            updates["tagline"] = tagline.strip()
        if description and description.strip():
            updates["description"] = description.strip()
        return profile.model_copy(update=updates)
