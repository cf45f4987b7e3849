"""Models for the user's public profile."""

from pydantic import BaseModel, ConfigDict, Field


class UserProfile(BaseModel):
    """Editable profile fields of a user."""

    model_config = ConfigDict(populate_by_name=True)

    icon_url: str | None = Field(default=None, alias="iconUrl")
    tagline: str | None = None
    display_badges: list[str] | None = Field(default=None, alias="displayBadges")
    description: str | None = None
