"""Domain models for authenticated sessions."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class LoginCredentials:
    """Credentials collected from the operator."""

    username: str
    password: str = field(repr=False)
    totp_code: str | None = None


@dataclass(frozen=True)
class Session:
    """Authenticated credential pair, valid for the process lifetime."""

    user_id: str
    token: str = field(repr=False)

    @property
    def authorization(self) -> str:
        """Return the Authorization header value for API requests."""
        return f"res {self.user_id}:{self.token}"
