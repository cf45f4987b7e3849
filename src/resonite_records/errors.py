"""Exception hierarchy for Resonite API failures.

All client errors inherit from ResoniteError so the console can report any of
them with a single handler, while batch code catches the narrower types it can
recover from.
"""


class ResoniteError(Exception):
    """Base exception for all Resonite client errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} ({self.details})"
        return self.message


class AuthError(ResoniteError):
    """Login failed: bad credentials, transport failure or unusable response."""


class TransportError(ResoniteError):
    """A record or profile request did not complete successfully.

    ``status_code`` is None when no response was received at all (connection
    failure or timeout).
    """

    def __init__(self, message: str, status_code: int | None, body: str = ""):
        details: dict = {"status_code": status_code}
        if body:
            details["body"] = body
        super().__init__(message, details)
        self.status_code = status_code
        self.body = body


class DecodeError(ResoniteError):
    """A response body did not have the expected shape."""

    def __init__(self, message: str, body: str):
        super().__init__(message, {"body": body})
        self.body = body
