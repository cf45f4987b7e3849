"""Shared test fixtures."""

from collections import deque
from dataclasses import dataclass, field
from datetime import UTC, datetime, timedelta

import pytest

from resonite_records.adapters.auth_client import AuthClient
from resonite_records.adapters.resonite_client import ResoniteClient
from resonite_records.config import Settings
from resonite_records.containers import AppContainer, wire_container
from resonite_records.domain.profile import UserProfile
from resonite_records.domain.records import Record
from resonite_records.domain.session import LoginCredentials, Session
from resonite_records.errors import AuthError, TransportError

BASE_TIME = datetime(2024, 1, 1, 12, 0, 0, tzinfo=UTC)


def make_record(
    record_id: str,
    name: str = "Item",
    path: str = "Inventory",
    minutes: int = 0,
    tags: tuple[str, ...] = (),
) -> Record:
    """Build a record modified ``minutes`` after a fixed base time."""
    return Record(
        id=record_id,
        name=name,
        path=path,
        last_modification_time=BASE_TIME + timedelta(minutes=minutes),
        tags=tags,
    )


@dataclass
class FakeResoniteClient(ResoniteClient):
    """In-memory Resonite client that records every call."""

    records: list[Record] = field(default_factory=list)
    failing_ids: set[str] = field(default_factory=set)
    list_calls: int = 0
    delete_calls: list[str] = field(default_factory=list)
    profile: UserProfile = field(default_factory=UserProfile)
    updated_profiles: list[UserProfile] = field(default_factory=list)

    async def list_records(self, session: Session) -> list[Record]:
        self.list_calls += 1
        return list(self.records)

    async def delete_record(self, session: Session, record_id: str) -> None:
        self.delete_calls.append(record_id)
        if record_id in self.failing_ids:
            raise TransportError(
                f"Failed to delete record {record_id} with status 500",
                status_code=500,
                body="boom",
            )
        self.records = [record for record in self.records if record.id != record_id]

    async def get_user_profile(self, session: Session) -> UserProfile:
        return self.profile

    async def update_user_profile(self, session: Session, profile: UserProfile) -> None:
        self.updated_profiles.append(profile)
        self.profile = profile


@dataclass
class FakeAuthClient(AuthClient):
    """Auth client returning a fixed session, or failing."""

    session: Session = field(
        default_factory=lambda: Session(user_id="U-tester", token="secret-token")
    )
    fail: bool = False
    received: list[LoginCredentials] = field(default_factory=list)

    async def create_session(self, credentials: LoginCredentials) -> Session:
        self.received.append(credentials)
        if self.fail:
            raise AuthError("Authentication failed with status 403")
        return self.session


@dataclass
class ScriptedTerminal:
    """Terminal fed from a list of canned answers."""

    answers: deque[str] = field(default_factory=deque)
    lines: list[str] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)
    pauses: int = 0

    @classmethod
    def with_answers(cls, *answers: str) -> "ScriptedTerminal":
        return cls(answers=deque(answers))

    def write(self, text: str = "") -> None:
        self.lines.append(text)

    def ask(self, text: str) -> str:
        self.prompts.append(text)
        if not self.answers:
            raise AssertionError(f"Unexpected prompt: {text}")
        return self.answers.popleft()

    def ask_secret(self, text: str) -> str:
        return self.ask(text)

    def pause(self) -> None:
        self.pauses += 1

    @property
    def output(self) -> str:
        return "\n".join(self.lines)


@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="https://api.test")


@pytest.fixture
def session() -> Session:
    return Session(user_id="U-tester", token="secret-token")


@pytest.fixture
def resonite_client() -> FakeResoniteClient:
    return FakeResoniteClient()


@pytest.fixture
def auth_client() -> FakeAuthClient:
    return FakeAuthClient()


@pytest.fixture
def container(
    settings: Settings,
    auth_client: FakeAuthClient,
    resonite_client: FakeResoniteClient,
) -> AppContainer:
    return wire_container(
        settings, auth_client=auth_client, resonite_client=resonite_client
    )
