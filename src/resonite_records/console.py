"""Terminal presentation for the interactive menu and its workflows."""

import logging
from dataclasses import dataclass
from typing import Protocol

import typer

from resonite_records.containers import AppContainer
from resonite_records.domain.profile import UserProfile
from resonite_records.domain.records import DeletionReport, Record
from resonite_records.domain.session import LoginCredentials, Session
from resonite_records.errors import ResoniteError
from resonite_records.menu_commands import MenuOption, menu_lines, parse_menu_choice
from resonite_records.services.queries import summarize_by_name
from resonite_records.services.retention import RetentionGroup
from resonite_records.services.review import (
    ReviewConsole,
    ReviewSession,
    ReviewState,
    ReviewStep,
)

_TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"

_logger = logging.getLogger(__name__)


class Terminal(Protocol):
    """Line-oriented operator I/O."""

    def write(self, text: str = "") -> None:
        """Write a line of output."""

    def ask(self, text: str) -> str:
        """Prompt for a line of input; empty input returns an empty string."""

    def ask_secret(self, text: str) -> str:
        """Prompt for input without echoing it."""

    def pause(self) -> None:
        """Wait for the operator before returning to the menu."""


class TyperTerminal(Terminal):
    """Terminal backed by typer's prompt helpers."""

    def write(self, text: str = "") -> None:
        typer.echo(text)

    def ask(self, text: str) -> str:
        return typer.prompt(text, default="", show_default=False)

    def ask_secret(self, text: str) -> str:
        return typer.prompt(text, hide_input=True)

    def pause(self) -> None:
        typer.pause("\nPress any key to return to main menu...")


def format_record_details(record: Record) -> list[str]:
    """Return the detail lines shown for a record under review."""
    lines = [
        f"Name: {record.name}",
        f"ID: {record.id}",
        f"Path: {record.path}",
        f"Last Modified: {record.last_modification_time:{_TIMESTAMP_FORMAT}}",
    ]
    if record.tags:
        lines.append(f"Tags: {', '.join(record.tags)}")
    return lines


def format_record_list(records: list[Record]) -> list[str]:
    """Return an indented listing of records."""
    if not records:
        return ["No records found"]
    lines = [f"Found {len(records)} records:"]
    for record in records:
        lines.append(f"  - {record.name} ({record.id})")
        lines.append(f"    Path: {record.path}")
        lines.append(
            f"    Last Modified: {record.last_modification_time:{_TIMESTAMP_FORMAT}}"
        )
        if record.tags:
            lines.append(f"    Tags: {', '.join(record.tags)}")
        lines.append("")
    return lines


def format_record_summary(records: list[Record]) -> list[str]:
    """Return per-name counts for a set of records."""
    if not records:
        return ["No records found"]
    lines = [f"Found {len(records)} records"]
    lines.extend(
        f"  {name}: {count} record(s)" for name, count in summarize_by_name(records)
    )
    return lines


def format_deletion_report(report: DeletionReport) -> list[str]:
    """Return per-record outcomes of a batch deletion."""
    lines = [
        f"Successfully deleted record: {record.name} ({record.id})"
        for record in report.succeeded
    ]
    lines.extend(
        f"Failed to delete record {record.id}: {error}" for record, error in report.failed
    )
    lines.append(
        f"Records deleted: {len(report.succeeded)} of {report.attempted}"
    )
    return lines


def ask_login(terminal: Terminal) -> LoginCredentials:
    """Collect login credentials from the operator."""
    username = terminal.ask("Username").strip()
    password = terminal.ask_secret("Password")
    totp = terminal.ask("TOTP Code (optional, press Enter to skip)").strip()
    return LoginCredentials(username=username, password=password, totp_code=totp or None)


def _confirmed(answer: str) -> bool:
    return answer.strip().lower().startswith("y")


@dataclass
class TerminalReviewConsole(ReviewConsole):
    """Renders review progress and reads decisions from a terminal."""

    terminal: Terminal

    def show_record(self, review: ReviewSession, record: Record) -> None:
        position = review.index + 1
        self.terminal.write(f"\n--- Record {position} of {review.total} ---")
        for line in format_record_details(record):
            self.terminal.write(line)
        self.terminal.write(
            f"\nProgress: {position}/{review.total} | "
            f"Deleted: {review.deleted} | Skipped: {review.skipped}"
        )
        self.terminal.write("\nOptions:")
        self.terminal.write("  [D] Delete this record")
        self.terminal.write("  [S] Skip this record")
        self.terminal.write("  [E] Exit to main menu")

    def read_decision(self) -> str | None:
        return self.terminal.ask("Choose an option (D/S/E)")

    def show_step(self, step: ReviewStep) -> None:
        self.terminal.write(step.text)

    def show_summary(self, review: ReviewSession) -> None:
        if review.total == 0:
            return
        completed = review.state is ReviewState.COMPLETED
        title = "Review Complete" if completed else "Review Ended"
        self.terminal.write(f"\n=== {title} ===")
        self.terminal.write(f"Total records reviewed: {review.reviewed}")
        self.terminal.write(f"Records deleted: {review.deleted}")
        self.terminal.write(f"Records skipped: {review.skipped}")
        if review.failures:
            self.terminal.write(f"Failed deletions: {len(review.failures)}")


@dataclass
class Console:
    """Interactive main menu bound to one authenticated session."""

    container: AppContainer
    session: Session
    terminal: Terminal

    async def run_menu(self) -> None:
        """Loop over the main menu until the operator exits."""
        while True:
            self.terminal.write("\n=== Resonite API Tool ===")
            for line in menu_lines():
                self.terminal.write(line)
            option = parse_menu_choice(self.terminal.ask("\nSelect an option (1-6)"))
            if option is None:
                self.terminal.write("Invalid option. Please select 1-6.")
                continue
            if option is MenuOption.EXIT:
                self.terminal.write("Goodbye!")
                return
            try:
                await self.dispatch(option)
            except ResoniteError as exc:
                _logger.debug("Menu action %s failed", option.name, exc_info=exc)
                self.terminal.write(f"Error: {exc}")
            self.terminal.pause()

    async def dispatch(self, option: MenuOption) -> None:
        """Run the workflow behind a menu option."""
        if option is MenuOption.MANAGE_SCREENS:
            await self.manage_screens_records()
        elif option is MenuOption.REVIEW_MESSAGE_ITEMS:
            await self.review_message_items()
        elif option is MenuOption.SEARCH:
            await self.search_records()
        elif option is MenuOption.DISPLAY_TOKEN:
            self.display_auth_token()
        elif option is MenuOption.EDIT_PROFILE:
            await self.edit_profile()

    async def manage_screens_records(self) -> None:
        """Keep the newest Screens record and offer to delete older ones."""
        settings = self.container.settings
        group = RetentionGroup(
            name=settings.screens_record_name, path=settings.screens_record_path
        )
        plan = await self.container.retention_service.plan(self.session, group)
        if not plan.records:
            self.terminal.write(f"No {group.name} records found in {group.path}")
            return
        self.terminal.write(f"Found {len(plan.records)} {group.name} records in {group.path}")
        for line in format_record_list(plan.records):
            self.terminal.write(line)
        if not plan.candidates:
            self.terminal.write("No records to delete (only one record found)")
            return
        self.terminal.write("\nRecords to delete (excluding most recent):")
        for line in format_record_summary(plan.candidates):
            self.terminal.write(line)
        answer = self.terminal.ask(
            f"\nDelete {len(plan.candidates)} oldest {group.name} records? (y/n)"
        )
        if not _confirmed(answer):
            self.terminal.write("Deletion cancelled")
            return
        self.terminal.write(f"Deleting {len(plan.candidates)} records")
        report = await self.container.retention_service.apply(self.session, plan)
        for line in format_deletion_report(report):
            self.terminal.write(line)

    async def review_message_items(self) -> None:
        """Review message item records one by one."""
        self.terminal.write("\n=== Review Message Items ===")
        self.terminal.write(
            "Searching for records with 'message_item' tag "
            "(excluding voice+message combinations)..."
        )
        records = await self.container.query_service.message_items(self.session)
        if not records:
            self.terminal.write("No message item records found.")
            return
        self.terminal.write(f"Found {len(records)} message item records to review.")
        await self._review(records)

    async def search_records(self) -> None:
        """Search by name and/or tag and optionally review the results."""
        self.terminal.write("\n=== Search Records ===")
        self.terminal.write("Search for records by name, tag, or both criteria.")
        self.terminal.write("Leave fields empty to skip that criteria.\n")
        name = self.terminal.ask("Enter record name (or press Enter to skip)").strip()
        tag = self.terminal.ask("Enter tag name (or press Enter to skip)").strip()
        if not name and not tag:
            self.terminal.write(
                "Please provide at least one search criteria (name or tag)."
            )
            return
        self.terminal.write("\nSearching for records...")
        results = await self.container.query_service.search(
            self.session, name or None, tag or None
        )
        if name and tag:
            self.terminal.write(
                f"Found {len(results)} records matching both name '{name}' and tag '{tag}'"
            )
        elif name:
            self.terminal.write(f"Found {len(results)} records with name '{name}'")
        else:
            self.terminal.write(f"Found {len(results)} records with tag '{tag}'")
        if not results:
            self.terminal.write("No records found matching your search criteria.")
            return
        self.terminal.write("\nSearch Results Summary:")
        for line in format_record_summary(results):
            self.terminal.write(line)
        answer = self.terminal.ask("\nWould you like to review these records? (y/n)")
        if _confirmed(answer):
            await self._review(results)
        else:
            self.terminal.write("Search completed. Returning to main menu.")

    def display_auth_token(self) -> None:
        """Show the session credentials for use with other tools."""
        self.terminal.write("\n=== Authentication Token ===")
        self.terminal.write(f"User ID: {self.session.user_id}")
        self.terminal.write(f"Token: {self.session.token}")
        self.terminal.write("\nAuthorization Header Format:")
        self.terminal.write(self.session.authorization)
        self.terminal.write(
            "\nYou can use this token with other API tools or for debugging purposes."
        )

    async def edit_profile(self) -> None:
        """Edit the tagline and description of the user's profile."""
        self.terminal.write("\n=== Edit Profile ===")
        profile_service = self.container.profile_service
        current = await profile_service.get_profile(self.session)
        self.terminal.write("\nCurrent Profile:")
        self._write_profile(current)
        self.terminal.write("\nEnter new values (press Enter to keep current value):")
        tagline = self.terminal.ask(f"New tagline [{current.tagline or ''}]")
        description = self.terminal.ask(f"New description [{current.description or ''}]")
        updated = profile_service.apply_edits(current, tagline, description)
        self.terminal.write("\nProfile changes:")
        self._write_profile(updated)
        if not _confirmed(self.terminal.ask("\nSave these changes? (y/n)")):
            self.terminal.write("Profile update cancelled.")
            return
        await profile_service.update_profile(self.session, updated)
        self.terminal.write("✓ Profile updated successfully!")

    async def _review(self, records: list[Record]) -> ReviewSession:
        self.terminal.write("\n=== Interactive Review ===")
        self.terminal.write(f"Reviewing {len(records)} records...")
        return await self.container.review_service.run(
            self.session, records, TerminalReviewConsole(self.terminal)
        )

    def _write_profile(self, profile: UserProfile) -> None:
        self.terminal.write(f"Tagline: {profile.tagline or '(not set)'}")
        self.terminal.write(f"Description: {profile.description or '(not set)'}")
