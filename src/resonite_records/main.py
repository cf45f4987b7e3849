"""Command-line entry point."""

import asyncio
from typing import Annotated

import typer

from resonite_records.app_logging import configure_logging
from resonite_records.console import Console, Terminal, TyperTerminal, ask_login
from resonite_records.containers import AppContainer, build_container
from resonite_records.errors import AuthError

app = typer.Typer(add_completion=False, help="Manage Resonite records and profile.")


@app.command()
def main(
    debug: Annotated[
        bool, typer.Option("--debug", help="Enable debug logging.")
    ] = False,
) -> None:
    """Log in and open the interactive menu."""
    configure_logging(debug=debug)
    container = build_container()
    try:
        asyncio.run(run(container, TyperTerminal()))
    except AuthError as exc:
        typer.echo(f"Error: {exc}", err=True)
        raise typer.Exit(code=1) from exc


async def run(container: AppContainer, terminal: Terminal) -> None:
    """Authenticate, then serve the menu until the operator exits."""
    try:
        credentials = ask_login(terminal)
        session = await container.auth_client.create_session(credentials)
        await Console(container, session, terminal).run_menu()
    finally:
        await container.close_resources()


if __name__ == "__main__":
    app()
