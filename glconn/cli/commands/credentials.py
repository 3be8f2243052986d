"""Credential commands for the glconn CLI."""

import typer
from rich.console import Console
from rich.table import Table

from glconn.core.config import Config
from glconn.core.credentials import Credential, CredentialKind, FileSystemCredentialStore
from glconn.core.credentials.matcher import ApiTokenCredentialMatcher
from glconn.core.exceptions import StorageError

app = typer.Typer(help="Manage the credential store")


def _store() -> FileSystemCredentialStore:
    return FileSystemCredentialStore(Config.load().credentials_file)


@app.command("list")
def list_credentials() -> None:
    """List stored credentials (secrets are never shown)."""
    console = Console()
    try:
        credentials = _store().lookup_credentials()
    except StorageError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    if not credentials:
        console.print("[yellow]No credentials stored[/yellow]")
        return

    matcher = ApiTokenCredentialMatcher()
    table = Table(title="Credentials")
    table.add_column("ID", style="cyan")
    table.add_column("Kind", style="green")
    table.add_column("Description")
    table.add_column("API token", style="yellow")

    for credential in credentials:
        table.add_row(
            credential.id,
            credential.kind.value,
            credential.description,
            "yes" if matcher.matches(credential) else "no",
        )

    console.print(table)


@app.command()
def add(
    credential_id: str = typer.Argument(..., help="Credential id referenced by connections"),
    kind: CredentialKind = typer.Option(CredentialKind.STRING, "--kind", help="Credential kind"),
    description: str = typer.Option("", "--description", "-d", help="Human-readable label"),
    secret: str = typer.Option(
        ..., "--secret", prompt=True, hide_input=True, help="Secret value (prompted when omitted)"
    ),
) -> None:
    """Store a credential, replacing any credential with the same id.

    Example:
        glconn credentials add gitlab-token -d "GitLab bot token"
    """
    console = Console()
    try:
        _store().add(
            Credential(id=credential_id, kind=kind, description=description, secret=secret)
        )
    except StorageError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None

    console.print(f"[green]✅ Stored {kind.value} credential '{credential_id}'[/green]")
