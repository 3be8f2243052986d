"""Connection commands for the glconn CLI."""

import typer
from rich.console import Console
from rich.table import Table

from glconn.core.config import Config
from glconn.core.connection.service import ConnectionConfigService
from glconn.core.exceptions import StorageError

app = typer.Typer(help="Inspect and test GitLab connections")


def _load_service(console: Console) -> ConnectionConfigService:
    service = ConnectionConfigService.from_config(Config.load())
    try:
        service.load()
    except StorageError as e:
        console.print(f"[red]❌ {e}[/red]")
        raise typer.Exit(1) from None
    return service


@app.command("list")
def list_connections() -> None:
    """List the configured connections."""
    console = Console()
    service = _load_service(console)

    if not service.connections:
        console.print("[yellow]No connections configured[/yellow]")
        return

    table = Table(title="GitLab Connections")
    table.add_column("Name", style="cyan")
    table.add_column("URL", style="green")
    table.add_column("API Token", style="yellow")
    table.add_column("Verify TLS")

    for profile in service.connections:
        table.add_row(
            profile.name,
            profile.url,
            profile.api_token_id,
            "no" if profile.ignore_certificate_errors else "yes",
        )

    console.print(table)


@app.command()
def test(
    name: str = typer.Argument(None, help="Configured connection to test"),
    url: str = typer.Option(None, "--url", help="GitLab host URL (ad hoc test)"),
    api_token_id: str = typer.Option(None, "--api-token-id", help="Credential id of the API token"),
    ignore_certificate_errors: bool = typer.Option(
        False, "--ignore-certificate-errors", help="Skip TLS certificate verification"
    ),
) -> None:
    """Test a configured connection, or ad hoc settings given as options.

    Example:
        glconn connections test gitlab.com
        glconn connections test --url https://gitlab.example.com --api-token-id my-token
    """
    console = Console()
    service = _load_service(console)

    if name:
        profile = service.get_connection(name)
        if profile is None:
            console.print(f"[red]❌ Connection '{name}' not found[/red]")
            raise typer.Exit(1)
        url = url or profile.url
        api_token_id = api_token_id or profile.api_token_id
        ignore_certificate_errors = ignore_certificate_errors or profile.ignore_certificate_errors

    if not url or not api_token_id:
        console.print("[red]Error: give a connection name, or both --url and --api-token-id[/red]")
        raise typer.Exit(1)

    console.print(f"[cyan]Testing connection to {url}...[/cyan]")
    result = service.test_connection(url, api_token_id, ignore_certificate_errors)

    if result.is_ok:
        console.print(f"[green]✅ {result.message}[/green]")
    else:
        console.print(f"[red]❌ {result.message}[/red]")
        raise typer.Exit(1)
