"""Main CLI entry point for gitlab-connections."""

import typer
from rich.console import Console

from glconn.cli.commands import config, connections, credentials
from glconn.core.logging import configure_root_logging

app = typer.Typer(
    name="glconn",
    help="GitLab Connections CLI - manage named GitLab connections",
    no_args_is_help=True,
    rich_markup_mode="rich",
)

app.add_typer(connections.app, name="connections", help="Inspect and test connections")
app.add_typer(credentials.app, name="credentials", help="Manage the credential store")
app.add_typer(config.app, name="config", help="Configuration management")


@app.command()
def version() -> None:
    """Show version information."""
    from glconn import __version__

    console = Console()
    console.print(f"[bold cyan]glconn[/bold cyan] version [green]{__version__}[/green]")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """GitLab Connections CLI."""
    configure_root_logging("DEBUG" if verbose else "WARNING")


@app.command()
def start(
    host: str = typer.Option(None, "--host", help="Override host"),
    port: int = typer.Option(None, "--port", help="Override port"),
) -> None:
    """Start the administration server."""
    import uvicorn

    from glconn.core.config import Config, validate_all
    from glconn.main import create_app

    console = Console()
    errors = validate_all()
    if errors:
        config.print_config_errors(console, errors)
        raise typer.Exit(1)

    settings = Config.load()
    configure_root_logging(settings.log_level)

    server_host = host or settings.host
    server_port = port or settings.port

    console.print("[bold green]Starting GitLab Connections server...[/bold green]")
    console.print(f"Host: {server_host}")
    console.print(f"Port: {server_port}")
    console.print(f"Connections: {settings.connections_file}")

    uvicorn.run(
        create_app(settings),
        host=server_host,
        port=server_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    app()
