"""Configuration commands for the glconn CLI."""

import typer
from rich.console import Console
from rich.markdown import Markdown

from glconn.core.config import ConfigError, validate_all
from glconn.core.config.schema import ConfigSchema

app = typer.Typer(help="Configuration management")


def print_config_errors(console: Console, errors: list[ConfigError]) -> None:
    for error in errors:
        console.print(f"[red]❌ {error.env_var}={error.value!r}: {error.message}[/red]")


@app.command()
def validate() -> None:
    """Check every environment variable and report all problems at once."""
    console = Console()
    errors = validate_all()
    if errors:
        print_config_errors(console, errors)
        raise typer.Exit(1)
    console.print("[green]✅ Configuration is valid[/green]")


@app.command()
def env(
    raw: bool = typer.Option(False, "--raw", help="Print plain markdown instead of rendering it"),
) -> None:
    """Document the environment variables glconn reads."""
    docs = ConfigSchema.generate_markdown_docs()
    if raw:
        typer.echo(docs)
    else:
        Console().print(Markdown(docs))
