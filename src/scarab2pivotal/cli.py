"""Command-line interface for scarab2pivotal."""

from pathlib import Path
from typing import Optional

import typer
from pydantic import ValidationError
from rich.console import Console

from scarab2pivotal.converter import convert
from scarab2pivotal.exceptions import Scarab2PivotalError
from scarab2pivotal.logging_config import configure_logging
from scarab2pivotal.models import ConverterConfig, Settings, StoryType

app = typer.Typer(
    name="scarab2pivotal",
    help="Convert CollabNet project tracker (Scarab) artifacts to Pivotal Tracker format",
    add_completion=False,
)
# stdout is reserved for CSV output
console = Console(stderr=True, soft_wrap=True)


def _validation_message(error: ValidationError) -> str:
    messages = []
    for detail in error.errors():
        message = str(detail["msg"])
        if message.startswith("Value error, "):
            messages.append(message.removeprefix("Value error, "))
        else:
            field = ".".join(str(part) for part in detail["loc"])
            messages.append(f"{field}: {message}")
    return "; ".join(messages)


@app.command("convert")
def convert_command(
    export_path: Path = typer.Argument(..., help="CollabNet project tracker export (<cn_tracker_export>)"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Direct output to <filename> rather than the console"
    ),
    story_type: Optional[StoryType] = typer.Option(
        None, "--type", "-t", help="The type of story to generate", case_sensitive=False
    ),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Threads used to replay issues"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Convert a Scarab XML export into a Pivotal Tracker CSV import file."""
    try:
        settings = Settings()
        configure_logging("DEBUG" if verbose else settings.log_level, settings.log_format)

        config = ConverterConfig(
            input_path=export_path,
            output_path=output,
            story_type=story_type if story_type is not None else settings.story_type,
            max_workers=workers if workers is not None else settings.max_workers,
        )
    except ValidationError as e:
        console.print(f"[bold red]Error:[/bold red] {_validation_message(e)}")
        raise typer.Exit(1)

    try:
        rows = convert(config)
    except (Scarab2PivotalError, OSError) as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        if verbose:
            console.print_exception()
        raise typer.Exit(1)

    if output:
        console.print(f"[bold green]✓[/bold green] Wrote {rows} stories to {output}")


@app.command()
def version() -> None:
    """Show version information."""
    from scarab2pivotal import __version__

    console.print(f"[bold]scarab2pivotal[/bold] version {__version__}")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
