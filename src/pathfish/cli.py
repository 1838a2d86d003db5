"""Command-line entry point for pathfish.

Reads text from a file or stdin, runs the extraction pipeline and prints the
formatted result.
"""

import logging
import sys
from pathlib import Path
from typing import Annotated, Optional

import typer

from pathfish import __version__
from pathfish.config import ConfigurationError, load_config
from pathfish.engine import run_pipeline
from pathfish.tools.clipboard import copy_to_clipboard


logger = logging.getLogger(__name__)

app = typer.Typer(
    name="pathfish",
    help="Fuzzy-extract file paths from any blob of text.",
    add_completion=False,
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"pathfish v{__version__}")
        raise typer.Exit()


def read_input(file: Optional[Path], base_dir: str) -> str:
    """Read the input file (relative to base_dir) or all of stdin."""
    if file is None:
        return sys.stdin.read()
    path = file if file.is_absolute() else Path(base_dir) / file
    return path.read_text(encoding="utf-8")


@app.command()
def main(
    file: Annotated[
        Optional[Path],
        typer.Argument(help="File to read. Reads stdin when omitted."),
    ] = None,
    output_format: Annotated[
        Optional[str],
        typer.Option("--format", "-f", help="Output format: json, yaml, list."),
    ] = None,
    pretty: Annotated[
        Optional[bool],
        typer.Option("--pretty/--no-pretty", help="Pretty-print JSON output."),
    ] = None,
    absolute: Annotated[
        Optional[bool],
        typer.Option("--absolute/--relative", help="Convert all paths to absolute."),
    ] = None,
    cwd: Annotated[
        Optional[Path],
        typer.Option("--cwd", help="Base directory for resolving paths."),
    ] = None,
    verify: Annotated[
        Optional[bool],
        typer.Option("--verify/--no-verify", help="Drop paths that do not exist on disk."),
    ] = None,
    strategy: Annotated[
        Optional[str],
        typer.Option("--strategy", "-s", help="Extraction strategy: pattern, fuzzy, both."),
    ] = None,
    copy: Annotated[
        bool,
        typer.Option("--copy", help="Copy the final output to the clipboard."),
    ] = False,
    config: Annotated[
        Optional[Path],
        typer.Option("--config", "-c", help="Path to a pathfish YAML config file."),
    ] = None,
    strict_config: Annotated[
        bool,
        typer.Option("--strict-config", help="Treat configuration warnings as errors."),
    ] = False,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", help="Enable debug logging on stderr."),
    ] = False,
    version: Annotated[
        Optional[bool],
        typer.Option(
            "--version",
            "-v",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
) -> None:
    """Extract file paths from FILE or stdin and print them."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        result = load_config(config, strict_mode=strict_config)
        logger.debug(f"Loaded {result.config}")
        for warning in result.warnings:
            logger.warning(warning)

        options = result.config.to_pipeline_options(
            strategy=strategy,
            format=output_format,
            pretty=pretty,
            make_absolute=absolute,
            verify=verify,
            base_dir=str(cwd) if cwd else None,
        )
        logger.debug(f"Pipeline options: {options.to_dict()}")
        text = read_input(file, options.base_dir)
        output = run_pipeline(text, options)
    except (ConfigurationError, ValueError, OSError) as e:
        typer.echo(f"Error: {e}", err=True)
        raise typer.Exit(code=1)

    typer.echo(output)

    # Copying happens after the result is printed and never fails the run
    if copy:
        copy_to_clipboard(output)


if __name__ == "__main__":
    app()
