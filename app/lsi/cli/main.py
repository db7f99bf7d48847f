"""Main CLI application entry point.

Defines the Typer application: ``lsi [OPTIONS] [PATH ...]``.
"""

import json
import logging
import os
from typing import Annotated

import typer

from lsi import __version__
from lsi.cli.display import ColumnOptions, print_header, print_records
from lsi.cli.types import OutputFormat, parse_duration
from lsi.core.config import ConfigError, Settings, load_settings
from lsi.utils.formatting import configure_logging, console, print_error
from lsi.walker import CancelToken, WalkCancelledError, WalkResult, clean_path, collect

logger = logging.getLogger(__name__)

app = typer.Typer(
    name="lsi",
    help="Analyze file paths by traversing and displaying each path component.",
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"lsi version {__version__}")
        raise typer.Exit()


@app.command()
def main(
    paths: Annotated[
        list[str] | None,
        typer.Argument(help="Paths to analyze. Defaults to the current directory."),
    ] = None,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    timeout: Annotated[
        float | None,
        typer.Option(
            "--timeout",
            "-t",
            parser=parse_duration,
            metavar="DURATION",
            help="Stop after this long (e.g. 30s, 5m). Default: unlimited.",
        ),
    ] = None,
    no_follow: Annotated[
        bool,
        typer.Option("--no-follow", "-n", help="Do not follow symlinks."),
    ] = False,
    long: Annotated[
        bool,
        typer.Option("--long", "-l", help="Long format (-p -u -g -s -m)."),
    ] = False,
    permissions: Annotated[
        bool,
        typer.Option("--permissions", "-p", help="Show file type and permissions."),
    ] = False,
    user: Annotated[
        bool,
        typer.Option("--user", "-u", help="Show file owner."),
    ] = False,
    group: Annotated[
        bool,
        typer.Option("--group", "-g", help="Show file group."),
    ] = False,
    size: Annotated[
        bool,
        typer.Option("--size", "-s", help="Show file size (bytes)."),
    ] = False,
    inode: Annotated[
        bool,
        typer.Option("--inode", "-i", help="Show file inode."),
    ] = False,
    mount: Annotated[
        bool,
        typer.Option("--mount", "-m", help="Mark mount points with '@'."),
    ] = False,
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format: text or json.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TEXT,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Enable debug logging."),
    ] = False,
) -> None:
    """Show every component of each PATH, following symlinks.

    Each symlink is shown with its target, which is then analyzed one
    level further indented.

    Examples:
        lsi /usr/bin/python3            # Walk a path, following links
        lsi -l /usr/bin/python3         # Long format with owners and mounts
        lsi -n ~/.local/bin/tool        # Do not follow symlinks
        lsi -t 5s /mnt/nfs/share/file   # Give up after five seconds
        lsi --format json /etc/alternatives/editor
    """
    configure_logging(verbose)
    settings = _load_settings_or_exit()

    show_long = long or settings.long_format
    follow = settings.follow_links and not no_follow
    options = ColumnOptions(
        mode=permissions or show_long,
        user=user or show_long,
        group=group or show_long,
        size=size or show_long,
        inode=inode,
        mount=mount or show_long,
        no_follow=not follow,
        indent_width=settings.indent_width,
    )

    targets = paths or [_current_directory()]
    deadline = timeout if timeout is not None else settings.timeout_seconds
    cancel = CancelToken(timeout=deadline)
    logger.debug(
        "Walking %d path(s): follow=%s timeout=%ss max_depth=%d",
        len(targets),
        follow,
        deadline or "unlimited",
        settings.max_depth,
    )

    results: list[tuple[str, WalkResult]] = []
    for index, target in enumerate(targets):
        try:
            result = collect(
                target,
                follow=follow,
                cancel=cancel,
                max_depth=settings.max_depth,
            )
        except WalkCancelledError as e:
            print_error(str(e))
            raise typer.Exit(code=1) from e
        results.append((target, result))

        if output_format == OutputFormat.TEXT:
            _print_text_block(
                target,
                result,
                options,
                header=len(targets) > 1,
                separate=index > 0,
            )

    if output_format == OutputFormat.JSON:
        _print_json(results)

    if any(not result.success for _, result in results):
        raise typer.Exit(code=1)


# === Private helper functions ===


def _load_settings_or_exit() -> Settings:
    """Load settings, exiting with code 2 when they are invalid."""
    try:
        return load_settings()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=2) from e


def _current_directory() -> str:
    """Get the working directory, exiting when it is unavailable."""
    try:
        return os.getcwd()
    except OSError as e:
        print_error(f"Failed to get current working directory: {e}")
        raise typer.Exit(code=1) from e


def _print_text_block(
    target: str,
    result: WalkResult,
    options: ColumnOptions,
    *,
    header: bool,
    separate: bool,
) -> None:
    """Print one path's records, optionally preceded by a header."""
    if separate:
        console.print()
    if header:
        print_header(clean_path(target))
    print_records(result.records, options)


def _print_json(results: list[tuple[str, WalkResult]]) -> None:
    """Display walk results as JSON."""
    data = [
        {
            "path": target,
            "records": [record.to_dict() for record in result.records],
            "error": str(result.error) if result.error is not None else None,
        }
        for target, result in results
    ]
    console.print_json(json.dumps(data), ensure_ascii=True)


if __name__ == "__main__":
    app()
