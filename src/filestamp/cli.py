from __future__ import annotations

import logging
from dataclasses import replace
from pathlib import Path

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .checksum import get_checksum_for_path
from .compare import compare_checksums, compare_info
from .config import FileStampConfig, load_config
from .errors import FileStampError
from .file_info import get_info_for_path
from .models import FileChecksum

app = typer.Typer(help="Inspect file metadata signatures and content checksums")
console = Console()


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _resolve_config(config_path: Path | None, algorithm: str | None) -> FileStampConfig:
    config = load_config(config_path.expanduser() if config_path else None)
    if algorithm:
        config = replace(config, algorithm=algorithm.strip().lower())
    return config


def _checksum_label(checksum: FileChecksum) -> str:
    if checksum.is_missing:
        return "<missing>"
    if checksum.is_directory:
        return "<directory>"
    return checksum.hex()


@app.callback()
def _main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Enable debug logging"),
) -> None:
    _configure_logging(verbose)


@app.command()
def info(
    paths: list[Path] = typer.Argument(..., help="Paths to stat"),
    follow: bool = typer.Option(
        True,
        "--follow/--no-follow",
        help="Follow symbolic links (stat) or report the link itself (lstat)",
    ),
) -> None:
    """Show the metadata signature of each path."""
    table = Table(title="File info")
    table.add_column("path", overflow="fold")
    table.add_column("type", no_wrap=True)
    table.add_column("device", overflow="fold")
    table.add_column("inode", overflow="fold")
    table.add_column("mode", no_wrap=True)
    table.add_column("size", no_wrap=True)
    table.add_column("mtime", overflow="fold")
    for path in paths:
        file_info = get_info_for_path(path, follow_symlinks=follow)
        table.add_row(
            str(path),
            file_info.node_type.value,
            str(file_info.device),
            str(file_info.inode),
            f"0o{file_info.mode:06o}",
            str(file_info.size),
            f"{file_info.mod_time.seconds}.{file_info.mod_time.nanoseconds:09d}",
        )
    console.print(table)


@app.command()
def checksum(
    paths: list[Path] = typer.Argument(..., help="Paths to hash"),
    algorithm: str | None = typer.Option(None, help="Digest algorithm override"),
    config: Path | None = typer.Option(
        None, help="TOML file with a [tool.filestamp] or [filestamp] table"
    ),
) -> None:
    """Print the 32-byte content checksum of each path as hex."""
    try:
        resolved = _resolve_config(config, algorithm)
        for path in paths:
            value = get_checksum_for_path(path, resolved)
            console.print(
                f"{_checksum_label(value)}  {path}", highlight=False, soft_wrap=True
            )
    except FileStampError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)


@app.command()
def compare(
    previous: Path = typer.Argument(..., help="Baseline path"),
    current: Path = typer.Argument(..., help="Path to compare against the baseline"),
    algorithm: str | None = typer.Option(None, help="Digest algorithm override"),
    config: Path | None = typer.Option(None, help="TOML configuration file"),
) -> None:
    """Compare metadata and content of two paths."""
    try:
        resolved = _resolve_config(config, algorithm)
        info_diff = compare_info(get_info_for_path(previous), get_info_for_path(current))
        content_state = compare_checksums(
            get_checksum_for_path(previous, resolved),
            get_checksum_for_path(current, resolved),
        )
    except FileStampError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1)

    console.print(f"metadata: {info_diff.state.value}", highlight=False)
    for detail in info_diff.details:
        console.print(f"  {detail}", highlight=False, soft_wrap=True)
    console.print(f"content: {content_state.value}", highlight=False)


if __name__ == "__main__":
    app()
