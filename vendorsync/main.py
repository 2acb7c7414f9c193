"""
vendorsync — CLI Entry Point

Usage:
    vendorsync [--root DIR] [--profiles-file FILE] update-compiler-rt [UPSTREAM]
    vendorsync [--root DIR] push-llvm-changes [UPSTREAM]
    vendorsync [--root DIR] push-musl-changes [UPSTREAM]
    vendorsync sync PROFILE [UPSTREAM] [--dry-run]
    vendorsync profiles [--json]
    vendorsync mirror SOURCE DESTINATION

The project root defaults to the current working directory. Upstream
checkouts default to siblings of the project root (``../llvm-project``,
``../musl``).
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from .cli.sync import (
    mirror,
    profiles,
    push_llvm_changes,
    push_musl_changes,
    sync,
    update_compiler_rt,
)
from .logging_config import setup_logging

# Initialize logging
setup_logging()


def get_project_root() -> Path:
    """Get the default project root (the current working directory)."""
    return Path.cwd()


@click.group()
@click.option(
    "--root",
    type=click.Path(exists=True, file_okay=False, path_type=Path),
    default=None,
    help="Project root holding system/lib (default: current directory)",
)
@click.option(
    "--profiles-file",
    type=click.Path(dir_okay=False, path_type=Path),
    default=None,
    help="YAML file with additional sync profiles",
)
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
@click.pass_context
def cli(ctx: click.Context, root: Optional[Path], profiles_file: Optional[Path], verbose: bool) -> None:
    """vendorsync — keep vendored source trees in step with upstream."""
    ctx.ensure_object(dict)
    ctx.obj["root"] = root or get_project_root()
    ctx.obj["profiles_file"] = profiles_file
    if verbose:
        setup_logging(level="DEBUG")


cli.add_command(update_compiler_rt)
cli.add_command(push_llvm_changes)
cli.add_command(push_musl_changes)
cli.add_command(sync)
cli.add_command(profiles)
cli.add_command(mirror)


if __name__ == "__main__":
    cli()
