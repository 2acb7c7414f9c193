"""
CLI sync commands — update and push vendored trees.

Usage:
    vendorsync update-compiler-rt [UPSTREAM]
    vendorsync push-llvm-changes [UPSTREAM]
    vendorsync push-musl-changes [UPSTREAM]
    vendorsync sync PROFILE [UPSTREAM] [--dry-run]
    vendorsync profiles [--json]
    vendorsync mirror SOURCE DESTINATION
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from ..validation import ConfigurationError, MissingPathError

UPSTREAM_ARG = click.argument(
    "upstream",
    required=False,
    type=click.Path(file_okay=False, path_type=Path),
)


def _run(ctx: click.Context, profile_name: str, upstream: Optional[Path], dry_run: bool = False) -> None:
    """Resolve a profile and run it, reporting pre-flight failures."""
    from ..sync.loader import get_profile
    from ..sync.runner import run_profile

    root: Path = ctx.obj["root"]

    try:
        profile = get_profile(profile_name, ctx.obj.get("profiles_file"))
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    def announce(src: Path, dest: Path) -> None:
        click.echo(f"copying {src} -> {dest}")

    try:
        result = run_profile(profile, root, upstream, dry_run=dry_run, on_pairing=announce)
    except MissingPathError as e:
        click.echo(str(e))
        raise SystemExit(1)

    if dry_run:
        click.secho(f"\n(Dry run — {profile.name}: nothing copied)", fg="cyan")
        for src, dest in result.pairings:
            click.echo(f"  would copy {src} -> {dest}")
        return

    summary = f"✓ {profile.name}: {len(result.pairings)} director"
    summary += "y" if len(result.pairings) == 1 else "ies"
    if result.files_copied or result.files_skipped:
        summary += f", {result.files_copied} file(s) copied, {result.files_skipped} skipped"
    click.secho(summary, fg="green")


@click.command("update-compiler-rt")
@UPSTREAM_ARG
@click.pass_context
def update_compiler_rt(ctx: click.Context, upstream: Optional[Path]) -> None:
    """Copy compiler-rt from the upstream llvm tree into system/lib."""
    _run(ctx, "compiler-rt", upstream)


@click.command("push-llvm-changes")
@UPSTREAM_ARG
@click.pass_context
def push_llvm_changes(ctx: click.Context, upstream: Optional[Path]) -> None:
    """Copy local compiler-rt, libcxx and libcxxabi into the upstream llvm tree."""
    _run(ctx, "llvm", upstream)


@click.command("push-musl-changes")
@UPSTREAM_ARG
@click.pass_context
def push_musl_changes(ctx: click.Context, upstream: Optional[Path]) -> None:
    """Copy local musl changes into the upstream musl tree."""
    _run(ctx, "musl", upstream)


@click.command("sync")
@click.argument("profile_name", metavar="PROFILE")
@UPSTREAM_ARG
@click.option("--dry-run", is_flag=True, help="Check paths and show the plan without copying")
@click.pass_context
def sync(ctx: click.Context, profile_name: str, upstream: Optional[Path], dry_run: bool) -> None:
    """Run any sync profile by name."""
    _run(ctx, profile_name, upstream, dry_run=dry_run)


@click.command("profiles")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
@click.pass_context
def profiles(ctx: click.Context, as_json: bool) -> None:
    """List known sync profiles."""
    import json as json_lib

    from ..sync.loader import load_profiles

    try:
        known = load_profiles(ctx.obj.get("profiles_file"))
    except ConfigurationError as e:
        raise click.ClickException(str(e))

    if as_json:
        data = [p.model_dump() for p in known.values()]
        click.echo(json_lib.dumps(data, indent=2))
        return

    click.echo("\n📦 Sync Profiles\n")
    for name, profile in sorted(known.items()):
        arrow = "upstream → local" if profile.direction == "update" else "local → upstream"
        click.secho(f"  {name}", bold=True, nl=False)
        click.echo(f" — {arrow}, {profile.mode}")
        if profile.description:
            click.echo(f"    {profile.description}")
        click.echo(f"    local:    {profile.local_dir}")
        click.echo(f"    upstream: {profile.upstream_default}")
        for pairing in profile.pairings:
            click.echo(f"      • {pairing.label}")
    click.echo()


@click.command("mirror")
@click.argument("source", type=click.Path(path_type=Path))
@click.argument("destination", type=click.Path(path_type=Path))
def mirror(source: Path, destination: Path) -> None:
    """Replace DESTINATION with a full copy of SOURCE."""
    from ..mirror.tree import mirror_tree

    if not source.exists():
        click.echo(f"{source} not found")
        raise SystemExit(1)

    click.echo(f"copying {source} -> {destination}")
    try:
        mirror_tree(source, destination)
    except ValueError as e:
        raise click.ClickException(str(e))
