"""
buildergen — CLI entrypoint.

Usage:
    buildergen --help
    buildergen generate descriptors/person.yml
    buildergen generate --write --out build/generated
    buildergen check
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from buildergen import __version__
from buildergen.core.observability.logging_config import setup_logging


@click.group()
@click.version_option(version=__version__, prog_name="buildergen")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to buildergen.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """buildergen — generate Java builder classes from class descriptors."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    if debug:
        level = "DEBUG"
    elif verbose:
        level = "INFO"
    elif quiet:
        level = "ERROR"
    else:
        level = os.environ.get("BUILDERGEN_LOG_LEVEL", "WARNING")

    setup_logging(
        level=level,
        log_file=os.environ.get("BUILDERGEN_LOG_FILE"),
        log_file_level=os.environ.get("BUILDERGEN_LOG_FILE_LEVEL"),
    )


_descriptor_files = click.argument(
    "descriptor_files",
    nargs=-1,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
)


@cli.command()
@_descriptor_files
@click.option(
    "--out",
    "-o",
    "output_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default: output_dir from buildergen.yml).",
)
@click.option("--write", is_flag=True, help="Write to disk (default: preview only).")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    descriptor_files: tuple[Path, ...],
    output_dir: Path | None,
    write: bool,
    as_json: bool,
) -> None:
    """Generate builder sources for the given descriptor files.

    Examples:

        buildergen generate descriptors/person.yml

        buildergen generate --write --out build/generated
    """
    from buildergen.core.use_cases.generate import run_generate

    result = run_generate(
        descriptor_files=list(descriptor_files) or None,
        config_path=ctx.obj.get("config_path"),
        output_dir=output_dir,
        write=write,
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(1 if result.error else 0)
        return

    if result.error:
        click.secho(f"❌ {result.error}", fg="red")
        sys.exit(1)

    pass_result = result.pass_result
    assert pass_result is not None  # guaranteed after error check above
    quiet = ctx.obj.get("quiet", False)

    for name in pass_result.skipped:
        click.secho(f"⚠️  Skipped {name} (not a class)", fg="yellow")

    if write:
        for path in result.written:
            click.secho(f"✅ Written: {path}", fg="green")
    else:
        for name, text in result.previews.items():
            click.secho(f"📄 Preview: {name}", fg="cyan", bold=True)
            if not quiet:
                click.echo("─" * 60)
                click.echo(text, nl=False)
                click.echo("─" * 60)
        if result.previews and not quiet:
            click.secho("   (use --write to save to disk)", fg="yellow")

    click.echo(
        f"\n   Generated: {len(pass_result.units)} | Skipped: {len(pass_result.skipped)}"
    )


@cli.command()
@_descriptor_files
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def check(ctx: click.Context, descriptor_files: tuple[Path, ...], as_json: bool) -> None:
    """Validate descriptor files without generating anything."""
    from buildergen.core.use_cases.descriptor_check import check_descriptors

    result = check_descriptors(
        descriptor_files=list(descriptor_files) or None,
        config_path=ctx.obj.get("config_path"),
    )

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)
        return

    if result.valid:
        click.secho("✅ Descriptors are valid", fg="green", bold=True)
        click.echo(f"   Files: {len(result.descriptor_files)}")
        for name in result.would_generate:
            click.echo(f"     • {name}")
    else:
        click.secho("❌ Descriptor errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"   • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"   • {warn}")

    if not result.valid:
        sys.exit(1)


if __name__ == "__main__":
    cli()
