"""
asdf-config — CLI entrypoint.

Usage:
    asdf-config --help
    asdf-config install --dry-run
    asdf-config --config team.yaml list --verbose
    python -m asdf_config.main list --all --category security
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from asdf_config import __version__
from asdf_config.core.observability.logging_config import resolve_level, setup_logging


def _config_path(ctx: click.Context) -> Path:
    from asdf_config.core.config.loader import default_config_path

    return ctx.obj.get("config_path") or default_config_path()


@click.group()
@click.version_option(version=__version__, prog_name="asdf-config")
@click.option("--verbose", "-v", is_flag=True, help="Verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential log output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False, dir_okay=False),
    default=None,
    help="Configuration file path (default: .asdf-config.yaml).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """Declarative configuration management for asdf plugins."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    setup_logging(
        level=resolve_level(debug, verbose, quiet, os.environ.get("ASDF_CONFIG_LOG_LEVEL")),
        log_file=os.environ.get("ASDF_CONFIG_LOG_FILE"),
        log_file_level=os.environ.get("ASDF_CONFIG_LOG_FILE_LEVEL"),
    )


# ── Init ────────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["yaml", "toml"]),
    default="yaml",
    show_default=True,
    help="Output format.",
)
@click.option("--force", is_flag=True, help="Overwrite an existing file.")
@click.pass_context
def init(ctx: click.Context, fmt: str, force: bool) -> None:
    """Initialize a new configuration file."""
    from asdf_config.core.services.templates import config_filename, starter_config

    path: Path = ctx.obj.get("config_path") or Path(config_filename(fmt))

    if path.exists() and not force:
        click.secho(f"⚠️  {path} already exists (use --force to overwrite)", fg="yellow")
        sys.exit(1)

    path.write_text(starter_config(fmt), encoding="utf-8")
    click.secho(f"✓ Created {path}", fg="green", bold=True)
    if ctx.obj.get("verbose"):
        click.echo("  Edit it, then run 'asdf-config install --dry-run' to preview.")


# ── Validate ────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def validate(ctx: click.Context, as_json: bool) -> None:
    """Validate the configuration file."""
    from asdf_config.core.use_cases.config_check import check_config

    result = check_config(config_path=_config_path(ctx))

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        sys.exit(0 if result.valid else 1)

    if result.valid:
        assert result.config is not None
        click.secho("✓ Configuration is valid", fg="green", bold=True)
        click.echo(f"  File:    {result.config_path}")
        click.echo(f"  Plugins: {len(result.config.plugins)}")
    else:
        click.secho("✗ Configuration errors:", fg="red", bold=True)
        for err in result.errors:
            click.echo(f"  • {err}")

    if result.warnings:
        click.echo()
        click.secho("⚠️  Warnings:", fg="yellow")
        for warn in result.warnings:
            click.echo(f"  • {warn}")

    if not result.valid:
        sys.exit(1)


# ── List ────────────────────────────────────────────────────────


@cli.command("list")
@click.option("--all", "-a", "show_all", is_flag=True, help="Show all known plugins (catalog).")
@click.option("--category", "-c", default=None, help="Filter the catalog by category.")
@click.pass_context
def list_plugins(ctx: click.Context, show_all: bool, category: str | None) -> None:
    """List configured plugins."""
    from asdf_config.core.config.loader import ConfigParseError
    from asdf_config.core.services.catalog import REGISTRY_URL
    from asdf_config.core.use_cases.listing import list_catalog, list_configured

    if show_all:
        listing = list_catalog(category)
        click.secho("→ Available plugins from hyperpolymath ecosystem:", fg="blue")
        click.echo()
        for cat, items in listing.entries.items():
            click.secho(f"  ▸ {cat}:", fg="cyan", bold=True)
            for name, desc in items:
                click.echo(f"    • {click.style(name, fg='green')} - {desc}")
            click.echo()
        if category is None:
            click.secho("ℹ Use --category <name> to filter", fg="blue")
        click.echo(f"ℹ Full registry at: {REGISTRY_URL}")
        return

    try:
        result = list_configured(config_path=_config_path(ctx))
    except ConfigParseError as e:
        click.secho(f"✗ {e}", fg="red")
        sys.exit(1)

    if result.error:
        click.secho("! No configuration file found", fg="yellow")
        click.echo("  Run 'asdf-config init' to create one")
        click.echo("  Or use 'asdf-config list --all' to see available plugins")
        return

    assert result.config is not None
    verbose = ctx.obj.get("verbose", False)

    click.secho("→ Configured plugins:", fg="blue")
    click.echo()
    for name, spec in result.config.plugins.items():
        optional = click.style(" (optional)", dim=True) if spec.optional else ""
        click.echo(f"  • {click.style(name, bold=True)} @ {click.style(spec.version, fg='green')}{optional}")
        if verbose:
            for cmd in spec.post_install:
                click.secho(f"    → {cmd}", dim=True)

    click.echo()
    click.echo(f"ℹ Total: {result.total} plugins")


# ── Install ─────────────────────────────────────────────────────


@cli.command()
@click.option("--plugin", "-p", default=None, help="Only install the named plugin.")
@click.option("--dry-run", "-d", is_flag=True, help="Show what would be installed.")
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output the report as JSON.")
@click.pass_context
def install(ctx: click.Context, plugin: str | None, dry_run: bool, as_json: bool) -> None:
    """Install plugins from the configuration.

    Examples:

        asdf-config install --dry-run

        asdf-config install --plugin trivy
    """
    from asdf_config.adapters.asdf import ToolNotFoundError
    from asdf_config.core.config.loader import ConfigParseError
    from asdf_config.core.use_cases.install import run_install

    try:
        result = run_install(
            config_path=_config_path(ctx),
            plugin=plugin,
            dry_run=dry_run,
            adapter=ctx.obj.get("adapter"),
        )
    except (ConfigParseError, ToolNotFoundError) as e:
        click.secho(f"✗ {e}", fg="red")
        sys.exit(1)

    if as_json:
        click.echo(json.dumps(result.to_dict(), indent=2))
        return

    if result.error:
        click.secho(f"✗ {result.error}", fg="red")
        return

    if result.nothing_to_do:
        click.secho("! No plugins to install", fg="yellow")
        return

    report = result.report
    verbose = ctx.obj.get("verbose", False)
    suffix = " (dry run)" if dry_run else ""
    click.secho(f"→ Installing {len(result.selected)} plugin(s){suffix}", fg="blue")
    click.echo()

    for p in report.plugins:
        if dry_run:
            click.echo(
                f"  → Would install {click.style(p.name, bold=True)} @ "
                f"{click.style(p.version, fg='green')} from {click.style(p.source, dim=True)}"
            )
            continue

        for step in p.steps:
            if step.step == "plugin_add":
                click.echo(f"  → Adding plugin {p.name}...")
                if verbose:
                    click.echo(f"    Source: {p.source}")
            elif step.step == "install":
                click.echo(f"  → Installing {p.name} @ {p.version}...")
            elif step.step == "post_install" and verbose:
                click.echo(f"    Running: {step.command}")

        if p.errored:
            click.secho(f"  ✗ {p.error}", fg="red")
        else:
            click.secho(f"  ✓ Installed {p.name} @ {p.resolved_version}", fg="green")

    click.echo()
    if dry_run:
        return
    if report.failed:
        click.secho(
            f"⚠️  Installation complete: {report.succeeded}/{report.total} succeeded",
            fg="yellow",
        )
    else:
        click.secho("✓ Installation complete", fg="green", bold=True)


# ── Sync ────────────────────────────────────────────────────────


@cli.command()
@click.option("--pull", "-p", is_flag=True, help="Pull remote configuration.")
@click.option("--push", "-P", is_flag=True, help="Push local versions to remote.")
def sync(pull: bool, push: bool) -> None:
    """Sync plugin versions across a team (not yet implemented)."""
    if not pull and not push:
        click.secho("! Specify --pull or --push", fg="yellow")
        click.echo()
        click.echo(f"  {click.style('--pull', fg='cyan')} Pull remote configuration")
        click.echo(f"  {click.style('--push', fg='cyan')} Push local versions to remote")
        return

    if pull:
        click.secho("→ Sync pull not yet implemented", fg="blue")
        click.echo("  This will fetch plugin versions from a remote configuration")
    if push:
        click.secho("→ Sync push not yet implemented", fg="blue")
        click.echo("  This will push local plugin versions to remote configuration")


# ── Export ──────────────────────────────────────────────────────


@cli.command()
@click.option(
    "--format",
    "-f",
    "fmt",
    type=click.Choice(["yaml", "toml"]),
    default="yaml",
    show_default=True,
    help="Output format.",
)
@click.option(
    "--output",
    "-o",
    type=click.Path(dir_okay=False),
    default=None,
    help="Output file (default: stdout).",
)
@click.pass_context
def export(ctx: click.Context, fmt: str, output: str | None) -> None:
    """Export the current asdf setup as a configuration file."""
    from asdf_config.adapters.asdf import ToolNotFoundError
    from asdf_config.core.use_cases.export import run_export

    try:
        result = run_export(
            fmt=fmt,
            output=Path(output) if output else None,
            adapter=ctx.obj.get("adapter"),
        )
    except ToolNotFoundError as e:
        click.secho(f"✗ {e}", fg="red")
        sys.exit(1)

    if result.error:
        click.secho(f"✗ {result.error}", fg="red")
        sys.exit(1)

    assert result.config is not None
    if result.output is None:
        click.echo(result.text, nl=False)
    else:
        click.secho(
            f"✓ Exported {len(result.config.plugins)} plugin(s) to {result.output}",
            fg="green",
        )


# ── Search ──────────────────────────────────────────────────────


@cli.command()
@click.argument("query")
@click.pass_context
def search(ctx: click.Context, query: str) -> None:
    """Search available plugins (not yet implemented)."""
    from asdf_config.core.services.catalog import REGISTRY_URL

    click.secho(f"→ Searching for '{query}'...", fg="blue")
    click.secho("Note: Search requires asdf-metaiconic-plugin registry", fg="yellow")
    click.echo(f"Registry URL: {REGISTRY_URL}")
    if ctx.obj.get("verbose"):
        click.echo("ℹ This feature will query the metaiconic plugin registry")


if __name__ == "__main__":
    cli()
