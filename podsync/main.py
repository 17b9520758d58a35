"""
podsync — CLI entrypoint.

Usage:
    python -m podsync.main --help
    python -m podsync.main status
    python -m podsync.main setup path/to/app
    python -m podsync.main install path/to/app/ios --engine-dir path/to/engine
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path

import click

from podsync import __version__
from podsync.core.observability.logging_config import (
    FILE_ENV_VAR,
    FILE_LEVEL_ENV_VAR,
    resolve_level,
    setup_logging,
)


@click.group()
@click.version_option(version=__version__, prog_name="podsync")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to podsync.yml (default: auto-detect).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
) -> None:
    """podsync — run CocoaPods for Flutter iOS projects."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose or debug
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None

    # ── Logging setup (once, at process start) ──────────────────
    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV_VAR),
        log_file_level=os.environ.get(FILE_LEVEL_ENV_VAR),
    )


def _echo(text: str, err: bool) -> None:
    if err:
        click.secho(text, fg="yellow", err=True)
    else:
        click.echo(text)


def _load(ctx: click.Context):
    """Load settings or exit with the configuration error."""
    from podsync.core.config.loader import ConfigError, load_settings

    try:
        return load_settings(ctx.obj.get("config_path"))
    except ConfigError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)


def _runner(ctx: click.Context):
    """The process runner: injected through ctx.obj["runner"] or a real one."""
    from podsync.adapters.shell.command import SubprocessRunner

    return ctx.obj.get("runner") or SubprocessRunner()


def _build_cocoapods(ctx: click.Context):
    from podsync.core.observability.reporter import Reporter
    from podsync.core.services.cocoapods import CocoaPods

    settings = _load(ctx)
    reporter = Reporter(echo=_echo, verbose=ctx.obj["verbose"])
    return CocoaPods(_runner(ctx), reporter, settings)


# ── Probe ───────────────────────────────────────────────────────


@cli.command()
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def status(ctx: click.Context, as_json: bool) -> None:
    """Show the CocoaPods installation status."""
    cocoapods = _build_cocoapods(ctx)
    installation = cocoapods.installation
    tier = cocoapods.evaluate_installation()
    initialized = cocoapods.is_initialized()

    result = {
        "version": cocoapods.version_text(),
        "status": tier.value,
        "initialized": initialized,
        "minimum_version": installation.minimum_version,
        "recommended_version": installation.recommended_version,
    }

    if as_json:
        click.echo(json.dumps(result, indent=2))
        return

    icon = "✅" if tier.usable else "❌"
    click.secho("📦 CocoaPods:", fg="cyan", bold=True)
    click.echo(f"   {icon} {result['version'] or 'not installed'} ({tier.value})")
    click.echo(
        f"   Minimum {installation.minimum_version}, "
        f"recommended {installation.recommended_version}"
    )
    click.echo(f"   {'✅' if initialized else '⚠️ '} Specs repo: {installation.specs_repo_dir}")


# ── Act ─────────────────────────────────────────────────────────


@cli.command()
@click.argument("app_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.pass_context
def setup(ctx: click.Context, app_dir: Path) -> None:
    """Create ios/Podfile and wire the Flutter xcconfig files to pods."""
    from podsync.adapters.xcode.project import XcodeProjectInterpreter
    from podsync.core.services.cocoapods import PodfileError, PodfileScaffolder

    settings = _load(ctx)
    xcode = XcodeProjectInterpreter(_runner(ctx))
    scaffolder = PodfileScaffolder(xcode, settings.templates_dir)

    if not xcode.is_installed:
        click.secho("⚠️  Xcode not available on this host — nothing to do", fg="yellow")
        return

    try:
        created = scaffolder.setup_podfile(app_dir)
    except PodfileError as e:
        click.secho(f"❌ {e}", fg="red", err=True)
        sys.exit(1)

    if not ctx.obj.get("quiet"):
        if created:
            click.secho(f"✅ Created {app_dir / 'ios' / 'Podfile'}", fg="green")
        else:
            click.echo("✓ Podfile already present")


@cli.command()
@click.argument("ios_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
@click.option("--engine-dir", required=True, help="Flutter framework directory (FLUTTER_FRAMEWORK_DIR).")
@click.option(
    "--dependencies-changed/--no-dependencies-changed",
    default=True,
    help="Whether Flutter plugin dependencies changed since the last run.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def install(
    ctx: click.Context,
    ios_dir: Path,
    engine_dir: str,
    dependencies_changed: bool,
    as_json: bool,
) -> None:
    """Run pod install in IOS_DIR when CocoaPods is usable and pods are stale."""
    cocoapods = _build_cocoapods(ctx)
    outcome = cocoapods.process_pods(
        ios_dir,
        engine_dir,
        dependencies_changed=dependencies_changed,
    )

    if as_json:
        click.echo(json.dumps(outcome.model_dump(), indent=2))
    elif outcome.failed:
        click.secho(f"❌ {outcome.error}", fg="red", err=True)
    elif outcome.ran:
        if not ctx.obj.get("quiet"):
            click.secho("✅ pod install completed", fg="green")
    elif not ctx.obj.get("quiet"):
        click.echo(f"⏭️  pod install skipped ({outcome.reason})")

    if outcome.failed:
        sys.exit(1)


@cli.command()
@click.argument("app_dir", type=click.Path(exists=True, file_okay=False, path_type=Path))
def invalidate(app_dir: Path) -> None:
    """Force pod install to run next time by deleting Pods/Manifest.lock."""
    from podsync.core.services.cocoapods import invalidate_pod_install_output

    if invalidate_pod_install_output(app_dir):
        click.echo("🗑️  Deleted ios/Pods/Manifest.lock")
    else:
        click.echo("Nothing to invalidate")


def main() -> None:
    """Entry point for ``podsync``."""
    cli(obj={})


if __name__ == "__main__":
    main()
