"""
IBM JRE buildpack component — CLI entrypoint.

Usage:
    python -m jre_buildpack.main --help
    python -m jre_buildpack.main detect APP_DIR
    python -m jre_buildpack.main compile APP_DIR
    python -m jre_buildpack.main release APP_DIR
"""

from __future__ import annotations

import json
import os
import sys
from pathlib import Path
from typing import NoReturn

import click
import yaml

from jre_buildpack import __version__
from jre_buildpack.core.observability.logging_config import (
    FILE_ENV,
    FILE_LEVEL_ENV,
    resolve_level,
    setup_logging,
)

_APP_DIR = click.Path(exists=True, file_okay=False, resolve_path=True, path_type=Path)


@click.group()
@click.version_option(version=__version__, prog_name="jre-buildpack")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=False),
    default=None,
    help="Path to ibmjdk.yml (default: packaged configuration).",
)
@click.option(
    "--cache-dir",
    type=click.Path(file_okay=False),
    default=None,
    help="Artifact cache directory (default: $BUILDPACK_CACHE).",
)
@click.pass_context
def cli(
    ctx: click.Context,
    verbose: bool,
    quiet: bool,
    debug: bool,
    config_path: str | None,
    cache_dir: str | None,
) -> None:
    """IBM JRE buildpack — select, stage and tune a Java runtime."""
    ctx.ensure_object(dict)
    ctx.obj["quiet"] = quiet
    ctx.obj["config_path"] = Path(config_path) if config_path else None
    ctx.obj["cache_dir"] = Path(cache_dir) if cache_dir else None

    setup_logging(
        level=resolve_level(debug=debug, verbose=verbose, quiet=quiet),
        log_file=os.environ.get(FILE_ENV),
        log_file_level=os.environ.get(FILE_LEVEL_ENV),
    )


def _build_jre(ctx: click.Context, app_dir: Path):  # type: ignore[no-untyped-def]
    """Load configuration and construct the JRE component, or exit 1."""
    from jre_buildpack.core.config.loader import load_jre_config
    from jre_buildpack.core.context import StagingContext
    from jre_buildpack.core.errors import BuildpackError
    from jre_buildpack.core.services.application_cache import ApplicationCache
    from jre_buildpack.core.services.jre import IBMJdk

    try:
        configuration = load_jre_config(ctx.obj.get("config_path"))
        context = StagingContext(app_dir=app_dir, configuration=configuration)
        jre = IBMJdk(context, application_cache=ApplicationCache(ctx.obj.get("cache_dir")))
    except BuildpackError as e:
        _fail(e)
    return context, jre


def _fail(error: Exception) -> NoReturn:
    click.secho(f"❌ {error}", fg="red", err=True)
    sys.exit(1)


@cli.command()
@click.argument("app_dir", type=_APP_DIR)
@click.pass_context
def detect(ctx: click.Context, app_dir: Path) -> None:
    """Print the selected runtime, e.g. ibmjdk-1.7.1."""
    _, jre = _build_jre(ctx, app_dir)
    click.echo(jre.detect())


@cli.command("compile")
@click.argument("app_dir", type=_APP_DIR)
@click.pass_context
def compile_(ctx: click.Context, app_dir: Path) -> None:
    """Download the JRE into APP_DIR/.java and install the OOM script."""
    from jre_buildpack.core.errors import BuildpackError
    from jre_buildpack.core.services.download_helpers import format_duration

    _, jre = _build_jre(ctx, app_dir)

    try:
        receipt = jre.compile()
    except BuildpackError as e:
        _fail(e)

    if not ctx.obj.get("quiet", False):
        click.echo(
            f"-----> Downloading IBM {receipt.version} JRE from {receipt.uri} "
            f"({format_duration(receipt.download_seconds)})"
        )
        click.echo(f"       Expanding JRE to .java ({format_duration(receipt.expand_seconds)})")


@cli.command()
@click.argument("app_dir", type=_APP_DIR)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def release(ctx: click.Context, app_dir: Path, as_json: bool) -> None:
    """Print JAVA_HOME and the launch options for a compiled APP_DIR."""
    from jre_buildpack.core.errors import BuildpackError

    context, jre = _build_jre(ctx, app_dir)

    try:
        jre.release(jre.receipt())
    except BuildpackError as e:
        _fail(e)

    result = {"java_home": context.java_home, "java_opts": context.java_opts}
    if as_json:
        click.echo(json.dumps(result, indent=2))
    else:
        click.echo(yaml.safe_dump(result, default_flow_style=False, sort_keys=False), nl=False)


if __name__ == "__main__":
    cli()
