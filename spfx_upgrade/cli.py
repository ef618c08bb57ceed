"""CLI entrypoint for spfx-upgrade."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Annotated

import click
import typer

from spfx_upgrade import __version__
from spfx_upgrade.config import AppConfig, default_config_template, load_app_config
from spfx_upgrade.output import OUTPUT_FORMATS, render_json, render_markdown, render_text
from spfx_upgrade.rules import list_rule_info
from spfx_upgrade.upgrade import run_upgrade
from spfx_upgrade.versions import (
    LATEST_VERSION,
    PACKAGE_MANAGERS,
    SUPPORTED_VERSIONS,
    UpgradeError,
    find_project_root,
)

app = typer.Typer(
    name="spfx-upgrade",
    no_args_is_help=True,
    help="Analyze SharePoint Framework projects and report the steps to upgrade them.",
)

LOGGER_NAME = "spfx_upgrade"


class _EchoHandler(logging.Handler):
    """Routes log records to stderr through click."""

    def emit(self, record: logging.LogRecord) -> None:
        try:
            click.echo(self.format(record), err=True)
        except Exception:
            self.handleError(record)


def configure_logging(*, verbose: bool = False, debug: bool = False) -> None:
    """Attach the stderr handler once and set the package log level."""
    logger = logging.getLogger(LOGGER_NAME)
    if not any(isinstance(handler, _EchoHandler) for handler in logger.handlers):
        handler = _EchoHandler()
        handler.setFormatter(logging.Formatter("%(levelname)s %(name)s: %(message)s"))
        logger.addHandler(handler)
    if debug:
        logger.setLevel(logging.DEBUG)
    elif verbose:
        logger.setLevel(logging.INFO)
    else:
        logger.setLevel(logging.WARNING)


def version_callback(value: bool) -> None:
    """Print version and exit when --version is provided."""
    if value:
        typer.echo(__version__)
        raise typer.Exit()


@app.callback()
def main_callback(
    version: Annotated[
        bool,
        typer.Option("--version", help="Show version and exit.", callback=version_callback),
    ] = False,
    verbose: Annotated[bool, typer.Option("--verbose", help="Log progress to stderr.")] = False,
    debug: Annotated[bool, typer.Option("--debug", help="Log diagnostics to stderr.")] = False,
) -> None:
    """Root command callback."""
    _ = version
    configure_logging(verbose=verbose, debug=debug)


@app.command("upgrade")
def upgrade_command(
    to_version: Annotated[
        str | None,
        typer.Option(
            "--to-version",
            "-v",
            help="SharePoint Framework version to upgrade to.",
            show_default=LATEST_VERSION,
        ),
    ] = None,
    package_manager: Annotated[
        str | None,
        typer.Option(help="Package manager: npm|pnpm|yarn.", show_default="npm"),
    ] = None,
    output: Annotated[
        str | None,
        typer.Option(help="Report format: json|md|text.", show_default="text"),
    ] = None,
    path: Annotated[Path, typer.Option(help="Folder inside the project.")] = Path("."),
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Report the changes needed to upgrade a project."""
    app_config = _load_config_or_raise(_config_root(path), config_file)
    resolved_manager = _choice_or_default(
        value=package_manager,
        default=app_config.package_manager,
        allowed=set(PACKAGE_MANAGERS),
        field_name="--package-manager",
    )
    resolved_output = _choice_or_default(
        value=output,
        default=app_config.output,
        allowed=set(OUTPUT_FORMATS),
        field_name="--output",
    )

    try:
        result = run_upgrade(
            path,
            to_version=to_version or app_config.to_version,
            package_manager=resolved_manager,
        )
    except UpgradeError as exc:
        typer.echo(f"error: {exc.message}", err=True)
        raise typer.Exit(code=exc.code) from exc

    if resolved_output == "json":
        typer.echo(render_json(result.rows))
    elif resolved_output == "md":
        typer.echo(render_markdown(result.rows, result.context))
    else:
        typer.echo(bold_headings(render_text(result.rows, resolved_manager)))


@app.command("versions")
def versions_command(
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """List the SharePoint Framework versions supported as upgrade targets."""
    output_format = _format_or_raise(format)
    if output_format == "json":
        payload = {"latest": LATEST_VERSION, "versions": list(SUPPORTED_VERSIONS)}
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Supported versions:"]
    for version in SUPPORTED_VERSIONS:
        suffix = " (latest)" if version == LATEST_VERSION else ""
        lines.append(f"- {version}{suffix}")
    typer.echo("\n".join(lines))


@app.command("rules")
def rules_command(
    version: Annotated[
        str,
        typer.Option("--version", help="List the rules applied when upgrading to this version."),
    ] = LATEST_VERSION,
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """List the rules registered for one version."""
    output_format = _format_or_raise(format)
    try:
        rule_info = list_rule_info(version)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="--version") from exc

    if output_format == "json":
        payload = {
            "version": version,
            "rules": [
                {
                    "rule_id": item.rule_id,
                    "title": item.title,
                    "description": item.description,
                    "severity": item.severity,
                    "resolution_type": item.resolution_type,
                    "file": item.file,
                    "supersedes": list(item.supersedes),
                }
                for item in rule_info
            ],
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [f"Rules for v{version}:"]
    for item in rule_info:
        lines.append(f"- {item.rule_id} [{item.severity}] - {item.description}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    path: Annotated[Path, typer.Option(help="Folder inside the project.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = _format_or_raise(format)
    payload = _load_config_or_raise(_config_root(path), config_file).to_dict()
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- package_manager: {payload['package_manager']}",
        f"- output: {payload['output']}",
        f"- to_version: {payload['to_version'] or LATEST_VERSION}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".spfx-upgrade.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter project config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


def main() -> None:
    """Console script entrypoint."""
    app()


def bold_headings(report: str) -> str:
    """Bold every line that is underlined by a row of dashes."""
    lines = report.splitlines()
    for index, line in enumerate(lines[:-1]):
        if line and lines[index + 1] == "-" * len(line):
            lines[index] = click.style(line, bold=True)
    return "\n".join(lines)


def _config_root(path: Path) -> Path:
    return find_project_root(path) or path


def _load_config_or_raise(project_root: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(project_root, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _format_or_raise(value: str) -> str:
    output_format = value.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format


def _choice_or_default(
    *,
    value: str | None,
    default: str,
    allowed: set[str],
    field_name: str,
) -> str:
    resolved = (value or default).lower()
    if resolved not in allowed:
        choices = ", ".join(sorted(allowed))
        raise typer.BadParameter(f"{field_name} must be one of: {choices}", param_hint=field_name)
    return resolved
