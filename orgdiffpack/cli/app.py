import json
from importlib.metadata import PackageNotFoundError, version as package_version
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import typer

from orgdiffpack.config import CompareConfig, CompareConfigError, resolve_compare_config
from orgdiffpack.core import ItemHandle, OrgDiffError, canonicalize, normalize_text
from orgdiffpack.core.types import ITEM_FORMATS
from orgdiffpack.diff import (
    ResultFilter,
    build_patch,
    compare_collections,
    render_report,
    render_report_summary,
)
from orgdiffpack.sources import collect_tree, detect_format

app = typer.Typer(help="OrgDiffKit CLI")


@dataclass(slots=True)
class _OutputOptions:
    quiet: bool = False
    no_color: bool = False
    stable_json: bool = True


_OUTPUT_OPTIONS = _OutputOptions()
_COMMAND_ERRORS = (OrgDiffError, CompareConfigError, FileNotFoundError)


def _resolve_cli_version() -> str:
    try:
        return package_version("orgdiffkit")
    except PackageNotFoundError:
        from orgdiffpack import __version__ as local_version

        return local_version


def _version_callback(value: bool) -> None:
    if not value:
        return
    typer.echo(_resolve_cli_version(), color=False)
    raise typer.Exit()


@app.callback()
def app_options(
    version: bool = typer.Option(
        False,
        "--version",
        callback=_version_callback,
        is_eager=True,
        help="Show OrgDiffKit version and exit.",
    ),
    quiet: bool = typer.Option(
        False,
        "--quiet",
        help="Suppress non-error text output.",
    ),
    no_color: bool = typer.Option(
        False,
        "--no-color",
        help="Disable ANSI color output.",
    ),
    stable_json: bool = typer.Option(
        True,
        "--stable-json/--pretty-json",
        help="Emit stable compact JSON (or pretty JSON).",
    ),
) -> None:
    """Global output controls for all CLI commands."""
    _OUTPUT_OPTIONS.quiet = quiet
    _OUTPUT_OPTIONS.no_color = no_color
    _OUTPUT_OPTIONS.stable_json = stable_json


def _echo(message: str, *, err: bool = False, force: bool = False) -> None:
    if _OUTPUT_OPTIONS.quiet and not err and not force:
        return
    typer.echo(message, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _echo_json(payload: dict[str, Any], *, err: bool = False) -> None:
    if _OUTPUT_OPTIONS.stable_json:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            separators=(",", ":"),
        )
    else:
        rendered = json.dumps(
            payload,
            ensure_ascii=True,
            sort_keys=True,
            indent=2,
        )
    typer.echo(rendered, err=err, color=not _OUTPUT_OPTIONS.no_color)


def _fail(command: str, error: Exception, *, json_output: bool, **context: Any) -> None:
    message = f"{command} failed: {error}"
    if json_output:
        _echo_json({"status": "error", "exit_code": 1, "message": message, **context})
    else:
        _echo(message, err=True)
    raise typer.Exit(code=1) from error


def _load_config(config_path: Path | None, *, workers: int | None = None) -> CompareConfig:
    try:
        config = resolve_compare_config(config_path)
    except FileNotFoundError as error:
        raise CompareConfigError(f"compare config not found: {error.filename}") from error
    if workers is not None:
        config = CompareConfig(
            structural_formats=config.structural_formats,
            canonicalize=config.canonicalize,
            format_overrides=config.format_overrides,
            exclude_patterns=config.exclude_patterns,
            max_workers=workers,
        )
    return config


def _file_handle(path: Path, *, origin: str, config: CompareConfig, item_format: str | None = None) -> ItemHandle:
    data = path.read_bytes()
    resolved_format = item_format or detect_format(
        path.name,
        data,
        overrides=config.format_overrides,
    )
    return ItemHandle.from_bytes(path.name, data, origin=origin, format=resolved_format)


@app.command()
def compare(
    left: Path = typer.Argument(..., help="Retrieved snapshot directory for org A."),
    right: Path = typer.Argument(..., help="Retrieved snapshot directory for org B."),
    json_output: bool = typer.Option(
        False,
        "--json",
        help="Emit machine-readable reconciliation output.",
    ),
    label_a: str | None = typer.Option(None, "--label-a", help="Display label for snapshot A."),
    label_b: str | None = typer.Option(None, "--label-b", help="Display label for snapshot B."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Path to JSON compare config (defaults to $ORGDIFF_COMPARE_CONFIG).",
    ),
    workers: int | None = typer.Option(
        None,
        "--workers",
        help="Number of worker threads used to compare items.",
    ),
    status: list[str] | None = typer.Option(
        None,
        "--status",
        help="Only show results with this status (repeatable): added, removed, modified, failed.",
    ),
    ext: str = typer.Option("", "--ext", help="Only show results whose name ends with this extension."),
    name: str = typer.Option("", "--name", help="Only show results whose name contains this text."),
    limit: int | None = typer.Option(None, "--limit", help="Maximum number of result lines to print."),
    fail_on_diff: bool = typer.Option(
        False,
        "--fail-on-diff",
        help="Exit with code 1 when any item differs or failed to compare.",
    ),
) -> None:
    """Reconcile two retrieved org snapshots."""
    paths = {"left_path": str(left), "right_path": str(right)}
    try:
        result_filter = ResultFilter.from_statuses(status or [], ext=ext, text=name)
    except ValueError as error:
        _echo(f"compare failed: {error}", err=True)
        raise typer.Exit(code=2) from error

    try:
        config = _load_config(config_path, workers=workers)
        collection_a = collect_tree(left, origin="A", label=label_a, config=config)
        collection_b = collect_tree(right, origin="B", label=label_b, config=config)
        report = compare_collections(collection_a, collection_b, config=config)
    except _COMMAND_ERRORS as error:
        _fail("compare", error, json_output=json_output, **paths)

    exit_code = 1 if fail_on_diff and not report.identical else 0
    if json_output:
        payload = report.to_dict()
        payload["results"] = [result.to_dict() for result in result_filter.apply(report.results)]
        _echo_json(
            {
                **payload,
                "status": "ok",
                "exit_code": exit_code,
                "message": "compare completed",
                **paths,
            }
        )
    else:
        _echo(render_report_summary(report))
        _echo(render_report(report, result_filter=result_filter, limit=limit))

    if exit_code:
        raise typer.Exit(code=exit_code)


@app.command()
def patch(
    left_file: Path = typer.Argument(..., help="Item file retrieved from org A."),
    right_file: Path = typer.Argument(..., help="Item file retrieved from org B."),
    config_path: Path | None = typer.Option(
        None,
        "--config",
        help="Path to JSON compare config (defaults to $ORGDIFF_COMPARE_CONFIG).",
    ),
    context_lines: int = typer.Option(3, "--context", help="Unchanged context lines per hunk."),
) -> None:
    """Print a unified diff of two items after normalization."""
    try:
        config = _load_config(config_path)
        handle_a = _file_handle(left_file, origin="A", config=config)
        handle_b = _file_handle(right_file, origin="B", config=config)
        rendered = build_patch(
            handle_a,
            handle_b,
            config=config,
            context_lines=max(0, context_lines),
        )
    except _COMMAND_ERRORS as error:
        _fail("patch", error, json_output=False)

    if not rendered:
        _echo("no differences")
        return
    _echo(rendered, force=True)


@app.command("canonicalize")
def canonicalize_command(
    file: Path = typer.Argument(..., help="XML or JSON document to canonicalize."),
    item_format: str | None = typer.Option(
        None,
        "--format",
        help="Document format (xml or json); detected from the extension by default.",
    ),
) -> None:
    """Print the canonical form of a structured document."""
    try:
        config = _load_config(None)
        handle = _file_handle(file, origin="A", config=config, item_format=item_format)
    except _COMMAND_ERRORS as error:
        _fail("canonicalize", error, json_output=False)
    except ValueError as error:
        _echo(f"canonicalize failed: {error}", err=True)
        raise typer.Exit(code=2) from error

    if handle.format not in ("xml", "json"):
        _echo(
            f"canonicalize failed: unsupported document format {handle.format!r}; "
            f"expected one of xml, json (known formats: {', '.join(ITEM_FORMATS)}).",
            err=True,
        )
        raise typer.Exit(code=2)

    try:
        text = normalize_text(handle.read_text())
        rendered = canonicalize(text, handle.name, surface=handle.format) if text else ""
    except OrgDiffError as error:
        _fail("canonicalize", error, json_output=False)

    _echo(rendered.rstrip("\n"), force=True)


def main() -> None:
    app()
