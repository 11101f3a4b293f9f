"""CLI entrypoint for a11y-score."""

from __future__ import annotations

import json
import logging
import sys
from pathlib import Path
from typing import Annotated

import typer

from a11y_score import __version__
from a11y_score.breakdown import Breakdown, build_breakdown
from a11y_score.catalogue import Catalogue, list_rule_info
from a11y_score.config import AppConfig, default_config_template, load_app_config
from a11y_score.fixes import FIX_SUGGESTIONS
from a11y_score.issues import ScanResult, load_scan_text
from a11y_score.output import render_human, render_json
from a11y_score.scoring import ScoreResult, score_scan

app = typer.Typer(
    name="a11y-score",
    no_args_is_help=True,
    help="Score accessibility scan results into a grade and WCAG conformance level.",
)


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
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Log scoring decisions to stderr."),
    ] = False,
) -> None:
    """Root command callback."""
    _ = version
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@app.command("score")
def score_command(
    scan_file: Annotated[Path | None, typer.Option(help="Path to scan result JSON.")] = None,
    stdin: Annotated[bool, typer.Option(help="Read scan result JSON from stdin.")] = False,
    repo: Annotated[Path, typer.Option(help="Project path used for config lookup.")] = Path("."),
    format: Annotated[
        str | None, typer.Option(help="Output format: human|json.", show_default="human")
    ] = None,
    fail_below: Annotated[
        int | None,
        typer.Option(
            min=0, max=100, help="Exit nonzero if the final score is below this value."
        ),
    ] = None,
    strict: Annotated[
        bool | None,
        typer.Option(
            "--strict/--no-strict",
            help="Reject unknown issue types and severities instead of skipping them.",
            show_default=False,
        ),
    ] = None,
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Score a scan result and output grade, level, and breakdown."""
    app_config = _load_config_or_raise(repo, config_file)
    output_format = (format or app_config.format).lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")

    if scan_file and stdin:
        raise typer.BadParameter("Use either --scan-file or --stdin, not both.")
    if not scan_file and not stdin:
        raise typer.BadParameter("Provide --scan-file or --stdin.")

    score_ctx = _prepare_score_context(
        scan_file=scan_file,
        strict=strict if strict is not None else app_config.strict,
        app_config=app_config,
    )
    fail_threshold = fail_below if fail_below is not None else app_config.fail_below

    if output_format == "json":
        typer.echo(
            render_json(
                score_ctx.result,
                score_ctx.breakdown,
                score_ctx.scan,
                input_source=score_ctx.input_source,
                catalogue=score_ctx.catalogue,
            )
        )
    else:
        typer.echo(render_human(score_ctx.result, score_ctx.breakdown))

    if fail_threshold is not None and score_ctx.result.score < fail_threshold:
        raise typer.Exit(code=1)


@app.command("rules")
def rules_command(
    repo: Annotated[Path, typer.Option(help="Project path used for config lookup.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """List the active rule catalogue."""
    output_format = _format_or_raise(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalogue = _build_catalogue_or_raise(app_config)
    rule_info = list_rule_info(catalogue)

    if output_format == "json":
        payload = {
            "rules": [
                {"type": item.issue_type, **catalogue[item.issue_type].to_dict()}
                for item in rule_info
            ],
            "meta": {"config_source": app_config.source},
        }
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = ["Rule catalogue:"]
    for item in rule_info:
        lines.append(
            f"- {item.issue_type} [{item.level}, weight {item.weight}] - {item.criterion}"
        )
    typer.echo("\n".join(lines))


@app.command("fixes")
def fixes_command(
    issue_type: Annotated[
        str | None, typer.Argument(help="Issue type to show; all types when omitted.")
    ] = None,
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Show remediation hints for issue types."""
    output_format = _format_or_raise(format)
    if issue_type is not None and issue_type not in FIX_SUGGESTIONS:
        raise typer.BadParameter(f"No fix suggestion for issue type: {issue_type}")

    selected = (
        {issue_type: FIX_SUGGESTIONS[issue_type]} if issue_type is not None else FIX_SUGGESTIONS
    )
    if output_format == "json":
        typer.echo(
            json.dumps(
                {name: fix.to_dict() for name, fix in selected.items()},
                sort_keys=True,
            )
        )
        return

    lines: list[str] = []
    for name, fix in sorted(selected.items()):
        lines.append(f"{name}: {fix.title}")
        lines.append(f"   {fix.explanation}")
    typer.echo("\n".join(lines))


@app.command("config")
def config_command(
    repo: Annotated[Path, typer.Option(help="Project path used for config lookup.")] = Path("."),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
    config_file: Annotated[
        Path | None,
        typer.Option("--config", help="Path to config TOML file."),
    ] = None,
) -> None:
    """Show resolved configuration."""
    output_format = _format_or_raise(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalogue = _build_catalogue_or_raise(app_config)
    payload = app_config.to_dict()
    payload["active_rule_count"] = len(catalogue)

    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return

    lines = [
        "Resolved configuration:",
        f"- source: {payload['source'] or 'defaults'}",
        f"- format: {payload['format']}",
        f"- fail_below: {payload['fail_below']}",
        f"- strict: {payload['strict']}",
        f"- rules.disable: {payload['rules']['disable']}",
        f"- rules.overrides: {payload['rules']['overrides']}",
        f"- active_rule_count: {payload['active_rule_count']}",
    ]
    typer.echo("\n".join(lines))


@app.command("config-init")
def config_init_command(
    out: Annotated[Path, typer.Option(help="Output path for starter config TOML.")] = Path(
        ".a11y-score.toml"
    ),
    force: Annotated[
        bool,
        typer.Option("--force", help="Overwrite if file already exists."),
    ] = False,
) -> None:
    """Create a starter config file."""
    out_path = out.resolve()
    if out_path.exists() and not force:
        raise typer.BadParameter(
            f"Refusing to overwrite existing file: {out_path}. Use --force to overwrite."
        )
    out_path.parent.mkdir(parents=True, exist_ok=True)
    out_path.write_text(default_config_template(), encoding="utf-8")
    typer.echo(f"Wrote starter config: {out_path}")


@app.command("config-validate")
def config_validate_command(
    repo: Annotated[Path, typer.Option(help="Project path used for config lookup.")] = Path("."),
    config_file: Annotated[
        Path,
        typer.Option("--config", help="Path to config TOML file to validate."),
    ] = Path(".a11y-score.toml"),
    format: Annotated[str, typer.Option(help="Output format: human|json.")] = "human",
) -> None:
    """Validate a config file and report the active catalogue size."""
    output_format = _format_or_raise(format)
    app_config = _load_config_or_raise(repo, config_file)
    catalogue = _build_catalogue_or_raise(app_config)
    payload = {
        "ok": True,
        "source": app_config.source,
        "active_rule_count": len(catalogue),
    }
    if output_format == "json":
        typer.echo(json.dumps(payload, sort_keys=True))
        return
    typer.echo(
        "\n".join(
            [
                "Config is valid.",
                f"- source: {payload['source']}",
                f"- active_rule_count: {payload['active_rule_count']}",
            ]
        )
    )


def main() -> None:
    """Console script entrypoint."""
    app()


def _format_or_raise(value: str) -> str:
    output_format = value.lower()
    if output_format not in {"human", "json"}:
        raise typer.BadParameter("format must be one of: human, json", param_hint="--format")
    return output_format


def _load_config_or_raise(repo: Path, config_file: Path | None = None) -> AppConfig:
    try:
        return load_app_config(repo, config_path=config_file)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config") from exc


def _build_catalogue_or_raise(app_config: AppConfig) -> Catalogue:
    try:
        return app_config.build_catalogue()
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="config.rules") from exc


def _resolve_scan_input(scan_file: Path | None) -> tuple[str, str]:
    if scan_file is not None:
        try:
            return (scan_file.read_text(encoding="utf-8"), f"scan_file:{scan_file}")
        except OSError as exc:
            raise typer.BadParameter(
                f"Cannot read scan file: {exc}", param_hint="--scan-file"
            ) from exc
    return (sys.stdin.read(), "stdin")


class _ScoreContext:
    """Resolved score inputs and outputs for the score command."""

    def __init__(
        self,
        *,
        scan: ScanResult,
        result: ScoreResult,
        breakdown: Breakdown,
        catalogue: Catalogue,
        input_source: str,
    ) -> None:
        self.scan = scan
        self.result = result
        self.breakdown = breakdown
        self.catalogue = catalogue
        self.input_source = input_source


def _prepare_score_context(
    *,
    scan_file: Path | None,
    strict: bool,
    app_config: AppConfig,
) -> _ScoreContext:
    scan_text, input_source = _resolve_scan_input(scan_file)
    catalogue = _build_catalogue_or_raise(app_config)
    try:
        scan = load_scan_text(scan_text)
        result = score_scan(scan, catalogue=catalogue, strict=strict)
    except ValueError as exc:
        raise typer.BadParameter(str(exc), param_hint="scan") from exc

    breakdown = build_breakdown(scan.issues, catalogue=catalogue, result=result)
    return _ScoreContext(
        scan=scan,
        result=result,
        breakdown=breakdown,
        catalogue=catalogue,
        input_source=input_source,
    )
