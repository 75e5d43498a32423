"""CLI commands for elkalert using Typer."""

import json
from pathlib import Path
from typing import Optional

import typer

from elkalert import __version__
from elkalert.allowlist import AllowSet
from elkalert.config import AlertConfig, load_config, setup_logging
from elkalert.display import (
    console,
    print_alert_table,
    print_config,
    print_error,
    print_info,
    print_no_data,
    print_success,
)
from elkalert.errors import ElkAlertError, MalformedResponseError
from elkalert.evaluator import evaluate
from elkalert.models import parse_aggregation
from elkalert.probe import run_probe
from elkalert.webhook import DispatchOutcome

# Create Typer app
app = typer.Typer(
    name="elkalert",
    help="Threshold alerts for Elasticsearch client address aggregations",
    add_completion=False,
    no_args_is_help=True,
)

ConfigOption = typer.Option(
    None, "--config", "-c",
    help="Config file (default: $ELKALERT_CONFIG or test.yaml)"
)


def fail(error: ElkAlertError) -> None:
    """Report a fatal error and exit with its code."""
    print_error(f"[{error.stage}] {error}")
    raise typer.Exit(error.exit_code)


def load_or_fail(path: Optional[Path]) -> AlertConfig:
    try:
        config = load_config(path)
    except ElkAlertError as e:
        setup_logging()
        fail(e)
    setup_logging(config)
    return config


@app.command()
def run(
    config_path: Optional[Path] = ConfigOption,
    dry_run: bool = typer.Option(False, "--dry-run", help="Do not send to the webhook")
):
    """Query Elasticsearch and alert on addresses above the threshold."""
    config = load_or_fail(config_path)

    try:
        outcome = run_probe(config, deliver=not dry_run)
    except ElkAlertError as e:
        fail(e)

    if dry_run and outcome is DispatchOutcome.LOCAL_ONLY and config.has_webhook:
        print_info("Dry run, webhook not called")


@app.command("evaluate")
def evaluate_file(
    response_file: Path = typer.Argument(..., help="Saved search response (JSON)"),
    config_path: Optional[Path] = ConfigOption,
):
    """Evaluate a saved search response without querying or sending."""
    config = load_or_fail(config_path)

    try:
        with open(response_file, 'r', encoding='utf-8') as f:
            response = json.load(f)
    except OSError as e:
        print_error(f"Cannot read {response_file}: {e}")
        raise typer.Exit(1)
    except json.JSONDecodeError as e:
        fail(MalformedResponseError("<root>", f"invalid JSON in {response_file}: {e}"))

    try:
        allow = AllowSet.build(config.whitelist)
        lines = evaluate(parse_aggregation(response), config.elk_threshold, allow)
    except ElkAlertError as e:
        fail(e)

    if not lines:
        print_no_data()
        return

    print_alert_table(lines, config.elk_threshold)


@app.command()
def check(config_path: Optional[Path] = ConfigOption):
    """Validate the configuration and whitelist."""
    config = load_or_fail(config_path)

    try:
        allow = AllowSet.build(config.whitelist)
    except ElkAlertError as e:
        fail(e)

    print_config(config)
    print_success(f"Configuration OK ({len(allow)} whitelisted addresses)")


@app.command()
def version():
    """Show version."""
    console.print(f"elkalert v{__version__}")


if __name__ == "__main__":
    app()
