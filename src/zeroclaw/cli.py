"""CLI entrypoint for zeroclaw onboarding."""

from __future__ import annotations

import logging
from pathlib import Path
import sys

import typer

from zeroclaw.config import ConfigParseError, home_dir, load_config, resolve_runtime_dirs
from zeroclaw.logging_config import setup_logging
from zeroclaw.ui.render import (
    render_banner,
    render_error,
    render_info,
    render_lines,
    render_success,
    render_summary_table,
    render_validation_panel,
)
from zeroclaw.validation import load_and_validate_config
from zeroclaw.wizard import WizardState, finalize_config
from zeroclaw.wizard.finalize import configured_channel_labels

logger = logging.getLogger(__name__)

app = typer.Typer(add_completion=False, help="Set up and inspect a zeroclaw agent.")
config_app = typer.Typer(add_completion=False, help="Config helpers and validation.")
app.add_typer(config_app, name="config")


@app.callback(invoke_without_command=True)
def root(ctx: typer.Context) -> None:
    """zeroclaw onboarding CLI."""
    setup_logging(home_dir())
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit(code=0)


@app.command("onboard")
def onboard(
    force: bool = typer.Option(False, "--force", help="Start full onboarding even if a config exists."),
    plain: bool = typer.Option(False, "--plain", help="Use line prompts instead of the full-screen UI."),
) -> None:
    """Interactive wizard that writes config.json and scaffolds the workspace."""
    state = WizardState.create(force=force)
    if plain or not sys.stdin.isatty():
        from zeroclaw.wizard.prompts import run_prompt_wizard

        render_banner("zeroclaw", "Agent onboarding")
        run_prompt_wizard(state)
    else:
        from zeroclaw.ui.app import WizardUIError, run_tui_wizard

        try:
            run_tui_wizard(state)
        except WizardUIError as exc:
            render_error(str(exc))
            raise typer.Exit(code=1) from exc

    if state.cancelled or not state.finished:
        render_info("Setup cancelled. Nothing was written.")
        return

    try:
        result = finalize_config(state)
    except ConfigParseError as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc
    except OSError as exc:
        logger.exception("Failed to write configuration")
        render_error(f"Failed to write configuration: {exc}")
        raise typer.Exit(code=1) from exc

    config = result.config
    render_summary_table(
        [
            ("Config", str(config.config_path)),
            ("Workspace", str(config.workspace_dir)),
            ("Provider", config.default_provider or ""),
            ("Model", config.default_model or ""),
            ("Channels", ", ".join(configured_channel_labels(config))),
        ],
        title="Onboarding complete",
    )
    render_success("Configuration saved.")
    if result.autostart_channels:
        render_info("Channels are configured. Start them with: zeroclaw channel start")


@app.command("dashboard")
def dashboard() -> None:
    """Browse the stored configuration in a read-only dashboard."""
    from zeroclaw.ui.dashboard import run_dashboard

    dirs = resolve_runtime_dirs()
    if not dirs.config_path.exists():
        render_error(f"No config at {dirs.config_path}. Run `zeroclaw onboard` first.")
        raise typer.Exit(code=1)
    try:
        config = load_config(dirs.config_path)
    except ConfigParseError as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc
    run_dashboard(config)


def _default_config_path() -> str:
    return str(resolve_runtime_dirs().config_path)


@config_app.command("validate")
def config_validate(path: str = typer.Option(None, "--path", "-p", help="Config file to check.")) -> None:
    """Validate a stored config file."""
    config_path = Path(path) if path else Path(_default_config_path())
    result = load_and_validate_config(config_path)

    errors = [f"{issue.path}: {issue.message}" for issue in result.errors]
    warnings = [f"{issue.path}: {issue.message}" for issue in result.warnings]

    if errors:
        render_validation_panel("INVALID", errors, style="error")
        raise typer.Exit(code=1)

    if warnings:
        render_validation_panel("VALID (with warnings)", warnings, style="warning")
    else:
        render_validation_panel("VALID", ["No issues found."], style="success")


@config_app.command("show")
def config_show(path: str = typer.Option(None, "--path", "-p", help="Config file to show.")) -> None:
    """Print the stored config with secrets masked."""
    config_path = Path(path) if path else Path(_default_config_path())
    try:
        config = load_config(config_path)
    except ConfigParseError as exc:
        render_error(str(exc))
        raise typer.Exit(code=1) from exc
    render_lines(
        str(config_path),
        [
            f"Provider: {config.default_provider}",
            f"Model: {config.default_model}",
            f"API key: {'(set)' if config.api_key else '(not set)'}",
            f"API URL: {config.api_url or '-'}",
            f"Workspace: {config.workspace_dir}",
            f"Channels: {', '.join(configured_channel_labels(config))}",
            f"Tunnel: {config.tunnel.provider}",
            f"Composio: {'enabled' if config.composio.enabled else 'disabled'}",
            f"Encrypt secrets: {'yes' if config.secrets.encrypt else 'no'}",
            f"Hardware: {config.hardware.transport if config.hardware.enabled else 'software only'}",
            f"Memory: {config.memory.backend} (auto-save {'on' if config.memory.auto_save else 'off'})",
        ],
    )


def main() -> None:
    app()


if __name__ == "__main__":
    main()
