"""
sdkpatcher CLI.

Command-line interface for running the post-build patching pipeline against a
generated project, e.g. from a build server step after the export.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from .core.config import Settings, get_settings
from .core.logging import setup_logging
from .models.build import BuildTarget, FeatureFlags

app = typer.Typer(
    name="sdkpatcher",
    help="Post-build patching of generated mobile projects",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"sdkpatcher v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """sdkpatcher: make generated projects satisfy the SDK's requirements."""
    pass


@app.command()
def run(
    target: str = typer.Argument(
        ...,
        help="Build target (uwp, ios, android, or a host identifier such as WSAPlayer)",
    ),
    output_path: Path = typer.Argument(
        ...,
        help="Directory holding the generated project",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    settings_file: Optional[Path] = typer.Option(
        None,
        "--settings",
        "-s",
        help="JSON file with the SDK feature flags",
        exists=True,
        dir_okay=False,
    ),
    toolchain: Optional[Path] = typer.Option(
        None,
        "--toolchain",
        "-t",
        help="Host editor installation contents path (for nuget.exe)",
    ),
    timeout: Optional[int] = typer.Option(
        None,
        "--timeout",
        help="Package restore timeout in seconds",
        min=1,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Patch a generated project for the given build target.

    Patching is best-effort: steps that cannot be applied are reported in the
    log and the command still succeeds.
    """
    from .orchestration import BuildOrchestrator

    updates: dict[str, object] = {}
    if settings_file is not None:
        updates["settings_file"] = settings_file
    if toolchain is not None:
        updates["toolchain_path"] = toolchain
    if timeout is not None:
        updates["restore_timeout_seconds"] = timeout
    if verbose:
        updates["log_level"] = "DEBUG"
    settings = Settings.model_validate({**get_settings().model_dump(), **updates})
    setup_logging(settings)

    build_target = BuildTarget.from_host(target)
    console.print(Panel.fit(
        f"[bold blue]sdkpatcher[/bold blue]\n"
        f"Target: {build_target.value}  Output: {output_path}",
        border_style="blue",
    ))

    BuildOrchestrator(settings=settings).run(build_target, output_path)


@app.command()
def config(
    settings_file: Optional[Path] = typer.Option(
        None,
        "--settings",
        "-s",
        help="JSON file with the SDK feature flags",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Show the current configuration and feature flags."""
    cfg = get_settings()
    source = settings_file or cfg.settings_file
    flags = FeatureFlags.load(source) if source else FeatureFlags.from_env()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Toolchain Path", str(cfg.toolchain_path or "-"))
    table.add_row("Resources Path", str(cfg.resources_path))
    table.add_row("Restore Timeout", f"{cfg.restore_timeout_seconds}s")
    table.add_row("Settings File", str(source or "-"))
    table.add_row("Use Push", str(flags.use_push))
    table.add_row("Use Distribute", str(flags.use_distribute))
    table.add_row("Product Name", flags.product_name or "-")
    table.add_row("Scripting Backend", flags.scripting_backend.value)
    table.add_row("UI Framework", flags.ui_framework.value)

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  SDKPATCHER_LOG_LEVEL, SDKPATCHER_TOOLCHAIN_PATH, SDKPATCHER_SETTINGS_FILE")
    console.print("  SDKPATCHER_USE_PUSH, SDKPATCHER_USE_DISTRIBUTE, SDKPATCHER_PRODUCT_NAME")


if __name__ == "__main__":
    app()
