"""Typer-based CLI for inlining SVG icons into HTML files.

Commands:
- ``inject``  Fetch icons for every marker and write the resulting HTML
- ``scan``    List markers and icon names without fetching anything
- ``config``  Print merged configuration, defaults, or the JSON Schema

Example:
    svgicons inject dist/index.html -o dist/index.html
    svgicons inject page.html --base-url https://example.org/site/
"""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Any, Optional

import typer
from rich.console import Console
from rich.table import Table

from .config import IconLoaderConfig, export_config_schema, load_config
from .document import HtmlDocument, class_list
from .loader import create_icon_loader, iter_markers
from .logging_utils import setup_logging

LOGGER = logging.getLogger(__name__)

console = Console(stderr=True)
app = typer.Typer(help="SvgIconKit icon loader", no_args_is_help=True)
config_app = typer.Typer(help="Configuration inspection", no_args_is_help=True)
app.add_typer(config_app, name="config")


def _load_cli_config(
    config_file: Optional[Path],
    icon_path: Optional[str] = None,
    icon_prefix: Optional[str] = None,
    target_tag: Optional[str] = None,
) -> IconLoaderConfig:
    overrides: dict[str, Any] = {
        "icon_path": icon_path,
        "icon_prefix": icon_prefix,
        "target_tag": target_tag,
    }
    try:
        return load_config(config_file, cli_overrides=overrides)
    except ValueError as e:
        console.print(f"❌ Error loading config: {e}", style="red", markup=False)
        raise typer.Exit(1)


async def _inject(
    input_file: Path,
    *,
    config: IconLoaderConfig,
    base_url: Optional[str],
    root: Optional[Path],
    external_config: bool,
) -> tuple[HtmlDocument, int, list[str]]:
    async with create_icon_loader(
        input_file, base_url=base_url, root=root, config=config
    ) as loader:
        if external_config:
            await loader.load_external_config()
        # Scan even when autoInit is off: inlining is the point of this command.
        count = await loader.scan_and_load()
        return loader.document, count, loader.get_loaded_icons()


# ============================================================================
# Commands
# ============================================================================


@app.command()
def inject(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="HTML file"),
    output: Optional[Path] = typer.Option(
        None, "--output", "-o", help="Output file (default: stdout)"
    ),
    root: Optional[Path] = typer.Option(
        None,
        "--root",
        file_okay=False,
        help="Directory icons and config.json are served from (default: input directory)",
    ),
    base_url: Optional[str] = typer.Option(
        None, "--base-url", help="Fetch icons over HTTP relative to this URL"
    ),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (YAML/JSON)", envvar="SVGICON_CONFIG"
    ),
    icon_path: Optional[str] = typer.Option(None, "--icon-path", help="Override iconPath"),
    icon_prefix: Optional[str] = typer.Option(None, "--icon-prefix", help="Override iconPrefix"),
    target_tag: Optional[str] = typer.Option(None, "--target-tag", help="Override targetTag"),
    external_config: bool = typer.Option(
        True,
        "--external-config/--no-external-config",
        help="Consult config.json next to the icons",
    ),
    log_dir: Optional[Path] = typer.Option(None, "--log-dir", help="Write JSON-lines logs here"),
    verbose: bool = typer.Option(False, "-v", "--verbose", help="Verbose"),
) -> None:
    """Inline SVG icons into every marker element of INPUT_FILE."""
    setup_logging(level="DEBUG" if verbose else "INFO", log_dir=log_dir)
    cfg = _load_cli_config(config_file, icon_path, icon_prefix, target_tag)

    if base_url is None and root is None:
        root = input_file.parent

    try:
        document, count, loaded = asyncio.run(
            _inject(
                input_file,
                config=cfg,
                base_url=base_url,
                root=root,
                external_config=external_config,
            )
        )
    except Exception as e:
        LOGGER.debug("Injection failed", exc_info=True)
        console.print(f"❌ Error: {e}", style="red", markup=False)
        raise typer.Exit(1)

    if output is None:
        typer.echo(document.serialize())
    else:
        document.write(output)

    console.print(
        f"[green]✓ Processed {count} marker(s), loaded {len(loaded)} icon(s)[/green]"
    )


@app.command()
def scan(
    input_file: Path = typer.Argument(..., exists=True, dir_okay=False, help="HTML file"),
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (YAML/JSON)", envvar="SVGICON_CONFIG"
    ),
    icon_prefix: Optional[str] = typer.Option(None, "--icon-prefix", help="Override iconPrefix"),
    target_tag: Optional[str] = typer.Option(None, "--target-tag", help="Override targetTag"),
    as_json: bool = typer.Option(False, "--json", help="Emit JSON instead of a table"),
) -> None:
    """List marker elements and the icon each one requests."""
    cfg = _load_cli_config(config_file, icon_prefix=icon_prefix, target_tag=target_tag)
    document = HtmlDocument.from_file(input_file)
    markers = [
        {"icon": icon_name, "url": cfg.icon_url(icon_name), "classes": class_list(element)}
        for element, icon_name in iter_markers(document, cfg)
    ]

    if as_json:
        typer.echo(json.dumps(markers, indent=2))
        return

    table = Table(title=f"{len(markers)} marker(s) in {input_file.name}")
    table.add_column("Icon", style="cyan")
    table.add_column("Resource")
    table.add_column("Classes")
    for marker in markers:
        table.add_row(marker["icon"], marker["url"], " ".join(marker["classes"]))
    Console().print(table)


@config_app.command("print-merged")
def config_print_merged(
    config_file: Optional[Path] = typer.Option(
        None, "--config", "-c", help="Config file path (YAML/JSON)", envvar="SVGICON_CONFIG"
    ),
) -> None:
    """Print configuration after defaults < file < environment precedence."""
    cfg = _load_cli_config(config_file)
    typer.echo(json.dumps(cfg.to_external(), indent=2))


@config_app.command("defaults")
def config_defaults() -> None:
    """Show default configuration values."""
    typer.echo(json.dumps(IconLoaderConfig().to_external(), indent=2))


@config_app.command("export-schema")
def config_export_schema(
    output_file: Path = typer.Option(
        Path("svgicon-config-schema.json"), "--output", "-o", help="Output file path"
    ),
) -> None:
    """Export JSON Schema for IDE/tooling integration."""
    try:
        export_config_schema(output_file)
    except OSError as e:
        console.print(f"❌ Error exporting schema: {e}", style="red", markup=False)
        raise typer.Exit(1)
    console.print(f"[green]✓ Schema exported to {output_file}[/green]")


def main() -> None:
    """Entry point for the ``svgicons`` console script."""
    app()


if __name__ == "__main__":
    main()
