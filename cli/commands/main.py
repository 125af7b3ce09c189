"""Main CLI interface using Typer."""

import asyncio
import base64
import json
from dataclasses import replace
from pathlib import Path
from typing import List, Optional

import typer
from rich.console import Console
from rich.table import Table

from mangatran.core.exceptions import ConfigurationError
from mangatran.translation.adapter import TranslationAdapter
from mangatran.utils.config_loader import load_config
from mangatran.utils.logger import setup_logger

app = typer.Typer(
    name="mangatran",
    help="MangaTran: translate text and manga pages through a chat-completions endpoint",
    add_completion=False
)

console = Console()


def _build_adapter(config_path: Optional[Path], base_url: Optional[str], debug: bool) -> TranslationAdapter:
    setup_logger(level="DEBUG" if debug else "WARNING")
    try:
        config = load_config(str(config_path) if config_path else None)
    except (ConfigurationError, OSError) as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)
    if base_url:
        config = replace(config, base_url=base_url)
    return TranslationAdapter(config)


def _report_outcome(outcome) -> None:
    if outcome.fell_back:
        reason = outcome.error.message if outcome.error else "unknown error"
        console.print(f"[yellow]Fell back to original content: {reason}[/yellow]")
    elif outcome.model:
        console.print(f"[dim]model: {outcome.model}[/dim]")


@app.command()
def text(
    source: str = typer.Argument(..., help="Text to translate"),
    target_lang: str = typer.Option("English", "-t", "--target", help="Target language"),
    mode: Optional[str] = typer.Option(None, "-m", "--mode", help="Mode: fast/json/batch (default: general model)"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override endpoint base URL"),
    debug: bool = typer.Option(False, "--debug/--no-debug", help="Enable debug logging"),
):
    """Translate a single piece of text."""
    adapter = _build_adapter(config, base_url, debug)
    outcome = asyncio.run(adapter.translate_text_outcome(source, target_lang, mode))
    console.print(outcome.value)
    _report_outcome(outcome)


@app.command()
def batch(
    sources: List[str] = typer.Argument(..., help="Texts to translate, in order"),
    target_lang: str = typer.Option("English", "-t", "--target", help="Target language"),
    mode: Optional[str] = typer.Option("batch", "-m", "--mode", help="Mode: fast/json/batch"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override endpoint base URL"),
    debug: bool = typer.Option(False, "--debug/--no-debug", help="Enable debug logging"),
):
    """Translate several texts in one request."""
    adapter = _build_adapter(config, base_url, debug)
    outcome = asyncio.run(adapter.translate_batch_outcome(sources, target_lang, mode))

    table = Table(title=f"Batch → {target_lang}")
    table.add_column("#", justify="right")
    table.add_column("Original")
    table.add_column("Translation")
    for i, (original, translated) in enumerate(zip(sources, outcome.value), 1):
        table.add_row(str(i), original, translated)
    console.print(table)
    _report_outcome(outcome)


@app.command()
def image(
    image_file: Path = typer.Argument(..., help="Image file (PNG/JPEG)"),
    target_lang: str = typer.Option("English", "-t", "--target", help="Target language"),
    mode: Optional[str] = typer.Option("json", "-m", "--mode", help="Mode: fast/json/batch"),
    width: Optional[int] = typer.Option(None, "--width", help="Image width (fallback box)"),
    height: Optional[int] = typer.Option(None, "--height", help="Image height (fallback box)"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    config: Optional[Path] = typer.Option(None, "--config", help="YAML config file"),
    base_url: Optional[str] = typer.Option(None, "--base-url", help="Override endpoint base URL"),
    debug: bool = typer.Option(False, "--debug/--no-debug", help="Enable debug logging"),
):
    """Extract and translate the text regions of an image."""
    if not image_file.exists():
        console.print(f"[red]Error: Image file not found: {image_file}[/red]")
        raise typer.Exit(1)

    mime = "image/jpeg" if image_file.suffix.lower() in (".jpg", ".jpeg") else "image/png"
    encoded = base64.b64encode(image_file.read_bytes()).decode("ascii")
    data_uri = f"data:{mime};base64,{encoded}"

    adapter = _build_adapter(config, base_url, debug)
    outcome = asyncio.run(adapter.translate_image_outcome(data_uri, target_lang, mode, width, height))

    if as_json:
        console.print_json(json.dumps(outcome.value, ensure_ascii=False))
    else:
        table = Table(title=f"{image_file.name} → {target_lang}")
        table.add_column("Language")
        table.add_column("Translation")
        table.add_column("Box", justify="right")
        for region in outcome.value.get("translations", []):
            if not isinstance(region, dict):
                continue
            box = f"({region.get('minX')}, {region.get('minY')}) - ({region.get('maxX')}, {region.get('maxY')})"
            table.add_row(str(region.get("originalLanguage", "")), str(region.get("translatedText", "")), box)
        console.print(table)
    _report_outcome(outcome)


def cli():
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    cli()
