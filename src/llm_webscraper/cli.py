"""Command-line interface for LLM WebScraper."""

import asyncio
import json
import logging
from typing import List, Optional

import typer
from rich.console import Console
from rich.json import JSON
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table
from rich.text import Text

from .client import ExtractionClient, ExtractionClientError
from .config import get_settings
from .core import ExtractionError, create_extractor
from .models.schemas import DEFAULT_MODEL, SUPPORTED_MODELS, ExtractionResult

# Configure rich console for better output
console = Console()
app = typer.Typer(
    name="llm-scraper",
    help="LLM WebScraper - extract named fields from web pages with a language model",
    no_args_is_help=True,
)

# Configure logging
logging.basicConfig(
    level=get_settings().log_level,
    format='%(levelname)s: %(message)s'
)


@app.command()
def extract(
    url: str = typer.Option(
        ...,
        "--url",
        "-u",
        help="Website URL to scrape"
    ),
    fields: List[str] = typer.Option(
        ...,
        "--field",
        "-f",
        help="Field to extract (repeat for several fields)"
    ),
    model: Optional[str] = typer.Option(
        None,
        "--model",
        "-m",
        help="OpenAI model to use (defaults to the DEFAULT_MODEL setting)"
    ),
    api_key: str = typer.Option(
        ...,
        "--api-key",
        "-k",
        envvar="OPENAI_API_KEY",
        help="OpenAI API key"
    ),
    server: Optional[str] = typer.Option(
        None,
        "--server",
        "-s",
        help="Send the request to a running server instead of extracting locally"
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the raw response as JSON"
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable verbose logging"
    ),
):
    """
    Extract fields from a web page.

    Examples:
        llm-scraper extract --url https://example.com -f title -f price
        llm-scraper extract -u https://example.com -f title --server http://localhost:8000
    """
    if verbose:
        logging.getLogger().setLevel(logging.DEBUG)

    fields = _unique_fields(fields)
    model = model or get_settings().default_model

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
            transient=True,
            disable=as_json,
        ) as progress:
            progress.add_task("Scraping...", total=None)
            result = asyncio.run(_run_extract(url, fields, model, api_key, server))
    except (ExtractionError, ExtractionClientError) as e:
        console.print(f"[red]Error: {escape(e.message)}[/red]")
        raise typer.Exit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Scraping cancelled by user[/yellow]")
        raise typer.Exit(1)

    if as_json:
        console.print_json(json.dumps(result.model_dump(by_alias=True)))
        return

    _print_result(result)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address (defaults to HOST setting)"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Port (defaults to PORT setting)"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the REST API server."""
    import uvicorn

    config = get_settings().get_server_config()
    if host:
        config["host"] = host
    if port:
        config["port"] = port
    if reload:
        config["reload"] = True

    console.print(f"[bold blue]LLM WebScraper[/bold blue] listening on http://{config['host']}:{config['port']}")
    uvicorn.run("llm_webscraper.api.main:app", **config)


@app.command()
def models():
    """List the models offered by the scraper form."""
    table = Table(show_header=True, header_style="bold magenta")
    table.add_column("Model")
    table.add_column("Name")

    for model_id, label in SUPPORTED_MODELS.items():
        suffix = " (default)" if model_id == DEFAULT_MODEL else ""
        table.add_row(model_id, f"{label}{suffix}")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    from . import __version__
    console.print(f"LLM WebScraper version {__version__}")


async def _run_extract(
    url: str,
    fields: List[str],
    model: str,
    api_key: str,
    server: Optional[str],
) -> ExtractionResult:
    """Run one extraction locally or through a server."""
    if server:
        async with ExtractionClient(server) as client:
            return await client.extract(url, fields, model, api_key)

    async with create_extractor() as extractor:
        return await extractor.extract(
            {"url": url, "fields": fields, "model": model, "api_key": api_key}
        )


def _unique_fields(fields: List[str]) -> List[str]:
    """Drop blank and repeated field names, keeping first-seen order."""
    unique = []
    for field in fields:
        if field and field not in unique:
            unique.append(field)
    return unique


def _format_result(text: str):
    """Pretty-print answers that are JSON documents; plain text is shown as-is."""
    try:
        data = json.loads(text)
    except ValueError:
        return Text(text)
    if not isinstance(data, (dict, list)):
        return Text(text)
    return JSON.from_data(data, indent=2)


def _print_result(result: ExtractionResult) -> None:
    """Render the extraction result and token usage."""
    console.print(Panel(_format_result(result.extracted_text), title="Scraping Results", expand=False))

    if result.input_tokens > 0:
        table = Table(title="Token Usage", show_header=False)
        table.add_column("Metric", style="bold blue")
        table.add_column("Value", justify="right")
        table.add_row("Input Tokens", str(result.input_tokens))
        table.add_row("Output Tokens", str(result.output_tokens))
        table.add_row("Total Cost", f"${result.total_cost:.4f}")
        console.print(table)


def main() -> None:
    """Main CLI entry point."""
    app()


if __name__ == "__main__":
    main()
