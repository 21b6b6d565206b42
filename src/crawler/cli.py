"""Command line entry: ``python -m src.crawler run``."""

from dataclasses import replace

import typer

from src.config.logger_config import logger
from src.config.settings import CrawlerSettings
from src.crawler.run import run_find_statements

app = typer.Typer(
    name="as-crawler",
    help="Find accessibility statements on the first-level links of organization homepages.",
    add_completion=False,
)


@app.callback()
def main() -> None:
    """Accessibility statement crawler."""


@app.command("run")
def run_command(
    input_mode: str | None = typer.Option(None, "--mode", "-m", help="Input mode: txt, xlsx or manual"),
    input_path: str | None = typer.Option(None, "--input", "-i", help="URL list (.txt) or workbook (.xlsx)"),
    sheet: list[str] | None = typer.Option(None, "--sheet", "-s", help="Sheet name to read (repeatable, xlsx mode)"),
    url: str | None = typer.Option(None, "--url", "-u", help="Single homepage URL (manual mode)"),
    output_dir: str | None = typer.Option(None, "--output", "-o", help="Output directory"),
    max_concurrency: int | None = typer.Option(None, "--max-concurrency", help="Pages processed in parallel"),
    page_timeout: float | None = typer.Option(None, "--page-timeout", help="Per-page timeout in seconds"),
    run_timeout: float | None = typer.Option(None, "--run-timeout", help="Whole-run timeout in seconds"),
    headless: bool | None = typer.Option(None, "--headless/--no-headless", help="Run the browser headless"),
    fetcher: str | None = typer.Option(None, "--fetcher", help="Page fetcher: browser or http"),
    progress: bool | None = typer.Option(None, "--progress/--no-progress", help="Show progress bar"),
) -> None:
    """Crawl the configured homepages and write the result files."""
    overrides = {
        "input_mode": input_mode.lower() if input_mode else None,
        "input_path": input_path,
        "sheet_names": tuple(sheet) if sheet else None,
        "manual_url": url,
        "output_dir": output_dir,
        "max_concurrency": max_concurrency,
        "page_timeout_seconds": page_timeout,
        "run_timeout_seconds": run_timeout,
        "headless": headless,
        "fetcher": fetcher.lower() if fetcher else None,
        "show_progress": progress,
    }
    if url and input_mode is None:
        overrides["input_mode"] = "manual"
    try:
        settings = replace(
            CrawlerSettings.from_env(),
            **{key: value for key, value in overrides.items() if value is not None},
        )
    except ValueError as exc:
        raise typer.BadParameter(str(exc)) from exc

    result = run_find_statements(settings)
    logger.success(
        "CRAWLER FINISHED! elapsed={}, domains={}, found={}, failed={}",
        result.summary.elapsed,
        result.domains_total,
        result.summary.found_total,
        result.summary.failed_total,
    )
