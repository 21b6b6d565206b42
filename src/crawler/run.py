from __future__ import annotations

import asyncio

from src.config.logger_config import logger
from src.config.settings import CrawlerSettings
from src.crawler.application.input_loader import InputLoader
from src.crawler.application.page_processor import PageProcessor
from src.crawler.application.ports import InputSourcePort, PageFetcherPort
from src.crawler.application.use_cases.find_statements import (
    FindStatementsCommand,
    FindStatementsResult,
    FindStatementsUseCase,
)
from src.crawler.application.workflows.crawl_domains import CrawlDomainsWorkflow, CrawlWorkflowConfig
from src.crawler.domain.domain_store import DomainStateStore
from src.crawler.infrastructure.fetchers.http_fetcher import HttpPageFetcher
from src.crawler.infrastructure.fetchers.playwright_fetcher import PlaywrightPageFetcher
from src.crawler.infrastructure.sinks.file_result_sink import FileResultSink
from src.crawler.infrastructure.sources.line_list_source import LineListSource
from src.crawler.infrastructure.sources.manual_source import ManualSource
from src.crawler.infrastructure.sources.spreadsheet_source import SpreadsheetSource


def build_source(settings: CrawlerSettings) -> InputSourcePort:
    if settings.input_mode == "txt":
        return LineListSource(settings.input_path)
    if settings.input_mode == "xlsx":
        return SpreadsheetSource(settings.input_path, settings.sheet_names)
    if settings.input_mode == "manual":
        return ManualSource(settings.manual_url)
    raise ValueError(f"Unsupported input mode: {settings.input_mode}")


def build_fetcher(settings: CrawlerSettings) -> PageFetcherPort:
    if settings.fetcher == "browser":
        return PlaywrightPageFetcher(
            headless=settings.headless,
            navigation_timeout_ms=settings.navigation_timeout_ms,
        )
    if settings.fetcher == "http":
        return HttpPageFetcher(timeout_seconds=settings.navigation_timeout_ms / 1000)
    raise ValueError(f"Unsupported fetcher: {settings.fetcher}")


async def run_find_statements_async(
    settings: CrawlerSettings | None = None,
    *,
    fetcher: PageFetcherPort | None = None,
) -> FindStatementsResult:
    settings = settings or CrawlerSettings.from_env()
    logger.info(
        "Accessibility statement crawler starting: input_mode={}, input_path={}, output_dir={}, fetcher={}, headless={}",
        settings.input_mode,
        settings.input_path,
        settings.output_dir,
        settings.fetcher,
        settings.headless,
    )
    store = DomainStateStore()
    # Provenance columns exist only when the input carries organization and sheet names.
    sink = FileResultSink(settings.output_dir, include_provenance=settings.input_mode == "xlsx")
    fetcher = fetcher or build_fetcher(settings)
    workflow = CrawlDomainsWorkflow(
        fetcher=fetcher,
        processor=PageProcessor(store=store, sink=sink),
        config=CrawlWorkflowConfig(
            max_concurrency=settings.max_concurrency,
            page_timeout_seconds=settings.page_timeout_seconds,
            run_timeout_seconds=settings.run_timeout_seconds,
            show_progress=settings.show_progress,
        ),
    )
    use_case = FindStatementsUseCase(loader=InputLoader(store), workflow=workflow)
    try:
        return await use_case.execute(FindStatementsCommand(source=build_source(settings)))
    finally:
        try:
            await fetcher.close()
        finally:
            sink.close()


def run_find_statements(
    settings: CrawlerSettings | None = None,
    *,
    fetcher: PageFetcherPort | None = None,
) -> FindStatementsResult:
    return asyncio.run(run_find_statements_async(settings, fetcher=fetcher))
