import asyncio
from dataclasses import dataclass
from time import perf_counter
from typing import Sequence

from tqdm import tqdm

from src.config.logger_config import logger
from src.crawler.application.page_processor import PageProcessor
from src.crawler.application.ports import PageFetcherPort
from src.crawler.domain.models import ClassificationOutcome, CrawlSummary
from src.crawler.domain.rules import frontier_key
from src.crawler.errors import PageFetchError


@dataclass(frozen=True)
class CrawlWorkflowConfig:
    max_concurrency: int = 200
    page_timeout_seconds: float = 180.0
    run_timeout_seconds: float | None = None
    show_progress: bool = True


class CrawlDomainsWorkflow:
    """Drains the frontier with a bounded pool of workers.

    Each visit (fetch + processing) runs under its own timeout; a failed or
    aborted visit is routed to failure handling and never stops other workers.
    """

    def __init__(
        self,
        fetcher: PageFetcherPort,
        processor: PageProcessor,
        config: CrawlWorkflowConfig | None = None,
    ) -> None:
        self.fetcher = fetcher
        self.processor = processor
        self.config = config or CrawlWorkflowConfig()
        self._queue: asyncio.Queue[str] | None = None
        self._seen: set[str] = set()
        self._progress: tqdm | None = None
        self._visited_total = 0
        self._failed_total = 0
        self._found_total = 0
        self._skipped_total = 0

    async def run(self, seeds: Sequence[str]) -> CrawlSummary:
        started = perf_counter()
        self._queue = asyncio.Queue()
        self._seen = set()
        for url in seeds:
            self._enqueue(url)
        seeded_total = self._queue.qsize()
        logger.info(
            "Crawl started: seeded_urls={}, domains={}, max_concurrency={}, page_timeout_seconds={}",
            seeded_total,
            len(self.processor.store),
            self.config.max_concurrency,
            self.config.page_timeout_seconds,
        )

        with tqdm(
            total=seeded_total,
            desc="Crawl pages",
            unit="page",
            leave=True,
            disable=not self.config.show_progress,
        ) as progress:
            self._progress = progress
            workers = [asyncio.create_task(self._worker()) for _ in range(self.config.max_concurrency)]
            try:
                if self.config.run_timeout_seconds is not None:
                    await asyncio.wait_for(self._queue.join(), timeout=self.config.run_timeout_seconds)
                else:
                    await self._queue.join()
            except asyncio.TimeoutError:
                logger.warning(
                    "Crawl run timed out: run_timeout_seconds={}, pending_urls={}",
                    self.config.run_timeout_seconds,
                    self._queue.qsize(),
                )
            finally:
                for worker in workers:
                    worker.cancel()
                await asyncio.gather(*workers, return_exceptions=True)
                self._progress = None

        summary = CrawlSummary(
            domains_total=len(self.processor.store),
            seeded_total=seeded_total,
            visited_total=self._visited_total,
            failed_total=self._failed_total,
            found_total=self._found_total,
            skipped_content_type_total=self._skipped_total,
            duration_ms=int((perf_counter() - started) * 1000),
        )
        logger.info(
            "Crawl finished: elapsed={}, visited={}, found={}, failed={}, skipped_content_type={}",
            summary.elapsed,
            summary.visited_total,
            summary.found_total,
            summary.failed_total,
            summary.skipped_content_type_total,
        )
        return summary

    def _enqueue(self, url: str) -> bool:
        key = frontier_key(url)
        if key in self._seen:
            return False
        self._seen.add(key)
        self._queue.put_nowait(url)
        if self._progress is not None and not self._progress.disable:
            self._progress.total += 1
            self._progress.refresh()
        return True

    async def _worker(self) -> None:
        while True:
            url = await self._queue.get()
            try:
                await self._visit(url)
            finally:
                self._queue.task_done()
                if self._progress is not None:
                    self._progress.update(1)

    async def _visit(self, url: str) -> None:
        try:
            await asyncio.wait_for(self._fetch_and_process(url), timeout=self.config.page_timeout_seconds)
        except asyncio.TimeoutError:
            self._route_failure(url, f"Page processing timed out after {self.config.page_timeout_seconds} seconds")
        except PageFetchError as exc:
            self._route_failure(url, exc.reason)
        except Exception as exc:
            logger.exception("Unexpected error while processing {}: {}", url, exc)
            self._route_failure(url, f"{type(exc).__name__}: {exc}")

    async def _fetch_and_process(self, url: str) -> None:
        page = await self.fetcher.fetch(url)
        self._seen.add(frontier_key(page.final_url))
        visit = self.processor.process(page)
        self._visited_total += 1
        if visit.outcome.is_found:
            self._found_total += 1
        elif visit.outcome is ClassificationOutcome.SKIPPED_CONTENT_TYPE:
            self._skipped_total += 1
        for link in visit.new_links:
            self._enqueue(link)

    def _route_failure(self, url: str, reason: str) -> None:
        if self.processor.handle_failure(url, reason):
            self._failed_total += 1
