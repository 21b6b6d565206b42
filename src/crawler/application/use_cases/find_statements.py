from dataclasses import dataclass

from src.config.logger_config import logger
from src.crawler.application.input_loader import InputLoader
from src.crawler.application.ports import InputSourcePort
from src.crawler.application.workflows.crawl_domains import CrawlDomainsWorkflow
from src.crawler.domain.models import CrawlSummary


@dataclass(frozen=True)
class FindStatementsCommand:
    source: InputSourcePort


@dataclass(frozen=True)
class FindStatementsResult:
    domains_total: int
    frontier_seeded: int
    summary: CrawlSummary


class FindStatementsUseCase:
    def __init__(self, loader: InputLoader, workflow: CrawlDomainsWorkflow) -> None:
        self.loader = loader
        self.workflow = workflow

    async def execute(self, command: FindStatementsCommand) -> FindStatementsResult:
        logger.info("Find statements use case started: source={}", command.source.label)
        frontier = self.loader.load(command.source)
        if not frontier:
            logger.warning("Frontier is empty, nothing to crawl: source={}", command.source.label)
        summary = await self.workflow.run(frontier)
        logger.info(
            "Find statements use case completed: domains_total={}, found_total={}, failed_total={}",
            summary.domains_total,
            summary.found_total,
            summary.failed_total,
        )
        return FindStatementsResult(
            domains_total=summary.domains_total,
            frontier_seeded=len(frontier),
            summary=summary,
        )
