from dataclasses import dataclass

from src.config.logger_config import logger
from src.crawler.application.ports import ResultSinkPort
from src.crawler.domain.classifier import StatementClassifier
from src.crawler.domain.domain_store import DomainStateStore
from src.crawler.domain.link_policy import LinkExpansionPolicy
from src.crawler.domain.models import (
    ClassificationOutcome,
    FailedLinkRecord,
    FetchedPage,
    FirstLinkRecord,
    FoundStatementRecord,
    RegionalStatementRecord,
)
from src.crawler.domain.rules import is_accessibility_candidate


@dataclass(frozen=True)
class PageVisit:
    outcome: ClassificationOutcome
    new_links: tuple[str, ...] = ()


class PageProcessor:
    """Runs one fetched page through classification, link expansion and the result sink."""

    def __init__(
        self,
        store: DomainStateStore,
        sink: ResultSinkPort,
        classifier: StatementClassifier | None = None,
        link_policy: LinkExpansionPolicy | None = None,
    ) -> None:
        self.store = store
        self.sink = sink
        self.classifier = classifier or StatementClassifier()
        self.link_policy = link_policy or LinkExpansionPolicy()

    def process(self, page: FetchedPage) -> PageVisit:
        final_entry = self.store.lookup(page.final_url)
        entry = final_entry or self.store.lookup(page.request_url)
        if entry is None:
            logger.warning(
                "Page does not belong to any seeded domain: request_url={}, final_url={}",
                page.request_url,
                page.final_url,
            )
            return PageVisit(ClassificationOutcome.UNTRACKED_DOMAIN)

        result = self.classifier.classify(page, entry)
        if result.outcome is ClassificationOutcome.SKIPPED_CONTENT_TYPE:
            logger.debug("Skip page by content type: url={}, content_type={}", page.final_url, page.content_type)
            return PageVisit(result.outcome)
        if result.outcome is ClassificationOutcome.DOMAIN_FINISHED:
            logger.info("► {} √", page.final_url)
            return PageVisit(result.outcome)

        new_links: tuple[str, ...] = ()
        if self.store.mark_first_visited(entry.domain):
            if final_entry is not None:
                new_links = tuple(self.link_policy.expand(page.final_url, page.html))
            else:
                logger.warning(
                    "First page redirected off the seeded domain, links not expanded: domain={}, final_url={}",
                    entry.domain,
                    page.final_url,
                )
            if self.link_policy.should_record_first_link(page.final_url):
                self.sink.write_first_link(FirstLinkRecord(url=page.final_url))
            logger.debug(
                "First page expanded: domain={}, url={}, new_links={}",
                entry.domain,
                page.final_url,
                len(new_links),
            )

        logger.info("► {} X", page.final_url)
        if not result.marks_finished:
            return PageVisit(result.outcome, new_links)

        if not self.store.mark_finished(entry.domain):
            # Another worker already recorded this domain.
            return PageVisit(ClassificationOutcome.DOMAIN_FINISHED, new_links)

        for record in result.records:
            if isinstance(record, RegionalStatementRecord):
                self.sink.write_regional(record)
            elif isinstance(record, FoundStatementRecord):
                self.sink.write_found(record)
        logger.success("√ {} (domain={}, outcome={})", page.request_url, entry.domain, result.outcome.value)
        return PageVisit(result.outcome, new_links)

    def handle_failure(self, url: str, reason: str) -> bool:
        """Route a failed fetch; returns False when the failure is suppressed."""
        entry = self.store.lookup(url)
        if is_accessibility_candidate(url) and entry is not None and entry.first_link:
            logger.debug("Suppress failure of speculative accessibility page: url={}, reason={}", url, reason)
            return False
        logger.warning("X {} ({})", url, reason)
        self.sink.write_failed(FailedLinkRecord(url=url, reason=reason))
        return True
