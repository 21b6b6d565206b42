"""Domain models and deterministic rules for accessibility statement discovery."""

from src.crawler.domain.classifier import ClassificationResult, StatementClassifier
from src.crawler.domain.domain_store import DomainStateStore
from src.crawler.domain.link_policy import LinkExpansionPolicy
from src.crawler.domain.models import (
    ClassificationOutcome,
    CrawlSummary,
    DomainEntry,
    FailedLinkRecord,
    FetchedPage,
    FirstLinkRecord,
    FoundStatementRecord,
    RegionalStatementRecord,
    SeedRow,
)

__all__ = [
    "ClassificationOutcome",
    "ClassificationResult",
    "CrawlSummary",
    "DomainEntry",
    "DomainStateStore",
    "FailedLinkRecord",
    "FetchedPage",
    "FirstLinkRecord",
    "FoundStatementRecord",
    "LinkExpansionPolicy",
    "RegionalStatementRecord",
    "SeedRow",
    "StatementClassifier",
]
