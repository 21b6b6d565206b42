from dataclasses import dataclass
from enum import Enum


@dataclass
class DomainEntry:
    url: str
    domain: str
    entity_name: str = ""
    sample_name: str = ""
    first_link: bool = True
    finished: bool = False


@dataclass(frozen=True)
class SeedRow:
    url: str
    entity_name: str = ""
    sample_name: str = ""


@dataclass(frozen=True)
class FetchedPage:
    request_url: str
    final_url: str
    html: str
    status: int | None = None
    content_type: str | None = None


class ClassificationOutcome(str, Enum):
    AS_FOUND_GENERIC = "as_found_generic"
    AS_FOUND_REGIONAL = "as_found_regional"
    NOT_FOUND = "not_found"
    SKIPPED_CONTENT_TYPE = "skipped_content_type"
    DOMAIN_FINISHED = "domain_finished"
    UNTRACKED_DOMAIN = "untracked_domain"

    @property
    def is_found(self) -> bool:
        return self in (ClassificationOutcome.AS_FOUND_GENERIC, ClassificationOutcome.AS_FOUND_REGIONAL)


@dataclass(frozen=True)
class FirstLinkRecord:
    url: str


@dataclass(frozen=True)
class FoundStatementRecord:
    url: str


@dataclass(frozen=True)
class RegionalStatementRecord:
    org_name: str
    conformance_status: str
    url: str
    canonical_path: bool
    generator_detected: bool
    entity_name: str = ""
    sample_name: str = ""


@dataclass(frozen=True)
class FailedLinkRecord:
    url: str
    reason: str


@dataclass(frozen=True)
class CrawlSummary:
    domains_total: int
    seeded_total: int
    visited_total: int
    failed_total: int
    found_total: int
    skipped_content_type_total: int
    duration_ms: int

    @property
    def elapsed(self) -> str:
        total_minutes = self.duration_ms / 60000
        hours = int(total_minutes // 60)
        minutes = round(total_minutes - hours * 60, 2)
        return f"{hours}h {minutes}m"
