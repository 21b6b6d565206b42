from dataclasses import dataclass

from src.crawler.domain.detectors import (
    detect_generator,
    detect_heading,
    extract_regional_fields,
    parse_html,
)
from src.crawler.domain.models import (
    ClassificationOutcome,
    DomainEntry,
    FetchedPage,
    FoundStatementRecord,
    RegionalStatementRecord,
)
from src.crawler.domain.rules import has_canonical_accessibility_path, is_accepted_content_type

OutputRecord = FoundStatementRecord | RegionalStatementRecord


@dataclass(frozen=True)
class ClassificationResult:
    outcome: ClassificationOutcome
    records: tuple[OutputRecord, ...] = ()

    @property
    def marks_finished(self) -> bool:
        return self.outcome.is_found


class StatementClassifier:
    """Decides whether a fetched page is an accessibility statement.

    Pure: reads the page and a DomainEntry snapshot, returns the outcome and
    the records to write. Committing ``finished`` and writing records is left
    to the caller.
    """

    def classify(self, page: FetchedPage, entry: DomainEntry) -> ClassificationResult:
        if not is_accepted_content_type(page.content_type):
            return ClassificationResult(ClassificationOutcome.SKIPPED_CONTENT_TYPE)
        if entry.finished:
            return ClassificationResult(ClassificationOutcome.DOMAIN_FINISHED)

        soup = parse_html(page.html)
        generator = detect_generator(soup)
        heading = detect_heading(soup)
        if generator is None and heading is None:
            return ClassificationResult(ClassificationOutcome.NOT_FOUND)

        records: list[OutputRecord] = []
        outcome = ClassificationOutcome.AS_FOUND_GENERIC
        regional_generator = generator is not None and generator.is_regional
        if regional_generator or heading is not None:
            # Heading-only matches carry no generator markup to read fields from.
            fields = extract_regional_fields(soup) if regional_generator else None
            records.append(
                RegionalStatementRecord(
                    org_name=fields.site_url if fields else "",
                    conformance_status=fields.conformance_status if fields else "",
                    url=page.final_url,
                    canonical_path=has_canonical_accessibility_path(page.final_url),
                    generator_detected=generator is not None,
                    entity_name=entry.entity_name,
                    sample_name=entry.sample_name,
                )
            )
            outcome = ClassificationOutcome.AS_FOUND_REGIONAL
        records.append(FoundStatementRecord(url=page.request_url))
        return ClassificationResult(outcome, tuple(records))
