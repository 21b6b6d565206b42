import unittest

from src.crawler.application.page_processor import PageProcessor
from src.crawler.domain.classifier import ClassificationResult
from src.crawler.domain.domain_store import DomainStateStore
from src.crawler.domain.models import ClassificationOutcome, DomainEntry, FirstLinkRecord, FoundStatementRecord
from tests.utils.fakes import FakeSink
from tests.utils.pages import (
    GENERIC_GENERATOR_HTML,
    PLAIN_HTML,
    REGIONAL_GENERATOR_HTML,
    make_page,
)

HOME_HTML = """
<html><body>
  <a href="/about">About</a>
  <a href="/logo.png">Logo</a>
  <a href="https://other.org/x">Other</a>
</body></html>
"""


class _AlwaysFoundClassifier:
    def classify(self, page, entry):
        return ClassificationResult(
            ClassificationOutcome.AS_FOUND_GENERIC,
            (FoundStatementRecord(url=page.request_url),),
        )


class PageProcessorTests(unittest.TestCase):
    def setUp(self):
        self.store = DomainStateStore()
        self.store.insert(DomainEntry(url="https://gov.example", domain="gov.example"))
        self.sink = FakeSink()
        self.processor = PageProcessor(store=self.store, sink=self.sink)

    def test_first_page_expands_links_and_records_audit(self):
        visit = self.processor.process(make_page("https://gov.example", HOME_HTML))

        self.assertEqual(visit.outcome, ClassificationOutcome.NOT_FOUND)
        self.assertEqual(visit.new_links, ("https://gov.example/about",))
        self.assertEqual(self.sink.first_links, [FirstLinkRecord(url="https://gov.example")])
        self.assertFalse(self.store.get("gov.example").first_link)

    def test_later_pages_do_not_expand(self):
        self.processor.process(make_page("https://gov.example", HOME_HTML))
        visit = self.processor.process(make_page("https://gov.example/about", HOME_HTML))
        self.assertEqual(visit.new_links, ())
        self.assertEqual(len(self.sink.first_links), 1)

    def test_candidate_page_first_flips_first_link_without_audit_record(self):
        visit = self.processor.process(make_page("https://gov.example/acessibilidade", PLAIN_HTML))
        self.assertEqual(visit.new_links, ("https://gov.example/about",))
        self.assertEqual(self.sink.first_links, [])
        self.assertFalse(self.store.get("gov.example").first_link)

        visit = self.processor.process(make_page("https://gov.example", HOME_HTML))
        self.assertEqual(visit.new_links, ())

    def test_skipped_content_type_does_not_consume_first_link(self):
        visit = self.processor.process(make_page("https://gov.example/a.doc", "", content_type="application/msword"))
        self.assertEqual(visit.outcome, ClassificationOutcome.SKIPPED_CONTENT_TYPE)
        self.assertTrue(self.store.get("gov.example").first_link)

    def test_found_statement_is_written_once(self):
        page = make_page("https://gov.example/acessibilidade", REGIONAL_GENERATOR_HTML)
        first = self.processor.process(page)
        second = self.processor.process(page)
        third = self.processor.process(make_page("https://gov.example/other", GENERIC_GENERATOR_HTML))

        self.assertEqual(first.outcome, ClassificationOutcome.AS_FOUND_REGIONAL)
        self.assertEqual(second.outcome, ClassificationOutcome.DOMAIN_FINISHED)
        self.assertEqual(third.outcome, ClassificationOutcome.DOMAIN_FINISHED)
        self.assertEqual(len(self.sink.found), 1)
        self.assertEqual(len(self.sink.regional), 1)
        self.assertTrue(self.store.get("gov.example").finished)

    def test_losing_the_finish_race_writes_nothing(self):
        processor = PageProcessor(store=self.store, sink=self.sink, classifier=_AlwaysFoundClassifier())
        # Another worker committed the domain between classification and commit.
        self.store.mark_finished("gov.example")
        visit = processor.process(make_page("https://gov.example/x", GENERIC_GENERATOR_HTML))
        self.assertEqual(visit.outcome, ClassificationOutcome.DOMAIN_FINISHED)
        self.assertEqual(self.sink.found, [])

    def test_redirect_to_subdomain_uses_seeded_entry(self):
        page = make_page("https://gov.example", GENERIC_GENERATOR_HTML, final_url="https://www.gov.example/")
        visit = self.processor.process(page)
        self.assertEqual(visit.outcome, ClassificationOutcome.AS_FOUND_GENERIC)
        self.assertEqual(self.sink.found[0].url, "https://gov.example")

    def test_redirect_off_seeded_host_does_not_expand_links(self):
        self.store.insert(DomainEntry(url="https://www.portal.example", domain="www.portal.example"))
        page = make_page("https://www.portal.example", HOME_HTML, final_url="https://portal.example/")

        visit = self.processor.process(page)

        self.assertEqual(visit.outcome, ClassificationOutcome.NOT_FOUND)
        self.assertEqual(visit.new_links, ())
        self.assertFalse(self.store.get("www.portal.example").first_link)
        self.assertEqual(self.sink.first_links, [FirstLinkRecord(url="https://portal.example/")])

    def test_untracked_domain_is_ignored(self):
        visit = self.processor.process(make_page("https://other.org", GENERIC_GENERATOR_HTML))
        self.assertEqual(visit.outcome, ClassificationOutcome.UNTRACKED_DOMAIN)
        self.assertEqual(self.sink.found, [])


class FailureRoutingTests(unittest.TestCase):
    def setUp(self):
        self.store = DomainStateStore()
        self.store.insert(DomainEntry(url="https://gov.example", domain="gov.example"))
        self.sink = FakeSink()
        self.processor = PageProcessor(store=self.store, sink=self.sink)

    def test_speculative_candidate_failure_is_suppressed_while_first_link(self):
        written = self.processor.handle_failure("https://gov.example/acessibilidade/", "HTTP 404")
        self.assertFalse(written)
        self.assertEqual(self.sink.failed, [])

    def test_candidate_failure_is_recorded_after_first_page(self):
        self.store.mark_first_visited("gov.example")
        written = self.processor.handle_failure("https://gov.example/acessibilidade", "HTTP 404")
        self.assertTrue(written)
        self.assertEqual(self.sink.failed[0].reason, "HTTP 404")

    def test_other_failures_are_recorded(self):
        self.assertTrue(self.processor.handle_failure("https://gov.example", "net::ERR_NAME_NOT_RESOLVED"))
        self.assertEqual(self.sink.failed[0].url, "https://gov.example")
