import unittest

from src.crawler.application.input_loader import InputLoader
from src.crawler.application.page_processor import PageProcessor
from src.crawler.application.use_cases.find_statements import FindStatementsCommand, FindStatementsUseCase
from src.crawler.application.workflows.crawl_domains import CrawlDomainsWorkflow, CrawlWorkflowConfig
from src.crawler.domain.domain_store import DomainStateStore
from src.crawler.domain.models import SeedRow
from tests.utils.fakes import FakeFetcher, FakeSink, FakeSource
from tests.utils.pages import GENERIC_GENERATOR_HTML, HEADING_ONLY_HTML, make_page


class FindStatementsUseCaseTests(unittest.IsolatedAsyncioTestCase):
    def _use_case(self, fetcher: FakeFetcher) -> tuple[FindStatementsUseCase, FakeSink]:
        store = DomainStateStore()
        sink = FakeSink()
        workflow = CrawlDomainsWorkflow(
            fetcher=fetcher,
            processor=PageProcessor(store=store, sink=sink),
            config=CrawlWorkflowConfig(max_concurrency=4, page_timeout_seconds=5.0, show_progress=False),
        )
        return FindStatementsUseCase(loader=InputLoader(store), workflow=workflow), sink

    async def test_each_domain_reports_at_most_one_statement(self):
        fetcher = FakeFetcher(
            {
                "https://a.example": make_page("https://a.example", GENERIC_GENERATOR_HTML),
                "https://a.example/acessibilidade": make_page("https://a.example/acessibilidade", HEADING_ONLY_HTML),
                "https://b.example": make_page("https://b.example", "<p>Nada</p>"),
                "https://b.example/acessibilidade": make_page("https://b.example/acessibilidade", "<p>Nada</p>"),
            }
        )
        use_case, sink = self._use_case(fetcher)
        source = FakeSource([SeedRow(url="https://a.example/"), SeedRow(url="https://b.example")])

        result = await use_case.execute(FindStatementsCommand(source=source))

        self.assertEqual(result.domains_total, 2)
        self.assertEqual(result.frontier_seeded, 4)
        self.assertEqual(result.summary.found_total, 1)
        self.assertEqual(len(sink.found), 1)
        self.assertTrue(sink.found[0].url.startswith("https://a.example"))
        self.assertEqual(sink.failed, [])

    async def test_empty_input_finishes_with_empty_summary(self):
        use_case, sink = self._use_case(FakeFetcher({}))

        result = await use_case.execute(FindStatementsCommand(source=FakeSource([])))

        self.assertEqual(result.frontier_seeded, 0)
        self.assertEqual(result.summary.visited_total, 0)
        self.assertEqual(sink.found, [])
