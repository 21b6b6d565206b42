from src.config.logger_config import logger
from src.crawler.application.ports import InputSourcePort
from src.crawler.domain.domain_store import DomainStateStore
from src.crawler.domain.models import DomainEntry, SeedRow
from src.crawler.domain.rules import candidate_url, domain_of, strip_trailing_slash
from src.crawler.errors import InputReadError


class InputLoader:
    """Seeds the domain store and builds the initial frontier from an input source.

    For each row the normalized seed URL is appended, followed by the
    speculative accessibility page of its domain. The frontier never holds
    two byte-identical URLs.
    """

    def __init__(self, store: DomainStateStore) -> None:
        self.store = store
        self.skipped_rows = 0

    def load(self, source: InputSourcePort) -> list[str]:
        frontier: list[str] = []
        seen: set[str] = set()
        try:
            for row in source.iter_rows():
                self._seed_row(row, frontier, seen)
        except InputReadError as exc:
            logger.error(
                "Input read failed, continuing with partial frontier: source={}, reason={}, frontier_size={}",
                source.label,
                exc.reason,
                len(frontier),
            )
        logger.info(
            "Input loaded: source={}, domains={}, frontier_size={}, skipped_rows={}",
            source.label,
            len(self.store),
            len(frontier),
            self.skipped_rows,
        )
        return frontier

    def _seed_row(self, row: SeedRow, frontier: list[str], seen: set[str]) -> None:
        raw_url = (row.url or "").strip()
        domain = domain_of(raw_url) if raw_url else ""
        if not domain:
            self.skipped_rows += 1
            logger.warning(
                "Skip input row without a usable URL: url={!r}, entity_name={}, sample_name={}",
                row.url,
                row.entity_name,
                row.sample_name,
            )
            return

        url = strip_trailing_slash(raw_url)
        if self.store.lookup(url) is None:
            self.store.insert(
                DomainEntry(
                    url=url,
                    domain=domain,
                    entity_name=row.entity_name,
                    sample_name=row.sample_name,
                )
            )

        for link in (url, candidate_url(raw_url)):
            if link not in seen:
                seen.add(link)
                frontier.append(link)
