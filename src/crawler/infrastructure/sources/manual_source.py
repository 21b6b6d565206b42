from typing import Iterator

from src.crawler.application.ports import InputSourcePort
from src.crawler.domain.models import SeedRow


class ManualSource(InputSourcePort):
    def __init__(self, url: str) -> None:
        self.url = url
        self.label = "manual"

    def iter_rows(self) -> Iterator[SeedRow]:
        yield SeedRow(url=self.url)
