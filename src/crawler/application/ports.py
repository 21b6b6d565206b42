from typing import Iterator, Protocol, runtime_checkable

from src.crawler.domain.models import (
    FailedLinkRecord,
    FetchedPage,
    FirstLinkRecord,
    FoundStatementRecord,
    RegionalStatementRecord,
    SeedRow,
)


@runtime_checkable
class InputSourcePort(Protocol):
    label: str

    def iter_rows(self) -> Iterator[SeedRow]: ...
    """Yield seed rows; raise InputReadError when the source cannot be read."""


@runtime_checkable
class PageFetcherPort(Protocol):
    async def fetch(self, url: str) -> FetchedPage: ...
    """Fetch and render one page; raise PageFetchError on failure."""

    async def close(self) -> None: ...


@runtime_checkable
class ResultSinkPort(Protocol):
    def write_first_link(self, record: FirstLinkRecord) -> None: ...

    def write_regional(self, record: RegionalStatementRecord) -> None: ...

    def write_found(self, record: FoundStatementRecord) -> None: ...

    def write_failed(self, record: FailedLinkRecord) -> None: ...

    def close(self) -> None: ...
    """Release resources."""
