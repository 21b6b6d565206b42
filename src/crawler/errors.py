class CrawlerError(Exception):
    """Base error for the accessibility statement crawler."""


class InputReadError(CrawlerError):
    """Input file is missing or unreadable."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to read input {path}: {reason}")
        self.path = path
        self.reason = reason


class PageFetchError(CrawlerError):
    """Navigation, network, timeout or HTTP status failure for one page."""

    def __init__(self, url: str, reason: str, status: int | None = None) -> None:
        super().__init__(reason)
        self.url = url
        self.reason = reason
        self.status = status


class WriteError(CrawlerError):
    """Append to an output stream failed."""

    def __init__(self, path: str, reason: str) -> None:
        super().__init__(f"Failed to append to {path}: {reason}")
        self.path = path
        self.reason = reason
