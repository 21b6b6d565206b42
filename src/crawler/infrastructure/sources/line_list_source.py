import re
from pathlib import Path
from typing import Iterator

from src.config.logger_config import logger
from src.crawler.application.ports import InputSourcePort
from src.crawler.domain.models import SeedRow
from src.crawler.errors import InputReadError

_LINE_BREAK = re.compile(r"\r?\n")


class LineListSource(InputSourcePort):
    """One URL per line, no provenance."""

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)
        self.label = f"txt:{self.path}"

    def iter_rows(self) -> Iterator[SeedRow]:
        try:
            raw = self.path.read_text(encoding="utf-8-sig")
        except (OSError, UnicodeDecodeError) as exc:
            raise InputReadError(str(self.path), f"{type(exc).__name__}: {exc}") from exc

        lines = [line.strip() for line in _LINE_BREAK.split(raw.strip())]
        logger.debug("Line list read: path={}, lines={}", str(self.path), len(lines))
        for line in lines:
            if line:
                yield SeedRow(url=line)
