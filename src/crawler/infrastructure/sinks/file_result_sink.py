import csv
import io
import threading
from pathlib import Path

from src.config.logger_config import logger
from src.crawler.application.ports import ResultSinkPort
from src.crawler.domain.models import (
    FailedLinkRecord,
    FirstLinkRecord,
    FoundStatementRecord,
    RegionalStatementRecord,
)
from src.crawler.errors import WriteError

FIRST_LINKS_FILENAME = "firstLinks.txt"
REGIONAL_FILENAME = "portugueseAS.csv"
FOUND_FILENAME = "foundAS.txt"
FAILED_FILENAME = "failedLinks.csv"

REGIONAL_HEADER = ("orgName", "conformanceStatus", "url", "isCanonicalPath", "isGeneratorDetected")
PROVENANCE_HEADER = ("entityName", "sampleName")
FAILED_HEADER = ("url", "failureReason")


def yes_no(value: bool) -> str:
    return "sim" if value else "não"


def _csv_line(cells: tuple[str, ...]) -> str:
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    # One record per line, whatever the cell content.
    writer.writerow([" ".join(str(cell).split()) for cell in cells])
    return buffer.getvalue()


class FileResultSink(ResultSinkPort):
    """Append-only flat files, one line per event.

    Files are recreated (with headers) when the sink is built. A failed append
    is logged and counted, never raised.
    """

    def __init__(self, output_dir: str | Path, include_provenance: bool = False) -> None:
        self.output_dir = Path(output_dir)
        self.include_provenance = include_provenance
        self.first_links_path = self.output_dir / FIRST_LINKS_FILENAME
        self.regional_path = self.output_dir / REGIONAL_FILENAME
        self.found_path = self.output_dir / FOUND_FILENAME
        self.failed_path = self.output_dir / FAILED_FILENAME
        self.write_error_count = 0
        self.counts = {"first_links": 0, "regional": 0, "found": 0, "failed": 0}
        self._lock = threading.Lock()

        try:
            self.output_dir.mkdir(parents=True, exist_ok=True)
        except OSError as exc:
            self.write_error_count += 1
            logger.error("Output directory could not be created: path={}, error={}", str(self.output_dir), exc)

        regional_header = REGIONAL_HEADER + (PROVENANCE_HEADER if include_provenance else ())
        self._reset(self.first_links_path, "")
        self._reset(self.regional_path, _csv_line(regional_header))
        self._reset(self.found_path, "")
        self._reset(self.failed_path, _csv_line(FAILED_HEADER))
        logger.info(
            "Result sink initialized: output_dir={}, include_provenance={}",
            str(self.output_dir),
            include_provenance,
        )

    def write_first_link(self, record: FirstLinkRecord) -> None:
        self._write("first_links", self.first_links_path, record.url + "\n")

    def write_regional(self, record: RegionalStatementRecord) -> None:
        cells = (
            record.org_name,
            record.conformance_status,
            record.url,
            yes_no(record.canonical_path),
            yes_no(record.generator_detected),
        )
        if self.include_provenance:
            cells += (record.entity_name, record.sample_name)
        self._write("regional", self.regional_path, _csv_line(cells))

    def write_found(self, record: FoundStatementRecord) -> None:
        self._write("found", self.found_path, record.url + "\n")

    def write_failed(self, record: FailedLinkRecord) -> None:
        self._write("failed", self.failed_path, _csv_line((record.url, record.reason)))

    def close(self) -> None:
        logger.info(
            "Result sink closed: output_dir={}, counts={}, write_error_count={}",
            str(self.output_dir),
            self.counts,
            self.write_error_count,
        )

    def _write(self, stream: str, path: Path, line: str) -> None:
        with self._lock:
            try:
                self._append(path, line)
            except WriteError as exc:
                self.write_error_count += 1
                logger.error("Output write failed: stream={}, error={}", stream, exc)
                return
            self.counts[stream] += 1

    @staticmethod
    def _append(path: Path, line: str) -> None:
        try:
            with path.open("a", encoding="utf-8") as fp:
                fp.write(line)
        except OSError as exc:
            raise WriteError(str(path), f"{type(exc).__name__}: {exc}") from exc

    def _reset(self, path: Path, header: str) -> None:
        try:
            path.write_text(header, encoding="utf-8")
        except OSError as exc:
            self.write_error_count += 1
            logger.error("Output file could not be prepared: path={}, error={}", str(path), exc)
