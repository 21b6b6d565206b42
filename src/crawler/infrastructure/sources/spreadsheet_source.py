from pathlib import Path
from zipfile import BadZipFile
from typing import Iterator, Sequence

from openpyxl import load_workbook
from openpyxl.utils.exceptions import InvalidFileException

from src.config.logger_config import logger
from src.crawler.application.ports import InputSourcePort
from src.crawler.domain.models import SeedRow
from src.crawler.errors import InputReadError


class SpreadsheetSource(InputSourcePort):
    """Workbook with one organization per row: column A name, column B homepage URL.

    Only the listed sheets are read and the first row of each is a header.
    """

    def __init__(self, path: str | Path, sheet_names: Sequence[str]) -> None:
        self.path = Path(path)
        self.sheet_names = tuple(sheet_names)
        self.label = f"xlsx:{self.path}"

    def iter_rows(self) -> Iterator[SeedRow]:
        try:
            workbook = load_workbook(self.path, read_only=True, data_only=True)
        except (OSError, BadZipFile, InvalidFileException, KeyError, ValueError) as exc:
            raise InputReadError(str(self.path), f"{type(exc).__name__}: {exc}") from exc

        try:
            for sheet_name in self.sheet_names:
                if sheet_name not in workbook.sheetnames:
                    logger.warning(
                        "Sheet not found in workbook, skipped: path={}, sheet={}, available={}",
                        str(self.path),
                        sheet_name,
                        workbook.sheetnames,
                    )
                    continue
                sheet = workbook[sheet_name]
                for values in sheet.iter_rows(min_row=2, max_col=2, values_only=True):
                    entity, url = (tuple(values) + (None, None))[:2]
                    if entity is None and url is None:
                        continue
                    yield SeedRow(
                        url=self._cell_text(url),
                        entity_name=self._cell_text(entity),
                        sample_name=sheet_name,
                    )
        finally:
            workbook.close()

    @staticmethod
    def _cell_text(value: object) -> str:
        if value is None:
            return ""
        return str(value).strip()
