# 爬蟲執行參數 (讀取 .env 與環境變數)

import os
from dataclasses import dataclass, field

from dotenv import load_dotenv

load_dotenv()

INPUT_MODES = ("txt", "xlsx", "manual")
FETCHERS = ("browser", "http")


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return int(raw)


def _env_float(name: str, default: float | None) -> float | None:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return float(raw)


@dataclass(frozen=True)
class CrawlerSettings:
    input_mode: str = "txt"
    input_path: str = "lib/urls.txt"
    sheet_names: tuple[str, ...] = field(default_factory=lambda: ("Sheet1",))
    manual_url: str = ""
    output_dir: str = "lib/crawl"
    max_concurrency: int = 200
    page_timeout_seconds: float = 180.0
    run_timeout_seconds: float | None = None
    headless: bool = True
    fetcher: str = "browser"
    navigation_timeout_ms: int = 60000
    show_progress: bool = True

    def __post_init__(self) -> None:
        if self.input_mode not in INPUT_MODES:
            raise ValueError(f"Unsupported input mode: {self.input_mode}")
        if self.fetcher not in FETCHERS:
            raise ValueError(f"Unsupported fetcher: {self.fetcher}")
        if self.max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")

    @classmethod
    def from_env(cls) -> "CrawlerSettings":
        sheet_names = tuple(
            name.strip() for name in os.getenv("AS_SHEET_NAMES", "Sheet1").split(",") if name.strip()
        )
        return cls(
            input_mode=os.getenv("AS_INPUT_MODE", "txt").strip().lower(),
            input_path=os.getenv("AS_INPUT_PATH", "lib/urls.txt"),
            sheet_names=sheet_names or ("Sheet1",),
            manual_url=os.getenv("AS_MANUAL_URL", ""),
            output_dir=os.getenv("AS_OUTPUT_DIR", "lib/crawl"),
            max_concurrency=_env_int("AS_MAX_CONCURRENCY", 200),
            page_timeout_seconds=_env_float("AS_PAGE_TIMEOUT_SECONDS", 180.0),
            run_timeout_seconds=_env_float("AS_RUN_TIMEOUT_SECONDS", None),
            headless=_env_bool("AS_HEADLESS", True),
            fetcher=os.getenv("AS_FETCHER", "browser").strip().lower(),
            navigation_timeout_ms=_env_int("AS_NAVIGATION_TIMEOUT_MS", 60000),
            show_progress=_env_bool("AS_SHOW_PROGRESS", True),
        )
