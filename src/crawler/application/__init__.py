"""Application layer: input loading, page processing and the crawl workflow."""

from src.crawler.application.input_loader import InputLoader
from src.crawler.application.page_processor import PageProcessor, PageVisit

__all__ = ["InputLoader", "PageProcessor", "PageVisit"]
