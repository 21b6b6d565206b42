from collections.abc import Iterable

from bs4 import BeautifulSoup, SoupStrainer

from src.crawler.domain.rules import (
    has_excluded_extension,
    mentions_accessibility_path,
    origin_of,
    resolve_link,
)

LINK_STRAINER = SoupStrainer("a", href=True)


def extract_links(html: str) -> list[str]:
    soup = BeautifulSoup(html or "", "lxml", parse_only=LINK_STRAINER)
    return [a["href"] for a in soup.find_all("a", href=True) if a.get("href")]


class LinkExpansionPolicy:
    """Decides which links found on a domain's first page are worth enqueuing."""

    def eligible_links(self, page_url: str, hrefs: Iterable[str]) -> list[str]:
        origin = origin_of(page_url)
        seen: set[str] = set()
        eligible: list[str] = []
        for href in hrefs:
            target = resolve_link(href, base=page_url)
            if target is None or target in seen:
                continue
            if origin_of(target) != origin:
                continue
            if has_excluded_extension(target):
                continue
            seen.add(target)
            eligible.append(target)
        return eligible

    def expand(self, page_url: str, html: str) -> list[str]:
        return self.eligible_links(page_url, extract_links(html))

    @staticmethod
    def should_record_first_link(url: str) -> bool:
        return not mentions_accessibility_path(url)
