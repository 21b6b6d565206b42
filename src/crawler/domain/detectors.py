from dataclasses import dataclass

from bs4 import BeautifulSoup, Tag

# W3C generator (generic) and the Portuguese accessibility statement generator (regional).
GENERATOR_SELECTOR = ".mr.mr-e-name, .basic-information.organization-name"
REGIONAL_GENERATOR_CLASS = "mr-e-name"
REGIONAL_SITE_URL_SELECTOR = ".capFL [name=siteurl], .capFL .siteurl"
REGIONAL_CONFORMANCE_SELECTOR = ".mr.mr-conformance-status"

STATEMENT_HEADINGS: tuple[tuple[str, str], ...] = (
    ("h1", "declaração de acessibilidade"),
    ("h2", "i. estado de conformidade"),
)


@dataclass(frozen=True)
class GeneratorMatch:
    classes: tuple[str, ...]

    @property
    def is_regional(self) -> bool:
        return REGIONAL_GENERATOR_CLASS in self.classes


@dataclass(frozen=True)
class HeadingMatch:
    tag: str
    text: str


@dataclass(frozen=True)
class RegionalFields:
    site_url: str = ""
    conformance_status: str = ""


def parse_html(html: str) -> BeautifulSoup:
    return BeautifulSoup(html or "", "lxml")


def _normalize(text: str) -> str:
    return text.strip().lower()


def detect_generator(soup: BeautifulSoup) -> GeneratorMatch | None:
    element = soup.select_one(GENERATOR_SELECTOR)
    if element is None:
        return None
    return GeneratorMatch(classes=tuple(element.get("class") or ()))


def detect_heading(soup: BeautifulSoup) -> HeadingMatch | None:
    expected = dict(STATEMENT_HEADINGS)
    for heading in soup.find_all(["h1", "h2"]):
        if not isinstance(heading, Tag):
            continue
        tag = heading.name.lower()
        text = _normalize(heading.get_text())
        if expected.get(tag) == text:
            return HeadingMatch(tag=tag, text=text)
    return None


def extract_regional_fields(soup: BeautifulSoup) -> RegionalFields:
    site_url = soup.select_one(REGIONAL_SITE_URL_SELECTOR)
    conformance = soup.select_one(REGIONAL_CONFORMANCE_SELECTOR)
    return RegionalFields(
        site_url=" ".join(site_url.get_text().split()) if site_url is not None else "",
        conformance_status=" ".join(conformance.get_text().split()) if conformance is not None else "",
    )
