import re
from urllib.parse import urldefrag, urljoin, urlsplit

ACCESSIBILITY_SEGMENT = "acessibilidade"
ACCESSIBILITY_PATH = f"/{ACCESSIBILITY_SEGMENT}"

ACCEPTED_CONTENT_TYPES: tuple[str, ...] = ("text/html", "text/xml")

# Non-document links never worth a visit when expanding a first page.
EXCLUDED_EXTENSIONS: frozenset[str] = frozenset((
    # style sheets and scripts
    ".css", ".js", ".map",
    # images
    ".jpg", ".jpeg", ".png", ".gif", ".svg", ".webp", ".ico", ".bmp",
    # documents and data files
    ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt", ".csv", ".json",
    # archives
    ".zip", ".rar", ".7z", ".gz", ".tar",
    # fonts
    ".woff", ".woff2", ".ttf", ".eot", ".otf",
    # media
    ".mp4", ".mp3", ".mkv", ".wav", ".webm", ".avi", ".mov", ".ogg",
    # markup and query formats
    ".xml", ".rss", ".php",
))

_ACCESSIBILITY_IN_PATH = re.compile(rf"/{ACCESSIBILITY_SEGMENT}", re.I)


def strip_trailing_slash(url: str) -> str:
    return url[:-1] if url.endswith("/") else url


def domain_of(url: str) -> str:
    return urlsplit(url.strip()).netloc.lower()


def origin_of(url: str) -> str:
    parts = urlsplit(url)
    return f"{parts.scheme.lower()}://{parts.netloc.lower()}"


def candidate_url(url: str) -> str:
    """Speculative accessibility page for the URL's scheme and authority."""
    parts = urlsplit(url)
    return f"{parts.scheme}://{parts.netloc}{ACCESSIBILITY_PATH}"


def is_accessibility_candidate(url: str) -> bool:
    return strip_trailing_slash(url).endswith(ACCESSIBILITY_PATH)


def mentions_accessibility_path(url: str) -> bool:
    """True when the accessibility segment appears after the authority, behind a '/'."""
    parts = urlsplit(strip_trailing_slash(url))
    return bool(_ACCESSIBILITY_IN_PATH.search(parts.path))


def has_canonical_accessibility_path(url: str) -> bool:
    """True when the first path segment after the domain is exactly the accessibility segment."""
    segments = urlsplit(url).path.split("/")
    return len(segments) > 1 and segments[1] == ACCESSIBILITY_SEGMENT


def is_accepted_content_type(content_type: str | None) -> bool:
    # Unknown content type is accepted.
    if content_type is None:
        return True
    lowered = content_type.strip().lower()
    return any(lowered.startswith(prefix) for prefix in ACCEPTED_CONTENT_TYPES)


def has_excluded_extension(url: str) -> bool:
    path = urlsplit(url).path.lower()
    return any(path.endswith(ext) for ext in EXCLUDED_EXTENSIONS)


def resolve_link(href: str, base: str) -> str | None:
    if not href or not href.strip():
        return None
    joined, _ = urldefrag(urljoin(base, href.strip()))
    if urlsplit(joined).scheme.lower() not in ("http", "https"):
        return None
    return joined


def frontier_key(url: str) -> str:
    return urldefrag(url)[0]
