from __future__ import annotations

import threading
from collections.abc import Iterator
from dataclasses import dataclass, field, replace

from src.crawler.domain.models import DomainEntry
from src.crawler.domain.rules import domain_of, strip_trailing_slash


@dataclass
class _LabelNode:
    children: dict[str, _LabelNode] = field(default_factory=dict)
    domain: str | None = None


class DomainStateStore:
    """In-memory crawl state, one DomainEntry per domain key.

    Lookup first walks a reversed-label trie (``www.gov.pt`` -> ``pt`` ->
    ``gov`` -> ``www``) and returns the longest label-aligned suffix that is a
    stored key. When no key matches on label boundaries it falls back to plain
    substring containment, preferring the longest key.

    Every check-then-set on an entry happens under one lock, so the
    ``mark_*`` transitions are safe to call from concurrent workers.
    """

    def __init__(self) -> None:
        self._entries: dict[str, DomainEntry] = {}
        self._root = _LabelNode()
        self._lock = threading.Lock()

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, domain: str) -> bool:
        return domain in self._entries

    def entries(self) -> Iterator[DomainEntry]:
        with self._lock:
            snapshot = [replace(entry) for entry in self._entries.values()]
        return iter(snapshot)

    def get(self, domain: str) -> DomainEntry | None:
        with self._lock:
            return self._entries.get(domain)

    def insert(self, entry: DomainEntry) -> DomainEntry:
        """Insert an entry; an existing entry for the same key is kept and returned."""
        with self._lock:
            existing = self._entries.get(entry.domain)
            if existing is not None:
                return existing
            self._entries[entry.domain] = entry
            node = self._root
            for label in reversed(entry.domain.split(".")):
                node = node.children.setdefault(label, _LabelNode())
            node.domain = entry.domain
            return entry

    def lookup(self, url: str) -> DomainEntry | None:
        authority = domain_of(strip_trailing_slash(url))
        if not authority:
            return None
        with self._lock:
            key = self._match_labels(authority) or self._match_substring(authority)
            return self._entries.get(key) if key is not None else None

    def mark_first_visited(self, domain: str) -> bool:
        """Flip first_link to False; True only for the call that performed the flip."""
        with self._lock:
            entry = self._entries.get(domain)
            if entry is None or not entry.first_link:
                return False
            entry.first_link = False
            return True

    def mark_finished(self, domain: str) -> bool:
        """Flip finished to True; True only for the call that performed the flip."""
        with self._lock:
            entry = self._entries.get(domain)
            if entry is None or entry.finished:
                return False
            entry.finished = True
            return True

    def _match_labels(self, authority: str) -> str | None:
        node = self._root
        matched: str | None = None
        for label in reversed(authority.split(".")):
            node = node.children.get(label)
            if node is None:
                break
            if node.domain is not None:
                matched = node.domain
        return matched

    def _match_substring(self, authority: str) -> str | None:
        matched: str | None = None
        for key in self._entries:
            if key in authority and (matched is None or len(key) > len(matched)):
                matched = key
        return matched
