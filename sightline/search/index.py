"""A small full-text index of crawled documents, searched through lens filters."""

from __future__ import annotations

import heapq
import json
import logging
import math
import re
import threading
import time
import uuid
from collections import Counter
from dataclasses import asdict, dataclass, field
from pathlib import Path
from typing import Iterable

from sightline.search.query import CONTENT_FIELD, TITLE_FIELD, build_query

log = logging.getLogger(__name__)

INDEX_FILE = "documents.json"
RESULT_LIMIT = 5

# Words of this many bytes or more are dropped.
_MAX_WORD_BYTES = 40
_WORD_PATTERN = re.compile(r"[^\W_]+")

# BM25 parameters.
_K1 = 1.2
_B = 0.75


def _tokenize(text: str) -> list[str]:
    return [
        word.lower()
        for word in _WORD_PATTERN.findall(text)
        if len(word.encode("utf-8")) < _MAX_WORD_BYTES
    ]


@dataclass(frozen=True)
class SearchFilter:
    """A restriction on the URLs a search may return; no pattern means no restriction."""

    pattern: str | None = None

    @classmethod
    def url_regex(cls, pattern: str) -> SearchFilter:
        """Keep only documents whose URL matches the regular expression `pattern`."""
        return cls(pattern)


@dataclass(frozen=True)
class Document:
    """A document stored in the index."""

    id: str
    title: str
    description: str
    domain: str
    url: str
    content: str


@dataclass
class _Entry:
    doc: Document
    fields: dict[str, Counter] = field(default_factory=dict)
    lengths: dict[str, int] = field(default_factory=dict)

    @classmethod
    def of(cls, doc: Document) -> _Entry:
        entry = cls(doc)
        for name, text in ((TITLE_FIELD, doc.title), (CONTENT_FIELD, doc.content)):
            words = _tokenize(text)
            entry.fields[name] = Counter(words)
            entry.lengths[name] = len(words)
        return entry


class Searcher:
    """An index of documents; writes become visible to searches once committed."""

    def __init__(self, path: Path | None = None) -> None:
        self._path = path
        self._lock = threading.Lock()
        self._pending: list[tuple[str, Document | str]] = []
        self._docs: dict[str, _Entry] = {}

    @classmethod
    def with_index(cls, path: str | Path | None = None) -> Searcher:
        """Open the index kept in directory `path`, or an in-memory one if `path` is None."""
        if path is None:
            return cls()
        directory = Path(path)
        if not directory.is_dir():
            raise FileNotFoundError(f"Unable to open search index at {directory}")
        searcher = cls(directory)
        stored = directory / INDEX_FILE
        if stored.exists():
            for record in json.loads(stored.read_text(encoding="utf-8")):
                doc = Document(**record)
                searcher._docs[doc.id] = _Entry.of(doc)
        return searcher

    def add_document(
        self,
        title: str,
        description: str,
        domain: str,
        url: str,
        content: str,
        raw: str = "",
    ) -> str:
        """Queue a new document for the next commit and return its id."""
        doc_id = str(uuid.uuid4())
        doc = Document(doc_id, title, description, domain, url, content)
        with self._lock:
            self._pending.append(("add", doc))
        return doc_id

    def delete(self, doc_id: str) -> None:
        """Queue removal of the document `doc_id` for the next commit."""
        with self._lock:
            self._pending.append(("delete", doc_id))

    def commit(self) -> None:
        """Apply queued additions and deletions in order, and persist them."""
        with self._lock:
            for op, payload in self._pending:
                if op == "add":
                    self._docs[payload.id] = _Entry.of(payload)
                else:
                    self._docs.pop(payload, None)
            self._pending.clear()
            if self._path is not None:
                records = [asdict(entry.doc) for entry in self._docs.values()]
                (self._path / INDEX_FILE).write_text(
                    json.dumps(records, ensure_ascii=False), encoding="utf-8"
                )

    def get_by_id(self, doc_id: str) -> Document | None:
        """The committed document with id `doc_id`, if any."""
        entry = self._docs.get(doc_id)
        return entry.doc if entry is not None else None

    def num_docs(self) -> int:
        """How many committed documents the index holds."""
        return len(self._docs)

    def search_with_lens(
        self, filters: Iterable[SearchFilter], query_string: str
    ) -> list[tuple[float, Document]]:
        """The best matches for `query_string` whose URLs pass `filters`, best first."""
        started = time.monotonic()
        patterns = [f.pattern for f in filters if f.pattern is not None]
        try:
            regexes = [re.compile(pattern) for pattern in patterns]
        except re.error as err:
            raise ValueError(f"Unable to build regex set: {err}") from err

        clauses = build_query(query_string)
        entries = list(self._docs.values())
        total = len(entries)
        avg_len = {
            name: (sum(e.lengths[name] for e in entries) / total) if total else 0.0
            for name in (TITLE_FIELD, CONTENT_FIELD)
        }
        doc_freq: dict[tuple[str, str], int] = {}
        for clause in clauses:
            key = (clause.field, clause.term)
            if key not in doc_freq:
                doc_freq[key] = sum(1 for e in entries if e.fields[clause.field][clause.term])

        scored: list[tuple[float, Document]] = []
        for entry in entries:
            matched = False
            score = 0.0
            for clause in clauses:
                tf = entry.fields[clause.field][clause.term]
                if not tf:
                    continue
                matched = True
                n = doc_freq[(clause.field, clause.term)]
                idf = math.log(1.0 + (total - n + 0.5) / (n + 0.5))
                average = avg_len[clause.field] or 1.0
                norm = _K1 * (1.0 - _B + _B * entry.lengths[clause.field] / average)
                score += clause.boost * idf * tf * (_K1 + 1.0) / (tf + norm)
            if not matched:
                continue
            if regexes and not any(r.search(entry.doc.url) for r in regexes):
                score = -1.0
            scored.append((score, entry.doc))

        top = heapq.nlargest(RESULT_LIMIT, scored, key=lambda item: item[0])
        log.info(
            "query `%s` returned %d results from %d docs in %d ms",
            query_string,
            len(top),
            total,
            int((time.monotonic() - started) * 1000),
        )
        return [(score, doc) for score, doc in top if score >= 0.0]