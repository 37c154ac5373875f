"""Turn a search string into weighted term clauses."""

from __future__ import annotations

from dataclasses import dataclass

TITLE_FIELD = "title"
CONTENT_FIELD = "content"

TITLE_BOOST = 5.0
CONTENT_BOOST = 1.0
PHRASE_BOOST = 5.0


@dataclass(frozen=True)
class BoostedTerm:
    """A term to look for in one field, with the weight a match carries."""

    field: str
    term: str
    boost: float


def build_query(query_string: str) -> tuple[BoostedTerm, ...]:
    """The optional clauses for `query_string`; a document must match at least one.

    The whole lower-cased string is boosted when it holds several terms, and
    every term weighs more in the title than in the content.
    """
    query_string = query_string.lower()
    terms = [token.strip() for token in query_string.split(" ")]

    clauses: list[BoostedTerm] = []
    if len(terms) > 1:
        clauses.append(BoostedTerm(TITLE_FIELD, query_string, PHRASE_BOOST))
        clauses.append(BoostedTerm(CONTENT_FIELD, query_string, PHRASE_BOOST))

    for term in terms:
        clauses.append(BoostedTerm(CONTENT_FIELD, term, CONTENT_BOOST))
        clauses.append(BoostedTerm(TITLE_FIELD, term, TITLE_BOOST))

    return tuple(clauses)