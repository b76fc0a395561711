"""Full-text search subsystem with FTS5 indexing and query translation."""

from conferences.search.base import SearchIndex
from conferences.search.index import Fts5SearchIndex
from conferences.search.query import MatchQuery, hits_to_conferences, translate_query

__all__ = [
    "Fts5SearchIndex",
    "MatchQuery",
    "SearchIndex",
    "hits_to_conferences",
    "translate_query",
]
