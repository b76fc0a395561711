"""Conference registry kept in sync between SQLite and an FTS5 search index."""

__version__ = "0.1.0"
