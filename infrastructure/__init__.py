"""Infrastructure adapters: SQLite persistence and media storage."""
