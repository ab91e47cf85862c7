"""Data access objects over the SQLite schema created by ``core.db``."""
