"""SQLite storage for per-guild notification settings."""
