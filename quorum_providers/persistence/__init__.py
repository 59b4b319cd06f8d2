"""Persistence layer (SQLite) for durable credential storage."""
