"""Persistence tests run against a fresh in-memory SQLite database."""

from tests.shared.fixtures.database import async_engine, db_session

__all__ = ["async_engine", "db_session"]
