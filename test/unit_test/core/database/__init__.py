"""Unit tests for the storefront database layer.

This package covers the SQLModel entities and the repositories in
teestore/core/database, including:

- Entity defaults and constraints
- Repository queries, filters and counters
- Edge case and error handling tests

All tests run against in-memory SQLite so no external database service
is needed.
"""
