"""
Repository layer.

One repository per table (or closely related tables) on top of a generic
async ``BaseRepository``, plus a bundle for dependency injection.
"""

from .base import BaseRepository, QueryBuilder
from .bundle import RepoBundle, build_repos

__all__ = ["BaseRepository", "QueryBuilder", "RepoBundle", "build_repos"]
