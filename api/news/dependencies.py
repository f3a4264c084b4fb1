"""
Store selection for news routes.
"""

from __future__ import annotations

import os
from functools import lru_cache

from .memory import InMemoryNewsRepository
from .repository import NewsRepository, PostgresNewsRepository

BACKENDS = ("postgres", "memory")


def store_backend() -> str:
    backend = os.environ.get("NEWS_STORE_BACKEND", "postgres").strip().lower() or "postgres"
    if backend not in BACKENDS:
        raise RuntimeError(f"NEWS_STORE_BACKEND must be one of {', '.join(BACKENDS)}; got {backend!r}.")
    return backend


@lru_cache(maxsize=None)
def _repository_for(backend: str) -> NewsRepository:
    # One instance per process so the in-memory store keeps its state.
    if backend == "memory":
        return InMemoryNewsRepository()
    return PostgresNewsRepository()


def get_news_repository() -> NewsRepository:
    return _repository_for(store_backend())
