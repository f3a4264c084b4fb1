import pytest
from fastapi.testclient import TestClient

from main import app
from news.dependencies import get_news_repository
from news.memory import InMemoryNewsRepository


@pytest.fixture
def news_body():
    return {
        "author": "test-author",
        "title": "test-title",
        "summary": "test-summary",
        "content": "test-content",
        "created_at": "2024-04-07T05:13:27+00:00",
        "source": "https://test-news.com",
        "tags": ["test-tag"],
    }


@pytest.fixture
def store():
    return InMemoryNewsRepository()


@pytest.fixture
def use_store():
    """
    Route news endpoints to the given repository for the rest of the test.
    """

    def _use(repository):
        app.dependency_overrides[get_news_repository] = lambda: repository
        return repository

    yield _use
    app.dependency_overrides.clear()


@pytest.fixture
def client(store, use_store):
    use_store(store)
    return TestClient(app)
