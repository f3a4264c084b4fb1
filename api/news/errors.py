"""
News error types.

`NewsStoreError` is what the storage layer raises: an underlying cause paired
with the HTTP status the API should answer with.
"""

from __future__ import annotations

from http import HTTPStatus
from uuid import UUID


class NewsStoreError(RuntimeError):
    def __init__(self, cause: BaseException, status_code: int) -> None:
        super().__init__(str(cause))
        self.cause = cause
        self.status_code = int(status_code)
        self.__cause__ = cause

    def __str__(self) -> str:
        return str(self.cause)

    def __repr__(self) -> str:
        return f"NewsStoreError({self.cause!r}, status_code={self.status_code})"

    @property
    def status_phrase(self) -> str:
        try:
            return HTTPStatus(self.status_code).phrase
        except ValueError:
            return "Error"


class NewsNotFoundError(LookupError):
    pass


def news_not_found(news_id: UUID) -> NewsStoreError:
    return NewsStoreError(NewsNotFoundError(f"news {news_id} not found"), HTTPStatus.NOT_FOUND)


class NewsValidationError(ValueError):
    """
    Every violation found in a request body, in check order.
    """

    def __init__(self, errors: list[str]) -> None:
        self.errors = list(errors)
        super().__init__("\n".join(self.errors))
