"""A category service with single, streaming and bidirectional calls."""

from __future__ import annotations

from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from catalogkit.database import Category, CategoryStore


@dataclass(frozen=True)
class CategoryMessage:
    """A category as sent to clients."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class CreateCategoryRequest:
    """A request to create a category."""

    name: str
    description: str


@dataclass
class CategoryList:
    """A list of categories sent as one reply."""

    categories: list[CategoryMessage] = field(default_factory=list)


def _message(category: Category) -> CategoryMessage:
    return CategoryMessage(id=category.id, name=category.name, description=category.description)


class CategoryService:
    """Creates and looks up categories on behalf of clients."""

    def __init__(self, category_db: CategoryStore) -> None:
        self.category_db = category_db

    def create_category(self, request: CreateCategoryRequest) -> CategoryMessage:
        """Create one category."""
        return _message(self.category_db.create(request.name, request.description))

    def list_categories(self) -> CategoryList:
        """Every category."""
        return CategoryList([_message(category) for category in self.category_db.find_all()])

    def get_category(self, category_id: str) -> CategoryMessage:
        """The category with the given identifier."""
        return _message(self.category_db.find(category_id))

    def create_category_stream(self, requests: Iterable[CreateCategoryRequest]) -> CategoryList:
        """Create a category per request and reply once with all of them."""
        return CategoryList([self.create_category(request) for request in requests])

    def create_category_stream_bidirectional(
        self, requests: Iterable[CreateCategoryRequest]
    ) -> Iterator[CategoryMessage]:
        """Create a category per request, replying to each as it arrives."""
        for request in requests:
            yield self.create_category(request)