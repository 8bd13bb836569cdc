"""Typed queries over categories and courses, with transactional helpers."""

from __future__ import annotations

import sqlite3
from collections.abc import Callable
from dataclasses import dataclass

from catalogkit.database import RecordNotFoundError

_SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT
);
CREATE TABLE IF NOT EXISTS courses (
    id TEXT PRIMARY KEY,
    category_id TEXT NOT NULL,
    name TEXT NOT NULL,
    description TEXT,
    price REAL NOT NULL
);
"""

_CREATE_CATEGORY = "INSERT INTO categories (id, name, description) VALUES (?, ?, ?)"
_CREATE_COURSE = (
    "INSERT INTO courses (id, name, description, category_id, price) VALUES (?, ?, ?, ?, ?)"
)
_DELETE_CATEGORY = "DELETE FROM categories WHERE id = ?"
_GET_CATEGORY = "SELECT id, name, description FROM categories WHERE id = ?"
_LIST_CATEGORIES = "SELECT id, name, description FROM categories"
_LIST_COURSES = (
    "SELECT c.id, c.category_id, c.name, c.description, c.price, ca.name AS category_name "
    "FROM courses c JOIN categories ca ON c.category_id = ca.id"
)
_UPDATE_CATEGORY = "UPDATE categories SET name = ?, description = ? WHERE id = ?"


@dataclass(frozen=True)
class CategoryRow:
    """A stored category; the description may be missing."""

    id: str
    name: str
    description: str | None


@dataclass(frozen=True)
class CourseRow:
    """A stored course; the description may be missing."""

    id: str
    category_id: str
    name: str
    description: str | None
    price: float


@dataclass(frozen=True)
class ListCoursesRow:
    """A course together with the name of its category."""

    id: str
    category_id: str
    name: str
    description: str | None
    price: float
    category_name: str


@dataclass(frozen=True)
class CategoryParams:
    """Values for a new category."""

    id: str
    name: str
    description: str | None = None


@dataclass(frozen=True)
class CourseParams:
    """Values for a new course; its category is given separately."""

    id: str
    name: str
    description: str | None = None
    price: float = 0.0


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the categories and courses tables if they do not exist."""
    with connection:
        connection.executescript(_SCHEMA)


class Queries:
    """The statements the application runs against a connection.

    With ``autocommit`` each write is committed at once; without it the
    caller owns the surrounding transaction.
    """

    def __init__(self, connection: sqlite3.Connection, *, autocommit: bool = True) -> None:
        self.connection = connection
        self.autocommit = autocommit

    def _exec(self, statement: str, params: tuple) -> None:
        self.connection.execute(statement, params)
        if self.autocommit:
            self.connection.commit()

    def create_category(self, category_id: str, name: str, description: str | None) -> None:
        """Insert a category."""
        self._exec(_CREATE_CATEGORY, (category_id, name, description))

    def create_course(
        self,
        course_id: str,
        name: str,
        description: str | None,
        category_id: str,
        price: float,
    ) -> None:
        """Insert a course."""
        self._exec(_CREATE_COURSE, (course_id, name, description, category_id, price))

    def delete_category(self, category_id: str) -> None:
        """Delete a category; nothing happens if it does not exist."""
        self._exec(_DELETE_CATEGORY, (category_id,))

    def get_category(self, category_id: str) -> CategoryRow:
        """The category with the given identifier."""
        row = self.connection.execute(_GET_CATEGORY, (category_id,)).fetchone()
        if row is None:
            raise RecordNotFoundError(f"no category {category_id!r}")
        return CategoryRow(*row)

    def list_categories(self) -> list[CategoryRow]:
        """Every category."""
        return [CategoryRow(*row) for row in self.connection.execute(_LIST_CATEGORIES)]

    def list_courses(self) -> list[ListCoursesRow]:
        """Every course that has a category, with the category's name."""
        return [ListCoursesRow(*row) for row in self.connection.execute(_LIST_COURSES)]

    def update_category(self, category_id: str, name: str, description: str | None) -> None:
        """Change the name and description of a category."""
        self._exec(_UPDATE_CATEGORY, (name, description, category_id))


class CourseDB(Queries):
    """Queries plus operations that run several statements in one transaction."""

    def _call_tx(self, fn: Callable[[Queries], None]) -> None:
        self.connection.execute("BEGIN")
        try:
            fn(Queries(self.connection, autocommit=False))
        except Exception as error:
            try:
                self.connection.rollback()
            except sqlite3.Error as rollback_error:
                raise RuntimeError(
                    f"error on rollback: {rollback_error}, original error: {error}"
                ) from error
            raise
        self.connection.commit()

    def create_course_and_category(self, category: CategoryParams, course: CourseParams) -> None:
        """Insert a category and a course in it, both or neither."""

        def insert(queries: Queries) -> None:
            queries.create_category(category.id, category.name, category.description)
            queries.create_course(
                course.id, course.name, course.description, category.id, course.price
            )

        self._call_tx(insert)