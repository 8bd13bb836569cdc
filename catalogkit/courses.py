"""Adding a course together with its category, with or without a unit of work."""

from __future__ import annotations

import sqlite3
from dataclasses import dataclass, field
from typing import Protocol

from catalogkit.uow import UnitOfWork

CATEGORY_REPOSITORY = "CategoryRepository"
COURSE_REPOSITORY = "CourseRepository"

_SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS courses (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name TEXT NOT NULL,
    category_id INTEGER NOT NULL,
    FOREIGN KEY (category_id) REFERENCES categories(id)
);
"""

_CREATE_CATEGORY = "INSERT INTO categories (id, name) VALUES (?, ?)"
_CREATE_COURSE = "INSERT INTO courses (id, name, category_id) VALUES (?, ?, ?)"


def create_schema(connection: sqlite3.Connection) -> None:
    """Turn on foreign key checks and create the categories and courses tables."""
    connection.execute("PRAGMA foreign_keys = ON")
    with connection:
        connection.executescript(_SCHEMA)


@dataclass
class Category:
    """A category and the identifiers of its courses."""

    name: str
    id: int = 0
    course_ids: list[int] = field(default_factory=list)

    def add_course(self, course_id: int) -> None:
        """Record that a course belongs to this category."""
        self.course_ids.append(course_id)


@dataclass
class Course:
    """A course placed in a category."""

    name: str
    category_id: int
    id: int = 0


class _Queries:
    """Insert statements; with autocommit each one is its own transaction."""

    def __init__(self, connection: sqlite3.Connection, autocommit: bool) -> None:
        self.connection = connection
        self.autocommit = autocommit

    def _exec(self, statement: str, params: tuple) -> None:
        if self.autocommit:
            with self.connection:
                self.connection.execute(statement, params)
        else:
            self.connection.execute(statement, params)

    def create_category(self, name: str) -> None:
        self._exec(_CREATE_CATEGORY, (None, name))

    def create_course(self, name: str, category_id: int) -> None:
        self._exec(_CREATE_COURSE, (None, name, category_id))


class CategoryRepository:
    """Stores categories; the database assigns their identifiers.

    With ``autocommit`` off the caller owns the surrounding transaction.
    """

    def __init__(self, connection: sqlite3.Connection, *, autocommit: bool = True) -> None:
        self.connection = connection
        self._queries = _Queries(connection, autocommit)

    def insert(self, category: Category) -> None:
        """Store the category's name under a fresh identifier."""
        self._queries.create_category(category.name)


class CourseRepository:
    """Stores courses; the database assigns their identifiers.

    With ``autocommit`` off the caller owns the surrounding transaction.
    """

    def __init__(self, connection: sqlite3.Connection, *, autocommit: bool = True) -> None:
        self.connection = connection
        self._queries = _Queries(connection, autocommit)

    def insert(self, course: Course) -> None:
        """Store the course's name and category under a fresh identifier."""
        self._queries.create_course(course.name, course.category_id)


class _CategoryInserter(Protocol):
    def insert(self, category: Category) -> None: ...


class _CourseInserter(Protocol):
    def insert(self, course: Course) -> None: ...


@dataclass(frozen=True)
class AddCourseInput:
    """What is needed to add a category and a course."""

    category_name: str
    course_name: str
    course_category_id: int


class AddCourseUseCase:
    """Adds a category and then a course, each committed on its own."""

    def __init__(
        self, course_repository: _CourseInserter, category_repository: _CategoryInserter
    ) -> None:
        self.course_repository = course_repository
        self.category_repository = category_repository

    def execute(self, data: AddCourseInput) -> None:
        """Insert the category, then the course."""
        self.category_repository.insert(Category(name=data.category_name))
        self.course_repository.insert(
            Course(name=data.course_name, category_id=data.course_category_id)
        )


class AddCourseUseCaseUow:
    """Adds a category and a course in one transaction: both or neither.

    The unit of work must have repositories registered under
    ``CategoryRepository`` and ``CourseRepository``.
    """

    def __init__(self, uow: UnitOfWork) -> None:
        self.uow = uow

    def execute(self, data: AddCourseInput) -> None:
        """Insert the category and the course inside the unit of work."""

        def work(uow: UnitOfWork) -> None:
            categories: _CategoryInserter = uow.get_repository(CATEGORY_REPOSITORY)
            categories.insert(Category(name=data.category_name))
            courses: _CourseInserter = uow.get_repository(COURSE_REPOSITORY)
            courses.insert(Course(name=data.course_name, category_id=data.course_category_id))

        self.uow.do(work)