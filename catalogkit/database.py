"""Categories and courses stored in a SQLite database."""

from __future__ import annotations

import sqlite3
import uuid
from dataclasses import dataclass

_SCHEMA = """
CREATE TABLE IF NOT EXISTS categories (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL
);
CREATE TABLE IF NOT EXISTS courses (
    id TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    description TEXT NOT NULL,
    category_id TEXT NOT NULL
);
"""


class RecordNotFoundError(LookupError):
    """Raised when a lookup matches no row."""


@dataclass(frozen=True)
class Category:
    """A category of courses."""

    id: str
    name: str
    description: str


@dataclass(frozen=True)
class Course:
    """A course belonging to a category."""

    id: str
    name: str
    description: str
    category_id: str


def create_schema(connection: sqlite3.Connection) -> None:
    """Create the categories and courses tables if they do not exist."""
    with connection:
        connection.executescript(_SCHEMA)


def _new_id() -> str:
    return str(uuid.uuid4())


class CategoryStore:
    """Reads and writes categories."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def create(self, name: str, description: str) -> Category:
        """Insert a category under a fresh identifier and return it."""
        category = Category(id=_new_id(), name=name, description=description)
        with self.connection:
            self.connection.execute(
                "INSERT INTO categories (id, name, description) VALUES (?, ?, ?)",
                (category.id, category.name, category.description),
            )
        return category

    def find_all(self) -> list[Category]:
        """Every category in the database."""
        rows = self.connection.execute("SELECT id, name, description FROM categories")
        return [Category(*row) for row in rows]

    def find_by_course_id(self, course_id: str) -> Category:
        """The category of the given course."""
        row = self.connection.execute(
            "SELECT c.id, c.name, c.description FROM categories c "
            "JOIN courses co ON c.id = co.category_id WHERE co.id = ?",
            (course_id,),
        ).fetchone()
        if row is None:
            raise RecordNotFoundError(f"no category for course {course_id!r}")
        return Category(*row)

    def find(self, category_id: str) -> Category:
        """The category with the given identifier."""
        row = self.connection.execute(
            "SELECT name, description FROM categories WHERE id = ?",
            (category_id,),
        ).fetchone()
        if row is None:
            raise RecordNotFoundError(f"no category {category_id!r}")
        name, description = row
        return Category(id=category_id, name=name, description=description)


class CourseStore:
    """Reads and writes courses."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def create(self, name: str, description: str, category_id: str) -> Course:
        """Insert a course under a fresh identifier and return it."""
        course = Course(
            id=_new_id(), name=name, description=description, category_id=category_id
        )
        with self.connection:
            self.connection.execute(
                "INSERT INTO courses (id, name, description, category_id) "
                "VALUES (?, ?, ?, ?)",
                (course.id, course.name, course.description, course.category_id),
            )
        return course

    def find_all(self) -> list[Course]:
        """Every course in the database."""
        rows = self.connection.execute(
            "SELECT id, name, description, category_id FROM courses"
        )
        return [Course(*row) for row in rows]

    def find_by_category_id(self, category_id: str) -> list[Course]:
        """The courses that belong to the given category."""
        rows = self.connection.execute(
            "SELECT id, name, description, category_id FROM courses WHERE category_id = ?",
            (category_id,),
        )
        return [Course(*row) for row in rows]

    def find(self, course_id: str) -> Course:
        """The course with the given identifier."""
        row = self.connection.execute(
            "SELECT name, description, category_id FROM courses WHERE id = ?",
            (course_id,),
        ).fetchone()
        if row is None:
            raise RecordNotFoundError(f"no course {course_id!r}")
        name, description, category_id = row
        return Course(
            id=course_id, name=name, description=description, category_id=category_id
        )