"""Resolvers answering category and course queries and mutations."""

from __future__ import annotations

from dataclasses import dataclass

from catalogkit.database import Category, CategoryStore, Course, CourseStore


@dataclass(frozen=True)
class CategoryNode:
    """A category as exposed to clients of the graph."""

    id: str
    name: str
    description: str | None = None


@dataclass(frozen=True)
class CourseNode:
    """A course as exposed to clients of the graph."""

    id: str
    name: str
    description: str | None = None


@dataclass(frozen=True)
class NewCategory:
    """Input for creating a category."""

    name: str
    description: str | None = None


@dataclass(frozen=True)
class NewCourse:
    """Input for creating a course in a category."""

    name: str
    category_id: str
    description: str | None = None


def _category_node(category: Category) -> CategoryNode:
    return CategoryNode(id=category.id, name=category.name, description=category.description)


def _course_node(course: Course) -> CourseNode:
    return CourseNode(id=course.id, name=course.name, description=course.description)


def _required_description(description: str | None) -> str:
    if description is None:
        raise ValueError("description is required")
    return description


class Resolver:
    """Resolves graph fields against the category and course stores."""

    def __init__(self, category_db: CategoryStore, course_db: CourseStore) -> None:
        self.category_db = category_db
        self.course_db = course_db

    def category_courses(self, category: CategoryNode) -> list[CourseNode]:
        """The courses of a category."""
        return [_course_node(course) for course in self.course_db.find_by_category_id(category.id)]

    def course_category(self, course: CourseNode) -> CategoryNode:
        """The category a course belongs to."""
        return _category_node(self.category_db.find_by_course_id(course.id))

    def create_category(self, new_category: NewCategory) -> CategoryNode:
        """Store a new category and return it."""
        description = _required_description(new_category.description)
        return _category_node(self.category_db.create(new_category.name, description))

    def create_course(self, new_course: NewCourse) -> CourseNode:
        """Store a new course and return it."""
        description = _required_description(new_course.description)
        course = self.course_db.create(new_course.name, description, new_course.category_id)
        return _course_node(course)

    def categories(self) -> list[CategoryNode]:
        """Every category."""
        return [_category_node(category) for category in self.category_db.find_all()]

    def courses(self) -> list[CourseNode]:
        """Every course."""
        return [_course_node(course) for course in self.course_db.find_all()]