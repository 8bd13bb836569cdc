import sqlite3
import uuid

import pytest

from catalogkit.database import (
    Category,
    CategoryStore,
    Course,
    CourseStore,
    RecordNotFoundError,
    create_schema,
)


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


@pytest.fixture
def categories(connection):
    return CategoryStore(connection)


@pytest.fixture
def courses(connection):
    return CourseStore(connection)


def test_create_category_returns_given_fields_and_uuid(categories):
    category = categories.create("Backend", "Backend description")
    assert category.name == "Backend"
    assert category.description == "Backend description"
    assert str(uuid.UUID(category.id)) == category.id


def test_created_categories_have_distinct_ids(categories):
    first = categories.create("A", "a")
    second = categories.create("B", "b")
    assert first.id != second.id
    assert len({first.id, second.id}) == 2


def test_find_all_categories_round_trip(categories):
    created = [categories.create("A", "a"), categories.create("B", "b")]
    assert sorted(categories.find_all(), key=lambda c: c.name) == created


def test_find_all_categories_empty(categories):
    assert categories.find_all() == []


def test_find_category(categories):
    created = categories.create("Frontend", "Frontend description")
    assert categories.find(created.id) == created


def test_find_missing_category_raises(categories):
    with pytest.raises(RecordNotFoundError):
        categories.find("missing")


def test_find_category_by_course_id(categories, courses):
    category = categories.create("Backend", "desc")
    categories.create("Other", "other")
    course = courses.create("Go", "Go course", category.id)
    assert categories.find_by_course_id(course.id) == category


def test_find_category_by_unknown_course_raises(categories):
    categories.create("Backend", "desc")
    with pytest.raises(RecordNotFoundError):
        categories.find_by_course_id("missing")


def test_create_course_returns_given_fields(courses):
    course = courses.create("Go", "Go course", "cat-1")
    assert (course.name, course.description, course.category_id) == (
        "Go",
        "Go course",
        "cat-1",
    )
    assert str(uuid.UUID(course.id)) == course.id


def test_find_all_courses_round_trip(courses):
    created = [courses.create("A", "a", "x"), courses.create("B", "b", "y")]
    assert sorted(courses.find_all(), key=lambda c: c.name) == created


def test_find_courses_by_category_id_filters(courses):
    go = courses.create("Go", "g", "cat-1")
    rust = courses.create("Rust", "r", "cat-1")
    courses.create("React", "r", "cat-2")
    found = courses.find_by_category_id("cat-1")
    assert sorted(found, key=lambda c: c.name) == [go, rust]
    assert courses.find_by_category_id("cat-3") == []


def test_find_course(courses):
    created = courses.create("Go", "Go course", "cat-1")
    assert courses.find(created.id) == created


def test_find_missing_course_raises(courses):
    with pytest.raises(RecordNotFoundError):
        courses.find("missing")


def test_create_schema_is_idempotent(connection, categories):
    created = categories.create("Backend", "desc")
    create_schema(connection)
    assert categories.find_all() == [created]


def test_records_are_committed(tmp_path):
    path = tmp_path / "data.db"
    conn = sqlite3.connect(path)
    create_schema(conn)
    category = CategoryStore(conn).create("Backend", "desc")
    course = CourseStore(conn).create("Go", "g", category.id)
    conn.close()

    reopened = sqlite3.connect(path)
    try:
        assert CategoryStore(reopened).find(category.id) == category
        assert CourseStore(reopened).find(course.id) == course
    finally:
        reopened.close()


def test_records_are_plain_values():
    assert Category("1", "n", "d") == Category("1", "n", "d")
    assert Course("1", "n", "d", "c") != Course("1", "n", "d", "other")


def test_missing_table_raises_sqlite_error():
    conn = sqlite3.connect(":memory:")
    try:
        with pytest.raises(sqlite3.OperationalError):
            CategoryStore(conn).create("Backend", "desc")
    finally:
        conn.close()