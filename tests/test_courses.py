import sqlite3

import pytest

from catalogkit.courses import (
    AddCourseInput,
    AddCourseUseCase,
    AddCourseUseCaseUow,
    Category,
    CategoryRepository,
    Course,
    CourseRepository,
    create_schema,
)
from catalogkit.uow import UnitOfWork


@pytest.fixture
def connection():
    conn = sqlite3.connect(":memory:")
    create_schema(conn)
    yield conn
    conn.close()


def _categories(conn):
    return conn.execute("SELECT id, name FROM categories ORDER BY id").fetchall()


def _courses(conn):
    return conn.execute("SELECT id, name, category_id FROM courses ORDER BY id").fetchall()


def _uow(conn):
    uow = UnitOfWork(conn)
    uow.register("CategoryRepository", lambda tx: CategoryRepository(tx, autocommit=False))
    uow.register("CourseRepository", lambda tx: CourseRepository(tx, autocommit=False))
    return uow


def test_add_course_appends_ids():
    category = Category(name="Backend")
    category.add_course(3)
    category.add_course(7)
    assert category.course_ids == [3, 7]


def test_category_repository_assigns_identifiers(connection):
    repo = CategoryRepository(connection)
    repo.insert(Category(name="First", id=42))
    repo.insert(Category(name="Second"))
    assert _categories(connection) == [(1, "First"), (2, "Second")]


def test_course_repository_inserts_with_category(connection):
    CategoryRepository(connection).insert(Category(name="Category 1"))
    CourseRepository(connection).insert(Course(name="Course 1", category_id=1))
    assert _courses(connection) == [(1, "Course 1", 1)]


def test_course_repository_rejects_unknown_category(connection):
    with pytest.raises(sqlite3.IntegrityError):
        CourseRepository(connection).insert(Course(name="Course 1", category_id=9))
    assert _courses(connection) == []


def test_repository_without_autocommit_leaves_transaction_to_caller(connection):
    repo = CategoryRepository(connection, autocommit=False)
    repo.insert(Category(name="Pending"))
    connection.rollback()
    assert _categories(connection) == []


def test_add_course_use_case_succeeds(connection):
    use_case = AddCourseUseCase(CourseRepository(connection), CategoryRepository(connection))
    use_case.execute(AddCourseInput("Category 1", "Course 1", 1))
    assert _categories(connection) == [(1, "Category 1")]
    assert _courses(connection) == [(1, "Course 1", 1)]


def test_add_course_use_case_keeps_category_when_course_fails(connection):
    use_case = AddCourseUseCase(CourseRepository(connection), CategoryRepository(connection))
    with pytest.raises(sqlite3.IntegrityError):
        use_case.execute(AddCourseInput("Category 1", "Course 1", 2))
    assert _categories(connection) == [(1, "Category 1")]
    assert _courses(connection) == []


def test_add_course_uow_succeeds(connection):
    uow = _uow(connection)
    AddCourseUseCaseUow(uow).execute(AddCourseInput("Category 1", "Course 1", 1))
    assert _categories(connection) == [(1, "Category 1")]
    assert _courses(connection) == [(1, "Course 1", 1)]
    assert uow.in_transaction is False


def test_add_course_uow_rolls_back_everything_on_failure(connection):
    uow = _uow(connection)
    with pytest.raises(sqlite3.IntegrityError):
        AddCourseUseCaseUow(uow).execute(AddCourseInput("Category 1", "Course 1", 2))
    assert _categories(connection) == []
    assert _courses(connection) == []
    assert uow.in_transaction is False


def test_add_course_uow_missing_repository_rolls_back(connection):
    uow = UnitOfWork(connection)
    uow.register("CategoryRepository", lambda tx: CategoryRepository(tx, autocommit=False))
    with pytest.raises(KeyError):
        AddCourseUseCaseUow(uow).execute(AddCourseInput("Category 1", "Course 1", 1))
    assert _categories(connection) == []
    assert uow.in_transaction is False


def test_add_course_uow_can_run_twice(connection):
    uow = _uow(connection)
    use_case = AddCourseUseCaseUow(uow)
    use_case.execute(AddCourseInput("Category 1", "Course 1", 1))
    use_case.execute(AddCourseInput("Category 2", "Course 2", 2))
    assert _categories(connection) == [(1, "Category 1"), (2, "Category 2")]
    assert _courses(connection) == [(1, "Course 1", 1), (2, "Course 2", 2)]