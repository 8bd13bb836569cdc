# catalogkit

Small, dependency-free building blocks for a course catalogue made of
categories and courses, backed by SQLite from the standard library, plus a
few concurrency helpers.

## Installation

```
pip install .
```

For running the tests:

```
pip install ".[test]"
pytest
```

## What is inside

| Module                   | Purpose |
|--------------------------|---------|
| `catalogkit.events`      | `EventDispatcher` keeps `EventHandler`s per event name. `dispatch(event)` runs every handler of `event.name` in its own thread and returns when all have finished; if any raised, the first failure in registration order is raised. Registering the same handler twice raises `HandlerAlreadyRegisteredError`. Also `has`, `remove`, `clear`, `handlers_for` and `event_names`. |
| `catalogkit.database`    | `CategoryStore` and `CourseStore` over an SQLite connection, returning frozen `Category` and `Course` records with fresh UUID identifiers. `create_schema` creates the tables. A lookup that matches nothing raises `RecordNotFoundError`. |
| `catalogkit.graph`       | `Resolver` over the two stores, answering `categories`, `courses`, `category_courses`, `course_category`, `create_category` and `create_course` with `CategoryNode` and `CourseNode`. Creating without a description raises `ValueError`. |
| `catalogkit.service`     | `CategoryService` with `create_category`, `list_categories`, `get_category`, `create_category_stream` (one `CategoryList` reply for many requests) and `create_category_stream_bidirectional` (a generator yielding one `CategoryMessage` per request). |
| `catalogkit.queries`     | `Queries` with typed rows (`CategoryRow`, `CourseRow`, `ListCoursesRow`) and nullable descriptions; `CourseDB.create_course_and_category` inserts a category and a course in one transaction, rolling both back on failure. It has its own `create_schema`, with a course price column. |
| `catalogkit.uow`         | `UnitOfWork`: register repository factories by name, get repositories bound to a shared transaction, run work with `do` (commit on success, rollback on error), and `UnitOfWorkError` for misuse. |
| `catalogkit.courses`     | `CategoryRepository`, `CourseRepository`, and `AddCourseUseCase` / `AddCourseUseCaseUow`, which add a category and a course either as two separate commits or as one transaction. Its `create_schema` uses integer identifiers and enables foreign keys. |
| `catalogkit.product`     | `Product`, `ProductRepository`, `ProductUseCase` and `new_use_case`, which wires a repository over a connection into a use case. |
| `catalogkit.concurrency` | A closable `Channel` (unbuffered or buffered), `task`, `run_tasks`, `publish`, `load_balance`, a thread-safe `VisitorCounter` and the WSGI application `visitor_app`. |

## Example: storing categories and courses

```python
import sqlite3

from catalogkit.database import CategoryStore, CourseStore, create_schema

connection = sqlite3.connect(":memory:")
create_schema(connection)

categories = CategoryStore(connection)
courses = CourseStore(connection)

backend = categories.create("Backend", "Server-side development")
courses.create("Databases", "Relational modelling", backend.id)

for course in courses.find_by_category_id(backend.id):
    print(course.name)
```

## Example: dispatching events

```python
from catalogkit.events import Event, EventDispatcher, EventHandler


class PrintHandler(EventHandler):
    def handle(self, event):
        print("handled", event.name, event.payload)


dispatcher = EventDispatcher()
handler = PrintHandler()
dispatcher.register("order.created", handler)
print(dispatcher.has("order.created", handler))  # True
dispatcher.dispatch(Event("order.created", payload={"order": 1}))
```

## Example: a channel

```python
import threading

from catalogkit.concurrency import Channel, publish

channel = Channel()
threading.Thread(target=publish, args=(channel, 5)).start()
print(list(channel))  # [0, 1, 2, 3, 4]
```

## Command line

`catalogkit` keeps categories in `./data.db` unless `--database PATH` is given
before the subcommand.

Create a category (name and description go together):

```
catalogkit category create --name Backend --description "Server-side development"
```

Show the help for the category commands:

```
catalogkit category
```

Look up product 1 and print its name (`--database` defaults to `./test.db`):

```
catalogkit-product
```

Run one of the concurrency demonstrations:

```
catalogkit-concurrency tasks --delay 0.1
catalogkit-concurrency range
catalogkit-concurrency balance --workers 10 --items 100 --delay 0.1
catalogkit-concurrency serve --port 3000
```

`serve` answers every HTTP request with the visitor's number.

## What it does not do

- `catalogkit category list` only prints `list called`; it does not list the
  stored categories. Use `CategoryStore.find_all` for that.
- `Resolver` and `CategoryService` are plain Python objects. The package ships
  no GraphQL schema, no HTTP endpoint for them and no RPC server; exposing
  them over a network is left to the caller.
- `ProductRepository.get_product` does not query the database: it returns a
  product with the requested identifier and the name `Product Name`.
- There is no message-broker client; events are dispatched in process only.