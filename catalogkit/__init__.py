"""Course catalogue building blocks: events, SQLite stores, resolvers, a category service, a unit of work, concurrency helpers and a command line."""

__version__ = "0.1.0"