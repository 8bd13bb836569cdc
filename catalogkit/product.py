"""Products looked up through a repository wired into a use case."""

from __future__ import annotations

import argparse
import sqlite3
from dataclasses import dataclass
from typing import Protocol


@dataclass(frozen=True)
class Product:
    """A product with its identifier and name."""

    id: int
    name: str


class _ProductSource(Protocol):
    def get_product(self, product_id: int) -> Product: ...


class ProductRepository:
    """Loads products from a database connection."""

    def __init__(self, connection: sqlite3.Connection) -> None:
        self.connection = connection

    def get_product(self, product_id: int) -> Product:
        """Return the product with the given identifier."""
        return Product(id=product_id, name="Product Name")


class ProductUseCase:
    """Serves product lookups from any repository."""

    def __init__(self, repository: _ProductSource) -> None:
        self.repository = repository

    def get_product(self, product_id: int) -> Product:
        """Return the product with the given identifier."""
        return self.repository.get_product(product_id)


def new_use_case(connection: sqlite3.Connection) -> ProductUseCase:
    """Build a use case backed by a repository over the connection."""
    return ProductUseCase(ProductRepository(connection))


def main(argv: list[str] | None = None) -> int:
    """Look up product 1 and print its name."""
    parser = argparse.ArgumentParser(description="Print the name of product 1.")
    parser.add_argument("--database", default="./test.db", help="path of the SQLite database")
    args = parser.parse_args(argv)

    connection = sqlite3.connect(args.database)
    try:
        product = new_use_case(connection).get_product(1)
        print(product.name)
    finally:
        connection.close()
    return 0