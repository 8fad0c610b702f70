"""File-backed CRUD collections (users, products, orders) over FastAPI."""

__version__ = "0.1.0"
