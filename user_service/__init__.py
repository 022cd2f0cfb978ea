"""
User Service - root package.

FastAPI application exposing CRUD operations on users under /api/v1/users,
with PostgreSQL storage and an in-memory store for tests and local
development.
"""

__version__ = "1.0.0"
