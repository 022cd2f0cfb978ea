"""Infrastructure layer: PostgreSQL and in-memory storage for users."""
