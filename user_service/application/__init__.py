"""Application layer: DTOs and use cases for the user resource."""
