"""
API layer for the user service.

Exposes the users collection under /api/v1/users.
"""
