"""Constants for User model field names"""


class UserFields:
    """Field name constants for User model"""
    ID = "id"
    NAME = "name"
    EMAIL = "email"

    # PostgreSQL specific
    TABLE = "users"
    CREATED_AT = "created_at"
