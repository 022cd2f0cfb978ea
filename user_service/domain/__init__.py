"""
Domain layer: the User entity, its repository contract and the
classified errors raised by storage.
"""
