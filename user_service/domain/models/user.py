from dataclasses import dataclass


@dataclass
class User:
    """Pure domain model for User entity - no external dependencies"""
    id: int = 0
    name: str = ""
    email: str = ""

    @property
    def is_saved(self) -> bool:
        """A user with id 0 has not been assigned an identifier by storage yet"""
        return self.id != 0
