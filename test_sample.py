"""
Sample Python module for exercising the reflector.
"""

from ctypes import POINTER, c_uint8
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import List, Optional


class Role(IntEnum):
    GUEST = 0
    MEMBER = auto()
    ADMIN = 10


@dataclass
class User:
    name: str
    email: str
    role: Role
    age: Optional[int] = None


class Store:
    """Base storage."""

    def count(self) -> int:
        return 0

    def _compact(self) -> None:
        pass


class UserManager(Store):
    """Manages user operations."""

    users: List[User]
    raw: POINTER(c_uint8)

    def __init__(self, users: List[User]):
        self.users = users

    def add_user(self, user: User) -> None:
        """Add a user to the manager."""
        self.users.append(user)

    def get_user(self, email: str) -> Optional[User]:
        """Get user by email."""
        for user in self.users:
            if user.email == email:
                return user
        return None

    def export(self) -> "Exporter":
        return None

    @staticmethod
    def create(name: str, email: str) -> User:
        return User(name=name, email=email, role=Role.MEMBER)


def main():
    manager = UserManager([])
    manager.add_user(UserManager.create("John Doe", "john@example.com"))
    print(f"Users: {manager.count()}")


if __name__ == "__main__":
    main()
