"""
User model. Email is the de-duplication key, not id.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class User:
    id: str
    name: str
    email: str

    def __repr__(self) -> str:
        return f"<User(id={self.id}, email={self.email})>"
