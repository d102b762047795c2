# tests/fixtures/entities.py
"""Entity subclasses shared across the test suite."""

from typing import ClassVar

from basalmodel import Entity


class User(Entity):
    """Entity with plain fields, one private field and one computed field."""

    table_name: ClassVar[str] = "users"

    id: int | None = None
    first_name: str = ""
    last_name: str = ""
    email: str | None = None
    _password_hash: str | None = None

    def get_full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


class Account(Entity):
    """Entity whose computed accessors shadow literal fields."""

    owner: str = ""
    balance: int = 0
    currency: str = "EUR"

    def get_balance(self) -> str:
        return f"{self.balance} {self.currency}"

    def set_owner(self, value: str) -> None:
        self.owner = value.strip().title()


class Admin(User):
    """Subclass inheriting User's fields and adding one."""

    role: str = "admin"


class Post(Entity):
    """Entity with mutable container defaults."""

    title: str = ""
    tags: list[str] = []
    meta: dict[str, str] = {}
