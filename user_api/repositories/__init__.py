"""
Persistence adapters.

The account workflow depends on the UserStore protocol only. SQLUserRepository
is the production adapter; InMemoryUserRepository backs tests and local runs.
"""

from .base import StoreError, UserNotFoundError, UserStore
from .memory_repository import InMemoryUserRepository
from .sql_repository import SQLUserRepository

__all__ = ["StoreError", "UserNotFoundError", "UserStore", "InMemoryUserRepository", "SQLUserRepository"]
