"""Base Repository: Abstract interface for report access.

Repositories hide where broker reports come from (files today)
and cache parsed trades so each report is parsed at most once per
repository instance.
"""

from abc import ABC, abstractmethod
from typing import TypeVar, Generic

T = TypeVar("T")


class Repository(ABC, Generic[T]):
    """Source of parsed trades, typed by what get_all() returns.

    Implementations own their parse cache and report every missing or
    unreadable source as a RepositoryError, never as a bare OSError.
    """

    @abstractmethod
    def get_all(self) -> T:
        """Parse and return every report the repository can see.

        Raises:
            RepositoryError: If data cannot be loaded
        """

    @abstractmethod
    def clear_cache(self) -> None:
        """Drop cached results so the next read goes to the source."""


class RepositoryError(Exception):
    """Raised when a report cannot be located or read."""

    def __init__(self, message: str, path: str | None = None):
        self.path = path
        super().__init__(f"{message}" + (f" (path: {path})" if path else ""))
