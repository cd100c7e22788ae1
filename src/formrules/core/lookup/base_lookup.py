"""
Existence lookup contract used by rules such as ``exists``.

The engine depends only on this interface. Concrete implementations decide
where the data lives and own their timeout and retry policy.
"""

from abc import ABC, abstractmethod


class ExistenceLookup(ABC):
    """
    Abstract existence check against an external data store.

    Implementations answer whether a record with ``column == value`` exists
    in ``table``, or raise LookupUnavailableError when they cannot tell.
    """

    @abstractmethod
    def exists(self, table: str, column: str, value: str) -> bool:
        """
        Check whether a matching record exists.

        Args:
            table: Table (or collection) name
            column: Column to match on
            value: Value to look for

        Returns:
            True if at least one record matches

        Raises:
            LookupUnavailableError: If the backing store cannot answer
        """
        pass

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}()"
