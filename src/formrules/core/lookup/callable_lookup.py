"""
CallableLookup - adapts a plain function to the ExistenceLookup contract.
"""

from collections.abc import Callable

from .base_lookup import ExistenceLookup


class CallableLookup(ExistenceLookup):
    """
    Delegates existence checks to a function.

    The function signature should be:
        def exists(table: str, column: str, value: str) -> bool:
            ...
    """

    def __init__(self, func: Callable[[str, str, str], bool]):
        if not callable(func):
            raise ValueError("CallableLookup requires a callable")
        self.func = func

    def exists(self, table: str, column: str, value: str) -> bool:
        return bool(self.func(table, column, value))
