"""An exception that collects several errors under one prefix."""

from __future__ import annotations

from typing import Any


class AggregateError(Exception):
    """Several errors reported together, introduced by a common prefix."""

    def __init__(self, prefix: str, *args: BaseException) -> None:
        super().__init__(prefix)
        self.prefix = prefix
        self.errors: list[BaseException] = list(args)

    def add(self, error: BaseException) -> None:
        """Append another error to the collection."""
        self.errors.append(error)

    def matches(self, error_type: Any) -> bool:
        """Tell whether any collected error is, wraps or contains ``error_type``.

        ``error_type`` may be an exception class or a particular exception
        instance.
        """
        return any(_matches(error, error_type) for error in self.errors)

    def __str__(self) -> str:
        text = f"{self.prefix}:" + "".join(f" {error};" for error in self.errors)
        return text.rstrip(";")


def _matches(error: BaseException | None, target: Any) -> bool:
    seen: set[int] = set()
    while error is not None and id(error) not in seen:
        seen.add(id(error))
        if isinstance(target, type):
            if isinstance(error, target):
                return True
        elif error is target or error == target:
            return True
        if isinstance(error, AggregateError) and error.matches(target):
            return True
        error = error.__cause__
    return False