"""Placeholder inheritance: the ``@extend`` primitive of the compiler."""

from __future__ import annotations

from collections.abc import Iterable

from extbudget.errors import CompileError, UndefinedPlaceholderError

OPTIONAL = "!optional"


class Extender:
    """Tracks which selectors inherit each declared placeholder.

    Consumers are kept in the order they extended and without repeats; they
    replace the placeholder wherever its selector appears in the output.
    """

    def __init__(self, placeholders: Iterable[str] = ()) -> None:
        self._consumers: dict[str, list[str]] = {name: [] for name in placeholders}

    def extend(self, placeholder: str, selectors: list[str], flag: str = "") -> None:
        """Make *selectors* inherit ``%placeholder``.

        Raises :class:`UndefinedPlaceholderError` for an undeclared placeholder
        unless *flag* is ``!optional``.
        """
        flag = flag.strip()
        if flag and flag != OPTIONAL:
            raise CompileError(f"Unknown extend flag '{flag}'. Only {OPTIONAL} is supported.")
        if placeholder not in self._consumers:
            if flag == OPTIONAL:
                return
            raise UndefinedPlaceholderError(placeholder)
        bucket = self._consumers[placeholder]
        for selector in selectors:
            if selector not in bucket:
                bucket.append(selector)

    def consumers(self, placeholder: str) -> list[str]:
        return list(self._consumers.get(placeholder, ()))
