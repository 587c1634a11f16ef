"""Output formats for persisted query results."""

from __future__ import annotations

from enum import StrEnum


class OutputFormat(StrEnum):
    """Serialization format for results written to disk."""

    CSV = "csv"
    JSON = "json"

    @property
    def extension(self) -> str:
        return self.value

    @classmethod
    def parse(cls, value: str) -> OutputFormat:
        """Parse *value* case-insensitively.

        Surrounding whitespace is not stripped, so ``" json"`` is rejected.

        Raises:
            ValueError: If *value* names no known format.
        """
        try:
            return cls(value.lower())
        except ValueError:
            allowed = ", ".join(f.value for f in cls)
            msg = f'invalid output format "{value}" (allowed values: {allowed})'
            raise ValueError(msg) from None
