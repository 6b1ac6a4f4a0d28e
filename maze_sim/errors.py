from __future__ import annotations


class MapConfigError(ValueError):
    """Raised when an arena layout or simulation config is malformed."""


class InvalidDirection(ValueError):
    """Raised when an external caller sends a direction code outside 0..3."""

    def __init__(self, code: object) -> None:
        super().__init__(f"invalid direction code {code!r}, expected 0..3 or None")
        self.code = code


class UnknownConstant(KeyError):
    """Raised when a constants query uses an index that is not defined."""

    def __init__(self, index: object) -> None:
        super().__init__(index)
        self.index = index

    def __str__(self) -> str:
        return f"unknown constant index {self.index!r}"
