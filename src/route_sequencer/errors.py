"""Error types raised by the route sequencer."""

from __future__ import annotations


class InvalidInputError(ValueError):
    """Raised when stops cannot be sequenced under the strict input contract."""

    def __init__(self, message: str, *, point_ids: list[str] | None = None) -> None:
        super().__init__(message)
        self.point_ids = point_ids or []
