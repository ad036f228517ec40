from __future__ import annotations


class PageIndex:
    """Which page is current, since the renderer cannot be asked.

    Written by navigation only, read by extraction. No bounds checks: an
    out-of-range index simply resolves to no page box.
    """

    def __init__(self, value: int = 0) -> None:
        self._value = int(value)

    @property
    def value(self) -> int:
        return self._value

    def record(self, index: int) -> None:
        self._value = int(index)

    def __repr__(self) -> str:
        return f"PageIndex({self._value})"


__all__ = ["PageIndex"]
