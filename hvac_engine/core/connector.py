"""
Single-slot connectors between process blocks.

An ``OutputConnector`` holds the last value written by its owning block. An
``InputConnector`` refers to at most one upstream ``OutputConnector`` and copies
its current value into its own slot on every ``pull()``. Values are immutable
flows, so a pull never shares mutable state with the upstream block.
"""

from typing import Generic, Optional, TypeVar

T = TypeVar('T')


class OutputConnector(Generic[T]):
    """Slot written by its owning block after each run."""

    def __init__(self, value: Optional[T] = None):
        self._value: Optional[T] = value

    def set(self, value: Optional[T]) -> None:
        self._value = value

    def get(self) -> Optional[T]:
        return self._value

    @property
    def has_value(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"OutputConnector(value={self._value!r})"


class InputConnector(Generic[T]):
    """
    Slot fed from an upstream output connector.

    A value may also be set directly, which is how the first block of a
    pipeline receives its inlet flow. ``pull()`` refreshes the slot from the
    upstream connector when one is connected and it holds a value.
    """

    def __init__(self, value: Optional[T] = None):
        self._value: Optional[T] = value
        self._upstream: Optional[OutputConnector[T]] = None

    def connect(self, upstream: OutputConnector[T]) -> None:
        self._upstream = upstream

    def disconnect(self) -> None:
        self._upstream = None

    @property
    def upstream(self) -> Optional[OutputConnector[T]]:
        return self._upstream

    @property
    def is_connected(self) -> bool:
        return self._upstream is not None

    def set(self, value: Optional[T]) -> None:
        self._value = value

    def get(self) -> Optional[T]:
        return self._value

    def pull(self) -> Optional[T]:
        """Copy the current upstream value, empty or not, into this slot and return it."""
        if self._upstream is not None:
            self._value = self._upstream.get()
        return self._value

    @property
    def has_value(self) -> bool:
        return self._value is not None

    def __repr__(self) -> str:
        return f"InputConnector(value={self._value!r}, connected={self.is_connected})"
