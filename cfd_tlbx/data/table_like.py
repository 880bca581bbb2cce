"""Read contract shared by every table-like container."""

from abc import ABC, abstractmethod
from collections.abc import Hashable, Iterator
from typing import Any


class TableLike(ABC):
    """Abstract read interface for one level of a frequency table.

    Subclasses must implement:
    - lookup(): Return the value stored under ``key``
    - items(): Enumerate ``(key, value)`` pairs

    The generic accessor :func:`cfd_tlbx.data.access.get` only talks to
    containers through this interface, so new backends plug in by subclassing
    (or registering as a virtual subclass) without touching the accessor.
    """

    @abstractmethod
    def lookup(self, key: Hashable) -> Any:
        """Return the value stored under ``key``.

        Containers decide how absence is reported: distributions answer 0,
        condition tables raise :class:`~cfd_tlbx.errors.ConditionNotFound`.
        """
        ...

    @abstractmethod
    def items(self) -> Iterator[tuple[Hashable, Any]]:
        """Return a fresh, finite iterator over ``(key, value)`` pairs."""
        ...
