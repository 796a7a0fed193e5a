"""Epoch-bound memoization container.

An :class:`EpochCache` holds quantities derived from one time reference.
Rebinding it to another time reference discards every stored value before
the new reference is adopted, so a value computed for an old epoch can
never be read back under a new one.

The container has no internal locking.  Sharing one instance across
threads requires external synchronization around both ``rebind`` and the
reads.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Hashable

from .epoch import TimeReference, validate_time_reference

logger = logging.getLogger(__name__)


class EpochCache:
    """Key/value store tied to a single time reference.

    Args:
        epoch: The time reference the stored values belong to.
        name: Argument name reported when *epoch* is rejected.

    Raises:
        TypeError: If *epoch* is not a time reference.

    Examples:
        ```python
        from pluto99 import Epoch
        from pluto99.cache import EpochCache
        cache = EpochCache(Epoch(2000, 1, 1))
        cache.get_or_compute("t", lambda: cache.epoch.jdec())
        ```
    """

    __slots__ = ('_epoch', '_values')

    def __init__(self, epoch: TimeReference, name: str = "epoch") -> None:
        self._epoch = validate_time_reference(epoch, name)
        self._values: dict[Hashable, Any] = {}

    @property
    def epoch(self) -> TimeReference:
        """The time reference the cached values were computed for."""
        return self._epoch

    def has(self, key: Hashable) -> bool:
        return key in self._values

    def get(self, key: Hashable) -> Any:
        """Return the value stored under *key*.

        Raises:
            KeyError: If nothing is stored under *key* for the current epoch.
        """
        return self._values[key]

    def set(self, key: Hashable, value: Any) -> None:
        self._values[key] = value

    def get_or_compute(self, key: Hashable, fn: Callable[[], Any]) -> Any:
        """Return the value under *key*, computing and storing it if absent.

        *fn* is called at most once per epoch for a given key.
        """
        try:
            return self._values[key]
        except KeyError:
            value = fn()
            self._values[key] = value
            return value

    def rebind(self, epoch: TimeReference, name: str = "epoch") -> None:
        """Invalidate every stored value and adopt *epoch*.

        The new reference is validated before anything is dropped, so a
        rejected reference leaves the cache untouched.

        Raises:
            TypeError: If *epoch* is not a time reference.
        """
        epoch = validate_time_reference(epoch, name)
        dropped = len(self._values)
        self._values = {}
        self._epoch = epoch
        logger.debug("Epoch cache rebound; %d cached values invalidated", dropped)

    def clear(self) -> None:
        """Drop every stored value but keep the current epoch."""
        self._values = {}

    def __contains__(self, key: Hashable) -> bool:
        return key in self._values

    def __len__(self) -> int:
        return len(self._values)
