from __future__ import annotations

import threading
from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Lazy(Generic[T]):
    """
    Compute-once value holder.

    The factory runs at most once, on first access of ``value``. Concurrent
    first callers block on the lock and all observe the same result.
    """

    def __init__(self, factory: Callable[[], T]) -> None:
        self._factory = factory
        self._lock = threading.Lock()
        self._evaluated = False
        self._value: Optional[T] = None

    @property
    def evaluated(self) -> bool:
        return self._evaluated

    @property
    def value(self) -> T:
        if not self._evaluated:
            with self._lock:
                if not self._evaluated:
                    self._value = self._factory()
                    self._evaluated = True
        return self._value  # type: ignore[return-value]
