import threading
from contextlib import contextmanager
from typing import Callable, Generic, Iterator, List, Optional, TypeVar

T = TypeVar("T")


class ResourcePool(Generic[T]):
    """
    Thread-safe pool of reusable scratch objects.

    A borrower gets exclusive use of an object until it gives it back. When
    no idle object is available a new one is made with ``factory``; callers
    never wait, so under contention the pool simply grows.

    :param factory: builds a new object
    :param reset: optional hook run on every object as it is checked out
    """

    def __init__(self, factory: Callable[[], T], reset: Optional[Callable[[T], None]] = None) -> None:
        self._factory = factory
        self._reset = reset
        self._idle: List[T] = []
        self._lock = threading.Lock()
        self.allocated = 0

    def acquire(self) -> T:
        with self._lock:
            if self._idle:
                item = self._idle.pop()
            else:
                self.allocated += 1
                item = None
        if item is None:
            item = self._factory()
        if self._reset is not None:
            self._reset(item)
        return item

    def release(self, item: T) -> None:
        with self._lock:
            self._idle.append(item)

    @contextmanager
    def borrowed(self) -> Iterator[T]:
        """
        Checks an object out for the duration of a ``with`` block and returns
        it to the pool however the block exits.
        """
        item = self.acquire()
        try:
            yield item
        finally:
            self.release(item)

    def __len__(self) -> int:
        # idle objects only
        with self._lock:
            return len(self._idle)
