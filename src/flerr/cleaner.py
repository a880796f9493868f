"""src/flerr/cleaner.py"""
import dataclasses
import functools

from flerr.errors import join, render_label, ContextError
from flerr.logging import logger

_logger = logger(__name__)

@dataclasses.dataclass
class ErrorSlot:
    """Holds the error of an enclosing operation so that a Cleaner can extend
    it with cleanup failures. See `Cleaner.flush_to()`.
    """
    error: BaseException | None = None

    def raise_error(self):
        """Raise the held error, if there is one."""
        if self.error is not None:
            raise self.error

class Cleaner:
    """Registry of cleanup functions. Cleanup functions take no arguments and
    signal failure by raising an exception.

    Cleanup functions are executed in the order they were added (NOT in
    reverse). A Cleaner can be flushed any number of times, which makes it
    usable for doing cleanup at the end of every iteration of a loop. A Cleaner
    is meant to be used from a single thread.

    When used as a context manager, pending cleanup functions are flushed when
    the block is exited, and their errors are joined with any error escaping
    from the block.
    """
    def __init__(self):
        self._items = []

    def __len__(self):
        return len(self._items)

    def add(self, func) -> None:
        """Register the cleanup function `func`."""
        self._items.append(func)

    def addf(self, func, fmt:str, *args) -> None:
        """Register the cleanup function `func`. If `func` raises an exception
        then it is wrapped in a ContextError labelled with `fmt` rendered with
        printf style `args`. The label is rendered right away, so a `fmt` that
        does not match `args` raises TypeError here rather than during a flush.
        """
        label = render_label(fmt, *args)
        def labelled():
            try:
                func()
            except Exception as exc:
                raise ContextError(label, exc) from exc
        self._items.append(labelled)

    def flush(self):
        """Run all registered cleanup functions, even if some of them fail, and
        clear the registry. Returns a JoinedError of every raised exception in
        the order they were raised, or None if no cleanup function failed.
        """
        items, self._items = self._items, []
        if items:
            _logger.debug(f"running {len(items)} cleanup functions")
        errors = []
        for func in items:
            try:
                func()
            except Exception as exc:
                _logger.debug(f"cleanup function failed: {exc}")
                errors.append(exc)
        return join(*errors)

    def flush_to(self, slot:ErrorSlot) -> None:
        """Flush the cleanup functions and, if any of them failed, join their
        errors onto the error held by `slot`.
        """
        err = self.flush()
        if err is not None:
            slot.error = join(slot.error, err)

    def __enter__(self):
        return self

    def __exit__(self, _exc_type, exc, _tb):
        if exc is not None and not isinstance(exc, Exception):
            # KeyboardInterrupt, SystemExit, etc. must propagate as they are
            err = self.flush()
            if err is not None:
                _logger.error(f"cleanup failed during abnormal exit:\n{err}")
            return False
        slot = ErrorSlot(exc)
        self.flush_to(slot)
        if slot.error is exc:
            return False
        raise slot.error

def with_cleaner(func):
    """Decorator that runs `func` inside of a fresh Cleaner, which is passed to
    `func` as the 'cleaner' keyword argument. The cleaner is flushed whenever
    `func` returns or raises.
    """
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        with Cleaner() as cleaner:
            return func(*args, cleaner=cleaner, **kwargs)
    return wrapper
