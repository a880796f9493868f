"""Simulated resources whose open and close operations fail on demand. Used by
the `simulate` subcommand and the tests to exercise a Cleaner the way real
code does: open resources, register their closes, do some work, clean up.
"""

from flerr.cleaner import Cleaner
from flerr.errors import wrap
from flerr.logging import logger

_logger = logger(__name__)

class ResourceError(Exception):
    ...

class OperationError(Exception):
    """Raised by a simulated operation that was configured to fail."""
    def __init__(self, n:int):
        super().__init__(f"operation {n} failed")
        self.n = n

class Resource:
    """A named resource. Calling `close()` marks the resource as closed and
    raises `close_error` if it is set.
    """
    def __init__(self, name:str, close_error:Exception | None = None):
        self.name = name
        self.close_error = close_error
        self.close_called = False

    def close(self) -> None:
        self.close_called = True
        if self.close_error is not None:
            raise self.close_error

class ResourceSource:
    """Hands out Resources. Every call to `open()` is numbered, starting at 0.
    Opens whose number is in `fail_open` raise a ResourceError, and resources
    from opens whose number is in `fail_close` raise a ResourceError on close.
    """
    def __init__(self, fail_open=(), fail_close=()):
        self.fail_open = set(fail_open)
        self.fail_close = set(fail_close)
        self.resources = []
        self._n = 0

    def open(self, name:str) -> Resource:
        n = self._n
        self._n += 1
        if n in self.fail_open:
            raise ResourceError(f'open resource with name "{name}"')
        close_error = None
        if n in self.fail_close:
            close_error = ResourceError(f'close resource with name "{name}"')
        resource = Resource(name, close_error=close_error)
        self.resources.append(resource)
        return resource

    def leaked(self) -> list[str]:
        """Return the names of the opened resources that were never closed."""
        return [r.name for r in self.resources if not r.close_called]

def run_loop(source:ResourceSource, iterations:int, operation) -> None:
    """Run `iterations` rounds of: open a source resource 'A<i>' and a
    destination resource 'B<i>', call `operation(i, dst, src)`, then close
    both resources. Raises the join of the first failing step and every close
    failure that happened along the way.
    """
    with Cleaner() as cleaner:
        for i in range(iterations):
            try:
                src = source.open(f"A{i}")
            except ResourceError as exc:
                raise wrap(exc, "open source") from exc
            cleaner.addf(src.close, "close source")

            try:
                dst = source.open(f"B{i}")
            except ResourceError as exc:
                raise wrap(exc, "open destination") from exc
            cleaner.addf(dst.close, "close destination")

            try:
                operation(i, dst, src)
            except Exception as exc:
                raise wrap(exc, "perform op") from exc

            _logger.debug(f"finished operation {i}")

            err = cleaner.flush()
            if err is not None:
                raise err
