"""src/flerr/errors.py"""

class JoinedError(Exception):
    """An error made up of one or more other errors. The string form of a
    JoinedError is the string form of each of its errors, in order, one per
    line. Use `join()` to build one, as it takes care of dropping `None`s.
    """
    def __init__(self, *errors:BaseException):
        if not errors:
            raise ValueError("JoinedError needs at least one error")
        super().__init__(*errors)
        self.errors = tuple(errors)

    def __str__(self):
        return "\n".join(str(err) for err in self.errors)

    def __iter__(self):
        return iter(self.errors)

    def __len__(self):
        return len(self.errors)

class ContextError(Exception):
    """Wraps `cause` with a descriptive `label`. Renders as '<label>: <cause>'."""
    def __init__(self, label:str, cause:BaseException):
        super().__init__(label, cause)
        self.label = label
        self.cause = cause
        self.__cause__ = cause

    def __str__(self):
        return f"{self.label}: {self.cause}"

def join(*errors) -> JoinedError | None:
    """Return a JoinedError of all the non-None errors in `errors`, or None if
    there are no such errors.
    """
    errors = [err for err in errors if err is not None]
    if not errors:
        return None
    return JoinedError(*errors)

def render_label(fmt:str, *args) -> str:
    """Render `fmt` with printf style `args`. If there are no `args` then `fmt`
    is returned verbatim. Raises TypeError if `fmt` and `args` do not match.
    """
    return fmt % args if args else fmt

def wrap(err:BaseException, fmt:str, *args) -> ContextError:
    """Return a ContextError wrapping `err`, labelled with `fmt` rendered with
    printf style `args`. See `render_label()`.
    """
    return ContextError(render_label(fmt, *args), err)

def unwrap(err:BaseException) -> list[BaseException]:
    """Return the errors directly wrapped by `err`."""
    if isinstance(err, JoinedError):
        return list(err.errors)
    if isinstance(err, ContextError):
        return [err.cause]
    if err.__cause__ is not None:
        return [err.__cause__]
    return []

def walk(err:BaseException):
    """Yield `err` and every error it wraps, depth first. Each error is yielded
    at most once, so cyclic cause chains terminate.
    """
    seen = set()
    stack = [err]
    while stack:
        current = stack.pop()
        if id(current) in seen:
            continue
        seen.add(id(current))
        yield current
        stack.extend(reversed(unwrap(current)))

def is_error(err:BaseException | None, target) -> bool:
    """Return True if `target` appears anywhere in the tree of errors rooted at
    `err`. If `target` is an exception class then any instance of it counts,
    otherwise only `target` itself does.
    """
    if err is None:
        return False
    for e in walk(err):
        if e is target:
            return True
        if isinstance(target, type) and isinstance(e, target):
            return True
    return False

def find_error(err:BaseException | None, cls:type):
    """Return the first error in the tree rooted at `err` that is an instance
    of `cls`, or None.
    """
    if err is None:
        return None
    for e in walk(err):
        if isinstance(e, cls):
            return e
    return None
