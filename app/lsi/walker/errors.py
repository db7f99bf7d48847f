"""Exceptions raised or attached to records during path traversal.

Lookup and link-read failures are reported as the plain ``OSError``
raised by ``os.lstat``/``os.readlink``. The classes below cover the
failures that have no natural ``OSError`` counterpart.
"""


class LsiError(Exception):
    """Base exception for lsi errors."""


class WalkCancelledError(LsiError):
    """Raised when a traversal is cancelled before it completes."""

    def __init__(self, message: str = "walk canceled") -> None:
        super().__init__(message)


class DeadlineExceededError(WalkCancelledError):
    """Raised when a traversal outlives its deadline.

    Attributes:
        elapsed: Seconds between the start of the walk and the check
            that observed the expired deadline.
    """

    def __init__(self, elapsed: float) -> None:
        self.elapsed = elapsed
        super().__init__(f"timeout after {round(elapsed * 1000)}ms")


class IdentityLookupError(LsiError):
    """Raised when a numeric owner or group id has no name.

    Attributes:
        kind: Either "user" or "group".
        ident: The numeric id that failed to resolve.
    """

    def __init__(self, kind: str, ident: int) -> None:
        self.kind = kind
        self.ident = ident
        super().__init__(f"unknown {kind}id {ident}")


class SymlinkDepthError(LsiError):
    """Raised when a chain of followed links exceeds the depth ceiling."""

    def __init__(self, target: str, max_depth: int) -> None:
        self.target = target
        self.max_depth = max_depth
        super().__init__(f"too many levels of symbolic links (limit {max_depth}): {target}")
