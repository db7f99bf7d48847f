"""Path traversal and metadata resolution.

Walks every element of a pathname from the root (or the first relative
element) to the last, producing one Record per element and handing it
to a visitor. The visitor decides whether a symlink gets followed and
aborts the walk by raising. Followed links are walked in full, one
depth level deeper, before the walk moves on to the next element.
"""

import logging
import os
import stat
from collections.abc import Callable

from lsi.walker.cancel import CancelToken
from lsi.walker.errors import (
    IdentityLookupError,
    LsiError,
    SymlinkDepthError,
    WalkCancelledError,
)
from lsi.walker.mode import format_mode
from lsi.walker.models import DEFAULT_MAX_DEPTH, Record, WalkResult
from lsi.walker.platform import MetadataProvider, get_metadata_provider
from lsi.walker.splitter import split_path

logger = logging.getLogger(__name__)

# Receives each record and returns True to follow it if it is a symlink
Visitor = Callable[[Record], bool]


def make_record(
    base: str,
    path: str,
    volume: str,
    name: str,
    depth: int,
    *,
    provider: MetadataProvider | None = None,
) -> Record:
    """Resolve the metadata of a single path element.

    Never raises for filesystem or identity lookup failures; they are
    attached to the returned record instead.

    Args:
        base: Directory the cumulative ``path`` is relative to ("" for
            the working directory or an absolute path).
        path: Cumulative path up to and including the element.
        volume: Drive or share prefix of the path.
        name: The element's own name.
        depth: Number of symlinks followed to reach the element.
        provider: Metadata provider. Defaults to the platform provider.

    Returns:
        Record for the element, with ``error`` set on failure.
    """
    provider = provider or get_metadata_provider()
    target = os.path.join(base, path) if base else path

    try:
        st = os.lstat(target)
    except (OSError, ValueError) as e:
        logger.debug("lstat failed for %s: %s", target, e)
        return Record(path=path, name=name, volume=volume, depth=depth, error=e)

    link = ""
    if stat.S_ISLNK(st.st_mode):
        try:
            link = os.readlink(target)
        except (OSError, ValueError) as e:
            logger.debug("readlink failed for %s: %s", target, e)
            return Record(path=path, name=name, volume=volume, depth=depth, error=e)

    try:
        owner = provider.owner_info(st)
    except (IdentityLookupError, OSError) as e:
        logger.debug("Owner lookup failed for %s: %s", target, e)
        return Record(path=path, name=name, volume=volume, depth=depth, error=e)

    device, inode, size = provider.device_info(st)

    return Record(
        path=path,
        name=name,
        volume=volume,
        link=link,
        mode=format_mode(st.st_mode, provider.extended_attrs(st)),
        device=device,
        parent_device=provider.parent_device(target),
        inode=inode,
        size=size,
        uid=owner.uid,
        user=owner.user,
        gid=owner.gid,
        group=owner.group,
        depth=depth,
    )


def walk(
    path: str,
    visitor: Visitor,
    *,
    cancel: CancelToken | None = None,
    provider: MetadataProvider | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> None:
    """Walk every element of a path, following symlinks on request.

    Example:
        >>> def show(record):
        ...     print(record.format_name())
        ...     return True
        >>> walk("/usr/lib", show)

    Args:
        path: Pathname to analyze, absolute or relative.
        visitor: Called once per record in visit order. Returns True to
            follow the record's link target. Raising aborts the walk.
        cancel: Cancellation token checked before each record.
        provider: Metadata provider. Defaults to the platform provider.
        max_depth: Maximum number of nested symlinks to follow.

    Raises:
        WalkCancelledError: If the token is cancelled during the walk.
        SymlinkDepthError: If a link chain is deeper than ``max_depth``
            and the visitor did not raise first.
        Exception: Whatever the visitor raises.
    """
    _walk(
        path,
        "",
        0,
        visitor,
        cancel=cancel,
        provider=provider or get_metadata_provider(),
        max_depth=max_depth,
    )


def _walk(
    path: str,
    base: str,
    depth: int,
    visitor: Visitor,
    *,
    cancel: CancelToken | None,
    provider: MetadataProvider,
    max_depth: int,
) -> None:
    """Walk one level: the initial path or a followed link target."""
    if cancel is not None and cancel.error is not None:
        raise cancel.error

    split = split_path(path)
    if split.absolute:
        base = ""

    if depth > max_depth:
        error = SymlinkDepthError(path, max_depth)
        logger.debug("Link depth ceiling hit at %s", path)
        visitor(Record(path=path, name=path, volume=split.volume, depth=depth, error=error))
        raise error

    for index, name in enumerate(split.elements):
        element_path = split.join(index + 1)
        _check_cancel(cancel, visitor, element_path, name, split.volume, depth)

        record = make_record(
            base,
            element_path,
            split.volume,
            name,
            depth,
            provider=provider,
        )

        # The lookups above may block long enough for the deadline to pass
        _check_cancel(cancel, visitor, element_path, name, split.volume, depth)

        follow = visitor(record)

        if follow and record.link:
            # Relative targets resolve against the directory holding the link
            link_base = os.path.join(base, split.join(index)) if index else base
            logger.debug("Following %s -> %s (base %r)", record.path, record.link, link_base)
            _walk(
                record.link,
                link_base,
                depth + 1,
                visitor,
                cancel=cancel,
                provider=provider,
                max_depth=max_depth,
            )


def _check_cancel(
    cancel: CancelToken | None,
    visitor: Visitor,
    path: str,
    name: str,
    volume: str,
    depth: int,
) -> None:
    """Deliver a cancellation record for an element and raise, if cancelled."""
    if cancel is None:
        return
    error = cancel.error
    if error is None:
        return
    logger.debug("Walk cancelled at %s: %s", path, error)
    visitor(Record(path=path, name=name, volume=volume, depth=depth, error=error))
    raise error


def collect(
    path: str,
    *,
    follow: bool = True,
    cancel: CancelToken | None = None,
    provider: MetadataProvider | None = None,
    max_depth: int = DEFAULT_MAX_DEPTH,
) -> WalkResult:
    """Walk a path and gather its records, stopping at the first error.

    The failing record is kept as the last record of the result, so a
    caller can still display everything resolved up to that point.

    Args:
        path: Pathname to analyze.
        follow: Follow symlinks to their targets.
        cancel: Cancellation token checked before each record.
        provider: Metadata provider. Defaults to the platform provider.
        max_depth: Maximum number of nested symlinks to follow.

    Returns:
        WalkResult with the records and the error that stopped the walk.

    Raises:
        WalkCancelledError: If the token is cancelled during the walk.
    """
    records: list[Record] = []

    def visit(record: Record) -> bool:
        records.append(record)
        if record.error is not None:
            raise record.error
        return follow

    try:
        walk(path, visit, cancel=cancel, provider=provider, max_depth=max_depth)
    except WalkCancelledError:
        raise
    except (OSError, ValueError, LsiError) as e:
        return WalkResult(records=tuple(records), error=e)

    return WalkResult(records=tuple(records))
