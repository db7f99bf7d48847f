"""Traversal data models.

This module defines the immutable record produced for every path
element visited by the walker, together with the named constants
shared across the walker package.
"""

from dataclasses import dataclass, field
from typing import Any

# Device/inode sentinel for "not available". No real device uses it.
NO_DEVICE: int = 2**64 - 1

# Spaces of indentation per level of symlink indirection
DEFAULT_INDENT_WIDTH: int = 2

# Matches the kernel's MAXSYMLINKS on Linux
DEFAULT_MAX_DEPTH: int = 40


@dataclass(frozen=True, slots=True)
class Record:
    """Resolved metadata snapshot for one path element.

    When ``error`` is set, every metadata field keeps its default value;
    only ``path``, ``volume``, ``name`` and ``depth`` are meaningful.

    Attributes:
        path: Cumulative path up to and including this element, relative
            to the base directory of the walk that produced it.
        name: This element's own name ("/" for the root element).
        volume: Drive or share prefix, empty on POSIX systems.
        link: Literal symlink target, empty if not a symlink.
        mode: Symbolic mode string (10 characters, 11 with a trailing "+").
        device: Device id of the element.
        parent_device: Device id of the directory containing the element.
        inode: Inode number.
        size: Size in bytes as reported by lstat.
        uid: Numeric owner id.
        user: Owner name.
        gid: Numeric group id.
        group: Group name.
        depth: Number of symlinks followed to reach this element.
        error: Failure that prevented metadata resolution, if any.
    """

    path: str
    name: str
    volume: str = ""
    link: str = ""
    mode: str = ""
    device: int = NO_DEVICE
    parent_device: int = NO_DEVICE
    inode: int = 0
    size: int = 0
    uid: int = 0
    user: str = ""
    gid: int = 0
    group: str = ""
    depth: int = 0
    error: Exception | None = field(default=None, compare=False)

    @property
    def failed(self) -> bool:
        """Check if metadata resolution failed for this element."""
        return self.error is not None

    @property
    def is_symlink(self) -> bool:
        """Check if this element is a symlink with a readable target."""
        return bool(self.link)

    @property
    def is_mount_point(self) -> bool:
        """Check if this element sits on a different device than its parent."""
        return self.error is None and self.device != self.parent_device

    def format_name(self, indent_width: int = DEFAULT_INDENT_WIDTH) -> str:
        """Return the depth-indented name, with the link target if any.

        Args:
            indent_width: Spaces per level of depth.

        Returns:
            Name such as ``"    lib -> usr/lib"`` for a link at depth 2.
        """
        arrow = f" -> {self.link}" if self.link else ""
        return f"{' ' * (indent_width * self.depth)}{self.name}{arrow}"

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "path": self.path,
            "name": self.name,
            "volume": self.volume,
            "link": self.link,
            "mode": self.mode,
            "device": self.device,
            "parent_device": self.parent_device,
            "mount_point": self.is_mount_point,
            "inode": self.inode,
            "size": self.size,
            "uid": self.uid,
            "user": self.user,
            "gid": self.gid,
            "group": self.group,
            "depth": self.depth,
            "error": str(self.error) if self.error is not None else None,
        }


@dataclass(frozen=True, slots=True)
class WalkResult:
    """Outcome of collecting every record of one walk.

    Attributes:
        records: Records in visit order, including the failing one.
        error: Exception that stopped the walk, or None if it completed.
    """

    records: tuple[Record, ...]
    error: Exception | None = None

    @property
    def success(self) -> bool:
        """Check if the walk visited every element without error."""
        return self.error is None
