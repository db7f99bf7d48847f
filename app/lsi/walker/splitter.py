"""Lexical decomposition of pathnames into elements.

Nothing in this module touches the filesystem. The ``flavor`` argument
accepts any ``os.path``-compatible module, so Windows drive and UNC
handling can be exercised on a POSIX host via ``ntpath`` (and vice
versa).
"""

import os
import posixpath
from dataclasses import dataclass
from types import ModuleType


@dataclass(frozen=True, slots=True)
class SplitPath:
    """A cleaned path decomposed into its elements.

    Attributes:
        elements: Path elements in order. An absolute path starts with
            its root element (e.g. "/" or "C:\\").
        volume: Drive letter or UNC share, empty when there is none.
        absolute: True if the path starts at a filesystem root.
        flavor: Path module used to split and rejoin the elements.
    """

    elements: tuple[str, ...]
    volume: str = ""
    absolute: bool = False
    flavor: ModuleType = os.path

    def join(self, count: int) -> str:
        """Join the first ``count`` elements into a cumulative path.

        Drive-relative paths (e.g. "C:foo") get their volume re-attached
        so the result can be handed to the operating system as is.

        Args:
            count: Number of leading elements to join.

        Returns:
            The cumulative path, or "" when ``count`` is 0.
        """
        if count <= 0:
            return ""
        joined = self.flavor.join(*self.elements[:count])
        if self.volume and not self.absolute:
            return self.volume + joined
        return joined

    def __len__(self) -> int:
        return len(self.elements)


def clean_path(path: str, *, flavor: ModuleType = os.path) -> str:
    """Reduce a path lexically.

    Redundant separators and "." elements are dropped and ".." elements
    are resolved against their predecessor. An empty path becomes ".".

    Args:
        path: Raw pathname.
        flavor: Path module to clean with.

    Returns:
        The cleaned path.
    """
    cleaned = flavor.normpath(path or ".")
    # normpath keeps a POSIX leading "//" (implementation-defined root)
    if flavor is posixpath and cleaned.startswith("//"):
        cleaned = "/" + cleaned.lstrip("/")
    return cleaned


def split_path(path: str, *, flavor: ModuleType = os.path) -> SplitPath:
    """Split a pathname into its elements and volume.

    Examples:
        >>> split_path("/usr/local/bin").elements
        ('/', 'usr', 'local', 'bin')
        >>> split_path("a/b/../c").elements
        ('a', 'c')

    Args:
        path: Pathname to decompose; absolute or relative.
        flavor: Path module defining the separator and volume rules.

    Returns:
        SplitPath with the elements, volume and absoluteness of the
        cleaned path.
    """
    cleaned = clean_path(path, flavor=flavor)
    sep = flavor.sep
    volume, rest = flavor.splitdrive(cleaned)

    if rest.startswith(sep):
        root = volume + sep
        elements = [root]
        if rest[1:]:
            elements.extend(rest[1:].split(sep))
        return SplitPath(tuple(elements), volume=volume, absolute=True, flavor=flavor)

    # Relative, possibly drive-relative ("C:foo" or a bare "C:")
    elements = rest.split(sep) if rest else [flavor.curdir]
    return SplitPath(tuple(elements), volume=volume, absolute=False, flavor=flavor)
