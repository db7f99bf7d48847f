"""Platform-specific metadata extraction.

The walker never inspects stat results for device, ownership or
attribute details itself. It asks a MetadataProvider, which hides the
differences between POSIX systems (real device, inode and owner data)
and everything else (size only, sentinel device and inode, no owner).
"""

import logging
import os
import stat
from abc import ABC, abstractmethod
from dataclasses import dataclass

from lsi.walker.errors import IdentityLookupError
from lsi.walker.mode import ExtendedAttr
from lsi.walker.models import NO_DEVICE

logger = logging.getLogger(__name__)

# BSD/macOS st_flags bits marking append-only files
_APPEND_FLAGS: int = getattr(stat, "UF_APPEND", 0) | getattr(stat, "SF_APPEND", 0)


@dataclass(frozen=True, slots=True)
class Ownership:
    """Numeric and resolved ownership of a file.

    Attributes:
        uid: Numeric owner id.
        user: Owner login name.
        gid: Numeric group id.
        group: Group name.
    """

    uid: int = 0
    user: str = ""
    gid: int = 0
    group: str = ""


class MetadataProvider(ABC):
    """Abstract capability interface for platform metadata.

    Example:
        >>> provider = get_metadata_provider()
        >>> st = os.lstat("/")
        >>> device, inode, size = provider.device_info(st)
        >>> owner = provider.owner_info(st).user
    """

    @abstractmethod
    def device_info(self, st: os.stat_result) -> tuple[int, int, int]:
        """Return (device, inode, size) from a stat result."""

    @abstractmethod
    def parent_device(self, path: str) -> int:
        """Return the device id of the directory containing ``path``.

        Returns:
            The parent's device id, or NO_DEVICE when it cannot be
            determined or ``path`` is a filesystem root.
        """

    @abstractmethod
    def owner_info(self, st: os.stat_result) -> Ownership:
        """Resolve the owner and group of a stat result.

        Raises:
            IdentityLookupError: If the uid or gid has no name.
        """

    @abstractmethod
    def extended_attrs(self, st: os.stat_result) -> ExtendedAttr:
        """Return the extended attributes present on a stat result."""


class PosixMetadataProvider(MetadataProvider):
    """Metadata provider backed by stat fields and the passwd/group databases."""

    def device_info(self, st: os.stat_result) -> tuple[int, int, int]:
        return st.st_dev, st.st_ino, st.st_size

    def parent_device(self, path: str) -> int:
        absolute = os.path.abspath(path)
        parent = os.path.dirname(absolute)
        if parent == absolute:
            return NO_DEVICE
        try:
            return os.stat(parent).st_dev
        except OSError as e:
            logger.debug("Cannot stat parent directory %s: %s", parent, e)
            return NO_DEVICE

    def owner_info(self, st: os.stat_result) -> Ownership:
        import grp
        import pwd

        uid, gid = st.st_uid, st.st_gid
        try:
            user = pwd.getpwuid(uid).pw_name
        except KeyError:
            raise IdentityLookupError("user", uid) from None
        try:
            group = grp.getgrgid(gid).gr_name
        except KeyError:
            raise IdentityLookupError("group", gid) from None
        return Ownership(uid=uid, user=user, gid=gid, group=group)

    def extended_attrs(self, st: os.stat_result) -> ExtendedAttr:
        flags = getattr(st, "st_flags", 0)
        if flags & _APPEND_FLAGS:
            return ExtendedAttr.APPEND
        return ExtendedAttr.NONE


class GenericMetadataProvider(MetadataProvider):
    """Metadata provider for systems without POSIX device and owner data.

    Reports the size only. Device, inode and parent device are all the
    NO_DEVICE sentinel, so no element is ever flagged as a mount point.
    """

    def device_info(self, st: os.stat_result) -> tuple[int, int, int]:
        return NO_DEVICE, NO_DEVICE, st.st_size

    def parent_device(self, path: str) -> int:
        _ = path
        return NO_DEVICE

    def owner_info(self, st: os.stat_result) -> Ownership:
        _ = st
        return Ownership()

    def extended_attrs(self, st: os.stat_result) -> ExtendedAttr:
        attributes = getattr(st, "st_file_attributes", 0)
        if attributes & getattr(stat, "FILE_ATTRIBUTE_TEMPORARY", 0):
            return ExtendedAttr.TEMPORARY
        return ExtendedAttr.NONE


def get_metadata_provider() -> MetadataProvider:
    """Get the metadata provider for the running platform.

    Returns:
        PosixMetadataProvider on POSIX systems, GenericMetadataProvider
        otherwise.
    """
    if os.name == "posix":
        return PosixMetadataProvider()
    return GenericMetadataProvider()
