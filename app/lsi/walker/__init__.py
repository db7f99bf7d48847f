"""Path traversal engine.

This module provides path splitting, per-element metadata resolution,
symbolic mode formatting and the symlink-following walker.
"""

from lsi.walker.cancel import CancelToken
from lsi.walker.errors import (
    DeadlineExceededError,
    IdentityLookupError,
    LsiError,
    SymlinkDepthError,
    WalkCancelledError,
)
from lsi.walker.mode import ExtendedAttr, format_mode
from lsi.walker.models import (
    DEFAULT_INDENT_WIDTH,
    DEFAULT_MAX_DEPTH,
    NO_DEVICE,
    Record,
    WalkResult,
)
from lsi.walker.platform import (
    GenericMetadataProvider,
    MetadataProvider,
    Ownership,
    PosixMetadataProvider,
    get_metadata_provider,
)
from lsi.walker.splitter import SplitPath, clean_path, split_path
from lsi.walker.walker import Visitor, collect, make_record, walk

__all__ = [
    "DEFAULT_INDENT_WIDTH",
    "DEFAULT_MAX_DEPTH",
    "NO_DEVICE",
    "CancelToken",
    "DeadlineExceededError",
    "ExtendedAttr",
    "GenericMetadataProvider",
    "IdentityLookupError",
    "LsiError",
    "MetadataProvider",
    "Ownership",
    "PosixMetadataProvider",
    "Record",
    "SplitPath",
    "SymlinkDepthError",
    "Visitor",
    "WalkCancelledError",
    "WalkResult",
    "clean_path",
    "collect",
    "format_mode",
    "get_metadata_provider",
    "make_record",
    "split_path",
    "walk",
]
