"""Symbolic mode strings in GNU coreutils convention.

The string is always 10 characters long: one file type character
followed by three ``rwx`` triplets, with the setuid, setgid and sticky
bits folded into the execute positions the same way ``ls`` does. When
any of the rarely used extended attributes is present, a single ``+``
is appended as a hint, making it 11 characters.
"""

import stat
from enum import Flag, auto


class ExtendedAttr(Flag):
    """Extended file attributes signalled by the trailing "+".

    Attributes:
        APPEND: Append-only file (chattr +a, chflags uappnd).
        EXCLUSIVE: Exclusive-use file.
        TEMPORARY: Temporary file (Windows FILE_ATTRIBUTE_TEMPORARY).
    """

    NONE = 0
    APPEND = auto()
    EXCLUSIVE = auto()
    TEMPORARY = auto()


# Checked in order, first match wins; anything else is a regular file
_TYPE_CHARS: tuple[tuple[int, str], ...] = (
    (stat.S_IFDIR, "d"),
    (stat.S_IFLNK, "l"),
    (stat.S_IFBLK, "b"),
    (stat.S_IFCHR, "c"),
    (stat.S_IFIFO, "p"),
    (stat.S_IFSOCK, "s"),
)

_PERMISSION_BITS: tuple[tuple[int, str], ...] = (
    (stat.S_IRUSR, "r"),
    (stat.S_IWUSR, "w"),
    (stat.S_IXUSR, "x"),
    (stat.S_IRGRP, "r"),
    (stat.S_IWGRP, "w"),
    (stat.S_IXGRP, "x"),
    (stat.S_IROTH, "r"),
    (stat.S_IWOTH, "w"),
    (stat.S_IXOTH, "x"),
)

# (special bit, execute bit, index in the mode string, symbol)
_SPECIAL_BITS: tuple[tuple[int, int, int, str], ...] = (
    (stat.S_ISUID, stat.S_IXUSR, 3, "s"),
    (stat.S_ISGID, stat.S_IXGRP, 6, "s"),
    (stat.S_ISVTX, stat.S_IXOTH, 9, "t"),
)


def file_type_char(mode: int) -> str:
    """Return the single ``ls`` type character for a raw st_mode."""
    file_type = stat.S_IFMT(mode)
    for bits, char in _TYPE_CHARS:
        if file_type == bits:
            return char
    return "-"


def format_mode(mode: int, attrs: ExtendedAttr = ExtendedAttr.NONE) -> str:
    """Format a raw st_mode as a symbolic mode string.

    Args:
        mode: The ``st_mode`` value from a stat result.
        attrs: Extended attributes of the same file.

    Returns:
        A string such as ``"-rw-r--r--"``, ``"drwxrwxrwt"`` or
        ``"-rwsr-xr-x+"``.
    """
    chars = [file_type_char(mode)]
    chars.extend(symbol if mode & bit else "-" for bit, symbol in _PERMISSION_BITS)

    for special, execute, index, symbol in _SPECIAL_BITS:
        if mode & special:
            chars[index] = symbol if mode & execute else symbol.upper()

    if attrs:
        chars.append("+")

    return "".join(chars)
