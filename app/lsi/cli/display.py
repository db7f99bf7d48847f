"""Column rendering for walk results.

Each record becomes one line: the requested metadata columns, each
right-aligned to the widest value of the current run, followed by the
depth-indented name. Lines are built as (text, style) segments so the
same layout yields both the plain string and the themed Rich Text.
"""

from dataclasses import dataclass

from rich.text import Text

from lsi.utils.formatting import console
from lsi.walker.models import DEFAULT_INDENT_WIDTH, Record

MOUNT_POINT_SYMBOL = "@"

Segment = tuple[str, str]


def _printable(text: str) -> str:
    """Render undecodable filename bytes as backslash escapes.

    Names that are not valid UTF-8 reach Python as lone surrogates, which
    a strict UTF-8 stream refuses to encode; ``b"\\xff"`` prints as ``\\xff``.
    """
    return text.encode("utf-8", "surrogateescape").decode("utf-8", "backslashreplace")


@dataclass(frozen=True, slots=True)
class ColumnOptions:
    """Which columns to render and how to render names.

    Attributes:
        mode: Show the symbolic mode column.
        user: Show the owner column.
        group: Show the group column.
        size: Show the size column.
        inode: Show the inode column.
        mount: Show the mount point column.
        no_follow: Print bare names, without indentation or link target.
        indent_width: Spaces per level of symlink depth.
    """

    mode: bool = False
    user: bool = False
    group: bool = False
    size: bool = False
    inode: bool = False
    mount: bool = False
    no_follow: bool = False
    indent_width: int = DEFAULT_INDENT_WIDTH


@dataclass(frozen=True, slots=True)
class ColumnWidths:
    """Maximum width of each column across one run."""

    mode: int = 0
    user: int = 0
    group: int = 0
    size: int = 0
    inode: int = 0

    @classmethod
    def from_records(cls, records: list[Record] | tuple[Record, ...]) -> "ColumnWidths":
        """Measure the widest value of each column.

        Records carrying an error are rendered without columns and do
        not contribute.
        """
        valid = [r for r in records if r.error is None]
        if not valid:
            return cls()
        return cls(
            mode=max(len(r.mode) for r in valid),
            user=max(len(r.user) for r in valid),
            group=max(len(r.group) for r in valid),
            size=max(len(str(r.size)) for r in valid),
            inode=max(len(str(r.inode)) for r in valid),
        )


def format_error(record: Record) -> str:
    """Format a failed record as an error line.

    OS errors that name a file show it in parentheses, e.g.
    `` * missing (/tmp/missing): No such file or directory``.
    """
    error = record.error
    name = _printable(record.name)
    if isinstance(error, OSError) and error.filename is not None:
        reason = error.strerror or str(error)
        filename = _printable(str(error.filename))
        return f" * {name} ({filename}): {_printable(reason)}"
    return f" * {name}: {_printable(str(error))}"


def _record_segments(
    record: Record,
    options: ColumnOptions,
    widths: ColumnWidths,
) -> list[Segment]:
    """Split a successful record's line into styled segments."""
    columns: list[Segment] = []
    if options.mode:
        columns.append((record.mode.rjust(widths.mode), "record.mode"))
    if options.user:
        columns.append((record.user.rjust(widths.user), "record.owner"))
    if options.group:
        columns.append((record.group.rjust(widths.group), "record.owner"))
    if options.size:
        columns.append((str(record.size).rjust(widths.size), "record.size"))
    if options.inode:
        columns.append((str(record.inode).rjust(widths.inode), "record.inode"))
    if options.mount:
        symbol = MOUNT_POINT_SYMBOL if record.is_mount_point else ""
        columns.append((symbol.rjust(len(MOUNT_POINT_SYMBOL)), "record.mount"))

    segments: list[Segment] = []
    for text, style in columns:
        segments.append((text, style))
        segments.append((" ", ""))

    if options.no_follow:
        segments.append((_printable(record.name), "record.name"))
        return segments

    segments.append((" " * (options.indent_width * record.depth), ""))
    segments.append((_printable(record.name), "record.name"))
    if record.link:
        segments.append((" -> ", "muted"))
        segments.append((_printable(record.link), "record.link"))
    return segments


def format_record(record: Record, options: ColumnOptions, widths: ColumnWidths) -> str:
    """Format a record as a plain output line."""
    if record.error is not None:
        return format_error(record)
    return "".join(text for text, _ in _record_segments(record, options, widths))


def render_record(record: Record, options: ColumnOptions, widths: ColumnWidths) -> Text:
    """Format a record as a themed Rich Text line."""
    if record.error is not None:
        return Text(format_error(record), style="record.error")
    return Text.assemble(*_record_segments(record, options, widths))


def print_records(records: list[Record] | tuple[Record, ...], options: ColumnOptions) -> None:
    """Print records, one aligned line each."""
    widths = ColumnWidths.from_records(records)
    for record in records:
        console.print(render_record(record, options, widths), soft_wrap=True, highlight=False)


def print_header(path: str) -> None:
    """Print the header preceding each path when several are given."""
    console.print(Text(f"-- {_printable(path)}", style="header"), soft_wrap=True, highlight=False)
