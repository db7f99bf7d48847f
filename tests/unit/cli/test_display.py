"""Unit tests for cli/display.py.

Tests for column layout and error lines of walk output.
"""

import io
from collections.abc import Callable

import pytest
from lsi.cli.display import (
    ColumnOptions,
    ColumnWidths,
    format_error,
    format_record,
    print_header,
    print_records,
    render_record,
)
from lsi.core.theme import get_theme
from lsi.walker.errors import SymlinkDepthError
from lsi.walker.models import Record
from rich.console import Console

# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def records() -> list[Record]:
    """Records of a walk through a relative symlink."""
    return [
        Record(
            path="usr",
            name="usr",
            mode="drwxr-xr-x",
            device=1,
            parent_device=1,
            inode=12,
            size=4096,
            user="root",
            group="root",
        ),
        Record(
            path="usr/bin",
            name="bin",
            link="lib/bin",
            mode="lrwxrwxrwx",
            device=1,
            parent_device=1,
            inode=7,
            size=7,
            user="root",
            group="wheel",
        ),
        Record(
            path="lib",
            name="lib",
            mode="drwxr-xr-x",
            device=2,
            parent_device=1,
            inode=130001,
            size=4096,
            user="nobody",
            group="root",
            depth=1,
        ),
    ]


def _capture_console_output(func: Callable[..., None], *args: object) -> str:
    """Capture Rich console output by temporarily replacing the console."""
    import lsi.cli.display as display_mod

    buf = io.StringIO()
    test_console = Console(theme=get_theme(), file=buf, color_system=None, width=200)

    original = display_mod.console
    display_mod.console = test_console
    try:
        func(*args)
    finally:
        display_mod.console = original

    return buf.getvalue()


# ---------------------------------------------------------------------------
# Column widths
# ---------------------------------------------------------------------------


class TestColumnWidths:
    """Tests for ColumnWidths.from_records."""

    def test_measures_widest_values(self, records: list[Record]) -> None:
        """Each column width is the longest value in the run."""
        widths = ColumnWidths.from_records(records)

        assert widths == ColumnWidths(mode=10, user=6, group=5, size=4, inode=6)

    def test_ignores_error_records(self, records: list[Record]) -> None:
        """Failed records do not widen any column."""
        failed = Record(path="x", name="x", user="a-very-long-name", error=OSError())

        widths = ColumnWidths.from_records([*records, failed])

        assert widths.user == 6

    def test_empty(self) -> None:
        """No records means zero widths."""
        assert ColumnWidths.from_records([]) == ColumnWidths()


# ---------------------------------------------------------------------------
# Line formatting
# ---------------------------------------------------------------------------


class TestFormatRecord:
    """Tests for format_record function."""

    def test_name_only(self, records: list[Record]) -> None:
        """Without columns, lines are the indented names."""
        options = ColumnOptions()
        widths = ColumnWidths.from_records(records)

        lines = [format_record(r, options, widths) for r in records]

        assert lines == ["usr", "bin -> lib/bin", "  lib"]

    def test_custom_indent_width(self, records: list[Record]) -> None:
        """Indentation follows the configured width."""
        options = ColumnOptions(indent_width=4)

        line = format_record(records[2], options, ColumnWidths.from_records(records))

        assert line == "    lib"

    def test_no_follow_prints_bare_names(self, records: list[Record]) -> None:
        """no_follow drops indentation and link targets."""
        options = ColumnOptions(no_follow=True)
        widths = ColumnWidths.from_records(records)

        lines = [format_record(r, options, widths) for r in records]

        assert lines == ["usr", "bin", "lib"]

    def test_long_columns_are_aligned(self, records: list[Record]) -> None:
        """Every column is right-aligned to its widest value."""
        options = ColumnOptions(mode=True, user=True, group=True, size=True, mount=True)
        widths = ColumnWidths.from_records(records)

        lines = [format_record(r, options, widths) for r in records]

        assert lines == [
            "drwxr-xr-x   root  root 4096   usr",
            "lrwxrwxrwx   root wheel    7   bin -> lib/bin",
            "drwxr-xr-x nobody  root 4096 @   lib",
        ]

    def test_inode_column(self, records: list[Record]) -> None:
        """The inode column is right-aligned."""
        options = ColumnOptions(inode=True)
        widths = ColumnWidths.from_records(records)

        assert format_record(records[0], options, widths) == "    12 usr"
        assert format_record(records[2], options, widths) == "130001   lib"

    def test_error_record(self) -> None:
        """Failed records render as error lines regardless of columns."""
        record = Record(
            path="usr/missing",
            name="missing",
            error=FileNotFoundError(2, "No such file or directory", "usr/missing"),
        )
        options = ColumnOptions(mode=True, user=True)

        line = format_record(record, options, ColumnWidths())

        assert line == " * missing (usr/missing): No such file or directory"


class TestFormatError:
    """Tests for format_error function."""

    def test_os_error_with_filename(self) -> None:
        """OS errors show the failing path and reason."""
        record = Record(
            path="/root/secret",
            name="secret",
            error=PermissionError(13, "Permission denied", "/root/secret"),
        )

        assert format_error(record) == " * secret (/root/secret): Permission denied"

    def test_os_error_without_filename(self) -> None:
        """OS errors without a filename show their message."""
        record = Record(path="x", name="x", error=OSError("device busy"))

        assert format_error(record) == " * x: device busy"

    def test_other_error(self) -> None:
        """Non-OS errors show their message."""
        record = Record(path="loop", name="loop", error=SymlinkDepthError("loop", 40))

        line = format_error(record)

        assert line.startswith(" * loop: too many levels of symbolic links")

    def test_undecodable_filename(self) -> None:
        """Non-UTF-8 bytes in names and paths are escaped."""
        record = Record(
            path="d/\udcff",
            name="\udcff",
            error=FileNotFoundError(2, "No such file or directory", "d/\udcff"),
        )

        assert format_error(record) == " * \\xff (d/\\xff): No such file or directory"


class TestRenderRecord:
    """Tests for render_record function."""

    def test_plain_text_matches_format_record(self, records: list[Record]) -> None:
        """The Rich Text carries exactly the formatted line."""
        options = ColumnOptions(mode=True, user=True, size=True)
        widths = ColumnWidths.from_records(records)

        for record in records:
            text = render_record(record, options, widths)
            assert text.plain == format_record(record, options, widths)

    def test_error_style(self) -> None:
        """Error lines use the record.error style."""
        record = Record(path="x", name="x", error=OSError("boom"))

        text = render_record(record, ColumnOptions(), ColumnWidths())

        assert text.style == "record.error"


# ---------------------------------------------------------------------------
# Printing
# ---------------------------------------------------------------------------


class TestPrinting:
    """Tests for print_records and print_header."""

    def test_print_records(self, records: list[Record]) -> None:
        """Records are printed one line each."""
        output = _capture_console_output(print_records, records, ColumnOptions())

        assert output.splitlines() == ["usr", "bin -> lib/bin", "  lib"]

    def test_print_header(self) -> None:
        """Headers are prefixed with '-- '."""
        output = _capture_console_output(print_header, "/usr/bin")

        assert output == "-- /usr/bin\n"

    def test_no_markup_interpretation(self) -> None:
        """Names that look like markup are printed literally."""
        record = Record(path="[bold]x[/]", name="[bold]x[/]", mode="-rw-r--r--")

        output = _capture_console_output(print_records, [record], ColumnOptions())

        assert output == "[bold]x[/]\n"

    def test_undecodable_names_are_escaped(self) -> None:
        """Names and headers with non-UTF-8 bytes print as backslash escapes."""
        name = "caf\udce9"
        record = Record(path=name, name=name, link="\udcff", mode="lrwxrwxrwx")

        output = _capture_console_output(print_records, [record], ColumnOptions())
        header = _capture_console_output(print_header, name)

        assert output == "caf\\xe9 -> \\xff\n"
        assert header == "-- caf\\xe9\n"
