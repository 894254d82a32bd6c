"""procstat - command line entry point and Textual record viewer."""

import argparse
import logging
import sys

from rich.markup import escape
from rich.text import Text
from textual.app import App, ComposeResult
from textual.containers import Container
from textual.widgets import DataTable, Footer, Static

from procstat.errors import ProcStatError
from procstat.logging_config import setup_logging
from procstat.models import ProcessRecord, TaskState, UnknownState
from procstat.schema import STAT_FIELDS
from procstat.source import load_record

logger = logging.getLogger(__name__)


def format_bytes(size: int) -> str:
    """Format bytes as human-readable string."""
    for unit in ["B", "K", "M", "G", "T"]:
        if size < 1024:
            return f"{size:5.1f}{unit}" if unit != "B" else f"{size:5d}{unit}"
        size = size / 1024
    return f"{size:.1f}P"


def format_value(name: str, value: object) -> str:
    """Render a decoded field for display."""
    if isinstance(value, (TaskState, UnknownState)):
        return f"{value.value} ({value.description})"
    if name == "vsize":
        return f"{value} ({format_bytes(value).strip()})"
    return str(value)


def format_record(record: ProcessRecord) -> str:
    """Render a record as 'name: value' lines, one per field."""
    return "\n".join(
        f"{name}: {format_value(name, value)}" for name, value in record.as_dict().items()
    )


class RecordHeader(Static):
    """Header widget summarising the decoded process."""

    DEFAULT_CSS = """
    RecordHeader {
        height: auto;
        padding: 1;
        background: $surface;
    }
    """

    def show_record(self, record: ProcessRecord) -> None:
        """Display pid, name and state of a record."""
        self.update(
            f"PID {record.pid}  [b]{escape(record.comm)}[/b]  "
            f"State: {format_value('state', record.state)}  "
            f"Threads: {record.num_threads}  PPID: {record.ppid}"
        )

    def show_error(self, message: str) -> None:
        """Display an acquisition or decode failure."""
        self.update(f"[red]Error:[/red] {escape(message)}")


class FieldTable(Container):
    """Container for the table of decoded fields."""

    DEFAULT_CSS = """
    FieldTable {
        height: 1fr;
        border: solid $primary;
    }
    """

    def compose(self) -> ComposeResult:
        """Compose the field table."""
        yield DataTable(id="field-table")

    def on_mount(self) -> None:
        """Initialize the data table when mounted."""
        table = self.query_one("#field-table", DataTable)
        table.cursor_type = "row"
        if not table.columns:
            self._add_columns(table)

    def _add_columns(self, table: DataTable) -> None:
        table.add_column("#", key="position", width=4)
        table.add_column("Field", key="field", width=24)
        table.add_column("Value", key="value")

    def show_record(self, record: ProcessRecord) -> None:
        """Fill the table with every field of the record, in record order."""
        table = self.query_one("#field-table", DataTable)
        table.clear(columns=True)
        self._add_columns(table)
        for spec in STAT_FIELDS:
            value = getattr(record, spec.name)
            table.add_row(
                str(spec.position),
                spec.name,
                Text(format_value(spec.name, value)),
                key=spec.name,
            )


class StatViewerApp(App):
    """Viewer for one decoded /proc/<pid>/stat record."""

    TITLE = "procstat"
    SUB_TITLE = "Process stat record"

    CSS = """
    Screen {
        layout: vertical;
    }

    #record-header {
        dock: top;
        height: auto;
        min-height: 3;
    }
    """

    BINDINGS = [
        ("q", "quit", "Quit"),
    ]

    def __init__(self, pid: int | str = "self", proc_root: str | None = None) -> None:
        """
        Initialize the StatViewerApp.

        Args:
            pid: Process to display, or "self".
            proc_root: Root of the proc filesystem.
        """
        super().__init__()
        self._pid = pid
        self._proc_root = proc_root
        self.record: ProcessRecord | None = None
        self.error: str | None = None

    def compose(self) -> ComposeResult:
        """Compose the application layout."""
        yield RecordHeader("Loading...", id="record-header")
        yield FieldTable()
        yield Footer()

    def on_mount(self) -> None:
        """Read and decode the record once the widgets exist."""
        header = self.query_one("#record-header", RecordHeader)
        try:
            self.record = load_record(self._pid, self._proc_root)
        except ProcStatError as e:
            logger.warning("Could not load stat record for %s: %s", self._pid, e)
            self.error = str(e)
            header.show_error(self.error)
            return

        header.show_record(self.record)
        self.query_one(FieldTable).show_record(self.record)

    def action_quit(self) -> None:
        """Handle quit action."""
        self.exit()


def build_parser() -> argparse.ArgumentParser:
    """Build the command line parser."""
    parser = argparse.ArgumentParser(
        prog="procstat",
        description="Decode and display /proc/<pid>/stat for one process.",
    )
    parser.add_argument("pid", nargs="?", default="self", help='process id or "self" (default)')
    parser.add_argument("--plain", action="store_true", help="print fields and exit")
    parser.add_argument("--proc-root", default=None, help="root of the proc filesystem")
    parser.add_argument("--log-level", default=None, help="DEBUG, INFO, WARNING or ERROR")
    return parser


def main(argv: list[str] | None = None) -> int:
    """Entry point for the procstat command."""
    args = build_parser().parse_args(argv)
    setup_logging(args.log_level)

    if not args.plain:
        StatViewerApp(args.pid, args.proc_root).run()
        return 0

    try:
        record = load_record(args.pid, args.proc_root)
    except ProcStatError as e:
        logger.debug("Failed to decode stat record for %s", args.pid, exc_info=True)
        print(f"procstat: {e}", file=sys.stderr)
        return 1

    print(format_record(record))
    return 0


if __name__ == "__main__":
    sys.exit(main())
