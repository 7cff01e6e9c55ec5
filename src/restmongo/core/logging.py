"""Console logging for restmongo, rendered through rich."""

import time
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterator, List, Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

# All modules print through this single console instance.
console = Console()

LEVELS: Dict[str, int] = {
    "DEBUG": 10,
    "INFO": 20,
    "WARNING": 30,
    "ERROR": 40,
}


def _styled(style: str) -> Callable[[Any], str]:
    return lambda text: f"[{style}]{escape(str(text))}[/{style}]"


# Styling helpers for names and request values that show up in log lines.
# The text is escaped, so values are never read as rich markup,
# e.g. log.info(f"Querying {color_palette['collection']('orders')}")
color_palette: Dict[str, Callable[[Any], str]] = {
    "collection": _styled("bold blue"),
    "field": _styled("cyan"),
    "operator": _styled("magenta"),
    "value": _styled("green"),
    "dim": _styled("dim"),
}


class Logger:
    """Leveled logger with section headers, indentation and timing helpers."""

    def __init__(self, level: str = "INFO", output: Optional[Console] = None):
        self.console = output or console
        self.indent_level = 0
        self.set_level(level)

    def set_level(self, level: str) -> None:
        level = level.upper()
        if level not in LEVELS:
            raise ValueError(f"Unknown log level '{level}'. Expected one of {list(LEVELS)}")
        self.level = level

    def is_enabled(self, level: str) -> bool:
        return LEVELS[level] >= LEVELS[self.level]

    def _emit(self, level: str, prefix: str, message: str) -> None:
        if not self.is_enabled(level):
            return
        indent = "  " * self.indent_level
        self.console.print(f"{indent}{prefix} {message}")

    def debug(self, message: str) -> None:
        self._emit("DEBUG", "[dim]·[/dim]", f"[dim]{message}[/dim]")

    def info(self, message: str) -> None:
        self._emit("INFO", "[blue]ℹ[/blue]", message)

    def success(self, message: str) -> None:
        self._emit("INFO", "[green]✓[/green]", message)

    def warn(self, message: str) -> None:
        self._emit("WARNING", "[yellow]⚠[/yellow]", message)

    def error(self, message: str) -> None:
        self._emit("ERROR", "[red]✗[/red]", message)

    def section(self, title: str) -> None:
        if not self.is_enabled("INFO"):
            return
        self.console.rule(f"[bold]{title}[/bold]")

    def table(self, headers: List[str], rows: List[List[Any]]) -> None:
        if not self.is_enabled("INFO"):
            return
        table = Table(box=None, padding=(0, 1))
        for header in headers:
            table.add_column(header, style="cyan")
        for row in rows:
            table.add_row(*(str(cell) for cell in row))
        self.console.print(table)

    @contextmanager
    def indented(self) -> Iterator[None]:
        self.indent_level += 1
        try:
            yield
        finally:
            self.indent_level -= 1

    @contextmanager
    def timed(self, label: str) -> Iterator[None]:
        start = time.perf_counter()
        try:
            yield
        finally:
            elapsed_ms = (time.perf_counter() - start) * 1000
            self.info(f"{label} [dim]({elapsed_ms:.1f} ms)[/dim]")


log = Logger()
