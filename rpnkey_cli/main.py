"""
rpnkey CLI

Command-line interface for structural formula hashing.
Formulas are read in token notation (see rpnkey.notation), one per line.

Commands:
    rpnkey hash <file>          Print the structural hash of every formula
    rpnkey compare <a> <b>      Compare two formulas given on the command line
    rpnkey dedup <file>         Count distinct formulas (or pairs) in a file
    rpnkey states <file>        Build the explored state graph from traces

Usage:
    $ rpnkey hash formulas.txt --width 40
    $ rpnkey compare "@0:0:0:32 5 +" "@0:0:0:64 5 +"
    $ rpnkey dedup states.txt --pairs --debug-log trace.log
"""

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

import typer
from rich import box
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from rpnkey import __version__
from rpnkey.debug import DebugStreams
from rpnkey.explore import StateSpace
from rpnkey.hash import FORMULA_PAIR_TRAITS, FORMULA_TRAITS, hash_formula
from rpnkey.notation import (
    NotationError,
    format_formula,
    read_formula,
    read_formula_pair,
)
from rpnkey.table import KeyTable
from rpnkey.text import DEFAULT_WRAP_WIDTH, break_string
from rpnkey.timing import StopWatch

# Initialize Typer app and Rich console
app = typer.Typer(
    name="rpnkey",
    help="rpnkey: structural hashing of postfix symbolic formulas",
    add_completion=False,
)
console = Console()

logger = logging.getLogger("rpnkey.cli")

TRACE_STREAM = "trace"


@app.command("hash")
def hash_command(
    path: Path = typer.Argument(
        ...,
        help="File with one formula per line",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    width: int = typer.Option(
        DEFAULT_WRAP_WIDTH,
        "--width",
        "-w",
        min=1,
        help="Break formula text after this many characters",
    ),
) -> None:
    """
    Print the structural hash of every formula in a file.
    """
    entries = _read_entries(path)

    table = Table(box=box.ROUNDED)
    table.add_column("Line", justify="right", style="dim")
    table.add_column("Formula")
    table.add_column("Hash", style="cyan")

    for line_no, text in entries:
        formula = _parse(read_formula, text, path, line_no)
        table.add_row(
            str(line_no),
            break_string(width, format_formula(formula)) if len(formula) else "[dim](empty)[/dim]",
            _hex(hash_formula(formula)),
        )

    console.print(table)


@app.command()
def compare(
    first: str = typer.Argument(..., help="First formula in token notation"),
    second: str = typer.Argument(..., help="Second formula in token notation"),
) -> None:
    """
    Compare two formulas structurally.

    Exits with status 0 when they are equal and 1 otherwise.
    """
    a = _parse(read_formula, first)
    b = _parse(read_formula, second)

    equal = FORMULA_TRAITS.equal(a, b)
    hash_a = FORMULA_TRAITS.hash(a)
    hash_b = FORMULA_TRAITS.hash(b)

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("First", format_formula(a))
    table.add_row("Second", format_formula(b))
    table.add_row("First hash", _hex(hash_a))
    table.add_row("Second hash", _hex(hash_b))

    if equal:
        panel = Panel(table, title="[bold green]✓ Equal[/bold green]", border_style="green")
    else:
        panel = Panel(table, title="[bold yellow]≠ Different[/bold yellow]", border_style="yellow")
    console.print(panel)

    if not equal and hash_a == hash_b:
        console.print("[yellow]⚠️  Hash collision between structurally different formulas.[/yellow]")

    if not equal:
        raise typer.Exit(1)


@app.command()
def dedup(
    path: Path = typer.Argument(
        ...,
        help="File with one formula (or pair) per line",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    pairs: bool = typer.Option(
        False,
        "--pairs",
        "-p",
        help="Read each line as a pair of formulas separated by ';'",
    ),
    debug_log: Optional[Path] = typer.Option(
        None,
        "--debug-log",
        help="Write debug diagnostics to this file",
    ),
) -> None:
    """
    Count the distinct formulas in a file.

    Every line is inserted into a hash table keyed by structural equality;
    lines equal to an earlier one are reported as duplicates.
    """
    entries = _read_entries(path)
    reader = read_formula_pair if pairs else read_formula
    traits = FORMULA_PAIR_TRAITS if pairs else FORMULA_TRAITS

    with _debug_logging(debug_log):
        keys = [_parse(reader, text, path, line_no) for line_no, text in entries]

        table = KeyTable(traits)
        duplicates: list[tuple[int, int]] = []
        watch = StopWatch()
        watch.start()
        for (line_no, _), key in zip(entries, keys):
            first_line, inserted = table.insert(key, line_no)
            if not inserted:
                duplicates.append((line_no, first_line))
                logger.debug("line %d duplicates line %d", line_no, first_line)
        watch.stop()

    summary = Table(box=box.SIMPLE, show_header=False)
    summary.add_column("Label", style="dim")
    summary.add_column("Value", style="bold")
    summary.add_row("Entries read", str(len(entries)))
    summary.add_row("Distinct", str(len(table)))
    summary.add_row("Duplicates", str(len(duplicates)))
    summary.add_row("Buckets", str(table.bucket_count))
    summary.add_row("Longest chain", str(table.max_chain_length))
    summary.add_row("Insert time", f"{watch.get_us()}µs")

    panel = Panel(summary, title="[bold green]✓ Dedup Complete[/bold green]", border_style="green")
    console.print(panel)

    if duplicates:
        console.print(f"\n[yellow]{len(duplicates)} duplicate line(s):[/yellow]")
        for line_no, first_line in duplicates[:5]:
            console.print(f"   • line {line_no} = line {first_line}")
        if len(duplicates) > 5:
            console.print(f"   ... and {len(duplicates) - 5} more")


@app.command()
def states(
    path: Path = typer.Argument(
        ...,
        help="File of state pairs; consecutive lines form a trace, blank lines split traces",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    debug_log: Optional[Path] = typer.Option(
        None,
        "--debug-log",
        help="Write debug diagnostics to this file",
    ),
) -> None:
    """
    Build the explored state graph from recorded traces.

    Each non-blank line is a (path condition ; definitions) pair.
    Structurally equal states are merged into one graph node.
    """
    traces = _read_traces(path)

    with _debug_logging(debug_log):
        space = StateSpace()
        watch = StopWatch()
        watch.start()
        for trace in traces:
            space.explore_trace(_parse(read_formula_pair, text, path, line_no) for line_no, text in trace)
        watch.stop()

    table = Table(box=box.SIMPLE, show_header=False)
    table.add_column("Label", style="dim")
    table.add_column("Value", style="bold")
    table.add_row("Traces", str(len(traces)))
    table.add_row("States", str(space.state_count))
    table.add_row("Transitions", str(space.transition_count))
    table.add_row("Revisits", str(space.revisit_count))
    table.add_row("Build time", f"{watch.get_ms()}ms")

    panel = Panel(table, title="[bold green]✓ State Graph Built[/bold green]", border_style="green")
    console.print(panel)


# Helper functions for input and diagnostics

def _read_entries(path: Path) -> list[tuple[int, str]]:
    """Return (line number, text) for every non-blank, non-comment line."""
    return [entry for trace in _read_traces(path) for entry in trace]


def _read_traces(path: Path) -> list[list[tuple[int, str]]]:
    """Group non-blank lines into blocks separated by blank lines."""
    try:
        lines = path.read_text(encoding="utf-8").splitlines()
    except OSError as e:
        console.print(f"[bold red]Error:[/bold red] {e}")
        raise typer.Exit(1)

    traces: list[list[tuple[int, str]]] = [[]]
    for line_no, line in enumerate(lines, start=1):
        text = line.strip()
        if not text:
            if traces[-1]:
                traces.append([])
            continue
        if text.startswith("#"):
            continue
        traces[-1].append((line_no, text))
    return [trace for trace in traces if trace]


def _parse(reader, text: str, path: Optional[Path] = None, line_no: Optional[int] = None):
    """Run a notation reader, turning NotationError into a CLI error."""
    try:
        return reader(text)
    except NotationError as e:
        where = f"{path.name}:{line_no}: " if path is not None else ""
        console.print(f"[bold red]Error:[/bold red] {where}{e}")
        raise typer.Exit(1)


@contextmanager
def _debug_logging(debug_log: Optional[Path]) -> Iterator[Optional[DebugStreams]]:
    """Route the rpnkey loggers into debug_log for the duration of the block."""
    if debug_log is None:
        yield None
        return

    root = logging.getLogger("rpnkey")
    with DebugStreams() as streams:
        try:
            streams.add_file(TRACE_STREAM, debug_log)
        except OSError as e:
            console.print(f"[bold red]Error:[/bold red] {e}")
            raise typer.Exit(1)
        handler = streams.handler(TRACE_STREAM)
        previous_level = root.level
        root.addHandler(handler)
        root.setLevel(logging.DEBUG)
        try:
            yield streams
        finally:
            root.removeHandler(handler)
            root.setLevel(previous_level)


def _hex(value: int) -> str:
    return f"{value:016x}"


# Version option
def _version_callback(value: bool) -> None:
    if value:
        console.print(f"[bold]rpnkey[/bold] version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        help="Show version and exit",
        callback=_version_callback,
        is_eager=True,
    ),
) -> None:
    """
    rpnkey: structural hashing of postfix symbolic formulas.
    """


if __name__ == "__main__":
    app()
