from __future__ import annotations

import argparse
import logging
from typing import Sequence

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.rule import Rule
from rich.table import Table

from .algorithms import ALGORITHMS, DEFAULT_ORDER, run_algorithm
from .gantt import build_rich_gantt, render_gantt
from .models import Process, ScheduleResult
from .simulation import SimulationError
from .workload_io import WorkloadError, load_workload

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, preemptive SJF, preemptive Priority, Round Robin).",
    )
    parser.add_argument(
        "--verbose",
        "-v",
        action="count",
        default=0,
        help="Increase log output (-v for info, -vv for debug).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Print the full schedule report for each algorithm.")
    run_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    run_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(DEFAULT_ORDER),
        help="Algorithms to run, in order (default: fcfs sjf priority rr).",
    )
    run_parser.add_argument(
        "--plain",
        action="store_true",
        help="Render the Gantt chart and tables as plain text without colors.",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run multiple algorithms on the same workload and compare average metrics.",
    )
    compare_parser.add_argument(
        "--workload",
        "-w",
        required=True,
        help="Path to JSON or CSV workload file.",
    )
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        choices=list(ALGORITHMS),
        default=list(DEFAULT_ORDER),
        help="Algorithms to compare (default: fcfs sjf priority rr).",
    )

    return parser


def configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )
    # basicConfig is a no-op once handlers exist, so apply the level directly.
    logging.getLogger().setLevel(level)


def _print_title(console: Console, title: str, plain: bool) -> None:
    if plain:
        rule = "-" * (len(title) * 2)
        console.print(rule)
        console.print(" " * (len(title) // 2), title)
        console.print(rule)
    else:
        console.print(Rule(f"[bold]{title}[/bold]"))


def _print_result(result: ScheduleResult, console: Console, plain: bool = False) -> None:
    _print_title(console, result.title, plain)

    if result.is_empty:
        console.print("No processes to schedule.")
        console.print()
        return

    if plain:
        console.print(render_gantt(result.timeline), markup=False)
    else:
        panel, time_marks = build_rich_gantt(result.timeline)
        console.print(panel)
        if time_marks:
            console.print(time_marks)

    console.print()

    stats = result.stats
    headers = ["ID", "Priority", "Burst", "Arrival", "Wait", "Turnaround", "Exit"]
    footers = [
        "",
        "",
        "",
        "",
        f"Average\n{stats.avg_waiting:.2f}",
        f"Average\n{stats.avg_turnaround:.2f}",
        f"Throughput\n{stats.throughput:.2f}/t",
    ]

    table = Table(
        title="Schedule table",
        box=box.ASCII if plain else box.SIMPLE_HEAVY,
        show_footer=True,
    )
    for h, f in zip(headers, footers):
        justify = "center" if h in {"ID", "Priority"} else "right"
        table.add_column(h, footer=f, justify=justify)

    for r in result.rows:
        table.add_row(
            escape(r.pid),
            str(r.priority),
            str(r.burst_time),
            str(r.arrival_time),
            str(r.waiting_time),
            str(r.turnaround_time),
            str(r.completion_time),
        )

    console.print(table)
    console.print()


def _print_comparison(processes: Sequence[Process], algorithms: Sequence[str], console: Console) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Throughput (proc/time)", justify="right")
    summary_table.add_column("Last exit", justify="right")

    for alg in algorithms:
        result = run_algorithm(alg, processes)
        stats = result.stats
        summary_table.add_row(
            result.title,
            f"{stats.avg_waiting:.2f}",
            f"{stats.avg_turnaround:.2f}",
            f"{stats.throughput:.3f}",
            str(stats.last_completion),
        )

    console.print(summary_table)


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    configure_logging(args.verbose)

    try:
        processes = load_workload(args.workload)
    except FileNotFoundError:
        Console(stderr=True).print(f"[red]Workload not found: {escape(args.workload)}[/red]")
        return 1
    except WorkloadError as exc:
        Console(stderr=True).print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    logger.debug("%s: %d processes from %s", args.command, len(processes), args.workload)

    plain = getattr(args, "plain", False)
    console = Console(no_color=plain, highlight=not plain)

    try:
        if args.command == "run":
            for alg in args.algorithms:
                _print_result(run_algorithm(alg, processes), console, plain=plain)
            return 0

        if args.command == "compare":
            _print_comparison(processes, args.algorithms, console)
            return 0
    except SimulationError as exc:
        Console(stderr=True).print(f"[red]Error: {escape(str(exc))}[/red]")
        return 1

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
