from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import List, Optional

from rich import box
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from .algorithms import run_schedule
from .config import LOG_LEVELS, SchedulerConfig
from .errors import ConfigurationError, SchedulerError
from .gantt import build_rich_gantt, build_rich_timeline
from .metrics import compute_system_metrics, summarize_records
from .models import Algorithm, ProcessDescriptor, SimulationResult
from .workload_io import load_workload, parse_fields

logger = logging.getLogger(__name__)

ALGORITHM_HELP = "fcfs, rr, priority, sjf (preemptive), priority_preemptive"


def _add_workload_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "--workload",
        "-w",
        help="Path to JSON or CSV workload file.",
    )
    parser.add_argument(
        "--arrivals",
        help="Comma-separated arrival times, e.g. 0,1,3,5 (instead of --workload).",
    )
    parser.add_argument(
        "--bursts",
        help="Comma-separated burst times, e.g. 9,2,5,6 (used with --arrivals).",
    )
    parser.add_argument(
        "--priorities",
        help="Comma-separated priorities, lower is more urgent (default: all 0).",
    )


def build_parser(config: SchedulerConfig) -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="schedsim",
        description="CPU scheduling simulator (FCFS, Round Robin, Priority, preemptive SJF / Priority).",
    )
    parser.add_argument(
        "--log-level",
        choices=LOG_LEVELS,
        type=str.upper,
        default=config.log_level,
        help=f"Logging verbosity on stderr (default: {config.log_level}).",
    )

    subparsers = parser.add_subparsers(dest="command", required=True)

    run_parser = subparsers.add_parser("run", help="Run one scheduling algorithm on a workload.")
    run_parser.add_argument(
        "--algorithm",
        "-a",
        required=True,
        help=f"Algorithm to use ({ALGORITHM_HELP}).",
    )
    _add_workload_arguments(run_parser)
    run_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=None,
        help=f"Time quantum for round robin (default: {config.quantum}; ignored by the others).",
    )

    compare_parser = subparsers.add_parser(
        "compare",
        help="Run several algorithms on the same workload and compare average metrics.",
    )
    _add_workload_arguments(compare_parser)
    compare_parser.add_argument(
        "--algorithms",
        "-a",
        nargs="+",
        default=[a.value for a in config.compare_algorithms],
        help="Algorithms to compare (default: all).",
    )
    compare_parser.add_argument(
        "--quantum",
        "-q",
        type=int,
        default=config.quantum,
        help=f"Time quantum used for round robin when included (default: {config.quantum}).",
    )

    return parser


def configure_logging(level: str) -> None:
    handler = RichHandler(console=Console(stderr=True), show_path=False)
    logging.basicConfig(level=level, format="%(message)s", datefmt="[%X]", handlers=[handler], force=True)


def _read_workload(args: argparse.Namespace) -> List[ProcessDescriptor]:
    if args.workload and args.arrivals:
        raise ConfigurationError("Use either --workload or --arrivals/--bursts, not both")
    if args.workload:
        return load_workload(Path(args.workload))
    if args.arrivals and args.bursts:
        return parse_fields(args.arrivals, args.bursts, args.priorities)
    raise ConfigurationError("A workload is required: --workload FILE or --arrivals ... --bursts ...")


def _print_result(result: SimulationResult, console: Console) -> None:
    console.print(f"[bold]Algorithm:[/bold] {result.algorithm.label}")
    if result.quantum is not None:
        console.print(f"[bold]Quantum:[/bold] {result.quantum}")

    console.print()

    panel, time_marks = build_rich_gantt(result.slices)
    console.print(panel)
    if time_marks:
        console.print(time_marks)

    console.print()
    console.print(build_rich_timeline(result))
    console.print()

    headers = [
        "PID",
        "Name",
        "Arrive",
        "Burst",
        "Priority",
        "Start",
        "Complete",
        "Wait",
        "Turnaround",
        "Response",
    ]

    proc_table = Table(title="Per-process metrics", box=box.SIMPLE_HEAVY)
    for h in headers:
        justify = "center" if h in {"PID", "Priority"} else "left" if h == "Name" else "right"
        proc_table.add_column(h, justify=justify)

    for r in result.records:
        proc_table.add_row(
            str(r.pid),
            r.name,
            str(r.arrival_time),
            str(r.burst_time),
            str(r.priority),
            str(r.start_time),
            str(r.completion_time),
            str(r.waiting_time),
            str(r.turnaround_time),
            str(r.response_time),
        )

    console.print(proc_table)
    console.print()

    summary = summarize_records(result.records)
    system = compute_system_metrics(result)

    sys_table = Table(title="System metrics", box=box.SIMPLE_HEAVY)
    sys_table.add_column("Metric")
    sys_table.add_column("Value", justify="right")

    sys_table.add_row("Avg waiting", f"{summary['avg_waiting']:.2f}")
    sys_table.add_row("Avg turnaround", f"{summary['avg_turnaround']:.2f}")
    sys_table.add_row("Avg response", f"{summary['avg_response']:.2f}")
    sys_table.add_row("Makespan", str(system.makespan))
    sys_table.add_row("CPU idle time", str(system.idle_time))
    sys_table.add_row("Throughput (proc/time)", f"{system.throughput:.3f}")
    sys_table.add_row("CPU utilization", f"{system.cpu_utilization*100:.1f}%")

    console.print(sys_table)


def _print_comparison(
    processes: List[ProcessDescriptor], algorithms: List[str], quantum: int, console: Console
) -> None:
    summary_table = Table(title="Algorithm comparison", box=box.SIMPLE_HEAVY)
    summary_table.add_column("Algorithm")
    summary_table.add_column("Quantum", justify="right")
    summary_table.add_column("Avg waiting", justify="right")
    summary_table.add_column("Avg turnaround", justify="right")
    summary_table.add_column("Avg response", justify="right")
    summary_table.add_column("Makespan", justify="right")

    for name in algorithms:
        algo = Algorithm.parse(name)
        q = quantum if algo is Algorithm.ROUND_ROBIN else None
        result = run_schedule(processes, algo, quantum=q)
        summary = summarize_records(result.records)
        summary_table.add_row(
            algo.label,
            "" if result.quantum is None else str(result.quantum),
            f"{summary['avg_waiting']:.2f}",
            f"{summary['avg_turnaround']:.2f}",
            f"{summary['avg_response']:.2f}",
            str(compute_system_metrics(result).makespan),
        )

    console.print(summary_table)


def main(argv: Optional[List[str]] = None) -> int:
    console = Console()

    try:
        config = SchedulerConfig.from_env()
    except ConfigurationError as exc:
        console.print(f"[red]Configuration error: {escape(str(exc))}[/red]")
        return 2

    parser = build_parser(config)
    args = parser.parse_args(argv)
    configure_logging(args.log_level)

    try:
        processes = _read_workload(args)

        if args.command == "run":
            algo = Algorithm.parse(args.algorithm)
            quantum = args.quantum
            if algo is Algorithm.ROUND_ROBIN and quantum is None:
                quantum = config.quantum
            result = run_schedule(processes, algo, quantum=quantum)
            _print_result(result, console)
            return 0

        if args.command == "compare":
            _print_comparison(processes, args.algorithms, args.quantum, console)
            return 0
    except SchedulerError as exc:
        logger.debug("run aborted", exc_info=True)
        console.print(f"[red]Error: {escape(str(exc))}[/red]")
        return 2

    parser.error(f"Unknown command: {args.command}")
    return 1


if __name__ == "__main__":
    raise SystemExit(main())
