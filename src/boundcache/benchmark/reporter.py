"""Benchmark report display (Rich terminal)."""

from rich.box import SIMPLE_HEAVY
from rich.console import Console
from rich.table import Table
from rich.text import Text

from .collector import BenchmarkReport


class BenchmarkReporter:
    @staticmethod
    def display(report: BenchmarkReport, console: Console | None = None) -> None:
        """Print a benchmark table to the console."""
        if console is None:
            console = Console()

        table = Table(
            box=SIMPLE_HEAVY,
            show_header=True,
            header_style="bold dim",
            title=(
                f"Cache Benchmark · {report.operations} ops"
                f" · capacity {report.capacity} / evict {report.evict_count}"
                f" · {report.key_space} keys"
            ),
            title_style="bold",
        )
        table.add_column("Policy / Backing", no_wrap=True, min_width=18)
        table.add_column("Duration", justify="right", style="cyan", min_width=10)
        table.add_column("Ops/s", justify="right", min_width=10)
        table.add_column("Hit rate", justify="right", style="green", min_width=9)
        table.add_column("Evicted", justify="right", style="dim", min_width=8)

        fastest = min((v.duration_s for v in report.variants), default=0.0)
        for v in report.variants:
            label = Text(f"{v.policy.upper()} / {v.backing}", style="bold white" if v.duration_s == fastest else "")
            table.add_row(
                label,
                f"{v.duration_s * 1000:.1f}ms",
                f"{v.ops_per_second:,.0f}",
                f"{v.hit_rate:.1%}",
                str(v.evictions),
            )

        console.print(table)
        console.print(
            f"[dim]read ratio {report.read_ratio:.0%} · seed {report.seed} · {report.timestamp}[/dim]"
        )
