"""
boundcache CLI
Main entry point for the command-line interface

Usage:
    boundcache version                  # Show version information
    boundcache demo --policy lru        # Replay the eviction walkthrough
    boundcache bench --capacity 1000    # Benchmark every policy/backing
"""

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from boundcache import __version__
from boundcache.application.cache import Cache
from boundcache.benchmark import BenchmarkCollector, BenchmarkReporter
from boundcache.domain.enums import EvictionPolicy, StoreBacking
from boundcache.shared.domain.exceptions import ConfigurationError
from boundcache.shared.infrastructure.config import CacheConfig
from boundcache.shared.infrastructure.logging import configure_logging

app = typer.Typer(
    name="boundcache",
    help="boundcache - capacity-bounded FIFO/LRU caches",
    add_completion=False,
    no_args_is_help=True,
)
console = Console()


@app.command()
def version():
    """Show boundcache version information"""
    console.print(Panel.fit(
        "[bold cyan]boundcache[/bold cyan]\n"
        f"[dim]Version:[/dim] {__version__}\n"
        "[dim]Backings:[/dim] flat, indexed\n",
        title="About boundcache",
        border_style="cyan"
    ))


@app.command()
def demo(
    policy: EvictionPolicy = typer.Option(EvictionPolicy.LRU, "--policy", "-p", help="Eviction policy"),
    backing: StoreBacking = typer.Option(StoreBacking.FLAT, "--backing", "-b", help="Store backing"),
    debug: bool = typer.Option(False, "--debug", help="Trace every cache operation"),
):
    """Walk through a capacity-3 cache: fill, overflow, promote, overflow again"""
    if debug:
        # Cache traces are emitted at debug level.
        configure_logging(level="DEBUG")

    cache: Cache[str] = Cache(3, 1, debug, policy=policy, backing=backing)

    for key in ("A", "B", "C", "D"):
        cache.add_replace(key, f"value-{key}")
    _print_state(cache, "Inserted A, B, C, D")

    cache.get("B")
    cache.add_replace("E", "value-E")
    _print_state(cache, "Read B, inserted E")


@app.command()
def bench(
    capacity: int = typer.Option(1000, "--capacity", "-c", help="Cache capacity"),
    evict_count: int = typer.Option(1, "--evict-count", "-e", help="Entries evicted per batch"),
    operations: int = typer.Option(20_000, "--operations", "-n", help="Operations per variant"),
    key_space: Optional[int] = typer.Option(None, "--key-space", "-k", help="Distinct keys (default: 2x capacity)"),
    read_ratio: float = typer.Option(0.7, "--read-ratio", help="Fraction of operations that are reads"),
    seed: int = typer.Option(42, "--seed", help="Workload random seed"),
    config_file: Optional[Path] = typer.Option(None, "--config", help="YAML file with cache options"),
):
    """Run the same workload against every policy/backing combination"""
    try:
        if config_file is not None:
            config = CacheConfig.from_yaml(config_file)
        else:
            config = CacheConfig.build(capacity=capacity, evict_count=evict_count)
        collector = BenchmarkCollector(
            config,
            operations=operations,
            key_space=key_space,
            read_ratio=read_ratio,
            seed=seed,
        )
    except (ConfigurationError, ValueError) as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(code=1)

    BenchmarkReporter.display(collector.run(), console=console)


def _print_state(cache: Cache, title: str) -> None:
    markers = {
        "oldest": cache.oldest(),
        "newest": cache.newest(),
        "first used": cache.first_used(),
        "last used": cache.last_used(),
    }

    console.print(f"[bold]{title}[/bold] · {cache.count()}/{cache.capacity} entries")
    table = Table()
    table.add_column("Key", style="cyan", no_wrap=True)
    table.add_column("Value")
    table.add_column("Position", style="dim")

    for key in sorted(cache.keys()):
        roles = [name for name, marked in markers.items() if marked == key]
        table.add_row(key, str(cache.peek(key)), ", ".join(roles) or "-")

    console.print(table)


def main():
    """Main entry point"""
    app()


if __name__ == "__main__":
    main()
