"""Cache workload benchmarking."""

from .collector import BenchmarkCollector, BenchmarkReport, VariantEntry
from .reporter import BenchmarkReporter

__all__ = ["BenchmarkCollector", "BenchmarkReport", "BenchmarkReporter", "VariantEntry"]
