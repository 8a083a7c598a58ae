"""Synthetic history generation and a timing harness for memex-lite."""

from memex_lite.profiling.harness import QueryTimings, run_queries
from memex_lite.profiling.load_generator import GeneratedHistory, HistoryGenerator
from memex_lite.profiling.report import format_report

__all__ = [
    "GeneratedHistory",
    "HistoryGenerator",
    "QueryTimings",
    "format_report",
    "run_queries",
]
