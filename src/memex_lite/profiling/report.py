"""Report generation for harness results."""
from __future__ import annotations

from memex_lite.profiling.harness import QueryTimings


def _share(part: float, total: float) -> str:
    if total <= 0:
        return "n/a"
    return f"{part / total * 100:.1f}%"


def format_report(timings: QueryTimings, label: str = "Search pipeline") -> str:
    """Format a QueryTimings as a readable report string."""
    t = timings
    lines = [
        f"=== {label} ===",
        f"Documents in store: {t.documents:,}",
        f"Total time:         {t.total_time_ms:.1f} ms",
        "",
        "Breakdown:",
        f"  Recent visits:    {t.recent_time_ms:.1f} ms "
        f"({_share(t.recent_time_ms, t.total_time_ms)}), {t.recent_rows:,} rows",
        f"  Temporal range:   {t.temporal_time_ms:.1f} ms "
        f"({_share(t.temporal_time_ms, t.total_time_ms)}), {t.temporal_rows:,} rows",
        f"  Context expand:   {t.context_time_ms:.1f} ms "
        f"({_share(t.context_time_ms, t.total_time_ms)}), {t.context_rows:,} rows "
        f"({t.contextual_rows:,} contextual)",
    ]
    return "\n".join(lines)
