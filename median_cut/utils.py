# median_cut/utils.py
from __future__ import annotations

"""
Shared utilities for median_cut.

Row partitioning and worker sizing for the threaded stages, stage timing,
compact formatting and tidy print-based logging.
"""

import os
import sys
import time
from contextlib import contextmanager
from typing import Any, Iterable, Iterator, List, Optional, Tuple


#  Time formatting


def format_seconds_compact(seconds: float) -> str:
    """Human-friendly seconds: '<ms>ms', '<s>s', or 'Mm Ss'."""
    if seconds < 1.0:
        return f"{seconds * 1000.0:.1f}ms"
    if seconds < 60.0:
        return f"{seconds:.3f}s"
    minutes = int(seconds // 60)
    return f"{minutes}m {seconds - 60 * minutes:.1f}s"


# Worker sizing / row partitioning


def default_workers() -> int:
    """One worker per available processing unit."""
    return max(1, os.cpu_count() or 1)


def resolve_workers(workers: Optional[int]) -> int:
    """None -> default_workers(); anything else clamped to >= 1."""
    if workers is None:
        return default_workers()
    return max(1, int(workers))


def split_rows_into_parts(height: int, parts: int) -> List[Tuple[int, int]]:
    """Partition range [0, height) into ~parts contiguous [start, end) row spans."""
    parts = max(1, int(parts))
    step = max(1, (height + parts - 1) // parts)
    return [(start, min(start + step, height)) for start in range(0, height, step)]


# Pretty logging


def format_bool_on_off(value: Any) -> str:
    """Pretty boolean: 'on'/'off' for bools; str(value) otherwise."""
    if isinstance(value, bool):
        return "on" if value else "off"
    return str(value)


def format_number_compact(value: Any) -> str:
    """Pretty number: 1_234 style for ints; compact for floats; passthrough otherwise."""
    if isinstance(value, int):
        return f"{value:,}"
    if isinstance(value, float):
        text = f"{value:.3f}".rstrip("0").rstrip(".")
        return text
    return str(value)


def key_value_pairs_to_string(
    pairs: Iterable[Tuple[str, Any]], sep: str = "  ", eq: str = ": "
) -> str:
    """
    Format (name, value) pairs as 'Name: value' blocks separated by sep.
    Uses format_bool_on_off / format_number_compact for readability.
    """
    out: List[str] = []
    for name, value in pairs:
        display = (
            format_bool_on_off(value)
            if isinstance(value, bool)
            else format_number_compact(value)
        )
        out.append(f"{name}{eq}{display}")
    return sep.join(out)


def print_config_line(
    section: str, pairs: Iterable[Tuple[str, Any]], debug: bool
) -> None:
    """
    Print the run settings on one line, prefixed with the section tag:
      [median-cut] Space: HSL  Priority: hue  Buckets: 16  Workers: 8
    The pipeline passes debug=True, so the line carries the [debug] prefix.
    """
    line = f"[{section}] {key_value_pairs_to_string(pairs)}"
    (debug_log if debug else log)(line)


def log(message: str) -> None:
    """Plain log line."""
    print(message, flush=True)


def debug_log(message: str) -> None:
    """Debug log line."""
    print(f"[debug] {message}", flush=True)


def warn(message: str) -> None:
    """Warning log line."""
    print(f"[warn] {message}", flush=True)


def error(message: str) -> None:
    """Error log line to stderr."""
    print(f"[error] {message}", file=sys.stderr, flush=True)


@contextmanager
def measure(label: str, debug: bool) -> Iterator[None]:
    """
    Time a pipeline stage.

    With debug on, prints '- <label> START' and '- <label> time: <t>' through
    debug_log. A failing stage logs the elapsed time via error() and re-raises.
    """
    if debug:
        debug_log(f"- {label} START")
    t0 = time.perf_counter()
    try:
        yield
    except Exception:
        error(f"- {label} failed after {format_seconds_compact(time.perf_counter() - t0)}")
        raise
    if debug:
        debug_log(f"- {label} time: {format_seconds_compact(time.perf_counter() - t0)}")


__all__ = [
    "format_seconds_compact",
    "default_workers",
    "resolve_workers",
    "split_rows_into_parts",
    "format_bool_on_off",
    "format_number_compact",
    "key_value_pairs_to_string",
    "print_config_line",
    "log",
    "debug_log",
    "warn",
    "error",
    "measure",
]
