"""
Timing utilities for the frame loop.
"""

import time
from typing import Optional


class Timer:
    """Simple context manager for timing code blocks."""

    def __init__(self, name: str = ""):
        self.name = name
        self.start_time: Optional[float] = None
        self.elapsed: float = 0.0

    def __enter__(self):
        self.start_time = time.perf_counter()
        return self

    def __exit__(self, *args):
        if self.start_time is not None:
            self.elapsed = time.perf_counter() - self.start_time

    def __str__(self) -> str:
        name_str = f"{self.name}: " if self.name else ""
        return f"{name_str}{self.elapsed * 1000:.2f}ms"
