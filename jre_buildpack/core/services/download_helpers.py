"""
Download helpers (pure).

Duration and size formatting for staging progress output.
No I/O.
"""

from __future__ import annotations


def format_duration(seconds: float) -> str:
    """Format an elapsed time the way staging output reports it.

    Examples::

        format_duration(0.3)    -> "0.3s"
        format_duration(65)     -> "1m 5.0s"
        format_duration(3720)   -> "1h 2m"
    """
    if seconds < 0:
        seconds = 0.0
    if seconds < 60:
        return f"{seconds:.1f}s"
    minutes, secs = divmod(seconds, 60)
    if minutes < 60:
        return f"{int(minutes)}m {secs:.1f}s"
    hours, minutes = divmod(int(minutes), 60)
    return f"{hours}h {minutes}m"


def fmt_size(n: int | float) -> str:
    """Format byte count to human-readable string."""
    for unit in ("B", "KB", "MB", "GB"):
        if n < 1024:
            return f"{n:.1f} {unit}"
        n /= 1024
    return f"{n:.1f} TB"
