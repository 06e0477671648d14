"""Formatting utilities for display."""

import math

from race_recap.models import KM_TO_MILES


def round_half_up(value: float, ndigits: int = 0) -> float:
    """Round with ties going up, the way display code rounds (not banker's rounding)."""
    factor = 10 ** ndigits
    return math.floor(value * factor + 0.5) / factor


def format_pace(decimal_minutes: float) -> str:
    """Format a decimal pace (8.25) as minutes:seconds (8:15)."""
    minutes = math.floor(decimal_minutes)
    seconds = int(round_half_up((decimal_minutes - minutes) * 60))
    if seconds == 60:
        minutes += 1
        seconds = 0
    return f"{minutes}:{seconds:02d}"


def format_mile(mile: float) -> str:
    """Format a mile marker without a trailing .0 (13.1, 5)."""
    return f"{mile:.1f}".rstrip("0").rstrip(".")


def format_duration(duration_ms: int) -> str:
    """Format milliseconds as Xh Ym Zs string."""
    total_seconds = int(duration_ms // 1000)
    hours, remainder = divmod(total_seconds, 3600)
    minutes, seconds = divmod(remainder, 60)
    return f"{hours}h {minutes:02d}m {seconds:02d}s"


def format_distance(km: float) -> str:
    """Format kilometers as 'X.XX km (Y.YY mi)'."""
    return f"{km:.2f} km ({km * KM_TO_MILES:.2f} mi)"
