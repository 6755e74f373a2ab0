"""Human-readable durations for batch timing notices."""

from __future__ import annotations

MS_PER_SECOND = 1_000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE
MS_PER_DAY = 24 * MS_PER_HOUR

_UNITS: tuple[tuple[str, int], ...] = (
    ("d", MS_PER_DAY),
    ("h", MS_PER_HOUR),
    ("m", MS_PER_MINUTE),
    ("s", MS_PER_SECOND),
)

MAX_UNITS = 2


def human_duration_from_ms(ms: float) -> str:
    """Render a duration using its two largest non-zero units.

    Anything shorter than one second renders as ``"0s"``.

    Args:
        ms: Duration in milliseconds

    Returns:
        Compact duration such as ``"1m5s"`` or ``"2d3h"``

    Raises:
        ValueError: If ms is negative

    Example:
        >>> human_duration_from_ms(65_000)
        '1m5s'
        >>> human_duration_from_ms(500)
        '0s'
    """
    if ms < 0:
        msg = f"Duration cannot be negative: {ms}"
        raise ValueError(msg)

    remaining = int(ms)
    parts: list[str] = []
    for suffix, size in _UNITS:
        value, remaining = divmod(remaining, size)
        if value:
            parts.append(f"{value}{suffix}")

    if not parts:
        return "0s"
    return "".join(parts[:MAX_UNITS])
