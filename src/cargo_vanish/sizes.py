"""Human readable labels for artifact sizes."""

from typing import Iterable

from cargo_vanish.terminal import Color, colorize

UNKNOWN_LABEL = "N/A --"

# (threshold, unit, color), largest first
_UNITS = (
    (1_000_000_000, "GB", Color.RED),
    (1_000_000, "MB", Color.BLUE),
    (1_000, "KB", Color.GREEN),
)


def format_size(size: int | None, color: bool = True) -> str:
    """
    Map a byte count to a unit-scaled label.

    Units are decimal and the value is truncated, so 1_500 bytes renders as
    "  1 KB". Byte counts below 1_000 get an extra space before "B" to line up
    with the two letter units. A missing size renders as "N/A --".

    Args:
        size: Byte count, or None when unknown
        color: Whether to add terminal color codes

    Returns:
        The formatted label
    """
    if size is None:
        return colorize(Color.YELLOW, UNKNOWN_LABEL, color)
    for threshold, unit, unit_color in _UNITS:
        if size >= threshold:
            return colorize(unit_color, f"{size // threshold:3} {unit}", color)
    return f"{size:3}  B"


def total_size(sizes: Iterable[int | None]) -> int:
    """Sum the known sizes, unknown sizes count as zero."""
    return sum(size for size in sizes if size is not None)
