"""Human-readable size and duration formatting."""

SIZE_UNITS = ("B", "KB", "MB", "GB")


def format_file_size(num_bytes: int) -> str:
    """Format a byte count using binary (1024) steps, e.g. ``1.5 KB``.

    Values are rounded to two decimals with trailing zeros dropped, and the
    largest unit is GB.
    """
    if num_bytes <= 0:
        return "0 B"

    value = float(num_bytes)
    unit_index = 0
    while value >= 1024 and unit_index < len(SIZE_UNITS) - 1:
        value /= 1024
        unit_index += 1

    return f"{round(value, 2):g} {SIZE_UNITS[unit_index]}"


def format_duration_estimate(milliseconds: float) -> str:
    """Format an estimated duration: ``< 0.1s``, ``~250ms`` or ``~1.5s``."""
    if milliseconds < 100:
        return "< 0.1s"
    if milliseconds < 1000:
        return f"~{round(milliseconds)}ms"
    return f"~{milliseconds / 1000:.1f}s"
