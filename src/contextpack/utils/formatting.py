"""Human-readable number formatting for listings."""

_SIZE_UNITS = ["Bytes", "KB", "MB", "GB"]


def format_file_size(size_bytes: int) -> str:
    """Format a byte count, e.g. ``1536 -> "1.5 KB"``."""
    if size_bytes <= 0:
        return "0 Bytes"

    value = float(size_bytes)
    unit = 0
    while value >= 1024 and unit < len(_SIZE_UNITS) - 1:
        value /= 1024
        unit += 1

    value = round(value, 2)
    # "2 KB", not "2.0 KB"
    if value == int(value):
        return f"{int(value)} {_SIZE_UNITS[unit]}"
    return f"{value} {_SIZE_UNITS[unit]}"


def format_number(num: int) -> str:
    """Format an integer with thousands separators."""
    return f"{num:,}"
