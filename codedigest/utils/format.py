import re


# ============================================================================
# Size and Count Formatting
# ============================================================================

_SIZE_UNITS = {
    "B": 1,
    "K": 1024,
    "KB": 1024,
    "M": 1024**2,
    "MB": 1024**2,
    "G": 1024**3,
    "GB": 1024**3,
    "T": 1024**4,
    "TB": 1024**4,
}


def format_size(size_bytes: int) -> str:
    """Format bytes to human-readable size."""
    for unit in ["B", "KB", "MB", "GB", "TB"]:
        if size_bytes < 1024.0:
            return f"{size_bytes:.2f} {unit}"
        size_bytes /= 1024.0
    return f"{size_bytes:.2f} PB"


def parse_size(size_str: str) -> int:
    """
    Parse a size limit such as ``50MB``, ``1.5G`` or ``2048`` into bytes.

    Units are binary (1K = 1024) and case-insensitive; a bare number is bytes.

    Raises:
        ValueError: If the string is empty or not a recognized size
    """
    if not size_str or not isinstance(size_str, str):
        raise ValueError(f"Invalid size string: {size_str}")

    normalized = size_str.strip().upper()
    match = re.match(r"^(\d+(?:\.\d+)?)\s*([KMGT]?B?)$", normalized)
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Expected something like '500KB', '50MB' or '1GB'")

    value = float(match.group(1))
    return int(value * _SIZE_UNITS[match.group(2) or "B"])


def format_count(count: int, noun: str) -> str:
    """Format ``count`` with thousands separators and a naively pluralized noun."""
    suffix = "" if count == 1 else "s"
    return f"{count:,} {noun}{suffix}"
