"""Human-readable formatting of sizes shown in statistics."""

from __future__ import annotations

import math

_UNIT = 1000
_PREFIXES = "KMGTPEZY"


def bytes_format(num_bytes: int) -> str:
    """Format a byte count with decimal (power of 1000) unit prefixes.

    Counts below 1000 are shown as whole bytes; larger counts get two decimals
    and a prefix from K up to Y. Raises ValueError for negative counts.
    """
    if num_bytes < 0:
        raise ValueError("byte count must not be negative")
    if num_bytes < _UNIT:
        return f"{num_bytes} B"

    size = float(num_bytes)
    exp = math.floor(math.log(size) / math.log(_UNIT))
    exp = max(exp, 1)
    if exp > len(_PREFIXES):
        raise ValueError("byte count too large to format")
    return f"{size / float(_UNIT**exp):.2f} {_PREFIXES[exp - 1]}B"