import random
import re
import time
import uuid
from typing import Any, Dict, Optional, Sequence, Tuple

HEX_COLOR_RE = re.compile(r'^#?([a-f\d]{2})([a-f\d]{2})([a-f\d]{2})$', re.IGNORECASE)

REQUIRED_GENE_FIELDS = (
    'bodyType', 'coatColor', 'markingPattern', 'markingColor',
    'earType', 'tailType', 'celebrityHeadId', 'celebrityInfluence',
    'temperament', 'talent'
)


def generate_uuid() -> str:
    """Generate a unique dog id."""
    return str(uuid.uuid4())


def now_ms() -> int:
    return int(time.time() * 1000)


def hex_to_rgb(hex_color: str) -> Optional[Tuple[int, int, int]]:
    """Convert '#RRGGBB' to an (r, g, b) tuple, or None if it does not parse."""
    if not isinstance(hex_color, str):
        return None
    match = HEX_COLOR_RE.match(hex_color)
    if not match:
        return None
    return tuple(int(part, 16) for part in match.groups())


def rgb_to_hex(r: int, g: int, b: int) -> str:
    """Convert channel values to an upper-case '#RRGGBB' string."""
    return '#' + ''.join(f'{int(round(c)):02X}' for c in (r, g, b))


def clamp(value: float, min_value: float, max_value: float) -> float:
    return min(max(value, min_value), max_value)


def random_choice(items: Sequence[Any], rng: random.Random) -> Any:
    """Pick one element uniformly using the given random source."""
    if not items:
        raise ValueError("Cannot choose from an empty sequence")
    index = min(int(rng.random() * len(items)), len(items) - 1)
    return items[index]


def weighted_random(items: Sequence[Tuple[Any, float]], rng: random.Random) -> Any:
    """
    Select a value from (value, weight) pairs.

    One uniform draw is scaled by the total weight and walked through the
    cumulative weights, so a table like [('a', 0.5), ('b', 0.4), ('c', 0.1)]
    maps r < 0.5 to 'a', 0.5 <= r < 0.9 to 'b' and the rest to 'c'.

    Args:
        items: Sequence of (value, weight) pairs with non-negative weights
        rng: Random source; only ``rng.random()`` is consumed

    Returns:
        The selected value
    """
    if not items:
        raise ValueError("Cannot select from an empty weight table")

    total_weight = sum(weight for _, weight in items)
    roll = rng.random() * total_weight

    for value, weight in items:
        if roll < weight:
            return value
        roll -= weight

    return items[-1][0]


def validate_genes(genes: Dict[str, Any]) -> bool:
    """Check that a gene record carries every required dimension."""
    if not isinstance(genes, dict):
        return False
    return all(field in genes for field in REQUIRED_GENE_FIELDS)


def format_number(num: int) -> str:
    return f"{num:,}"


def time_ago(timestamp_ms: int) -> str:
    """Human-readable elapsed time since an epoch-millisecond timestamp."""
    return f"{format_duration(now_ms() - timestamp_ms)} ago"


def format_duration(elapsed_ms: int) -> str:
    seconds = max(0, elapsed_ms) // 1000
    if seconds < 60:
        return f"{seconds}s"
    if seconds < 3600:
        return f"{seconds // 60}m"
    if seconds < 86400:
        return f"{seconds // 3600}h"
    return f"{seconds // 86400}d"
