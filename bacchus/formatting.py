"""Display formatting for the calculator screen (French conventions)."""

import math
import re
from decimal import ROUND_HALF_UP, Decimal

DECIMAL_SEPARATOR = ","
# fr-FR groups thousands with a narrow no-break space.
GROUP_SEPARATOR = "\u202f"

_HM_RE = re.compile(r"^\s*(\d+)h\s+(\d{2})m\s*$")


def fmt(value: float, digits: int = 2) -> str:
    """Fixed-decimal number, e.g. fmt(1234.5, 1) -> '1 234,5'."""
    # Round the exact binary value half away from zero.
    quantum = Decimal(1).scaleb(-digits)
    rounded = Decimal(value).quantize(quantum, rounding=ROUND_HALF_UP)
    text = f"{abs(rounded):,.{digits}f}"
    text = text.replace(",", GROUP_SEPARATOR).replace(".", DECIMAL_SEPARATOR)
    if rounded < 0:
        text = "-" + text
    return text


def fmt_hm(hours: float) -> str:
    """Hours as 'Hh MMm', rounded to the nearest minute."""
    total_minutes = math.floor(max(0.0, hours) * 60 + 0.5)
    h, m = divmod(total_minutes, 60)
    return f"{h}h {m:02d}m"


def parse_hm(text: str) -> int:
    """Total minutes from an 'Hh MMm' string."""
    match = _HM_RE.match(text)
    if match is None:
        raise ValueError(f"not an 'Hh MMm' duration: {text!r}")
    h, m = int(match.group(1)), int(match.group(2))
    if m >= 60:
        raise ValueError(f"minutes out of range in {text!r}")
    return h * 60 + m
