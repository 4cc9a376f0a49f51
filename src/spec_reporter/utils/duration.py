import math
from typing import Sequence, List

# short english locale: single-letter suffixes, no spacer, no delimiter
UNIT_MS = {"h": 3_600_000, "m": 60_000, "s": 1_000, "ms": 1}
REPORT_UNITS = ("m", "s")

def humanize(ms: float, units: Sequence[str] = REPORT_UNITS, round_: bool = True) -> str:
    """
    Render a millisecond duration with the given units, largest first.
    With round_ the smallest unit is rounded half-up and carried upward
    (59.6s -> "1m"); zero-valued units are dropped, all-zero gives "0<unit>".
    """
    if ms < 0:
        raise ValueError(f"duration must be non-negative, got {ms!r}")
    units = sorted(units, key=lambda u: -UNIT_MS[u])
    pieces: List[float] = []
    remaining = float(ms)
    for unit in units[:-1]:
        count = math.floor(remaining / UNIT_MS[unit])
        pieces.append(count)
        remaining -= count * UNIT_MS[unit]
    last = remaining / UNIT_MS[units[-1]]
    pieces.append(math.floor(last + 0.5) if round_ else last)

    for i in range(len(pieces) - 1, 0, -1):
        ratio = UNIT_MS[units[i - 1]] // UNIT_MS[units[i]]
        if pieces[i] >= ratio:
            pieces[i] -= ratio
            pieces[i - 1] += 1

    out = "".join(f"{_num(p)}{u}" for p, u in zip(pieces, units) if p)
    return out or f"0{units[-1]}"

def _num(value: float) -> str:
    return str(int(value)) if float(value).is_integer() else f"{value:g}"

def format_duration(ms: float) -> str:
    return humanize(ms, REPORT_UNITS, round_=True)
