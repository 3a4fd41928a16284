"""Display helpers shared by report rows and controllers."""
from __future__ import annotations

from typing import Optional

from ..core.constants import NO_SHIFT_PLACEHOLDER


def fmt_hours(hours: float) -> str:
    return NO_SHIFT_PLACEHOLDER if hours == 0 else f"{hours:.2f}h"


def fmt_minutes(minutes: int) -> str:
    if minutes == 0:
        return NO_SHIFT_PLACEHOLDER
    h, m = divmod(int(minutes), 60)
    return f"{h}h {m}m" if h > 0 else f"{m}m"


def fmt_shift(start: Optional[str], end: Optional[str]) -> str:
    if not start or not end:
        return NO_SHIFT_PLACEHOLDER
    return f"{start}–{end}"
