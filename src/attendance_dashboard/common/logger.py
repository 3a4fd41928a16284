"""Central logging configuration for the dashboard."""
from __future__ import annotations

import logging

DEFAULT_FMT = "%(asctime)s | %(levelname)s | %(name)s | %(message)s"


def setup_logging(level: str = "INFO") -> logging.Logger:
    """Configure root logging once (DEBUG/INFO/WARNING/ERROR)."""
    lvl = getattr(logging, (level or "INFO").upper(), logging.INFO)
    root = logging.getLogger()
    root.setLevel(lvl)

    # Avoid duplicate handlers when the app factory runs more than once.
    if not any(isinstance(h, logging.StreamHandler) for h in root.handlers):
        sh = logging.StreamHandler()
        sh.setLevel(lvl)
        sh.setFormatter(logging.Formatter(DEFAULT_FMT))
        root.addHandler(sh)

    return logging.getLogger("attendance_dashboard")
