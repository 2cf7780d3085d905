"""Console output for Mazechase sessions.

Everything the core reports goes through the ``log_*`` helpers below, one
colour per kind of event:

- blue: per-tick game events (life lost, key collected, session started)
- red: pursuit anomalies, failing listeners
- green: session won or finished
- cyan: out of lives, configuration notes

Each line also carries a text tag so the kind of event survives when
colour is off (``MAZECHASE_NO_COLOR``). Per-event session lines are only
printed when ``MAZECHASE_VERBOSE`` is set; anomalies always print.
"""

import os
from enum import Enum


class Color(Enum):
    """ANSI colours used by the session, driver and pursuit logs."""

    BLUE = "\033[94m"      # Hits, key pickups, driver progress
    RED = "\033[91m"       # No path for a pursuer, listener failures
    GREEN = "\033[92m"     # Field harvested, run summary
    CYAN = "\033[96m"      # Out of lives

    BOLD = "\033[1m"
    RESET = "\033[0m"


def colored(text: str, color: Color, bold: bool = False) -> str:
    """Return ``text`` wrapped in ``color``, or unchanged under MAZECHASE_NO_COLOR."""
    if os.getenv("MAZECHASE_NO_COLOR"):
        return text

    prefix = color.value
    if bold:
        prefix = Color.BOLD.value + prefix

    return f"{prefix}{text}{Color.RESET.value}"


def verbose_enabled() -> bool:
    """True when MAZECHASE_VERBOSE asks for hit and key lines."""
    return os.getenv("MAZECHASE_VERBOSE", "").lower() in ("1", "true", "yes")


def log_deterministic(message: str) -> None:
    """Game event inside a tick, e.g. a pursuer catching the player."""
    print(colored(message, Color.BLUE))


def log_error(message: str) -> None:
    """Something the game recovered from but should not happen, e.g. an unreachable target."""
    print(colored(message, Color.RED))


def log_success(message: str) -> None:
    print(colored(message, Color.GREEN))


def log_info(message: str) -> None:
    print(colored(message, Color.CYAN))


# Tags prefixed to each line: tick event, anomaly, win/summary, info
LOG_TAG_DETERMINISTIC = "[•]"
LOG_TAG_ERROR = "[!]"
LOG_TAG_SUCCESS = "[✓]"
LOG_TAG_INFO = "[i]"
