"""Central configuration for runtime-tunable parameters.

All constants can be overridden via environment variables so that a player
can tweak the board display or retry behaviour without touching the code,
while the automated test-suite relies on the defaults below.
"""

from __future__ import annotations

import os


def _optional_limit(raw: str | None) -> int | None:
    """Return *raw* as a positive int, or None when unset / zero (unlimited)."""
    if not raw:
        return None
    value = int(raw)
    return value if value > 0 else None


# ===========================================================================
# Board Markers
# ===========================================================================
# BROADSIDE_SHIP_MARKER: Display character for a cell occupied by a ship segment.
#   Defaults to "-".
#   Example: export BROADSIDE_SHIP_MARKER=S
SHIP_MARKER: str = os.getenv("BROADSIDE_SHIP_MARKER", "-")

# BROADSIDE_HIT_MARKER: Display character for a ship segment that has been hit.
#   Defaults to "X".
#   Example: export BROADSIDE_HIT_MARKER=*
HIT_MARKER: str = os.getenv("BROADSIDE_HIT_MARKER", "X")


# ===========================================================================
# Grid Rendering
# ===========================================================================
# BROADSIDE_DISPLAY_SPACE: Padding after an empty cell marker ("x-y") and after
#   each row label.
#   Defaults to 3.
DISPLAY_SPACE: int = int(os.getenv("BROADSIDE_DISPLAY_SPACE", "3"))

# BROADSIDE_DISPLAY_SPACE_SHIP: Padding after ship / hit markers and after each
#   column index in the header. Wider than DISPLAY_SPACE because the markers are
#   a single character while empty cells show their coordinate.
#   Defaults to 5.
DISPLAY_SPACE_SHIP: int = int(os.getenv("BROADSIDE_DISPLAY_SPACE_SHIP", "5"))


# ===========================================================================
# Ship Placement
# ===========================================================================
# Direction used when the player just presses enter at the direction prompt,
# and for single-segment ships (which are never asked for one).
DEFAULT_DIRECTION: str = "right"

# BROADSIDE_PLACEMENT_RETRIES: Maximum consecutive failed attempts for a single
#   ship slot before setup is abandoned.
#   Defaults to unset, meaning the player may retry forever. "0" also means unlimited.
#   Can also be set via the `--retry-limit` CLI flag.
#   Example: export BROADSIDE_PLACEMENT_RETRIES=3
PLACEMENT_RETRY_LIMIT: int | None = _optional_limit(os.getenv("BROADSIDE_PLACEMENT_RETRIES"))


# ===========================================================================
# Debugging and Logging
# ===========================================================================
# BROADSIDE_DEBUG: If "1", enables detailed debug logging across modules.
#   Defaults to "0" (disabled).
#   Can also be set via the `--debug` CLI flag.
#   Example: export BROADSIDE_DEBUG=1
DEBUG: bool = os.getenv("BROADSIDE_DEBUG", "0") == "1"

LOG_FORMAT: str = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"
