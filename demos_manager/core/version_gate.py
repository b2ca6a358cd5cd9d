"""
Decides whether the demo cache must be invalidated on this launch.
"""

import logging
from enum import Enum

from demos_manager.exceptions import InvalidVersionError
from demos_manager.models.version import AppVersion

log = logging.getLogger(__name__)


class GateDecision(Enum):
    NO_ACTION = "no_action"
    NEEDS_CLEAR = "needs_clear"


def evaluate(
    stored_version: AppVersion | str | None,
    current_version: AppVersion | str,
    require_clear: bool,
) -> GateDecision:
    """
    Compares the version recorded by the last launch with the running one.

    A missing baseline (first run) always needs a clear, so the first launch
    goes through the same workflow as an upgrade. An upgrade needs a clear
    only when the running release requires it. A stored value that cannot be
    parsed is treated as a missing baseline.
    """
    current = AppVersion.coerce(current_version)

    if stored_version is None or (
        isinstance(stored_version, str) and not stored_version.strip()
    ):
        return GateDecision.NEEDS_CLEAR

    try:
        stored = AppVersion.coerce(stored_version)
    except InvalidVersionError:
        log.warning(
            f"Stored application version {stored_version!r} is invalid, "
            "treating this launch as a first run."
        )
        return GateDecision.NEEDS_CLEAR

    if stored < current and require_clear:
        return GateDecision.NEEDS_CLEAR
    return GateDecision.NO_ACTION
