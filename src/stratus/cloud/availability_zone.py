"""Availability zone selection from independent placement hints."""

import logging
from typing import Iterable, List, Optional, Union

from stratus.errors import PlacementConflictError
from stratus.models.instance import ZoneHint


logger = logging.getLogger(__name__)


class AvailabilityZoneSelector:
    """Resolves a single availability zone from networks, disks and pool hints."""

    def select(self, hints: Iterable[Union[ZoneHint, str, None]]) -> Optional[str]:
        """Return the common zone, or None when nothing expresses a preference.

        Raises:
            PlacementConflictError: If two present hints name different zones.
        """
        present: List[ZoneHint] = []
        for hint in hints:
            if not isinstance(hint, ZoneHint):
                hint = ZoneHint(zone=hint)
            if hint.zone is not None:
                present.append(hint)

        zones = {hint.zone for hint in present}
        if not zones:
            logger.debug("No availability zone preference")
            return None
        if len(zones) > 1:
            described = ", ".join(str(hint) for hint in present)
            raise PlacementConflictError(
                f"Conflicting availability zones: {described}", hints=present
            )

        zone = zones.pop()
        logger.debug(f"Selected availability zone {zone}")
        return zone
