"""Per-window record of which species each user was assigned."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Callable, Dict, Optional

from .models import CatalogEntry

logger = logging.getLogger("dexbot.ledger")


@dataclass(frozen=True)
class Claim:
    species_name: str
    entry: Optional[CatalogEntry] = None
    fresh: bool = False


class AssignmentLedger:
    """Assignments for the current rotation window, guarded by a single lock.

    The only way in is :meth:`claim`, which performs the rollover check, the
    lookup and the insert as one critical section.
    """

    def __init__(self, epoch: datetime):
        self._epoch = epoch
        self._assignments: Dict[int, str] = {}
        self._lock = asyncio.Lock()

    @property
    def epoch(self) -> datetime:
        return self._epoch

    def __len__(self) -> int:
        return len(self._assignments)

    async def claim(
        self,
        user_id: int,
        checkpoint: datetime,
        choose: Callable[[], CatalogEntry],
    ) -> Claim:
        """Return the user's species for ``checkpoint``, choosing one if they have none."""
        async with self._lock:
            if checkpoint > self._epoch:
                logger.info(
                    "Rotation rolled over from %s to %s; clearing %s assignment(s).",
                    self._epoch.isoformat(),
                    checkpoint.isoformat(),
                    len(self._assignments),
                )
                self._epoch = checkpoint
                self._assignments = {}

            existing = self._assignments.get(user_id)
            if existing is not None:
                return Claim(species_name=existing)

            entry = choose()
            self._assignments[user_id] = entry.name
            logger.debug("Assigned %s to user %s for epoch %s", entry.name, user_id, self._epoch.isoformat())
            return Claim(species_name=entry.name, entry=entry, fresh=True)


__all__ = ["AssignmentLedger", "Claim"]
