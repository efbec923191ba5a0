"""Request handling for the daily species command."""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Callable, Optional

from .catalog import Catalog
from .checkpoint import DEFAULT_RESET_HOUR, current_checkpoint, validate_reset_hour
from .ledger import AssignmentLedger
from .models import CatalogEntry, DexAssignment, DexReply, StillAssigned, TriggerCommand
from .override import DateOverride, validate_override
from .utils import utc_now

logger = logging.getLogger("dexbot.handler")

IMAGE_URL_TEMPLATE = "http://assets.pokemon.com/assets/cms2/img/pokedex/full/{species_id:03}.png"


def build_image_url(species_id: int, template: str = IMAGE_URL_TEMPLATE) -> str:
    return template.format(species_id=species_id)


class DexHandler:
    def __init__(
        self,
        catalog: Catalog,
        ledger: AssignmentLedger,
        *,
        reset_hour: int = DEFAULT_RESET_HOUR,
        override: Optional[DateOverride] = None,
        clock: Callable[[], datetime] = utc_now,
        image_url_template: str = IMAGE_URL_TEMPLATE,
    ):
        self.catalog = catalog
        self.ledger = ledger
        self.reset_hour = validate_reset_hour(reset_hour)
        self.override = override
        self.clock = clock
        self.image_url_template = image_url_template

    def _chooser(self, now: datetime) -> Callable[[], CatalogEntry]:
        if self.override is not None and self.override.applies(now):
            entry = self.override.resolve(self.catalog)
            return lambda: entry
        return self.catalog.random

    async def handle(self, trigger: TriggerCommand) -> DexReply:
        now = self.clock()
        checkpoint = current_checkpoint(now, reset_hour=self.reset_hour)
        claim = await self.ledger.claim(trigger.user_id, checkpoint, self._chooser(now))

        if not claim.fresh or claim.entry is None:
            return StillAssigned(
                requester_id=trigger.user_id,
                requester_mention=trigger.mention,
                species_name=claim.species_name,
            )

        entry = claim.entry
        logger.info("%s (%s) is a %s today.", trigger.display_name, trigger.user_id, entry.name)
        return DexAssignment(
            requester_id=trigger.user_id,
            requester_mention=trigger.mention,
            species_name=entry.name,
            species_id=entry.species_id,
            genus=entry.genus,
            flavor_text=self.catalog.pick_variant(entry),
            image_url=build_image_url(entry.species_id, self.image_url_template),
        )


def create_handler(
    catalog: Catalog,
    *,
    reset_hour: int = DEFAULT_RESET_HOUR,
    override: Optional[DateOverride] = None,
    clock: Callable[[], datetime] = utc_now,
) -> DexHandler:
    """Validate startup configuration and wire a handler with a fresh ledger."""
    validate_reset_hour(reset_hour)
    override_entry = validate_override(override, catalog)
    if override is not None and override_entry is not None:
        logger.info(
            "Date override active on %02d-%02d: %s (#%03d).",
            override.month,
            override.day,
            override_entry.name,
            override_entry.species_id,
        )
    ledger = AssignmentLedger(current_checkpoint(clock(), reset_hour=reset_hour))
    return DexHandler(catalog, ledger, reset_hour=reset_hour, override=override, clock=clock)


__all__ = ["DexHandler", "IMAGE_URL_TEMPLATE", "build_image_url", "create_handler"]
