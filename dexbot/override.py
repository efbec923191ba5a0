"""Calendar-date override that pins everyone to one species."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

from .catalog import Catalog
from .models import CatalogEntry

# March 31st is Trans Day of Visibility; everyone is Sylveon.
DEFAULT_OVERRIDE_MONTH = 3
DEFAULT_OVERRIDE_DAY = 31
DEFAULT_OVERRIDE_SPECIES_ID = 700


@dataclass(frozen=True)
class DateOverride:
    month: int = DEFAULT_OVERRIDE_MONTH
    day: int = DEFAULT_OVERRIDE_DAY
    species_id: int = DEFAULT_OVERRIDE_SPECIES_ID

    def applies(self, now: datetime) -> bool:
        if now.tzinfo is not None:
            now = now.astimezone(timezone.utc)
        return now.month == self.month and now.day == self.day

    def resolve(self, catalog: Catalog) -> CatalogEntry:
        return catalog.get(self.species_id)


def parse_override_date(raw: str) -> Optional[tuple[int, int]]:
    """Parse ``MM-DD``; an empty value disables the override."""
    value = raw.strip()
    if not value:
        return None
    try:
        month_text, day_text = value.split("-", 1)
        month, day = int(month_text), int(day_text)
        # leap year so 02-29 is accepted
        datetime(2000, month, day)
    except ValueError as exc:
        raise ValueError(f"Override date must look like MM-DD, got {raw!r}.") from exc
    return month, day


def validate_override(override: Optional[DateOverride], catalog: Catalog) -> Optional[CatalogEntry]:
    """Resolve the override entry up front so a bad id fails at startup."""
    if override is None:
        return None
    return override.resolve(catalog)


__all__ = [
    "DEFAULT_OVERRIDE_DAY",
    "DEFAULT_OVERRIDE_MONTH",
    "DEFAULT_OVERRIDE_SPECIES_ID",
    "DateOverride",
    "parse_override_date",
    "validate_override",
]
